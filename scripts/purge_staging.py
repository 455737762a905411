"""Cron entry point for purging orphaned staging artefacts."""

from __future__ import annotations

import argparse
import sys
from dataclasses import dataclass

from src.printshop.core.config import UploadConfig
from src.printshop.media.staging_store import StagingArea


@dataclass(slots=True)
class PurgeSummary:
    removed: int
    dry_run: bool


def perform_purge(*, dry_run: bool, max_age_seconds: int | None = None, now: float | None = None) -> PurgeSummary:
    """Execute purge logic and return summary counters."""
    config = UploadConfig.build_default()
    staging = StagingArea(
        root=config.staging_dir,
        chunk_size_bytes=config.chunk_size_bytes,
        limit_bytes=config.transport_limit_bytes,
    )
    age = config.staging_max_age_seconds if max_age_seconds is None else max_age_seconds
    removed = staging.purge_stale(age, now=now, dry_run=dry_run)
    return PurgeSummary(removed=removed, dry_run=dry_run)


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Purge orphaned upload staging files.")
    parser.add_argument("--dry-run", action="store_true", help="Only report counts without deleting files.")
    parser.add_argument("--max-age", type=int, default=None, help="Override the maximum age in seconds.")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv or [])
    try:
        summary = perform_purge(dry_run=args.dry_run, max_age_seconds=args.max_age)
    except OSError as exc:
        print(f"purge failed: {exc}", file=sys.stderr)
        return 2

    if summary.dry_run:
        print(f"purge dry-run, staging_stale={summary.removed}", file=sys.stdout)
    else:
        print(f"purge done, staging_removed={summary.removed}", file=sys.stdout)
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
