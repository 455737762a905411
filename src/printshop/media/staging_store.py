"""Staging storage for incoming multipart uploads."""

from __future__ import annotations

import logging
import secrets
import threading
import time
from dataclasses import dataclass, field
from pathlib import Path

from fastapi import UploadFile

from ..upload.upload_models import StagedUpload, TransportError

STAGED_SUFFIX = ".part"
STAGED_PREFIX = "upload-"


@dataclass(slots=True)
class StagingArea:
    """Stream uploads to a private directory and vouch for what it wrote.

    Only paths produced by :meth:`stage` during the lifetime of this object are
    reported as genuine by :meth:`is_staged`; anything else, including paths
    that merely live inside the staging directory, is rejected.
    """

    root: Path
    chunk_size_bytes: int
    limit_bytes: int
    log: logging.Logger = field(default_factory=lambda: logging.getLogger(__name__))
    _issued: dict[str, Path] = field(default_factory=dict, init=False, repr=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False)

    async def stage(self, upload: UploadFile) -> StagedUpload:
        """Copy the upload into staging and report any transport error."""
        filename = upload.filename or ""
        try:
            self.root.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            self.log.error("staging.mkdir_failed", extra={"root": str(self.root)}, exc_info=exc)
            await upload.close()
            return StagedUpload(filename=filename, size=0, path=None, error=TransportError.NO_TMP_DIR)

        token = secrets.token_hex(16)
        target = self.root / f"{STAGED_PREFIX}{token}{STAGED_SUFFIX}"
        size = 0
        error = TransportError.OK
        try:
            with target.open("xb") as sink:
                while True:
                    chunk = await upload.read(self.chunk_size_bytes)
                    if not chunk:
                        break
                    size += len(chunk)
                    if size > self.limit_bytes:
                        error = TransportError.INI_SIZE
                        break
                    sink.write(chunk)
        except OSError as exc:
            self.log.error("staging.write_failed", extra={"path": str(target)}, exc_info=exc)
            error = TransportError.CANT_WRITE
        finally:
            await upload.close()

        if error is TransportError.OK and size == 0 and not filename:
            error = TransportError.NO_FILE

        if error is not TransportError.OK:
            target.unlink(missing_ok=True)
            self.log.warning(
                "staging.transport_error",
                extra={"original_name": filename, "size_bytes": size, "error": int(error)},
            )
            return StagedUpload(filename=filename, size=size, path=None, error=error)

        with self._lock:
            self._issued[token] = target
        self.log.info(
            "staging.staged",
            extra={"original_name": filename, "size_bytes": size, "path": str(target)},
        )
        return StagedUpload(filename=filename, size=size, path=target, token=token)

    def is_staged(self, path: Path | None, token: str | None) -> bool:
        """Return True when ``path`` is the artefact issued under ``token``."""
        if path is None or token is None:
            return False
        with self._lock:
            issued = self._issued.get(token)
        if issued is None or issued != path:
            return False
        if path.is_symlink() or not path.is_file():
            return False
        try:
            return path.resolve().parent == self.root.resolve()
        except OSError:
            return False

    def release(self, staged: StagedUpload) -> None:
        """Forget the staged artefact and delete it if it is still there."""
        if staged.token is not None:
            with self._lock:
                self._issued.pop(staged.token, None)
        if staged.path is not None:
            try:
                staged.path.unlink(missing_ok=True)
            except OSError as exc:
                self.log.warning(
                    "staging.release_failed", extra={"path": str(staged.path)}, exc_info=exc
                )

    def purge_stale(self, max_age_seconds: int, *, now: float | None = None, dry_run: bool = False) -> int:
        """Remove staged artefacts older than ``max_age_seconds``."""
        if not self.root.is_dir():
            return 0
        reference = time.time() if now is None else now
        removed = 0
        for candidate in self.root.glob(f"{STAGED_PREFIX}*{STAGED_SUFFIX}"):
            try:
                age = reference - candidate.stat().st_mtime
            except FileNotFoundError:
                continue
            if age < max_age_seconds:
                continue
            removed += 1
            if dry_run:
                continue
            candidate.unlink(missing_ok=True)
            self.log.info("staging.purged", extra={"path": str(candidate), "age_seconds": int(age)})
        return removed


__all__ = ["StagingArea", "STAGED_PREFIX", "STAGED_SUFFIX"]
