import importlib.util
import os
import sys
import time
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[3]
MODULE_PATH = PROJECT_ROOT / "scripts" / "purge_staging.py"
SPEC = importlib.util.spec_from_file_location("purge_staging_module", MODULE_PATH)
purge_staging = importlib.util.module_from_spec(SPEC)
assert SPEC and SPEC.loader
sys.modules["purge_staging_module"] = purge_staging
SPEC.loader.exec_module(purge_staging)


@pytest.fixture()
def staging_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    root = tmp_path / "staging"
    root.mkdir()
    monkeypatch.setenv("PRINTSHOP_STAGING_DIR", str(root))
    monkeypatch.setenv("PRINTSHOP_STAGING_MAX_AGE_SECONDS", "60")
    stale = root / "upload-stale.part"
    stale.write_bytes(b"x")
    past = time.time() - 600
    os.utime(stale, (past, past))
    (root / "upload-live.part").write_bytes(b"y")
    return root


def test_perform_purge_dry_run(staging_dir: Path) -> None:
    summary = purge_staging.perform_purge(dry_run=True)

    assert summary.removed == 1
    assert summary.dry_run is True
    assert (staging_dir / "upload-stale.part").exists()


def test_main_removes_stale_files(staging_dir: Path, capsys) -> None:
    exit_code = purge_staging.main([])

    assert exit_code == 0
    assert "staging_removed=1" in capsys.readouterr().out
    assert not (staging_dir / "upload-stale.part").exists()
    assert (staging_dir / "upload-live.part").exists()


def test_main_respects_max_age_override(staging_dir: Path, capsys) -> None:
    exit_code = purge_staging.main(["--max-age", "0"])

    assert exit_code == 0
    assert "staging_removed=2" in capsys.readouterr().out
