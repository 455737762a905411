from pathlib import Path

import pytest
from pydantic import ValidationError

from src.printshop.core.config import MIB, UploadConfig


def test_defaults_describe_production_policy() -> None:
    config = UploadConfig()

    assert config.max_upload_bytes == 100 * MIB
    assert config.filename_base_max_length == 80
    assert set(config.allowed_extensions) == {
        "stl", "obj", "dae", "fbx", "zip", "tar", "rar", "7z", "7zip", "png", "jpg", "jpeg",
    }
    assert config.cad_extensions == ("stl", "obj", "dae", "fbx")
    assert "application/octet-stream" not in config.allowed_mime_types


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("PRINTSHOP_UPLOAD_DIR", str(tmp_path / "public"))
    monkeypatch.setenv("PRINTSHOP_MAX_UPLOAD_BYTES", str(25 * MIB))

    config = UploadConfig()

    assert config.upload_dir == tmp_path / "public"
    assert config.max_upload_bytes == 25 * MIB


def test_extensions_are_normalised() -> None:
    config = UploadConfig(allowed_extensions=(".STL", "Png"))

    assert config.allowed_extensions == ("stl", "png")


def test_prefix_is_stripped() -> None:
    assert UploadConfig(public_uploads_prefix="/files/").public_uploads_prefix == "files"


def test_config_is_immutable() -> None:
    config = UploadConfig()

    with pytest.raises(ValidationError):
        config.max_upload_bytes = 1


def test_transport_limit_cannot_undercut_ceiling() -> None:
    with pytest.raises(ValidationError):
        UploadConfig(max_upload_bytes=2048, transport_limit_bytes=1024)


def test_server_binding_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PRINTSHOP_PORT", "8080")

    config = UploadConfig()

    assert config.port == 8080
    assert config.host == "0.0.0.0"
