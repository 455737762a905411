"""Application configuration for the PrintShop upload service.

Defaults describe the production policy: a 100 MiB ceiling, the full
3D-model / archive / image extension set and ``./var`` as the storage root.
Every value can be overridden through ``PRINTSHOP_*`` environment variables;
the resulting object is frozen and shared by reference for the lifetime of the
process.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

MIB = 1024 * 1024

DEFAULT_EXTENSIONS: tuple[str, ...] = (
    "stl",
    "obj",
    "dae",
    "fbx",
    "zip",
    "tar",
    "rar",
    "7z",
    "7zip",
    "png",
    "jpg",
    "jpeg",
)
DEFAULT_CAD_EXTENSIONS: tuple[str, ...] = ("stl", "obj", "dae", "fbx")
DEFAULT_IMAGE_EXTENSIONS: tuple[str, ...] = ("png", "jpg", "jpeg")
DEFAULT_MIME_TYPES: tuple[str, ...] = (
    "image/png",
    "image/jpeg",
    "application/zip",
    "application/x-zip-compressed",
    "application/x-tar",
    "application/x-rar-compressed",
    "application/vnd.rar",
    "application/x-7z-compressed",
    "application/xml",
    "text/xml",
    "model/vnd.collada+xml",
    "model/stl",
    "model/obj",
)


def _default_upload_dir() -> Path:
    return Path("./var/uploads")


def _default_staging_dir() -> Path:
    return Path("./var/staging")


class UploadConfig(BaseSettings):
    """Immutable settings consumed by the upload pipeline."""

    model_config = SettingsConfigDict(env_prefix="PRINTSHOP_", frozen=True, extra="ignore")

    upload_dir: Path = Field(
        default_factory=_default_upload_dir,
        description="Directory holding stored uploads, served under /uploads.",
    )
    staging_dir: Path = Field(
        default_factory=_default_staging_dir,
        description="Directory where incoming multipart files are staged.",
    )
    max_upload_bytes: int = Field(
        default=100 * MIB,
        ge=1,
        description="Largest accepted file size in bytes (inclusive).",
    )
    transport_limit_bytes: int = Field(
        default=128 * MIB,
        ge=1,
        description="Hard cap on the request body, enforced before and while it is read.",
    )
    chunk_size_bytes: int = Field(
        default=1 * MIB,
        ge=1,
        description="Chunk size used when streaming uploads.",
    )
    allowed_extensions: tuple[str, ...] = DEFAULT_EXTENSIONS
    cad_extensions: tuple[str, ...] = DEFAULT_CAD_EXTENSIONS
    image_extensions: tuple[str, ...] = DEFAULT_IMAGE_EXTENSIONS
    allowed_mime_types: tuple[str, ...] = DEFAULT_MIME_TYPES
    filename_base_max_length: int = Field(
        default=80,
        ge=1,
        description="Maximum length of the sanitized original name fragment.",
    )
    public_uploads_prefix: str = Field(
        default="uploads",
        min_length=1,
        description="URL segment under which stored uploads are published.",
    )
    staging_max_age_seconds: int = Field(
        default=60 * 60,
        ge=0,
        description="Age after which orphaned staging artefacts are purged.",
    )
    cors_origins: tuple[str, ...] = ("*",)
    host: str = "0.0.0.0"
    port: int = Field(default=3001, ge=1, le=65535)

    @field_validator(
        "allowed_extensions", "cad_extensions", "image_extensions", mode="after"
    )
    @classmethod
    def _normalise_extensions(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        return tuple(ext.lower().lstrip(".") for ext in value)

    @field_validator("allowed_mime_types", mode="after")
    @classmethod
    def _normalise_mime_types(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        return tuple(mime.lower() for mime in value)

    @field_validator("public_uploads_prefix", mode="after")
    @classmethod
    def _strip_slashes(cls, value: str) -> str:
        return value.strip("/")

    @model_validator(mode="after")
    def _check_limits(self) -> "UploadConfig":
        if self.transport_limit_bytes < self.max_upload_bytes:
            raise ValueError("transport_limit_bytes must not be below max_upload_bytes")
        return self

    @classmethod
    def build_default(cls) -> "UploadConfig":
        """Construct configuration from the environment."""

        return cls()


__all__ = ["UploadConfig", "MIB"]
