"""Upload pipeline: validate, store and describe one customer file."""

from __future__ import annotations

import logging
import os
import shutil
from dataclasses import dataclass
from pathlib import Path

from ..core.config import UploadConfig
from ..media.public_links import build_public_upload_url
from ..media.staging_store import StagingArea
from .filenames import basename_of, generate_filename
from .upload_errors import MoveFailedError, UploadDirUnavailableError
from .upload_models import UploadRequest, UploadResult, ValidatedUpload
from .validation import UploadValidator

logger = logging.getLogger(__name__)

MAX_NAME_ATTEMPTS = 5


@dataclass(slots=True)
class UploadService:
    """Run the upload pipeline for a single request.

    The service keeps no per-request state; it is safe to call :meth:`handle`
    from several threads at once.
    """

    config: UploadConfig
    staging: StagingArea
    validator: UploadValidator

    @classmethod
    def from_config(cls, config: UploadConfig) -> "UploadService":
        staging = StagingArea(
            root=config.staging_dir,
            chunk_size_bytes=config.chunk_size_bytes,
            limit_bytes=config.transport_limit_bytes,
        )
        return cls(
            config=config,
            staging=staging,
            validator=UploadValidator(config=config, staging=staging),
        )

    def handle(self, request: UploadRequest) -> UploadResult:
        """Validate and persist the request's file, raising ``UploadError`` on rejection."""
        validated = self.validator.validate(request)
        directory = self.ensure_upload_dir()
        stored_path = self.persist(validated, directory)
        url = build_public_upload_url(
            request.base_path,
            stored_path.name,
            prefix=self.config.public_uploads_prefix,
        )
        result = UploadResult(
            url=url,
            name=basename_of(validated.staged.filename),
            size=validated.staged.size,
            mime=validated.mime,
            stored_path=stored_path,
        )
        logger.info(
            "upload.stored",
            extra={
                "original_name": result.name,
                "stored_as": stored_path.name,
                "size_bytes": result.size,
                "mime": result.mime,
            },
        )
        return result

    def ensure_upload_dir(self) -> Path:
        directory = self.config.upload_dir
        try:
            directory.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            if not directory.is_dir():
                logger.error(
                    "upload.mkdir_failed", extra={"directory": str(directory)}, exc_info=exc
                )
                raise UploadDirUnavailableError() from exc
        return directory

    def persist(self, validated: ValidatedUpload, directory: Path) -> Path:
        """Move the staged bytes under a fresh name, never replacing a file."""
        staged = validated.staged
        assert staged.path is not None
        for _ in range(MAX_NAME_ATTEMPTS):
            target = directory / generate_filename(
                staged.filename,
                validated.extension,
                max_length=self.config.filename_base_max_length,
            )
            try:
                self._move_exclusive(staged.path, target)
            except FileExistsError:
                logger.warning("upload.name_collision", extra={"stored_as": target.name})
                continue
            except OSError as exc:
                logger.error(
                    "upload.move_failed",
                    extra={"source": str(staged.path), "target": str(target)},
                    exc_info=exc,
                )
                raise MoveFailedError() from exc
            return target
        raise MoveFailedError()

    def _move_exclusive(self, source: Path, target: Path) -> None:
        try:
            os.link(source, target)
        except FileExistsError:
            raise
        except OSError:
            self._copy_exclusive(source, target)
        source.unlink(missing_ok=True)

    def _copy_exclusive(self, source: Path, target: Path) -> None:
        with source.open("rb") as reader, target.open("xb") as sink:
            try:
                shutil.copyfileobj(reader, sink, self.config.chunk_size_bytes)
            except OSError:
                target.unlink(missing_ok=True)
                raise


__all__ = ["UploadService", "MAX_NAME_ATTEMPTS"]
