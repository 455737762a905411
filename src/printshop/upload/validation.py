"""Upload validation: the ordered policy checks run before anything is stored."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

from ..core.config import UploadConfig
from ..media.staging_store import StagingArea
from .filenames import extension_of
from .sniffing import OCTET_STREAM, TEXT_PLAIN, sniff_mime
from .upload_errors import (
    ExtensionNotAllowedError,
    FileTooLargeError,
    InvalidFilePayloadError,
    InvalidSizeError,
    InvalidTmpFileError,
    MethodNotAllowedError,
    MimeNotAllowedError,
    NoFileError,
    PartialUploadError,
    TransportFailureError,
)
from .upload_models import StagedUpload, TransportError, UploadRequest, ValidatedUpload

logger = logging.getLogger(__name__)

CAD_FALLBACK_MIMES = frozenset({OCTET_STREAM, TEXT_PLAIN})


def mime_allowed(config: UploadConfig, extension: str, mime: str) -> bool:
    """Apply the MIME policy for a file with the given extension.

    CAD formats rarely sniff as anything specific, so generic binary or plain
    text is accepted for them. Image extensions must sniff as an image.
    """
    if extension in config.cad_extensions and mime in CAD_FALLBACK_MIMES:
        return True
    if mime not in config.allowed_mime_types:
        return False
    if extension in config.image_extensions:
        return mime.startswith("image/")
    return True


@dataclass(slots=True)
class UploadValidator:
    """Validate upload requests against configured limits."""

    config: UploadConfig
    staging: StagingArea
    sniffer: Callable[[Path], str] = sniff_mime

    def validate(self, request: UploadRequest) -> ValidatedUpload:
        self.check_method(request.method)
        staged = self.require_file(request.file)
        self.check_transport(staged)
        self.check_size(staged.size)
        extension = self.check_extension(staged.filename)
        self.check_origin(staged)
        mime = self.check_mime(extension, staged)
        logger.info(
            "upload.validated",
            extra={
                "original_name": staged.filename,
                "size_bytes": staged.size,
                "extension": extension,
                "mime": mime,
            },
        )
        return ValidatedUpload(staged=staged, extension=extension, mime=mime)

    @staticmethod
    def check_method(method: str) -> None:
        if method.upper() != "POST":
            raise MethodNotAllowedError()

    @staticmethod
    def require_file(file: StagedUpload | str | None) -> StagedUpload:
        if file is None:
            raise NoFileError()
        if not isinstance(file, StagedUpload):
            raise InvalidFilePayloadError()
        return file

    @staticmethod
    def check_transport(staged: StagedUpload) -> None:
        error = int(staged.error)
        if error == TransportError.OK:
            return
        if error in (TransportError.INI_SIZE, TransportError.FORM_SIZE):
            raise FileTooLargeError()
        if error == TransportError.PARTIAL:
            raise PartialUploadError()
        if error == TransportError.NO_FILE:
            raise NoFileError()
        raise TransportFailureError(error)

    def check_size(self, size: int | None) -> None:
        if not isinstance(size, int) or isinstance(size, bool) or size <= 0:
            raise InvalidSizeError()
        if size > self.config.max_upload_bytes:
            logger.warning(
                "upload.payload_too_large",
                extra={"size_bytes": size, "limit_bytes": self.config.max_upload_bytes},
            )
            raise FileTooLargeError()

    def check_extension(self, filename: str) -> str:
        extension = extension_of(filename or "file")
        if extension not in self.config.allowed_extensions:
            logger.warning(
                "upload.extension_not_allowed",
                extra={"original_name": filename, "extension": extension},
            )
            raise ExtensionNotAllowedError(extension)
        return extension

    def check_origin(self, staged: StagedUpload) -> None:
        if not self.staging.is_staged(staged.path, staged.token):
            logger.warning(
                "upload.invalid_tmp_file",
                extra={"path": str(staged.path) if staged.path else None},
            )
            raise InvalidTmpFileError()

    def check_mime(self, extension: str, staged: StagedUpload) -> str:
        assert staged.path is not None
        mime = self.sniffer(staged.path) or OCTET_STREAM
        if not mime_allowed(self.config, extension, mime):
            logger.warning(
                "upload.mime_not_allowed",
                extra={"original_name": staged.filename, "extension": extension, "mime": mime},
            )
            raise MimeNotAllowedError(mime)
        return mime


__all__ = ["CAD_FALLBACK_MIMES", "UploadValidator", "mime_allowed"]
