"""Domain-specific exceptions for the upload pipeline.

Every failure carries the machine-readable code and HTTP status it is reported
with, so the API layer never has to guess a mapping.
"""

from __future__ import annotations


class UploadError(Exception):
    """Base class for upload failures."""

    status_code: int = 400

    def __init__(self, code: str, *, status_code: int | None = None, mime: str | None = None) -> None:
        super().__init__(code)
        self.code = code
        if status_code is not None:
            self.status_code = status_code
        self.mime = mime

    def payload(self) -> dict[str, object]:
        body: dict[str, object] = {"success": False, "error": self.code}
        if self.mime is not None:
            body["mime"] = self.mime
        return body


class RequestShapeError(UploadError):
    """Raised when the request itself is malformed (method, missing file)."""


class PolicyRejectedError(UploadError):
    """Raised when the file violates size, extension or MIME policy."""


class StorageError(UploadError):
    """Raised when the filesystem refuses the write; safe to retry."""

    status_code = 500


class MethodNotAllowedError(RequestShapeError):
    status_code = 405

    def __init__(self) -> None:
        super().__init__("METHOD_NOT_ALLOWED")


class NoFileError(RequestShapeError):
    def __init__(self) -> None:
        super().__init__("NO_FILE")


class InvalidFilePayloadError(RequestShapeError):
    def __init__(self) -> None:
        super().__init__("INVALID_FILE_PAYLOAD")


class PartialUploadError(RequestShapeError):
    def __init__(self) -> None:
        super().__init__("PARTIAL_UPLOAD")


class TransportFailureError(RequestShapeError):
    """Raised for transport error codes without a dedicated mapping."""

    def __init__(self, error_code: int) -> None:
        super().__init__(f"UPLOAD_ERROR_{int(error_code)}")
        self.error_code = int(error_code)


class InvalidTmpFileError(RequestShapeError):
    def __init__(self) -> None:
        super().__init__("INVALID_TMP_FILE")


class FileTooLargeError(PolicyRejectedError):
    status_code = 413

    def __init__(self) -> None:
        super().__init__("FILE_TOO_LARGE")


class InvalidSizeError(PolicyRejectedError):
    def __init__(self) -> None:
        super().__init__("INVALID_SIZE")


class ExtensionNotAllowedError(PolicyRejectedError):
    def __init__(self, extension: str) -> None:
        super().__init__("EXTENSION_NOT_ALLOWED")
        self.extension = extension


class MimeNotAllowedError(PolicyRejectedError):
    def __init__(self, mime: str) -> None:
        super().__init__("MIME_NOT_ALLOWED", mime=mime)


class UploadDirUnavailableError(StorageError):
    def __init__(self) -> None:
        super().__init__("FAILED_TO_CREATE_UPLOAD_DIR")


class MoveFailedError(StorageError):
    def __init__(self) -> None:
        super().__init__("MOVE_FAILED")


class InternalUploadError(StorageError):
    """Raised by the API layer for unexpected faults."""

    def __init__(self) -> None:
        super().__init__("INTERNAL_ERROR")


__all__ = [
    "UploadError",
    "RequestShapeError",
    "PolicyRejectedError",
    "StorageError",
    "MethodNotAllowedError",
    "NoFileError",
    "InvalidFilePayloadError",
    "PartialUploadError",
    "TransportFailureError",
    "InvalidTmpFileError",
    "FileTooLargeError",
    "InvalidSizeError",
    "ExtensionNotAllowedError",
    "MimeNotAllowedError",
    "UploadDirUnavailableError",
    "MoveFailedError",
    "InternalUploadError",
]
