"""Data structures for the upload pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from pathlib import Path


class TransportError(IntEnum):
    """Error codes reported by the transport layer while receiving a file.

    Numbering follows the long-standing ``UPLOAD_ERR_*`` convention so that the
    ``UPLOAD_ERROR_<n>`` codes stay stable for clients.
    """

    OK = 0
    INI_SIZE = 1
    FORM_SIZE = 2
    PARTIAL = 3
    NO_FILE = 4
    NO_TMP_DIR = 6
    CANT_WRITE = 7
    EXTENSION = 8


@dataclass(slots=True)
class StagedUpload:
    """A multipart file part after the transport streamed it to staging."""

    filename: str
    size: int
    path: Path | None
    token: str | None = None
    error: int = TransportError.OK


@dataclass(slots=True)
class UploadRequest:
    """Transport-neutral view of one upload call.

    ``file`` is ``None`` when no ``file`` field was sent and a plain string when
    the field was sent as an ordinary form value.
    """

    method: str
    file: StagedUpload | str | None = None
    base_path: str = "/api/upload"


@dataclass(slots=True)
class ValidatedUpload:
    """Staged file that passed every policy check."""

    staged: StagedUpload
    extension: str
    mime: str


@dataclass(slots=True)
class UploadResult:
    """Successful upload descriptor returned to the caller."""

    url: str
    name: str
    size: int
    mime: str
    stored_path: Path

    def payload(self) -> dict[str, object]:
        return {
            "success": True,
            "url": self.url,
            "name": self.name,
            "size": self.size,
            "mime": self.mime,
        }
