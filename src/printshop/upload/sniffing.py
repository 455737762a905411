"""Content-based MIME detection."""

from __future__ import annotations

import logging
from pathlib import Path

import filetype

logger = logging.getLogger(__name__)

OCTET_STREAM = "application/octet-stream"
TEXT_PLAIN = "text/plain"
TEXT_XML = "text/xml"
SNIFF_BYTES = 8192

_TEXT_BYTES = bytes({7, 8, 9, 10, 12, 13, 27} | set(range(0x20, 0x100)) - {0x7F})
_BOM_AND_SPACE = b"\xef\xbb\xbf \t\r\n"


def _looks_like_text(head: bytes) -> bool:
    return not head.translate(None, _TEXT_BYTES)


def sniff_bytes(head: bytes) -> str:
    """Best-guess MIME type of a content prefix."""
    if not head:
        return OCTET_STREAM
    kind = filetype.guess(head)
    if kind is not None:
        return kind.mime
    if _looks_like_text(head):
        if head.lstrip(_BOM_AND_SPACE).startswith(b"<?xml"):
            return TEXT_XML
        return TEXT_PLAIN
    return OCTET_STREAM


def sniff_mime(path: Path) -> str:
    """Detect the MIME type of a file, never trusting client labels.

    Detection failures degrade to ``application/octet-stream``.
    """
    try:
        with path.open("rb") as handle:
            head = handle.read(SNIFF_BYTES)
        return sniff_bytes(head)
    except Exception as exc:
        logger.warning("upload.sniff_failed", extra={"path": str(path)}, exc_info=exc)
        return OCTET_STREAM


__all__ = ["OCTET_STREAM", "TEXT_PLAIN", "TEXT_XML", "sniff_bytes", "sniff_mime"]
