"""Filename parsing and synthesis for stored uploads."""

from __future__ import annotations

import re
import secrets
from datetime import datetime
from pathlib import PurePosixPath

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]")
FALLBACK_BASE = "file"
SUFFIX_BYTES = 8


def basename_of(original: str) -> str:
    """Drop directory components written with either separator."""
    return PurePosixPath(original.replace("\\", "/")).name


def split_name(original: str) -> tuple[str, str]:
    """Split a client filename into ``(stem, extension)``.

    Directory components are discarded and the extension is whatever follows
    the last dot of the basename, so ``.stl`` has an empty stem and
    ``archive.tar.gz`` has the stem ``archive.tar``.
    """
    basename = basename_of(original)
    stem, dot, extension = basename.rpartition(".")
    if not dot:
        return basename, ""
    return stem, extension


def extension_of(original: str) -> str:
    return split_name(original)[1].lower()


def sanitize_base(stem: str, *, max_length: int = 80) -> str:
    """Replace anything outside ``[A-Za-z0-9._-]`` and bound the length."""
    cleaned = _UNSAFE_CHARS.sub("_", stem)
    if not cleaned:
        cleaned = FALLBACK_BASE
    return cleaned[:max_length]


def generate_filename(
    original: str,
    extension: str,
    *,
    max_length: int = 80,
    now: datetime | None = None,
) -> str:
    """Return ``<YYYYmmdd_HHMMSS>_<random hex>_<base>.<extension>``."""
    stem, _ = split_name(original)
    base = sanitize_base(stem, max_length=max_length)
    stamp = (now or datetime.now()).strftime("%Y%m%d_%H%M%S")
    unique = secrets.token_hex(SUFFIX_BYTES)
    return f"{stamp}_{unique}_{base}.{extension}"


__all__ = [
    "FALLBACK_BASE",
    "basename_of",
    "extension_of",
    "generate_filename",
    "sanitize_base",
    "split_name",
]
