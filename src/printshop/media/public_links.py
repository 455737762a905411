"""Helpers for building public upload URLs."""

from __future__ import annotations

import re
from urllib.parse import quote

_API_SUFFIX = re.compile(r"/api$")


def build_public_upload_url(request_path: str, filename: str, *, prefix: str = "uploads") -> str:
    """Return the public URL of ``filename`` relative to where the API is mounted.

    ``/site/api/upload`` yields ``/site/uploads/<filename>`` and ``/api/upload``
    yields ``/uploads/<filename>``.
    """
    directory = request_path.rsplit("/", 1)[0] if "/" in request_path else ""
    base = _API_SUFFIX.sub("", directory.rstrip("/"))
    return f"{base.rstrip('/')}/{prefix.strip('/')}/{quote(filename, safe='')}"
