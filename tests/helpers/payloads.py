"""Sample file contents with well-known signatures."""

from __future__ import annotations

PNG_BYTES = b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR\x00\x00\x00\x01\x00\x00\x00\x01\x08\x02\x00\x00\x00" + b"\x00" * 64
JPEG_BYTES = b"\xff\xd8\xff\xe0\x00\x10JFIF\x00\x01\x01\x00\x00\x01\x00\x01\x00\x00" + b"\x00" * 64
ZIP_BYTES = b"PK\x03\x04\x14\x00\x00\x00\x08\x00" + b"\x00" * 64
SEVEN_Z_BYTES = b"7z\xbc\xaf\x27\x1c\x00\x04" + b"\x00" * 64
EXE_BYTES = b"MZ\x90\x00\x03\x00\x00\x00\x04\x00\x00\x00\xff\xff\x00\x00" + b"\x00" * 128
ASCII_STL = (
    b"solid cube\n"
    b"  facet normal 0 0 1\n"
    b"    outer loop\n"
    b"      vertex 0 0 1\n"
    b"      vertex 1 0 1\n"
    b"      vertex 1 1 1\n"
    b"    endloop\n"
    b"  endfacet\n"
    b"endsolid cube\n"
)
COLLADA_XML = (
    b'<?xml version="1.0" encoding="utf-8"?>\n'
    b'<COLLADA xmlns="http://www.collada.org/2005/11/COLLADASchema" version="1.4.1">\n'
    b"</COLLADA>\n"
)


def binary_stl(size: int) -> bytes:
    """Return a binary STL-like payload of exactly ``size`` bytes."""
    header = b"binary stl exported by slicer".ljust(80, b"\x00")
    body = header + (12).to_bytes(4, "little")
    if size <= len(body):
        return body[:size]
    return body + bytes((index * 7) % 251 for index in range(size - len(body)))
