"""End-to-end upload flows through the ASGI stack."""

from __future__ import annotations

import asyncio
from pathlib import Path

import httpx
import pytest

from src.printshop.main import create_app
from tests.helpers.config import build_config
from tests.helpers.payloads import ASCII_STL

pytestmark = pytest.mark.integration


@pytest.mark.asyncio
async def test_concurrent_uploads_with_same_name_never_collide(tmp_path: Path) -> None:
    config = build_config(tmp_path)
    app = create_app(config)
    payloads = [ASCII_STL + f"solid part{index}\n".encode() for index in range(50)]

    async with httpx.AsyncClient(
        transport=httpx.ASGITransport(app=app), base_url="http://testserver"
    ) as client:
        responses = await asyncio.gather(
            *(
                client.post(
                    "/api/upload",
                    files={"file": ("model.stl", payload, "application/octet-stream")},
                )
                for payload in payloads
            )
        )

        assert [response.status_code for response in responses] == [200] * 50
        bodies = [response.json() for response in responses]
        urls = {body["url"] for body in bodies}
        assert len(urls) == 50

        stored = sorted(config.upload_dir.iterdir())
        assert len(stored) == 50
        assert sorted(path.read_bytes() for path in stored) == sorted(payloads)

        for body, payload in zip(bodies, payloads):
            assert body["name"] == "model.stl"
            assert body["size"] == len(payload)
            fetched = await client.get(body["url"])
            assert fetched.content == payload


@pytest.mark.asyncio
async def test_rejected_uploads_leave_no_trace(tmp_path: Path) -> None:
    config = build_config(tmp_path)
    app = create_app(config)

    async with httpx.AsyncClient(
        transport=httpx.ASGITransport(app=app), base_url="http://testserver"
    ) as client:
        responses = await asyncio.gather(
            client.post("/api/upload", files={"file": ("a.exe", b"MZ", "application/octet-stream")}),
            client.post("/api/upload", files={"file": ("b.png", ASCII_STL, "image/png")}),
            client.post("/api/upload", files={"file": ("c.stl", b"", "application/octet-stream")}),
        )

    assert [response.json()["error"] for response in responses] == [
        "EXTENSION_NOT_ALLOWED",
        "MIME_NOT_ALLOWED",
        "INVALID_SIZE",
    ]
    assert not config.upload_dir.exists()
    assert list(config.staging_dir.iterdir()) == []
