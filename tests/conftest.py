from __future__ import annotations

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from src.printshop.core.config import UploadConfig
from src.printshop.main import create_app
from tests.helpers.config import build_config


@pytest.fixture()
def upload_config(tmp_path: Path) -> UploadConfig:
    return build_config(tmp_path)


@pytest.fixture()
def client(upload_config: UploadConfig) -> TestClient:
    return TestClient(create_app(upload_config))
