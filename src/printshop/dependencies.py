"""Dependency wiring helpers."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from .core.config import UploadConfig
from .health_api import router as health_router
from .upload.upload_api import router as upload_router
from .upload.upload_service import UploadService


def include_routers(app: FastAPI, config: UploadConfig) -> None:
    """Mount routers, static uploads and attach services."""
    upload_service = UploadService.from_config(config)

    app.state.config = config
    app.state.upload_service = upload_service

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(config.cors_origins),
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health_router)
    app.include_router(upload_router)
    app.mount(
        f"/{config.public_uploads_prefix}",
        StaticFiles(directory=config.upload_dir, check_dir=False),
        name="uploads",
    )
