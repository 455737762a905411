"""FastAPI application entry point."""

from fastapi import FastAPI

from .core.config import UploadConfig
from .dependencies import include_routers
from .logging import configure_logging


def create_app(config: UploadConfig | None = None) -> FastAPI:
    """Build FastAPI instance with configured dependencies."""
    configure_logging()
    cfg = config or UploadConfig.build_default()
    app = FastAPI(title="PrintShop Uploads")
    include_routers(app, cfg)
    return app


app = create_app()
