"""Run the upload service with uvicorn: ``python -m src.printshop``."""

import uvicorn

from .core.config import UploadConfig


def main() -> None:
    config = UploadConfig.build_default()
    uvicorn.run("src.printshop.main:app", host=config.host, port=config.port)


if __name__ == "__main__":
    main()
