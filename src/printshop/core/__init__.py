"""Base infrastructure of the service (configuration)."""

from .config import UploadConfig

__all__ = ["UploadConfig"]
