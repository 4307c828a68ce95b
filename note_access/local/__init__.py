"""Local file-backed document storage."""

from .client import LocalDocumentClient

__all__ = ["LocalDocumentClient"]
