"""Helpers for reading a user-chosen image from disk."""

from __future__ import annotations

import logging
import mimetypes
from pathlib import Path
from typing import Iterable

from PIL import Image, UnidentifiedImageError

logger = logging.getLogger(__name__)

IMAGE_EXTENSIONS = {
    ".jpg",
    ".jpeg",
    ".png",
    ".webp",
    ".bmp",
    ".tiff",
    ".tif",
    ".gif",
}

FALLBACK_MIME_TYPE = "application/octet-stream"


def is_image_file(path: Path, *, extensions: Iterable[str] | None = None) -> bool:
    """Return True if the given path has a supported image extension."""
    exts = {ext.lower() for ext in (extensions or IMAGE_EXTENSIONS)}
    return path.suffix.lower() in exts


def detect_mime_type(path: Path) -> str:
    """Identify the image format from content, falling back to the file extension."""
    try:
        with Image.open(path) as img:
            mime_type = Image.MIME.get(img.format or "")
    except (UnidentifiedImageError, OSError) as exc:
        logger.debug("Pillow could not identify %s: %s", path, exc)
        mime_type = None
    if mime_type:
        return mime_type

    guessed, _ = mimetypes.guess_type(path.name)
    return guessed or FALLBACK_MIME_TYPE


def read_image_file(path: Path) -> tuple[bytes, str]:
    """Return the file's bytes together with the mime type it declares."""
    path = path.expanduser()
    if not path.is_file():
        raise FileNotFoundError(path)
    return path.read_bytes(), detect_mime_type(path)
