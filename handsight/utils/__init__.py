"""Utility helpers for the Handsight client."""

from .files import detect_mime_type, is_image_file, read_image_file

__all__ = ["detect_mime_type", "is_image_file", "read_image_file"]
