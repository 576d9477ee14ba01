"""Holds the selected file and the single preview derived from it."""

from __future__ import annotations

import logging
from types import TracebackType

from ..models.base import InvalidFileTypeError, SelectedFile
from .previews import PreviewHandle, PreviewRegistry, default_registry

logger = logging.getLogger(__name__)


def is_image_mime_type(mime_type: str) -> bool:
    media_type = mime_type.split(";", 1)[0].strip().lower()
    return media_type.startswith("image/")


class UploadSession:
    """Scoped owner of at most one live preview handle."""

    def __init__(self, registry: PreviewRegistry | None = None) -> None:
        self._registry = registry or default_registry()
        self._file: SelectedFile | None = None
        self._preview: PreviewHandle | None = None

    @property
    def registry(self) -> PreviewRegistry:
        return self._registry

    def select_file(self, data: bytes, mime_type: str, name: str | None = None) -> SelectedFile:
        """Replace the current selection, releasing the old preview first."""
        if not is_image_mime_type(mime_type):
            logger.info("Rejected %s: unsupported type %r", name or "selection", mime_type)
            raise InvalidFileTypeError(mime_type)

        selected = SelectedFile(data=bytes(data), mime_type=mime_type, name=name)
        self.release()
        self._preview = self._registry.acquire(selected)
        self._file = selected
        logger.debug("Selected %s (%s, %d bytes)", selected.upload_name, mime_type, selected.size)
        return selected

    def current_file(self) -> SelectedFile | None:
        return self._file

    def current_preview(self) -> PreviewHandle | None:
        return self._preview

    def preview_bytes(self) -> bytes | None:
        if self._preview is None:
            return None
        return self._registry.resolve(self._preview)

    def release(self) -> None:
        """Release the current preview; calling it again is a no-op."""
        preview, self._preview = self._preview, None
        self._file = None
        if preview is not None:
            self._registry.release(preview)

    def __enter__(self) -> UploadSession:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.release()
