"""Process-wide table of locally renderable image previews."""

from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass

from ..models.base import PreviewError, SelectedFile

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class PreviewHandle:
    """Reference to preview bytes held by a :class:`PreviewRegistry`."""

    handle_id: int
    mime_type: str

    @property
    def uri(self) -> str:
        return f"preview://{self.handle_id}"


class PreviewRegistry:
    """Owns preview buffers; every acquired handle must be released exactly once."""

    def __init__(self) -> None:
        self._buffers: dict[int, bytes] = {}
        self._ids = itertools.count(1)
        self._issued = 0

    def acquire(self, selected: SelectedFile) -> PreviewHandle:
        handle = PreviewHandle(handle_id=next(self._ids), mime_type=selected.mime_type)
        self._buffers[handle.handle_id] = selected.data
        self._issued += 1
        logger.debug("Acquired preview %s (%d bytes)", handle.uri, selected.size)
        return handle

    def release(self, handle: PreviewHandle) -> None:
        try:
            del self._buffers[handle.handle_id]
        except KeyError:
            raise PreviewError(f"Preview {handle.uri} is not live.") from None
        logger.debug("Released preview %s", handle.uri)

    def resolve(self, handle: PreviewHandle) -> bytes:
        """Return the bytes behind a live handle."""
        try:
            return self._buffers[handle.handle_id]
        except KeyError:
            raise PreviewError(f"Preview {handle.uri} has been released.") from None

    def is_live(self, handle: PreviewHandle) -> bool:
        return handle.handle_id in self._buffers

    @property
    def live_count(self) -> int:
        return len(self._buffers)

    @property
    def issued_count(self) -> int:
        return self._issued


_DEFAULT_REGISTRY = PreviewRegistry()


def default_registry() -> PreviewRegistry:
    """Return the registry shared by sessions that are not given their own."""
    return _DEFAULT_REGISTRY
