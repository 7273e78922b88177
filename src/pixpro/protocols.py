"""
Protocol definitions for the collaborators of the region processor.

The parallel core only depends on these shapes, so callers can plug in their
own buffers, pixel operations and progress sinks.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from pixpro.color.space import Color


@runtime_checkable
class PixelAccess(Protocol):
    """Scoped read/write view handed out by ``BufferProvider.lock()``."""

    def __getitem__(self, xy: tuple[int, int]) -> Color: ...

    def __setitem__(self, xy: tuple[int, int], color: Color) -> None: ...

    def release(self) -> None: ...

    def __enter__(self) -> PixelAccess: ...

    def __exit__(self, exc_type, exc, tb) -> None: ...


@runtime_checkable
class BufferProvider(Protocol):
    """
    Anything with a pixel extent that can be locked for access.

    ``PixelBuffer`` is the reference implementation.
    """

    width: int
    height: int

    def lock(self) -> PixelAccess:
        """Acquire a scoped accessor; raise if the buffer is already locked."""
        ...


@runtime_checkable
class PixelTransform(Protocol):
    """
    Pure per-pixel operation.

    Receives the source pixel in encoded space and returns the encoded pixel
    to write. Implementations handle their own expand/compress.
    """

    def apply_pixel(self, color: Color) -> Color: ...


@runtime_checkable
class ProgressSink(Protocol):
    """Receives one notification per completed row."""

    def row_processed(self, y: int) -> None: ...
