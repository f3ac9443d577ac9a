# SPDX-License-Identifier: GPL-3.0-or-later OR LicenseRef-Commercial
"""Bounded byte stream over a fixed, pre-allocated region.

A BufferStream pairs a region of bytes with a read/write offset. Reading and
writing happen at the common offset and never cross the end of the region:
a write past the end is truncated to what fits and reported with
InsufficientCapacity, the region never grows.

Key pieces:
  - BufferStream: the adapter itself (accessors, copies, derived views, I/O).
  - Whence: origin of a seek.
  - wrap / allocate: constructors over caller memory or fresh memory.

Streams derived with `shared_view` alias one region. Each stream owns only
its offset; content written through one is visible through all of them.
There is no locking, so a region shared across threads needs external
synchronization.
"""

from __future__ import annotations

import sys
from enum import Enum
from typing import Any, Optional, Tuple

from .errors import (
    EndOfData,
    InsufficientCapacity,
    OffsetOverflow,
    SeekBeforeStart,
    StreamError,
)

# Largest offset a native index can hold.
MAX_OFFSET = sys.maxsize

Result = Tuple[int, Optional[StreamError]]


class Whence(str, Enum):
    """Origin of a seek.

    START and CURRENT add the given offset to the start or to the current
    offset. END counts the given offset backwards from the end of the region.
    """

    START = "start"
    CURRENT = "current"
    END = "end"


def _byte_view(buf: Any) -> memoryview:
    """Return a flat unsigned-byte memoryview over any buffer object."""
    view = memoryview(buf)
    if view.format != "B" or view.ndim != 1:
        view = view.cast("B")
    return view


def _snapshot(view: memoryview, mem: bytearray | None) -> bytearray:
    if mem is not None and len(mem) >= len(view):
        try:
            mem[:] = view
        except BufferError:
            # mem is exported (e.g. wrapped by a stream) and cannot shrink.
            return bytearray(view)
        return mem
    return bytearray(view)


class BufferStream:
    """Stream-like I/O on a fixed-length byte region."""

    def __init__(self, region: Any, offset: int = 0):
        self._region = _byte_view(region)
        self._offset = offset

    # Accessors.

    @property
    def offset(self) -> int:
        """The read/write offset."""
        return self._offset

    @property
    def capacity(self) -> int:
        """Length of the underlying region."""
        return len(self._region)

    @property
    def remaining(self) -> int:
        """Bytes left to read or write from the current offset."""
        return len(self._region) - self._offset

    def content(self) -> memoryview:
        """Return the whole region (no copy)."""
        return self._region

    def head(self) -> memoryview:
        """Return the region up to the offset (exclusive)."""
        return self._region[: self._offset]

    def rest(self) -> memoryview:
        """Return the region from the offset (inclusive) onward."""
        return self._region[self._offset :]

    def __len__(self) -> int:
        return len(self._region)

    def __repr__(self) -> str:
        return f"BufferStream(offset={self._offset}, capacity={self.capacity})"

    # Copies.

    def copy(self, mem: bytearray | None = None) -> bytearray:
        """Return a copy of the content.

        `mem` is reused as the copy when it is at least as long as the
        content and can be resized (a bytearray wrapped by a stream can only
        be reused for a copy of exactly its length). Otherwise a new
        bytearray is allocated and `mem` is left alone.
        """
        return _snapshot(self._region, mem)

    def copy_head(self, mem: bytearray | None = None) -> bytearray:
        """Return a copy of the head, reusing `mem` like `copy`."""
        return _snapshot(self.head(), mem)

    def copy_rest(self, mem: bytearray | None = None) -> bytearray:
        """Return a copy of the rest, reusing `mem` like `copy`."""
        return _snapshot(self.rest(), mem)

    # Derived streams.

    def shared_view(self) -> BufferStream:
        """Return a stream over the same region with an independent offset."""
        return BufferStream(self._region, self._offset)

    def copy_view(self, mem: bytearray | None = None) -> BufferStream:
        """Return an independent stream with the same content and offset."""
        return BufferStream(self.copy(mem), self._offset)

    # Sequential I/O.

    def read(self, buf: Any) -> Result:
        """Read as many bytes as possible into `buf`.

        Returns the number of bytes read, and EndOfData when that is less
        than len(buf).
        """
        dest = _byte_view(buf)
        n = min(len(dest), self.remaining)
        dest[:n] = self._region[self._offset : self._offset + n]
        self._offset += n
        if n < len(dest):
            return n, EndOfData()
        return n, None

    def write(self, buf: Any) -> Result:
        """Write as many bytes as possible from `buf`.

        Returns the number of bytes written, and InsufficientCapacity when
        that is less than len(buf). A short write is not rolled back.
        """
        src = _byte_view(buf)
        n = min(len(src), self.remaining)
        self._region[self._offset : self._offset + n] = src[:n]
        self._offset += n
        if n < len(src):
            return n, InsufficientCapacity()
        return n, None

    # Seeking.

    def _check_offset(self, offset: int) -> StreamError | None:
        if offset < 0:
            return SeekBeforeStart()
        if offset > MAX_OFFSET:
            return OffsetOverflow()
        if offset > len(self._region):
            return InsufficientCapacity()
        return None

    def seek(self, offset: int, whence: Whence | str = Whence.START) -> Result:
        """Set the read/write offset and return it.

        Fails with SeekBeforeStart if the resolved offset would be negative,
        with OffsetOverflow if it exceeds MAX_OFFSET and with
        InsufficientCapacity if it exceeds the capacity. On failure the
        offset is unchanged and returned along with the error.

        Raises:
            ValueError: If `whence` is not a Whence.
        """
        whence = Whence(whence)
        current = self._offset
        if whence is Whence.START:
            resolved = offset
        elif whence is Whence.CURRENT:
            resolved = current + offset
        else:
            if offset > len(self._region):
                return current, SeekBeforeStart()
            resolved = len(self._region) - offset

        error = self._check_offset(resolved)
        if error is not None:
            return current, error
        self._offset = resolved
        return resolved, None

    def rewind(self) -> None:
        """Seek to the start."""
        self.seek(0, Whence.START)

    # Transfer.

    def read_from(self, source: Any) -> Result:
        """Let `source` fill the rest of the region with a single read call.

        The offset advances by whatever the source reports; its error, if
        any, is passed through.
        """
        n, error = source.read(self._region[self._offset :])
        self._offset += n
        return n, error

    def write_to(self, sink: Any) -> Result:
        """Hand the rest of the region to `sink` with a single write call."""
        n, error = sink.write(self._region[self._offset :])
        self._offset += n
        return n, error

    # Positional I/O.

    def _at(self, offset: int) -> tuple[BufferStream | None, StreamError | None]:
        error = self._check_offset(offset)
        if error is not None:
            return None, error
        view = self.shared_view()
        view._offset = offset
        return view, None

    def read_at(self, buf: Any, offset: int) -> Result:
        """Read like `read`, but at an absolute offset; the own offset stays put."""
        view, error = self._at(offset)
        if view is None:
            return 0, error
        return view.read(buf)

    def write_at(self, buf: Any, offset: int) -> Result:
        """Write like `write`, but at an absolute offset; the own offset stays put."""
        view, error = self._at(offset)
        if view is None:
            return 0, error
        return view.write(buf)


def wrap(region: Any, offset: int = 0) -> BufferStream:
    """Return a stream over `region` (no copy) at the given offset.

    The caller guarantees 0 <= offset <= len(region).
    """
    return BufferStream(region, offset)


def allocate(capacity: int) -> BufferStream:
    """Return a stream over `capacity` zeroed bytes at offset 0."""
    return BufferStream(bytearray(capacity))
