# SPDX-License-Identifier: GPL-3.0-or-later OR LicenseRef-Commercial
"""io.RawIOBase view of a BufferStream.

Lets code written against Python file objects (io.BufferedReader, struct,
pickle, ...) work on a bounded region. The semantics follow the io module:
errors are raised instead of returned, and SEEK_END adds the position to
the capacity.
"""

from __future__ import annotations

import io
from typing import Any

from .buffer import BufferStream, Whence

_WHENCE = {
    io.SEEK_SET: Whence.START,
    io.SEEK_CUR: Whence.CURRENT,
    io.SEEK_END: Whence.END,
}


class BufferStreamIO(io.RawIOBase):
    """Raw binary file object over a BufferStream.

    The stream is used directly, not copied: the file position is the
    stream's offset.
    """

    def __init__(self, stream: BufferStream):
        super().__init__()
        self.stream = stream

    def _check_open(self) -> None:
        if self.closed:
            raise ValueError("I/O operation on closed stream")

    def readable(self) -> bool:
        return True

    def writable(self) -> bool:
        return not self.stream.content().readonly

    def seekable(self) -> bool:
        return True

    def readinto(self, b: Any) -> int:
        self._check_open()
        # A short read is how the end of the region shows up here.
        n, _ = self.stream.read(b)
        return n

    def write(self, b: Any) -> int:
        self._check_open()
        if not self.writable():
            raise io.UnsupportedOperation("read-only region")
        n, error = self.stream.write(b)
        if n == 0 and error is not None:
            raise error
        return n

    def seek(self, pos: int, whence: int = io.SEEK_SET) -> int:
        self._check_open()
        try:
            origin = _WHENCE[whence]
        except KeyError:
            raise ValueError(f"invalid whence ({whence!r})") from None
        if origin is Whence.END:
            # BufferStream counts backwards from the end.
            pos = -pos
        offset, error = self.stream.seek(pos, origin)
        if error is not None:
            raise error
        return offset

    def tell(self) -> int:
        self._check_open()
        return self.stream.offset

    def truncate(self, size: int | None = None) -> int:
        raise io.UnsupportedOperation("capacity is fixed")

    def getbuffer(self) -> memoryview:
        """Return the bytes written so far (the head) without copying."""
        return self.stream.head()

    def __repr__(self) -> str:
        return f"BufferStreamIO({self.stream!r})"

