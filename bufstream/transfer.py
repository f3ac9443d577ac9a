# SPDX-License-Identifier: GPL-3.0-or-later OR LicenseRef-Commercial
"""Generic stream-to-stream copy built on the capability contracts."""

from __future__ import annotations

from typing import Optional, Tuple

from .contracts import Readable, Writable, WriterTo
from .errors import EndOfData, InsufficientCapacity, StreamError

DEFAULT_CHUNK_SIZE = 32 * 1024


def copy_stream(
    dst: Writable, src: Readable, chunk_size: int = DEFAULT_CHUNK_SIZE
) -> Tuple[int, Optional[StreamError]]:
    """Copy from `src` to `dst` until `src` is exhausted.

    Sources that satisfy WriterTo hand their data over directly; anything
    else goes through an intermediate chunk of `chunk_size` bytes.

    Returns the number of bytes copied and the first error, if any.
    EndOfData from the source counts as success.

    Raises:
        ValueError: If chunk_size is not positive.
    """
    if chunk_size <= 0:
        raise ValueError("chunk_size must be positive")

    if isinstance(src, WriterTo):
        return _drain(dst, src)

    total = 0
    chunk = bytearray(chunk_size)
    view = memoryview(chunk)
    while True:
        n, read_error = src.read(view)
        if n > 0:
            written, write_error = dst.write(view[:n])
            total += written
            if write_error is not None:
                return total, write_error
            if written < n:
                return total, InsufficientCapacity()
        if read_error is not None:
            if isinstance(read_error, EndOfData):
                return total, None
            return total, read_error
        if n == 0:
            return total, None


def _drain(dst: Writable, src: WriterTo) -> Tuple[int, Optional[StreamError]]:
    total = 0
    while True:
        n, error = src.write_to(dst)
        total += n
        if error is not None:
            return total, error
        if n == 0:
            return total, None
