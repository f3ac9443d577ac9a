# SPDX-License-Identifier: GPL-3.0-or-later OR LicenseRef-Commercial
"""Error kinds reported by bounded buffer streams.

BufferStream operations return an instance of one of these classes next to
their result instead of raising it. A short read or write is a normal
terminal condition, so the count returned alongside the error is still valid.
"""

from __future__ import annotations


class StreamError(OSError):
    """Base class for bounded stream errors."""

    default_message = "stream error"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.default_message)


class EndOfData(StreamError):
    """Fewer bytes were available to read than requested."""

    default_message = "end of data"


class InsufficientCapacity(StreamError):
    """The region is too short to accommodate the operation."""

    default_message = "insufficient capacity"


class SeekBeforeStart(StreamError):
    """A resolved offset would be negative."""

    default_message = "seek before the start"


class OffsetOverflow(StreamError):
    """A resolved offset does not fit into a native offset (sys.maxsize)."""

    default_message = "offset does not fit into an int"
