# SPDX-License-Identifier: GPL-3.0-or-later OR LicenseRef-Commercial
"""Stream capability contracts and adapters for Python file objects.

Every contract returns a ``(count, error)`` pair: the count is always valid,
and the error (or None) says why fewer bytes than requested were moved.

Protocols:
    Readable, Writable, Seekable: sequential I/O and offset control.
    ReaderFrom, WriterTo: single-shot transfer from/to another stream.
    ReaderAt, WriterAt: I/O at an absolute offset.

Adapters:
    FileReader: Readable backed by a binary file object (``readinto``).
    FileWriter: Writable backed by a binary file object (``write``).
"""

from __future__ import annotations

from typing import Any, BinaryIO, Optional, Protocol, Tuple, runtime_checkable

from .errors import EndOfData, InsufficientCapacity, StreamError

Result = Tuple[int, Optional[StreamError]]

__all__ = [
    "FileReader",
    "FileWriter",
    "Readable",
    "ReaderAt",
    "ReaderFrom",
    "Seekable",
    "Writable",
    "WriterAt",
    "WriterTo",
]


@runtime_checkable
class Readable(Protocol):
    """Reads into a caller buffer; EndOfData when the read is short."""

    def read(self, buf: Any) -> Result: ...


@runtime_checkable
class Writable(Protocol):
    """Writes from a caller buffer; InsufficientCapacity when the write is short."""

    def write(self, buf: Any) -> Result: ...


@runtime_checkable
class Seekable(Protocol):
    def seek(self, offset: int, whence: Any = ...) -> Result: ...


@runtime_checkable
class ReaderFrom(Protocol):
    def read_from(self, source: Readable) -> Result: ...


@runtime_checkable
class WriterTo(Protocol):
    def write_to(self, sink: Writable) -> Result: ...


@runtime_checkable
class ReaderAt(Protocol):
    def read_at(self, buf: Any, offset: int) -> Result: ...


@runtime_checkable
class WriterAt(Protocol):
    def write_at(self, buf: Any, offset: int) -> Result: ...


class FileReader:
    """Readable over a binary file object.

    Each `read` issues exactly one ``readinto`` call, so a short count may
    simply mean the file had less data ready; EndOfData is reported either
    way, as the contract requires.
    """

    def __init__(self, fileobj: BinaryIO):
        self.fileobj = fileobj

    def read(self, buf: Any) -> Result:
        view = memoryview(buf).cast("B")
        n = self.fileobj.readinto(view) or 0
        if n < len(view):
            return n, EndOfData()
        return n, None

    def __repr__(self) -> str:
        return f"FileReader({self.fileobj!r})"


class FileWriter:
    """Writable over a binary file object."""

    def __init__(self, fileobj: BinaryIO):
        self.fileobj = fileobj

    def write(self, buf: Any) -> Result:
        view = memoryview(buf).cast("B")
        n = self.fileobj.write(view)
        if n is None:
            # Non-blocking raw stream that could not take anything.
            n = 0
        if n < len(view):
            return n, InsufficientCapacity()
        return n, None

    def __repr__(self) -> str:
        return f"FileWriter({self.fileobj!r})"
