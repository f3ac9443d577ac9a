# SPDX-License-Identifier: GPL-3.0-or-later OR LicenseRef-Commercial

"""Bounded-capacity streams over fixed byte regions."""

from .buffer import MAX_OFFSET, BufferStream, Whence, allocate, wrap
from .caps import Caps, caps_to_turtle, caps_triples, describe
from .contracts import (
    FileReader,
    FileWriter,
    Readable,
    ReaderAt,
    ReaderFrom,
    Seekable,
    Writable,
    WriterAt,
    WriterTo,
)
from .errors import (
    EndOfData,
    InsufficientCapacity,
    OffsetOverflow,
    SeekBeforeStart,
    StreamError,
)
from .rawio import BufferStreamIO
from .transfer import DEFAULT_CHUNK_SIZE, copy_stream

__all__ = [
    "DEFAULT_CHUNK_SIZE",
    "MAX_OFFSET",
    "BufferStream",
    "BufferStreamIO",
    "Caps",
    "EndOfData",
    "FileReader",
    "FileWriter",
    "InsufficientCapacity",
    "OffsetOverflow",
    "Readable",
    "ReaderAt",
    "ReaderFrom",
    "SeekBeforeStart",
    "Seekable",
    "StreamError",
    "Whence",
    "Writable",
    "WriterAt",
    "WriterTo",
    "allocate",
    "caps_to_turtle",
    "caps_triples",
    "copy_stream",
    "describe",
    "wrap",
]
