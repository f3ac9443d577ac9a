import io
import struct

import pytest

from bufstream.buffer import allocate, wrap
from bufstream.errors import InsufficientCapacity, SeekBeforeStart
from bufstream.rawio import BufferStreamIO


def test_capabilities():
    raw = BufferStreamIO(allocate(4))
    assert raw.readable()
    assert raw.writable()
    assert raw.seekable()
    assert not BufferStreamIO(wrap(b"abc")).writable()


def test_struct_encoding():
    stream = allocate(struct.calcsize("<BBB"))
    raw = BufferStreamIO(stream)

    raw.write(struct.pack("<BBB", 255, 0, 255))
    assert bytes(raw.getbuffer()) == bytes([255, 0, 255])
    assert raw.tell() == 3
    assert stream.offset == 3


def test_write_is_bounded():
    raw = BufferStreamIO(allocate(4))
    assert raw.write(b"abcdef") == 4
    with pytest.raises(InsufficientCapacity):
        raw.write(b"g")


def test_write_readonly_region():
    raw = BufferStreamIO(wrap(b"abc"))
    with pytest.raises(io.UnsupportedOperation):
        raw.write(b"x")


def test_read_through_buffered_reader():
    raw = BufferStreamIO(wrap(bytearray(b"line one\nline two\n")))
    reader = io.BufferedReader(raw)
    assert reader.readline() == b"line one\n"
    assert reader.read() == b"line two\n"
    assert reader.read() == b""


def test_read_all():
    raw = BufferStreamIO(wrap(bytearray(b"abcdef"), 2))
    assert raw.read() == b"cdef"
    assert raw.read(1) == b""


def test_seek_uses_io_semantics():
    raw = BufferStreamIO(allocate(10))
    assert raw.seek(4) == 4
    assert raw.seek(2, io.SEEK_CUR) == 6
    assert raw.seek(-3, io.SEEK_END) == 7
    assert raw.seek(0, io.SEEK_END) == 10


def test_seek_errors_are_raised():
    raw = BufferStreamIO(allocate(10))
    with pytest.raises(SeekBeforeStart):
        raw.seek(-11, io.SEEK_END)
    with pytest.raises(InsufficientCapacity):
        raw.seek(1, io.SEEK_END)
    with pytest.raises(ValueError, match="invalid whence"):
        raw.seek(0, 3)
    assert raw.tell() == 0


def test_truncate_unsupported():
    with pytest.raises(io.UnsupportedOperation):
        BufferStreamIO(allocate(1)).truncate()


def test_closed():
    raw = BufferStreamIO(allocate(1))
    raw.close()
    with pytest.raises(ValueError):
        raw.tell()
