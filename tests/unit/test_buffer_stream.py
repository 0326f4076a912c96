import io

import pytest

from composite_stream import exceptions
from composite_stream.buffer_stream import BufferStream


def test_read():
    s = BufferStream(bytearray(b"helloworld"))
    assert s.read(5) == b"hello"
    assert s.tell() == 5
    assert s.read() == b"world"
    assert not s.eof()
    assert s.read(1) == b""
    assert s.eof()
    assert s.tell() == 10


def test_write_through():
    buffer = bytearray(b"XY")
    s = BufferStream(buffer)
    assert s.write(b"Z") == 1
    assert buffer == bytearray(b"ZY")
    assert s.stat().size == 2
    assert s.read() == b"Y"

    # appends once at the end
    assert s.write(b"abc") == 3
    assert buffer == bytearray(b"ZYabc")
    assert s.tell() == 5
    assert s.stat().size == 5


def test_write_overwrites_and_extends():
    buffer = bytearray(b"hello")
    s = BufferStream(buffer)
    s.seek(3)
    assert s.write(b"p me") == 4
    assert buffer == bytearray(b"help me")


def test_caller_mutation_visible():
    buffer = bytearray(b"hello")
    s = BufferStream(buffer)
    buffer.extend(b"world")
    assert s.stat().size == 10
    assert s.read() == b"helloworld"


def test_seek():
    s = BufferStream(bytearray(b"helloworld"))
    assert s.seek(5)
    assert s.read(2) == b"wo"
    assert s.seek(-3, io.SEEK_CUR)
    assert s.read(1) == b"o"
    assert s.seek(-1, io.SEEK_END)
    assert s.read(1) == b"d"
    assert not s.seek(0, io.SEEK_END)

    assert not s.seek(-1)
    assert not s.seek(1, 5)
    assert s.tell() == 10

    assert s.seek(0)
    assert s.seek(100)
    assert s.tell() == 10


def test_seek_clears_eof():
    s = BufferStream(bytearray(b"abc"))
    s.read(10)
    assert s.eof()
    s.seek(1)
    assert not s.eof()
    assert s.read() == b"bc"


def test_not_a_bytearray():
    with pytest.raises(exceptions.CompositeStreamConstructionError):
        BufferStream(b"immutable")  # type: ignore


def test_close_keeps_buffer():
    buffer = bytearray(b"hello")
    with BufferStream(buffer) as s:
        s.write(b"J")
    assert s.closed
    assert buffer == bytearray(b"Jello")
    with pytest.raises(exceptions.CompositeStreamMisuseError):
        s.read(1)
    with pytest.raises(exceptions.CompositeStreamMisuseError):
        s.stat()
