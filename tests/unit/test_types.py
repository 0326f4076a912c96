import io

import pytest

from composite_stream import exceptions, types


def test_resolve_raw_bytes():
    assert types.resolve_source(b"abc") == types.RawBytes(b"abc")
    assert types.resolve_source(bytearray(b"abc")) == types.RawBytes(b"abc")
    assert types.resolve_source(memoryview(b"abc")) == types.RawBytes(b"abc")
    assert types.resolve_source("héllo") == types.RawBytes("héllo".encode("utf-8"))


def test_resolve_raw_bytes_copies():
    buffer = bytearray(b"abc")
    source = types.resolve_source(buffer)
    buffer[0] = ord("x")
    assert source == types.RawBytes(b"abc")


def test_resolve_handle():
    fp = io.BytesIO(b"abc")
    source = types.resolve_source(fp)
    assert isinstance(source, types.ExternalHandle)
    assert source.handle is fp


def test_resolve_tagged_sources_unchanged():
    raw = types.RawBytes(b"abc")
    external = types.ExternalHandle(io.BytesIO())
    assert types.resolve_source(raw) is raw
    assert types.resolve_source(external) is external


@pytest.mark.parametrize("value", [None, 1, 1.5, object(), [b"abc"]])
def test_resolve_unsupported(value):
    with pytest.raises(exceptions.CompositeStreamConstructionError):
        types.resolve_source(value)


def test_stream_stat():
    st = types.StreamStat(size=10)
    assert st.size == 10
    assert st.mtime == 0
    assert len(st) == 13
