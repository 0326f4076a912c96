from __future__ import annotations

import dataclasses
import io
import typing as T

from . import exceptions


class Handle(T.Protocol):
    """The subset of a binary file object a segment needs"""

    def read(self, size: int = ..., /) -> bytes: ...

    def write(self, data: bytes, /) -> int | None: ...

    def seek(self, offset: int, whence: int = ..., /) -> int: ...

    def tell(self) -> int: ...

    def close(self) -> None: ...


@dataclasses.dataclass(frozen=True)
class RawBytes:
    data: bytes


@dataclasses.dataclass(frozen=True)
class ExternalHandle:
    # Borrowed from the caller, never closed by the stream
    handle: Handle


Source = T.Union[RawBytes, ExternalHandle]
SourceLike = T.Union[Source, bytes, bytearray, memoryview, str, Handle]


def resolve_source(value: SourceLike) -> Source:
    """
    Resolve what the caller passed in into one of the two source kinds

    >>> resolve_source(b"hello")
    RawBytes(data=b'hello')
    >>> resolve_source("héllo")
    RawBytes(data=b'h\\xc3\\xa9llo')
    >>> isinstance(resolve_source(io.BytesIO()), ExternalHandle)
    True
    """
    if isinstance(value, (RawBytes, ExternalHandle)):
        return value
    if isinstance(value, (bytes, bytearray, memoryview)):
        return RawBytes(bytes(value))
    if isinstance(value, str):
        return RawBytes(value.encode("utf-8"))
    if all(hasattr(value, attr) for attr in ["read", "seek", "tell"]):
        return ExternalHandle(T.cast(Handle, value))
    raise exceptions.CompositeStreamConstructionError(
        f"Unsupported source type {type(value).__name__}"
    )


@dataclasses.dataclass
class Segment:
    handle: Handle
    # Measured once when the segment is created; grows only by writes
    length: int
    cursor: int = 0
    # Whether closing the stream closes the handle
    owned: bool = False


class StreamStat(T.NamedTuple):
    """
    Mirrors the fields of os.stat_result. Virtual streams have no filesystem
    entity behind them so everything but size is zero
    """

    dev: int = 0
    ino: int = 0
    mode: int = 0
    nlink: int = 0
    uid: int = 0
    gid: int = 0
    rdev: int = 0
    size: int = 0
    atime: int = 0
    mtime: int = 0
    ctime: int = 0
    blksize: int = 0
    blocks: int = 0


class VirtualStream(T.Protocol):
    def read(self, count: int = -1) -> bytes: ...

    def write(self, data: bytes) -> int: ...

    def seek(self, offset: int, whence: int = io.SEEK_SET) -> bool: ...

    def tell(self) -> int: ...

    def eof(self) -> bool: ...

    def stat(self) -> StreamStat: ...

    def close(self) -> None: ...

    @property
    def closed(self) -> bool: ...
