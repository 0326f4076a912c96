from __future__ import annotations

import io
import logging

from . import exceptions
from .types import StreamStat

LOG = logging.getLogger(__name__)


class BufferStream:
    """
    A stream over a single bytearray shared with the caller.

    Writes go straight into the caller's bytearray: they overwrite bytes at the
    current position and append once the position reaches the end. Reads,
    seeks and the EOF latch behave like CompositeStream with one segment.
    """

    __slots__ = ("_buffer", "_pos", "_at_eof")

    _buffer: bytearray | None
    _pos: int
    _at_eof: bool

    def __init__(self, buffer: bytearray) -> None:
        if not isinstance(buffer, bytearray):
            raise exceptions.CompositeStreamConstructionError(
                f"Expect a bytearray to share with the stream but got {type(buffer).__name__}"
            )
        self._buffer = buffer
        self._pos = 0
        self._at_eof = False

    @property
    def buffer(self) -> bytearray:
        return self._get_buffer()

    @property
    def closed(self) -> bool:
        return self._buffer is None

    def _get_buffer(self) -> bytearray:
        if self._buffer is None:
            raise exceptions.CompositeStreamMisuseError(
                "I/O operation on a closed buffer stream"
            )
        return self._buffer

    def read(self, count: int = -1) -> bytes:
        buffer = self._get_buffer()

        if self._at_eof:
            return b""

        remaining = max(len(buffer) - self._pos, 0)
        if count < 0:
            count = remaining

        data = bytes(buffer[self._pos : self._pos + count])
        self._pos += len(data)
        if len(data) < count:
            self._at_eof = True

        return data

    def write(self, data: bytes) -> int:
        buffer = self._get_buffer()
        size = len(data)
        buffer[self._pos : self._pos + size] = data
        self._pos += size
        return size

    def seek(self, offset: int, whence: int = io.SEEK_SET) -> bool:
        buffer = self._get_buffer()

        if whence == io.SEEK_SET:
            target = offset
        elif whence == io.SEEK_CUR:
            target = self._pos + offset
        elif whence == io.SEEK_END:
            target = len(buffer) + offset
        else:
            LOG.debug("Invalid whence %r", whence)
            return False

        if target < 0:
            return False

        old_pos = self._pos
        self._at_eof = False
        self._pos = min(target, len(buffer))
        return old_pos != self._pos

    def tell(self) -> int:
        self._get_buffer()
        return self._pos

    def eof(self) -> bool:
        self._get_buffer()
        return self._at_eof

    def stat(self) -> StreamStat:
        return StreamStat(size=len(self._get_buffer()))

    def close(self) -> None:
        # Drop the reference only, the bytearray still belongs to the caller
        self._buffer = None

    def __enter__(self) -> BufferStream:
        return self

    def __exit__(self, *args) -> None:
        self.close()
