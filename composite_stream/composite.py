from __future__ import annotations

import io
import logging
import os
import tempfile
import typing as T

from . import constants, exceptions
from .types import (
    ExternalHandle,
    Handle,
    RawBytes,
    resolve_source,
    Segment,
    SourceLike,
    StreamStat,
)

LOG = logging.getLogger(__name__)


def _may_spill(size: int) -> bool:
    """
    Whether a backing stream of this size is rolled over to a file under TEMP_DIR
    """
    # None (INF) and 0 both mean never roll over to disk
    max_size = constants.TEMP_SPOOL_MAX_SIZE
    return max_size is not None and 0 < max_size < size


def _ensure_temp_dir() -> None:
    os.makedirs(constants.TEMP_DIR, exist_ok=True)


def _materialize(source: RawBytes) -> Handle:
    """
    Copy raw bytes into a fresh read/write backing stream
    """
    try:
        # Only sources that spill need the directory
        if _may_spill(len(source.data)):
            _ensure_temp_dir()
        fp = tempfile.SpooledTemporaryFile(
            max_size=constants.TEMP_SPOOL_MAX_SIZE or 0,
            mode="w+b",
            dir=constants.TEMP_DIR,
        )
    except OSError as ex:
        raise exceptions.CompositeStreamConstructionError(
            f"Failed to allocate a temporary backing stream: {ex}"
        ) from ex

    try:
        fp.write(source.data)
    except OSError as ex:
        fp.close()
        raise exceptions.CompositeStreamConstructionError(
            f"Failed to write {len(source.data)} bytes to the backing stream: {ex}"
        ) from ex

    return T.cast(Handle, fp)


def _measure(handle: Handle) -> int:
    """
    Return the size of the handle regardless of its current position,
    leaving it rewound to the beginning
    """
    try:
        handle.seek(0, io.SEEK_END)
        length = handle.tell()
        handle.seek(0, io.SEEK_SET)
    except (OSError, ValueError) as ex:
        raise exceptions.CompositeStreamConstructionError(
            f"Failed to measure stream {handle!r}: {ex}"
        ) from ex
    return length


def _is_readable(handle: Handle) -> bool:
    if getattr(handle, "closed", False):
        return False
    readable = getattr(handle, "readable", None)
    if readable is None:
        return True
    try:
        return bool(readable())
    except ValueError:
        # raised by io objects when closed underneath us
        return False


class CompositeStream:
    """
    Present an ordered list of byte sources as one contiguous stream.

    Each source becomes a segment that keeps its own length and cursor. The
    composite keeps the absolute position plus the index of the segment the
    position falls in, so sequential reads never rescan the segment table.

    >>> s = CompositeStream([b"abc", b"defgh"])
    >>> s.read(4)
    b'abcd'
    >>> s.read(10)
    b'efgh'
    >>> s.eof()
    True
    >>> s.seek(2)
    True
    >>> s.read(3)
    b'cde'
    """

    _segments: list[Segment]
    # sum of all segment lengths
    _length: int
    # absolute offset from the beginning of the first segment
    _position: int
    # index of the segment where _position falls in
    _idx: int
    # set by a read that could not be satisfied, cleared by seek
    _at_eof: bool

    def __init__(self, sources: T.Iterable[SourceLike]) -> None:
        self._segments = []
        self._length = 0
        self._position = 0
        self._idx = 0
        self._at_eof = False
        self._closed = False

        try:
            for value in sources:
                self._append(value)
        except exceptions.CompositeStreamConstructionError:
            self._release()
            raise

        LOG.debug(
            "Opened composite stream with %d segments (%d bytes)",
            len(self._segments),
            self._length,
        )

    def _append(self, value: SourceLike) -> None:
        source = resolve_source(value)
        if isinstance(source, RawBytes):
            handle = _materialize(source)
            owned = True
        else:
            assert isinstance(source, ExternalHandle)
            handle = source.handle
            owned = False

        try:
            length = _measure(handle)
        except exceptions.CompositeStreamConstructionError:
            if owned:
                handle.close()
            raise

        self._segments.append(Segment(handle=handle, length=length, owned=owned))
        self._length += length

    def _release(self) -> None:
        for segment in self._segments:
            if segment.owned:
                segment.handle.close()

    def _check_open(self) -> None:
        if self._closed:
            raise exceptions.CompositeStreamMisuseError(
                "I/O operation on a closed composite stream"
            )

    @property
    def segments(self) -> tuple[Segment, ...]:
        return tuple(self._segments)

    @property
    def length(self) -> int:
        return self._length

    @property
    def closed(self) -> bool:
        return self._closed

    def read(self, count: int = -1) -> bytes:
        """
        Read up to count bytes across as many segments as needed.

        An empty result means either the EOF was latched by a previous read,
        or the read was aborted because a segment handle became unusable.
        """
        self._check_open()

        if self._at_eof:
            return b""

        if count < 0:
            count = max(self._length - self._position, 0)

        if not count:
            return b""

        if not self._segments:
            self._at_eof = True
            return b""

        acc: list[bytes] = []
        segment = self._segments[self._idx]

        while count:
            if not _is_readable(segment.handle):
                LOG.warning(
                    "Segment %d is no longer readable, aborting the read", self._idx
                )
                return b""

            want = max(min(count, segment.length - segment.cursor), 0)
            if want:
                try:
                    data = segment.handle.read(want)
                except (OSError, ValueError) as ex:
                    LOG.warning("Failed to read from segment %d: %s", self._idx, ex)
                    return b""
            else:
                data = b""

            acc.append(data)
            count -= len(data)
            segment.cursor += len(data)
            self._position += len(data)

            if len(data) < want:
                LOG.warning(
                    "Segment %d is shorter than measured (expected %d more bytes, got %d)",
                    self._idx,
                    want,
                    len(data),
                )
                return b""

            if self._position >= self._length:
                if count:
                    self._at_eof = True
                break

            if count:
                if self._idx + 1 >= len(self._segments):
                    LOG.warning(
                        "No segment after %d while %d bytes remain in the stream",
                        self._idx,
                        self._length - self._position,
                    )
                    return b""
                self._idx += 1
                segment = self._segments[self._idx]
                segment.cursor = 0
                try:
                    segment.handle.seek(0, io.SEEK_SET)
                except (OSError, ValueError) as ex:
                    LOG.warning("Failed to rewind segment %d: %s", self._idx, ex)
                    return b""

        return b"".join(acc)

    def write(self, data: bytes) -> int:
        """
        Write data at the cursor of the active segment.

        Writes never span segments: writing past the end of the active segment
        grows that segment (and the stream) instead of overwriting the next one.

        The active segment at a boundary depends on how the position was
        reached. After a read that stopped exactly at the end of a segment, that
        segment is still active and the write appends to it. After a seek to the
        same position, the next segment is active and the write overwrites its
        first bytes.

        Returns the number of bytes accepted, 0 if the underlying write failed.
        """
        self._check_open()

        if not self._segments:
            LOG.warning(
                "Rejected write of %d bytes: the stream has no segment", len(data)
            )
            return 0

        segment = self._segments[self._idx]
        old_length = segment.length
        old_cursor = segment.cursor

        if segment.owned and _may_spill(segment.cursor + len(data)):
            try:
                _ensure_temp_dir()
            except OSError as ex:
                LOG.warning("Rejected write to segment %d: %s", self._idx, ex)
                return 0

        try:
            written = segment.handle.write(data)
            new_cursor = segment.handle.tell()
        except (OSError, ValueError) as ex:
            LOG.warning("Rejected write to segment %d: %s", self._idx, ex)
            return 0

        if not written:
            return 0

        segment.cursor = new_cursor
        self._position += segment.cursor - old_cursor
        if segment.cursor > old_length:
            segment.length = segment.cursor
            self._length += segment.length - old_length

        return written

    def _locate(self, position: int) -> tuple[int, int]:
        """
        Return the index of the segment the position falls in and the offset
        within that segment
        """
        remaining = position
        for idx, segment in enumerate(self._segments):
            if remaining < segment.length:
                return idx, remaining
            remaining -= segment.length
        # position == length: park at the end of the last segment
        idx = len(self._segments) - 1
        return idx, self._segments[idx].length

    def seek(self, offset: int, whence: int = io.SEEK_SET) -> bool:
        """
        Move to the absolute position computed from offset and whence.

        Returns whether the position changed. Returns False without touching
        anything if whence is unknown, the target is negative, or the target
        segment's handle can no longer be positioned.
        """
        self._check_open()

        if whence == io.SEEK_SET:
            target = offset
        elif whence == io.SEEK_CUR:
            target = self._position + offset
        elif whence == io.SEEK_END:
            target = self._length + offset
        else:
            LOG.debug("Invalid whence %r", whence)
            return False

        if target < 0:
            LOG.debug("Invalid seek to negative position %d", target)
            return False

        position = min(self._length, target)

        if self._segments:
            idx, cursor = self._locate(position)
            segment = self._segments[idx]
            try:
                segment.handle.seek(cursor, io.SEEK_SET)
            except (OSError, ValueError) as ex:
                LOG.warning("Failed to seek segment %d to %d: %s", idx, cursor, ex)
                return False
            self._idx = idx
            segment.cursor = cursor

        old_position = self._position
        self._at_eof = False
        self._position = position

        return old_position != self._position

    def tell(self) -> int:
        self._check_open()
        return self._position

    def eof(self) -> bool:
        self._check_open()
        return self._at_eof

    def stat(self) -> StreamStat:
        self._check_open()
        return StreamStat(size=self._length)

    def close(self) -> None:
        if self._closed:
            return
        self._release()
        self._closed = True

    def __enter__(self) -> CompositeStream:
        return self

    def __exit__(self, *args) -> None:
        self.close()
