from __future__ import annotations

import io
import itertools
import logging
import threading
import typing as T

from . import constants, exceptions
from .buffer_stream import BufferStream
from .composite import CompositeStream
from .types import SourceLike, StreamStat, VirtualStream

LOG = logging.getLogger(__name__)


StreamFactory = T.Callable[[T.Any], VirtualStream]


class StreamRegistry:
    """
    Hand out "scheme://id" names for virtual streams and dispatch the generic
    stream calls to the instance behind a name.

    Identifiers are assigned per scheme, starting from 1, and are never reused
    for the lifetime of the registry.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._factories: dict[str, StreamFactory] = {}
        self._counters: dict[str, T.Iterator[int]] = {}
        self._streams: dict[str, VirtualStream] = {}

    def register(self, scheme: str, factory: StreamFactory) -> None:
        with self._lock:
            if scheme in self._factories:
                raise exceptions.CompositeStreamBadParameterError(
                    f"Scheme {scheme} is already registered"
                )
            self._factories[scheme] = factory
            self._counters[scheme] = itertools.count(1)
        LOG.debug("Registered stream scheme %s", scheme)

    def is_registered(self, scheme: str) -> bool:
        with self._lock:
            return scheme in self._factories

    def open(self, scheme: str, data: T.Any) -> str:
        with self._lock:
            factory = self._factories.get(scheme)
        if factory is None:
            raise exceptions.CompositeStreamMisuseError(
                f"Scheme {scheme} is not registered"
            )
        if data is None:
            raise exceptions.CompositeStreamMisuseError(
                f"No data given to initialize a {scheme} stream"
            )

        stream = factory(data)

        with self._lock:
            url = f"{scheme}://{next(self._counters[scheme])}"
            self._streams[url] = stream

        LOG.debug("Opened %s", url)
        return url

    def get(self, url: str) -> VirtualStream:
        with self._lock:
            stream = self._streams.get(url)
        if stream is None:
            raise exceptions.CompositeStreamMisuseError(f"Unknown stream {url}")
        return stream

    def read(self, url: str, count: int) -> bytes:
        return self.get(url).read(count)

    def write(self, url: str, data: bytes) -> int:
        return self.get(url).write(data)

    def seek(self, url: str, offset: int, whence: int = io.SEEK_SET) -> bool:
        return self.get(url).seek(offset, whence)

    def tell(self, url: str) -> int:
        return self.get(url).tell()

    def eof(self, url: str) -> bool:
        return self.get(url).eof()

    def stat(self, url: str) -> StreamStat:
        return self.get(url).stat()

    def close(self, url: str) -> None:
        with self._lock:
            stream = self._streams.pop(url, None)
        if stream is None:
            raise exceptions.CompositeStreamMisuseError(f"Unknown stream {url}")
        stream.close()
        LOG.debug("Closed %s", url)

    def __contains__(self, url: str) -> bool:
        with self._lock:
            return url in self._streams


# Process-wide registry, created at import and never reset
REGISTRY = StreamRegistry()
_REGISTER_LOCK = threading.Lock()


def _ensure_registered(scheme: str, factory: StreamFactory) -> None:
    with _REGISTER_LOCK:
        if not REGISTRY.is_registered(scheme):
            REGISTRY.register(scheme, factory)


def open_composite(sources: T.Sequence[SourceLike]) -> str:
    """
    Open a composite stream on the default registry and return its name
    """
    _ensure_registered(constants.COMPOSITE_SCHEME, CompositeStream)
    return REGISTRY.open(constants.COMPOSITE_SCHEME, sources)


def open_buffer(buffer: bytearray) -> str:
    """
    Open a stream over the caller's bytearray on the default registry and
    return its name
    """
    _ensure_registered(constants.BUFFER_SCHEME, BufferStream)
    return REGISTRY.open(constants.BUFFER_SCHEME, buffer)
