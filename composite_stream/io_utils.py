import io
import typing as T

from .types import VirtualStream


class VirtualStreamIO(io.RawIOBase):
    """
    Expose a virtual stream as a standard binary file object, so it can be
    wrapped by io.BufferedReader or handed to anything that expects a file.
    """

    _stream: VirtualStream

    def __init__(self, stream: VirtualStream) -> None:
        super().__init__()
        self._stream = stream

    @property
    def stream(self) -> VirtualStream:
        return self._stream

    def readable(self) -> bool:
        return True

    def writable(self) -> bool:
        return True

    def seekable(self) -> bool:
        return True

    def readinto(self, b: T.Any) -> int:
        view = memoryview(b).cast("B")
        data = self._stream.read(len(view))
        n = len(data)
        view[:n] = data
        return n

    def read(self, n: int = -1) -> bytes:
        # Avoid the default readall loop: the stream knows how much is left
        if n is None or n < 0:
            return self._stream.read(-1)
        return self._stream.read(n)

    def readall(self) -> bytes:
        return self._stream.read(-1)

    def write(self, b: T.Any) -> int:
        return self._stream.write(bytes(b))

    def seek(self, offset: int, whence: int = io.SEEK_SET) -> int:
        if whence == io.SEEK_SET:
            target = offset
        elif whence == io.SEEK_CUR:
            target = self._stream.tell() + offset
        elif whence == io.SEEK_END:
            target = self._stream.stat().size + offset
        else:
            raise ValueError(f"invalid whence ({whence}, should be 0, 1 or 2)")

        if target < 0:
            raise ValueError(f"negative seek value {target}")

        self._stream.seek(offset, whence)
        return self._stream.tell()

    def tell(self) -> int:
        return self._stream.tell()

    def close(self) -> None:
        if not self.closed:
            self._stream.close()
        super().close()
