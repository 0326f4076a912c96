from __future__ import annotations

import hashlib
import logging
import typing as T

from . import constants


def get_app_name() -> str:
    return __name__.split(".")[0]


def configure_logger(
    logger: logging.Logger, level: int, stream: T.TextIO | None = None
) -> None:
    """Configure the given logger."""
    formatter = logging.Formatter("%(asctime)s - %(levelname)-6s - %(message)s")
    handler = logging.StreamHandler(stream)
    handler.setLevel(level)
    handler.setFormatter(formatter)
    logger.addHandler(handler)
    logger.setLevel(level)


def iter_chunks(
    fp: T.IO[bytes], size: int | None = None, chunk_size: int | None = None
) -> T.Generator[bytes, None, None]:
    """
    Yield chunks from the current position of fp, up to size bytes in total
    (until the end if size is None)
    """
    if chunk_size is None:
        chunk_size = constants.READ_CHUNK_SIZE

    remaining = size
    while remaining is None or 0 < remaining:
        n = chunk_size if remaining is None else min(chunk_size, remaining)
        buf = fp.read(n)
        if not buf:
            break
        if remaining is not None:
            remaining -= len(buf)
        yield buf


# Use "hashlib._Hash" instead of hashlib._Hash because:
# AttributeError: module 'hashlib' has no attribute '_Hash'
def md5sum_fp(fp: T.IO[bytes], md5: "hashlib._Hash | None" = None) -> "hashlib._Hash":
    if md5 is None:
        md5 = hashlib.md5()
    for buf in iter_chunks(fp):
        md5.update(buf)
    return md5
