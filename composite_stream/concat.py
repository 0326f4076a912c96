from __future__ import annotations

import contextlib
import io
import logging
import sys
import typing as T
from pathlib import Path

import humanize
from tqdm import tqdm

from . import constants, exceptions, utils
from .composite import CompositeStream
from .io_utils import VirtualStreamIO
from .types import RawBytes, SourceLike

LOG = logging.getLogger(__name__)

STDIN_PATH = Path("-")


def log_exception(ex: Exception) -> None:
    if LOG.isEnabledFor(logging.DEBUG):
        exc_info = ex
    else:
        exc_info = None

    exc_name = ex.__class__.__name__
    LOG.error(f"{exc_name}: {ex}", exc_info=exc_info)


def _open_sources(
    import_paths: T.Sequence[Path], stack: contextlib.ExitStack
) -> CompositeStream:
    sources: list[SourceLike] = []
    for path in import_paths:
        if path == STDIN_PATH:
            # stdin is not seekable so it is read into a raw segment
            sources.append(RawBytes(sys.stdin.buffer.read()))
            continue
        if not path.is_file():
            raise exceptions.CompositeStreamFileNotFoundError(
                f"Source file not found: {path}"
            )
        sources.append(stack.enter_context(path.open("rb")))

    return stack.enter_context(CompositeStream(sources))


def _copy(
    fp: T.IO[bytes], out: T.IO[bytes], total: int, desc: str | None = None
) -> int:
    copied = 0
    with tqdm(
        total=total,
        desc=desc,
        unit="B",
        unit_scale=True,
        unit_divisor=1024,
        disable=desc is None
        or constants.PROGRESS_DISABLED
        or LOG.isEnabledFor(logging.DEBUG),
    ) as pbar:
        for buf in utils.iter_chunks(fp, size=total):
            out.write(buf)
            copied += len(buf)
            pbar.update(len(buf))
    return copied


def cat(
    import_path: T.Sequence[Path],
    offset: int = 0,
    length: int | None = None,
    output: Path | None = None,
) -> int:
    """
    Write the concatenation of the sources (or a slice of it) to the output
    file, or stdout if no output is given. Returns the number of bytes written.
    """
    if offset < 0:
        raise exceptions.CompositeStreamBadParameterError(
            f"Expect non-negative offset but got {offset}"
        )
    if length is not None and length < 0:
        raise exceptions.CompositeStreamBadParameterError(
            f"Expect non-negative length but got {length}"
        )

    with contextlib.ExitStack() as stack:
        stream = _open_sources(import_path, stack)
        stream.seek(offset, io.SEEK_SET)
        available = stream.length - stream.tell()
        total = available if length is None else min(length, available)

        fp = stack.enter_context(VirtualStreamIO(stream))

        if output is None:
            copied = _copy(fp, sys.stdout.buffer, total)
            sys.stdout.buffer.flush()
        else:
            with output.open("wb") as out:
                copied = _copy(fp, out, total, desc=f"Writing {output.name}")

    LOG.debug("Copied %d bytes from %d sources", copied, len(import_path))
    return copied


def describe(import_path: T.Sequence[Path], md5: bool = False) -> dict[str, T.Any]:
    """
    Print the segment table of the sources and return it as a dict
    """
    with contextlib.ExitStack() as stack:
        stream = _open_sources(import_path, stack)
        segments = [
            {"source": str(path), "offset": offset, "length": segment.length}
            for path, segment, offset in zip(
                import_path, stream.segments, _offsets(stream)
            )
        ]
        summary: dict[str, T.Any] = {
            "segments": segments,
            "size": stream.stat().size,
        }
        if md5:
            fp = stack.enter_context(VirtualStreamIO(stream))
            summary["md5"] = utils.md5sum_fp(fp).hexdigest()

    for idx, segment in enumerate(segments):
        print(
            f"{idx:>4}  {segment['offset']:>12}  {segment['length']:>12}  {segment['source']}"
        )
    print(
        f"Total: {summary['size']} bytes ({humanize.naturalsize(summary['size'], binary=True)})"
    )
    if md5:
        print(f"MD5: {summary['md5']}")

    return summary


def _offsets(stream: CompositeStream) -> T.Generator[int, None, None]:
    offset = 0
    for segment in stream.segments:
        yield offset
        offset += segment.length
