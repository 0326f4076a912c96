from __future__ import annotations

import os
import shlex
import subprocess
import sys

import py.path
import pytest

EXECUTABLE = os.getenv(
    "COMPOSITE_STREAM__TESTS_EXECUTABLE",
    f"{shlex.quote(sys.executable)} -m composite_stream.commands",
)


@pytest.fixture
def setup_data(tmpdir: py.path.local):
    data_path = tmpdir.mkdir("data")
    data_path.join("abc.txt").write_binary(b"abc")
    data_path.join("defgh.txt").write_binary(b"defgh")
    data_path.join("empty.txt").write_binary(b"")
    yield data_path
    if tmpdir.check():
        tmpdir.remove(ignore_errors=True)


def run_command(
    params: list[str],
    command: str,
    input: bytes | None = None,
    global_params: list[str] | None = None,
    **kwargs,
) -> subprocess.CompletedProcess:
    env = {**os.environ, "COMPOSITE_STREAM_PROGRESS_DISABLED": "YES"}
    return subprocess.run(
        [*shlex.split(EXECUTABLE), *(global_params or []), command, *params],
        input=input,
        capture_output=True,
        env=env,
        **kwargs,
    )
