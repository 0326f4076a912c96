import hashlib

import py.path

from .fixtures import run_command, setup_data


def test_cat(setup_data: py.path.local):
    x = run_command(
        [
            str(setup_data.join("abc.txt")),
            str(setup_data.join("empty.txt")),
            str(setup_data.join("defgh.txt")),
        ],
        command="cat",
    )
    assert x.returncode == 0, x.stderr
    assert x.stdout == b"abcdefgh"


def test_cat_slice(setup_data: py.path.local):
    x = run_command(
        [
            str(setup_data.join("abc.txt")),
            str(setup_data.join("defgh.txt")),
            "--offset=2",
            "--length=3",
        ],
        command="cat",
    )
    assert x.returncode == 0, x.stderr
    assert x.stdout == b"cde"


def test_cat_offset_past_end(setup_data: py.path.local):
    x = run_command(
        [str(setup_data.join("abc.txt")), "--offset=100"],
        command="cat",
    )
    assert x.returncode == 0, x.stderr
    assert x.stdout == b""


def test_cat_stdin(setup_data: py.path.local):
    x = run_command(
        [str(setup_data.join("abc.txt")), "-", str(setup_data.join("abc.txt"))],
        command="cat",
        input=b"123",
    )
    assert x.returncode == 0, x.stderr
    assert x.stdout == b"abc123abc"


def test_cat_output(setup_data: py.path.local):
    output = setup_data.join("out.bin")
    x = run_command(
        [
            str(setup_data.join("defgh.txt")),
            str(setup_data.join("abc.txt")),
            f"--output={output}",
        ],
        command="cat",
    )
    assert x.returncode == 0, x.stderr
    assert x.stdout == b""
    assert output.read_binary() == b"defghabc"


def test_cat_file_not_found(setup_data: py.path.local):
    x = run_command(
        [str(setup_data.join("abc.txt")), str(setup_data.join("missing.txt"))],
        command="cat",
    )
    assert x.returncode == 3
    assert b"CompositeStreamFileNotFoundError" in x.stderr


def test_cat_bad_parameter(setup_data: py.path.local):
    x = run_command(
        [str(setup_data.join("abc.txt")), "--length=-1"],
        command="cat",
    )
    assert x.returncode == 2


def test_stat(setup_data: py.path.local):
    x = run_command(
        [
            str(setup_data.join("abc.txt")),
            str(setup_data.join("empty.txt")),
            str(setup_data.join("defgh.txt")),
            "--md5",
        ],
        command="stat",
    )
    assert x.returncode == 0, x.stderr
    lines = x.stdout.decode("utf-8").splitlines()
    assert lines[0].split()[:3] == ["0", "0", "3"]
    assert lines[1].split()[:3] == ["1", "3", "0"]
    assert lines[2].split()[:3] == ["2", "3", "5"]
    assert lines[3].startswith("Total: 8 bytes")
    assert lines[4] == f"MD5: {hashlib.md5(b'abcdefgh').hexdigest()}"


def test_verbose(setup_data: py.path.local):
    x = run_command(
        [str(setup_data.join("abc.txt"))],
        command="cat",
        global_params=["--verbose"],
    )
    assert x.returncode == 0, x.stderr
    assert x.stdout == b"abc"
    assert b"composite_stream version" in x.stderr
