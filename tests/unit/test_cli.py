import io
import logging

import pytest

from blobstore_lib import cli


@pytest.fixture(autouse=True)
def restore_logging():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def _run(address, *argv, stdin=b""):
    out = io.BytesIO()
    code = cli.main(["--address", address, *argv], stdin=io.BytesIO(stdin), stdout=out)
    return code, out.getvalue()


def test_parse_args_put_flags():
    args = cli.parse_args(["--address", "memory:", "put", "--replace", "k", "f.bin"])
    assert args.command == "put"
    assert args.key == "k"
    assert args.file == "f.bin"
    assert args.replace is True


def test_put_get_list_len_delete(tmp_path):
    address = f"dbm://{tmp_path}/cli.db?sync=0&compact=0"

    assert _run(address, "put", "b", stdin=b"bravo")[0] == 0
    src = tmp_path / "alpha.bin"
    src.write_bytes(b"alpha\x00bytes")
    assert _run(address, "put", "a", str(src))[0] == 0
    assert _run(address, "put", "c", stdin=b"charlie")[0] == 0

    assert _run(address, "get", "a") == (0, b"alpha\x00bytes")
    assert _run(address, "list") == (0, b"a\nb\nc\n")
    assert _run(address, "list", "--start", "b") == (0, b"b\nc\n")
    assert _run(address, "list", "--limit", "2") == (0, b"a\nb\n")
    assert _run(address, "list", "--limit", "0") == (0, b"")
    assert _run(address, "len") == (0, b"3\n")

    assert _run(address, "delete", "b")[0] == 0
    assert _run(address, "len") == (0, b"2\n")


def test_key_errors_exit_1(tmp_path, capsys):
    address = f"dbm://{tmp_path}/errs.db?sync=0&compact=0"
    assert _run(address, "get", "missing")[0] == 1
    assert "not found" in capsys.readouterr().err

    assert _run(address, "put", "k", stdin=b"1")[0] == 0
    assert _run(address, "put", "k", stdin=b"2")[0] == 1
    assert "already exists" in capsys.readouterr().err

    assert _run(address, "put", "--replace", "k", stdin=b"2")[0] == 0
    assert _run(address, "get", "k") == (0, b"2")


def test_bad_address_exits_2(capsys):
    assert _run("///tmp/x.db?sync=soon", "len")[0] == 2
    assert "invalid sync interval" in capsys.readouterr().err
    assert _run("s3://bucket", "len")[0] == 2


def test_address_from_config(tmp_path):
    cfg = tmp_path / "blobstore.yml"
    cfg.write_text(f"address: dbm://{tmp_path}/cfg.db?sync=0&compact=0\nlog_level: ERROR\n", encoding="utf-8")
    out = io.BytesIO()
    assert cli.main(["--config", str(cfg), "put", "x"], stdin=io.BytesIO(b"1"), stdout=out) == 0
    out = io.BytesIO()
    assert cli.main(["--config", str(cfg), "len"], stdin=io.BytesIO(), stdout=out) == 0
    assert out.getvalue() == b"1\n"
    assert logging.getLogger().level == logging.ERROR


def test_missing_address_exits_2(capsys):
    assert cli.main(["len"], stdin=io.BytesIO(), stdout=io.BytesIO()) == 2
    assert "no store address" in capsys.readouterr().err


def test_put_missing_file_reports_error(tmp_path, capsys):
    address = f"dbm://{tmp_path}/io.db?sync=0&compact=0"
    code, _ = _run(address, "put", "k", str(tmp_path / "no-such-file.bin"))
    assert code == 1
    assert capsys.readouterr().err.startswith("blobstore: ")
    assert _run(address, "len") == (0, b"0\n")


def test_unopenable_store_reports_error(tmp_path, capsys):
    blocker = tmp_path / "not-a-dir"
    blocker.write_bytes(b"")
    code, _ = _run(f"dbm://{blocker}/inner/store.db", "len")
    assert code == 1
    assert capsys.readouterr().err.startswith("blobstore: ")
