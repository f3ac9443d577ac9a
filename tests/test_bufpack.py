import importlib.util
import struct
from pathlib import Path

import pytest

TOOL = Path(__file__).resolve().parent.parent / "tools" / "bufpack.py"


@pytest.fixture
def bufpack():
    spec = importlib.util.spec_from_file_location("bufpack", TOOL)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_pack_record(bufpack, capsys):
    assert bufpack.main(["<BBB", "255", "0", "255"]) == 0
    assert capsys.readouterr().out.strip() == "255 0 255"


def test_pack_at_offset(bufpack, capsys):
    assert bufpack.main(["<H", "0x0102", "--offset", "1"]) == 0
    assert capsys.readouterr().out.strip() == "0 2 1"


def test_pack_floats(bufpack):
    assert bufpack.parse_values("<fB", ["1.5", "3"]) == [1.5, 3]


def test_pack_too_large(bufpack, capsys):
    assert bufpack.main(["<I", "1", "--capacity", "2"]) == 1
    captured = capsys.readouterr()
    assert "[error] insufficient capacity" in captured.err
    assert captured.out == ""


def test_pack_bad_offset(bufpack, capsys):
    assert bufpack.main(["<B", "1", "--capacity", "1", "--offset", "4"]) == 1
    assert "[error] insufficient capacity" in capsys.readouterr().err


def test_pack_bad_value(bufpack, capsys):
    assert bufpack.main(["<B", "300"]) == 1
    assert capsys.readouterr().err.startswith("[error]")


def test_pack_caps(bufpack, capsys):
    assert bufpack.main(["<B", "7", "--caps"]) == 0
    out = capsys.readouterr().out
    assert "pc:BufferStream" in out
    assert "contract:Readable" in out


def test_pack_negative_offset(bufpack, capsys):
    assert bufpack.main(["<BBB", "1", "2", "3", "--offset", "-5"]) == 1
    captured = capsys.readouterr()
    assert "[error] seek before the start" in captured.err
    assert captured.out == ""


def test_pack_negative_capacity(bufpack, capsys):
    assert bufpack.main(["<B", "1", "--capacity", "-1"]) == 1
    assert "[error] capacity must not be negative" in capsys.readouterr().err


def test_format_codes_expand_repeat_counts(bufpack):
    assert bufpack.format_codes("<2f") == ["f", "f"]
    assert bufpack.format_codes("<2x2hB") == ["h", "h", "B"]
    # A string length is not a repeat count.
    assert bufpack.format_codes("<3sB") == ["s", "B"]


def test_pack_repeated_floats(bufpack, capsys):
    assert bufpack.main(["<2f", "1.5", "2.5"]) == 0
    expected = " ".join(str(b) for b in struct.pack("<2f", 1.5, 2.5))
    assert capsys.readouterr().out.strip() == expected


def test_parse_bytes_and_bool_values(bufpack):
    assert bufpack.parse_values("<3sB", ["abc", "7"]) == [b"abc", 7]
    assert bufpack.parse_values("<c?", ["x", "yes"]) == [b"x", True]
    assert bufpack.parse_values("<?", ["false"]) == [False]
