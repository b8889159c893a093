import pytest
from pathlib import Path

from motodb.core.errors import MalformedInput
from motodb.io.readers import parse_json_bytes, read_bytes, read_json


def test_read_json_ok(tmp_path: Path):
    p = tmp_path / "x.json"
    p.write_text('{"a": 1, "b": "ไทย"}', encoding="utf-8")
    obj = read_json(p)
    assert obj["a"] == 1
    assert obj["b"] == "ไทย"


def test_read_json_invalid_raises_value_error(tmp_path: Path):
    p = tmp_path / "bad.json"
    p.write_text('{"a": 1', encoding="utf-8")  # missing }
    with pytest.raises(ValueError):
        read_json(p)


def test_read_json_invalid_is_malformed_input_naming_file(tmp_path: Path):
    p = tmp_path / "bad.json"
    p.write_text("{\n  oops\n}", encoding="utf-8")
    with pytest.raises(MalformedInput) as e:
        read_json(p)
    assert e.value.path == str(p)
    assert "line 2" in str(e.value)


def test_read_bytes_file_not_found(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        read_bytes(tmp_path / "nope.json")


def test_parse_json_bytes_rejects_non_utf8():
    with pytest.raises(MalformedInput) as e:
        parse_json_bytes(b'{"a": "\xff"}', source="x.json")
    assert "utf-8" in str(e.value).lower()


@pytest.mark.parametrize("payload", [b'{"a": NaN}', b'{"a": Infinity}', b'{"a": -Infinity}'])
def test_parse_json_bytes_rejects_non_standard_constants(payload: bytes):
    with pytest.raises(MalformedInput):
        parse_json_bytes(payload, source="x.json")


def test_read_bytes_is_verbatim(tmp_path: Path):
    p = tmp_path / "x.json"
    raw = b'{\r\n  "a" :1 }'
    p.write_bytes(raw)
    assert read_bytes(p) == raw


def test_parse_json_bytes_rejects_unpaired_surrogate_escape():
    with pytest.raises(MalformedInput) as e:
        parse_json_bytes(b'{"description": "bad \\ud800"}', source="x.json")
    assert "surrogate" in str(e.value)
    assert e.value.path == "x.json"


def test_parse_json_bytes_accepts_escaped_surrogate_pair():
    assert parse_json_bytes(b'{"a": "\\ud83c\\udfcd"}', source="x.json") == {"a": "\U0001F3CD"}
