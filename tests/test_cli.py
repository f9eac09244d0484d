from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from locstr.cli import main


@pytest.fixture
def sgm(tmp_path: Path) -> Path:
    p = tmp_path / "doc.sgm"
    p.write_bytes("<DOC>a\r\nb</DOC>".encode("utf-8"))
    return p


def test_json_output_keeps_carriage_returns(sgm: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main([str(sgm), "--markup", "--json"]) == 0
    payload = json.loads(capsys.readouterr().out)
    entry = payload[str(sgm)]
    assert entry["text"] == "<DOC>a\r\nb</DOC>"
    assert entry["bounds"]["end"]["code_point_offset"] == 14
    assert entry["bounds"]["start"]["byte_offset"] is None


def test_byte_offsets_lookup_and_substring(sgm: Path, capsys: pytest.CaptureFixture[str]) -> None:
    rc = main([str(sgm), "--markup", "--byte-offsets", "--substring", "5", "8", "--lookup", "8", "--json"])
    assert rc == 0
    entry = json.loads(capsys.readouterr().out)[str(sgm)]
    assert entry["text"] == "a\r\nb"
    assert entry["lookup"] == {"code_point_offset": 8, "logical_offset": 2}


def test_text_output_lists_regions(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    p = tmp_path / "a.txt"
    p.write_text("ab<i>c</i>d", encoding="utf-8")
    assert main([str(p), "--markup", "--lookup", "10"]) == 0
    out = capsys.readouterr().out.splitlines()
    assert out[0] == f"{p}: [{{cp=0, logical=0}}, {{cp=10, logical=3}}]"
    assert sum(1 for line in out if line.endswith(" skip")) == 4
    assert out[-1] == "  lookup 10: {cp=10, logical=3}"


def test_lookup_out_of_range_fails(sgm: Path, caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.ERROR, logger="locstr.cli"):
        assert main([str(sgm), "--lookup", "99"]) == 1
    assert "99" in caplog.text


def test_missing_file_fails(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.ERROR, logger="locstr.cli"):
        assert main([str(tmp_path / "nope.txt")]) == 1
    assert "nope.txt" in caplog.text
