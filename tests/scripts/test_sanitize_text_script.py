from __future__ import annotations

import io
from pathlib import Path

import pytest

from scripts.sanitize_text import main


def test_sanitizes_file_argument(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    source = tmp_path / "response.txt"
    source.write_text("Therefore, the answer is:\n$$x = 4$$\n", encoding="utf-8")

    assert main([str(source)]) == 0
    assert capsys.readouterr().out == "x = 4\n"


def test_reads_stdin(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    monkeypatch.setattr("sys.stdin", io.StringIO("Step 1: F = m * a\n"))

    assert main(["-"]) == 0
    assert capsys.readouterr().out == "F = m * a\n"


def test_rejects_extra_arguments(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["a.txt", "b.txt"]) == 2
    assert "usage" in capsys.readouterr().err
