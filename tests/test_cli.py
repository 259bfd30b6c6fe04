"""Tests for the command-line interface."""

import json
import sys
from pathlib import Path

import pytest
from reviewpulse import cli

SAMPLE = str(Path(__file__).parent.parent / "data" / "reviews.tsv")


def run_cli(monkeypatch, *argv):
    monkeypatch.setattr(sys, "argv", ["reviewpulse", *argv])
    cli.main()


def test_no_command_prints_help(monkeypatch, capsys):
    run_cli(monkeypatch)
    assert "usage" in capsys.readouterr().out.lower()


def test_analyze_with_vader(monkeypatch, capsys):
    run_cli(monkeypatch, "analyze", "--dataset", SAMPLE, "--backend", "vader", "--count", "2")
    out = capsys.readouterr().out
    assert out.count("Sentiment:") == 2


def test_export_writes_history(monkeypatch, tmp_path):
    out = tmp_path / "history.json"
    run_cli(monkeypatch, "export", "--dataset", SAMPLE, "--backend", "vader", "--count", "3", "--out", str(out))
    data = json.loads(out.read_text(encoding="utf-8"))
    assert len(data["history"]) == 3
    assert data["status"]["analyses_completed"] == 3


def test_bad_dataset_exits_nonzero(monkeypatch, tmp_path):
    with pytest.raises(SystemExit) as exc:
        run_cli(monkeypatch, "analyze", "--dataset", str(tmp_path / "nope.tsv"), "--backend", "vader")
    assert exc.value.code == 1
