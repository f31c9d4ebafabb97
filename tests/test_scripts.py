"""Tests for the command-line scripts."""

import importlib.util
import sys
from pathlib import Path

import pytest

import tagsummary.settings_store as store
from tagsummary.domain import VaultCorpus, build_summary
from tagsummary.schemas import FormatOptions

SCRIPTS = Path(__file__).resolve().parent.parent / "scripts"


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    monkeypatch.setattr(store, "SETTINGS_PATH", str(tmp_path / "settings.json"))


def _load(name):
    spec = importlib.util.spec_from_file_location(name, SCRIPTS / f"{name}.py")
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_demo_vault_summary(tmp_path):
    demo = _load("create_demo_vault")
    written = demo.seed_vault(tmp_path, overwrite=False)
    assert len(written) == 5
    assert demo.seed_vault(tmp_path, overwrite=False) == []

    options = FormatOptions(include_link=False, include_callout=False)
    result = build_summary(VaultCorpus(tmp_path), "tags: #project\nexclude: #private", options)
    assert result.markdown == (
        "Kick-off moved to Monday #project/alpha ^kickoff\n\n\n"
        "**Budget** approved by finance #project/alpha/budget\n\n\n"
    )


def test_summarize_prints_placeholder(tmp_path, monkeypatch, capsys):
    summarize = _load("summarize")
    monkeypatch.setattr(
        sys, "argv", ["summarize.py", "--vault", str(tmp_path), "--directive", "tags: #nothing"]
    )
    summarize.main()
    assert "There are no blocks that match the specified tags." in capsys.readouterr().out


def test_summarize_directive(tmp_path, monkeypatch, capsys):
    (tmp_path / "a.md").write_text("Line one #a\n", encoding="utf-8")
    summarize = _load("summarize")
    monkeypatch.setattr(
        sys,
        "argv",
        ["summarize.py", "--vault", str(tmp_path), "--directive", "tags: #a", "--no-link", "--no-callout"],
    )
    summarize.main()
    assert capsys.readouterr().out == "Line one #a\n\n\n"
