"""Tests for the command line entry point."""

import json
from pathlib import Path

import pytest

from runbooks_knowledgebase.cli import main


@pytest.fixture(autouse=True)
def clear_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove configuration variables that could leak into the run.

    Args:
        monkeypatch: Pytest monkeypatch fixture.
    """
    for name in ("RUNBOOKS_CONTENT_ROOT", "RUNBOOKS_DATA_DIR", "RUNBOOKS_PUBLIC_DIR", "RUNBOOKS_EXCERPT_LENGTH"):
        monkeypatch.delenv(name, raising=False)


def test_main_builds_index(tmp_path: Path) -> None:
    """Test a successful run writes the index and exits zero."""
    root = tmp_path / "content"
    (root / "network" / "assets").mkdir(parents=True)
    (root / "network" / "README.md").write_text("# Network\nOverview.", encoding="utf-8")
    (root / "network" / "assets" / "diagram.png").write_bytes(b"png")

    code = main(
        [
            "--content-root",
            str(root),
            "--data-dir",
            str(tmp_path / "data"),
            "--public-dir",
            str(tmp_path / "public"),
        ]
    )

    assert code == 0
    topics = json.loads((tmp_path / "data" / "topics.json").read_text(encoding="utf-8"))
    assert [topic["slug"] for topic in topics] == ["network"]
    assert (tmp_path / "public" / "images" / "topics" / "network" / "assets" / "diagram.png").read_bytes() == b"png"


def test_main_uses_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Test locations can come from the environment alone."""
    root = tmp_path / "content"
    (root / "dns").mkdir(parents=True)
    (root / "dns" / "RUNBOOK.md").write_text("Steps.", encoding="utf-8")
    monkeypatch.setenv("RUNBOOKS_CONTENT_ROOT", str(root))
    monkeypatch.setenv("RUNBOOKS_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.setenv("RUNBOOKS_PUBLIC_DIR", str(tmp_path / "public"))

    assert main([]) == 0
    entries = json.loads((tmp_path / "data" / "search-index.json").read_text(encoding="utf-8"))
    assert entries[0]["keywords"] == "dns Runbook"


def test_main_missing_root_exits_non_zero(tmp_path: Path) -> None:
    """Test a missing content root fails the run without writing."""
    code = main(["--content-root", str(tmp_path / "missing"), "--data-dir", str(tmp_path / "data")])

    assert code == 1
    assert not (tmp_path / "data").exists()
