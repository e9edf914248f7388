"""Tests for reading topics and documents back from the index."""

import logging
from pathlib import Path

import pytest

from runbooks_knowledgebase.config import IndexerConfig
from runbooks_knowledgebase.content import ContentLibrary, load_search_index
from runbooks_knowledgebase.indexer import TopicIndexer
from runbooks_knowledgebase.models import FileRef, SearchEntry
from runbooks_knowledgebase.sink import FilesystemSink


@pytest.fixture
def sink(tmp_path: Path) -> FilesystemSink:
    """Build the index for a small content tree.

    Args:
        tmp_path: Pytest temporary directory fixture.

    Returns:
        FilesystemSink the index was written to.
    """
    root = tmp_path / "content"
    topic_dir = root / "payments-outage"
    topic_dir.mkdir(parents=True)
    (topic_dir / "README.md").write_text("# Payments Outage\nSummary text here.", encoding="utf-8")
    (topic_dir / "RUNBOOK.md").write_text("---\ntitle: Payments Runbook\n---\nSteps...", encoding="utf-8")
    (topic_dir / "CONCEPT.md").write_text("Idempotent retries.", encoding="utf-8")
    (root / "dns").mkdir()
    (root / "dns" / "WORKSHOP.md").write_text("Practice.", encoding="utf-8")

    sink = FilesystemSink(tmp_path / "data", tmp_path / "public")
    config = IndexerConfig(content_root=root, data_dir=sink.data_dir, public_dir=sink.public_dir)
    TopicIndexer(config, sink).run()
    return sink


@pytest.fixture
def library(sink: FilesystemSink, tmp_path: Path) -> ContentLibrary:
    """Create a content library over the written index.

    Args:
        sink: Sink fixture holding the written index.
        tmp_path: Pytest temporary directory fixture.

    Returns:
        ContentLibrary instance.
    """
    return ContentLibrary.from_index(tmp_path / "content", sink.topics_file)


def test_get_topic(library: ContentLibrary) -> None:
    """Test topics are found by slug."""
    topic = library.get_topic("payments-outage")

    assert topic is not None
    assert topic.title == "Payments Outage"
    assert topic.files[0] == FileRef("Overview", "/topics/payments-outage")
    assert library.get_topic("unknown") is None


def test_topic_slugs(library: ContentLibrary) -> None:
    """Test slugs come back in index order."""
    assert library.topic_slugs() == ["dns", "payments-outage"]


def test_get_content_uses_front_matter_title(library: ContentLibrary) -> None:
    """Test a front-matter title names the document."""
    content = library.get_content("payments-outage", "Runbook")

    assert content is not None
    assert content.title == "Payments Runbook"
    assert content.content == "Steps..."
    assert content.front_matter == {"title": "Payments Runbook"}


def test_get_content_falls_back_to_filename(library: ContentLibrary) -> None:
    """Test documents without a front-matter title use the filename."""
    content = library.get_content("payments-outage", "concept")

    assert content is not None
    assert content.title == "CONCEPT"
    assert content.front_matter == {}


def test_get_content_readme(library: ContentLibrary) -> None:
    """Test the overview is reachable as the readme type."""
    content = library.get_content("payments-outage", "readme")

    assert content is not None
    assert content.content.startswith("# Payments Outage")


def test_get_content_missing_file(library: ContentLibrary) -> None:
    """Test a known type without a file returns None."""
    assert library.get_content("dns", "runbook") is None


def test_get_content_unknown_type(library: ContentLibrary, caplog: pytest.LogCaptureFixture) -> None:
    """Test unknown and empty types are logged and return None."""
    with caplog.at_level(logging.ERROR):
        assert library.get_content("dns", "slides") is None
        assert library.get_content("dns", None) is None

    assert "Unknown document type: slides" in caplog.text
    assert "Document type is missing" in caplog.text


def test_load_search_index(sink: FilesystemSink) -> None:
    """Test the written search index loads back into entries."""
    entries = load_search_index(sink.search_index_file)

    assert [entry.title for entry in entries] == [
        "Dns - Workshop",
        "Payments Outage",
        "Payments Outage - Runbook",
        "Payments Outage - Concept",
    ]


def test_search_entry_from_dict_defaults_excerpt() -> None:
    """Test entries without an excerpt load with an empty one."""
    entry = SearchEntry.from_dict(
        {"title": "DNS", "path": "/topics/dns", "category": "Topic", "keywords": "dns"}
    )

    assert entry == SearchEntry("DNS", "/topics/dns", "Topic", "dns", "")
