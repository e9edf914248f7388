"""Read-side access to the written index and topic documents."""

import json
import logging
from pathlib import Path

from runbooks_knowledgebase.models import SearchEntry, Topic, TopicContent
from runbooks_knowledgebase.parser import DocumentParser

logger = logging.getLogger(__name__)

# Route segment -> document filename.
DOCUMENT_FILES: dict[str, str] = {
    "runbook": "RUNBOOK.md",
    "workshop": "WORKSHOP.md",
    "workbook": "WORKBOOK.md",
    "business": "BUSINESS.md",
    "concept": "CONCEPT.md",
    "content": "CONTENT.md",
    "readme": "README.md",
}


def load_topics(path: Path) -> list[Topic]:
    """Load topics.json into Topic instances."""
    data = json.loads(path.read_text(encoding="utf-8"))
    return [Topic.from_dict(item) for item in data]


def load_search_index(path: Path) -> list[SearchEntry]:
    """Load search-index.json into SearchEntry instances."""
    data = json.loads(path.read_text(encoding="utf-8"))
    return [SearchEntry.from_dict(item) for item in data]


class ContentLibrary:
    """Looks up topics and their documents for page generation."""

    def __init__(self, content_root: Path, topics: list[Topic]) -> None:
        """Initialise library.

        Args:
            content_root: Directory holding the topic directories.
            topics: Topics as loaded from topics.json.
        """
        self.content_root = content_root
        self.topics = topics
        self.parser = DocumentParser()

    @classmethod
    def from_index(cls, content_root: Path, topics_file: Path) -> "ContentLibrary":
        """Create a library from a written topics.json file."""
        return cls(content_root, load_topics(topics_file))

    def get_topic(self, slug: str) -> Topic | None:
        """Return the topic with the given slug, or None."""
        for topic in self.topics:
            if topic.slug == slug:
                return topic
        return None

    def topic_slugs(self) -> list[str]:
        """Return every topic slug in index order."""
        return [topic.slug for topic in self.topics]

    def get_content(self, slug: str, doc_type: str | None) -> TopicContent | None:
        """Load one document of a topic.

        Args:
            slug: Topic slug.
            doc_type: Route segment such as ``runbook`` (case-insensitive).

        Returns:
            TopicContent, or None when the type is unknown or the file is missing.
        """
        if not doc_type:
            logger.error("Document type is missing for slug: %s", slug)
            return None

        filename = DOCUMENT_FILES.get(doc_type.lower())
        if filename is None:
            logger.error("Unknown document type: %s for slug: %s", doc_type, slug)
            return None

        file_path = self.content_root / slug / filename
        if not file_path.is_file():
            return None

        front_matter, body = self.parser.read(file_path)
        title = front_matter.get("title") or filename.removesuffix(".md")
        return TopicContent(slug=slug, title=str(title), content=body, front_matter=front_matter)
