"""Data models for the knowledgebase content index."""

from dataclasses import dataclass, field
from typing import Any

OVERVIEW_TYPE = "Overview"
TOPIC_CATEGORY = "Topic"


@dataclass
class FileRef:
    """A recognized document within a topic."""

    type: str
    path: str


@dataclass
class Topic:
    """Represents a top-level content directory."""

    slug: str
    title: str
    summary: str = ""
    files: list[FileRef] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Topic":
        """Build a topic from its serialized form.

        Args:
            data: Mapping as written to topics.json.

        Returns:
            Topic instance.
        """
        return cls(
            slug=data["slug"],
            title=data["title"],
            summary=data.get("summary", ""),
            files=[FileRef(type=f["type"], path=f["path"]) for f in data.get("files", [])],
        )


@dataclass
class SearchEntry:
    """Represents one searchable document, flattened across topics."""

    title: str
    path: str
    category: str
    keywords: str
    excerpt: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SearchEntry":
        """Build a search entry from its serialized form.

        Args:
            data: Mapping as written to search-index.json.

        Returns:
            SearchEntry instance.
        """
        return cls(
            title=data["title"],
            path=data["path"],
            category=data["category"],
            keywords=data["keywords"],
            excerpt=data.get("excerpt", ""),
        )


@dataclass
class TopicContent:
    """Markdown body and front-matter of a single topic document."""

    slug: str
    title: str
    content: str
    front_matter: dict[str, Any] = field(default_factory=dict)


@dataclass
class ContentIndex:
    """Result of one indexing run."""

    topics: list[Topic] = field(default_factory=list)
    search_entries: list[SearchEntry] = field(default_factory=list)
