"""Indexer building the topic list and search index from a content tree."""

import logging
from collections.abc import Iterable
from pathlib import Path

from runbooks_knowledgebase.config import IndexerConfig
from runbooks_knowledgebase.exceptions import ContentRootError
from runbooks_knowledgebase.models import (
    OVERVIEW_TYPE,
    TOPIC_CATEGORY,
    ContentIndex,
    FileRef,
    SearchEntry,
    Topic,
)
from runbooks_knowledgebase.parser import DocumentParser, humanize_slug
from runbooks_knowledgebase.sink import PublishSink

logger = logging.getLogger(__name__)

ASSETS_DIR = "assets"


def topic_route(slug: str, category: str | None = None) -> str:
    """Return the portal route of a topic, or of one of its documents."""
    if category is None:
        return f"/topics/{slug}"
    return f"/topics/{slug}/{category.lower()}"


def order_files(files: Iterable[FileRef], priority: Iterable[str]) -> list[FileRef]:
    """Sort file references by category priority.

    Categories missing from ``priority`` go last, keeping their encountered
    order.

    Args:
        files: File references to order.
        priority: Category labels, highest priority first.

    Returns:
        New ordered list.
    """
    rank = {category: index for index, category in enumerate(priority)}
    return sorted(files, key=lambda ref: rank.get(ref.type, len(rank)))


class TopicIndexer:
    """Builds the knowledgebase content index from topic directories."""

    def __init__(self, config: IndexerConfig, sink: PublishSink) -> None:
        """Initialise indexer.

        Args:
            config: Locations and recognition rules.
            sink: Destination for index files and assets.
        """
        self.config = config
        self.sink = sink
        self.parser = DocumentParser(config.excerpt_length)

    def scan_directories(self) -> list[Path]:
        """List candidate topic directories under the content root.

        Returns:
            Topic directories sorted by name.

        Raises:
            ContentRootError: If the content root does not exist or is not a directory.
        """
        root = self.config.content_root
        if not root.is_dir():
            msg = f"Content root is not a directory: {root}"
            raise ContentRootError(msg)

        candidates = [
            entry
            for entry in root.iterdir()
            if entry.is_dir() and not entry.name.startswith(".") and entry.name not in self.config.ignored_dirs
        ]
        return sorted(candidates, key=lambda path: path.name)

    def resolve_topic(self, topic_dir: Path) -> tuple[Topic, list[SearchEntry]] | None:
        """Derive the topic record and search entries for one directory.

        Args:
            topic_dir: Topic directory; its name is the slug.

        Returns:
            Tuple of (topic, search entries), or None when the directory holds
            no recognized document.
        """
        slug = topic_dir.name
        topic = Topic(slug=slug, title=humanize_slug(slug))
        overview_entry: SearchEntry | None = None
        overview_ref: FileRef | None = None

        overview_path = topic_dir / self.config.overview_file
        if overview_path.is_file():
            _, body = self.parser.read(overview_path)
            title, summary = self.parser.title_and_summary(body)
            if title:
                topic.title = title
            topic.summary = summary
            overview_ref = FileRef(type=OVERVIEW_TYPE, path=topic_route(slug))
            overview_entry = SearchEntry(
                title=topic.title,
                path=overview_ref.path,
                category=TOPIC_CATEGORY,
                keywords=slug,
                excerpt=summary,
            )

        key_refs: list[FileRef] = []
        entries: list[SearchEntry] = [overview_entry] if overview_entry else []
        for filename, category in self.config.key_files.items():
            file_path = topic_dir / filename
            if not file_path.is_file():
                continue

            _, body = self.parser.read(file_path)
            ref = FileRef(type=category, path=topic_route(slug, category))
            key_refs.append(ref)
            entries.append(
                SearchEntry(
                    title=f"{topic.title} - {category}",
                    path=ref.path,
                    category=category,
                    keywords=f"{slug} {category}",
                    excerpt=self.parser.excerpt(body),
                )
            )

        if overview_ref is None and not key_refs:
            logger.debug("Skipping %s: no recognized documents", slug)
            return None

        topic.files = ([overview_ref] if overview_ref else []) + order_files(key_refs, self.config.priority)
        return topic, entries

    def build_index(self) -> ContentIndex:
        """Resolve every topic directory without writing anything.

        Returns:
            ContentIndex with topics and search entries in output order.
        """
        index = ContentIndex()
        for topic_dir in self.scan_directories():
            resolved = self.resolve_topic(topic_dir)
            if resolved is None:
                continue
            topic, entries = resolved
            index.topics.append(topic)
            index.search_entries.extend(entries)
        return index

    def run(self) -> ContentIndex:
        """Rebuild the index, write it and publish topic assets.

        Returns:
            The ContentIndex that was written.
        """
        logger.info("Building content index...")
        index = self.build_index()
        self.sink.write_index(index.topics, index.search_entries)

        for topic in index.topics:
            assets = self.config.content_root / topic.slug / ASSETS_DIR
            if assets.is_dir():
                self.sink.copy_assets(topic.slug, assets)

        logger.info(
            "Generated index for %d topics and %d search entries",
            len(index.topics),
            len(index.search_entries),
        )
        return index
