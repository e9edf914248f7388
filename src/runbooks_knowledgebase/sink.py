"""Publish sinks that materialize the content index and topic assets."""

import json
import logging
import os
import shutil
import tempfile
from dataclasses import asdict
from pathlib import Path
from typing import Any, Protocol

from runbooks_knowledgebase.models import SearchEntry, Topic

logger = logging.getLogger(__name__)


class PublishSink(Protocol):
    """Destination for the side effects of an indexing run."""

    def write_index(self, topics: list[Topic], search_entries: list[SearchEntry]) -> None:
        """Persist the topic list and the search index."""

    def copy_assets(self, slug: str, source: Path) -> None:
        """Publish a topic's assets directory."""


def dump_json(data: Any) -> str:
    """Serialize index data the way the front end expects it."""
    return json.dumps(data, indent=2, ensure_ascii=False)


def current_umask() -> int:
    """Return the process umask without changing it."""
    mask = os.umask(0)
    os.umask(mask)
    return mask


def write_atomic(target: Path, text: str) -> None:
    """Replace a file's content without exposing a partially written file.

    The text goes to a temporary file in the target directory, which is then
    renamed over the target. The file gets the permissions a plain write would
    give it under the current umask.

    Args:
        target: File to write.
        text: Full new content.
    """
    fd, tmp_name = tempfile.mkstemp(dir=target.parent, prefix=f".{target.name}.", suffix=".tmp")
    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            handle.write(text)
        os.chmod(tmp_path, 0o666 & ~current_umask())
        os.replace(tmp_path, target)
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise


def replace_tree(source: Path, destination: Path) -> None:
    """Copy a directory tree and swap it into place at destination.

    The copy is staged next to the destination first, so a failed copy leaves
    the previously published tree untouched. If the swap itself fails the
    previous tree is moved back.

    Args:
        source: Directory to copy.
        destination: Directory to create or replace.
    """
    destination.parent.mkdir(parents=True, exist_ok=True)
    staging_root = Path(tempfile.mkdtemp(dir=destination.parent, prefix=f".{destination.name}."))
    try:
        staged = staging_root / destination.name
        shutil.copytree(source, staged)
        previous = staging_root / "previous"
        had_previous = destination.exists()
        if had_previous:
            destination.rename(previous)
        try:
            staged.rename(destination)
        except OSError:
            if had_previous:
                previous.rename(destination)
            raise
    finally:
        shutil.rmtree(staging_root, ignore_errors=True)


class FilesystemSink:
    """Writes the JSON index files and asset trees to local directories."""

    def __init__(self, data_dir: Path, public_dir: Path) -> None:
        """Initialise sink with its output locations.

        Args:
            data_dir: Directory receiving topics.json and search-index.json.
            public_dir: Static publish root for topic assets.
        """
        self.data_dir = data_dir
        self.public_dir = public_dir

    @property
    def topics_file(self) -> Path:
        """Path of the written topic list."""
        return self.data_dir / "topics.json"

    @property
    def search_index_file(self) -> Path:
        """Path of the written search index."""
        return self.data_dir / "search-index.json"

    def assets_destination(self, slug: str) -> Path:
        """Return where a topic's assets directory is published.

        Args:
            slug: Topic slug.

        Returns:
            Destination directory for the topic's assets.
        """
        return self.public_dir / "images" / "topics" / slug / "assets"

    def write_index(self, topics: list[Topic], search_entries: list[SearchEntry]) -> None:
        """Write both index files, creating the data directory if needed.

        Args:
            topics: Topic collection in output order.
            search_entries: Flat search entries in output order.
        """
        self.data_dir.mkdir(parents=True, exist_ok=True)
        write_atomic(self.topics_file, dump_json([asdict(topic) for topic in topics]))
        write_atomic(self.search_index_file, dump_json([asdict(entry) for entry in search_entries]))
        logger.debug("Wrote %s and %s", self.topics_file, self.search_index_file)

    def copy_assets(self, slug: str, source: Path) -> None:
        """Copy a topic's assets directory into the publish tree.

        Args:
            slug: Topic slug keying the destination.
            source: The topic's assets directory.
        """
        replace_tree(source, self.assets_destination(slug))
        logger.info("Copied assets for %s", slug)
