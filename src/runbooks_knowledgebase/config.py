"""Environment-backed configuration for the content indexer."""

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

OVERVIEW_FILE = "README.md"

# Recognized non-overview documents, filename -> category label.
KEY_FILES: dict[str, str] = {
    "RUNBOOK.md": "Runbook",
    "WORKSHOP.md": "Workshop",
    "BUSINESS.md": "Business",
    "CONCEPT.md": "Concept",
    "CONTENT.md": "Content",
}

CATEGORY_PRIORITY: tuple[str, ...] = ("Business", "Concept", "Runbook", "Workshop")

IGNORED_DIRS: frozenset[str] = frozenset(
    {"website", ".git", ".github", ".agent", ".gemini", "node_modules", "_templates"}
)

EXCERPT_LENGTH = 150


def env_positive_int(name: str, default: int, environ: Mapping[str, str] | None = None) -> int:
    """Read a positive integer from the environment.

    Unset, unparsable, zero and negative values all give ``default``.

    Args:
        name: Variable name.
        default: Value used when the variable is unusable.
        environ: Environment mapping, defaults to ``os.environ``.

    Returns:
        The configured value or ``default``.
    """
    source = os.environ if environ is None else environ
    try:
        value = int(source.get(name, ""))
    except ValueError:
        return default
    return value if value > 0 else default


def env_path(name: str, default: Path, environ: Mapping[str, str] | None = None) -> Path:
    """Return path env value, or default when unset or empty."""
    source = os.environ if environ is None else environ
    raw = source.get(name, "").strip()
    return Path(raw) if raw else default


@dataclass(frozen=True)
class IndexerConfig:
    """Locations and recognition rules for one indexing run.

    Attributes:
        content_root: Directory holding one subdirectory per topic.
        data_dir: Where topics.json and search-index.json are written.
        public_dir: Static publish root; assets land under images/topics/<slug>/assets.
        overview_file: Filename of the topic overview document.
        key_files: Mapping of recognized filenames to category labels.
        priority: Category order for a topic's file list.
        ignored_dirs: Directory names that are never topics.
        excerpt_length: Maximum characters kept by the excerpt algorithm.
    """

    content_root: Path
    data_dir: Path
    public_dir: Path
    overview_file: str = OVERVIEW_FILE
    key_files: Mapping[str, str] = field(default_factory=lambda: dict(KEY_FILES))
    priority: tuple[str, ...] = CATEGORY_PRIORITY
    ignored_dirs: frozenset[str] = IGNORED_DIRS
    excerpt_length: int = EXCERPT_LENGTH


def load_config(environ: Mapping[str, str] | None = None, base_dir: Path | None = None) -> IndexerConfig:
    """Load indexer configuration from environment.

    Defaults assume the indexer runs from the website directory, with topics
    in its parent directory.

    Args:
        environ: Environment mapping, defaults to ``os.environ``.
        base_dir: Website directory, defaults to the current working directory.

    Returns:
        IndexerConfig instance.
    """
    base = base_dir if base_dir is not None else Path.cwd()
    return IndexerConfig(
        content_root=env_path("RUNBOOKS_CONTENT_ROOT", base.parent, environ),
        data_dir=env_path("RUNBOOKS_DATA_DIR", base / "src" / "data", environ),
        public_dir=env_path("RUNBOOKS_PUBLIC_DIR", base / "public", environ),
        excerpt_length=env_positive_int("RUNBOOKS_EXCERPT_LENGTH", EXCERPT_LENGTH, environ),
    )
