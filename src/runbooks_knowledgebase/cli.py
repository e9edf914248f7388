"""Command line entry point for rebuilding the content index."""

import argparse
import logging
from dataclasses import replace
from pathlib import Path

from runbooks_knowledgebase.config import load_config
from runbooks_knowledgebase.exceptions import IndexerError
from runbooks_knowledgebase.indexer import TopicIndexer
from runbooks_knowledgebase.sink import FilesystemSink

logger = logging.getLogger(__name__)


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    """Parse command line options.

    Args:
        argv: Arguments without the program name, or None for sys.argv.

    Returns:
        Parsed options; unset locations are None.
    """
    parser = argparse.ArgumentParser(
        description="Scan topic directories and write topics.json, search-index.json and topic assets."
    )
    parser.add_argument(
        "--content-root",
        type=Path,
        help="Directory holding topic folders (defaults to the parent of the working directory or $RUNBOOKS_CONTENT_ROOT).",
    )
    parser.add_argument(
        "--data-dir",
        type=Path,
        help="Where the index JSON files are written (defaults to src/data or $RUNBOOKS_DATA_DIR).",
    )
    parser.add_argument(
        "--public-dir",
        type=Path,
        help="Static publish root for assets (defaults to public or $RUNBOOKS_PUBLIC_DIR).",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging.",
    )
    return parser.parse_args(argv)


def _configure_logging(verbose: bool) -> None:
    """Configure root logging for a batch run.

    Args:
        verbose: Log at DEBUG instead of INFO.
    """
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def main(argv: list[str] | None = None) -> int:
    """Rebuild the knowledgebase index once.

    Returns:
        Process exit code: 0 on success, 1 when the run aborted.
    """
    args = _parse_args(argv)
    _configure_logging(args.verbose)

    config = load_config()
    overrides = {
        name: value
        for name, value in (
            ("content_root", args.content_root),
            ("data_dir", args.data_dir),
            ("public_dir", args.public_dir),
        )
        if value is not None
    }
    config = replace(config, **overrides)

    indexer = TopicIndexer(config, FilesystemSink(config.data_dir, config.public_dir))
    try:
        indexer.run()
    except (IndexerError, OSError, UnicodeDecodeError) as exc:
        logger.error("Indexing failed: %s", exc)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
