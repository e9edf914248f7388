"""Parser for knowledgebase markdown documents."""

import re
from pathlib import Path
from typing import Any

import yaml

from runbooks_knowledgebase.config import EXCERPT_LENGTH
from runbooks_knowledgebase.exceptions import FrontMatterError

_FRONT_MATTER_RE = re.compile(r"\A---[ \t]*\r?\n(.*?)^---[ \t]*(?:\r?\n|\Z)", re.DOTALL | re.MULTILINE)
_TITLE_RE = re.compile(r"^#\s+(.+)$", re.MULTILINE)
_HEADING_MARKER_RE = re.compile(r"#+\s")
_LINK_RE = re.compile(r"\[(.*?)\]\(.*?\)")
_LINE_BREAK_RE = re.compile(r"\r\n|\n|\r")


def humanize_slug(slug: str) -> str:
    """Turn a directory slug into a display title.

    ``incident-response`` becomes ``Incident Response``. Only the first letter
    of each word is changed.
    """
    return " ".join(word[:1].upper() + word[1:] for word in slug.split("-"))


def get_excerpt(text: str, limit: int = EXCERPT_LENGTH) -> str:
    """Reduce a markdown body to a short plain-text excerpt.

    Heading markers are dropped, links collapse to their text and line breaks
    become spaces. The result is cut to ``limit`` characters and trimmed, with
    ``...`` appended when anything was cut off.

    Args:
        text: Markdown body without front-matter.
        limit: Maximum number of characters kept.

    Returns:
        Plain-text excerpt.
    """
    text = _HEADING_MARKER_RE.sub("", text)
    text = _LINK_RE.sub(r"\1", text)
    text = _LINE_BREAK_RE.sub(" ", text)
    excerpt = text[:limit].strip()
    if len(text) > limit:
        excerpt += "..."
    return excerpt


def split_front_matter(source: str) -> tuple[dict[str, Any], str]:
    """Separate a leading YAML front-matter block from the document body.

    Args:
        source: Full document text.

    Returns:
        Tuple of (front-matter mapping, body). The mapping is empty when the
        document has no front-matter block.

    Raises:
        FrontMatterError: If the block is not valid YAML or not a mapping.
    """
    match = _FRONT_MATTER_RE.match(source)
    if not match:
        return {}, source

    try:
        data = yaml.safe_load(match.group(1))
    except yaml.YAMLError as exc:
        msg = f"Invalid front-matter: {exc}"
        raise FrontMatterError(msg) from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        msg = f"Front-matter must be a mapping, got {type(data).__name__}"
        raise FrontMatterError(msg)

    return data, source[match.end() :]


def find_title(body: str) -> re.Match[str] | None:
    """Return the first level-1 heading match in a markdown body."""
    return _TITLE_RE.search(body)


class DocumentParser:
    """Reads markdown files and derives titles and excerpts from them."""

    def __init__(self, excerpt_length: int = EXCERPT_LENGTH) -> None:
        """Initialise parser.

        Args:
            excerpt_length: Maximum characters kept in excerpts.
        """
        self.excerpt_length = excerpt_length

    def read(self, file_path: Path) -> tuple[dict[str, Any], str]:
        """Read a markdown file and split off its front-matter.

        Args:
            file_path: Path to the markdown file.

        Returns:
            Tuple of (front-matter mapping, body).

        Raises:
            OSError: If the file cannot be read.
            UnicodeDecodeError: If the file is not valid UTF-8.
            FrontMatterError: If the front-matter is malformed.
        """
        source = file_path.read_text(encoding="utf-8")
        try:
            return split_front_matter(source)
        except FrontMatterError as exc:
            msg = f"{file_path}: {exc}"
            raise FrontMatterError(msg) from exc

    def excerpt(self, body: str) -> str:
        """Compute the excerpt of a document body."""
        return get_excerpt(body, self.excerpt_length)

    def title_and_summary(self, body: str) -> tuple[str | None, str]:
        """Extract the overview title and summary.

        The first level-1 heading supplies the title and is left out of the
        summary.

        Args:
            body: Overview body without front-matter.

        Returns:
            Tuple of (title or None, summary excerpt).
        """
        match = find_title(body)
        if match is None:
            return None, self.excerpt(body)

        title = match.group(1).strip()
        remainder = body[: match.start()] + body[match.end() :]
        return title, self.excerpt(remainder)
