"""Exceptions raised by the knowledgebase indexer."""


class IndexerError(Exception):
    """Base class for indexer failures."""


class ContentRootError(IndexerError):
    """Raised when the content root is missing or not a directory."""


class FrontMatterError(IndexerError):
    """Raised when a document carries malformed YAML front-matter."""
