"""Content indexer for the Runbooks Knowledgebase documentation portal."""
