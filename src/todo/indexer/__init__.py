"""Elasticsearch storage for todo items."""

from .elasticsearch_indexer import TodoIndexer

__all__ = ['TodoIndexer']
