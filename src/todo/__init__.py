"""Command line to-do list backed by an Elasticsearch index."""

__version__ = "1.0.0"
