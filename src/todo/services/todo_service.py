"""Service orchestrating todo list operations."""

import logging
from typing import List, Optional

from todo.exceptions import IndexOperationException, ValidationException
from todo.indexer.elasticsearch_indexer import TodoIndexer
from todo.models import TodoItem

logger = logging.getLogger(__name__)


class TodoService:
    """Main service for the todo list commands."""

    def __init__(self, indexer: TodoIndexer, default_size: int = 100):
        self.indexer = indexer
        self.default_size = default_size

    def list_items(self, term: str = "", size: Optional[int] = None) -> List[TodoItem]:
        """List items, optionally matching a given term."""
        items = self.indexer.search_items(term, size or self.default_size)
        logger.debug(f"Found {len(items)} items matching {term!r}")
        return items

    def add_item(self, text: str) -> TodoItem:
        """Add an item to the list."""
        if not text or not text.strip():
            raise ValidationException("Item text cannot be empty")

        item = TodoItem(text=text)
        item_id = self.indexer.index_item(item)
        if item_id is None:
            raise IndexOperationException(f"Item was not acknowledged by the index: {text!r}")

        item.id = item_id
        logger.info(f"Added item {item_id}: {text!r}")
        return item

    def check_items(self, term: str) -> int:
        """Check off every item matching a given term."""
        if not term or not term.strip():
            # A blank term would match every item
            raise ValidationException("Search term cannot be empty")
        return self.indexer.check_items(term)

    def clear_items(self) -> int:
        """Clear all items from the list."""
        return self.indexer.delete_all()
