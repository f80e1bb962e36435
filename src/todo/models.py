"""Data model for items stored in the todo index."""

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class TodoItem(BaseModel):
    """Represents a single entry in the todo list."""

    text: str
    done: bool = False
    id: Optional[str] = Field(default=None, exclude=True)

    def to_document(self) -> Dict[str, Any]:
        """Convert to dictionary for Elasticsearch indexing."""
        return self.model_dump()

    @classmethod
    def from_hit(cls, hit: Dict[str, Any]) -> "TodoItem":
        """Build an item from an Elasticsearch search hit."""
        source = hit.get('_source', {})
        return cls(
            id=hit.get('_id'),
            text=source.get('text', ''),
            done=source.get('done') or False
        )

    def __str__(self) -> str:
        return f"[{'X' if self.done else ' '}] {self.text}"
