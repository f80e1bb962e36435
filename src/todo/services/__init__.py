"""Services package for the todo application."""

from .todo_service import TodoService

__all__ = [
    'TodoService'
]
