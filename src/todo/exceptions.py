"""Custom exceptions for the todo application."""

from typing import Any, Dict, Optional


class TodoException(Exception):
    """Base exception for todo application."""
    pass


class ElasticsearchConnectionException(TodoException):
    """Exception raised for Elasticsearch connection issues."""
    pass


class IndexOperationException(TodoException):
    """Exception raised when Elasticsearch rejects or fails an operation."""

    def __init__(self, message: str, status: Optional[int] = None,
                 details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.status = status
        self.details = details or {}


class ValidationException(TodoException):
    """Exception raised for validation errors."""
    pass
