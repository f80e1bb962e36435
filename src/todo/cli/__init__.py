"""Command line interface for the todo list."""
