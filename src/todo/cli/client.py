"""Command line client for the todo list."""

import json
import logging
import sys

import click
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from todo.config import Settings
from todo.exceptions import IndexOperationException, TodoException, ValidationException
from todo.indexer.elasticsearch_indexer import TodoIndexer
from todo.services.todo_service import TodoService

console = Console()
err_console = Console(stderr=True)

USAGE = """usage:
  todo list [TERM]   list items, optionally matching a given term
  todo add ITEM      add an item to the list
  todo check TERM    check items that match a given term
  todo clear         clear all items"""


def echo_plain(text: str) -> None:
    """Print text verbatim, without rich markup or highlighting."""
    console.print(text, markup=False, highlight=False, emoji=False, soft_wrap=True)


def fail(error: TodoException) -> None:
    """Report a failed operation on stderr and exit with status 1."""
    err_console.print(f"[red]Error: {escape(str(error))}[/red]")
    if isinstance(error, IndexOperationException) and error.status is not None:
        err_console.print(f"Error {error.status}", markup=False, highlight=False)
        for key, value in error.details.items():
            err_console.print(f"  {key}: {value}", markup=False, highlight=False)
    sys.exit(1)


def create_items_table(items: list) -> Table:
    """Create a rich table for todo items."""
    table = Table(title="Todo Items")

    table.add_column("Done", justify="center", style="green")
    table.add_column("Text", style="cyan")
    table.add_column("ID", style="blue", no_wrap=True)

    for item in items:
        table.add_row(
            "X" if item.done else "",
            escape(item.text),
            item.id or 'N/A'
        )

    return table


class TodoGroup(click.Group):
    """Command group reporting unknown commands with exit status 1."""

    def resolve_command(self, ctx, args):
        cmd_name = args[0]
        if (self.get_command(ctx, cmd_name) is None
                and not ctx.resilient_parsing
                and not cmd_name.startswith('-')):
            err_console.print(f"[red]Unknown command: {escape(cmd_name)}[/red]")
            ctx.exit(1)
        return super().resolve_command(ctx, args)


@click.group(cls=TodoGroup, invoke_without_command=True)
@click.option('--host', default=None, help='Elasticsearch host (default: localhost)')
@click.option('--port', type=int, default=None, help='Elasticsearch port (default: 9200)')
@click.option('--index', default=None, help='Index holding the items (default: todo)')
@click.option('--verbose', '-v', is_flag=True, help='Enable debug logging')
@click.pass_context
def cli(ctx, host, port, index, verbose):
    """Todo CLI - Manage a todo list stored in Elasticsearch."""
    if ctx.invoked_subcommand is None:
        echo_plain(USAGE)
        ctx.exit(0)

    overrides = {
        'elasticsearch_host': host,
        'elasticsearch_port': port,
        'elasticsearch_index': index,
    }
    try:
        settings = Settings(**{k: v for k, v in overrides.items() if v is not None})
    except ValidationError as e:
        err_console.print("[red]Error: invalid configuration[/red]")
        err_console.print(str(e), markup=False, highlight=False)
        sys.exit(1)

    # Configure logging
    logging.basicConfig(
        level=logging.DEBUG if verbose else getattr(logging, settings.log_level),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    indexer = TodoIndexer(settings)
    ctx.call_on_close(indexer.close)

    ctx.ensure_object(dict)
    ctx.obj['settings'] = settings
    ctx.obj['service'] = TodoService(indexer, default_size=settings.list_size)


@cli.command(name='list')
@click.argument('terms', nargs=-1)
@click.option('--format', 'output_format', type=click.Choice(['simple', 'table', 'json']),
              default='simple', help='Output format')
@click.option('--size', '-s', type=click.IntRange(1, 10000), default=None,
              help='Maximum number of items to show')
@click.pass_context
def list_items(ctx, terms, output_format, size):
    """List items, optionally matching a given term."""
    if len(terms) > 1:
        echo_plain("usage: todo list [TERM]")
        return

    service = ctx.obj['service']
    term = terms[0] if terms else ""

    try:
        items = service.list_items(term, size)
    except TodoException as e:
        fail(e)

    if output_format == 'json':
        documents = [dict(item.to_document(), id=item.id) for item in items]
        echo_plain(json.dumps(documents, indent=2))

    elif output_format == 'table':
        if not items:
            console.print("[yellow]No items found[/yellow]")
            return
        console.print(create_items_table(items))

    else:
        for item in items:
            echo_plain(str(item))


@cli.command()
@click.argument('texts', nargs=-1)
@click.pass_context
def add(ctx, texts):
    """Add an item to the list."""
    if len(texts) != 1 or not texts[0].strip():
        echo_plain("usage: todo add ITEM")
        return

    service = ctx.obj['service']

    try:
        item = service.add_item(texts[0])
    except ValidationException:
        echo_plain("usage: todo add ITEM")
        return
    except TodoException as e:
        fail(e)

    console.print(f"[green]Added: {escape(item.text)}[/green]")


@cli.command()
@click.argument('terms', nargs=-1)
@click.pass_context
def check(ctx, terms):
    """Check items that match a given term."""
    if len(terms) != 1 or not terms[0].strip():
        echo_plain("usage: todo check TERM")
        return

    service = ctx.obj['service']

    try:
        checked = service.check_items(terms[0])
    except ValidationException:
        echo_plain("usage: todo check TERM")
        return
    except TodoException as e:
        fail(e)

    console.print(f"[green]Checked {checked} item(s)[/green]")


@cli.command()
@click.argument('extra', nargs=-1)
@click.pass_context
def clear(ctx, extra):
    """Clear all items."""
    if extra:
        echo_plain("usage: todo clear")
        return

    service = ctx.obj['service']

    try:
        cleared = service.clear_items()
    except TodoException as e:
        fail(e)

    console.print(f"[green]Cleared {cleared} item(s)[/green]")


if __name__ == '__main__':
    cli()
