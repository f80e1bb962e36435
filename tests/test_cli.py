"""Tests for the todo command line client."""

import json
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from todo.cli.client import cli
from todo.exceptions import ElasticsearchConnectionException, IndexOperationException
from todo.models import TodoItem


@pytest.fixture
def runner():
    """Create CLI runner."""
    return CliRunner()


@pytest.fixture
def indexer():
    """Patch the indexer so no request reaches Elasticsearch."""
    with patch('todo.cli.client.TodoIndexer') as mock_cls:
        yield mock_cls.return_value


def test_no_command_shows_usage(runner, indexer):
    result = runner.invoke(cli, [])
    assert result.exit_code == 0
    assert result.output.startswith('usage:\n')
    assert 'todo list [TERM]   list items, optionally matching a given term' in result.output
    assert 'todo clear         clear all items' in result.output


def test_unknown_command(runner):
    with patch('todo.cli.client.TodoIndexer') as mock_cls:
        result = runner.invoke(cli, ['frobnicate'])
    assert result.exit_code == 1
    assert 'Unknown command: frobnicate' in result.output
    mock_cls.assert_not_called()


def test_list_all(runner, indexer):
    """Test list prints one line per item."""
    indexer.search_items.return_value = [
        TodoItem(id='1', text='buy milk'),
        TodoItem(id='2', text='walk dog', done=True)
    ]

    result = runner.invoke(cli, ['list'])

    assert result.exit_code == 0
    assert result.output.splitlines() == ['[ ] buy milk', '[X] walk dog']
    indexer.search_items.assert_called_once_with('', 100)


def test_list_with_term_and_size(runner, indexer):
    indexer.search_items.return_value = []

    result = runner.invoke(cli, ['list', 'milk', '--size', '5'])

    assert result.exit_code == 0
    assert result.output == ''
    indexer.search_items.assert_called_once_with('milk', 5)


def test_list_keeps_brackets_in_text(runner, indexer):
    indexer.search_items.return_value = [TodoItem(text='fix [bold]parser[/bold] :smile:')]

    result = runner.invoke(cli, ['list'])

    assert result.output.splitlines() == ['[ ] fix [bold]parser[/bold] :smile:']


def test_list_json(runner, indexer):
    indexer.search_items.return_value = [TodoItem(id='1', text='buy milk', done=True)]

    result = runner.invoke(cli, ['list', '--format', 'json'])

    assert result.exit_code == 0
    assert json.loads(result.output) == [{'text': 'buy milk', 'done': True, 'id': '1'}]


def test_list_table(runner, indexer):
    indexer.search_items.return_value = [TodoItem(id='1', text='buy milk')]

    result = runner.invoke(cli, ['list', '--format', 'table'])

    assert result.exit_code == 0
    assert 'Todo Items' in result.output
    assert 'buy milk' in result.output


def test_list_extra_arguments(runner, indexer):
    result = runner.invoke(cli, ['list', 'buy', 'milk'])
    assert result.exit_code == 0
    assert result.output.strip() == 'usage: todo list [TERM]'
    indexer.search_items.assert_not_called()


def test_add(runner, indexer):
    indexer.index_item.return_value = 'abc'

    result = runner.invoke(cli, ['add', 'buy milk'])

    assert result.exit_code == 0
    assert 'Added: buy milk' in result.output
    assert indexer.index_item.call_args.args[0].to_document() == {'text': 'buy milk', 'done': False}


@pytest.mark.parametrize('args', [['add'], ['add', '  '], ['add', 'buy', 'milk']])
def test_add_usage(runner, indexer, args):
    result = runner.invoke(cli, args)
    assert result.exit_code == 0
    assert result.output.strip() == 'usage: todo add ITEM'
    indexer.index_item.assert_not_called()


def test_add_not_acknowledged(runner, indexer):
    indexer.index_item.return_value = None

    result = runner.invoke(cli, ['add', 'buy milk'])

    assert result.exit_code == 1
    assert 'Error:' in result.output


def test_check(runner, indexer):
    indexer.check_items.return_value = 1

    result = runner.invoke(cli, ['check', 'milk'])

    assert result.exit_code == 0
    assert 'Checked 1 item(s)' in result.output
    indexer.check_items.assert_called_once_with('milk')


@pytest.mark.parametrize('args', [['check'], ['check', ''], ['check', 'a', 'b']])
def test_check_usage(runner, indexer, args):
    result = runner.invoke(cli, args)
    assert result.exit_code == 0
    assert result.output.strip() == 'usage: todo check TERM'
    indexer.check_items.assert_not_called()


def test_check_error_dump(runner, indexer):
    """Test remote errors print the status and error fields."""
    indexer.check_items.side_effect = IndexOperationException(
        'Failed checking items: 1 of 1 updates failed',
        status=409,
        details={'type': 'version_conflict_engine_exception', 'reason': 'conflict'}
    )

    result = runner.invoke(cli, ['check', 'milk'])

    assert result.exit_code == 1
    assert 'Error: Failed checking items' in result.output
    assert 'Error 409' in result.output
    assert '  type: version_conflict_engine_exception' in result.output
    assert '  reason: conflict' in result.output


def test_clear(runner, indexer):
    indexer.delete_all.return_value = 3

    result = runner.invoke(cli, ['clear'])

    assert result.exit_code == 0
    assert 'Cleared 3 item(s)' in result.output


def test_clear_extra_arguments(runner, indexer):
    result = runner.invoke(cli, ['clear', 'everything'])
    assert result.exit_code == 0
    assert result.output.strip() == 'usage: todo clear'
    indexer.delete_all.assert_not_called()


def test_connection_failure(runner, indexer):
    indexer.delete_all.side_effect = ElasticsearchConnectionException(
        'Unable to reach Elasticsearch at http://localhost:9200'
    )

    result = runner.invoke(cli, ['clear'])

    assert result.exit_code == 1
    assert 'Unable to reach Elasticsearch' in result.output


def test_client_closed_after_command(runner, indexer):
    indexer.delete_all.return_value = 0
    runner.invoke(cli, ['clear'])
    indexer.close.assert_called_once()


def test_connection_options(runner):
    with patch('todo.cli.client.TodoIndexer') as mock_cls:
        mock_cls.return_value.delete_all.return_value = 0
        result = runner.invoke(cli, ['--host', 'es.local', '--port', '9300', '--index', 'chores', 'clear'])

    assert result.exit_code == 0
    settings = mock_cls.call_args.args[0]
    assert settings.elasticsearch_url == 'http://es.local:9300'
    assert settings.elasticsearch_index == 'chores'


def test_invalid_configuration(runner, indexer):
    result = runner.invoke(cli, ['--port', '0', 'clear'])
    assert result.exit_code == 1
    assert 'invalid configuration' in result.output
