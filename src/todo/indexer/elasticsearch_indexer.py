"""Elasticsearch indexer for todo item storage and search."""

import logging
from typing import Any, Dict, List, Optional

from elasticsearch import (
    ApiError,
    BadRequestError,
    Elasticsearch,
    NotFoundError,
    TransportError,
    helpers,
)
from elasticsearch.helpers import BulkIndexError, ScanError

from todo.config import Settings
from todo.exceptions import ElasticsearchConnectionException, IndexOperationException
from todo.models import TodoItem

logger = logging.getLogger(__name__)


INDEX_MAPPINGS = {
    "properties": {
        "text": {
            "type": "text",
            "analyzer": "standard",
            "fields": {
                "keyword": {
                    "type": "keyword",
                    "ignore_above": 256
                }
            }
        },
        "done": {
            "type": "boolean"
        }
    }
}

INDEX_SETTINGS = {
    "number_of_shards": 1,
    "number_of_replicas": 0
}


def _error_details(error: ApiError) -> Dict[str, Any]:
    """Pull the error object out of an Elasticsearch error response."""
    body = error.body
    if isinstance(body, dict):
        details = body.get('error', body)
        if isinstance(details, dict):
            return details
        return {'reason': details}
    if body:
        return {'reason': str(body)}
    return {}


class TodoIndexer:
    """Handles Elasticsearch operations for todo items."""

    def __init__(self, settings: Settings):
        """Initialize Elasticsearch client from settings."""
        self.settings = settings
        self.index_name = settings.elasticsearch_index

        # Configure Elasticsearch client
        es_config = {
            'hosts': [settings.elasticsearch_url],
            'request_timeout': settings.request_timeout,
            'max_retries': settings.max_retries,
            'retry_on_timeout': True
        }

        # Add authentication if credentials are provided
        if settings.has_credentials:
            es_config['basic_auth'] = (
                settings.elasticsearch_user,
                settings.elasticsearch_password
            )

        if settings.elasticsearch_scheme == 'https':
            es_config['verify_certs'] = settings.elasticsearch_verify_certs

        self.es = Elasticsearch(**es_config)
        logger.debug(f"Created Elasticsearch client for {settings.elasticsearch_url}")

    def close(self) -> None:
        """Release the client's transport connections."""
        self.es.close()
        logger.debug("Closed Elasticsearch client")

    def _raise_for(self, action: str, error: Exception) -> None:
        """Translate a client exception into an application exception."""
        logger.debug(f"Error {action}: {error}")
        if isinstance(error, ApiError):
            raise IndexOperationException(
                f"Failed {action}: {error.message}",
                status=error.meta.status,
                details=_error_details(error)
            ) from error
        raise ElasticsearchConnectionException(
            f"Unable to reach Elasticsearch at {self.settings.elasticsearch_url}: {error}"
        ) from error

    @staticmethod
    def _text_query(term: str) -> Dict[str, Any]:
        """Build the query selecting items by their text."""
        if not term.strip():
            return {"match_all": {}}
        return {
            "match": {
                "text": {
                    "query": term,
                    "operator": "and"
                }
            }
        }

    def ensure_index(self) -> None:
        """Create the todo index if it doesn't exist."""
        try:
            if self.es.indices.exists(index=self.index_name):
                return
            self.es.indices.create(
                index=self.index_name,
                mappings=INDEX_MAPPINGS,
                settings=INDEX_SETTINGS
            )
            logger.info(f"Created Elasticsearch index: {self.index_name}")
        except BadRequestError as e:
            if e.message != "resource_already_exists_exception":
                self._raise_for(f"creating index {self.index_name}", e)
            logger.debug(f"Index {self.index_name} was created concurrently")
        except (ApiError, TransportError) as e:
            self._raise_for(f"creating index {self.index_name}", e)

    def search_items(self, term: str, size: int) -> List[TodoItem]:
        """Search items whose text matches the term; a blank term matches all."""
        query = self._text_query(term)
        logger.debug(f"Searching {self.index_name} with query: {query}")

        try:
            response = self.es.search(
                index=self.index_name,
                query=query,
                size=size,
                sort=[
                    "_score",
                    {"text.keyword": {"order": "asc", "unmapped_type": "keyword"}}
                ]
            )
        except NotFoundError:
            logger.debug(f"Index {self.index_name} does not exist yet")
            return []
        except (ApiError, TransportError) as e:
            self._raise_for("searching items", e)

        return [TodoItem.from_hit(hit) for hit in response['hits']['hits']]

    def index_item(self, item: TodoItem) -> Optional[str]:
        """Index a single item, returning its id when acknowledged."""
        self.ensure_index()

        try:
            response = self.es.index(
                index=self.index_name,
                document=item.to_document(),
                refresh="wait_for"
            )
        except (ApiError, TransportError) as e:
            self._raise_for("indexing item", e)

        logger.debug(f"Indexed item {item.text!r} with result: {response['result']}")
        if response['result'] in ['created', 'updated']:
            return response['_id']
        return None

    def check_items(self, term: str) -> int:
        """Mark every matching item that is not done yet as done."""
        query = {
            "query": {
                "bool": {
                    "must": [self._text_query(term)],
                    "filter": [{"term": {"done": False}}]
                }
            }
        }

        try:
            actions = [
                {
                    '_op_type': 'update',
                    '_index': self.index_name,
                    '_id': hit['_id'],
                    'doc': {'done': True}
                }
                for hit in helpers.scan(self.es, query=query, index=self.index_name, _source=False)
            ]
        except NotFoundError:
            logger.debug(f"Index {self.index_name} does not exist yet")
            return 0
        except ScanError as e:
            logger.debug(f"Error finding items to check: {e}")
            raise IndexOperationException(f"Failed finding items to check: {e}") from e
        except (ApiError, TransportError) as e:
            self._raise_for("finding items to check", e)

        if not actions:
            return 0

        try:
            success_count, _ = helpers.bulk(self.es, actions, refresh=True)
        except BulkIndexError as e:
            logger.debug(f"Error checking items: {len(e.errors)} failed")
            first = e.errors[0].get('update', {}) if e.errors else {}
            raise IndexOperationException(
                f"Failed checking items: {len(e.errors)} of {len(actions)} updates failed",
                status=first.get('status'),
                details=first.get('error') if isinstance(first.get('error'), dict) else {}
            ) from e
        except (ApiError, TransportError) as e:
            self._raise_for("checking items", e)

        logger.info(f"Checked {success_count} items matching {term!r}")
        return success_count

    def delete_all(self) -> int:
        """Clear all items from the index."""
        try:
            response = self.es.delete_by_query(
                index=self.index_name,
                query={"match_all": {}},
                refresh=True,
                conflicts="proceed"
            )
        except NotFoundError:
            logger.debug(f"Index {self.index_name} does not exist yet")
            return 0
        except (ApiError, TransportError) as e:
            self._raise_for("clearing items", e)

        failures = response.get('failures') or []
        if failures:
            first = failures[0]
            raise IndexOperationException(
                f"Failed clearing items: {len(failures)} deletions failed",
                status=first.get('status'),
                details=first.get('cause', {})
            )

        conflicts = response.get('version_conflicts', 0)
        if conflicts:
            raise IndexOperationException(
                f"Failed clearing items: {conflicts} items changed while clearing",
                status=409,
                details={'deleted': response.get('deleted', 0), 'version_conflicts': conflicts}
            )

        deleted_count = response.get('deleted', 0)
        logger.info(f"Cleared {deleted_count} items from index")
        return deleted_count
