"""Record store client for the hosted PostgREST database."""

import logging
from typing import Any

from .client import Client

logger = logging.getLogger(__name__)

COLLECTIONS = ("posts", "producers", "animals", "site_images")


class StoreClient(Client):
    """Client for the hosted record store.

    Issues conventional per-collection operations (select, insert,
    update-by-id, delete-by-id) against the store's PostgREST endpoint.
    Rows are returned as plain dicts; validating them against the entity
    schemas is left to the collection managers.

    Config keys (in addition to those of Client):
        api_key (required): Project key sent as ``apikey`` and bearer token

    Example:
        config = {"base_url": "https://example.supabase.co", "api_key": "..."}
        with StoreClient(config) as store:
            rows = store.select("producers", order=("created_at", False))
    """

    API_PREFIX = "/rest/v1"

    def __init__(self, config: dict):
        if not config.get("api_key"):
            raise ValueError("config must include 'api_key'")
        super().__init__(config)

    @property
    def api_key(self) -> str:
        return str(self._config["api_key"])

    @property
    def headers(self) -> dict[str, str]:
        headers = {
            "apikey": self.api_key,
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        headers.update(self._config.get("headers", {}))
        return headers

    def fetch(
        self,
        collection: str,
        columns: str = "*",
        order: tuple[str, bool] | None = None,
    ) -> list[dict[str, Any]]:
        """Fetch a whole collection, as the managers list it.

        Unlike select(), no filters apply: every row is returned.
        """
        logger.debug(f"Fetching all {collection}")
        return self.select(collection, columns=columns, order=order)

    def select(
        self,
        collection: str,
        columns: str = "*",
        filters: dict[str, Any] | None = None,
        order: tuple[str, bool] | None = None,
    ) -> list[dict[str, Any]]:
        """Select rows from a collection.

        Args:
            collection: Collection (table) name
            columns: PostgREST select expression; may embed a join such as
                ``*,producer:producers(name,slug)``
            filters: Column equality filters
            order: (column, ascending) sort specification

        Returns:
            List of row dicts (empty when nothing matches)

        Raises:
            APIError: If the store returns a non-2xx response
            ConnectionError: If the network connection fails
        """
        params = self._build_params(columns=columns, filters=filters, order=order)
        response = self.get(self._path(collection), params=params)
        rows = response.json() or []
        logger.debug(f"Selected {len(rows)} rows from {collection}")
        return rows

    def insert(self, collection: str, record: dict[str, Any]) -> dict[str, Any]:
        """Insert a single row and return it as stored."""
        response = self._request(
            "POST",
            self._path(collection),
            json=[record],
            headers={"Prefer": "return=representation"},
        )
        rows = response.json() or []
        return rows[0] if rows else record

    def update(
        self, collection: str, record_id: str, changes: dict[str, Any]
    ) -> list[dict[str, Any]]:
        """Update the row with the given id.

        Returns:
            The updated rows; an empty list when no row has that id
        """
        response = self._request(
            "PATCH",
            self._path(collection),
            params=self._build_params(filters={"id": record_id}),
            json=changes,
            headers={"Prefer": "return=representation"},
        )
        return response.json() or []

    def delete(self, collection: str, record_id: str) -> None:
        """Delete the row with the given id."""
        self._request(
            "DELETE",
            self._path(collection),
            params=self._build_params(filters={"id": record_id}),
        )

    def _path(self, collection: str) -> str:
        if collection not in COLLECTIONS:
            raise ValueError(f"Unknown collection: {collection}")
        return f"{self.API_PREFIX}/{collection}"

    def _build_params(
        self,
        columns: str | None = None,
        filters: dict[str, Any] | None = None,
        order: tuple[str, bool] | None = None,
    ) -> dict[str, str]:
        """Build PostgREST query parameters.

        PostgREST expresses filters as ``column=op.value`` and ordering as
        ``order=column.asc|desc``.
        """
        params: dict[str, str] = {}
        if columns is not None:
            params["select"] = columns
        for column, value in (filters or {}).items():
            params[column] = self._encode_filter(value)
        if order is not None:
            column, ascending = order
            params["order"] = f"{column}.{'asc' if ascending else 'desc'}"
        return params

    @staticmethod
    def _encode_filter(value: Any) -> str:
        if value is None:
            return "is.null"
        if isinstance(value, bool):
            return f"eq.{str(value).lower()}"
        return f"eq.{value}"
