"""Tests for the StoreClient class."""

from unittest.mock import MagicMock

import pytest

from craft_cms.clients import APIError, StoreClient


def make_response(body):
    response = MagicMock()
    response.is_success = True
    response.json.return_value = body
    return response


@pytest.fixture
def store_config():
    return {"base_url": "https://store.example.com", "api_key": "anon-key"}


@pytest.fixture
def store(store_config):
    client = StoreClient(store_config)
    client._client = MagicMock()
    return client


def last_call(store):
    call = store._client.request.call_args
    return call.args, call.kwargs


class TestStoreClientConfiguration:
    """Tests for StoreClient configuration."""

    def test_requires_api_key(self):
        """StoreClient raises ValueError without an api_key."""
        with pytest.raises(ValueError, match="api_key"):
            StoreClient({"base_url": "https://store.example.com"})

    def test_auth_headers(self, store_config):
        """The key is sent both as apikey and as a bearer token."""
        client = StoreClient({**store_config, "headers": {"User-Agent": "craft-cms/1.0"}})

        assert client.headers["apikey"] == "anon-key"
        assert client.headers["Authorization"] == "Bearer anon-key"
        assert client.headers["User-Agent"] == "craft-cms/1.0"

    def test_unknown_collection_rejected(self, store):
        """Only the four managed collections can be addressed."""
        with pytest.raises(ValueError, match="Unknown collection"):
            store.select("orders")

        store._client.request.assert_not_called()


class TestStoreClientSelect:
    """Tests for StoreClient.select()."""

    def test_select_all_ordered(self, store):
        """select() sends select and order parameters."""
        store._client.request.return_value = make_response([{"id": "p1"}])

        rows = store.select("producers", order=("created_at", False))

        args, kwargs = last_call(store)
        assert args == ("GET", "/rest/v1/producers")
        assert kwargs["params"] == {"select": "*", "order": "created_at.desc"}
        assert rows == [{"id": "p1"}]

    def test_select_with_filters_and_join(self, store):
        """Filters become eq. expressions and booleans are lower-cased."""
        store._client.request.return_value = make_response([])

        store.select(
            "animals",
            columns="*,producer:producers(name,slug)",
            filters={"is_available": True, "producer_id": "p1"},
            order=("name", True),
        )

        _, kwargs = last_call(store)
        assert kwargs["params"] == {
            "select": "*,producer:producers(name,slug)",
            "is_available": "eq.true",
            "producer_id": "eq.p1",
            "order": "name.asc",
        }

    def test_null_filter(self, store):
        """A None filter value matches NULL columns."""
        store._client.request.return_value = make_response([])

        store.select("site_images", filters={"description": None})

        _, kwargs = last_call(store)
        assert kwargs["params"]["description"] == "is.null"

    def test_empty_body_returns_empty_list(self, store):
        """A null body is treated as no rows."""
        store._client.request.return_value = make_response(None)

        assert store.select("posts") == []

    def test_fetch_lists_whole_collection(self, store):
        """fetch() selects every row in the requested order, unfiltered."""
        store._client.request.return_value = make_response([{"id": "i1"}])

        rows = store.fetch("site_images", order=("page", True))

        _, kwargs = last_call(store)
        assert kwargs["params"] == {"select": "*", "order": "page.asc"}
        assert rows == [{"id": "i1"}]


class TestStoreClientWrites:
    """Tests for insert, update and delete."""

    def test_insert_returns_stored_row(self, store):
        """insert() posts a one-row array and returns the representation."""
        store._client.request.return_value = make_response([{"id": "a9", "name": "Clover"}])

        row = store.insert("animals", {"name": "Clover"})

        args, kwargs = last_call(store)
        assert args == ("POST", "/rest/v1/animals")
        assert kwargs["json"] == [{"name": "Clover"}]
        assert kwargs["headers"] == {"Prefer": "return=representation"}
        assert row == {"id": "a9", "name": "Clover"}

    def test_update_by_id(self, store):
        """update() patches the row matching the id."""
        store._client.request.return_value = make_response([{"id": "p1", "animals_available": 3}])

        rows = store.update("producers", "p1", {"animals_available": 3})

        args, kwargs = last_call(store)
        assert args == ("PATCH", "/rest/v1/producers")
        assert kwargs["params"] == {"id": "eq.p1"}
        assert kwargs["json"] == {"animals_available": 3}
        assert rows == [{"id": "p1", "animals_available": 3}]

    def test_update_without_match_returns_empty(self, store):
        """update() returns no rows when the id matches nothing."""
        store._client.request.return_value = make_response([])

        assert store.update("producers", "gone", {"animals_available": 1}) == []

    def test_delete_by_id(self, store):
        """delete() sends DELETE with an id filter."""
        store._client.request.return_value = make_response(None)

        store.delete("site_images", "i1")

        args, kwargs = last_call(store)
        assert args == ("DELETE", "/rest/v1/site_images")
        assert kwargs["params"] == {"id": "eq.i1"}

    def test_store_error_propagates(self, store):
        """A failed write raises APIError with the store's message."""
        response = MagicMock()
        response.is_success = False
        response.status_code = 400
        response.json.return_value = {"message": 'null value in column "name"'}
        store._client.request.return_value = response

        with pytest.raises(APIError, match='null value in column "name"'):
            store.insert("producers", {})
