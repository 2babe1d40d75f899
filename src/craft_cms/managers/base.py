"""Base classes for collection managers.

A manager pairs a collection with an explicit state object holding the
in-memory cache and the "currently editing" pointer. The cache is a
disposable read copy rebuilt on every load; the backing store stays the
source of truth.
"""

import logging
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Generic, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from craft_cms.clients import StoreClient, ValidationError
from craft_cms.exceptions import RecordNotFoundError, RecordValidationError

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def slugify(text: str) -> str:
    """Derive a URL-safe slug: lower-case, non-alphanumeric runs become '-'."""
    slug = re.sub(r"[^a-z0-9]+", "-", text.lower())
    return slug.strip("-")


def format_errors(error: PydanticValidationError) -> list[str]:
    """Flatten pydantic errors into "field: message" strings."""
    return [
        f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
        for err in error.errors()
    ]


@dataclass
class CollectionState(Generic[T]):
    """In-memory view state for one collection.

    Attributes:
        items: Cached records in the order they were loaded
        editing_id: Id of the record open for editing, None for a new record
        loaded: Whether the cache reflects a completed load
    """

    items: list[T] = field(default_factory=list)
    editing_id: str | None = None
    loaded: bool = False

    def replace(self, items: list[T]) -> None:
        self.items = list(items)
        self.loaded = True

    def clear(self) -> None:
        self.items = []
        self.editing_id = None
        self.loaded = False

    def find(self, record_id: str) -> T | None:
        for item in self.items:
            if getattr(item, "id", None) == record_id:
                return item
        return None


class CollectionManager(ABC, Generic[T]):
    """Abstract manager for one collection.

    Subclasses implement load_all/create/update/delete against their
    backing store. The editing workflow (begin_new, begin_edit, save,
    end_edit) is shared.
    """

    collection: str = ""

    def __init__(self, state: CollectionState[T] | None = None):
        self.state: CollectionState[T] = state if state is not None else CollectionState()

    @property
    def items(self) -> list[T]:
        return self.state.items

    @property
    def editing(self) -> T | None:
        """The record currently open for editing, if any."""
        if self.state.editing_id is None:
            return None
        return self.state.find(self.state.editing_id)

    @abstractmethod
    def load_all(self) -> list[T]:
        """Fetch the collection, replace the cache and return the listing."""
        pass

    @abstractmethod
    def create(self, fields: dict[str, Any]) -> T:
        pass

    @abstractmethod
    def update(self, record_id: str, fields: dict[str, Any]) -> T:
        pass

    @abstractmethod
    def delete(self, record_id: str) -> None:
        pass

    def clear(self) -> None:
        """Drop the cache and editing pointer."""
        self.state.clear()

    def begin_new(self) -> None:
        self.state.editing_id = None

    def begin_edit(self, record_id: str) -> T:
        """Open a cached record for editing.

        Raises:
            RecordNotFoundError: If the record is not in the cache
        """
        record = self.state.find(record_id)
        if record is None:
            raise RecordNotFoundError(self.collection, record_id)
        self.state.editing_id = record_id
        return record

    def end_edit(self) -> None:
        self.state.editing_id = None

    def save(self, fields: dict[str, Any]) -> T:
        """Create a record, or update the one open for editing."""
        if self.state.editing_id is None:
            record = self.create(fields)
        else:
            record = self.update(self.state.editing_id, fields)
        self.end_edit()
        return record


class StoreCollectionManager(CollectionManager[T]):
    """Manager for a collection held in the hosted record store.

    Every write is validated against ``model`` before the store is touched.
    After a successful write the collection is reloaded so the cache
    mirrors the store.
    """

    model: type[T]
    select_columns: str = "*"
    order: tuple[str, bool] = ("created_at", False)
    # Columns the store or other processes own; never sent on writes.
    write_excluded: frozenset[str] = frozenset({"id", "created_at"})

    def __init__(self, store: StoreClient, state: CollectionState[T] | None = None):
        super().__init__(state)
        self.store = store

    def load_all(self) -> list[T]:
        rows = self.store.fetch(
            self.collection, columns=self.select_columns, order=self.order
        )
        self.state.replace(self._validate_rows(rows))
        logger.info(f"Loaded {len(self.state.items)} {self.collection}")
        return list(self.state.items)

    def create(self, fields: dict[str, Any]) -> T:
        payload = self._prepare(fields)
        row = self.store.insert(self.collection, payload)
        logger.info(f"Created {self.collection} record {row.get('id')}")
        return self._after_write(row)

    def update(self, record_id: str, fields: dict[str, Any]) -> T:
        payload = self._prepare(fields)
        rows = self.store.update(self.collection, record_id, payload)
        if not rows:
            raise RecordNotFoundError(self.collection, record_id)
        logger.info(f"Updated {self.collection} record {record_id}")
        return self._after_write(rows[0])

    def delete(self, record_id: str) -> None:
        self.store.delete(self.collection, record_id)
        logger.info(f"Deleted {self.collection} record {record_id}")
        self.load_all()

    def _normalize(self, fields: dict[str, Any]) -> dict[str, Any]:
        """Hook for subclasses to check or fill fields before validation."""
        return dict(fields)

    def _prepare(self, fields: dict[str, Any]) -> dict[str, Any]:
        """Validate form fields and build the row payload to send.

        Raises:
            RecordValidationError: If the fields do not form a valid record
        """
        data = self._normalize(fields)
        try:
            record = self.model.model_validate(data)
        except PydanticValidationError as e:
            raise RecordValidationError(
                f"Invalid {self.collection} record",
                errors=format_errors(e),
            ) from e

        payload = record.model_dump(mode="json", exclude=set(self.write_excluded))
        payload["updated_at"] = utc_now_iso()
        return payload

    def _after_write(self, row: dict[str, Any]) -> T:
        self.load_all()
        cached = self.state.find(row.get("id"))
        if cached is not None:
            return cached
        return self._validate_rows([row])[0]

    def _validate_rows(self, rows: list[dict[str, Any]]) -> list[T]:
        """Validate store rows against the collection's schema.

        Raises:
            ValidationError: If any row fails validation
        """
        validated: list[T] = []

        for i, row in enumerate(rows):
            try:
                validated.append(self.model.model_validate(row))
            except PydanticValidationError as e:
                row_id = row.get("id", f"index {i}")
                raise ValidationError(
                    f"{self.collection} row {row_id} failed validation",
                    errors=[str(err) for err in e.errors()],
                ) from e

        return validated
