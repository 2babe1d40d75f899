"""Animals collection manager."""

from dataclasses import dataclass
from typing import Any

from craft_cms.clients import StoreClient
from craft_cms.exceptions import RecordValidationError
from schemas.animal import Animal

from .base import CollectionState, StoreCollectionManager
from .counters import ProducerCounterMaintainer


@dataclass
class AnimalsState(CollectionState[Animal]):
    """Animals view state with an optional producer filter."""

    producer_filter: str | None = None

    def clear(self) -> None:
        super().clear()
        self.producer_filter = None


class AnimalsManager(StoreCollectionManager[Animal]):
    """Manages adoptable animals in the record store.

    Every successful create, update or delete is followed by a producer
    counter recompute, since each can change a producer's number of
    available animals.
    """

    collection = "animals"
    model = Animal
    select_columns = "*,producer:producers(name,slug)"
    write_excluded = frozenset({"id", "created_at", "producer"})

    def __init__(
        self,
        store: StoreClient,
        state: AnimalsState | None = None,
        counter: ProducerCounterMaintainer | None = None,
    ):
        super().__init__(store, state if state is not None else AnimalsState())
        self.counter = counter if counter is not None else ProducerCounterMaintainer(store)

    def create(self, fields: dict[str, Any]) -> Animal:
        animal = super().create(fields)
        self.counter.recompute()
        return animal

    def update(self, record_id: str, fields: dict[str, Any]) -> Animal:
        animal = super().update(record_id, fields)
        self.counter.recompute()
        return animal

    def delete(self, record_id: str) -> None:
        super().delete(record_id)
        self.counter.recompute()

    def _normalize(self, fields: dict[str, Any]) -> dict[str, Any]:
        producer_id = fields.get("producer_id")
        if producer_id is None or not str(producer_id).strip():
            raise RecordValidationError("Please select a producer", errors=["producer_id: required"])
        return dict(fields)

    def filter_by_producer(self, producer_id: str | None) -> list[Animal]:
        self.state.producer_filter = producer_id
        return self.visible()

    def clear_filter(self) -> list[Animal]:
        return self.filter_by_producer(None)

    def visible(self) -> list[Animal]:
        """Cached animals after applying the producer filter."""
        producer_id = self.state.producer_filter
        if producer_id is None:
            return list(self.state.items)
        return [a for a in self.state.items if a.producer_id == producer_id]

    def stats(self) -> dict[str, int]:
        animals = self.state.items
        available = sum(1 for a in animals if a.is_available)
        return {
            "total": len(animals),
            "available": available,
            "adopted": len(animals) - available,
        }
