"""Producers collection manager."""

from typing import Any

from schemas.producer import Producer

from .base import StoreCollectionManager, slugify


class ProducersManager(StoreCollectionManager[Producer]):
    """Manages fibre producers in the record store.

    Deleting a producer relies on the store to cascade-delete its animals.

    Example:
        with StoreClient(config) as store:
            producers = ProducersManager(store)
            producers.load_all()
            producer = producers.create({"name": "Hill Farm"})
    """

    collection = "producers"
    model = Producer
    write_excluded = frozenset({"id", "created_at", "animals_available"})

    def _normalize(self, fields: dict[str, Any]) -> dict[str, Any]:
        data = dict(fields)
        if not data.get("slug"):
            data["slug"] = slugify(data.get("name") or "")
        return data

    def active_choices(self) -> list[tuple[str, str]]:
        """(id, name) pairs of active producers, ordered by name."""
        rows = self.store.select(
            self.collection,
            columns="id,name",
            filters={"is_active": True},
            order=("name", True),
        )
        return [(row["id"], row["name"]) for row in rows]

    def stats(self) -> dict[str, int]:
        producers = self.state.items
        return {
            "total": len(producers),
            "active": sum(1 for p in producers if p.is_active),
            "animals": sum(p.animals_available or 0 for p in producers),
        }
