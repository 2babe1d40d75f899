"""Producer animal counter maintenance.

``producers.animals_available`` is a denormalized count of each producer's
available animals. It is recomputed by a full scan of the animals collection
after animal writes rather than updated alongside them, so it is only
eventually consistent with the animals collection.
"""

import logging
from collections import Counter

from craft_cms.clients import StoreClient

logger = logging.getLogger(__name__)


class ProducerCounterMaintainer:
    """Recomputes ``animals_available`` for producers.

    Args:
        store: Record store client
        reset_stale: When True, every producer is considered and producers
            without available animals are set to 0. When False, only
            producers with at least one available animal are written, so a
            producer whose last animal became unavailable keeps its old count.

    Example:
        maintainer = ProducerCounterMaintainer(store)
        counts = maintainer.recompute()
    """

    def __init__(self, store: StoreClient, reset_stale: bool = True):
        self.store = store
        self.reset_stale = reset_stale

    def count_available(self) -> dict[str, int]:
        """Count available animals per producer id."""
        rows = self.store.select(
            "animals", columns="producer_id", filters={"is_available": True}
        )
        return dict(Counter(row["producer_id"] for row in rows))

    def recompute(self) -> dict[str, int]:
        """Recount and write back producer counters.

        A failing read or write aborts the pass and propagates; counters
        already written by the pass stay written.

        Returns:
            Mapping of producer id to the count it should now hold
        """
        counts = self.count_available()

        if self.reset_stale:
            producers = self.store.select("producers", columns="id,animals_available")
            targets = {p["id"]: counts.get(p["id"], 0) for p in producers}
            stored = {p["id"]: p.get("animals_available") for p in producers}
            pending = {pid: n for pid, n in targets.items() if stored[pid] != n}
        else:
            targets = counts
            pending = counts

        for producer_id, count in pending.items():
            # Producers deleted since the scan match no row; the update is a no-op.
            self.store.update("producers", producer_id, {"animals_available": count})
            logger.debug(f"Producer {producer_id}: animals_available={count}")

        logger.info(
            f"Recounted animals for {len(targets)} producers ({len(pending)} updated)"
        )
        return targets
