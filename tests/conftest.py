"""Pytest fixtures for craft-cms tests."""

import copy
import json

import pytest

from craft_cms.managers import LocalStorage


class FakeStore:
    """In-memory stand-in for StoreClient.

    Implements the select/insert/update/delete surface the managers use,
    including the animals -> producer embed and the store-side cascade from
    producers to their animals. Every call is recorded in ``calls``.
    """

    def __init__(self, tables: dict[str, list[dict]] | None = None):
        self.tables: dict[str, list[dict]] = {
            "posts": [],
            "producers": [],
            "animals": [],
            "site_images": [],
        }
        for name, rows in (tables or {}).items():
            self.tables[name] = [copy.deepcopy(row) for row in rows]
        self.calls: list[tuple] = []
        self.closed = False
        self._sequence = 0

    def _next(self) -> int:
        self._sequence += 1
        return self._sequence

    def select(self, collection, columns="*", filters=None, order=None):
        self.calls.append(("select", collection, columns, filters))
        rows = [
            row
            for row in self.tables[collection]
            if all(row.get(k) == v for k, v in (filters or {}).items())
        ]
        if order is not None:
            column, ascending = order
            rows = sorted(rows, key=lambda r: r.get(column) or "", reverse=not ascending)
        return [self._project(collection, row, columns) for row in rows]

    def fetch(self, collection, columns="*", order=None):
        return self.select(collection, columns=columns, order=order)

    def _project(self, collection, row, columns):
        if columns.startswith("*"):
            result = copy.deepcopy(row)
            if collection == "animals" and "producer:producers" in columns:
                producer = next(
                    (p for p in self.tables["producers"] if p["id"] == row.get("producer_id")),
                    None,
                )
                result["producer"] = (
                    {"name": producer["name"], "slug": producer["slug"]} if producer else None
                )
            return result
        return {column: row.get(column) for column in columns.split(",")}

    def insert(self, collection, record):
        self.calls.append(("insert", collection, record))
        n = self._next()
        row = copy.deepcopy(record)
        row.setdefault("id", f"{collection}-{n}")
        row.setdefault("created_at", f"2026-01-01T00:00:{n:02d}+00:00")
        if collection == "producers":
            row.setdefault("animals_available", 0)
        self.tables[collection].append(row)
        return copy.deepcopy(row)

    def update(self, collection, record_id, changes):
        self.calls.append(("update", collection, record_id, changes))
        updated = []
        for row in self.tables[collection]:
            if row.get("id") == record_id:
                row.update(copy.deepcopy(changes))
                updated.append(copy.deepcopy(row))
        return updated

    def delete(self, collection, record_id):
        self.calls.append(("delete", collection, record_id))
        self.tables[collection] = [
            row for row in self.tables[collection] if row.get("id") != record_id
        ]
        if collection == "producers":
            self.tables["animals"] = [
                row for row in self.tables["animals"] if row.get("producer_id") != record_id
            ]

    def ops(self, operation, collection=None):
        """Recorded calls of one operation, optionally for one collection."""
        return [
            call
            for call in self.calls
            if call[0] == operation and (collection is None or call[1] == collection)
        ]

    def close(self):
        self.closed = True

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False


def make_producer(producer_id, name, animals_available=0, **overrides):
    row = {
        "id": producer_id,
        "name": name,
        "slug": name.lower().replace(" ", "-"),
        "tagline": "Wool from the hills",
        "location": "Connemara",
        "country": "Ireland",
        "description": "A small family flock.",
        "story": None,
        "avatar_url": None,
        "hero_image_url": None,
        "rating": 4.8,
        "review_count": 12,
        "is_sustainable": True,
        "is_organic": False,
        "is_animal_welfare_approved": True,
        "is_heritage_breed": False,
        "shearing_frequency": "Twice a year",
        "avg_yield": "2-3 kg",
        "wool_type": "Fine",
        "processing_options": ["Raw fleece", "Roving"],
        "is_active": True,
        "animals_available": animals_available,
        "created_at": "2025-06-01T10:00:00+00:00",
        "updated_at": None,
    }
    row.update(overrides)
    return row


def make_animal(animal_id, producer_id, name, is_available=True, **overrides):
    row = {
        "id": animal_id,
        "producer_id": producer_id,
        "name": name,
        "animal_type": "Sheep",
        "breed": "Merino",
        "age": 3,
        "color": "White",
        "personality": "Curious",
        "image_url": None,
        "price_per_year": 120.0,
        "currency": "EUR",
        "is_available": is_available,
        "is_featured": False,
        "created_at": "2025-07-01T10:00:00+00:00",
        "updated_at": None,
    }
    row.update(overrides)
    return row


@pytest.fixture
def producer_rows():
    return [
        make_producer("p1", "Hill Farm", animals_available=5),
        make_producer("p2", "River Croft", animals_available=1),
        make_producer("p3", "Moor End", animals_available=0, is_active=False),
    ]


@pytest.fixture
def animal_rows():
    return [
        make_animal("a1", "p1", "Clover"),
        make_animal("a2", "p1", "Bramble"),
        make_animal("a3", "p2", "Willow", is_available=False),
    ]


@pytest.fixture
def fake_store(producer_rows, animal_rows):
    """Fake store seeded with three producers and three animals."""
    return FakeStore({"producers": producer_rows, "animals": animal_rows})


@pytest.fixture
def empty_store():
    return FakeStore()


@pytest.fixture
def sample_post_record():
    """A post as stored in local storage."""
    return {
        "id": "post-1",
        "title": "Spinning on a Drop Spindle",
        "slug": "spinning-drop-spindle",
        "category": "tutorials",
        "excerpt": "Your first yarn in an afternoon.",
        "content": "# Spinning\n\nStart with a top-whorl spindle.",
        "image": None,
        "author": "Maya Chen",
        "readTime": 7,
        "status": "published",
        "date": "2025-03-02T09:00:00.000Z",
    }


@pytest.fixture
def storage(tmp_path):
    return LocalStorage(tmp_path / "local-storage.json")


@pytest.fixture
def posts_file(tmp_path, sample_post_record):
    """JSON file holding a two-post array."""
    draft = dict(sample_post_record)
    draft.update(
        id="post-2",
        title="Mending with Sashiko",
        slug="mending-sashiko",
        category="techniques",
        status="draft",
        date="2025-04-10T12:00:00.000Z",
    )
    path = tmp_path / "posts.json"
    path.write_text(json.dumps([sample_post_record, draft], indent=2))
    return path
