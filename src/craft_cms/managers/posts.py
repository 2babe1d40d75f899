"""Posts collection manager.

Posts are kept in local storage as one JSON array under a single key; they
never touch the record store, so none of these operations has a network
failure mode.
"""

import json
import logging
import secrets
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from craft_cms.exceptions import (
    LocalStorageError,
    PostImportError,
    RecordNotFoundError,
    RecordValidationError,
)
from schemas.post import Post

from .base import CollectionManager, CollectionState, format_errors, slugify, utc_now_iso
from .local_storage import LocalStorage

logger = logging.getLogger(__name__)

STORAGE_KEY = "craftClubPosts"
EXPORT_PREFIX = "craft-club-posts"


def generate_id() -> str:
    return secrets.token_hex(8)


def _sort_key(post: Post) -> datetime:
    try:
        dt = datetime.fromisoformat(post.date)
    except ValueError:
        return datetime.min.replace(tzinfo=timezone.utc)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def newest_first(posts: list[Post]) -> list[Post]:
    return sorted(posts, key=_sort_key, reverse=True)


def parse_stored_post(item: Any) -> Post:
    """Validate one post in its stored (camelCase) shape.

    Validation is strict and by alias only, so a stored post is never
    coerced or renamed: ``"readTime": "6"`` is refused rather than turned
    into 6, and a snake_case ``updated_at`` key is kept as an extra field.
    Re-serializing the result with ``by_alias`` and ``exclude_unset``
    reproduces ``item``.
    """
    return Post.model_validate(item, strict=True, by_alias=True, by_name=False)


class PostsManager(CollectionManager[Post]):
    """Manages journal posts kept in local storage.

    The cache keeps posts in stored order so that exports reproduce the
    stored array; listings are sorted newest first by ``date``.

    Example:
        posts = PostsManager(LocalStorage(Path("./workspace/local-storage.json")))
        posts.load_all()
        Path("posts.json").write_text(posts.export_json())
    """

    collection = "posts"

    def __init__(
        self,
        storage: LocalStorage,
        state: CollectionState[Post] | None = None,
        seed_samples: bool = True,
    ):
        super().__init__(state)
        self.storage = storage
        self.seed_samples = seed_samples

    def load_all(self) -> list[Post]:
        raw = self.storage.get_item(STORAGE_KEY)
        if raw is None:
            posts = sample_posts() if self.seed_samples else []
            self.state.replace(posts)
            self._persist()
            logger.info(f"Initialized local posts with {len(posts)} sample posts")
        else:
            try:
                posts = self._parse(raw)
            except PostImportError as e:
                raise LocalStorageError(f"Stored posts are unreadable: {e.message}") from e
            self.state.replace(posts)
        return newest_first(self.state.items)

    def create(self, fields: dict[str, Any]) -> Post:
        self._ensure_loaded()
        data = self._normalize(fields)
        data["id"] = generate_id()
        data["date"] = utc_now_iso()
        post = self._validate(data)

        self.state.items.append(post)
        self._persist()
        logger.info(f"Created post {post.id}: {post.title}")
        return post

    def update(self, record_id: str, fields: dict[str, Any]) -> Post:
        self._ensure_loaded()
        existing = self.state.find(record_id)
        if existing is None:
            raise RecordNotFoundError(self.collection, record_id)

        data = self._normalize(fields)
        data["id"] = record_id
        data["date"] = existing.date
        data["updatedAt"] = utc_now_iso()
        post = self._validate(data)

        index = self.state.items.index(existing)
        self.state.items[index] = post
        self._persist()
        logger.info(f"Updated post {record_id}")
        return post

    def delete(self, record_id: str) -> None:
        self._ensure_loaded()
        if self.state.find(record_id) is None:
            raise RecordNotFoundError(self.collection, record_id)
        self.state.items = [p for p in self.state.items if p.id != record_id]
        self._persist()
        logger.info(f"Deleted post {record_id}")

    def published(self) -> list[Post]:
        return newest_first([p for p in self.state.items if p.status == "published"])

    def by_category(self, category: str) -> list[Post]:
        """Published posts in a category, newest first."""
        return [p for p in self.published() if p.category == category]

    def by_slug(self, slug: str) -> Post | None:
        for post in self.state.items:
            if post.slug == slug:
                return post
        return None

    def stats(self) -> dict[str, int]:
        posts = self.state.items
        return {
            "total": len(posts),
            "published": sum(1 for p in posts if p.status == "published"),
            "drafts": sum(1 for p in posts if p.status == "draft"),
        }

    def export_json(self) -> str:
        """Render the stored posts array as JSON."""
        self._ensure_loaded()
        return json.dumps(self._serialize(), indent=2)

    def export_to(self, destination: Path) -> Path:
        """Write the posts export to a file.

        Args:
            destination: A file path, or a directory in which a timestamped
                ``craft-club-posts-<epoch-ms>.json`` file is created

        Returns:
            Path of the written file
        """
        if destination.is_dir():
            stamp = int(datetime.now(timezone.utc).timestamp() * 1000)
            destination = destination / f"{EXPORT_PREFIX}-{stamp}.json"
        destination.write_text(self.export_json())
        logger.info(f"Exported {len(self.state.items)} posts to {destination}")
        return destination

    def import_json(self, text: str) -> int:
        """Replace all posts with the array in ``text``.

        Nothing changes unless every post in the array is valid.

        Returns:
            Number of imported posts

        Raises:
            PostImportError: If the text is not a JSON array of valid posts
        """
        try:
            raw = json.loads(text)
        except json.JSONDecodeError as e:
            raise PostImportError(f"Posts file is not valid JSON: {e}") from e

        posts = self._parse(raw)
        self.state.replace(posts)
        self.end_edit()
        self._persist()
        logger.info(f"Imported {len(posts)} posts")
        return len(posts)

    def import_file(self, source: Path) -> int:
        try:
            text = source.read_text()
        except OSError as e:
            raise PostImportError(f"Cannot read {source}: {e}") from e
        return self.import_json(text)

    def _ensure_loaded(self) -> None:
        if not self.state.loaded:
            self.load_all()

    def _normalize(self, fields: dict[str, Any]) -> dict[str, Any]:
        data = dict(fields)
        data.pop("updated_at", None)
        if not data.get("slug"):
            data["slug"] = slugify(data.get("title") or "")
        return data

    def _validate(self, data: dict[str, Any]) -> Post:
        try:
            post = Post.model_validate(data)
        except PydanticValidationError as e:
            raise RecordValidationError(
                "Invalid post", errors=format_errors(e)
            ) from e
        # Only imported posts may lack a reading time.
        if post.read_time is None:
            raise RecordValidationError("Invalid post", errors=["readTime: required"])
        return post

    def _parse(self, raw: Any) -> list[Post]:
        if not isinstance(raw, list):
            raise PostImportError("Posts file must contain a JSON array")
        try:
            return [parse_stored_post(item) for item in raw]
        except PydanticValidationError as e:
            raise PostImportError(
                f"Posts file contains an invalid post: {'; '.join(format_errors(e))}"
            ) from e

    def _serialize(self) -> list[dict[str, Any]]:
        return [
            post.model_dump(mode="json", by_alias=True, exclude_unset=True)
            for post in self.state.items
        ]

    def _persist(self) -> None:
        self.storage.set_item(STORAGE_KEY, self._serialize())


def sample_posts() -> list[Post]:
    """Starter posts written to empty local storage."""
    samples = [
        {
            "id": "sample-1",
            "title": "Slow Stitching as Meditation: Finding Peace in Every Thread",
            "slug": "slow-stitching-meditation",
            "category": "slow-living",
            "excerpt": (
                "In a world that demands constant productivity, there's something "
                "radical about sitting down with needle and thread, making one "
                "stitch at a time."
            ),
            "content": (
                "# Slow Stitching as Meditation\n\n"
                "When you slow stitch, you're drawn into the present moment. "
                "Each stitch is a small meditation: thread through fabric, pull "
                "gently, repeat.\n\n"
                "## Getting Started\n\n"
                "A needle, thread, and a scrap of fabric are enough. Start with a "
                "simple running stitch."
            ),
            "image": None,
            "author": "Elena Rosetti",
            "readTime": 6,
            "status": "published",
            "date": "2024-12-01T10:00:00.000Z",
        },
        {
            "id": "sample-2",
            "title": "Natural Dyes from Your Kitchen: A Beginner's Guide",
            "slug": "natural-dyes-kitchen-guide",
            "category": "techniques",
            "excerpt": (
                "Onion skins, avocado pits, and black beans: your kitchen scraps "
                "hold beautiful colors waiting to be discovered."
            ),
            "content": (
                "# Natural Dyes from Your Kitchen\n\n"
                "Onion skins give yellows and orange-browns, avocado pits a dusty "
                "pink, black bean water blue-purple hues.\n\n"
                "## The Basic Process\n\n"
                "1. Wash the fabric\n2. Simmer scraps for 1-2 hours\n3. Strain\n"
                "4. Add a fixative\n5. Simmer the fabric for an hour\n6. Rinse and dry"
            ),
            "image": None,
            "author": "Maya Chen",
            "readTime": 8,
            "status": "published",
            "date": "2024-11-28T14:00:00.000Z",
        },
        {
            "id": "sample-3",
            "title": "Your First Crochet Project: The Granny Square",
            "slug": "first-crochet-granny-square",
            "category": "tutorials",
            "excerpt": (
                "Every master was once a beginner. Start your crochet journey with "
                "this timeless, forgiving pattern."
            ),
            "content": (
                "# Your First Crochet Project: The Granny Square\n\n"
                "You'll need worsted weight yarn, a 5mm hook, scissors and "
                "patience.\n\n"
                "Your first square will probably be wonky. Make it anyway, then "
                "make another."
            ),
            "image": None,
            "author": "Elena Rosetti",
            "readTime": 12,
            "status": "published",
            "date": "2024-11-25T09:00:00.000Z",
        },
    ]
    return [Post.model_validate(sample) for sample in samples]
