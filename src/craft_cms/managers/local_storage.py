"""File-backed key/value storage for locally kept collections."""

import json
import logging
from pathlib import Path
from typing import Any

from craft_cms.exceptions import LocalStorageError

logger = logging.getLogger(__name__)


class LocalStorage:
    """A JSON object file mapping keys to JSON values.

    The whole file is rewritten on every change.

    Example:
        storage = LocalStorage(Path("./workspace/local-storage.json"))
        storage.set_item("craftClubPosts", [])
    """

    def __init__(self, path: Path):
        self.path = path

    def __repr__(self) -> str:
        return f"LocalStorage('{self.path}')"

    def _read(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            with self.path.open("r") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise LocalStorageError(f"Local storage {self.path} is not valid JSON: {e}") from e
        if not isinstance(data, dict):
            raise LocalStorageError(f"Local storage {self.path} must hold a JSON object")
        return data

    def _write(self, data: dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("w+") as f:
            json.dump(data, fp=f, indent=2)

    def get_item(self, key: str) -> Any | None:
        return self._read().get(key)

    def set_item(self, key: str, value: Any) -> None:
        data = self._read()
        data[key] = value
        self._write(data)
        logger.debug(f"Stored {key} in {self.path}")
