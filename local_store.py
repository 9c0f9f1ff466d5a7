"""
Device-local history: one JSON file per (user, collection).

Every mutation reloads the whole collection, applies the change and writes the
file back in one piece. There is a single writer per profile, so no locking.
"""
import json
import logging
import os
import tempfile
from typing import List, Optional
from urllib.parse import quote

from errors import PersistenceFailure

logger = logging.getLogger(__name__)


class LocalCollection:
    """An ordered list of JSON objects keyed by their "id" field."""

    def __init__(self, path: str) -> None:
        self.path = path

    def _load(self) -> List[dict]:
        if not os.path.exists(self.path):
            return []
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.exception("Could not read local collection %s", self.path)
            raise PersistenceFailure(f"could not read {self.path}: {e}") from e
        if not isinstance(data, list):
            raise PersistenceFailure(f"{self.path} does not contain a list")
        return data

    def _save(self, items: List[dict]) -> None:
        directory = os.path.dirname(self.path) or "."
        tmp_path = None
        try:
            os.makedirs(directory, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(dir=directory, suffix=".tmp")
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(items, f, indent=2, default=str)
            os.replace(tmp_path, self.path)
        except (OSError, TypeError, ValueError) as e:
            logger.exception("Could not write local collection %s", self.path)
            if tmp_path is not None and os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise PersistenceFailure(f"could not write {self.path}: {e}") from e

    def list(self) -> List[dict]:
        return self._load()

    def get(self, item_id: str) -> Optional[dict]:
        for item in self._load():
            if item.get("id") == item_id:
                return item
        return None

    def append(self, item: dict) -> dict:
        if "id" not in item:
            raise ValueError("items need an id")
        items = self._load()
        items.append(item)
        self._save(items)
        return item

    def remove(self, item_id: str) -> bool:
        items = self._load()
        kept = [item for item in items if item.get("id") != item_id]
        if len(kept) == len(items):
            return False
        self._save(kept)
        return True

    def update(self, item_id: str, changes: dict) -> Optional[dict]:
        items = self._load()
        for i, item in enumerate(items):
            if item.get("id") == item_id:
                items[i] = {**item, **changes, "id": item_id}
                self._save(items)
                return items[i]
        return None

    def replace_all(self, items: List[dict]) -> None:
        self._save(list(items))


class LocalHistoryStore:
    """Collections for one user profile under a base directory."""

    def __init__(self, base_dir: str, user_id: str) -> None:
        self.base_dir = base_dir
        self.user_id = user_id

    @staticmethod
    def _safe_name(name: str) -> str:
        """Percent-encode a name into one path segment; distinct names stay distinct."""
        if not name or not name.strip("."):
            raise ValueError(f"invalid store name: {name!r}")
        return quote(name, safe="")

    def collection(self, name: str) -> LocalCollection:
        path = os.path.join(self.base_dir, self._safe_name(self.user_id), f"{self._safe_name(name)}.json")
        return LocalCollection(path)
