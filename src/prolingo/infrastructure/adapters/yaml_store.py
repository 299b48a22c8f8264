"""
YAML Review Repository: infrastructure adapter for a local review file.

Implements ReviewRepository on a single YAML document:

    version: 1
    items:
      - id: item_01J...
        last_reviewed: "2026-10-19T08:00:00+00:00"
        next_review: "2026-10-25T08:00:00+00:00"
        ease_factor: 2.6
        interval: 6
        consecutive_correct: 2
"""

import logging
import os
import tempfile
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import yaml

from prolingo.domain.exceptions import StoreError
from prolingo.domain.review.models import ReviewItem
from prolingo.domain.review.ports import ReviewRepository

logger = logging.getLogger(__name__)

STORE_VERSION = 1


class YamlReviewRepository(ReviewRepository):
    """
    Keeps review items in a YAML file.

    The file is read on every call and rewritten atomically on every save,
    so the store is always consistent on disk.
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    async def get_items(self, ids: list[str] | None = None) -> list[ReviewItem]:
        items = self._load()
        if ids is None:
            return items
        wanted = set(ids)
        return [item for item in items if item.id in wanted]

    async def get_item(self, item_id: str) -> ReviewItem | None:
        for item in self._load():
            if item.id == item_id:
                return item
        return None

    async def save_item(self, item: ReviewItem) -> None:
        items = self._load()
        for idx, existing in enumerate(items):
            if existing.id == item.id:
                items[idx] = item
                break
        else:
            items.append(item)
        self._dump(items)

    async def delete_item(self, item_id: str) -> bool:
        items = self._load()
        kept = [item for item in items if item.id != item_id]
        if len(kept) == len(items):
            return False
        self._dump(kept)
        return True

    # ---------- File I/O ----------

    def _load(self) -> list[ReviewItem]:
        if not self.path.exists():
            return []

        try:
            data = yaml.safe_load(self.path.read_text(encoding="utf-8"))
        except yaml.YAMLError as e:
            raise StoreError(f"Could not parse review store {self.path}: {e}") from e
        except OSError as e:
            raise StoreError(f"Could not read review store {self.path}: {e}") from e

        if data is None:
            return []
        if not isinstance(data, dict) or not isinstance(data.get("items", []), list):
            raise StoreError(f"Review store {self.path} has no 'items' list")

        items: list[ReviewItem] = []
        for raw in data.get("items") or []:
            items.append(_item_from_dict(raw, self.path))
        return items

    def _dump(self, items: list[ReviewItem]) -> None:
        payload = {"version": STORE_VERSION, "items": [_item_to_dict(i) for i in items]}
        text = yaml.safe_dump(payload, sort_keys=False, allow_unicode=True)

        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=f".{self.path.name}.")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(text)
            os.replace(tmp_name, self.path)
        except OSError as e:
            Path(tmp_name).unlink(missing_ok=True)
            raise StoreError(f"Could not write review store {self.path}: {e}") from e

        logger.debug(f"Wrote {len(items)} items to {self.path}")


def _item_to_dict(item: ReviewItem) -> dict[str, Any]:
    return {
        "id": item.id,
        "last_reviewed": item.last_reviewed.isoformat(),
        "next_review": item.next_review.isoformat(),
        "ease_factor": item.ease_factor,
        "interval": item.interval,
        "consecutive_correct": item.consecutive_correct,
    }


def _item_from_dict(raw: Any, path: Path) -> ReviewItem:
    if not isinstance(raw, dict):
        raise StoreError(f"Expected a mapping in {path}, got {type(raw).__name__}")
    try:
        return ReviewItem(
            id=str(raw["id"]),
            last_reviewed=_parse_time(raw["last_reviewed"]),
            next_review=_parse_time(raw["next_review"]),
            ease_factor=float(raw["ease_factor"]),
            interval=int(raw["interval"]),
            consecutive_correct=int(raw["consecutive_correct"]),
        )
    except (KeyError, TypeError, ValueError) as e:
        raise StoreError(f"Malformed review item in {path}: {raw!r} ({e})") from e


def _parse_time(value: Any) -> datetime:
    # PyYAML turns unquoted timestamps into datetime objects already.
    dt = value if isinstance(value, datetime) else datetime.fromisoformat(str(value))
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt
