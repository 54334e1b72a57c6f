"""
Generation history, most recent first, capped to a fixed number of entries.
"""
import logging
from typing import List, Optional

from .config import get_history_limit
from .models import Engine, HistoryItem
from .storage import MemoryStorage

logger = logging.getLogger(__name__)


class HistoryStore:
    """
    Read-modify-write wrapper over a persistence port.

    Every mutation loads the full list and saves the full list back; there
    are no partial updates.
    """

    def __init__(self, storage=None, limit: Optional[int] = None):
        self.storage = storage if storage is not None else MemoryStorage()
        self.limit = limit if limit is not None else get_history_limit()

    def items(self) -> List[HistoryItem]:
        records = self.storage.load()
        if not isinstance(records, list):
            logger.error("❌ History record is not a list, ignoring it")
            return []
        items = []
        for record in records:
            try:
                items.append(HistoryItem.from_dict(record))
            except (KeyError, TypeError, ValueError) as e:
                logger.warning(f"⚠️ Skipping unreadable history record: {e}")
        return items

    def get(self, item_id: str) -> Optional[HistoryItem]:
        for item in self.items():
            if item.id == item_id:
                return item
        return None

    def _save(self, items: List[HistoryItem]) -> None:
        self.storage.save([item.to_dict() for item in items])

    def add(self, item: HistoryItem) -> List[HistoryItem]:
        updated = [item] + self.items()
        updated = updated[:self.limit]
        try:
            self._save(updated)
        except OSError as e:
            # Storage full: keep just the newest entry
            logger.warning(f"⚠️ Could not save full history ({e}), keeping only the latest item")
            updated = [item]
            self._save(updated)
        logger.info(f"✅ History saved ({len(updated)} items)")
        return updated

    def record(self, original_image: str, generated_image: str, prompt: str, engine: Engine,
               resolution: str, aspect_ratio: str) -> HistoryItem:
        item = HistoryItem(
            original_image=original_image,
            generated_image=generated_image,
            prompt=prompt,
            engine=engine,
            resolution=resolution,
            aspect_ratio=aspect_ratio,
        )
        self.add(item)
        return item

    def delete(self, item_id: str) -> List[HistoryItem]:
        items = self.items()
        updated = [item for item in items if item.id != item_id]
        if len(updated) != len(items):
            self._save(updated)
        return updated

    def clear(self) -> None:
        self.storage.save([])
