"""
Persistence ports for client-side state (history list, saved credentials).

Anything with load() and save(value) works; the two implementations here
keep a JSON document on disk or in memory.
"""
import copy
import json
import logging
import os
from typing import Any, Callable

logger = logging.getLogger(__name__)


class MemoryStorage:
    def __init__(self, initial: Any = None, default: Callable[[], Any] = list):
        self._default = default
        self._value = copy.deepcopy(initial) if initial is not None else None

    def load(self) -> Any:
        if self._value is None:
            return self._default()
        return copy.deepcopy(self._value)

    def save(self, value: Any) -> None:
        self._value = copy.deepcopy(value)


class JsonFileStorage:
    """One JSON document per file; a missing or unreadable file loads as the default"""

    def __init__(self, path: str, default: Callable[[], Any] = list):
        self.path = path
        self._default = default

    def load(self) -> Any:
        if not os.path.exists(self.path):
            return self._default()
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                return json.load(f)
        except (OSError, ValueError) as e:
            logger.error(f"❌ Failed to parse {self.path}: {e}")
            return self._default()

    def save(self, value: Any) -> None:
        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        tmp_path = f"{self.path}.tmp"
        with open(tmp_path, 'w', encoding='utf-8') as f:
            json.dump(value, f, ensure_ascii=False)
        os.replace(tmp_path, self.path)
