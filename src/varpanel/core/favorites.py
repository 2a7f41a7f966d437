"""
Favorites storage.

The tree only asks whether a (variable, value) pair is a favorite; where the
favorites live is up to the store. A JSON file store keeps the
`{variable: [values]}` layout used by browser-local storage.
"""

import json
import logging
from pathlib import Path
from typing import Dict, List, Optional, Protocol

logger = logging.getLogger(__name__)


class FavoritesStore(Protocol):
    def is_added(self, name: Optional[str], value: str) -> bool:
        ...

    def add(self, name: Optional[str], value: str) -> None:
        ...

    def remove(self, name: Optional[str], value: str) -> None:
        ...


class InMemoryFavorites:
    """Favorites kept in a dict of variable name -> values."""

    def __init__(self, items: Optional[Dict[str, List[str]]] = None):
        self.items: Dict[str, List[str]] = {
            name: list(values) for name, values in (items or {}).items()
        }

    def is_added(self, name: Optional[str], value: str) -> bool:
        if not name or name not in self.items:
            return False
        return value in self.items[name]

    def add(self, name: Optional[str], value: str) -> None:
        if not name:
            return
        values = self.items.setdefault(name, [])
        if value not in values:
            values.append(value)

    def remove(self, name: Optional[str], value: str) -> None:
        if not name:
            return
        self.items[name] = [item for item in self.items.get(name, []) if item != value]


class JsonFileFavorites(InMemoryFavorites):
    """Favorites persisted to a JSON file after every change."""

    def __init__(self, path: str | Path):
        self.path = Path(path)
        super().__init__(self._load())

    def _load(self) -> Dict[str, List[str]]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text() or "{}")
        except json.JSONDecodeError as e:
            logger.warning(f"Ignoring unreadable favorites file {self.path}: {e}")
            return {}
        if not isinstance(data, dict):
            return {}
        return {name: list(values) for name, values in data.items() if isinstance(values, list)}

    def _save(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(self.items, indent=2))

    def add(self, name: Optional[str], value: str) -> None:
        super().add(name, value)
        if name:
            self._save()

    def remove(self, name: Optional[str], value: str) -> None:
        super().remove(name, value)
        if name:
            self._save()
