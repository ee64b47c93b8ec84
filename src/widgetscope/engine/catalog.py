"""
Widget catalog lookup.

Static mapping from a normalized widget name to the category and canonical
id used to locate its style-definition file, which lives in a differently
rooted tree than the widget's own files. The bundled catalog is loaded once
per process and only ever read.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Dict, List, Mapping, Optional

import yaml

logger = logging.getLogger(__name__)

BUNDLED_CATALOG = Path(__file__).resolve().parent / "data" / "catalog.yaml"


def normalize_widget_name(name: str) -> str:
    """
    Normalize a widget name for catalog lookup.

    "WmButton", "wm-button", "button" and "Button" all map to "button".
    """
    normalized = re.sub(r"[^a-z0-9]", "", name.lower())
    if normalized.startswith("wm") and len(normalized) > 2:
        normalized = normalized[2:]
    return normalized


def widget_name_from_path(path: Path) -> str:
    """Widget name from a file's base name: ".../button/button.props.js" -> "button"."""
    return Path(path).name.split(".", 1)[0]


@dataclass(frozen=True)
class CatalogEntry:
    """Style-definition coordinates for one widget."""

    name: str
    category: str
    canonical_id: str

    def to_dict(self) -> Dict[str, str]:
        return {"name": self.name, "category": self.category, "id": self.canonical_id}


@lru_cache(maxsize=None)
def _load_bundled() -> Dict[str, CatalogEntry]:
    with open(BUNDLED_CATALOG, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    entries = {}
    for category, widgets in data.items():
        for name, fields in (widgets or {}).items():
            key = normalize_widget_name(name)
            entries[key] = CatalogEntry(
                name=key,
                category=category,
                canonical_id=(fields or {}).get("id", key),
            )
    logger.debug("Loaded %d catalog entries from %s", len(entries), BUNDLED_CATALOG)
    return entries


class WidgetCatalog:
    """Read-only widget name -> (category, canonical id) lookup."""

    def __init__(self, entries: Mapping[str, CatalogEntry]):
        self._entries = dict(entries)

    @classmethod
    def load(cls, overrides: Optional[Mapping[str, Mapping[str, str]]] = None) -> "WidgetCatalog":
        """
        Bundled catalog with optional project overrides merged on top.

        Args:
            overrides: {name: {"category": ..., "id": ...}} from config.yaml
        """
        entries = dict(_load_bundled())
        for name, fields in (overrides or {}).items():
            key = normalize_widget_name(name)
            entries[key] = CatalogEntry(
                name=key,
                category=str(fields["category"]),
                canonical_id=str(fields.get("id") or key),
            )
        return cls(entries)

    def lookup(self, widget_name: str) -> Optional[CatalogEntry]:
        return self._entries.get(normalize_widget_name(widget_name))

    def categories(self) -> List[str]:
        return sorted({e.category for e in self._entries.values()})

    def entries(self, category: Optional[str] = None) -> List[CatalogEntry]:
        """All entries sorted by category then name."""
        selected = [
            e for e in self._entries.values()
            if category is None or e.category == category
        ]
        return sorted(selected, key=lambda e: (e.category, e.name))

    def __contains__(self, widget_name: str) -> bool:
        return normalize_widget_name(widget_name) in self._entries

    def __len__(self) -> int:
        return len(self._entries)
