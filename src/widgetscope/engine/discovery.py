"""
Widget file discovery.

Locates widget props files before resolution starts. The engine itself
never searches; it only follows imports from the file it is given.
"""
from __future__ import annotations

import fnmatch
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterator, List, Optional

from widgetscope.engine.catalog import WidgetCatalog, normalize_widget_name, widget_name_from_path
from widgetscope.engine.reader import WidgetScopeError

logger = logging.getLogger(__name__)

# Directories pruned before recursion in os.walk
SKIP_DIRS = {
    ".git", "__pycache__", ".cache", "build", "coverage",
    ".venv", "venv", ".tox", ".pytest_cache", "__tests__", "__mocks__",
}


class WidgetNotFoundError(WidgetScopeError):
    """Raised when no props file exists for a widget name."""


def _walk_files(root: Path) -> Iterator[Path]:
    """
    Walk directory tree yielding files.

    Prunes build/test directories *before* recursing so os.walk never
    enters them. Results are in a stable (sorted) order.
    """
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = sorted(d for d in dirnames if d not in SKIP_DIRS)
        for fname in sorted(filenames):
            yield Path(dirpath) / fname


def search(pattern: str, root_dir: Path) -> List[Path]:
    """
    Find files under root_dir whose name matches a glob pattern.

    Args:
        pattern: fnmatch-style file name pattern (e.g. "*.props.js")
        root_dir: Directory to search

    Returns:
        Matching paths; empty if root_dir does not exist
    """
    root_dir = Path(root_dir)
    if not root_dir.is_dir():
        logger.debug("Search root %s does not exist", root_dir)
        return []
    return [p for p in _walk_files(root_dir) if fnmatch.fnmatch(p.name, pattern)]


def find_widget_file(widget_name: str, runtime_root: Path, props_suffix: str = ".props.js") -> Path:
    """
    Locate the props file of a widget by name.

    "WmButton", "wm-button" and "button" all find ".../button.props.js".
    The shallowest match wins so a widget's own file beats same-named
    helpers deeper in the tree.

    Raises:
        WidgetNotFoundError: no props file matches
    """
    wanted = normalize_widget_name(widget_name)
    matches = [
        p for p in search(f"*{props_suffix}", runtime_root)
        if normalize_widget_name(widget_name_from_path(p)) == wanted
    ]
    if not matches:
        raise WidgetNotFoundError(
            f"No {props_suffix} file for widget '{widget_name}' under {runtime_root}"
        )
    matches.sort(key=lambda p: (len(p.parts), str(p)))
    return matches[0]


@dataclass
class DiscoveredWidget:
    """A props file found on disk, with its catalog category if known."""

    name: str
    props_file: Path
    category: Optional[str] = None

    def to_dict(self) -> Dict:
        return {
            "name": self.name,
            "category": self.category,
            "propsFile": str(self.props_file),
        }


def list_widgets(
    runtime_root: Path,
    catalog: WidgetCatalog,
    category: Optional[str] = None,
    props_suffix: str = ".props.js",
) -> Dict[str, List[DiscoveredWidget]]:
    """
    Group every props file under runtime_root by catalog category.

    Widgets missing from the catalog are grouped under "uncategorized".
    """
    grouped: Dict[str, List[DiscoveredWidget]] = {}
    for path in search(f"*{props_suffix}", runtime_root):
        name = widget_name_from_path(path)
        entry = catalog.lookup(name)
        widget_category = entry.category if entry else "uncategorized"
        if category and widget_category != category:
            continue
        grouped.setdefault(widget_category, []).append(
            DiscoveredWidget(name=name, props_file=path, category=entry.category if entry else None)
        )

    for widgets in grouped.values():
        widgets.sort(key=lambda w: w.name)
    return dict(sorted(grouped.items()))
