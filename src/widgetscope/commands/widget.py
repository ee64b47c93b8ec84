"""
Widget CLI Command
==================
Provides CLI interface for widget structure resolution.

Commands:
- resolve: Effective props, events, styles and inheritance of a widget
- chain: Inheritance chain only
- widgets: Props files found under the runtime root, by category
- search: Glob search under the runtime root
- catalog: Bundled + project catalog entries

Usage:
    widgetscope resolve button
    widgetscope resolve path/to/button.props.js --format yaml --effective
    widgetscope chain WmCheckboxset
    widgetscope widgets --category input
    widgetscope search "*.styles.js"

Hosting tool layers call handle_resolve_widget_structure() instead, which
returns a {success, data | error, meta} envelope rather than printing.
"""
from __future__ import annotations

import json
import logging
import sys
import time
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from widgetscope.engine.catalog import WidgetCatalog
from widgetscope.engine.discovery import find_widget_file, list_widgets, search
from widgetscope.engine.reader import WidgetScopeError
from widgetscope.engine.resolver import WidgetStructureResolver
from widgetscope.engine.settings import EngineSettings
from widgetscope.utils.repo import find_project_root

logger = logging.getLogger(__name__)


def _dump(data: Any, format: str) -> str:
    if format == "yaml":
        return yaml.dump(data, default_flow_style=False, sort_keys=False)
    return json.dumps(data, indent=2)


class WidgetCommand:
    """
    CLI command handler for widget structure operations.

    Every public method returns a process exit code.
    """

    def __init__(
        self,
        repo_root: Optional[Path] = None,
        runtime_root: Optional[Path] = None,
        styledef_root: Optional[Path] = None,
    ):
        self.repo_root = repo_root or find_project_root()
        self.settings = EngineSettings.from_config(self.repo_root, runtime_root, styledef_root)
        self.catalog = WidgetCatalog.load(self.settings.catalog_overrides)
        self.resolver = WidgetStructureResolver(self.settings, self.catalog)

    def locate(self, target: str) -> Path:
        """
        Turn a CLI target into a props file path.

        An existing path is used as-is; anything else is treated as a widget
        name and searched for under the runtime root.
        """
        path = Path(target)
        if path.is_file() or target.endswith(self.settings.props_suffix):
            return path
        return find_widget_file(target, self.settings.runtime_root, self.settings.props_suffix)

    def resolve(self, target: str, format: str = "json", effective: bool = False) -> int:
        """
        Print the aggregated structure of a widget.

        Args:
            target: Props file path or widget name
            format: Output format - "json" or "yaml"
            effective: Also include the first-by-name effectiveProps view

        Returns:
            Exit code (0 on success, 1 if the widget cannot be read)
        """
        try:
            structure = self.resolver.resolve(self.locate(target))
        except WidgetScopeError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1

        print(_dump(structure.to_dict(include_effective=effective), format))
        return 0

    def chain(self, target: str, format: str = "text") -> int:
        """
        Print the inheritance chain of a widget.

        Returns:
            Exit code (0 on success, 1 if the widget cannot be located or read)
        """
        try:
            path = self.locate(target)
        except WidgetScopeError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1

        if not self.resolver.reader.exists(path):
            print(f"Error: Cannot read widget file {path}", file=sys.stderr)
            return 1

        chain = self.resolver.chain_walker.walk(path)

        if format == "json":
            print(json.dumps(chain.to_dict(), indent=2))
            return 0

        print(f"Widget: {path}")
        if chain.classes:
            for level, name in enumerate(chain.classes, start=1):
                print(f"  {'  ' * (level - 1)}└─ {name}")
        else:
            print("  (no resolvable parent)")
        if chain.termination_reason:
            print(f"Stopped: {chain.termination_reason.value}")
        return 0

    def widgets(self, category: Optional[str] = None, format: str = "text") -> int:
        """List props files under the runtime root, grouped by category."""
        grouped = list_widgets(
            self.settings.runtime_root, self.catalog, category, self.settings.props_suffix
        )

        if format == "json":
            print(json.dumps(
                {cat: [w.to_dict() for w in items] for cat, items in grouped.items()},
                indent=2,
            ))
            return 0

        total = 0
        for cat, items in grouped.items():
            print(f"\n{cat.upper()} ({len(items)}):")
            for widget in items:
                print(f"  {widget.name}")
                print(f"    └─ {widget.props_file}")
            total += len(items)
        print(f"\nTotal: {total} widgets")
        return 0

    def search(self, pattern: str) -> int:
        """Print files under the runtime root matching a glob pattern."""
        matches = search(pattern, self.settings.runtime_root)
        for path in matches:
            print(path)
        return 0 if matches else 1

    def list_catalog(self, category: Optional[str] = None, format: str = "text") -> int:
        """Print catalog entries."""
        entries = self.catalog.entries(category)

        if format == "json":
            print(json.dumps([e.to_dict() for e in entries], indent=2))
            return 0

        current = None
        for entry in entries:
            if entry.category != current:
                current = entry.category
                print(f"\n{current}:")
            print(f"  {entry.name:<18} {entry.canonical_id}")
        return 0


def handle_resolve_widget_structure(args: Dict[str, Any]) -> Dict[str, Any]:
    """
    Tool-style entry point for resolving a widget.

    Args:
        args: {"filePath": ..., "runtimePath": ..., "codegenPath": ...,
               "effective": bool}; "widgetName" may replace "filePath"

    Returns:
        {"success": True, "data": {...}, "meta": {...}} or
        {"success": False, "error": "<message>", "meta": {...}}
    """
    start = time.monotonic()
    meta: Dict[str, Any] = {"domain": "widget-structure"}

    try:
        runtime_root = args.get("runtimePath")
        codegen_root = args.get("codegenPath")
        command = WidgetCommand(
            repo_root=Path(args["repoRoot"]) if args.get("repoRoot") else None,
            runtime_root=Path(runtime_root) if runtime_root else None,
            styledef_root=Path(codegen_root) if codegen_root else None,
        )
        target = args.get("filePath") or args.get("widgetName")
        if not target:
            raise WidgetScopeError("Either filePath or widgetName is required")

        structure = command.resolver.resolve(command.locate(str(target)))
        result = {
            "success": True,
            "data": structure.to_dict(include_effective=bool(args.get("effective"))),
        }
    except WidgetScopeError as e:
        logger.debug("Widget structure resolution failed: %s", e)
        result = {"success": False, "error": str(e)}

    meta["executionTimeMs"] = int((time.monotonic() - start) * 1000)
    result["meta"] = meta
    return result
