"""
Style Resolution
================
Aggregates the style parts and classes a widget exposes, own and inherited.

Per inheritance level, two sources are merged:

1. Own style file, next to the props file (button.props.js -> button.styles.js):
   - DEFAULT_CLASS constant        -> default class name
   - top-level keys of defineStyles({...}) -> parts
   - addStyle('<class>', ...)      -> classes
   - DEFAULT_CLASS + '<suffix>'    -> classes (expanded)

2. Style-definition file, in a separate tree keyed by catalog category:
   <styledef_root>/<styledef_subdir>/<category>/<id><styledef_suffix>
   - { className: '<token>', rnStyleSelector: 'comp.part[.nested]' }
     -> classes + class_to_part[token] = last selector segment

The parent level is found through the props file's extends/import, and its
description is merged under the child's.
"""
from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Optional

from widgetscope.engine.catalog import WidgetCatalog, widget_name_from_path
from widgetscope.engine.imports import ParentResolver
from widgetscope.engine.models import ResolutionContext, StyleDescription
from widgetscope.engine.reader import SourceReadError, SourceReader, normalize_path
from widgetscope.engine.scanner import top_level_keys
from widgetscope.engine.settings import EngineSettings

logger = logging.getLogger(__name__)

DEFAULT_CLASS_CONSTANT = "DEFAULT_CLASS"

_DEFAULT_CLASS = re.compile(
    r"(?:export\s+)?(?:const|let|var)\s+" + DEFAULT_CLASS_CONSTANT + r"\s*=\s*(['\"])([^'\"]*)\1"
)
_DEFINE_STYLES = re.compile(r"\bdefineStyles\s*(?:<[^>()]*>)?\s*\(\s*\{")
_ADD_STYLE_LITERAL = re.compile(r"\baddStyle\s*\(\s*(['\"])([^'\"]+)\1")
_ADD_STYLE_DEFAULT = re.compile(r"\baddStyle\s*\(\s*" + DEFAULT_CLASS_CONSTANT + r"\s*,")
_DEFAULT_CONCAT = re.compile(DEFAULT_CLASS_CONSTANT + r"\s*\+\s*(['\"])([^'\"]*)\1")
_DEFAULT_TEMPLATE = re.compile(r"`\$\{" + DEFAULT_CLASS_CONSTANT + r"\}([^`$]*)`")

_SELECTOR_AFTER_CLASS = re.compile(
    r"\{\s*['\"]?className['\"]?\s*:\s*(['\"])([^'\"]+)\1\s*,\s*"
    r"['\"]?rnStyleSelector['\"]?\s*:\s*(['\"])([^'\"]+)\3"
)
_SELECTOR_BEFORE_CLASS = re.compile(
    r"\{\s*['\"]?rnStyleSelector['\"]?\s*:\s*(['\"])([^'\"]+)\1\s*,\s*"
    r"['\"]?className['\"]?\s*:\s*(['\"])([^'\"]+)\3"
)


def parse_style_file(text: str) -> StyleDescription:
    """Parse a compiled .styles.js file into its own (uninherited) description."""
    description = StyleDescription()

    match = _DEFAULT_CLASS.search(text)
    if match:
        description.default_class_name = match.group(2)

    define = _DEFINE_STYLES.search(text)
    if define:
        description.parts.update(top_level_keys(text, define.end() - 1))

    for match in _ADD_STYLE_LITERAL.finditer(text):
        description.classes.add(match.group(2))

    default_class = description.default_class_name
    if default_class:
        if _ADD_STYLE_DEFAULT.search(text):
            description.classes.add(default_class)
        for match in _DEFAULT_CONCAT.finditer(text):
            description.classes.add(default_class + match.group(2))
        for match in _DEFAULT_TEMPLATE.finditer(text):
            description.classes.add(default_class + match.group(1))

    return description


def parse_styledef_file(text: str) -> StyleDescription:
    """Parse a style-definition file into classes and class -> part mapping."""
    description = StyleDescription()
    pairs = [(m.group(2), m.group(4)) for m in _SELECTOR_AFTER_CLASS.finditer(text)]
    pairs.extend((m.group(4), m.group(2)) for m in _SELECTOR_BEFORE_CLASS.finditer(text))

    for class_name, selector in pairs:
        description.classes.add(class_name)
        description.class_to_part[class_name] = selector.split(".")[-1]
    return description


class StyleResolver:
    """Resolves the aggregated StyleDescription of a widget."""

    def __init__(
        self,
        settings: EngineSettings,
        catalog: WidgetCatalog,
        reader: Optional[SourceReader] = None,
    ):
        self.settings = settings
        self.catalog = catalog
        self.reader = reader or SourceReader()

    def style_file_for(self, props_path: Path) -> Optional[Path]:
        """Sibling style file of a props file, or None if the name doesn't fit."""
        name = props_path.name
        if not name.endswith(self.settings.props_suffix):
            return None
        stem = name[: -len(self.settings.props_suffix)]
        return props_path.with_name(stem + self.settings.styles_suffix)

    def styledef_file_for(self, widget_name: str) -> Optional[Path]:
        """Style-definition file for a widget, or None if it isn't catalogued."""
        entry = self.catalog.lookup(widget_name)
        if entry is None:
            return None
        return normalize_path(
            self.settings.styledef_root
            / self.settings.styledef_subdir
            / entry.category
            / f"{entry.canonical_id}{self.settings.styledef_suffix}"
        )

    def own_styles(self, props_path: Path, widget_name: str, context: ResolutionContext) -> StyleDescription:
        """Style contributions of one inheritance level, without its ancestors."""
        description = StyleDescription()

        style_path = self.style_file_for(props_path)
        if style_path is not None:
            try:
                description = parse_style_file(context.read(style_path))
            except SourceReadError:
                logger.debug("No style file for %s at %s", widget_name, style_path)

        styledef_path = self.styledef_file_for(widget_name)
        if styledef_path is not None:
            try:
                styledef = parse_styledef_file(context.read(styledef_path))
            except SourceReadError:
                logger.debug("No style definition for %s at %s", widget_name, styledef_path)
            else:
                description.classes |= styledef.classes
                description.class_to_part.update(styledef.class_to_part)

        return description

    def resolve_styles(
        self,
        props_path: Path,
        widget_name: Optional[str] = None,
        depth: int = 0,
        context: Optional[ResolutionContext] = None,
    ) -> Optional[StyleDescription]:
        """
        Resolve a widget's own styles merged over all of its ancestors'.

        Args:
            props_path: The widget's compiled props file
            widget_name: Name used for the catalog lookup (default: from path)
            depth: Current inheritance level (0 for the queried widget)
            context: Per-call traversal state; a fresh one is created if omitted

        Returns:
            Aggregated description, or None when this level is past the
            depth cap or was already visited in this call
        """
        context = context or ResolutionContext(self.reader)
        props_path = normalize_path(props_path)
        widget_name = widget_name or widget_name_from_path(props_path)

        if depth > self.settings.max_inheritance_depth:
            return None
        if props_path in context.visited_styles:
            logger.debug("Style walk already visited %s", props_path)
            return None
        context.visited_styles.add(props_path)

        own = self.own_styles(props_path, widget_name, context)

        try:
            text = context.read(props_path)
        except SourceReadError:
            return own

        link = ParentResolver(self.settings, context.exists).resolve_parent(props_path, text)
        if link.parent_path is None:
            return own

        parent = self.resolve_styles(
            link.parent_path,
            widget_name_from_path(link.parent_path),
            depth + 1,
            context,
        )
        return own.merged_with(parent)
