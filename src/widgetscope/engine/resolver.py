"""
Widget Structure Resolution Engine
==================================
Reconstructs the complete effective contract of a compiled widget.

For a widget's props file:
1. Gather PropertyRecords across the whole ancestor chain (own first)
2. Classify event callbacks over the concatenated list
3. Walk the inheritance chain for reporting
4. Resolve aggregated styles
5. Assemble the result with statistics

Only an unreadable target file is an error. Everything past it (missing
ancestors, unresolvable imports, cycles, absent style files) shortens the
result instead of failing it.

Every call to resolve() gets its own ResolutionContext, so concurrent
resolutions share nothing but read-only settings and the catalog.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

from widgetscope.engine.catalog import WidgetCatalog, widget_name_from_path
from widgetscope.engine.events import EventClassifier
from widgetscope.engine.imports import ParentResolver
from widgetscope.engine.inheritance import InheritanceChainWalker
from widgetscope.engine.models import (
    AggregatedWidgetStructure,
    PropertyRecord,
    ResolutionContext,
    StyleDescription,
)
from widgetscope.engine.props import PropertyExtractor
from widgetscope.engine.reader import (
    PathLike,
    SourceReadError,
    SourceReader,
    WidgetScopeError,
    normalize_path,
)
from widgetscope.engine.settings import EngineSettings
from widgetscope.engine.styles import StyleResolver

logger = logging.getLogger(__name__)


class TargetUnreadableError(WidgetScopeError):
    """Raised when the widget file being resolved cannot be read."""


class WidgetStructureResolver:
    """
    Resolution orchestrator.

    Stateless between calls: construct once per settings/catalog pair and
    call resolve() as often as needed, from any number of threads.
    """

    def __init__(
        self,
        settings: EngineSettings,
        catalog: Optional[WidgetCatalog] = None,
        reader: Optional[SourceReader] = None,
    ):
        self.settings = settings
        self.catalog = catalog or WidgetCatalog.load(settings.catalog_overrides)
        self.reader = reader or SourceReader()
        self.extractor = PropertyExtractor(settings.define_property_calls)
        self.classifier = EventClassifier(settings.event_callbacks)
        self.chain_walker = InheritanceChainWalker(settings, self.reader)
        self.style_resolver = StyleResolver(settings, self.catalog, self.reader)

    def resolve(self, file_path: PathLike) -> AggregatedWidgetStructure:
        """
        Resolve the effective contract of the widget defined in file_path.

        Raises:
            TargetUnreadableError: file_path itself cannot be read
        """
        target = normalize_path(file_path)
        context = ResolutionContext(self.reader)

        try:
            context.read(target)
        except SourceReadError as e:
            raise TargetUnreadableError(f"Cannot read widget file {target}: {e}") from e

        widget_name = widget_name_from_path(target)
        logger.debug("Resolving %s (%s)", widget_name, target)

        props = self.gather_props(target, context)
        events = self.classifier.classify(props)
        chain = self.chain_walker.walk(target, context)
        styles = self.style_resolver.resolve_styles(target, widget_name, 0, context)

        structure = AggregatedWidgetStructure(
            widget_name=widget_name,
            file_path=target,
            props=props,
            events=events,
            styles=styles or StyleDescription(),
            inheritance=chain,
        )
        logger.debug("Resolved %s: %s", widget_name, structure.stats)
        return structure

    def gather_props(
        self,
        file_path: Path,
        context: ResolutionContext,
        depth: int = 0,
    ) -> List[PropertyRecord]:
        """
        Property records of file_path followed by those of its ancestors.

        Own records are prepended and parent records appended, so on a name
        collision the child's record comes first. Duplicates are kept.
        """
        if depth > self.settings.max_inheritance_depth:
            return []
        if file_path in context.visited_props:
            logger.debug("Property walk already visited %s", file_path)
            return []
        context.visited_props.add(file_path)

        try:
            text = context.read(file_path)
        except SourceReadError:
            logger.debug("Property walk stops at unreadable %s", file_path)
            return []

        own = self.extractor.extract(text, file_path)
        link = ParentResolver(self.settings, context.exists).resolve_parent(file_path, text)
        if link.parent_path is None:
            return own
        return own + self.gather_props(link.parent_path, context, depth + 1)
