"""
Resolution engine: props, events, styles and inheritance of compiled widgets.
"""
from widgetscope.engine.catalog import WidgetCatalog
from widgetscope.engine.models import (
    AggregatedWidgetStructure,
    EventRecord,
    InferredType,
    InheritanceChain,
    PropertyRecord,
    StyleDescription,
    TerminationReason,
    effective_props,
)
from widgetscope.engine.reader import SourceNotFoundError, SourceReadError, WidgetScopeError
from widgetscope.engine.resolver import TargetUnreadableError, WidgetStructureResolver
from widgetscope.engine.settings import MAX_INHERITANCE_DEPTH, EngineSettings

__all__ = [
    "AggregatedWidgetStructure",
    "EngineSettings",
    "EventRecord",
    "InferredType",
    "InheritanceChain",
    "MAX_INHERITANCE_DEPTH",
    "PropertyRecord",
    "SourceNotFoundError",
    "SourceReadError",
    "StyleDescription",
    "TargetUnreadableError",
    "TerminationReason",
    "WidgetCatalog",
    "WidgetScopeError",
    "WidgetStructureResolver",
    "effective_props",
]
