"""
Widget Structure Data Model
===========================
Result types produced by the resolution engine.

- PropertyRecord: one property initializer found in one compiled file
- EventRecord: a PropertyRecord classified as an event callback
- InheritanceChain: ancestor class names, immediate parent first
- StyleDescription: aggregated style parts/classes for a widget
- AggregatedWidgetStructure: the complete effective contract of a widget
- ResolutionContext: per-call traversal state (visited sets, read cache)

All result types serialize through to_dict() into plain JSON values.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional, Set, Union

from widgetscope.engine.reader import SourceReadError, SourceReader


class InferredType(Enum):
    """Property type inferred from the literal text of a default value."""

    ANY = "any"
    BOOLEAN = "boolean"
    STRING = "string"
    NUMBER = "number"
    FUNCTION = "function"
    ARRAY = "array"
    OBJECT = "object"


class TerminationReason(Enum):
    """Why an inheritance walk stopped."""

    GENERIC_BASE = "generic_base"  # Reached a framework root class
    NO_PARENT = "no_parent"  # No extends clause in the file
    UNRESOLVED_IMPORT = "unresolved_import"  # Parent has no import binding or the path is missing
    MISSING_FILE = "missing_file"  # File in the chain could not be read
    CYCLE = "cycle"  # Parent file already visited in this walk
    DEPTH_LIMIT = "depth_limit"  # max_inheritance_depth reached


@dataclass(frozen=True)
class PropertyRecord:
    """
    A property initializer extracted from a compiled file.

    Attributes:
        name: Property name
        type: Type inferred from the default literal
        default_value: Literal default-value text as written
        source_file: File this record was extracted from (not the queried widget)
        description: Comment preceding the initializer, if any
        required: Always False; compiled output carries no requiredness
    """

    name: str
    type: InferredType
    default_value: str
    source_file: Path
    description: str = ""
    required: bool = False

    def to_dict(self) -> Dict:
        return {
            "name": self.name,
            "type": self.type.value,
            "required": self.required,
            "defaultValue": self.default_value,
            "description": self.description,
            "sourceFile": str(self.source_file),
        }


@dataclass(frozen=True)
class EventRecord:
    """An event view over a PropertyRecord; the property stays in props."""

    name: str
    signature: str
    description: str
    source_file: Path

    def to_dict(self) -> Dict:
        return {
            "name": self.name,
            "signature": self.signature,
            "description": self.description,
            "sourceFile": str(self.source_file),
        }


@dataclass
class InheritanceChain:
    """
    Ancestor class names, immediate parent first.

    A generic base class, when reached, is kept as the last entry.
    """

    classes: List[str] = field(default_factory=list)
    termination_reason: Optional[TerminationReason] = None

    @property
    def immediate_parent(self) -> Optional[str]:
        return self.classes[0] if self.classes else None

    def __len__(self) -> int:
        return len(self.classes)

    def to_dict(self) -> Dict:
        return {
            "immediate": self.immediate_parent,
            "chain": list(self.classes),
            "terminationReason": self.termination_reason.value if self.termination_reason else None,
        }


@dataclass
class StyleDescription:
    """
    Style parts and classes exposed by a widget.

    Attributes:
        default_class_name: Widget's default style class (child wins when set)
        parts: Named sub-regions from the widget's style definition
        classes: Every concrete style-class token, own and inherited
        class_to_part: Style class -> structural part it decorates
    """

    default_class_name: str = ""
    parts: Set[str] = field(default_factory=set)
    classes: Set[str] = field(default_factory=set)
    class_to_part: Dict[str, str] = field(default_factory=dict)

    def merged_with(self, parent: Optional["StyleDescription"]) -> "StyleDescription":
        """
        Merge this (child) description over a parent's.

        parts and classes are unions; on a mapping key collision the child
        entry wins; the child's default class is kept unless empty.
        """
        if parent is None:
            return self
        mapping = dict(parent.class_to_part)
        mapping.update(self.class_to_part)
        return StyleDescription(
            default_class_name=self.default_class_name or parent.default_class_name,
            parts=self.parts | parent.parts,
            classes=self.classes | parent.classes,
            class_to_part=mapping,
        )

    def to_dict(self) -> Dict:
        return {
            "defaultClassName": self.default_class_name,
            "parts": sorted(self.parts),
            "classes": sorted(self.classes),
            "classToPartMapping": dict(sorted(self.class_to_part.items())),
        }


def effective_props(props: List[PropertyRecord]) -> List[PropertyRecord]:
    """First (child-most) record for each property name, in original order."""
    seen: Set[str] = set()
    effective = []
    for record in props:
        if record.name in seen:
            continue
        seen.add(record.name)
        effective.append(record)
    return effective


@dataclass
class AggregatedWidgetStructure:
    """
    Complete effective contract of a widget.

    props keeps duplicates across inheritance levels: own records come
    first, so the first record with a given name is the effective one.
    """

    widget_name: str
    file_path: Path
    props: List[PropertyRecord]
    events: List[EventRecord]
    styles: StyleDescription
    inheritance: InheritanceChain

    @property
    def own_props(self) -> List[PropertyRecord]:
        return [p for p in self.props if p.source_file == self.file_path]

    @property
    def inherited_props(self) -> List[PropertyRecord]:
        return [p for p in self.props if p.source_file != self.file_path]

    @property
    def stats(self) -> Dict[str, int]:
        own = len(self.own_props)
        return {
            "totalProps": len(self.props),
            "ownProps": own,
            "inheritedProps": len(self.props) - own,
            "events": len(self.events),
            "inheritanceLevels": len(self.inheritance),
            "styleParts": len(self.styles.parts),
            "styleClasses": len(self.styles.classes),
        }

    def to_dict(self, include_effective: bool = False) -> Dict:
        """Convert to dictionary for JSON serialization."""
        data = {
            "widgetName": self.widget_name,
            "filePath": str(self.file_path),
            "props": [p.to_dict() for p in self.props],
            "events": [e.to_dict() for e in self.events],
            "styles": self.styles.to_dict(),
            "inheritance": self.inheritance.to_dict(),
            "stats": self.stats,
        }
        if include_effective:
            data["effectiveProps"] = [p.to_dict() for p in effective_props(self.props)]
        return data


class ResolutionContext:
    """
    Mutable traversal state for exactly one resolve() call.

    Holds one visited set per walk (chain, props, styles) and a read cache
    so each file is read at most once per call. Never share an instance
    between calls or threads.
    """

    def __init__(self, reader: SourceReader):
        self.reader = reader
        self.visited_chain: Set[Path] = set()
        self.visited_props: Set[Path] = set()
        self.visited_styles: Set[Path] = set()
        self._sources: Dict[Path, Union[str, SourceReadError]] = {}

    def read(self, path: Path) -> str:
        """Read through the per-call cache; failures are cached and re-raised."""
        cached = self._sources.get(path)
        if cached is None:
            try:
                cached = self.reader.read(path)
            except SourceReadError as e:
                cached = e
            self._sources[path] = cached
        if isinstance(cached, SourceReadError):
            raise cached
        return cached

    def exists(self, path: Path) -> bool:
        if path in self._sources:
            return not isinstance(self._sources[path], SourceReadError)
        return self.reader.exists(path)
