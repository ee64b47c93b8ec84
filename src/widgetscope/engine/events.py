"""
Event classifier.

A property is an event when its name starts with "on" or is one of the
known callback names that do not follow that convention. Classification
is a view: every event stays in the props list as well.
"""

from typing import Iterable, List

from widgetscope.engine.models import EventRecord, PropertyRecord

EVENT_PREFIX = "on"


def describe_event(name: str) -> str:
    action = name[len(EVENT_PREFIX):] if name.startswith(EVENT_PREFIX) else name
    return f"Triggered when {action} occurs"


class EventClassifier:
    """Filters PropertyRecords down to event callbacks."""

    def __init__(self, callback_names: Iterable[str] = ()):
        self.callback_names = frozenset(callback_names)

    def is_event(self, record: PropertyRecord) -> bool:
        return record.name.startswith(EVENT_PREFIX) or record.name in self.callback_names

    def classify(self, props: List[PropertyRecord]) -> List[EventRecord]:
        """Echo each event property into an EventRecord, preserving order."""
        return [
            EventRecord(
                name=record.name,
                signature=record.default_value,
                description=describe_event(record.name),
                source_file=record.source_file,
            )
            for record in props
            if self.is_event(record)
        ]
