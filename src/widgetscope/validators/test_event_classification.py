"""
Event Classification Validators
===============================
Validates that event callbacks are recognised among property records.
"""
from pathlib import Path

import pytest

from widgetscope.engine.events import EventClassifier, describe_event
from widgetscope.engine.models import InferredType, PropertyRecord
from widgetscope.engine.settings import EngineSettings


def _record(name: str, default: str = "null", source: str = "/lib/a.props.js") -> PropertyRecord:
    return PropertyRecord(name=name, type=InferredType.ANY, default_value=default, source_file=Path(source))


@pytest.fixture
def classifier():
    settings = EngineSettings(runtime_root=Path("/lib"), styledef_root=Path("/codegen"))
    return EventClassifier(settings.event_callbacks)


@pytest.mark.engine
@pytest.mark.parametrize("name,is_event", [
    ("onTap", True),
    ("onChange", True),
    ("on", True),
    ("renderItem", True),
    ("getDisplayExpression", True),
    ("callback", True),
    ("caption", False),
    ("Onboarding", False),
    ("iconclass", False),
])
def test_event_naming_rule(classifier, name, is_event):
    """
    Events are "on"-prefixed names or known callback names.

    Given: A property record
    When: Asking whether it is an event
    Then: The prefix rule or the callback allow-list decides
    """
    assert classifier.is_event(_record(name)) is is_event


@pytest.mark.engine
def test_classify_preserves_order_and_duplicates(classifier):
    """
    Classification is an ordered filter over the props list.

    Given: Props with an event repeated across two source files
    When: Classifying
    Then: Both event records are kept in props order with their sources
    """
    props = [
        _record("onChange", "(e) => {}", "/lib/child.props.js"),
        _record("caption", "'x'", "/lib/child.props.js"),
        _record("renderItem", "null", "/lib/base.props.js"),
        _record("onChange", "null", "/lib/base.props.js"),
    ]
    events = classifier.classify(props)

    assert [e.name for e in events] == ["onChange", "renderItem", "onChange"]
    assert [str(e.source_file) for e in events] == [
        "/lib/child.props.js", "/lib/base.props.js", "/lib/base.props.js",
    ]
    assert events[0].signature == "(e) => {}"


@pytest.mark.engine
def test_event_description():
    """
    Event descriptions are synthesized from the name.

    Given: Event names with and without the "on" prefix
    When: Describing them
    Then: The prefix is dropped from the action text
    """
    assert describe_event("onTap") == "Triggered when Tap occurs"
    assert describe_event("renderItem") == "Triggered when renderItem occurs"


@pytest.mark.engine
def test_no_events_without_callbacks():
    """
    An empty allow-list leaves only the prefix rule.

    Given: A classifier with no callback names
    When: Classifying a known callback name
    Then: It is not an event
    """
    assert EventClassifier().classify([_record("renderItem")]) == []
