"""
Property Extraction Validators
==============================
Validates property initializer extraction from compiled widget files.

Validates:
- Default-value type inference follows its precedence table
- Initializer arguments are scanned whole (nested calls, strings, comments)
- Records keep source order and their source file
- Preceding comments become descriptions
"""
from pathlib import Path

import pytest

from widgetscope.engine.models import InferredType
from widgetscope.engine.props import PropertyExtractor, infer_type
from widgetscope.engine.scanner import scan_argument, top_level_keys


SOURCE = Path("/lib/components/basic/button/button.props.js")


@pytest.mark.engine
@pytest.mark.parametrize("default_text,expected", [
    ("null", InferredType.ANY),
    ("undefined", InferredType.ANY),
    ("void 0", InferredType.ANY),
    ("true", InferredType.BOOLEAN),
    ("false", InferredType.BOOLEAN),
    ("'Button'", InferredType.STRING),
    ('"Button"', InferredType.STRING),
    ("`Button`", InferredType.STRING),
    ("''", InferredType.STRING),
    ("0", InferredType.NUMBER),
    ("42", InferredType.NUMBER),
    ("-1", InferredType.NUMBER),
    ("() => {}", InferredType.FUNCTION),
    ("function () {}", InferredType.FUNCTION),
    ("(a, b) => a + b", InferredType.FUNCTION),
    ("[]", InferredType.ARRAY),
    ("[1, 2]", InferredType.ARRAY),
    ("{}", InferredType.OBJECT),
    ("{ a: 1 }", InferredType.OBJECT),
    ("1.5", InferredType.ANY),
    ("SOME_CONSTANT", InferredType.ANY),
    ("new Date()", InferredType.ANY),
])
def test_infer_type_decision_table(default_text, expected):
    """
    Type inference maps default-value text to a type.

    Given: The literal text of a default value
    When: Inferring its type
    Then: The first matching rule of the precedence table decides
    """
    assert infer_type(default_text) == expected


@pytest.mark.engine
@pytest.mark.parametrize("default_text,expected", [
    ("'() => x'", InferredType.STRING),
    ('"function"', InferredType.STRING),
    ("[() => 1]", InferredType.FUNCTION),
    ("{ onTap: () => {} }", InferredType.FUNCTION),
    ("  true  ", InferredType.BOOLEAN),
])
def test_infer_type_precedence(default_text, expected):
    """
    Earlier rules win over later ones.

    Given: Default text matching more than one rule
    When: Inferring its type
    Then: Quoted strings stay strings and arrow text beats array/object
    """
    assert infer_type(default_text) == expected


@pytest.mark.engine
def test_extracts_records_in_source_order():
    """
    Every initializer call yields one record, in order.

    Given: A compiled file with several _defineProperty calls
    When: Extracting properties
    Then: Records match names, literal defaults and inferred types in order
    """
    text = """
    class WmButtonProps extends BaseProps {
      constructor(...args) {
        super(...args);
        _defineProperty(this, "caption", "Button");
        _defineProperty(this, 'iconsize', 0);
        _defineProperty(this, "disabled", false);
        _defineProperty(this, "onTap", function () {});
      }
    }
    """
    records = PropertyExtractor().extract(text, SOURCE)

    assert [r.name for r in records] == ["caption", "iconsize", "disabled", "onTap"]
    assert [r.default_value for r in records] == ['"Button"', "0", "false", "function () {}"]
    assert [r.type for r in records] == [
        InferredType.STRING, InferredType.NUMBER, InferredType.BOOLEAN, InferredType.FUNCTION,
    ]
    assert all(r.source_file == SOURCE for r in records)
    assert all(r.required is False for r in records)


@pytest.mark.engine
def test_nested_default_values_are_taken_whole():
    """
    Commas and parentheses inside a default do not end it.

    Given: Defaults containing nested calls, objects and strings with delimiters
    When: Extracting properties
    Then: Each default is the full argument text
    """
    text = """
    _defineProperty(this, "style", { margin: 0, padding: fn(1, 2) });
    _defineProperty(this, "label", 'a, b) c');
    _defineProperty(this, "onChange", (e, w) => { w.notify(e, [1, 2]); });
    _defineProperty(this, "items", [/* first, */ 1, 2]);
    """
    records = PropertyExtractor().extract(text, SOURCE)

    assert [r.default_value for r in records] == [
        "{ margin: 0, padding: fn(1, 2) }",
        "'a, b) c'",
        "(e, w) => { w.notify(e, [1, 2]); }",
        "[/* first, */ 1, 2]",
    ]
    assert records[1].type == InferredType.STRING
    assert records[2].type == InferredType.FUNCTION


@pytest.mark.engine
def test_alternate_initializer_shapes():
    """
    Other compiler output shapes are recognised.

    Given: __publicField calls and _this-aliased receivers
    When: Extracting properties
    Then: Both produce records
    """
    text = """
    __publicField(this, "caption", "x");
    _defineProperty(_this2, "onLoad", null);
    """
    records = PropertyExtractor().extract(text, SOURCE)

    assert [r.name for r in records] == ["caption", "onLoad"]


@pytest.mark.engine
def test_configured_call_names_only():
    """
    Only configured initializer names are matched.

    Given: An extractor limited to _defineProperty
    When: Extracting from text using __publicField
    Then: No records are produced
    """
    text = '__publicField(this, "caption", "x");'
    assert PropertyExtractor(["_defineProperty"]).extract(text, SOURCE) == []


@pytest.mark.engine
def test_file_without_initializers_is_empty():
    """
    A file with no initializer calls yields nothing.

    Given: Compiled text without property initializers
    When: Extracting properties
    Then: An empty list is returned
    """
    assert PropertyExtractor().extract("export default class A {}", SOURCE) == []


@pytest.mark.engine
def test_unterminated_initializer_is_skipped():
    """
    A truncated call does not poison the rest of the file.

    Given: A well-formed initializer followed by a truncated one
    When: Extracting properties
    Then: Only the well-formed record is returned
    """
    text = '_defineProperty(this, "caption", "x");\n_defineProperty(this, "broken", { a: 1'
    records = PropertyExtractor().extract(text, SOURCE)

    assert [r.name for r in records] == ["caption"]


@pytest.mark.engine
def test_comments_become_descriptions():
    """
    A comment directly above an initializer describes it.

    Given: Initializers preceded by block, line and no comments
    When: Extracting properties
    Then: Descriptions carry the comment text, or are empty
    """
    text = """
    /**
     * Text shown on the button
     */
    _defineProperty(this, "caption", "Button");
    // Size of the icon in pixels
    _defineProperty(this, "iconsize", 0);
    _defineProperty(this, "disabled", false);
    """
    records = PropertyExtractor().extract(text, SOURCE)

    assert [r.description for r in records] == [
        "Text shown on the button",
        "Size of the icon in pixels",
        "",
    ]


@pytest.mark.engine
def test_scan_argument_stops_at_top_level_delimiter():
    """
    Argument scanning stops at a top-level comma or closing paren.

    Given: Call argument text
    When: Scanning from the argument start
    Then: The argument text and the delimiter index are returned
    """
    text = "f(a(1, 2), b)"
    arg, end = scan_argument(text, 2)
    assert arg == "a(1, 2)"
    assert text[end] == ","

    arg, end = scan_argument(text, end + 1)
    assert arg == "b"
    assert text[end] == ")"

    assert scan_argument("f([1, 2", 2) is None
    assert scan_argument("f([1, 2)", 2) is None


@pytest.mark.engine
def test_top_level_keys_skip_nested_levels():
    """
    Only keys at the object literal's own level are reported.

    Given: An object literal with nested objects, quoted keys and a spread
    When: Listing its top-level keys
    Then: Nested keys and spreads are excluded
    """
    text = "({ root: { text: {} }, 'icon': {}, ...base, shorthand, label: `a:b` })"
    assert top_level_keys(text, text.index("{")) == ["root", "icon", "shorthand", "label"]
