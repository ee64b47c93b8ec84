"""
CLI Validators
==============
Validates the widgetscope command line and the tool-style handler.
"""
import json

import pytest
import yaml

from widgetscope.cli import main
from widgetscope.commands.widget import handle_resolve_widget_structure


def _run(library, *args):
    return main([
        "--repo", str(library.root),
        "--runtime-root", str(library.runtime_root),
        "--styledef-root", str(library.styledef_root),
        *args,
    ])


@pytest.mark.cli
def test_resolve_by_name_json(library, capsys):
    """
    Resolving by widget name prints the structure as JSON.

    Given: A library containing checkboxset
    When: Running "widgetscope resolve WmCheckboxset"
    Then: Exit code is 0 and the JSON describes checkboxset
    """
    assert _run(library, "resolve", "WmCheckboxset") == 0

    data = json.loads(capsys.readouterr().out)
    assert data["widgetName"] == "checkboxset"
    assert data["filePath"] == str(library.checkboxset)
    assert data["stats"]["totalProps"] == 13
    assert data["inheritance"]["chain"] == ["BaseDatasetProps", "BaseProps"]
    assert "effectiveProps" not in data


@pytest.mark.cli
def test_resolve_by_path_yaml_effective(library, capsys):
    """
    Resolving by path supports YAML and the effective view.

    Given: The button props file path
    When: Running "widgetscope resolve <path> -f yaml --effective"
    Then: YAML output includes effectiveProps
    """
    assert _run(library, "resolve", str(library.button), "-f", "yaml", "--effective") == 0

    data = yaml.safe_load(capsys.readouterr().out)
    assert [p["name"] for p in data["effectiveProps"]] == ["caption", "onTap"]
    assert data["inheritance"]["terminationReason"] == "generic_base"


@pytest.mark.cli
@pytest.mark.parametrize("target", ["rating", "components/ghost/ghost.props.js"])
def test_resolve_errors_exit_nonzero(library, capsys, target):
    """
    Unknown widgets and unreadable files exit with 1.

    Given: A widget name with no props file, or a missing props path
    When: Running "widgetscope resolve"
    Then: Exit code is 1 and the error goes to stderr
    """
    assert _run(library, "resolve", target) == 1

    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err.startswith("Error:")


@pytest.mark.cli
def test_chain_text_and_json(library, capsys):
    """
    The chain command shows ancestors and why the walk stopped.

    Given: checkboxset with two ancestors
    When: Running "widgetscope chain" in text and JSON formats
    Then: Both list the ancestors in order
    """
    assert _run(library, "chain", "checkboxset") == 0
    out = capsys.readouterr().out
    assert out.index("BaseDatasetProps") < out.index("BaseProps\n")
    assert "Stopped: no_parent" in out

    assert _run(library, "chain", "checkboxset", "-f", "json") == 0
    assert json.loads(capsys.readouterr().out) == {
        "immediate": "BaseDatasetProps",
        "chain": ["BaseDatasetProps", "BaseProps"],
        "terminationReason": "no_parent",
    }


@pytest.mark.cli
def test_widgets_and_search(library, capsys):
    """
    Discovery commands list what is under the runtime root.

    Given: A library with four props files
    When: Running "widgetscope widgets" and "widgetscope search"
    Then: Widgets are grouped by category and search exits 1 on no match
    """
    assert _run(library, "widgets", "-c", "input", "-f", "json") == 0
    grouped = json.loads(capsys.readouterr().out)
    assert [w["name"] for w in grouped["input"]] == ["checkboxset"]

    assert _run(library, "widgets") == 0
    assert "Total: 4 widgets" in capsys.readouterr().out

    assert _run(library, "search", "*.styledef.ts") == 1
    capsys.readouterr()
    assert _run(library, "search", "button.*") == 0
    assert capsys.readouterr().out.count("\n") == 2


@pytest.mark.cli
def test_catalog_command(library, capsys):
    """
    The catalog command prints bundled entries.

    Given: The bundled catalog
    When: Running "widgetscope catalog -c input -f json"
    Then: Only input entries are listed
    """
    assert _run(library, "catalog", "-c", "input", "-f", "json") == 0

    entries = json.loads(capsys.readouterr().out)
    assert entries
    assert {e["category"] for e in entries} == {"input"}
    assert {"name": "checkboxset", "category": "input", "id": "checkboxset"} in entries


@pytest.mark.cli
def test_no_command_prints_help(capsys):
    """
    Running without a command prints help.

    Given: No arguments
    When: Running widgetscope
    Then: Help is printed and exit code is 0
    """
    assert main([]) == 0
    assert "usage:" in capsys.readouterr().out


@pytest.mark.cli
def test_handler_success_envelope(library):
    """
    The tool handler wraps results in a success envelope.

    Given: Tool arguments naming checkboxset by file path
    When: Calling handle_resolve_widget_structure
    Then: success is true, data holds the structure and meta the timing
    """
    result = handle_resolve_widget_structure({
        "filePath": str(library.checkboxset),
        "runtimePath": str(library.runtime_root),
        "codegenPath": str(library.styledef_root),
        "repoRoot": str(library.root),
        "effective": True,
    })

    assert result["success"] is True
    assert result["data"]["widgetName"] == "checkboxset"
    assert len(result["data"]["effectiveProps"]) == 11
    assert result["meta"]["domain"] == "widget-structure"
    assert result["meta"]["executionTimeMs"] >= 0


@pytest.mark.cli
@pytest.mark.parametrize("args", [
    {},
    {"widgetName": "rating"},
    {"filePath": "does/not/exist.props.js"},
])
def test_handler_failure_envelope(library, args):
    """
    Failures are reported in the envelope, never raised.

    Given: Missing, unknown or unreadable targets
    When: Calling handle_resolve_widget_structure
    Then: success is false with an error message
    """
    result = handle_resolve_widget_structure({
        "runtimePath": str(library.runtime_root),
        "repoRoot": str(library.root),
        **args,
    })

    assert result["success"] is False
    assert result["error"]
    assert "data" not in result
    assert "executionTimeMs" in result["meta"]


@pytest.mark.cli
def test_chain_on_missing_file_exits_nonzero(library, capsys):
    """
    The chain command fails like resolve on an unreadable file.

    Given: A props path with no file behind it
    When: Running "widgetscope chain <path>"
    Then: Exit code is 1 and the error goes to stderr
    """
    missing = library.runtime_root / "components" / "ghost" / "ghost.props.js"

    assert _run(library, "chain", str(missing)) == 1

    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err.startswith("Error:")
