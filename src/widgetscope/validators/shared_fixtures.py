"""
Shared fixtures for widgetscope validators.

Builds throwaway component libraries in tmp_path that mimic compiled
runtime output: a runtime tree of .props.js/.styles.js files and a separate
codegen tree of .styledef.ts files.

Layout produced by the `library` fixture:
    <tmp>/runtime/core/base.props.js
    <tmp>/runtime/components/basic/button/button.props.js
    <tmp>/runtime/components/basic/button/button.styles.js
    <tmp>/runtime/components/input/basedataset/basedataset.props.js
    <tmp>/runtime/components/input/basedataset/basedataset.styles.js
    <tmp>/runtime/components/input/checkboxset/checkboxset.props.js
    <tmp>/runtime/components/input/checkboxset/checkboxset.styles.js
    <tmp>/codegen/src/theme/components/input/checkboxset.styledef.ts
"""
import json
import textwrap
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Dict

import pytest

import widgetscope
from widgetscope.engine.catalog import WidgetCatalog
from widgetscope.engine.resolver import WidgetStructureResolver
from widgetscope.engine.settings import EngineSettings


WIDGETSCOPE_PKG_DIR = Path(widgetscope.__file__).resolve().parent
PACKAGE_PREFIX = "@wavemaker/app-rn-runtime"


BASE_PROPS = """
export default class BaseProps {
  constructor() {
    _defineProperty(this, "id", null);
    _defineProperty(this, "name", null);
    _defineProperty(this, "show", true);
    _defineProperty(this, "styles", {});
    _defineProperty(this, "onLoad", null);
  }
}
"""

BUTTON_PROPS = """
import BaseComponent from '@wavemaker/app-rn-runtime/core/base.component';
export default class WmButton extends BaseComponent {
  constructor(...args) {
    super(...args);
    _defineProperty(this, "caption", "Button");
    _defineProperty(this, "onTap", function () {});
  }
}
"""

BUTTON_STYLES = """
import BASE_THEME from '@wavemaker/app-rn-runtime/styles/theme';
import { defineStyles } from '@wavemaker/app-rn-runtime/core/base.component';
export const DEFAULT_CLASS = 'app-button';
BASE_THEME.registerStyle((themeVariables, addStyle) => {
  const defaultStyles = defineStyles({
    root: { flexDirection: 'row' },
    text: { fontSize: 14 },
    icon: {
      root: { alignSelf: 'center' },
      text: { fontSize: 16 }
    }
  });
  addStyle(DEFAULT_CLASS, '', defaultStyles);
  addStyle(DEFAULT_CLASS + '-icon', '', {});
});
"""

BASEDATASET_PROPS = """
import BaseProps from '@wavemaker/app-rn-runtime/core/base.props';
export default class BaseDatasetProps extends BaseProps {
  constructor(...args) {
    super(...args);
    _defineProperty(this, "dataset", []);
    _defineProperty(this, "datafield", 'All Fields');
    _defineProperty(this, "displayfield", null);
    _defineProperty(this, "getDisplayExpression", null);
    _defineProperty(this, "onChange", null);
  }
}
"""

BASEDATASET_STYLES = """
export const DEFAULT_CLASS = 'app-dataset';
BASE_THEME.registerStyle((themeVariables, addStyle) => {
  const defaultStyles = defineStyles({
    root: {},
    text: {}
  });
  addStyle(DEFAULT_CLASS, '', defaultStyles);
  addStyle(DEFAULT_CLASS + '-disabled', '', {});
});
"""

CHECKBOXSET_PROPS = """
import BaseDatasetProps from '../basedataset/basedataset.props';
export default class WmCheckboxsetProps extends BaseDatasetProps {
  constructor(...args) {
    super(...args);
    _defineProperty(this, "readonly", false);
    // Field bound to the checked value
    _defineProperty(this, "datafield", 'value');
    _defineProperty(this, "onChange", (event, widget, newVal, oldVal) => {});
  }
}
"""

CHECKBOXSET_STYLES = """
export const DEFAULT_CLASS = 'app-checkboxset';
BASE_THEME.registerStyle((themeVariables, addStyle) => {
  const defaultStyles = defineStyles({
    root: {},
    text: {},
    item: { flexDirection: 'row' },
    selectedItem: {},
    checkicon: { root: {}, text: { color: themeVariables.checkedColor } }
  });
  addStyle(DEFAULT_CLASS, '', defaultStyles);
  addStyle(DEFAULT_CLASS + '-rtl', '', {});
  addStyle('app-checkboxset-horizontal', '', {});
});
"""

CHECKBOXSET_STYLEDEF = """
import { BaseStyleDef } from '../base.styledef';
export default () => [
  { className: 'app-checkboxset-item', rnStyleSelector: 'app-checkboxset.item' },
  { className: 'app-checkboxset-checkicon', rnStyleSelector: 'app-checkboxset.checkicon', attributeToClass: true },
  { className: 'app-checkboxset-checkicon-text', rnStyleSelector: 'app-checkboxset.checkicon.text' }
];
"""


@dataclass
class WidgetLibrary:
    """A compiled component library laid out under a temporary directory."""

    root: Path
    runtime_root: Path
    styledef_root: Path

    def write(self, relative: str, text: str) -> Path:
        """Write a runtime file (relative to runtime_root) and return its path."""
        return self._write(self.runtime_root / relative, text)

    def write_styledef(self, category: str, widget_id: str, text: str) -> Path:
        path = self.styledef_root / "src" / "theme" / "components" / category / f"{widget_id}.styledef.ts"
        return self._write(path, text)

    @staticmethod
    def _write(path: Path, text: str) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(textwrap.dedent(text).lstrip("\n"), encoding="utf-8")
        return path

    def settings(self, **overrides: Any) -> EngineSettings:
        settings = EngineSettings(
            runtime_root=self.runtime_root,
            styledef_root=self.styledef_root,
            package_prefix=PACKAGE_PREFIX,
        )
        return replace(settings, **overrides) if overrides else settings

    def resolver(self, **overrides: Any) -> WidgetStructureResolver:
        settings = self.settings(**overrides)
        return WidgetStructureResolver(settings, WidgetCatalog.load(settings.catalog_overrides))

    @property
    def button(self) -> Path:
        return self.runtime_root / "components" / "basic" / "button" / "button.props.js"

    @property
    def checkboxset(self) -> Path:
        return self.runtime_root / "components" / "input" / "checkboxset" / "checkboxset.props.js"

    @property
    def basedataset(self) -> Path:
        return self.runtime_root / "components" / "input" / "basedataset" / "basedataset.props.js"

    @property
    def base_props(self) -> Path:
        return self.runtime_root / "core" / "base.props.js"


@pytest.fixture
def empty_library(tmp_path) -> WidgetLibrary:
    """Library roots with no files in them."""
    runtime_root = tmp_path / "runtime"
    styledef_root = tmp_path / "codegen"
    runtime_root.mkdir()
    styledef_root.mkdir()
    return WidgetLibrary(root=tmp_path, runtime_root=runtime_root, styledef_root=styledef_root)


@pytest.fixture
def library(empty_library) -> WidgetLibrary:
    """Library with button, checkboxset and their ancestors."""
    lib = empty_library
    lib.write("core/base.props.js", BASE_PROPS)
    lib.write("components/basic/button/button.props.js", BUTTON_PROPS)
    lib.write("components/basic/button/button.styles.js", BUTTON_STYLES)
    lib.write("components/input/basedataset/basedataset.props.js", BASEDATASET_PROPS)
    lib.write("components/input/basedataset/basedataset.styles.js", BASEDATASET_STYLES)
    lib.write("components/input/checkboxset/checkboxset.props.js", CHECKBOXSET_PROPS)
    lib.write("components/input/checkboxset/checkboxset.styles.js", CHECKBOXSET_STYLES)
    lib.write_styledef("input", "checkboxset", CHECKBOXSET_STYLEDEF)
    return lib


@pytest.fixture(scope="module")
def widget_structure_schema() -> Dict[str, Any]:
    """Load widget_structure.schema.json for validation."""
    with open(WIDGETSCOPE_PKG_DIR / "engine/schemas/widget_structure.schema.json") as f:
        return json.load(f)


# HTML Report Customization (only when pytest-html is installed)
try:
    import pytest_html as _pytest_html_check  # noqa: F401
    _HAS_PYTEST_HTML = True
except ImportError:
    _HAS_PYTEST_HTML = False


if _HAS_PYTEST_HTML:
    def pytest_html_report_title(report):
        """Customize HTML report title."""
        report.title = "widgetscope Validation Report"

    def pytest_html_results_table_header(cells):
        """Add a Category column."""
        cells.insert(2, "<th>Category</th>")

    def pytest_html_results_table_row(report, cells):
        """Fill the Category column from the validator module name."""
        category = "Other"
        nodeid = getattr(report, "nodeid", "")
        if "test_property_extraction" in nodeid or "test_event_classification" in nodeid:
            category = "Props & Events"
        elif "test_inheritance_chain" in nodeid:
            category = "Inheritance"
        elif "test_style_resolution" in nodeid:
            category = "Styles"
        elif "test_widget_resolution" in nodeid:
            category = "Resolution"
        elif "test_catalog_discovery" in nodeid or "test_config" in nodeid:
            category = "Catalog & Config"
        elif "test_cli" in nodeid:
            category = "CLI"
        cells.insert(2, f"<td>{category}</td>")
