"""
Engine settings.

Read-only configuration shared by every resolution. Traversal state never
lives here; see ResolutionContext in models.py.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, FrozenSet, Optional, Tuple

from widgetscope.utils.config import (
    get_catalog_overrides,
    get_paths_config,
    get_resolution_config,
    get_styles_config,
)

MAX_INHERITANCE_DEPTH = 5


def _anchor(project_root: Path, value: str) -> Path:
    path = Path(value).expanduser()
    return path if path.is_absolute() else project_root / path


@dataclass(frozen=True)
class EngineSettings:
    """
    Library roots and naming conventions for one command run.

    Attributes:
        runtime_root: Component-library root (package-style imports resolve here)
        styledef_root: Separate root holding style-definition files
        package_prefix: Import prefix that maps onto runtime_root
        max_inheritance_depth: Hard cap on ancestor levels walked
        generic_base_classes: Framework roots where chain expansion stops
        define_property_calls: Compiled property-initializer call names
        event_callbacks: Callback names that are events without an "on" prefix
        module_extensions: Extensions probed when an import omits one
    """

    runtime_root: Path
    styledef_root: Path
    package_prefix: str = "@wavemaker/app-rn-runtime"
    max_inheritance_depth: int = MAX_INHERITANCE_DEPTH
    generic_base_classes: FrozenSet[str] = frozenset(
        {"BaseComponent", "Component", "PureComponent", "React.Component", "React.PureComponent"}
    )
    define_property_calls: Tuple[str, ...] = ("_defineProperty", "__publicField")
    event_callbacks: FrozenSet[str] = frozenset(
        {"callback", "handler", "listener", "renderItem", "renderHeader",
         "renderFooter", "getDisplayExpression"}
    )
    module_extensions: Tuple[str, ...] = (".js", ".jsx", ".ts", ".tsx")
    props_suffix: str = ".props.js"
    styles_suffix: str = ".styles.js"
    styledef_subdir: str = "src/theme/components"
    styledef_suffix: str = ".styledef.ts"
    catalog_overrides: Dict[str, Dict[str, str]] = field(default_factory=dict, compare=False)

    @classmethod
    def from_config(
        cls,
        project_root: Path,
        runtime_root: Optional[Path] = None,
        styledef_root: Optional[Path] = None,
    ) -> "EngineSettings":
        """Load from .widgetscope/config.yaml, with explicit roots taking precedence."""
        paths = get_paths_config(project_root)
        resolution = get_resolution_config(project_root)
        styles = get_styles_config(project_root)

        return cls(
            runtime_root=Path(runtime_root) if runtime_root else _anchor(project_root, paths["runtime_root"]),
            styledef_root=Path(styledef_root) if styledef_root else _anchor(project_root, paths["styledef_root"]),
            package_prefix=str(resolution["package_prefix"]).rstrip("/"),
            max_inheritance_depth=int(resolution["max_inheritance_depth"]),
            generic_base_classes=frozenset(resolution["generic_base_classes"]),
            define_property_calls=tuple(resolution["define_property_calls"]),
            event_callbacks=frozenset(resolution["event_callbacks"]),
            module_extensions=tuple(resolution["module_extensions"]),
            props_suffix=styles["props_suffix"],
            styles_suffix=styles["styles_suffix"],
            styledef_subdir=styles["styledef_subdir"],
            styledef_suffix=styles["styledef_suffix"],
            catalog_overrides=get_catalog_overrides(project_root),
        )
