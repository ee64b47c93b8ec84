"""
widgetscope Configuration Loader.

Loads configuration from .widgetscope/config.yaml for library roots and
resolution behaviour.
"""

import logging
from pathlib import Path
from typing import Dict, Any

import yaml

logger = logging.getLogger(__name__)

CONFIG_RELATIVE_PATH = Path(".widgetscope") / "config.yaml"


def load_config(project_root: Path) -> Dict[str, Any]:
    """
    Load .widgetscope/config.yaml configuration file.

    Args:
        project_root: Project root path

    Returns:
        Parsed configuration dict, or empty dict if file doesn't exist

    Example config:
        paths:
          runtime_root: node_modules/@wavemaker/app-rn-runtime
          styledef_root: node_modules/@wavemaker/rn-codegen
        resolution:
          max_inheritance_depth: 5
          generic_base_classes:
            - BaseComponent
        catalog:
          barcodescanner:
            category: device
            id: barcodescanner
    """
    config_path = project_root / CONFIG_RELATIVE_PATH

    if not config_path.exists():
        return {}

    try:
        with open(config_path, encoding="utf-8") as f:
            config = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        logger.warning("Ignoring unreadable config %s: %s", config_path, e)
        return {}

    return config if isinstance(config, dict) else {}


def _same_shape(value: Any, default_value: Any) -> bool:
    """True when a configured value has the type of its default."""
    if isinstance(default_value, list):
        return isinstance(value, list) and all(isinstance(item, str) for item in value)
    if isinstance(default_value, int):
        # bool is an int subclass; "yes" is not a depth
        return isinstance(value, int) and not isinstance(value, bool) and value >= 0
    return isinstance(value, type(default_value))


def _section(config: Dict[str, Any], name: str, defaults: Dict[str, Any]) -> Dict[str, Any]:
    """
    Return a config section with defaults applied for missing keys.

    A key whose value does not have the type of its default (a string where
    a list is expected, a non-integer depth) is replaced by the default.
    """
    section = config.get(name) or {}
    if not isinstance(section, dict):
        logger.warning("Config section '%s' is not a mapping, using defaults", name)
        section = {}

    merged = dict(section)
    for key, default_value in defaults.items():
        if key not in merged:
            merged[key] = default_value
        elif not _same_shape(merged[key], default_value):
            logger.warning(
                "Config key '%s.%s' should be a %s, got %r; using default",
                name, key, type(default_value).__name__, merged[key],
            )
            merged[key] = default_value
    return merged


def get_paths_config(project_root: Path) -> Dict[str, Any]:
    """
    Get library root paths.

    Args:
        project_root: Project root path

    Returns:
        Paths configuration dict with defaults applied
    """
    defaults = {
        "runtime_root": "node_modules/@wavemaker/app-rn-runtime",
        "styledef_root": "node_modules/@wavemaker/rn-codegen",
    }
    return _section(load_config(project_root), "paths", defaults)


def get_resolution_config(project_root: Path) -> Dict[str, Any]:
    """
    Get inheritance and property resolution configuration.

    Args:
        project_root: Project root path

    Returns:
        Resolution configuration with defaults
    """
    defaults = {
        "package_prefix": "@wavemaker/app-rn-runtime",
        "max_inheritance_depth": 5,
        "generic_base_classes": [
            "BaseComponent",
            "Component",
            "PureComponent",
            "React.Component",
            "React.PureComponent",
        ],
        "define_property_calls": ["_defineProperty", "__publicField"],
        "event_callbacks": [
            "callback",
            "handler",
            "listener",
            "renderItem",
            "renderHeader",
            "renderFooter",
            "getDisplayExpression",
        ],
        "module_extensions": [".js", ".jsx", ".ts", ".tsx"],
    }
    return _section(load_config(project_root), "resolution", defaults)


def get_styles_config(project_root: Path) -> Dict[str, Any]:
    """
    Get style file naming configuration.

    Args:
        project_root: Project root path

    Returns:
        Styles configuration with defaults
    """
    defaults = {
        "props_suffix": ".props.js",
        "styles_suffix": ".styles.js",
        "styledef_subdir": "src/theme/components",
        "styledef_suffix": ".styledef.ts",
    }
    return _section(load_config(project_root), "styles", defaults)


def get_catalog_overrides(project_root: Path) -> Dict[str, Dict[str, str]]:
    """
    Get project-specific catalog entries.

    Entries are merged over the bundled catalog, so a project can add
    widgets or move one to a different category.
    """
    catalog = load_config(project_root).get("catalog") or {}
    if not isinstance(catalog, dict):
        return {}
    return {
        str(name): entry
        for name, entry in catalog.items()
        if isinstance(entry, dict) and entry.get("category")
    }
