"""
Parent class resolution.

Finds the class a compiled file extends and follows the file's import
statements to the file that defines that parent. Every walker (chain,
props, styles) goes through resolve_parent() so they all agree on what
"the parent file" is.

Supported import shapes:
- import Parent from './base'
- import { Parent } from '../base' / import { Base as Parent } from '...'
- import Default, { Parent } from '...'
- import * as NS from '...'  (for "extends NS.Parent")
- const Parent = require('...') / _interopRequireDefault(require('...'))

Supported path shapes:
- relative ("./", "../"), resolved against the importing file's directory
- package-style ("<package_prefix>/..."), resolved under runtime_root
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, List, Optional, Tuple

from widgetscope.engine.models import TerminationReason
from widgetscope.engine.reader import normalize_path
from widgetscope.engine.settings import EngineSettings

logger = logging.getLogger(__name__)

EXTENDS_PATTERN = re.compile(r"\bclass\s+([\w$]+)\s+extends\s+([\w$]+(?:\.[\w$]+)*)")

_DEFAULT_IMPORT = re.compile(
    r"import\s+([\w$]+)\s*(?:,\s*\{[^}]*\})?\s*from\s*['\"]([^'\"]+)['\"]"
)
_NAMED_IMPORT = re.compile(
    r"import\s+(?:[\w$]+\s*,\s*)?\{([^}]+)\}\s*from\s*['\"]([^'\"]+)['\"]"
)
_NAMESPACE_IMPORT = re.compile(
    r"import\s+\*\s+as\s+([\w$]+)\s+from\s*['\"]([^'\"]+)['\"]"
)
_ALIAS = re.compile(r"\s+as\s+")
_REQUIRE = re.compile(
    r"(?:const|let|var)\s+([\w$]+)\s*=\s*(?:_interopRequire(?:Default|Wildcard)\s*\(\s*)?"
    r"require\s*\(\s*['\"]([^'\"]+)['\"]\s*\)"
)


def extract_class_declaration(text: str) -> Optional[Tuple[str, str]]:
    """Return (class name, parent name) of the first "class X extends Y", if any."""
    match = EXTENDS_PATTERN.search(text)
    if not match:
        return None
    return match.group(1), match.group(2)


def extract_import_bindings(text: str) -> Dict[str, str]:
    """
    Map every locally bound import name to its module specifier.

    The first binding of a name wins, matching module semantics where a
    duplicate binding is a syntax error anyway.
    """
    bindings: Dict[str, str] = {}

    def bind(name: str, source: str) -> None:
        name = name.strip()
        if name and name not in bindings:
            bindings[name] = source

    for match in _DEFAULT_IMPORT.finditer(text):
        bind(match.group(1), match.group(2))

    for match in _NAMED_IMPORT.finditer(text):
        source = match.group(2)
        for spec in match.group(1).split(","):
            spec = spec.strip()
            if not spec or spec.startswith("type "):
                continue
            # "Base as Parent" binds Parent locally
            bind(_ALIAS.split(spec)[-1], source)

    for match in _NAMESPACE_IMPORT.finditer(text):
        bind(match.group(1), match.group(2))

    for match in _REQUIRE.finditer(text):
        bind(match.group(1), match.group(2))

    return bindings


@dataclass(frozen=True)
class ParentLink:
    """
    Outcome of resolving a file's parent class.

    Attributes:
        class_name: Class declared in the file (None if no extends clause)
        parent_name: Declared parent class name
        parent_path: Resolved file defining the parent (None if unresolved)
        is_generic: Parent is a framework root; never expanded further
        reason: Why resolution stopped, when parent_path is None
    """

    class_name: Optional[str] = None
    parent_name: Optional[str] = None
    parent_path: Optional[Path] = None
    is_generic: bool = False
    reason: Optional[TerminationReason] = None


class ParentResolver:
    """Resolves a file's parent class to a concrete file path."""

    def __init__(self, settings: EngineSettings, exists: Callable[[Path], bool]):
        self.settings = settings
        self.exists = exists

    def module_base(self, specifier: str, importing_file: Path) -> Optional[Path]:
        """Map an import specifier to a path without extension probing."""
        if specifier.startswith("."):
            return normalize_path(importing_file.parent / specifier)

        prefix = self.settings.package_prefix
        if specifier == prefix:
            return normalize_path(self.settings.runtime_root)
        if specifier.startswith(prefix + "/"):
            return normalize_path(self.settings.runtime_root / specifier[len(prefix) + 1:])

        # Bare module (react, react-native, ...) - nothing local to follow
        return None

    def candidates(self, base: Path) -> List[Path]:
        """Files an extension-less import may refer to, in probing order."""
        found = [base]
        found.extend(Path(str(base) + ext) for ext in self.settings.module_extensions)
        found.extend(base / f"index{ext}" for ext in self.settings.module_extensions)
        return found

    def resolve_module(self, specifier: str, importing_file: Path) -> Optional[Path]:
        base = self.module_base(specifier, importing_file)
        if base is None:
            return None
        for candidate in self.candidates(base):
            if self.exists(candidate):
                return candidate
        return None

    def is_generic(self, parent_name: str) -> bool:
        """Generic roots match by full name or by the member name of "ns.Base"."""
        generic = self.settings.generic_base_classes
        return parent_name in generic or parent_name.rsplit(".", 1)[-1] in generic

    def resolve_parent(self, file_path: Path, text: str) -> ParentLink:
        """
        Determine the parent class of file_path and the file defining it.

        Never raises: every failure is reported through ParentLink.reason.
        """
        declaration = extract_class_declaration(text)
        if declaration is None:
            return ParentLink(reason=TerminationReason.NO_PARENT)

        class_name, parent_name = declaration
        if self.is_generic(parent_name):
            return ParentLink(
                class_name=class_name,
                parent_name=parent_name,
                is_generic=True,
                reason=TerminationReason.GENERIC_BASE,
            )

        binding = parent_name.split(".")[0]
        specifier = extract_import_bindings(text).get(binding)
        if specifier is None:
            logger.debug("%s: no import binding for parent %s", file_path, parent_name)
            return ParentLink(
                class_name=class_name,
                parent_name=parent_name,
                reason=TerminationReason.UNRESOLVED_IMPORT,
            )

        parent_path = self.resolve_module(specifier, file_path)
        if parent_path is None:
            logger.debug("%s: import '%s' for %s does not resolve", file_path, specifier, parent_name)
            return ParentLink(
                class_name=class_name,
                parent_name=parent_name,
                reason=TerminationReason.UNRESOLVED_IMPORT,
            )

        return ParentLink(class_name=class_name, parent_name=parent_name, parent_path=parent_path)
