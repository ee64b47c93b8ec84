"""
Property extractor.

Compiled widget files keep no type information, but their property
initializers survive as calls of the shape

    _defineProperty(this, "caption", "Button");
    __publicField(this, "onTap", () => {});

Each call yields one PropertyRecord, in source order, with a type inferred
from the literal text of the default value.
"""
from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterable, List

from widgetscope.engine.models import InferredType, PropertyRecord
from widgetscope.engine.scanner import QUOTES, scan_argument

logger = logging.getLogger(__name__)

_NULLISH = {"null", "undefined", "void 0"}
_INTEGER = re.compile(r"^-?\d+$")
_FUNCTION_KEYWORD = re.compile(r"\bfunction\b")

_LINE_COMMENT = re.compile(r"//\s*(.*?)\s*$")


def infer_type(default_expr: str) -> InferredType:
    """
    Infer a property type from default-value text.

    Checks run top to bottom and the first match wins, so a quoted string
    containing "=>" is still a string.

    | default text                     | type     |
    |----------------------------------|----------|
    | null / undefined / void 0        | any      |
    | true / false                     | boolean  |
    | '...' / "..." / `...`            | string   |
    | bare integer                     | number   |
    | contains "=>" or "function"      | function |
    | starts with "["                  | array    |
    | starts with "{"                  | object   |
    | anything else                    | any      |
    """
    text = default_expr.strip()
    if text in _NULLISH:
        return InferredType.ANY
    if text in ("true", "false"):
        return InferredType.BOOLEAN
    if len(text) >= 2 and text[0] in QUOTES and text[-1] == text[0]:
        return InferredType.STRING
    if _INTEGER.match(text):
        return InferredType.NUMBER
    if "=>" in text or _FUNCTION_KEYWORD.search(text):
        return InferredType.FUNCTION
    if text.startswith("["):
        return InferredType.ARRAY
    if text.startswith("{"):
        return InferredType.OBJECT
    return InferredType.ANY


def _preceding_comment(text: str, call_start: int) -> str:
    """Comment text immediately above a call, if any."""
    before = text[:call_start].rstrip()
    if before.endswith("*/"):
        body = before[before.rfind("/*") + 2:-2]
        lines = [line.strip().lstrip("*").strip() for line in body.splitlines()]
        return " ".join(line for line in lines if line)
    last_line = before.rsplit("\n", 1)[-1]
    line = _LINE_COMMENT.search(last_line)
    if line and last_line.lstrip().startswith("//"):
        return line.group(1)
    return ""


class PropertyExtractor:
    """Extracts PropertyRecords from one compiled file."""

    def __init__(self, define_calls: Iterable[str] = ("_defineProperty", "__publicField")):
        names = "|".join(re.escape(name) for name in define_calls)
        self._pattern = re.compile(
            r"\b(?:" + names + r")\s*\(\s*(?:this|_this\d*)\s*,\s*"
            r"(['\"])([^'\"]+)\1\s*,\s*"
        )

    def extract(self, text: str, source_file: Path) -> List[PropertyRecord]:
        """
        Extract property records from file text.

        Args:
            text: Compiled file content
            source_file: Path recorded on every record

        Returns:
            One record per initializer call, in source order; an empty list
            when the file has none
        """
        records = []
        for match in self._pattern.finditer(text):
            scanned = scan_argument(text, match.end())
            if scanned is None:
                logger.debug("%s: unterminated initializer for '%s'", source_file, match.group(2))
                continue
            default_expr, _ = scanned
            records.append(
                PropertyRecord(
                    name=match.group(2),
                    type=infer_type(default_expr),
                    default_value=default_expr,
                    source_file=source_file,
                    description=_preceding_comment(text, match.start()),
                )
            )
        return records
