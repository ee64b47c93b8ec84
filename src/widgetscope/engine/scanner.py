"""
Bracket- and string-aware scanning over compiled JavaScript text.

Just enough lexing to take a call argument or an object literal's keys
whole without a real parser: string literals, comments and nested
brackets are skipped; regular-expression literals are not recognised.
"""

import re
from typing import List, Optional, Tuple

OPENERS = {"(": ")", "[": "]", "{": "}"}
CLOSERS = {")", "]", "}"}
QUOTES = {"'", '"', "`"}

_IDENTIFIER = re.compile(r"[A-Za-z_$][\w$]*")


def skip_string(text: str, start: int) -> int:
    """Index just past the string literal opening at start."""
    quote = text[start]
    i = start + 1
    while i < len(text):
        if text[i] == "\\":
            i += 2
            continue
        if text[i] == quote:
            return i + 1
        i += 1
    return len(text)


def is_comment_start(text: str, i: int) -> bool:
    return text[i] == "/" and i + 1 < len(text) and text[i + 1] in "/*"


def skip_comment(text: str, start: int) -> int:
    """Index just past the comment opening at start."""
    if text[start + 1] == "/":
        end = text.find("\n", start)
        return len(text) if end == -1 else end
    end = text.find("*/", start + 2)
    return len(text) if end == -1 else end + 2


def scan_argument(text: str, start: int) -> Optional[Tuple[str, int]]:
    """
    Scan one call argument starting at start.

    Stops at a top-level "," or ")" so nested calls, object literals and
    arrow functions are taken whole.

    Returns:
        (argument text, index of the terminating character), or None if the
        text ends first or brackets do not balance
    """
    stack: List[str] = []
    i = start
    while i < len(text):
        ch = text[i]
        if ch in QUOTES:
            i = skip_string(text, i)
            continue
        if is_comment_start(text, i):
            i = skip_comment(text, i)
            continue
        if ch in OPENERS:
            stack.append(OPENERS[ch])
        elif ch in CLOSERS:
            if not stack:
                if ch == ")":
                    return text[start:i].strip(), i
                return None
            if stack.pop() != ch:
                return None
        elif ch == "," and not stack:
            return text[start:i].strip(), i
        i += 1
    return None


def _next_significant(text: str, i: int) -> str:
    while i < len(text) and text[i].isspace():
        i += 1
    return text[i] if i < len(text) else ""


def top_level_keys(text: str, open_brace: int) -> List[str]:
    """
    Keys of the object literal whose "{" is at open_brace.

    Only keys at the literal's own level are returned; nested objects,
    spreads and computed keys are skipped.
    """
    keys: List[str] = []
    depth = 0
    expecting_key = True
    i = open_brace + 1
    while i < len(text):
        ch = text[i]
        if ch in QUOTES:
            end = skip_string(text, i)
            if depth == 0 and expecting_key and _next_significant(text, end) == ":":
                keys.append(text[i + 1:end - 1])
            if depth == 0:
                expecting_key = False
            i = end
            continue
        if is_comment_start(text, i):
            i = skip_comment(text, i)
            continue
        if ch in OPENERS:
            depth += 1
        elif ch in CLOSERS:
            if depth == 0:
                break
            depth -= 1
        elif depth == 0 and ch == ",":
            expecting_key = True
        elif depth == 0 and expecting_key and not ch.isspace():
            match = _IDENTIFIER.match(text, i)
            if match:
                if _next_significant(text, match.end()) in (":", ",", "}"):
                    keys.append(match.group(0))
                expecting_key = False
                i = match.end()
                continue
            expecting_key = False
        i += 1
    return keys
