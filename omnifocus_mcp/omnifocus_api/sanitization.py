"""Validation and escaping for free text spliced into JXA scripts.

Every user-supplied string that ends up inside a generated script goes through
:func:`sanitize_input` first.  The result is safe to place between double
quotes in JavaScript source.

The deny-list below is a heuristic, not a complete model of what the JXA
engine will execute.
"""
from __future__ import annotations

import re
from typing import Any, List, Pattern, Sequence, Tuple

__all__ = [
    "SanitizationError",
    "DEFAULT_MAX_LENGTH",
    "DEFAULT_MAX_ITEMS",
    "MAX_CONTROL_CHARACTERS",
    "DANGEROUS_PATTERNS",
    "escape_js_string",
    "sanitize_input",
    "sanitize_array",
]

DEFAULT_MAX_LENGTH = 500
DEFAULT_MAX_ITEMS = 100
MAX_CONTROL_CHARACTERS = 10

_CONTROL_CHARS = re.compile(r"[\x00-\x1F\x7F]")

# Order matters: the first matching pattern is the one reported.
DANGEROUS_PATTERNS: Sequence[Tuple[Pattern[str], str]] = (
    (re.compile(r"\$\{", re.IGNORECASE), "template literal injection"),
    (re.compile(r"eval\s*\(", re.IGNORECASE), "eval() function call"),
    (re.compile(r"Function\s*\(", re.IGNORECASE), "Function() constructor"),
    (re.compile(r"require\s*\(", re.IGNORECASE), "require() function call"),
    (re.compile(r"import\s+", re.IGNORECASE), "import statement"),
    (re.compile(r"constructor", re.IGNORECASE), "constructor access"),
    (re.compile(r"__proto__", re.IGNORECASE), "prototype pollution"),
    (re.compile(r"exec\s*\(", re.IGNORECASE), "exec() function call"),
    (re.compile(r"spawn\s*\(", re.IGNORECASE), "spawn() function call"),
    (re.compile(r"process\.", re.IGNORECASE), "process object access"),
    (re.compile(r"global\.", re.IGNORECASE), "global object access"),
)

# Backslash must come first so later escapes are not doubled.
_ESCAPES: Sequence[Tuple[str, str]] = (
    ("\\", "\\\\"),
    ('"', '\\"'),
    ("'", "\\'"),
    ("`", "\\`"),
    ("$", "\\$"),
    ("\n", "\\n"),
    ("\r", "\\r"),
    ("\t", "\\t"),
    ("\0", "\\0"),
)


class SanitizationError(ValueError):
    """Raised when a value is unsafe to embed in a generated script."""


def escape_js_string(text: str) -> str:
    """Escape *text* for a double-quoted JavaScript string literal.

    Not idempotent: escaping an already escaped string escapes it again.
    """
    for raw, escaped in _ESCAPES:
        text = text.replace(raw, escaped)
    return text


def sanitize_input(value: Any, max_length: int = DEFAULT_MAX_LENGTH) -> str:
    """Validate *value* and return it escaped for use inside a script.

    Checks run in a fixed order (type, length, control characters,
    dangerous patterns) and the first violation raises
    :class:`SanitizationError`.
    """
    if not isinstance(value, str):
        raise SanitizationError("Input must be a string")

    if len(value) > max_length:
        raise SanitizationError(
            f"Input exceeds maximum length of {max_length} characters"
        )

    if len(_CONTROL_CHARS.findall(value)) > MAX_CONTROL_CHARACTERS:
        raise SanitizationError("Input contains excessive control characters")

    for pattern, label in DANGEROUS_PATTERNS:
        if pattern.search(value):
            raise SanitizationError(
                f"Input contains potentially dangerous pattern: {label}"
            )

    return escape_js_string(value)


def sanitize_array(
    values: Any,
    max_length: int = DEFAULT_MAX_LENGTH,
    max_items: int = DEFAULT_MAX_ITEMS,
) -> List[str]:
    """Sanitize every element of *values*; the first bad element aborts."""
    if not isinstance(values, (list, tuple)):
        raise SanitizationError("Input must be an array")

    if len(values) > max_items:
        raise SanitizationError(
            f"Array exceeds maximum length of {max_items} items"
        )

    return [sanitize_input(item, max_length) for item in values]
