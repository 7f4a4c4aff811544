"""
PyPush Token Evaluator

Classifies atomic tokens popped from the exec stack. Classes are tested in a
fixed priority order and the first match wins:

1. integer literal (base 10, signed 64-bit range)
2. float literal
3. boolean literal
4. instruction reference ``stack.operation``
5. name

Key classes:
- TokenKind: The five token classes
- Token: A classified token with its parsed value
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1

_INTEGER_RE = re.compile(r"[+-]?[0-9]+\Z")
_FLOAT_RE = re.compile(
    r"[+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|inf|infinity|nan)\Z",
    re.IGNORECASE,
)


class TokenKind(Enum):
    INTEGER = "integer"
    FLOAT = "float"
    BOOLEAN = "boolean"
    INSTRUCTION = "instruction"
    NAME = "name"


@dataclass(frozen=True)
class Token:
    """
    A classified atom.

    ``value`` holds the parsed literal for literal kinds and the lower-cased
    text for names. ``stack``/``operation`` are set for instruction references.
    """
    kind: TokenKind
    text: str
    value: Any = None
    stack: Optional[str] = None
    operation: Optional[str] = None


def wrap_int64(value: int) -> int:
    """Wrap an arbitrary integer into the signed 64-bit range."""
    value &= 0xFFFFFFFFFFFFFFFF
    if value > INT64_MAX:
        value -= 2 ** 64
    return value


def parse_integer(text: str) -> Optional[int]:
    if not _INTEGER_RE.match(text):
        return None
    value = int(text)
    if value < INT64_MIN or value > INT64_MAX:
        return None
    return value


def parse_float(text: str) -> Optional[float]:
    if not _FLOAT_RE.match(text):
        return None
    return float(text)


def parse_boolean(text: str) -> Optional[bool]:
    lowered = text.lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    return None


def classify(text: str) -> Token:
    """Classify an atom's token text."""
    integer = parse_integer(text)
    if integer is not None:
        return Token(TokenKind.INTEGER, text, integer)

    number = parse_float(text)
    if number is not None:
        return Token(TokenKind.FLOAT, text, number)

    boolean = parse_boolean(text)
    if boolean is not None:
        return Token(TokenKind.BOOLEAN, text, boolean)

    if "." in text:
        stack, _, operation = text.partition(".")
        return Token(TokenKind.INSTRUCTION, text,
                     stack=stack.lower(), operation=operation.lower())

    return Token(TokenKind.NAME, text, text.lower())
