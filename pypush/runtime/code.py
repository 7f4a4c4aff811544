"""
PyPush Program Tree

A Push program (or code value) is either an atomic token or an ordered list of
sub-programs. Trees are immutable, so pushing one onto several stacks or
binding it under a name never lets one holder observe a change made by another.

Key classes:
- Atom: A single non-empty token (literal, instruction reference or name)
- CodeList: An ordered, possibly empty, sequence of program trees
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple, Union

from pypush.errors import ParseError

_DELIMITERS = "()"


@dataclass(frozen=True)
class Atom:
    """Atomic token. Classification happens at execution time."""
    token: str

    def __post_init__(self):
        if not self.token:
            raise ValueError("an atom must hold a non-empty token")
        if any(ch.isspace() or ch in _DELIMITERS for ch in self.token):
            raise ValueError(f"invalid atom token: {self.token!r}")

    def __str__(self) -> str:
        return self.token


@dataclass(frozen=True)
class CodeList:
    """Composite node holding child trees in execution order."""
    items: Tuple["Code", ...] = ()

    def __post_init__(self):
        # Accept any iterable of trees but always store a tuple
        if not isinstance(self.items, tuple):
            object.__setattr__(self, "items", tuple(self.items))

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator["Code"]:
        return iter(self.items)

    def __str__(self) -> str:
        return code_to_text(self)


Code = Union[Atom, CodeList]


def points(code: Code) -> int:
    """Count the nodes in a tree: an atom is one point, a list is one plus its children."""
    if isinstance(code, Atom):
        return 1
    total = 1
    stack = list(code.items)
    while stack:
        item = stack.pop()
        total += 1
        if isinstance(item, CodeList):
            stack.extend(item.items)
    return total


def code_to_text(code: Code) -> str:
    """Render a tree in canonical Push syntax, e.g. ``(1 2 (integer.+))``."""
    if isinstance(code, Atom):
        return code.token
    parts: List[str] = []
    # Pending entries are trees, or None for a list's closing paren
    pending: List[Optional[Code]] = [code]
    needs_space = False
    while pending:
        item = pending.pop()
        if item is None:
            parts.append(")")
            needs_space = True
            continue
        if needs_space:
            parts.append(" ")
        if isinstance(item, Atom):
            parts.append(item.token)
            needs_space = True
            continue
        parts.append("(")
        needs_space = False
        pending.append(None)
        pending.extend(reversed(item.items))
    return "".join(parts)


def as_list(code: Code) -> CodeList:
    """Wrap an atom in a one-element list; lists are returned unchanged."""
    if isinstance(code, CodeList):
        return code
    return CodeList((code,))


def value_to_code(value) -> Code:
    """Convert a runtime value into the tree that reproduces it when executed."""
    if isinstance(value, (Atom, CodeList)):
        return value
    if isinstance(value, bool):
        return Atom("true" if value else "false")
    if isinstance(value, float):
        return Atom(format_float(value))
    return Atom(str(value))


def format_float(value: float) -> str:
    """Canonical text for a float that re-parses as a float literal."""
    text = repr(value)
    if text in ("inf", "-inf", "nan"):
        return text
    if "." not in text and "e" not in text:
        text += ".0"
    return text


def tokenize(text: str) -> Iterator[Tuple[str, int]]:
    """Yield ``(token, offset)`` pairs; parentheses are tokens of their own."""
    i = 0
    n = len(text)
    while i < n:
        ch = text[i]
        if ch.isspace():
            i += 1
            continue
        if ch in _DELIMITERS:
            yield ch, i
            i += 1
            continue
        start = i
        while i < n and not text[i].isspace() and text[i] not in _DELIMITERS:
            i += 1
        yield text[start:i], start


def parse_code(text: str) -> Code:
    """
    Parse program text into a program tree.

    A single top-level item is returned as is; zero or several top-level
    items are wrapped in a CodeList.

    Raises:
        ParseError: on unbalanced parentheses, naming the offending offset
    """
    stack: List[List[Code]] = [[]]
    opened: List[int] = []

    for token, offset in tokenize(text):
        if token == "(":
            stack.append([])
            opened.append(offset)
        elif token == ")":
            if len(stack) == 1:
                raise ParseError("unexpected ')'", offset)
            items = stack.pop()
            opened.pop()
            stack[-1].append(CodeList(tuple(items)))
        else:
            stack[-1].append(Atom(token))

    if opened:
        raise ParseError("unclosed '('", opened[-1])

    top = stack[0]
    if len(top) == 1:
        return top[0]
    return CodeList(tuple(top))
