"""
PyPush Typed Stack

A LIFO sequence of runtime values of one kind plus the instruction registry
of that kind. The registry is fixed when the stack is built.

Depth arguments count from the top (0 is the top item) and are clamped into
range rather than rejected.

Key classes:
- Stack: Ordered value storage with the standard Push manipulation primitives
- EMPTY: Sentinel returned by pop/peek on an empty stack
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Callable, Dict, Iterator, List, Mapping, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from pypush.runtime.interpreter import Interpreter

Instruction = Callable[["Interpreter"], None]


class _Empty:
    """Value returned when reading from an empty stack."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "EMPTY"


EMPTY = _Empty()


class Stack:
    """
    Typed Push stack.

    The instruction registry is exposed read-only through ``instructions``.
    """

    def __init__(self,
                 name: str,
                 instructions: Optional[Dict[str, Instruction]] = None):
        self.name = name
        self.items: List[Any] = []
        self._instructions = MappingProxyType(dict(instructions or {}))

    @property
    def instructions(self) -> Mapping[str, Instruction]:
        return self._instructions

    def push(self, value: Any) -> None:
        self.items.append(value)

    def pop(self) -> Any:
        if not self.items:
            return EMPTY
        return self.items.pop()

    def peek(self) -> Any:
        if not self.items:
            return EMPTY
        return self.items[-1]

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[Any]:
        """Iterate from the top of the stack down."""
        return reversed(self.items)

    def dup(self) -> None:
        if not self.items:
            return
        self.items.append(self.items[-1])

    def swap(self) -> None:
        if len(self.items) < 2:
            return
        self.items[-1], self.items[-2] = self.items[-2], self.items[-1]

    def rot(self) -> None:
        """Pull the third item to the top: ``a b c`` becomes ``b c a``."""
        if len(self.items) < 3:
            return
        c = self.items.pop()
        b = self.items.pop()
        a = self.items.pop()
        self.items.extend((b, c, a))

    def flush(self) -> None:
        self.items.clear()

    def _index(self, depth: int, size: int) -> int:
        """Translate a clamped depth-from-top into a list index."""
        depth = max(0, min(depth, size - 1))
        return size - 1 - depth

    def shove(self, value: Any, depth: int) -> None:
        """Insert ``value`` so that ``depth`` items sit above it."""
        depth = max(0, min(depth, len(self.items)))
        self.items.insert(len(self.items) - depth, value)

    def yank(self, depth: int) -> None:
        """Move the item at ``depth`` to the top."""
        if not self.items:
            return
        index = self._index(depth, len(self.items))
        self.items.append(self.items.pop(index))

    def yankdup(self, depth: int) -> None:
        """Copy the item at ``depth`` to the top."""
        if not self.items:
            return
        index = self._index(depth, len(self.items))
        self.items.append(self.items[index])

    def snapshot(self) -> List[Any]:
        """Return the items top first."""
        return list(reversed(self.items))

    def __repr__(self) -> str:
        return f"Stack({self.name!r}, {self.items!r})"
