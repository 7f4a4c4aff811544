"""
PyPush Definitions Table

Global name bindings. Keys are case-insensitive; entries are created by the
``define`` family of instructions, overwritten on rebinding and never removed.

Key classes:
- Definitions: Mapping from lower-cased name to program tree
"""

from __future__ import annotations

from typing import Dict, Iterator, List, Optional

from pypush.runtime.code import Code, code_to_text


class Definitions:
    """
    Name -> program tree bindings for one interpreter.

    Trees are immutable, so storing the caller's tree is a value copy.
    """

    def __init__(self):
        self._bindings: Dict[str, Code] = {}

    def define(self, name: str, code: Code) -> None:
        """Bind (or rebind) a name."""
        self._bindings[name.lower()] = code

    def lookup(self, name: str) -> Optional[Code]:
        """Return the tree bound to ``name`` or None."""
        return self._bindings.get(name.lower())

    def __contains__(self, name: str) -> bool:
        return name.lower() in self._bindings

    def __len__(self) -> int:
        return len(self._bindings)

    def __iter__(self) -> Iterator[str]:
        return iter(self._bindings)

    def names(self) -> List[str]:
        """Bound names in binding order."""
        return list(self._bindings)

    def snapshot(self) -> Dict[str, str]:
        """Create a text snapshot of every binding."""
        return {name: code_to_text(code) for name, code in self._bindings.items()}
