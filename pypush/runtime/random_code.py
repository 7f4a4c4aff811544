"""
PyPush Random Code Generation

Builds random program trees from the enabled instructions and ephemeral
random constants (ERCs). All draws come from the interpreter's seeded random
source, so a fixed seed reproduces the same code.

Key functions:
- random_code: Random tree of at most ``max_points`` points
- random_code_with_size: Random tree of exactly ``size`` points
- random_name: Random NAME constant, new or previously minted
- new_name: Mint a name that has not been generated before
"""

from __future__ import annotations

import string
from typing import List, TYPE_CHECKING

from pypush.runtime.code import Atom, Code, CodeList, format_float

if TYPE_CHECKING:
    from pypush.runtime.interpreter import Interpreter

NAME_LENGTH = 6

# Placeholders in the atom pool that stand for a freshly drawn constant
_ERC_KINDS = ("integer", "float", "boolean", "name")


def new_name(interp: "Interpreter") -> str:
    """Mint a random name that differs from every name generated so far."""
    seen = set(interp.generated_names)
    while True:
        name = "_" + "".join(interp.random.choice(string.ascii_lowercase) for _ in range(NAME_LENGTH))
        if name not in seen:
            interp.generated_names.append(name)
            return name


def random_name(interp: "Interpreter") -> str:
    """
    Draw a NAME constant.

    With probability ``new_erc_name_probability`` (or when nothing has been
    minted yet) the name is new; otherwise a minted name is reused.
    """
    if not interp.generated_names or interp.random.random() < interp.options.new_erc_name_probability:
        return new_name(interp)
    return interp.random.choice(interp.generated_names)


def _erc(interp: "Interpreter", kind: str) -> Atom:
    options = interp.options
    if kind == "integer":
        return Atom(str(interp.random.randint(options.min_random_integer, options.max_random_integer)))
    if kind == "float":
        return Atom(format_float(interp.random.uniform(options.min_random_float, options.max_random_float)))
    if kind == "boolean":
        return Atom("true" if interp.random.random() < 0.5 else "false")
    return Atom(random_name(interp))


def random_atom(interp: "Interpreter") -> Atom:
    """Pick uniformly among enabled instructions and one ERC slot per enabled literal type."""
    ercs = [kind for kind in _ERC_KINDS if kind in interp.stacks]
    pool: List[str] = interp.instruction_names()
    choice = interp.random.randrange(len(pool) + len(ercs))
    if choice < len(pool):
        return Atom(pool[choice])
    return _erc(interp, ercs[choice - len(pool)])


def decompose(interp: "Interpreter", number: int, max_parts: int) -> List[int]:
    """Split ``number`` into at most ``max_parts`` random positive parts."""
    parts: List[int] = []
    while number > 1 and max_parts > 1:
        part = interp.random.randint(1, number - 1)
        parts.append(part)
        number -= part
        max_parts -= 1
    parts.append(number)
    return parts


def random_code_with_size(interp: "Interpreter", size: int) -> Code:
    if size <= 1:
        return random_atom(interp)
    sizes = decompose(interp, size - 1, size - 1)
    children = [random_code_with_size(interp, s) for s in sizes]
    interp.random.shuffle(children)
    return CodeList(tuple(children))


def random_code(interp: "Interpreter", max_points: int) -> Code:
    """Random tree whose size is drawn uniformly from [1, max_points]."""
    return random_code_with_size(interp, interp.random.randint(1, max(1, max_points)))
