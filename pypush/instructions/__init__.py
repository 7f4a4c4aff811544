"""
PyPush Instruction Libraries

Every instruction is a zero-argument operation on the interpreter: it receives
the interpreter as its only parameter and may read or write any stack and the
definitions table.

Library protocol:
- All preconditions (depth of every stack touched, enabled stacks, value
  ranges, non-zero divisors, growth limits) are checked before anything is
  popped or pushed.
- If any precondition fails the instruction does nothing. Instructions never
  raise for ordinary precondition failures.

Key classes:
- InstructionSet: Name -> instruction registry of one stack type
- build_instruction_sets: Registries for every stack type
"""

from __future__ import annotations

from typing import Callable, Dict, TYPE_CHECKING

from pypush.instructions.base import InstructionSet, register_stack_instructions
from pypush.instructions.booleans import BOOLEAN_INSTRUCTIONS
from pypush.instructions.codes import CODE_INSTRUCTIONS
from pypush.instructions.execs import EXEC_INSTRUCTIONS
from pypush.instructions.floats import FLOAT_INSTRUCTIONS
from pypush.instructions.integers import INTEGER_INSTRUCTIONS
from pypush.instructions.names import NAME_INSTRUCTIONS

if TYPE_CHECKING:
    from pypush.runtime.interpreter import Interpreter

Instruction = Callable[["Interpreter"], None]

LIBRARIES = {
    "integer": INTEGER_INSTRUCTIONS,
    "float": FLOAT_INSTRUCTIONS,
    "boolean": BOOLEAN_INSTRUCTIONS,
    "name": NAME_INSTRUCTIONS,
    "exec": EXEC_INSTRUCTIONS,
    "code": CODE_INSTRUCTIONS,
}


def build_instruction_sets() -> Dict[str, Dict[str, Instruction]]:
    """Return a fresh ``stack -> {operation -> instruction}`` mapping."""
    return {stack: dict(library.instructions) for stack, library in LIBRARIES.items()}


__all__ = [
    "InstructionSet",
    "register_stack_instructions",
    "build_instruction_sets",
    "LIBRARIES",
]
