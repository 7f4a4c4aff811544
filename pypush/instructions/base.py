"""
PyPush Instruction Registry

Registry type shared by the typed libraries plus the stack-manipulation
instructions every stack type offers.
"""

from __future__ import annotations

from typing import Callable, Dict, Iterable, TYPE_CHECKING

from pypush.runtime.code import Code, points, value_to_code

if TYPE_CHECKING:
    from pypush.runtime.interpreter import Interpreter

Instruction = Callable[["Interpreter"], None]

STACK_INSTRUCTIONS = (
    "=", "define", "dup", "flush", "pop", "rot", "shove", "stackdepth", "swap", "yank", "yankdup",
)


class InstructionSet:
    """
    Name -> instruction registry for one stack type.

    Instructions are registered with the ``register`` decorator::

        integer = InstructionSet("integer")

        @integer.register("+")
        def integer_add(interp): ...
    """

    def __init__(self, stack: str):
        self.stack = stack
        self.instructions: Dict[str, Instruction] = {}

    def register(self, name: str) -> Callable[[Instruction], Instruction]:
        def decorator(fn: Instruction) -> Instruction:
            self.add(name, fn)
            return fn
        return decorator

    def add(self, name: str, fn: Instruction) -> None:
        name = name.lower()
        if name in self.instructions:
            raise ValueError(f"duplicate instruction {self.stack}.{name}")
        self.instructions[name] = fn

    def __contains__(self, name: str) -> bool:
        return name in self.instructions

    def __len__(self) -> int:
        return len(self.instructions)


def stack_ok(interp: "Interpreter", name: str, depth: int = 0) -> bool:
    """True if stack ``name`` is enabled and holds at least ``depth`` items."""
    stack = interp.stacks.get(name)
    return stack is not None and len(stack) >= depth


def fits(interp: "Interpreter", code: Code) -> bool:
    """True if ``code`` respects the program size limit."""
    return points(code) <= interp.options.max_points_in_program


def register_stack_instructions(iset: InstructionSet, include: Iterable[str] = STACK_INSTRUCTIONS) -> None:
    """Register the generic stack-manipulation instructions for ``iset.stack``."""
    name = iset.stack
    include = set(include)
    # Index-taking instructions pop their depth from the integer stack; when
    # that is the stack being manipulated the depth item is not an operand.
    extra = 1 if name == "integer" else 0

    def dup(interp):
        if stack_ok(interp, name, 1):
            interp.stacks[name].dup()

    def flush(interp):
        interp.stacks[name].flush()

    def pop(interp):
        if stack_ok(interp, name, 1):
            interp.stacks[name].pop()

    def rot(interp):
        interp.stacks[name].rot()

    def swap(interp):
        interp.stacks[name].swap()

    def stackdepth(interp):
        if not stack_ok(interp, "integer"):
            return
        interp.stacks["integer"].push(len(interp.stacks[name]))

    def equal(interp):
        if not stack_ok(interp, name, 2) or not stack_ok(interp, "boolean"):
            return
        a = interp.stacks[name].pop()
        b = interp.stacks[name].pop()
        interp.stacks["boolean"].push(b == a)

    def shove(interp):
        if not stack_ok(interp, "integer", 1 + extra) or not stack_ok(interp, name, 1):
            return
        depth = interp.stacks["integer"].pop()
        value = interp.stacks[name].pop()
        interp.stacks[name].shove(value, depth)

    def yank(interp):
        if not stack_ok(interp, "integer", 1 + extra) or not stack_ok(interp, name, 1):
            return
        depth = interp.stacks["integer"].pop()
        interp.stacks[name].yank(depth)

    def yankdup(interp):
        if not stack_ok(interp, "integer", 1 + extra) or not stack_ok(interp, name, 1):
            return
        depth = interp.stacks["integer"].pop()
        interp.stacks[name].yankdup(depth)

    def define(interp):
        if not stack_ok(interp, "name", 1) or not stack_ok(interp, name, 1):
            return
        key = interp.stacks["name"].pop()
        value = interp.stacks[name].pop()
        interp.define(key, value_to_code(value))

    generic = {
        "=": equal,
        "define": define,
        "dup": dup,
        "flush": flush,
        "pop": pop,
        "rot": rot,
        "shove": shove,
        "stackdepth": stackdepth,
        "swap": swap,
        "yank": yank,
        "yankdup": yankdup,
    }
    for op, fn in generic.items():
        if op in include:
            fn.__name__ = f"{name}_{op}"
            iset.add(op, fn)
