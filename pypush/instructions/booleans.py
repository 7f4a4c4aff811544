"""BOOLEAN instructions."""

from __future__ import annotations

from pypush.instructions.base import InstructionSet, register_stack_instructions, stack_ok

BOOLEAN_INSTRUCTIONS = InstructionSet("boolean")
register_stack_instructions(BOOLEAN_INSTRUCTIONS)

boolean = BOOLEAN_INSTRUCTIONS


@boolean.register("and")
def boolean_and(interp):
    if not stack_ok(interp, "boolean", 2):
        return
    a = interp.stacks["boolean"].pop()
    b = interp.stacks["boolean"].pop()
    interp.stacks["boolean"].push(a and b)


@boolean.register("or")
def boolean_or(interp):
    if not stack_ok(interp, "boolean", 2):
        return
    a = interp.stacks["boolean"].pop()
    b = interp.stacks["boolean"].pop()
    interp.stacks["boolean"].push(a or b)


@boolean.register("not")
def boolean_not(interp):
    if not stack_ok(interp, "boolean", 1):
        return
    interp.stacks["boolean"].push(not interp.stacks["boolean"].pop())


@boolean.register("fromfloat")
def boolean_fromfloat(interp):
    if not stack_ok(interp, "float", 1):
        return
    interp.stacks["boolean"].push(interp.stacks["float"].pop() != 0.0)


@boolean.register("frominteger")
def boolean_frominteger(interp):
    if not stack_ok(interp, "integer", 1):
        return
    interp.stacks["boolean"].push(interp.stacks["integer"].pop() != 0)


@boolean.register("rand")
def boolean_rand(interp):
    interp.stacks["boolean"].push(interp.random.random() < 0.5)
