"""
INTEGER instructions.

Binary operations take the top item as the right-hand operand: with ``3 4``
on the stack (4 on top), ``integer.-`` leaves ``-1``. Results wrap to the
signed 64-bit range.
"""

from __future__ import annotations

import math

from pypush.instructions.base import InstructionSet, register_stack_instructions, stack_ok
from pypush.runtime.evaluator import INT64_MAX, INT64_MIN, wrap_int64

INTEGER_INSTRUCTIONS = InstructionSet("integer")
register_stack_instructions(INTEGER_INSTRUCTIONS)

integer = INTEGER_INSTRUCTIONS


def _operands(interp):
    """Pop the top two integers, returning ``(second, top)``."""
    top = interp.stacks["integer"].pop()
    second = interp.stacks["integer"].pop()
    return second, top


def _trunc_div(a: int, b: int) -> int:
    """Integer division rounding toward zero."""
    q = abs(a) // abs(b)
    return q if (a < 0) == (b < 0) else -q


@integer.register("+")
def integer_add(interp):
    if not stack_ok(interp, "integer", 2):
        return
    a, b = _operands(interp)
    interp.stacks["integer"].push(wrap_int64(a + b))


@integer.register("-")
def integer_sub(interp):
    if not stack_ok(interp, "integer", 2):
        return
    a, b = _operands(interp)
    interp.stacks["integer"].push(wrap_int64(a - b))


@integer.register("*")
def integer_mul(interp):
    if not stack_ok(interp, "integer", 2):
        return
    a, b = _operands(interp)
    interp.stacks["integer"].push(wrap_int64(a * b))


@integer.register("/")
def integer_div(interp):
    if not stack_ok(interp, "integer", 2) or interp.stacks["integer"].peek() == 0:
        return
    a, b = _operands(interp)
    interp.stacks["integer"].push(wrap_int64(_trunc_div(a, b)))


@integer.register("%")
def integer_mod(interp):
    """Modulo; the result takes the sign of the divisor."""
    if not stack_ok(interp, "integer", 2) or interp.stacks["integer"].peek() == 0:
        return
    a, b = _operands(interp)
    interp.stacks["integer"].push(a % b)


def _compare(op):
    def instruction(interp):
        if not stack_ok(interp, "integer", 2) or not stack_ok(interp, "boolean"):
            return
        a, b = _operands(interp)
        interp.stacks["boolean"].push(op(a, b))
    return instruction


integer.add("<", _compare(lambda a, b: a < b))
integer.add(">", _compare(lambda a, b: a > b))


@integer.register("max")
def integer_max(interp):
    if not stack_ok(interp, "integer", 2):
        return
    a, b = _operands(interp)
    interp.stacks["integer"].push(max(a, b))


@integer.register("min")
def integer_min(interp):
    if not stack_ok(interp, "integer", 2):
        return
    a, b = _operands(interp)
    interp.stacks["integer"].push(min(a, b))


@integer.register("fromboolean")
def integer_fromboolean(interp):
    if not stack_ok(interp, "boolean", 1):
        return
    interp.stacks["integer"].push(1 if interp.stacks["boolean"].pop() else 0)


@integer.register("fromfloat")
def integer_fromfloat(interp):
    """Truncate the top float; NaN and infinities are left alone."""
    if not stack_ok(interp, "float", 1) or not math.isfinite(interp.stacks["float"].peek()):
        return
    value = int(interp.stacks["float"].pop())
    interp.stacks["integer"].push(max(INT64_MIN, min(INT64_MAX, value)))


@integer.register("rand")
def integer_rand(interp):
    """Push a uniform draw from [min_random_integer, max_random_integer]."""
    low = interp.options.min_random_integer
    high = interp.options.max_random_integer
    interp.stacks["integer"].push(interp.random.randint(low, high))
