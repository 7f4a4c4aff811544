"""FLOAT instructions."""

from __future__ import annotations

import math

from pypush.instructions.base import InstructionSet, register_stack_instructions, stack_ok

FLOAT_INSTRUCTIONS = InstructionSet("float")
register_stack_instructions(FLOAT_INSTRUCTIONS)

flt = FLOAT_INSTRUCTIONS


def _binary(op, nonzero_divisor=False):
    def instruction(interp):
        if not stack_ok(interp, "float", 2):
            return
        if nonzero_divisor and interp.stacks["float"].peek() == 0.0:
            return
        top = interp.stacks["float"].pop()
        second = interp.stacks["float"].pop()
        interp.stacks["float"].push(op(second, top))
    return instruction


def _compare(op):
    def instruction(interp):
        if not stack_ok(interp, "float", 2) or not stack_ok(interp, "boolean"):
            return
        top = interp.stacks["float"].pop()
        second = interp.stacks["float"].pop()
        interp.stacks["boolean"].push(op(second, top))
    return instruction


def _unary(op):
    def instruction(interp):
        if not stack_ok(interp, "float", 1) or not math.isfinite(interp.stacks["float"].peek()):
            return
        interp.stacks["float"].push(op(interp.stacks["float"].pop()))
    return instruction


flt.add("+", _binary(lambda a, b: a + b))
flt.add("-", _binary(lambda a, b: a - b))
flt.add("*", _binary(lambda a, b: a * b))
flt.add("/", _binary(lambda a, b: a / b, nonzero_divisor=True))
flt.add("%", _binary(lambda a, b: a % b, nonzero_divisor=True))
flt.add("<", _compare(lambda a, b: a < b))
flt.add(">", _compare(lambda a, b: a > b))
flt.add("max", _binary(max))
flt.add("min", _binary(min))
flt.add("sin", _unary(math.sin))
flt.add("cos", _unary(math.cos))
flt.add("tan", _unary(math.tan))


@flt.register("fromboolean")
def float_fromboolean(interp):
    if not stack_ok(interp, "boolean", 1):
        return
    interp.stacks["float"].push(1.0 if interp.stacks["boolean"].pop() else 0.0)


@flt.register("frominteger")
def float_frominteger(interp):
    if not stack_ok(interp, "integer", 1):
        return
    interp.stacks["float"].push(float(interp.stacks["integer"].pop()))


@flt.register("rand")
def float_rand(interp):
    """Push a uniform draw from [min_random_float, max_random_float]."""
    low = interp.options.min_random_float
    high = interp.options.max_random_float
    interp.stacks["float"].push(interp.random.uniform(low, high))
