"""
EXEC instructions.

These manipulate the pending program itself: the top of the EXEC stack is the
next item the interpreter will execute. Loop and combinator instructions push
trees that would exceed ``max_points_in_program`` act as NOOPs.
"""

from __future__ import annotations

from pypush.instructions.base import InstructionSet, fits, register_stack_instructions, stack_ok
from pypush.runtime.code import Atom, CodeList, as_list

EXEC_INSTRUCTIONS = InstructionSet("exec")
register_stack_instructions(EXEC_INSTRUCTIONS)

ex = EXEC_INSTRUCTIONS

DO_RANGE = Atom("exec.do*range")


@ex.register("if")
def exec_if(interp):
    """Execute the first pending item if TRUE, the second if FALSE."""
    if not stack_ok(interp, "boolean", 1) or not stack_ok(interp, "exec", 2):
        return
    condition = interp.stacks["boolean"].pop()
    first = interp.stacks["exec"].pop()
    second = interp.stacks["exec"].pop()
    interp.stacks["exec"].push(first if condition else second)


@ex.register("k")
def exec_k(interp):
    """K combinator: drop the second pending item."""
    if not stack_ok(interp, "exec", 2):
        return
    first = interp.stacks["exec"].pop()
    interp.stacks["exec"].pop()
    interp.stacks["exec"].push(first)


@ex.register("s")
def exec_s(interp):
    """S combinator: ``a b c`` becomes ``a c (b c)``."""
    if not stack_ok(interp, "exec", 3):
        return
    items = interp.stacks["exec"].items
    a, b, c = items[-1], items[-2], items[-3]
    pair = CodeList((b, c))
    if not fits(interp, pair):
        return
    del items[-3:]
    interp.stacks["exec"].push(pair)
    interp.stacks["exec"].push(c)
    interp.stacks["exec"].push(a)


@ex.register("y")
def exec_y(interp):
    """Y combinator: ``a`` becomes ``a (exec.y a)``, recursing until something removes it."""
    if not stack_ok(interp, "exec", 1):
        return
    body = interp.stacks["exec"].peek()
    recursion = CodeList((Atom("exec.y"), body))
    if not fits(interp, recursion):
        return
    interp.stacks["exec"].pop()
    interp.stacks["exec"].push(recursion)
    interp.stacks["exec"].push(body)


def _range_loop(current: int, destination: int, body) -> CodeList:
    return CodeList((Atom(str(current)), Atom(str(destination)), DO_RANGE, body))


@ex.register("do*range")
def exec_do_range(interp):
    """
    Counted loop over [second, top] of the INTEGER stack.

    Each iteration pushes the loop index onto the INTEGER stack before the
    body runs; the index moves one step toward the destination.
    """
    if not stack_ok(interp, "integer", 2) or not stack_ok(interp, "exec", 1):
        return
    ints = interp.stacks["integer"].items
    destination, current = ints[-1], ints[-2]
    body = interp.stacks["exec"].peek()

    if current == destination:
        del ints[-2:]
        interp.stacks["exec"].pop()
        interp.stacks["integer"].push(current)
        interp.stacks["exec"].push(body)
        return

    step = 1 if current < destination else -1
    loop = _range_loop(current + step, destination, body)
    if not fits(interp, loop):
        return
    del ints[-2:]
    interp.stacks["exec"].pop()
    interp.stacks["integer"].push(current)
    interp.stacks["exec"].push(loop)
    interp.stacks["exec"].push(body)


@ex.register("do*count")
def exec_do_count(interp):
    """Run the body n times with the index 0..n-1 on the INTEGER stack."""
    if not stack_ok(interp, "integer", 1) or not stack_ok(interp, "exec", 1):
        return
    count = interp.stacks["integer"].peek()
    if count < 1:
        return
    loop = _range_loop(0, count - 1, interp.stacks["exec"].peek())
    if not fits(interp, loop):
        return
    interp.stacks["integer"].pop()
    interp.stacks["exec"].pop()
    interp.stacks["exec"].push(loop)


@ex.register("do*times")
def exec_do_times(interp):
    """Like ``do*count`` but the index is popped before each iteration of the body."""
    if not stack_ok(interp, "integer", 1) or not stack_ok(interp, "exec", 1):
        return
    count = interp.stacks["integer"].peek()
    if count < 1:
        return
    body = CodeList((Atom("integer.pop"),) + as_list(interp.stacks["exec"].peek()).items)
    loop = _range_loop(0, count - 1, body)
    if not fits(interp, loop):
        return
    interp.stacks["integer"].pop()
    interp.stacks["exec"].pop()
    interp.stacks["exec"].push(loop)
