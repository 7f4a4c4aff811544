"""
CODE instructions.

CODE items are program trees. Atoms are coerced to one-element lists wherever
an instruction needs a list. Any result larger than ``max_points_in_program``
makes the instruction a NOOP.
"""

from __future__ import annotations

from pypush.instructions.base import InstructionSet, fits, register_stack_instructions, stack_ok
from pypush.runtime.code import Atom, CodeList, as_list, points, value_to_code
from pypush.runtime.random_code import random_code

CODE_INSTRUCTIONS = InstructionSet("code")
register_stack_instructions(CODE_INSTRUCTIONS)

code = CODE_INSTRUCTIONS

EMPTY_LIST = CodeList(())


def _push_result(interp, result, pops: int) -> None:
    """Replace the top ``pops`` CODE items with ``result`` if it fits."""
    if not fits(interp, result):
        return
    stack = interp.stacks["code"]
    for _ in range(pops):
        stack.pop()
    stack.push(result)


@code.register("append")
def code_append(interp):
    if not stack_ok(interp, "code", 2):
        return
    items = interp.stacks["code"].items
    result = CodeList(as_list(items[-1]).items + as_list(items[-2]).items)
    _push_result(interp, result, 2)


@code.register("cons")
def code_cons(interp):
    """Prepend the second item to the top item."""
    if not stack_ok(interp, "code", 2):
        return
    items = interp.stacks["code"].items
    result = CodeList((items[-2],) + as_list(items[-1]).items)
    _push_result(interp, result, 2)


@code.register("list")
def code_list(interp):
    if not stack_ok(interp, "code", 2):
        return
    items = interp.stacks["code"].items
    _push_result(interp, CodeList((items[-2], items[-1])), 2)


@code.register("car")
def code_car(interp):
    if not stack_ok(interp, "code", 1):
        return
    top = as_list(interp.stacks["code"].pop())
    interp.stacks["code"].push(top.items[0] if top.items else EMPTY_LIST)


@code.register("cdr")
def code_cdr(interp):
    if not stack_ok(interp, "code", 1):
        return
    top = as_list(interp.stacks["code"].pop())
    interp.stacks["code"].push(CodeList(top.items[1:]))


@code.register("atom")
def code_atom(interp):
    if not stack_ok(interp, "code", 1) or not stack_ok(interp, "boolean"):
        return
    interp.stacks["boolean"].push(isinstance(interp.stacks["code"].pop(), Atom))


@code.register("null")
def code_null(interp):
    if not stack_ok(interp, "code", 1) or not stack_ok(interp, "boolean"):
        return
    interp.stacks["boolean"].push(interp.stacks["code"].pop() == EMPTY_LIST)


@code.register("member")
def code_member(interp):
    """Push whether the second item is an element of the top item."""
    if not stack_ok(interp, "code", 2) or not stack_ok(interp, "boolean"):
        return
    container = as_list(interp.stacks["code"].pop())
    item = interp.stacks["code"].pop()
    interp.stacks["boolean"].push(item in container.items)


@code.register("length")
def code_length(interp):
    if not stack_ok(interp, "code", 1) or not stack_ok(interp, "integer"):
        return
    interp.stacks["integer"].push(len(as_list(interp.stacks["code"].pop())))


@code.register("size")
def code_size(interp):
    if not stack_ok(interp, "code", 1) or not stack_ok(interp, "integer"):
        return
    interp.stacks["integer"].push(points(interp.stacks["code"].pop()))


@code.register("nth")
def code_nth(interp):
    """Push element ``abs(n) mod length`` of the top item."""
    if not stack_ok(interp, "integer", 1) or not stack_ok(interp, "code", 1):
        return
    n = interp.stacks["integer"].pop()
    container = as_list(interp.stacks["code"].pop())
    if not container.items:
        interp.stacks["code"].push(container)
        return
    interp.stacks["code"].push(container.items[abs(n) % len(container.items)])


@code.register("definition")
def code_definition(interp):
    if not stack_ok(interp, "name", 1):
        return
    bound = interp.definitions.lookup(interp.stacks["name"].peek())
    if bound is None:
        return
    interp.stacks["name"].pop()
    interp.stacks["code"].push(bound)


@code.register("do")
def code_do(interp):
    """Execute the top CODE item, popping it once it has run."""
    if not stack_ok(interp, "code", 1):
        return
    interp.stacks["exec"].push(Atom("code.pop"))
    interp.stacks["exec"].push(interp.stacks["code"].peek())


@code.register("do*")
def code_do_star(interp):
    if not stack_ok(interp, "code", 1):
        return
    interp.stacks["exec"].push(interp.stacks["code"].pop())


@code.register("if")
def code_if(interp):
    """Execute the second CODE item if TRUE, otherwise the top one."""
    if not stack_ok(interp, "boolean", 1) or not stack_ok(interp, "code", 2):
        return
    condition = interp.stacks["boolean"].pop()
    top = interp.stacks["code"].pop()
    second = interp.stacks["code"].pop()
    interp.stacks["exec"].push(second if condition else top)


@code.register("quote")
def code_quote(interp):
    """Move the next pending EXEC item onto the CODE stack instead of running it."""
    if not stack_ok(interp, "exec", 1) or not fits(interp, interp.stacks["exec"].peek()):
        return
    interp.stacks["code"].push(interp.stacks["exec"].pop())


@code.register("noop")
def code_noop(interp):
    pass


def _from_stack(source):
    def instruction(interp):
        if not stack_ok(interp, source, 1):
            return
        interp.stacks["code"].push(value_to_code(interp.stacks[source].pop()))
    instruction.__name__ = f"code_from{source}"
    return instruction


code.add("fromboolean", _from_stack("boolean"))
code.add("fromfloat", _from_stack("float"))
code.add("frominteger", _from_stack("integer"))
code.add("fromname", _from_stack("name"))


@code.register("rand")
def code_rand(interp):
    """
    Push random code.

    The size limit is ``abs(n)`` of the top integer, capped by
    ``max_points_in_random_expression``.
    """
    if not stack_ok(interp, "integer", 1):
        return
    limit = min(abs(interp.stacks["integer"].peek()),
                interp.options.max_points_in_random_expression,
                interp.options.max_points_in_program)
    if limit < 1:
        return
    interp.stacks["integer"].pop()
    interp.stacks["code"].push(random_code(interp, limit))
