"""NAME instructions."""

from __future__ import annotations

from pypush.instructions.base import STACK_INSTRUCTIONS, InstructionSet, register_stack_instructions
from pypush.runtime.random_code import new_name

NAME_INSTRUCTIONS = InstructionSet("name")
register_stack_instructions(NAME_INSTRUCTIONS, [op for op in STACK_INSTRUCTIONS if op != "define"])

name = NAME_INSTRUCTIONS


@name.register("quote")
def name_quote(interp):
    """The next name executed is pushed onto the NAME stack even if it is bound."""
    interp.quote_next_name = True


@name.register("rand")
def name_rand(interp):
    interp.stacks["name"].push(new_name(interp))


@name.register("randboundname")
def name_randboundname(interp):
    bound = interp.definitions.names()
    if not bound:
        return
    interp.stacks["name"].push(interp.random.choice(bound))
