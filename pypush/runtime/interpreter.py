"""
PyPush Interpreter

Main evaluation loop. The EXEC stack is seeded with one program tree and items
are popped and dispatched until the stack empties or the step budget
(``eval_push_limit``) is spent.

Dispatch for a popped item:
- list: children are pushed back in reverse so the first child runs next
- integer/float/boolean literal: pushed onto the matching stack
- ``stack.operation``: the instruction is invoked with the interpreter
- name: quoted or unbound names go to the NAME stack, bound names are
  replaced by their definition on the EXEC stack

Key classes:
- RunStatus: How a run ended
- RunResult: Outcome of a run with the step count and any structural error
- Interpreter: Stacks, definitions, options and random source of one run series
"""

from __future__ import annotations

import logging
import math
import random
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from pypush.errors import (
    PushError,
    ResourceExhausted,
    UnknownInstructionError,
    UnknownStackError,
)
from pypush.instructions import build_instruction_sets
from pypush.options import Options
from pypush.runtime.code import Atom, Code, CodeList, format_float, parse_code
from pypush.runtime.definitions import Definitions
from pypush.runtime.evaluator import TokenKind, classify
from pypush.runtime.stack import Stack

logger = logging.getLogger(__name__)
trace_logger = logging.getLogger("pypush.trace")

STACK_NAMES = ("integer", "float", "boolean", "name", "exec", "code")

_LITERAL_STACKS = {
    TokenKind.INTEGER: "integer",
    TokenKind.FLOAT: "float",
    TokenKind.BOOLEAN: "boolean",
}


class RunStatus(Enum):
    COMPLETED = "completed"
    RESOURCE_EXHAUSTED = "resource_exhausted"
    UNKNOWN_STACK = "unknown_stack"
    UNKNOWN_INSTRUCTION = "unknown_instruction"


@dataclass
class RunResult:
    """Result of running a program."""
    status: RunStatus
    steps: int
    error: Optional[PushError] = None

    @property
    def success(self) -> bool:
        return self.status is RunStatus.COMPLETED

    @property
    def message(self) -> str:
        return str(self.error) if self.error else ""

    def raise_for_status(self) -> None:
        """Raise the condition that ended the run, if it did not complete."""
        if self.error is not None:
            raise self.error

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status": self.status.value,
            "success": self.success,
            "steps": self.steps,
            "error": self.message or None,
        }


def _render(value: Any) -> Any:
    """JSON-friendly rendering of a stack value."""
    if isinstance(value, (Atom, CodeList)):
        return str(value)
    if isinstance(value, float) and not math.isfinite(value):
        return format_float(value)
    return value


class Interpreter:
    """
    Push interpreter.

    One instance may run many programs in sequence; stacks and definitions
    persist between runs unless flushed. The step counter and the quote flag
    are reset at the start of every ``run`` call. Instances are not thread
    safe, but separate instances share no state.
    """

    def __init__(self, options: Options = None):
        self.options = options or Options()
        self.random = random.Random(self.options.random_seed)
        self.definitions = Definitions()
        self.generated_names: List[str] = []
        self.steps = 0
        self.quote_next_name = False
        self.stacks: Dict[str, Stack] = self._build_stacks()

    def _build_stacks(self) -> Dict[str, Stack]:
        libraries = build_instruction_sets()
        stacks: Dict[str, Stack] = {}
        for name in STACK_NAMES:
            if not self.options.type_enabled(name):
                continue
            instructions = {
                op: fn for op, fn in libraries[name].items()
                if self.options.instruction_enabled(name, op)
            }
            stacks[name] = Stack(name, instructions)

        for qualified in sorted(self.options.allowed_instructions):
            stack, _, op = qualified.partition(".")
            if op not in libraries.get(stack, {}):
                logger.warning("Allowed instruction %s does not exist", qualified)
        return stacks

    def instruction_names(self) -> List[str]:
        """Every enabled instruction as ``stack.operation``, sorted."""
        return sorted(
            f"{name}.{op}" for name, stack in self.stacks.items() for op in stack.instructions
        )

    def stack_ok(self, name: str, depth: int = 0) -> bool:
        stack = self.stacks.get(name)
        return stack is not None and len(stack) >= depth

    def define(self, name: str, code: Code) -> None:
        self.definitions.define(name, code)

    def reset(self) -> None:
        """Reset the per-run counters (step count and quote flag)."""
        self.steps = 0
        self.quote_next_name = False

    def flush(self) -> None:
        """Empty every stack. Definitions are kept."""
        for stack in self.stacks.values():
            stack.flush()

    def run(self, program: Union[str, Code]) -> RunResult:
        """
        Run a top-level program.

        Args:
            program: Program text or an already parsed tree

        Returns:
            RunResult describing how the run ended

        Raises:
            ParseError: if the program text is malformed
        """
        code = parse_code(program) if isinstance(program, str) else program
        self.reset()
        if self.options.top_level_push_code and "code" in self.stacks:
            self.stacks["code"].push(code)

        logger.debug("Running program: %s", code)
        result = self.run_code(code)

        if self.options.top_level_pop_code and "code" in self.stacks:
            self.stacks["code"].pop()

        logger.debug("Run finished: %s after %d steps", result.status.value, result.steps)
        return result

    def run_code(self, code: Code) -> RunResult:
        """Push ``code`` onto EXEC and run the loop from the current step count."""
        exec_stack = self.stacks["exec"]
        exec_stack.push(code)
        limit = self.options.eval_push_limit

        while len(exec_stack) > 0 and self.steps < limit:
            item = exec_stack.pop()
            self.steps += 1
            try:
                self.execute(item)
            except UnknownStackError as exc:
                logger.warning("Run aborted at step %d: %s", self.steps, exc)
                return RunResult(RunStatus.UNKNOWN_STACK, self.steps, exc)
            except UnknownInstructionError as exc:
                logger.warning("Run aborted at step %d: %s", self.steps, exc)
                return RunResult(RunStatus.UNKNOWN_INSTRUCTION, self.steps, exc)
            if self.options.tracing:
                self._trace()

        # Reaching the limit counts as exhaustion even if EXEC emptied on the last step
        if self.steps >= limit:
            exc = ResourceExhausted(limit, self.steps)
            logger.info("%s", exc)
            return RunResult(RunStatus.RESOURCE_EXHAUSTED, self.steps, exc)

        return RunResult(RunStatus.COMPLETED, self.steps)

    def execute(self, item: Code) -> None:
        """
        Execute one EXEC item.

        Raises:
            StructuralError: for an unknown or disabled stack or instruction
        """
        if isinstance(item, CodeList):
            exec_stack = self.stacks["exec"]
            for child in reversed(item.items):
                exec_stack.push(child)
            return

        token = classify(item.token)

        if token.kind in _LITERAL_STACKS:
            stack = self.stacks.get(_LITERAL_STACKS[token.kind])
            if stack is not None:
                stack.push(token.value)
            return

        if token.kind is TokenKind.INSTRUCTION:
            stack = self.stacks.get(token.stack)
            if stack is None:
                raise UnknownStackError(token.stack, item.token)
            instruction = stack.instructions.get(token.operation)
            if instruction is None:
                raise UnknownInstructionError(token.stack, token.operation, item.token)
            instruction(self)
            return

        self._execute_name(token.value)

    def _execute_name(self, name: str) -> None:
        if self.quote_next_name:
            self.quote_next_name = False
        else:
            bound = self.definitions.lookup(name)
            if bound is not None:
                self.stacks["exec"].push(bound)
                return

        if "name" in self.stacks:
            self.stacks["name"].push(name)

    def snapshot(self) -> Dict[str, List[Any]]:
        """Every stack's items, top first."""
        return {name: stack.snapshot() for name, stack in self.stacks.items()}

    def state_dict(self) -> Dict[str, Any]:
        """JSON-friendly view of the stacks and definitions."""
        return {
            "steps": self.steps,
            "stacks": {
                name: [_render(value) for value in stack.snapshot()]
                for name, stack in self.stacks.items()
            },
            "definitions": self.definitions.snapshot(),
        }

    def _trace(self) -> None:
        trace_logger.info("Step %d", self.steps)
        for name, stack in self.stacks.items():
            trace_logger.info("%s: %s", name, " ".join(str(_render(v)) for v in stack.snapshot()))


__all__ = ["Interpreter", "RunResult", "RunStatus"]
