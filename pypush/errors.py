"""
PyPush Error Taxonomy

Conditions that may surface from the runtime. Ordinary instruction
precondition failures are never represented here: they are absorbed as NOOPs.

Key classes:
- PushError: Base class for every surfaced condition
- StructuralError: Unknown or disabled stack/instruction (aborts a run)
- ResourceExhausted: The step budget was reached (aborts a run)
- ConfigValidationError: Invalid Options (construction time only)
- OptionsReadError: Malformed configuration source
- ParseError: Malformed program text (before execution)
"""

from __future__ import annotations

from typing import List, Optional


class PushError(Exception):
    """Base class for all PyPush conditions."""


class StructuralError(PushError):
    """A token referenced a stack or instruction that does not exist or is disabled."""

    def __init__(self, message: str, token: str = ""):
        super().__init__(message)
        self.token = token


class UnknownStackError(StructuralError):
    def __init__(self, stack: str, token: str = ""):
        super().__init__(f"unknown or disabled stack: {stack}", token)
        self.stack = stack


class UnknownInstructionError(StructuralError):
    def __init__(self, stack: str, instruction: str, token: str = ""):
        super().__init__(f"unknown or disabled instruction {stack}.{instruction}", token)
        self.stack = stack
        self.instruction = instruction


class ResourceExhausted(PushError):
    """The evaluation step budget was reached before the exec stack emptied."""

    def __init__(self, limit: int, steps: int):
        super().__init__(f"the EvalPushLimit was exceeded ({steps} of {limit} steps)")
        self.limit = limit
        self.steps = steps


class ConfigValidationError(PushError, ValueError):
    """
    Options failed cross-field validation.

    Carries every violation found, so a caller can report them all at once.
    """

    def __init__(self, problems: List[str]):
        super().__init__("; ".join(problems))
        self.problems = list(problems)


class OptionsReadError(PushError, ValueError):
    """A configuration source could not be read into Options."""

    def __init__(self, message: str, line: Optional[int] = None):
        super().__init__(message)
        self.line = line


class ParseError(PushError, ValueError):
    """Program text could not be turned into a program tree."""

    def __init__(self, message: str, offset: int):
        super().__init__(f"{message} at offset {offset}")
        self.offset = offset
