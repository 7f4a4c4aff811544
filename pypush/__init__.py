"""
PyPush - Push Language Runtime

A deterministic, step-bounded interpreter for the stack-based, homoiconic
Push language, built to run large numbers of generated programs safely.

Exports:
- Interpreter: Evaluation loop and interpreter state
- Options: Validated interpreter configuration
- read_options: Line-oriented configuration reader
- parse_code: Program text parser
"""

from pypush.errors import (
    PushError,
    StructuralError,
    UnknownStackError,
    UnknownInstructionError,
    ResourceExhausted,
    ConfigValidationError,
    OptionsReadError,
    ParseError,
)
from pypush.options import Options, DEFAULT_OPTIONS, read_options
from pypush.runtime import (
    Atom,
    CodeList,
    Code,
    parse_code,
    points,
    code_to_text,
    Stack,
    EMPTY,
    Definitions,
    Interpreter,
    RunResult,
    RunStatus,
)

__version__ = "0.1.0"

__all__ = [
    "Interpreter",
    "RunResult",
    "RunStatus",
    "Options",
    "DEFAULT_OPTIONS",
    "read_options",
    "Atom",
    "CodeList",
    "Code",
    "parse_code",
    "points",
    "code_to_text",
    "Stack",
    "EMPTY",
    "Definitions",
    "PushError",
    "StructuralError",
    "UnknownStackError",
    "UnknownInstructionError",
    "ResourceExhausted",
    "ConfigValidationError",
    "OptionsReadError",
    "ParseError",
]
