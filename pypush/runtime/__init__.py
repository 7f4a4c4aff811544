"""
PyPush Runtime Engine

This package provides the core runtime for executing Push programs:
- Code: Program tree representation and parser
- Stack: Typed stacks with the Push manipulation primitives
- Definitions: Global name bindings
- Evaluator: Token classification
- Interpreter: Step-bounded evaluation loop
"""

from pypush.runtime.code import Atom, CodeList, Code, parse_code, points, code_to_text
from pypush.runtime.stack import Stack, EMPTY
from pypush.runtime.definitions import Definitions
from pypush.runtime.evaluator import Token, TokenKind, classify
from pypush.runtime.interpreter import Interpreter, RunResult, RunStatus

__all__ = [
    "Atom",
    "CodeList",
    "Code",
    "parse_code",
    "points",
    "code_to_text",
    "Stack",
    "EMPTY",
    "Definitions",
    "Token",
    "TokenKind",
    "classify",
    "Interpreter",
    "RunResult",
    "RunStatus",
]
