"""
PyPush Options

Immutable interpreter configuration. The numeric limits are validated as one
unit when an Options instance is built; an invalid combination never exists.

Key classes:
- Options: Limits and switches for one interpreter
- read_options: Line-oriented ``key value`` configuration reader
"""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, FrozenSet, IO, Iterable, List, Tuple, Union

from pypush.errors import ConfigValidationError, OptionsReadError

logger = logging.getLogger(__name__)

STACK_TYPES = ("boolean", "code", "exec", "float", "integer", "name")

# Configuration keys, also used to name fields in validation messages
FIELD_KEYS: Dict[str, str] = {
    "top_level_push_code": "top-level-push-code",
    "top_level_pop_code": "top-level-pop-code",
    "eval_push_limit": "evalpush-limit",
    "new_erc_name_probability": "new-erc-name-probability",
    "max_points_in_program": "max-points-in-program",
    "max_points_in_random_expression": "max-points-in-random-expressions",
    "max_random_float": "max-random-float",
    "min_random_float": "min-random-float",
    "max_random_integer": "max-random-integer",
    "min_random_integer": "min-random-integer",
    "tracing": "tracing",
    "random_seed": "random-seed",
}


def _label(field_name: str) -> str:
    return FIELD_KEYS[field_name].upper()


def _fmt(value: Any) -> str:
    """Format a number the way it would be written in a config file."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


@dataclass(frozen=True)
class Options:
    """
    Interpreter configuration.

    Empty ``allowed_types``/``allowed_instructions`` enable everything.
    The exec stack is always enabled.
    """
    # Push the top-level program onto the CODE stack before running it
    top_level_push_code: bool = True
    # Pop the CODE stack after a top-level run
    top_level_pop_code: bool = False
    # Steps allowed in one top-level call
    eval_push_limit: int = 1000
    # Chance that a random NAME constant is a new name rather than a reused one
    new_erc_name_probability: float = 0.001
    # Largest tree allowed on the CODE/EXEC stacks as the result of an instruction
    max_points_in_program: int = 100
    # Largest tree produced by CODE.RAND
    max_points_in_random_expression: int = 25
    max_random_float: float = 1.0
    min_random_float: float = -1.0
    max_random_integer: int = 10
    min_random_integer: int = -10
    tracing: bool = False
    random_seed: int = 0
    allowed_types: FrozenSet[str] = field(default_factory=frozenset)
    allowed_instructions: FrozenSet[str] = field(default_factory=frozenset)

    def __post_init__(self):
        object.__setattr__(self, "allowed_types", frozenset(t.lower() for t in self.allowed_types))
        object.__setattr__(self, "allowed_instructions",
                           frozenset(i.lower() for i in self.allowed_instructions))
        problems = self.validate()
        if problems:
            raise ConfigValidationError(problems)

    def validate(self) -> List[str]:
        """Check the interdependent limits and return every violation found."""
        problems: List[str] = []

        for name in ("max_points_in_random_expression", "max_points_in_program", "eval_push_limit"):
            value = getattr(self, name)
            if value < 1:
                problems.append(f"{_label(name)} must be at least 1, got {_fmt(value)}")

        p = self.new_erc_name_probability
        if not 0.0 <= p <= 1.0:
            problems.append(
                f"{_label('new_erc_name_probability')} must be between 0 and 1 inclusive, got {_fmt(p)}"
            )

        if self.min_random_integer > self.max_random_integer:
            problems.append(
                f"{_label('min_random_integer')} ({_fmt(self.min_random_integer)}) must be less than "
                f"or equal to {_label('max_random_integer')} ({_fmt(self.max_random_integer)})"
            )

        if not self.min_random_float <= self.max_random_float:
            problems.append(
                f"{_label('min_random_float')} ({_fmt(self.min_random_float)}) must be less than "
                f"or equal to {_label('max_random_float')} ({_fmt(self.max_random_float)})"
            )

        return problems

    def replace(self, **changes: Any) -> "Options":
        """Return a validated copy with some fields changed."""
        return dataclasses.replace(self, **changes)

    def type_enabled(self, stack: str) -> bool:
        if stack == "exec":
            return True
        return not self.allowed_types or stack in self.allowed_types

    def instruction_enabled(self, stack: str, operation: str) -> bool:
        if not self.allowed_instructions:
            return True
        return f"{stack}.{operation}" in self.allowed_instructions

    def to_dict(self) -> Dict[str, Any]:
        out = dataclasses.asdict(self)
        out["allowed_types"] = sorted(self.allowed_types)
        out["allowed_instructions"] = sorted(self.allowed_instructions)
        return out


DEFAULT_OPTIONS = Options()


def _parse_int(text: str) -> int:
    try:
        return int(text, 10)
    except ValueError:
        raise OptionsReadError(f"could not parse \"{text}\" as integer") from None


def _parse_float(text: str) -> float:
    try:
        return float(text)
    except ValueError:
        raise OptionsReadError(f"could not parse \"{text}\" as float") from None


def _parse_bool(text: str) -> bool:
    lowered = text.lower()
    if lowered in ("true", "t", "1", "yes"):
        return True
    if lowered in ("false", "f", "0", "no"):
        return False
    raise OptionsReadError(f"could not parse \"{text}\" as boolean")


_PARSERS: Dict[str, Tuple[str, Callable[[str], Any]]] = {
    "evalpush-limit": ("eval_push_limit", _parse_int),
    "max-points-in-program": ("max_points_in_program", _parse_int),
    "max-points-in-random-expressions": ("max_points_in_random_expression", _parse_int),
    "min-random-integer": ("min_random_integer", _parse_int),
    "max-random-integer": ("max_random_integer", _parse_int),
    "random-seed": ("random_seed", _parse_int),
    "min-random-float": ("min_random_float", _parse_float),
    "max-random-float": ("max_random_float", _parse_float),
    "new-erc-name-probability": ("new_erc_name_probability", _parse_float),
    "top-level-push-code": ("top_level_push_code", _parse_bool),
    "top-level-pop-code": ("top_level_pop_code", _parse_bool),
    "tracing": ("tracing", _parse_bool),
}


def read_options(source: Union[str, IO[str], Iterable[str]]) -> Options:
    """
    Read a configuration source into Options.

    Each non-blank line is ``key value``; ``#`` starts a comment. ``type``
    and ``instruction`` may repeat to restrict the enabled stacks and
    instructions. Omitted keys keep their defaults.

    Raises:
        OptionsReadError: on an unknown key, an unparsable value or an
            invalid combination of values
    """
    lines = source.splitlines() if isinstance(source, str) else source

    values: Dict[str, Any] = {}
    types = set()
    instructions = set()

    for lineno, raw in enumerate(lines, start=1):
        line = raw.split("#", 1)[0].strip()
        if not line:
            continue

        parts = line.split(None, 1)
        key = parts[0].lower()
        if len(parts) < 2:
            raise OptionsReadError(f"expected setting to follow \"{key}\"", lineno)
        setting = parts[1].strip()

        if key == "type":
            if setting.lower() not in STACK_TYPES:
                raise OptionsReadError(f"unknown type: \"{setting}\"", lineno)
            types.add(setting.lower())
        elif key == "instruction":
            stack, dot, operation = setting.lower().partition(".")
            if not dot or not operation or stack not in STACK_TYPES:
                raise OptionsReadError(f"unknown instruction: \"{setting}\"", lineno)
            instructions.add(setting.lower())
        elif key in _PARSERS:
            field_name, parse = _PARSERS[key]
            try:
                values[field_name] = parse(setting)
            except OptionsReadError as exc:
                exc.line = lineno
                raise
        else:
            raise OptionsReadError(f"unknown parameter \"{key}\"", lineno)

    try:
        options = Options(allowed_types=frozenset(types),
                          allowed_instructions=frozenset(instructions),
                          **values)
    except ConfigValidationError as exc:
        raise OptionsReadError(str(exc)) from exc

    logger.debug("Read options: %s", options)
    return options
