"""Test fixtures for the PyPush test suite."""
import pytest
import sys
from pathlib import Path
from typing import Callable

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from pypush.options import Options
from pypush.runtime.interpreter import Interpreter


@pytest.fixture
def options() -> Options:
    """Deterministic options that do not archive the program on the CODE stack."""
    return Options(random_seed=42, top_level_push_code=False)


@pytest.fixture
def interpreter(options: Options) -> Interpreter:
    """Fresh interpreter for testing."""
    return Interpreter(options)


@pytest.fixture
def make_interpreter() -> Callable[..., Interpreter]:
    """Factory building interpreters from option overrides."""
    def factory(**overrides) -> Interpreter:
        overrides.setdefault("random_seed", 42)
        overrides.setdefault("top_level_push_code", False)
        return Interpreter(Options(**overrides))
    return factory


@pytest.fixture
def run(interpreter: Interpreter) -> Callable[[str], Interpreter]:
    """Run program text on the fixture interpreter and return the interpreter."""
    def runner(program: str) -> Interpreter:
        interpreter.run(program)
        return interpreter
    return runner


@pytest.fixture
def sample_config() -> str:
    """Sample configuration text."""
    return "\n".join([
        "# test configuration",
        "evalpush-limit 250",
        "max-points-in-program 50",
        "min-random-integer -5",
        "max-random-integer 5",
        "random-seed 7",
        "tracing false",
    ])
