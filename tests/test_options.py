"""Tests for Options validation and the configuration reader."""
import io
import pytest
import sys
from pathlib import Path

project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from pypush.errors import ConfigValidationError, OptionsReadError
from pypush.options import DEFAULT_OPTIONS, Options, read_options


class TestOptionsDefaults:
    """Tests for default option values."""

    def test_empty_config_gives_defaults(self):
        assert read_options("") == Options()

    def test_defaults(self):
        opts = DEFAULT_OPTIONS
        assert opts.top_level_push_code is True
        assert opts.top_level_pop_code is False
        assert opts.eval_push_limit == 1000
        assert opts.new_erc_name_probability == 0.001
        assert opts.max_points_in_program == 100
        assert opts.max_points_in_random_expression == 25
        assert (opts.min_random_float, opts.max_random_float) == (-1.0, 1.0)
        assert (opts.min_random_integer, opts.max_random_integer) == (-10, 10)
        assert opts.tracing is False
        assert opts.random_seed == 0
        assert opts.allowed_types == frozenset()
        assert opts.allowed_instructions == frozenset()

    def test_everything_enabled_by_default(self):
        assert DEFAULT_OPTIONS.type_enabled("float")
        assert DEFAULT_OPTIONS.instruction_enabled("integer", "+")


class TestOptionsValidation:
    """Tests for construction-time validation."""

    def test_min_above_max_integer(self):
        with pytest.raises(ConfigValidationError) as excinfo:
            Options(min_random_integer=10, max_random_integer=0)
        assert excinfo.value.problems == [
            "MIN-RANDOM-INTEGER (10) must be less than or equal to MAX-RANDOM-INTEGER (0)"
        ]

    def test_all_problems_are_collected(self):
        with pytest.raises(ConfigValidationError) as excinfo:
            Options(eval_push_limit=0, max_points_in_program=0, new_erc_name_probability=2.0)
        assert len(excinfo.value.problems) == 3

    def test_nan_float_bound_is_rejected(self):
        with pytest.raises(ConfigValidationError):
            Options(min_random_float=float("nan"))

    def test_equal_bounds_are_valid(self):
        opts = Options(min_random_integer=3, max_random_integer=3)
        assert opts.validate() == []

    def test_replace_revalidates(self):
        with pytest.raises(ConfigValidationError):
            DEFAULT_OPTIONS.replace(eval_push_limit=-1)
        assert DEFAULT_OPTIONS.replace(random_seed=5).random_seed == 5

    def test_options_are_frozen(self):
        with pytest.raises(AttributeError):
            DEFAULT_OPTIONS.eval_push_limit = 5

    def test_exec_is_always_enabled(self):
        opts = Options(allowed_types=frozenset({"integer"}))
        assert opts.type_enabled("exec")
        assert opts.type_enabled("integer")
        assert not opts.type_enabled("float")

    def test_allowed_entries_are_lowercased(self):
        opts = Options(allowed_instructions=frozenset({"INTEGER.+"}))
        assert opts.instruction_enabled("integer", "+")
        assert not opts.instruction_enabled("integer", "-")


class TestReadOptions:
    """Tests for read_options."""

    def test_sample_config(self, sample_config):
        opts = read_options(sample_config)
        assert opts.eval_push_limit == 250
        assert opts.max_points_in_program == 50
        assert (opts.min_random_integer, opts.max_random_integer) == (-5, 5)
        assert opts.random_seed == 7
        assert opts.tracing is False

    def test_reads_streams(self):
        opts = read_options(io.StringIO("evalpush-limit 10\n"))
        assert opts.eval_push_limit == 10

    def test_types_and_instructions(self):
        opts = read_options("type integer\ntype Boolean\ninstruction integer.+\n")
        assert opts.allowed_types == frozenset({"integer", "boolean"})
        assert opts.allowed_instructions == frozenset({"integer.+"})

    def test_comments_and_blank_lines(self):
        opts = read_options("\n# comment\nrandom-seed 3  # trailing\n\n")
        assert opts.random_seed == 3

    @pytest.mark.parametrize("text,message", [
        ("type foo", "unknown type: \"foo\""),
        ("type \ninteger", "expected setting to follow \"type\""),
        ("min-random-integer foo", "could not parse \"foo\" as integer"),
        ("max-random-integer foo", "could not parse \"foo\" as integer"),
        ("max-points-in-random-expressions foo", "could not parse \"foo\" as integer"),
        ("max-points-in-program foo", "could not parse \"foo\" as integer"),
        ("evalpush-limit foo", "could not parse \"foo\" as integer"),
        ("random-seed foo", "could not parse \"foo\" as integer"),
        ("min-random-float foo", "could not parse \"foo\" as float"),
        ("max-random-float foo", "could not parse \"foo\" as float"),
        ("new-erc-name-probability foo", "could not parse \"foo\" as float"),
        ("top-level-push-code foo", "could not parse \"foo\" as boolean"),
        ("top-level-pop-code foo", "could not parse \"foo\" as boolean"),
        ("tracing foo", "could not parse \"foo\" as boolean"),
        ("foo bar", "unknown parameter \"foo\""),
        ("max-points-in-random-expressions -7", "MAX-POINTS-IN-RANDOM-EXPRESSIONS must be at least 1, got -7"),
        ("max-points-in-program -7", "MAX-POINTS-IN-PROGRAM must be at least 1, got -7"),
        ("evalpush-limit -7", "EVALPUSH-LIMIT must be at least 1, got -7"),
        ("new-erc-name-probability 1.1", "NEW-ERC-NAME-PROBABILITY must be between 0 and 1 inclusive, got 1.1"),
        ("min-random-integer 10\nmax-random-integer 0",
         "MIN-RANDOM-INTEGER (10) must be less than or equal to MAX-RANDOM-INTEGER (0)"),
        ("min-random-float 1.0\nmax-random-float 0.5",
         "MIN-RANDOM-FLOAT (1) must be less than or equal to MAX-RANDOM-FLOAT (0.5)"),
    ])
    def test_errors(self, text, message):
        with pytest.raises(OptionsReadError) as excinfo:
            read_options(text)
        assert str(excinfo.value) == message

    def test_error_reports_line(self):
        with pytest.raises(OptionsReadError) as excinfo:
            read_options("evalpush-limit 10\n\nrandom-seed x\n")
        assert excinfo.value.line == 3

    def test_unknown_instruction(self):
        with pytest.raises(OptionsReadError) as excinfo:
            read_options("instruction foo.bar")
        assert str(excinfo.value) == "unknown instruction: \"foo.bar\""
