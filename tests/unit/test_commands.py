"""Unit tests for command dispatch."""

import json

import pytest

from detfield.commands import VERBS, dispatch, format_result, parse_script
from detfield.core.errors import (
    InvalidConfigError,
    UninitializedError,
    UnknownCommandError,
)


class TestDispatch:
    """Tests for dispatch."""

    def test_verb_table(self):
        assert set(VERBS) == {
            "initialize",
            "advance",
            "get_step",
            "get_dim",
            "get_hash",
            "get_field_slice",
        }

    def test_initialize_and_read(self, engine, golden):
        assert dispatch(engine, "initialize", ["4", "1", "0.1"]) is None
        assert dispatch(engine, "get_dim") == 4
        dispatch(engine, "advance", ["1"])
        assert dispatch(engine, "get_step") == 1
        assert dispatch(engine, "get_hash").hex() == golden["hash1"]

    def test_hex_seed(self, engine, golden):
        dispatch(engine, "initialize", ["4", "0x1", "0.1"])
        assert engine.get_hash_hex() == golden["hash0"]

    def test_slice(self, small_engine, golden):
        assert dispatch(small_engine, "get_field_slice", ["0", "0", "4", "1"]) == golden["f0"][:4]

    def test_unknown_verb(self, engine):
        with pytest.raises(UnknownCommandError, match="tick"):
            dispatch(engine, "tick", ["1"])

    def test_wrong_arity(self, engine):
        with pytest.raises(ValueError, match="expects"):
            dispatch(engine, "initialize", ["4", "1"])

    def test_bad_argument(self, engine):
        with pytest.raises(ValueError):
            dispatch(engine, "advance", ["ten"])
        with pytest.raises(ValueError):
            dispatch(engine, "advance", ["-1"])

    def test_engine_errors_propagate(self, engine):
        with pytest.raises(UninitializedError):
            dispatch(engine, "get_hash")
        with pytest.raises(InvalidConfigError):
            dispatch(engine, "initialize", ["3", "1", "0.1"])


class TestFormatting:
    """Tests for result formatting and script parsing."""

    def test_format_result(self):
        assert format_result(None) == "ok"
        assert format_result(b"\x00\xff") == "00ff"
        assert format_result(7) == "7"
        assert json.loads(format_result([0.5, -1.0])) == [0.5, -1.0]

    def test_parse_script(self):
        lines = [
            "# session",
            "initialize 4 1 0.1",
            "",
            "advance 2   # two steps",
            "get_hash",
        ]
        assert list(parse_script(lines)) == [
            (2, "initialize", ["4", "1", "0.1"]),
            (4, "advance", ["2"]),
            (5, "get_hash", []),
        ]
