"""
Command dispatch: map verb names to Engine operations.

A command is a verb followed by whitespace-separated arguments:

    initialize 64 1 0.1
    advance 100
    get_hash
    get_field_slice 0 0 4 4

Arguments arrive as strings and are converted per verb before the engine
sees them. Conversion errors raise ValueError. An unknown verb raises
UnknownCommandError.
"""

from __future__ import annotations
import json
import shlex
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Iterator, Sequence

from detfield.core.engine import Engine
from detfield.core.errors import UnknownCommandError


def _parse_uint(text: str) -> int:
    text = text.strip()
    value = int(text, 16) if text.lower().startswith("0x") else int(text)
    if value < 0:
        raise ValueError(f"expected a non-negative integer, got {text!r}")
    return value


@dataclass(frozen=True)
class Verb:
    """One entry of the command table."""

    name: str
    method: str
    arg_names: tuple[str, ...] = ()
    arg_types: tuple[Callable[[str], Any], ...] = ()


VERBS: dict[str, Verb] = {
    v.name: v
    for v in (
        Verb("initialize", "initialize", ("dim", "seed", "alpha"), (_parse_uint, _parse_uint, float)),
        Verb("advance", "advance", ("n",), (_parse_uint,)),
        Verb("get_step", "get_step"),
        Verb("get_dim", "get_dim"),
        Verb("get_hash", "get_hash"),
        Verb("get_field_slice", "get_field_slice", ("x0", "y0", "w", "h"), (_parse_uint,) * 4),
    )
}


def dispatch(engine: Engine, verb: str, args: Sequence[str] = ()) -> Any:
    """
    Run one verb against an engine.

    Args:
        engine: Target engine
        verb: Verb name (see VERBS)
        args: String arguments for the verb

    Returns:
        Whatever the engine method returns (None for writers)
    """
    spec = VERBS.get(verb)
    if spec is None:
        raise UnknownCommandError(f"unknown command: {verb!r}")
    if len(args) != len(spec.arg_names):
        expected = " ".join(spec.arg_names) or "no arguments"
        raise ValueError(f"{verb} expects {expected}, got {len(args)} argument(s)")
    try:
        values = [convert(a) for convert, a in zip(spec.arg_types, args)]
    except ValueError as e:
        raise ValueError(f"{verb}: {e}") from e
    return getattr(engine, spec.method)(*values)


def format_result(result: Any) -> str:
    """Render a verb result as one line of text."""
    if result is None:
        return "ok"
    if isinstance(result, bytes):
        return result.hex()
    if isinstance(result, list):
        return json.dumps(result)
    return str(result)


def parse_script(lines: Iterable[str]) -> Iterator[tuple[int, str, list[str]]]:
    """
    Yield (line_number, verb, args) for each command line.

    Blank lines and '#' comments are skipped.
    """
    for lineno, line in enumerate(lines, start=1):
        tokens = shlex.split(line, comments=True)
        if not tokens:
            continue
        yield lineno, tokens[0], tokens[1:]

