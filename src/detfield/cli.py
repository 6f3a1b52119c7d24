"""
Command-line surface for the engine.

The engine holds its state in memory only, so every invocation is a whole
session: initialize, advance, read.

Usage:
    detfield run --dim 64 --seed 1 --alpha 0.1 --steps 100
    detfield slice --dim 8 --steps 3 --x0 0 --y0 0 --w 4 --h 2
    detfield exec session.txt
    detfield stats --config run.yaml
    detfield render --dim 128 --steps 500 --out field.png
"""

from __future__ import annotations
import argparse
import json
import logging
import sys
from typing import Sequence

import yaml

from detfield import __version__
from detfield.config import LOG_LEVELS, RunConfig
from detfield.commands import dispatch, format_result, parse_script
from detfield.core.engine import Engine
from detfield.core.errors import EngineError

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_ENGINE_ERROR = 2


def _add_run_arguments(parser: argparse.ArgumentParser) -> None:
    """Arguments shared by every subcommand that builds an engine from a RunConfig."""
    parser.add_argument("--config", type=str, default=None, help="YAML run configuration")
    parser.add_argument("--dim", type=int, default=None, help="Grid side length (4..512)")
    parser.add_argument(
        "--seed",
        type=lambda s: int(s, 0),
        default=None,
        help="Unsigned 64-bit seed (decimal or 0x-hex)",
    )
    parser.add_argument("--alpha", type=float, default=None, help="Diffusion coefficient (0, 0.25]")
    parser.add_argument("--steps", type=int, default=None, help="Steps to advance")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="detfield",
        description="Deterministic 2-D diffusion engine.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--log-level",
        choices=LOG_LEVELS,
        type=str.upper,
        default=None,
        help="Logging level (default: from config, else WARNING)",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p_run = sub.add_parser("run", help="Initialize, advance, print step/dim/hash")
    _add_run_arguments(p_run)
    p_run.add_argument("--json", action="store_true", help="Print a JSON object")

    p_slice = sub.add_parser("slice", help="Initialize, advance, print a window as JSON")
    _add_run_arguments(p_slice)
    p_slice.add_argument("--x0", type=int, default=0)
    p_slice.add_argument("--y0", type=int, default=0)
    p_slice.add_argument("--w", type=int, required=True)
    p_slice.add_argument("--h", type=int, required=True)

    p_exec = sub.add_parser("exec", help="Execute a script of verbs ('-' for stdin)")
    p_exec.add_argument("script", type=str)

    p_stats = sub.add_parser("stats", help="Initialize, advance, print summary statistics")
    _add_run_arguments(p_stats)

    p_render = sub.add_parser("render", help="Initialize, advance, save a heatmap")
    _add_run_arguments(p_render)
    p_render.add_argument("--out", type=str, required=True, help="Output image path")
    p_render.add_argument(
        "--window",
        type=int,
        nargs=4,
        metavar=("X0", "Y0", "W", "H"),
        default=None,
        help="Render only this window",
    )
    p_render.add_argument("--dpi", type=int, default=150)

    return parser


def load_config(args: argparse.Namespace) -> RunConfig:
    """Merge command-line flags over the optional YAML config."""
    config = RunConfig.from_yaml(args.config) if args.config else RunConfig()
    return config.with_overrides(
        dim=args.dim,
        seed=args.seed,
        alpha=args.alpha,
        steps=args.steps,
        log_level=args.log_level,
    )


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def cmd_run(args: argparse.Namespace, config: RunConfig) -> int:
    engine = Engine.from_config(config)
    result = {
        "dim": engine.get_dim(),
        "step": engine.get_step(),
        "alpha": config.alpha,
        "seed": config.seed,
        "hash": engine.get_hash_hex(),
    }
    if args.json:
        print(json.dumps(result))
    else:
        for key, value in result.items():
            print(f"{key}: {value}")
    return EXIT_OK


def cmd_slice(args: argparse.Namespace, config: RunConfig) -> int:
    engine = Engine.from_config(config)
    print(json.dumps(engine.get_field_slice(args.x0, args.y0, args.w, args.h)))
    return EXIT_OK


def cmd_stats(args: argparse.Namespace, config: RunConfig) -> int:
    from detfield.analysis import summarize

    engine = Engine.from_config(config)
    print(json.dumps(summarize(engine.snapshot()).as_dict()))
    return EXIT_OK


def cmd_render(args: argparse.Namespace, config: RunConfig) -> int:
    import matplotlib

    matplotlib.use("Agg")
    import matplotlib.pyplot as plt
    from detfield.viz import plot_state, plot_window, save_figure

    engine = Engine.from_config(config)
    if args.window is not None:
        fig, _ = plot_window(engine, *args.window)
    else:
        fig, _ = plot_state(engine.snapshot())
    save_figure(fig, args.out, dpi=args.dpi)
    plt.close(fig)
    logger.info("wrote %s", args.out)
    return EXIT_OK


def cmd_exec(args: argparse.Namespace) -> int:
    engine = Engine()
    if args.script == "-":
        lines = sys.stdin.read().splitlines()
    else:
        with open(args.script) as f:
            lines = f.read().splitlines()
    for lineno, verb, verb_args in parse_script(lines):
        try:
            result = dispatch(engine, verb, verb_args)
        except (EngineError, ValueError) as e:
            print(f"error: line {lineno}: {verb}: {e}", file=sys.stderr)
            return EXIT_ENGINE_ERROR
        print(f"{verb}: {format_result(result)}")
    return EXIT_OK


COMMANDS = {
    "run": cmd_run,
    "slice": cmd_slice,
    "stats": cmd_stats,
    "render": cmd_render,
}


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point for CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        if args.command == "exec":
            _configure_logging(args.log_level or "WARNING")
            return cmd_exec(args)

        config = load_config(args)
        _configure_logging(config.log_level)
        return COMMANDS[args.command](args, config)
    except (EngineError, ValueError, OSError, yaml.YAMLError) as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_ENGINE_ERROR
