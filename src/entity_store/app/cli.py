from __future__ import annotations

import argparse
import json
import math
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import TextIO

from entity_store.app.commands import CommandError, execute, parse_script
from entity_store.config.loader import ConfigError, load_config
from entity_store.config.models import AppConfig, TraceSinkConfig, TraceSinkJsonlConfig
from entity_store.kernel.composition_root import build_runtime

EXIT_OK = 0
EXIT_TIMEOUT = 1
EXIT_USAGE = 2

# NOTE: This CLI module is a thin wrapper around composition root wiring.
# Every run starts from an empty store; nothing persists between runs.


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="In-memory entity store script runner")
    parser.add_argument("--config", help="Path to YAML config (defaults apply when omitted)")
    parser.add_argument("--script", default="-", help="Command script path, '-' for stdin")
    parser.add_argument(
        "--tracing",
        choices=["enable", "disable"],
        help="Override tracing enabled flag",
    )
    parser.add_argument("--trace-path", help="Override trace JSONL file path")
    parser.add_argument("--timeout", type=float, help="Override await timeout in seconds")
    return parser


def parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    # Parse CLI arguments; caller passes argv for testability.
    return build_parser().parse_args(argv)


def apply_tracing_overrides(config: AppConfig, args: argparse.Namespace) -> None:
    # CLI overrides take precedence over config.
    tracing = config.tracing
    if args.tracing is not None:
        tracing.enabled = args.tracing == "enable"

    if args.trace_path is not None:
        if tracing.sink is None or tracing.sink.kind != "jsonl":
            tracing.sink = TraceSinkConfig(
                kind="jsonl",
                jsonl=TraceSinkJsonlConfig(path=args.trace_path),
            )
        else:
            assert tracing.sink.jsonl is not None
            tracing.sink.jsonl.path = args.trace_path
        # A trace path without an explicit --tracing flag implies tracing on.
        if args.tracing is None:
            tracing.enabled = True
    elif tracing.enabled and tracing.sink is None:
        tracing.sink = TraceSinkConfig(kind="stdout")


def apply_timeout_override(config: AppConfig, args: argparse.Namespace) -> None:
    if args.timeout is not None:
        if not (math.isfinite(args.timeout) and args.timeout > 0):
            raise ConfigError("--timeout must be a finite number > 0")
        config.polling.timeout_seconds = args.timeout


def run(
    argv: Sequence[str] | None = None,
    *,
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
    stderr: TextIO | None = None,
) -> int:
    args = parse_args(argv)
    out = stdout or sys.stdout
    err = stderr or sys.stderr
    try:
        config = load_config(Path(args.config)) if args.config else AppConfig()
        apply_tracing_overrides(config, args)
        apply_timeout_override(config, args)
        commands = parse_script(_read_script(args.script, stdin or sys.stdin))
    except (ConfigError, CommandError, OSError) as exc:
        err.write(f"error: {exc}\n")
        return EXIT_USAGE

    # stdout carries JSON results only; stream trace records go to stderr.
    runtime = build_runtime(config, trace_stream=err)
    exit_code = EXIT_OK
    try:
        for command in commands:
            for result in execute(command, runtime):
                out.write(json.dumps(result, separators=(",", ":"), ensure_ascii=False) + "\n")
                if result.get("status") == "timeout":
                    exit_code = EXIT_TIMEOUT
    finally:
        runtime.close()
    return exit_code


def _read_script(script: str, stdin: TextIO) -> list[str]:
    if script == "-":
        return stdin.read().splitlines()
    return Path(script).read_text(encoding="utf-8").splitlines()
