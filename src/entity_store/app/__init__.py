from .cli import apply_timeout_override, apply_tracing_overrides, build_parser, parse_args, run

# app package exports CLI helpers for reuse in tests and entrypoints.
__all__ = ["apply_timeout_override", "apply_tracing_overrides", "build_parser", "parse_args", "run"]
