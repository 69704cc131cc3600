from __future__ import annotations

import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import Literal

from entity_store.kernel.composition_root import AppRuntime
from entity_store.usecases.batches import all_visible, none_visible

Op = Literal["put", "delete", "get", "query", "await"]

_OPS: frozenset[str] = frozenset({"put", "delete", "get", "query", "await"})
_SEPARATOR = re.compile(r"\s+")


class CommandError(ValueError):
    # Malformed script line; reported with its 1-based line number.
    def __init__(self, line_no: int, message: str) -> None:
        super().__init__(f"line {line_no}: {message}")
        self.line_no = line_no


@dataclass(frozen=True, slots=True)
class Command:
    op: Op
    args: tuple[str, ...]
    # Text after the op keyword; query uses it verbatim.
    rest: str
    line_no: int


def parse_script(lines: Iterable[str]) -> list[Command]:
    commands: list[Command] = []
    for line_no, line in enumerate(lines, start=1):
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        head, *tail = _SEPARATOR.split(stripped, maxsplit=1)
        rest = tail[0] if tail else ""
        if head not in _OPS:
            raise CommandError(line_no, f"unknown command {head!r}")
        command = Command(op=head, args=tuple(rest.split()), rest=rest, line_no=line_no)  # type: ignore[arg-type]
        _validate(command)
        commands.append(command)
    return commands


def _validate(command: Command) -> None:
    if command.op in ("put", "delete") and not command.args:
        raise CommandError(command.line_no, f"{command.op} needs at least one entity")
    if command.op == "get" and len(command.args) != 1:
        raise CommandError(command.line_no, "get needs exactly one entity")
    if command.op == "await":
        if len(command.args) < 2 or command.args[0] not in ("present", "absent"):
            raise CommandError(command.line_no, "usage: await present|absent <entity>...")


def execute(command: Command, runtime: AppRuntime) -> Iterator[dict[str, object]]:
    # Each command yields one or more JSON-ready result records.
    dao = runtime.dao
    if command.op == "put":
        for entity in command.args:
            yield {"op": "put", "entity": entity, "changed": dao.put(entity)}
    elif command.op == "delete":
        for entity in command.args:
            yield {"op": "delete", "entity": entity, "changed": dao.delete(entity)}
    elif command.op == "get":
        entity = command.args[0]
        yield {"op": "get", "entity": entity, "value": dao.get(entity)}
    elif command.op == "query":
        yield {"op": "query", "query": command.rest, "results": dao.query(command.rest)}
    else:
        yield _await(command, runtime)


def _await(command: Command, runtime: AppRuntime) -> dict[str, object]:
    mode = command.args[0]
    entities = list(command.args[1:])
    check = all_visible(runtime.dao, entities) if mode == "present" else none_visible(runtime.dao, entities)
    outcome = runtime.waiter.poll(check, description=f"{mode} {entities!r}")
    return {
        "op": "await",
        "mode": mode,
        "entities": entities,
        "status": outcome.status,
        "attempts": outcome.attempts,
        "elapsed_seconds": round(outcome.elapsed_seconds, 6),
    }
