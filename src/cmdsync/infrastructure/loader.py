"""Load desired command definitions from a TOML or JSON file.

TOML files use an array of tables::

    [[commands]]
    name = "ping"
    description = "Replies with Pong!"

JSON files hold either a top-level list or an object with a ``commands`` list.
"""

from __future__ import annotations

import json
import tomllib
from pathlib import Path
from typing import Any

from pydantic import TypeAdapter, ValidationError

from cmdsync.domain.commands import CommandDefinition
from cmdsync.domain.errors import InvalidArgumentError

_DEFINITIONS = TypeAdapter(list[CommandDefinition])

SUPPORTED_SUFFIXES = (".toml", ".json")


def load_definitions(path: Path) -> list[CommandDefinition]:
    """Read and validate every command definition in *path*.

    Raises:
        InvalidArgumentError: The file is missing, unparseable, of an
            unsupported type, or holds an invalid definition.
    """
    suffix = path.suffix.lower()
    if suffix not in SUPPORTED_SUFFIXES:
        msg = f"Unsupported definitions file type '{suffix}' (expected .toml or .json)"
        raise InvalidArgumentError(msg, detail={"path": str(path)})

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        msg = f"Cannot read definitions file {path}: {exc.strerror or exc}"
        raise InvalidArgumentError(msg, detail={"path": str(path)}) from exc

    try:
        data: Any = tomllib.loads(raw) if suffix == ".toml" else json.loads(raw)
    except (tomllib.TOMLDecodeError, json.JSONDecodeError) as exc:
        msg = f"Invalid {suffix[1:].upper()} in {path}: {exc}"
        raise InvalidArgumentError(msg, detail={"path": str(path)}) from exc

    if isinstance(data, dict):
        data = data.get("commands", [])

    try:
        return _DEFINITIONS.validate_python(data)
    except ValidationError as exc:
        msg = f"Invalid command definitions in {path}"
        raise InvalidArgumentError(
            msg,
            detail={
                "path": str(path),
                "errors": exc.errors(include_url=False, include_context=False, include_input=False),
            },
        ) from exc
