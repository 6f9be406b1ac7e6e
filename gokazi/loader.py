"""Loading and validating configuration from YAML sources."""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterable, Mapping
from typing import Any, IO

import yaml

from gokazi.config import VERSION, Config, Task

DEFAULT_SOURCES = ("gokazi.yaml",)

_log = logging.getLogger(__name__)


class ConfigError(Exception):
    """The configuration could not be read or is invalid."""


def _merge(target: dict, source: Mapping) -> dict:
    for key, value in source.items():
        key = str(key)
        if isinstance(value, Mapping):
            existing = target.get(key)
            if not isinstance(existing, dict):
                existing = {}
            target[key] = _merge(existing, value)
        else:
            target[key] = value
    return target


def _fields(data: Mapping) -> dict[str, Any]:
    return {str(key).lower(): value for key, value in data.items()}


def _as_string(value: Any, where: str) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return str(int(value)) if value.is_integer() else repr(value)
    raise ConfigError(f"failed to unmarshal config: '{where}' expected a string")


def _as_string_list(value: Any, where: str) -> list[str]:
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return [_as_string(item, where) for item in value]
    if isinstance(value, Mapping):
        raise ConfigError(f"failed to unmarshal config: '{where}' expected a list")
    return [_as_string(value, where)]


def _task(raw: Any, task_id: str) -> Task:
    if raw is None:
        return Task()
    if not isinstance(raw, Mapping):
        raise ConfigError(f"failed to unmarshal config: task '{task_id}' expected a mapping")
    fields = _fields(raw)
    prefix = f"tasks/{task_id}"
    return Task(
        name=_as_string(fields.get("name"), f"{prefix}/name"),
        description=_as_string(fields.get("description"), f"{prefix}/description"),
        path=_as_string(fields.get("path"), f"{prefix}/path"),
        cwd=_as_string(fields.get("cwd"), f"{prefix}/cwd"),
        args=_as_string_list(fields.get("args"), f"{prefix}/args"),
    )


def parse_config(data: Mapping | None) -> Config:
    """Build a checked :class:`Config` from a parsed mapping."""
    if data is None:
        data = {}
    if not isinstance(data, Mapping):
        raise ConfigError("failed to unmarshal config: expected a mapping")
    fields = _fields(data)
    version = _as_string(fields.get("version"), "version")

    raw_tasks = fields.get("tasks")
    tasks: dict[str, Task] = {}
    if raw_tasks is not None:
        if not isinstance(raw_tasks, Mapping):
            raise ConfigError("failed to unmarshal config: 'tasks' expected a mapping")
        for task_id, raw in raw_tasks.items():
            tasks[str(task_id)] = _task(raw, str(task_id))

    if version != VERSION:
        raise ConfigError(f"missing or invalid config version: {version} != '{VERSION}'")
    return Config(version=version, tasks=tasks)


def _read_source(source: str, stdin: IO | None, logger: logging.Logger) -> Any:
    if source == "-":
        logger.debug("reading config from stdin")
        stream = stdin if stdin is not None else sys.stdin
        raw = stream.read()
    else:
        logger.debug("reading config from file: " + source)
        try:
            with open(source, "rb") as handle:
                raw = handle.read()
        except OSError as exc:
            raise ConfigError(f"failed to parse config: {exc}") from exc
    try:
        return yaml.safe_load(raw)
    except yaml.YAMLError as exc:
        raise ConfigError(f"failed to parse config: {exc}") from exc


def load_config(
    sources: Iterable[str] = DEFAULT_SOURCES,
    stdin: IO | None = None,
    logger: logging.Logger | None = None,
) -> Config:
    """Read each source in order, merge them, and return the checked configuration.

    A source of ``-`` reads from *stdin*.
    """
    logger = logger or _log
    merged: dict = {}
    for source in sources:
        document = _read_source(source, stdin, logger)
        if document is None:
            continue
        if not isinstance(document, Mapping):
            raise ConfigError("failed to parse config: document root is not a mapping")
        _merge(merged, document)
    return parse_config(merged)