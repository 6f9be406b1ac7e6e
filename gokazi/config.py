"""Task definitions and the configuration that holds them."""

from __future__ import annotations

import os
import posixpath
import re
from dataclasses import dataclass, field

VERSION = "1.0"

_VARIABLE = re.compile(
    r"\$(?:\{(?P<braced>[^}]*)\}"
    r"|(?P<special>[*#$@!?\-0-9])"
    r"|(?P<name>[A-Za-z0-9_]+)"
    r"|(?P<open>\{))?"
)


def expand_env(value: str) -> str:
    """Replace ``$VAR`` and ``${VAR}`` with environment values; unset ones become empty."""

    def replace(match: re.Match) -> str:
        name = match.group("braced") or match.group("special") or match.group("name")
        if name:
            return os.environ.get(name, "")
        if match.group("braced") is not None or match.group("open") is not None:
            # Malformed or empty reference: drop it.
            return ""
        # A lone dollar sign stays as it is.
        return "$"

    return _VARIABLE.sub(replace, value)


def clean_path(value: str) -> str:
    """Return the shortest equivalent slash-separated path."""
    cleaned = posixpath.normpath(value) if value else "."
    if cleaned.startswith("//"):
        cleaned = "/" + cleaned.lstrip("/")
    return cleaned


def _join(*parts: str) -> str:
    present = [part for part in parts if part]
    return clean_path("/".join(present)) if present else ""


@dataclass
class Task:
    """A process that may be running, identified by name, location and arguments."""

    name: str = ""
    description: str = ""
    path: str = ""
    cwd: str = ""
    args: list[str] = field(default_factory=list)

    def expand_cwd(self) -> str:
        """Working directory with environment variables expanded and cleaned."""
        if not self.cwd:
            return ""
        return clean_path(expand_env(self.cwd))

    def expand_path(self) -> str:
        """Executable directory with environment variables expanded and cleaned."""
        if not self.path:
            return ""
        return clean_path(expand_env(self.path))

    def expand_args(self) -> list[str]:
        """Arguments with environment variables expanded."""
        return [expand_env(arg) for arg in self.args]

    def match(self, name: str, cpath: str, cwd: str, args: list[str]) -> bool:
        """Whether a process with these properties belongs to this task."""
        if self.name != name:
            return False
        if self.path and self.expand_path() != cpath:
            return False
        if self.cwd and self.expand_cwd() != cwd:
            return False
        return all(arg in args for arg in self.expand_args())

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "description": self.description,
            "path": self.path,
            "cwd": self.cwd,
            "args": list(self.args),
        }

    def __str__(self) -> str:
        text = _join(self.expand_path(), self.name) if self.path else self.name
        if self.args:
            text += " " + " ".join(self.expand_args())
        if self.cwd:
            text += " in " + self.expand_cwd()
        return text


@dataclass
class Config:
    """Configuration version and task definitions keyed by id."""

    version: str = ""
    tasks: dict[str, Task] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "version": self.version,
            "tasks": {task_id: task.to_dict() for task_id, task in self.tasks.items()},
        }