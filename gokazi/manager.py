"""Finding and stopping the running processes that belong to configured tasks."""

from __future__ import annotations

import logging
import posixpath
from dataclasses import dataclass
from typing import Dict, List, Optional

import psutil

from gokazi.config import Task, clean_path

STOP_TIMEOUT = 5.0


class GokaziError(Exception):
    """A task could not be inspected or controlled."""


class TaskNotFoundError(GokaziError):
    """No task is configured under the given id."""


class TaskNotRunningError(GokaziError):
    """The task has no running process."""


class TaskAlreadyRunningError(GokaziError):
    """The task already has a running process."""


@dataclass
class TaskStatus:
    """A configured task together with the state of its process."""

    config: Task
    pid: int = 0
    running: bool = False

    def to_dict(self) -> dict:
        return {"config": self.config.to_dict(), "pid": self.pid, "running": self.running}


def _process_name(process: psutil.Process) -> Optional[str]:
    try:
        return process.name()
    except psutil.Error:
        return None


def _args_match(task: Task, cmdline: List[str]) -> bool:
    if not task.args:
        return True
    rest = cmdline[1:]
    present = set(rest)
    found = sum(1 for arg in task.expand_args() if arg in present)
    return found == len(rest)


def _find_process(task: Task, processes: List[psutil.Process]) -> Optional[psutil.Process]:
    expected_path = task.expand_path()
    expected_cwd = task.expand_cwd()
    for process in processes:
        try:
            if process.name() != task.name:
                continue
            exe_dir = clean_path(posixpath.dirname(process.exe()))
            if expected_path and expected_path != exe_dir:
                continue
            cwd = process.cwd()
            if expected_cwd and expected_cwd != cwd:
                continue
            cmdline = list(process.cmdline())
        except psutil.Error:
            continue
        if not _args_match(task, cmdline):
            continue
        return process
    return None


class Gokazi:
    """A set of tasks keyed by id, matched against the processes of the system."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        self._log = logger or logging.getLogger(__name__)
        self._tasks: Dict[str, Task] = {}

    def add(self, task_id: str, task: Task) -> None:
        """Register *task* under *task_id*, replacing any earlier one."""
        self._tasks[task_id] = task

    def _list_processes(self) -> List[psutil.Process]:
        names = {task.name for task in self._tasks.values()}
        try:
            candidates = list(psutil.process_iter())
        except psutil.Error as exc:
            raise GokaziError(str(exc)) from exc
        return [process for process in candidates if _process_name(process) in names]

    @staticmethod
    def _status(task: Task, processes: List[psutil.Process]) -> TaskStatus:
        process = _find_process(task, processes)
        if process is None:
            return TaskStatus(config=task)
        try:
            running = process.is_running()
        except psutil.Error as exc:
            raise GokaziError(str(exc)) from exc
        return TaskStatus(config=task, pid=process.pid, running=running)

    def find(self, task_id: str) -> TaskStatus:
        """Return the status of the task registered under *task_id*."""
        task = self._tasks.get(task_id)
        if task is None:
            raise TaskNotFoundError(f"task '{task_id}' not found")
        return self._status(task, self._list_processes())

    def stop(self, task_id: str, timeout: float = STOP_TIMEOUT) -> None:
        """Kill the running process of the task registered under *task_id*."""
        task = self._tasks.get(task_id)
        if task is None:
            raise TaskNotFoundError(f"{task_id}: task not found")

        process = _find_process(task, self._list_processes())
        if process is None:
            raise TaskNotRunningError(f"{task_id}: task not running")

        try:
            running = process.is_running()
        except psutil.Error as exc:
            raise GokaziError(f"{task_id}: {exc}") from exc
        if not running:
            raise TaskNotRunningError(f"{task_id}: task not running")

        self._log.debug(f"stopping {task_id} with pid {process.pid}")
        try:
            process.kill()
        except psutil.Error as exc:
            raise GokaziError(f"{task_id}: {exc}") from exc
        try:
            process.wait(timeout=timeout)
        except psutil.NoSuchProcess:
            pass
        except psutil.TimeoutExpired as exc:
            raise GokaziError(f"{task_id}: process did not exit in time") from exc
        except psutil.Error as exc:
            raise GokaziError(f"{task_id}: {exc}") from exc

    def list(self) -> Dict[str, TaskStatus]:
        """Return the status of every registered task, keyed by id."""
        processes = self._list_processes()
        return {task_id: self._status(task, processes) for task_id, task in self._tasks.items()}