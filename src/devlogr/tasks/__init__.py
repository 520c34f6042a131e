# topmark:header:start
#
#   project      : devlogr
#   file         : __init__.py
#   file_relpath : src/devlogr/tasks/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Neofork
#
# topmark:header:end

"""Live task trees: node model, scheduler, renderer, spinner registry and runner."""

from __future__ import annotations

from devlogr.tasks.model import TaskEvent, TaskEventKind, TaskNode, TaskState
from devlogr.tasks.renderer import LiveTaskRenderer, RenderMode, choose_mode
from devlogr.tasks.runner import Task, TaskError, TaskHandle, TaskList
from devlogr.tasks.scheduler import CancelToken, Scheduler, SchedulerLike
from devlogr.tasks.spinners import CompletionKind, SpinnerRegistry, SpinnerSession

__all__ = [
    "CancelToken",
    "CompletionKind",
    "LiveTaskRenderer",
    "RenderMode",
    "Scheduler",
    "SchedulerLike",
    "SpinnerRegistry",
    "SpinnerSession",
    "Task",
    "TaskError",
    "TaskEvent",
    "TaskEventKind",
    "TaskHandle",
    "TaskList",
    "TaskNode",
    "TaskState",
    "choose_mode",
]
