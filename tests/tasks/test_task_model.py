# topmark:header:start
#
#   project      : devlogr
#   file         : test_task_model.py
#   file_relpath : tests/tasks/test_task_model.py
#   license      : MIT
#   copyright    : (c) 2025 Neofork
#
# topmark:header:end

"""Tests for the task node state machine and its events."""

from __future__ import annotations

import pytest

from devlogr.core.errors import UsageError
from devlogr.tasks.model import TaskEvent, TaskEventKind, TaskNode, TaskState


def test_happy_path_transitions_emit_state_events() -> None:
    """pending -> running -> succeeded, each announced once."""
    events: list[TaskEvent] = []
    node = TaskNode("build")
    node.subscribe(events.append)

    node.start()
    node.succeed()

    assert node.state is TaskState.SUCCEEDED
    assert [(e.kind, e.previous) for e in events] == [
        (TaskEventKind.STATE, TaskState.PENDING),
        (TaskEventKind.STATE, TaskState.RUNNING),
    ]
    assert node.duration_ms is not None and node.duration_ms >= 0


@pytest.mark.parametrize("finish", ["succeed", "fail", "skip"])
def test_terminal_states_are_final(finish: str) -> None:
    """A finished node rejects further transitions."""
    node = TaskNode("t")
    node.start()
    getattr(node, finish)()
    assert node.state.is_terminal
    with pytest.raises(UsageError):
        node.start()
    with pytest.raises(UsageError):
        node.succeed()


def test_pending_node_can_be_skipped_but_not_completed() -> None:
    """Skipping never requires running first; succeeding does."""
    node = TaskNode("t")
    with pytest.raises(UsageError):
        node.succeed()
    node.skip("not needed")
    assert node.state is TaskState.SKIPPED
    assert node.display_title == "t -> not needed"


def test_fail_records_error_and_title() -> None:
    """fail() keeps the cause and can retitle the node."""
    node = TaskNode("deploy")
    node.start()
    error = RuntimeError("no route")
    node.fail(error, title="deploy failed")
    assert node.error is error
    assert node.title == "deploy failed"


def test_output_and_title_events() -> None:
    """Output splits into non-empty lines; titles notify subscribers."""
    kinds: list[TaskEventKind] = []
    node = TaskNode("t")
    node.subscribe(lambda event: kinds.append(event.kind))

    node.append_output("first\n\n second \n")
    node.append_output("   ")
    node.set_title("renamed")

    assert node.output_lines == ["first", " second"]
    assert kinds == [TaskEventKind.OUTPUT, TaskEventKind.TITLE]


def test_children_inherit_listeners_and_walk_in_order() -> None:
    """Listeners reach children added later; walk is depth-first."""
    seen: list[str] = []
    root = TaskNode("root")
    root.subscribe(lambda event: seen.append(event.node.title))
    child = root.add_child(TaskNode("child"))
    grandchild = child.add_child(TaskNode("grandchild"))
    root.add_child(TaskNode("sibling"))

    grandchild.start()
    assert seen == ["grandchild"]
    assert [(n.title, d) for n, d in root.walk()] == [
        ("root", 0),
        ("child", 1),
        ("grandchild", 2),
        ("sibling", 1),
    ]


def test_unsubscribe_is_recursive_and_tolerant() -> None:
    """Unsubscribing removes the listener everywhere; unknown listeners are ignored."""
    seen: list[str] = []

    def listener(event: TaskEvent) -> None:
        seen.append(event.node.title)

    root = TaskNode("root")
    child = root.add_child(TaskNode("child"))
    root.subscribe(listener)
    root.unsubscribe(listener)
    root.unsubscribe(listener)
    child.start()
    assert seen == []
