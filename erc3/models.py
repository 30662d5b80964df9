"""Task identifiers and pydantic views of core API responses.

Client methods return the parsed JSON as-is; these models are for callers
that want typed access, e.g. ``SessionStatus.model_validate(result)``.
"""

from __future__ import annotations

from typing import Any, Mapping, NewType, Optional

from pydantic import BaseModel, ConfigDict, Field

TaskId = NewType("TaskId", str)


def to_task_id(task) -> TaskId:
    """Normalize a task argument to its identifier.

    Accepts a bare id string, a mapping with a ``task_id`` key, or any object
    with a ``task_id`` attribute (such as ``TaskInfo``).
    """
    if isinstance(task, str):
        task_id = task
    elif isinstance(task, Mapping):
        task_id = task.get("task_id")
    else:
        task_id = getattr(task, "task_id", None)

    if not isinstance(task_id, str) or not task_id:
        raise TypeError(
            f"Expected a task id or an object with a task_id, got {type(task).__name__}"
        )
    return TaskId(task_id)


class _Response(BaseModel):
    model_config = ConfigDict(extra="allow")


class SessionInfo(_Response):
    """Response from starting a session."""
    session_id: str
    task_count: int = 0


class TaskInfo(_Response):
    """A task within a session."""
    task_id: str
    status: Optional[str] = None
    spec_id: Optional[str] = None
    task_text: Optional[str] = None
    logs: list[Any] = Field(default_factory=list)


class SessionStatus(_Response):
    """Session status with its tasks."""
    session_id: Optional[str] = None
    status: Optional[str] = None
    tasks: list[TaskInfo] = Field(default_factory=list)


class TaskEval(_Response):
    """Evaluation attached to a completed task."""
    success: Optional[bool] = None
    score: Optional[float] = None
    logs: Optional[str] = None


class CompleteTaskResponse(_Response):
    """Response from completing a task."""
    eval: Optional[TaskEval] = None
