from __future__ import annotations

from enum import Enum
from itertools import product

from kitbook.errors import TransitionError


class TaskStatus(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    REVIEW = "review"
    COMPLETED = "completed"


class Role(str, Enum):
    ADMIN = "admin"
    SUPERVISOR = "supervisor"
    INTERN = "intern"


_STAFF = (Role.ADMIN, Role.SUPERVISOR)

# Interns only move their own tasks forward, and never out of review.
_INTERN_MOVES: dict[TaskStatus, frozenset[TaskStatus]] = {
    TaskStatus.PENDING: frozenset({TaskStatus.IN_PROGRESS}),
    TaskStatus.IN_PROGRESS: frozenset({TaskStatus.REVIEW}),
    TaskStatus.REVIEW: frozenset(),
    TaskStatus.COMPLETED: frozenset(),
}

# (current, requested, role) -> allowed.  Staff may move anywhere, including
# a no-op to the same status.
TRANSITIONS: dict[tuple[TaskStatus, TaskStatus, Role], bool] = {
    (current, requested, role): (
        role in _STAFF or requested in _INTERN_MOVES[current]
    )
    for current, requested, role in product(TaskStatus, TaskStatus, Role)
}


def can_transition(
    current: TaskStatus,
    requested: TaskStatus,
    role: Role,
    *,
    is_assignee: bool = True,
) -> bool:
    role = Role(role)
    if role not in _STAFF and not is_assignee:
        return False
    return TRANSITIONS[(TaskStatus(current), TaskStatus(requested), role)]


def check_transition(
    current: TaskStatus,
    requested: TaskStatus,
    role: Role,
    *,
    is_assignee: bool = True,
) -> None:
    if Role(role) not in _STAFF and not is_assignee:
        raise TransitionError("Only the assignees of a task can change its status.")
    if not can_transition(current, requested, role, is_assignee=is_assignee):
        raise TransitionError(
            f"Cannot change status from '{TaskStatus(current).value}' "
            f"to '{TaskStatus(requested).value}'."
        )
