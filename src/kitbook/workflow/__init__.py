"""
kitbook.workflow
~~~~~~~~~~~~~~~~

Task status transitions as a lookup table keyed by
``(current, requested, role)``.  The task collaborator consults it before
changing a task's status; the scheduler itself never depends on task state.
"""

from kitbook.workflow.transitions import (
    TRANSITIONS,
    Role,
    TaskStatus,
    can_transition,
    check_transition,
)

__all__ = [
    "TRANSITIONS",
    "Role",
    "TaskStatus",
    "can_transition",
    "check_transition",
]
