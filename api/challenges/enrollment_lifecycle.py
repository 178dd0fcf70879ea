"""
Enrollment state machine.

    Joined ──► Completed
       │──────► Failed
       └──────► Withdrawn

Completed, Failed and Withdrawn are terminal. Every status change goes
through `transition`, which is the only place the allowed moves are defined.
"""
from typing import Type

from api.challenges.user_challenges_model import EnrollmentStatus
from utils.errors import InvalidStateTransition

ALLOWED_TRANSITIONS = {
    EnrollmentStatus.joined: frozenset({
        EnrollmentStatus.completed,
        EnrollmentStatus.failed,
        EnrollmentStatus.withdrawn,
    }),
    EnrollmentStatus.completed: frozenset(),
    EnrollmentStatus.failed:    frozenset(),
    EnrollmentStatus.withdrawn: frozenset(),
}


def is_terminal(status: EnrollmentStatus) -> bool:
    return not ALLOWED_TRANSITIONS[status]


def can_transition(current: EnrollmentStatus, target: EnrollmentStatus) -> bool:
    return target in ALLOWED_TRANSITIONS[current]


def transition(
    current: EnrollmentStatus,
    target: EnrollmentStatus,
    error: Type[InvalidStateTransition] = InvalidStateTransition,
) -> EnrollmentStatus:
    """Return `target` if the move is legal, otherwise raise `error`."""
    if not can_transition(current, target):
        raise error(f"Cannot move enrollment from {current.value} to {target.value}")
    return target
