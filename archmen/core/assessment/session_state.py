"""
Assessment session state machine.

    in_progress --answer-->   in_progress  (progress updated)
    in_progress --complete--> completed    (terminal, archetypes snapshotted)
    in_progress --abandon-->  abandoned    (terminal)

Dependencies: None (pure domain layer)
System role: Guards every mutation of an assessment session
"""

import enum

from archmen.core.exceptions import InvalidSessionTransitionError, ValidationError


class SessionStatus(str, enum.Enum):
    """
    Assessment session states.

    IN_PROGRESS: User is answering questions
    COMPLETED: Finished; archetypes snapshotted (terminal)
    ABANDONED: User gave up (terminal)
    """

    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    ABANDONED = "abandoned"


class SessionEvent(str, enum.Enum):
    ANSWER = "answer"
    COMPLETE = "complete"
    ABANDON = "abandon"


TRANSITIONS: dict[tuple[SessionStatus, SessionEvent], SessionStatus] = {
    (SessionStatus.IN_PROGRESS, SessionEvent.ANSWER): SessionStatus.IN_PROGRESS,
    (SessionStatus.IN_PROGRESS, SessionEvent.COMPLETE): SessionStatus.COMPLETED,
    (SessionStatus.IN_PROGRESS, SessionEvent.ABANDON): SessionStatus.ABANDONED,
}


def next_status(status: SessionStatus, event: SessionEvent) -> SessionStatus:
    """
    Apply an event to a session status.

    Raises:
        InvalidSessionTransitionError: When the event is not allowed in this state
    """
    try:
        return TRANSITIONS[(SessionStatus(status), event)]
    except KeyError:
        raise InvalidSessionTransitionError(
            status=SessionStatus(status).value,
            event=event.value,
        ) from None


def validate_progress(progress_percentage: int, current_question_index: int) -> None:
    """
    Check an answer event's progress values.

    Raises:
        ValidationError: When percentage is outside 0-100 or the index is negative
    """
    if not 0 <= progress_percentage <= 100:
        raise ValidationError(
            "Progress percentage must be between 0 and 100",
            field="progressPercentage",
        )
    if current_question_index < 0:
        raise ValidationError(
            "Current question index cannot be negative",
            field="currentQuestionIndex",
        )
