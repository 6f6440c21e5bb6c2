"""Stream decoder state machine.

ACTIVE ──[DONE marker / source exhausted]──→ DONE
   │
   └──[error payload / bad JSON / read failure]──→ ERRORED

Both DONE and ERRORED are terminal.
"""

from __future__ import annotations

import enum

import structlog

log = structlog.get_logger()


class StreamState(enum.Enum):
    ACTIVE = "ACTIVE"
    DONE = "DONE"
    ERRORED = "ERRORED"


# Valid transitions: (from_state, to_state)
VALID_TRANSITIONS: set[tuple[StreamState, StreamState]] = {
    (StreamState.ACTIVE, StreamState.DONE),
    (StreamState.ACTIVE, StreamState.ERRORED),
}


class InvalidTransition(Exception):
    """Raised when an invalid state transition is attempted."""

    def __init__(self, from_state: StreamState, to_state: StreamState) -> None:
        self.from_state = from_state
        self.to_state = to_state
        super().__init__(f"Invalid transition: {from_state.value} → {to_state.value}")


def validate_transition(from_state: StreamState, to_state: StreamState) -> None:
    """Validate a state transition, raising InvalidTransition if not allowed."""
    if (from_state, to_state) not in VALID_TRANSITIONS:
        raise InvalidTransition(from_state, to_state)


def transition(
    current: StreamState,
    target: StreamState,
    stream_id: str,
    trigger: str = "",
) -> StreamState:
    """Execute a validated state transition, logging the change."""
    validate_transition(current, target)
    log.debug(
        "stream_state_transition",
        stream_id=stream_id,
        from_state=current.value,
        to_state=target.value,
        trigger=trigger,
    )
    return target
