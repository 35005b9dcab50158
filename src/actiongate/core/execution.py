"""
Execution state machine.

States:  idle, blocked, executing, success, error
Events:  Initiate, Finish, Fail, Reset, Block, Unblock

`apply(state, event)` is a pure function; ExecutionController owns the
current state and feeds it events. Illegal (state, event) pairs raise
InvalidTransitionError instead of being silently ignored.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional, Union

from actiongate.protocol.enums import ExecutionStatus, TrustLevel
from actiongate.protocol.errors import InvalidTransitionError
from actiongate.protocol.models import ExecutionState, SecurityVerdict


# ----------------------------------------------------------------------
# EVENTS
# ----------------------------------------------------------------------

@dataclass(frozen=True)
class Initiate:
    component_id: str


@dataclass(frozen=True)
class Finish:
    success_message: Optional[str] = None


@dataclass(frozen=True)
class Fail:
    error_message: str


@dataclass(frozen=True)
class Reset:
    pass


@dataclass(frozen=True)
class Block:
    pass


@dataclass(frozen=True)
class Unblock:
    pass


ExecutionEvent = Union[Initiate, Finish, Fail, Reset, Block, Unblock]


# ----------------------------------------------------------------------
# TRANSITIONS
# ----------------------------------------------------------------------

def initial_state(verdict: SecurityVerdict) -> ExecutionState:
    if verdict.overall is TrustLevel.MALICIOUS or not verdict.admitted:
        return ExecutionState(status=ExecutionStatus.BLOCKED)
    return ExecutionState(status=ExecutionStatus.IDLE)


def _require(state: ExecutionState, event: ExecutionEvent, *allowed: ExecutionStatus) -> None:
    if state.status not in allowed:
        raise InvalidTransitionError(
            f"{type(event).__name__} is not allowed while {state.status.value}"
        )


def apply(state: ExecutionState, event: ExecutionEvent) -> ExecutionState:
    if isinstance(event, Initiate):
        _require(state, event, ExecutionStatus.IDLE)
        return ExecutionState(
            status=ExecutionStatus.EXECUTING,
            executing_action_id=event.component_id,
        )

    if isinstance(event, Finish):
        _require(state, event, ExecutionStatus.EXECUTING)
        return replace(
            state,
            status=ExecutionStatus.SUCCESS,
            success_message=event.success_message,
            error_message=None,
        )

    if isinstance(event, Fail):
        _require(state, event, ExecutionStatus.EXECUTING)
        return replace(
            state,
            status=ExecutionStatus.ERROR,
            error_message=event.error_message,
            success_message=None,
        )

    if isinstance(event, Reset):
        return ExecutionState(status=ExecutionStatus.IDLE)

    if isinstance(event, Block):
        return ExecutionState(status=ExecutionStatus.BLOCKED)

    if isinstance(event, Unblock):
        _require(state, event, ExecutionStatus.BLOCKED)
        return ExecutionState(status=ExecutionStatus.IDLE)

    raise InvalidTransitionError(f"Unknown execution event: {event!r}")
