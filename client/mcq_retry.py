"""
Two-strike retry state machine for quiz (MCQ) generation.

    idle/failed_once/failed_twice --RETRY--> generating
    any phase --START--> generating (counter reset)
    generating --SUCCEEDED--> success
    generating --FAILED--> failed_once, or failed_twice on the second
                           consecutive failure

failed_twice still accepts RETRY, but the retry affordance is only offered in
failed_once (see McqRetryState.retry_offered).
"""
from enum import Enum
from typing import Callable, Dict, Tuple

from pydantic import BaseModel, ConfigDict, Field


class McqPhase(str, Enum):
    IDLE = "idle"
    GENERATING = "generating"
    FAILED_ONCE = "failed_once"
    FAILED_TWICE = "failed_twice"
    SUCCESS = "success"


class McqEvent(str, Enum):
    START = "start"
    RETRY = "retry"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


RETRYABLE_PHASES = frozenset({McqPhase.IDLE, McqPhase.FAILED_ONCE, McqPhase.FAILED_TWICE})
MAX_CONSECUTIVE_FAILURES = 2


class InvalidMcqTransition(ValueError):
    def __init__(self, phase: McqPhase, event: McqEvent):
        super().__init__(f"No MCQ transition from {phase.value} on {event.value}")
        self.phase = phase
        self.event = event


class McqRetryState(BaseModel):
    model_config = ConfigDict(frozen=True)

    phase: McqPhase = McqPhase.IDLE
    consecutive_failures: int = Field(default=0, ge=0, le=MAX_CONSECUTIVE_FAILURES)

    @property
    def can_retry(self) -> bool:
        return self.phase in RETRYABLE_PHASES

    @property
    def retry_offered(self) -> bool:
        return self.phase == McqPhase.FAILED_ONCE


def _start(state: McqRetryState) -> McqRetryState:
    return McqRetryState(phase=McqPhase.GENERATING)


def _retry(state: McqRetryState) -> McqRetryState:
    return McqRetryState(phase=McqPhase.GENERATING, consecutive_failures=state.consecutive_failures)


def _succeed(state: McqRetryState) -> McqRetryState:
    return McqRetryState(phase=McqPhase.SUCCESS)


def _fail(state: McqRetryState) -> McqRetryState:
    failures = min(state.consecutive_failures + 1, MAX_CONSECUTIVE_FAILURES)
    phase = McqPhase.FAILED_ONCE if failures == 1 else McqPhase.FAILED_TWICE
    return McqRetryState(phase=phase, consecutive_failures=failures)


TRANSITIONS: Dict[Tuple[McqPhase, McqEvent], Callable[[McqRetryState], McqRetryState]] = {
    **{(phase, McqEvent.START): _start for phase in McqPhase},
    **{(phase, McqEvent.RETRY): _retry for phase in RETRYABLE_PHASES},
    (McqPhase.GENERATING, McqEvent.SUCCEEDED): _succeed,
    (McqPhase.GENERATING, McqEvent.FAILED): _fail,
}


def advance(state: McqRetryState, event: McqEvent) -> McqRetryState:
    """Apply one event; pairs missing from TRANSITIONS raise InvalidMcqTransition."""
    handler = TRANSITIONS.get((state.phase, event))
    if handler is None:
        raise InvalidMcqTransition(state.phase, event)
    return handler(state)
