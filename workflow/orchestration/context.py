"""In-flight record of the transition currently being processed."""

from __future__ import annotations

from typing import Any

from workflow.models.graph import name_of


class TransitionContext:
    """Prior state, target state and triggering event of one firing attempt.

    Labels are read-only to everyone except the transition processor, which
    records them before the action runs and clears them after a failed
    transition.
    """

    def __init__(self) -> None:
        self._prior_state: str | None = None
        self._target_state: str | None = None
        self._triggering_event: str | None = None

    @property
    def prior_state(self) -> str | None:
        return self._prior_state

    @property
    def target_state(self) -> str | None:
        return self._target_state

    @property
    def triggering_event(self) -> str | None:
        return self._triggering_event

    @property
    def active(self) -> bool:
        return self._triggering_event is not None

    def record(self, prior_state: str | None, target_state: str, triggering_event: str) -> None:
        self._prior_state = prior_state
        self._target_state = target_state
        self._triggering_event = triggering_event

    def clear(self) -> None:
        self._prior_state = None
        self._target_state = None
        self._triggering_event = None

    def in_exit(self, state: Any) -> bool:
        return self._prior_state == name_of(state)

    def in_entry(self, state: Any) -> bool:
        return self._target_state == name_of(state)

    def in_transition(self, event: Any) -> bool:
        return self._triggering_event == name_of(event)

    def __repr__(self) -> str:
        return (
            f"TransitionContext(prior_state={self._prior_state!r}, "
            f"target_state={self._target_state!r}, "
            f"triggering_event={self._triggering_event!r})"
        )
