"""Declarative builder assembling an immutable ``Specification``.

Usage::

    def describe(w):
        with w.state("draft") as s:
            s.event("submit", transitions_to="reviewing")
        with w.state("reviewing") as s:
            s.event("approve", transitions_to="approved")
            s.allow("comment")
        w.state("approved", meta={"terminal": True})

    spec = build_specification(describe)
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from workflow.core.exceptions import WorkflowDefinitionError
from workflow.models.graph import Event, Hook, Specification, State, frozen_mapping, name_of


class StateBuilder:
    """Collects the events and hooks declared inside one ``state`` block."""

    def __init__(self, name: str, meta: Mapping[str, Any] | None = None) -> None:
        self.name = name
        self.meta = dict(meta or {})
        self._events: dict[str, Event] = {}
        self._on_entry: Hook | None = None
        self._on_exit: Hook | None = None

    def __enter__(self) -> "StateBuilder":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        return None

    def event(
        self,
        name: Any,
        transitions_to: Any = None,
        action: Hook | None = None,
        meta: Mapping[str, Any] | None = None,
        *,
        transition_to: Any = None,
    ) -> "StateBuilder":
        target = transitions_to if transitions_to is not None else transition_to
        event_name = name_of(name)
        if target is None:
            raise WorkflowDefinitionError(
                f"missing 'transitions_to' in workflow event definition for '{event_name}'"
            )
        self._events[event_name] = Event(
            name=event_name,
            transitions_to=name_of(target),
            action=action,
            meta=frozen_mapping(meta),
        )
        return self

    def allow(
        self,
        name: Any,
        action: Hook | None = None,
        meta: Mapping[str, Any] | None = None,
    ) -> "StateBuilder":
        """Declare an event that keeps the subject in this state."""
        return self.event(name, transitions_to=self.name, action=action, meta=meta)

    def on_entry(self, fn: Hook) -> Hook:
        self._on_entry = fn
        return fn

    def on_exit(self, fn: Hook) -> Hook:
        self._on_exit = fn
        return fn

    def build(self) -> State:
        return State(
            name=self.name,
            events=frozen_mapping(self._events),
            on_entry=self._on_entry,
            on_exit=self._on_exit,
            meta=frozen_mapping(self.meta),
        )


class SpecificationBuilder:
    """Single-pass builder for one workflow graph."""

    def __init__(self, meta: Mapping[str, Any] | None = None) -> None:
        self.meta = dict(meta or {})
        self._states: dict[str, StateBuilder] = {}
        self._initial: str | None = None
        self._on_transition: Hook | None = None
        self._on_failed_transition: Hook | None = None

    def state(self, name: Any, meta: Mapping[str, Any] | None = None) -> StateBuilder:
        state_name = name_of(name)
        scoped = StateBuilder(state_name, meta)
        if not self._states:
            self._initial = state_name
        self._states[state_name] = scoped
        return scoped

    def on_transition(self, fn: Hook) -> Hook:
        self._on_transition = fn
        return fn

    def on_failed_transition(self, fn: Hook) -> Hook:
        self._on_failed_transition = fn
        return fn

    def build(self) -> Specification:
        """Freeze the declared graph.

        Event targets are left unchecked. An empty description is rejected as
        well, since a specification needs an initial state.
        """
        if self._initial is None:
            raise WorkflowDefinitionError("workflow definition declares no states")
        states = {name: scoped.build() for name, scoped in self._states.items()}
        return Specification(
            states=frozen_mapping(states),
            initial_state=states[self._initial],
            on_transition=self._on_transition,
            on_failed_transition=self._on_failed_transition,
            meta=frozen_mapping(self.meta),
        )


def build_specification(
    describe: Callable[[SpecificationBuilder], None],
    meta: Mapping[str, Any] | None = None,
) -> Specification:
    """Run ``describe`` against a fresh builder and return the frozen graph."""
    builder = SpecificationBuilder(meta)
    describe(builder)
    return builder.build()
