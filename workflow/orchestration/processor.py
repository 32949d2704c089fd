"""Transition processor driving one event firing end-to-end."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from workflow.core.exceptions import NoTransitionAllowed, WorkflowError
from workflow.models.graph import Event, State, name_of
from workflow.orchestration.hooks import HookDispatcher

if TYPE_CHECKING:
    from workflow.orchestration.subject import Subject


class TransitionProcessor:
    """Validate, execute and commit events against a subject.

    A firing either commits (returns the persistence result, or ``True``),
    fails softly (returns ``False`` with ``subject.halted`` set) or raises.
    Nothing here logs or retries; every error propagates to the caller.
    """

    def __init__(self, dispatcher: HookDispatcher | None = None) -> None:
        self.dispatcher = dispatcher or HookDispatcher()

    def resolve_current_state(self, subject: Subject) -> State:
        specification = subject.specification
        loaded = subject.persistence.load()
        state = specification.get_state(loaded) if loaded is not None else None
        return state or specification.initial_state

    def can_fire(self, subject: Subject, event_name: Any) -> bool:
        return name_of(event_name) in self.resolve_current_state(subject).events

    def fire(self, subject: Subject, event_name: Any, *args: Any) -> Any:
        name = name_of(event_name)
        current = self.resolve_current_state(subject)
        event = current.events.get(name)
        if event is None:
            raise NoTransitionAllowed(f"There is no event {name} defined for the {current} state")
        target = self._resolve_target(subject, event)

        subject.context.record(current.name, target.name, name)
        subject.reset_halt()

        self.dispatcher.run_action(subject, event, *args)
        if subject.halted:
            return self._fail(subject, current, target, name, *args)

        if not event.skip_all_validations and not subject.validation.is_valid(subject):
            return self._fail(subject, current, target, name, *args)

        return self._commit(subject, current, target, name, *args)

    def _resolve_target(self, subject: Subject, event: Event) -> State:
        target = subject.specification.get_state(event.transitions_to)
        if target is None:
            raise WorkflowError(
                f"Event[{event.name}]'s transitions_to[{event.transitions_to}] is not a declared state."
            )
        return target

    def _fail(self, subject: Subject, prior: State, target: State, name: str, *args: Any) -> bool:
        self.dispatcher.run_on_failed_transition(subject, prior.name, target.name, name, *args)
        subject.mark_halted()
        subject.context.clear()
        return False

    def _commit(self, subject: Subject, prior: State, target: State, name: str, *args: Any) -> Any:
        self.dispatcher.run_on_exit(subject, prior, target.name, name, *args)
        self.dispatcher.run_on_transition(subject, prior.name, target.name, name, *args)
        value = subject.persistence.persist(target.name)
        self.dispatcher.run_on_entry(subject, target, prior.name, name, *args)
        return True if value is None else value
