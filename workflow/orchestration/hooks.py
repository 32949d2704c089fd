"""Hook resolution for actions and entry/exit/transition callbacks."""

from __future__ import annotations

import inspect
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from workflow.models.graph import Event, Specification, State

if TYPE_CHECKING:
    from workflow.orchestration.subject import Subject

HostHook = Callable[..., Any]

DEFAULT_FAILURE_REASON = "validation_failed"


def entry_hook_name(state: State | str) -> str:
    return f"on_{state}_entry"


def exit_hook_name(state: State | str) -> str:
    return f"on_{state}_exit"


class HookTable:
    """Optional host hooks keyed by conventional name.

    Entries are called as ``hook(host, subject, *args)``, so plain methods
    defined on the host class can be registered as they are and still halt
    through the subject.
    """

    def __init__(self) -> None:
        self._hooks: dict[str, HostHook] = {}

    def register(self, name: str, hook: HostHook) -> None:
        """Register a named hook. Overwrites if already registered."""
        self._hooks[name] = hook

    def get(self, name: str) -> HostHook | None:
        return self._hooks.get(name)

    def has(self, name: str) -> bool:
        return name in self._hooks

    def names(self) -> list[str]:
        return sorted(self._hooks)

    @classmethod
    def from_host_type(cls, host_type: type, specification: Specification) -> "HookTable":
        """Collect the conventional hooks ``host_type`` defines for ``specification``.

        Candidates are every event name plus ``on_<state>_entry`` and
        ``on_<state>_exit`` for each declared state. Only plain functions are
        collected; static and class methods do not take the host as ``self``.
        """
        table = cls()
        candidates: list[str] = []
        for state in specification.states.values():
            candidates.append(entry_hook_name(state))
            candidates.append(exit_hook_name(state))
            candidates.extend(state.events)
        for name in candidates:
            try:
                raw = inspect.getattr_static(host_type, name)
            except AttributeError:
                continue
            if isinstance(raw, (staticmethod, classmethod)):
                continue
            hook = getattr(host_type, name)
            if callable(hook):
                table.register(name, hook)
        return table


class HookDispatcher:
    """Invoke explicit callbacks, falling back to the host hook table."""

    def _run_host_hook(self, subject: Subject, name: str, *args: Any) -> Any:
        hook = subject.hooks.get(name)
        if hook is None:
            return None
        return hook(subject.host, subject, *args)

    def run_action(self, subject: Subject, event: Event, *args: Any) -> Any:
        result = event.action(subject, *args) if event.action is not None else None
        # A halted action with a falsy result still reaches the named hook.
        return result or self._run_host_hook(subject, event.name, *args)

    def run_on_entry(
        self, subject: Subject, state: State, prior_state: str | None, event_name: str, *args: Any
    ) -> None:
        if state.on_entry is not None:
            state.on_entry(subject, prior_state, event_name, *args)
        else:
            self._run_host_hook(subject, entry_hook_name(state), prior_state, event_name, *args)

    def run_on_exit(
        self, subject: Subject, state: State | None, new_state: str, event_name: str, *args: Any
    ) -> None:
        if state is None:
            return
        if state.on_exit is not None:
            state.on_exit(subject, new_state, event_name, *args)
        else:
            self._run_host_hook(subject, exit_hook_name(state), new_state, event_name, *args)

    def run_on_transition(
        self, subject: Subject, from_state: str | None, to_state: str, event_name: str, *args: Any
    ) -> None:
        callback = subject.specification.on_transition
        if callback is not None:
            callback(subject, from_state, to_state, event_name, *args)

    def run_on_failed_transition(
        self, subject: Subject, from_state: str | None, to_state: str, event_name: str, *args: Any
    ) -> None:
        callback = subject.specification.on_failed_transition
        if callback is not None:
            callback(subject, from_state, to_state, event_name, *args)
        else:
            # Replaces any reason set earlier in the attempt.
            subject.halt(DEFAULT_FAILURE_REASON)
