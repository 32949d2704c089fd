"""Runtime binding of a host object to its workflow specification."""

from __future__ import annotations

from typing import Any

from workflow.core.exceptions import Rollback, TransitionHalted
from workflow.models.graph import Specification, State, name_of
from workflow.orchestration.context import TransitionContext
from workflow.orchestration.hooks import HookTable
from workflow.orchestration.processor import TransitionProcessor
from workflow.persistence.base import MemoryPersistence, Persistence
from workflow.validation.base import AlwaysValid, Validation


class Subject:
    """A host object together with everything needed to move it between states.

    Inline callbacks receive the subject as first argument and reach the host
    through ``subject.host``. Host hooks from the hook table are called as
    methods of the host and get the subject right after ``self``.
    """

    def __init__(
        self,
        host: Any,
        specification: Specification,
        persistence: Persistence | None = None,
        validation: Validation | None = None,
        hooks: HookTable | None = None,
        processor: TransitionProcessor | None = None,
    ) -> None:
        self.host = host
        self.specification = specification
        self.persistence = persistence if persistence is not None else MemoryPersistence()
        self.validation = validation if validation is not None else AlwaysValid()
        self.hooks = hooks if hooks is not None else HookTable()
        self.processor = processor or TransitionProcessor()
        self.context = TransitionContext()
        self._halted = False
        self._halted_because: str | None = None

    @property
    def halted(self) -> bool:
        """True if the last transition was halted by one of its callbacks."""
        return self._halted

    @property
    def halted_because(self) -> str | None:
        """Reason given by the last ``halt`` call, if any."""
        return self._halted_because

    def halt(self, reason: str | None = None) -> None:
        self._halted_because = reason
        self._halted = True

    def halt_and_raise(self, reason: str | None = None) -> None:
        self.halt(reason)
        raise TransitionHalted(reason)

    def halt_with_rollback(self, reason: str | None = None) -> None:
        """Halt and ask the enclosing transactional scope to roll back."""
        self.halt(reason)
        raise Rollback(reason)

    def reset_halt(self) -> None:
        self._halted = False
        self._halted_because = None

    def mark_halted(self) -> None:
        self._halted = True

    @property
    def current_state(self) -> State:
        return self.processor.resolve_current_state(self)

    def is_in(self, state: Any) -> bool:
        return self.current_state.name == name_of(state)

    def can_fire(self, event: Any) -> bool:
        return self.processor.can_fire(self, event)

    def available_events(self) -> list[str]:
        return list(self.current_state.events)

    def fire(self, event: Any, *args: Any) -> Any:
        return self.processor.fire(self, event, *args)

    def write_initial_state(self) -> bool:
        """Store the initial state name when nothing is stored yet; runs no hooks."""
        if self.persistence.load() is not None:
            return False
        self.persistence.persist(self.specification.initial_state.name)
        return True

    def __repr__(self) -> str:
        return f"Subject(host={self.host!r}, state={self.current_state.name!r})"
