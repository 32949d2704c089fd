"""Custom exceptions for the workflow engine."""


class WorkflowException(Exception):
    """Base exception for the workflow engine."""

    pass


class WorkflowDefinitionError(WorkflowException):
    """Raised when a workflow specification is declared incorrectly."""

    pass


class WorkflowError(WorkflowException):
    """Raised when a specification is unusable at runtime (e.g. dangling target)."""

    pass


class NoTransitionAllowed(WorkflowException):
    """Raised when an event is not defined for the current state."""

    pass


class TransitionHalted(WorkflowException):
    """Raised by a hook that aborts the transition with ``halt_and_raise``."""

    def __init__(self, halted_because: str | None = None) -> None:
        self.halted_because = halted_because
        super().__init__(halted_because)


class Rollback(WorkflowException):
    """Signal a transactional scope to undo everything done in it."""

    pass


class ConfigurationError(WorkflowException):
    """Raised when configuration is invalid."""

    pass
