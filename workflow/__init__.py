"""Declarative named-state workflows for Python host objects."""

from workflow.core.exceptions import (
    NoTransitionAllowed,
    Rollback,
    TransitionHalted,
    WorkflowDefinitionError,
    WorkflowError,
    WorkflowException,
)
from workflow.core.logging_config import configure_logging, install_null_handler
from workflow.models import Event, Specification, SpecificationBuilder, State, build_specification
from workflow.orchestration.context import TransitionContext
from workflow.orchestration.hooks import HookDispatcher, HookTable
from workflow.orchestration.processor import TransitionProcessor
from workflow.orchestration.registry import SpecificationRegistry, Workflow, default_registry
from workflow.orchestration.subject import Subject
from workflow.persistence import (
    AttributePersistence,
    MemoryPersistence,
    Persistence,
    SQLAlchemyPersistence,
    TransactionalProcessor,
)
from workflow.validation import CallableValidation, StateDependentValidation, Validation

install_null_handler()

__all__ = [
    "AttributePersistence",
    "CallableValidation",
    "Event",
    "HookDispatcher",
    "HookTable",
    "MemoryPersistence",
    "NoTransitionAllowed",
    "Persistence",
    "Rollback",
    "SQLAlchemyPersistence",
    "Specification",
    "SpecificationBuilder",
    "SpecificationRegistry",
    "State",
    "StateDependentValidation",
    "Subject",
    "TransactionalProcessor",
    "TransitionContext",
    "TransitionHalted",
    "TransitionProcessor",
    "Validation",
    "Workflow",
    "WorkflowDefinitionError",
    "WorkflowError",
    "WorkflowException",
    "build_specification",
    "configure_logging",
    "default_registry",
]
