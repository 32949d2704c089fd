"""Persistence collaborators for the current workflow state."""

from workflow.persistence.base import AttributePersistence, MemoryPersistence, Persistence
from workflow.persistence.orm import (
    SQLAlchemyPersistence,
    WorkflowStateMixin,
    install_initial_state_writer,
)
from workflow.persistence.transactional import TransactionalProcessor

__all__ = [
    "AttributePersistence",
    "MemoryPersistence",
    "Persistence",
    "SQLAlchemyPersistence",
    "TransactionalProcessor",
    "WorkflowStateMixin",
    "install_initial_state_writer",
]
