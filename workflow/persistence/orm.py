"""SQLAlchemy persistence of the workflow state column."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from sqlalchemy import String, event
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Mapped, Session, mapped_column

from workflow.core.config import get_config
from workflow.models.graph import Specification
from workflow.persistence.base import Persistence

logger = logging.getLogger(__name__)


class WorkflowStateMixin:
    """Declarative column holding the current state name."""

    workflow_state: Mapped[str | None] = mapped_column(String(64), nullable=True, index=True)


def _identity(record: Any) -> str | None:
    identity = getattr(record, "id", None)
    return str(identity) if identity is not None else None


class SQLAlchemyPersistence(Persistence):
    """Store the state name on an ORM row.

    Each persist flushes immediately. Outside a nested transaction the
    session is also committed unless ``autocommit`` is False.
    """

    def __init__(
        self,
        session: Session,
        record: Any,
        column: str | None = None,
        autocommit: bool = True,
    ) -> None:
        self.session = session
        self.record = record
        self.column = column or get_config().STATE_COLUMN
        self.autocommit = autocommit

    def load(self) -> str | None:
        return getattr(self.record, self.column)

    def persist(self, state_name: str) -> None:
        setattr(self.record, self.column, state_name)
        try:
            self.session.flush()
            if self.autocommit and not self.session.in_nested_transaction():
                self.session.commit()
        except SQLAlchemyError:
            # Inside a savepoint the enclosing transaction() scope rolls back.
            if not self.session.in_nested_transaction():
                self.session.rollback()
            logger.exception(
                "workflow.state.persist_failed",
                extra={
                    "event": "workflow.state.persist_failed",
                    "subject_type": type(self.record).__name__,
                    "subject_id": _identity(self.record),
                    "to_state": state_name,
                },
            )
            raise
        logger.info(
            "workflow.state.persisted",
            extra={
                "event": "workflow.state.persisted",
                "subject_type": type(self.record).__name__,
                "subject_id": _identity(self.record),
                "to_state": state_name,
            },
        )

    @contextmanager
    def transaction(self) -> Iterator[None]:
        with self.session.begin_nested():
            yield
        if self.autocommit and not self.session.in_nested_transaction():
            self.session.commit()


def install_initial_state_writer(
    model: type,
    specification: Specification,
    column: str | None = None,
) -> None:
    """Write the initial state name into unset state columns on insert.

    Rows created without a state still resolve to the initial state at
    runtime, but storing the name keeps queries filtering on the initial
    state correct.
    """
    column_name = column or get_config().STATE_COLUMN
    initial = specification.initial_state.name

    def _write_initial_state(mapper, connection, target) -> None:
        if getattr(target, column_name, None) is None:
            setattr(target, column_name, initial)

    event.listen(model, "before_insert", _write_initial_state, propagate=True)
