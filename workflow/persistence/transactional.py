"""Transition processing wrapped in the persistence collaborator's transaction.

A subject can halt normally (``halt``) without touching the transaction, or
call ``halt_with_rollback`` to raise ``Rollback`` and undo every write made
during the attempt, the persisted state included.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from workflow.core.exceptions import Rollback
from workflow.core.logging import build_log_event, context_for
from workflow.orchestration.processor import TransitionProcessor

if TYPE_CHECKING:
    from workflow.orchestration.subject import Subject

logger = logging.getLogger(__name__)


class TransactionalProcessor(TransitionProcessor):
    """Run each firing inside ``subject.persistence.transaction()``.

    A ``Rollback`` signal is absorbed into a ``False`` result; any other
    error propagates after the scope has been rolled back. A plain ``False``
    from the inner call commits whatever the hooks wrote.
    """

    def fire(self, subject: Subject, event_name: Any, *args: Any) -> Any:
        try:
            with subject.persistence.transaction():
                return super().fire(subject, event_name, *args)
        except Rollback:
            payload = build_log_event(
                "workflow.transaction.rolled_back",
                context_for(subject),
                reason=subject.halted_because,
            )
            logger.info("workflow.transaction.rolled_back", extra=payload)
            subject.context.clear()
            return False
