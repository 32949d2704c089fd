"""Structured logging helpers for workflow adapters."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any


@dataclass(frozen=True)
class LogContext:
    """Normalized context fields expected in structured logs."""

    subject_type: str | None = None
    subject_id: str | None = None
    event: str | None = None
    from_state: str | None = None
    to_state: str | None = None


def context_for(subject: Any) -> LogContext:
    """Build a log context from a subject's host and in-flight transition."""
    host = subject.host
    identity = getattr(host, "id", None)
    transition = subject.context
    return LogContext(
        subject_type=type(host).__name__,
        subject_id=str(identity) if identity is not None else None,
        event=transition.triggering_event,
        from_state=transition.prior_state,
        to_state=transition.target_state,
    )


def build_log_event(event: str, context: LogContext, **fields: Any) -> dict[str, Any]:
    """Build a normalized structured log payload."""
    payload: dict[str, Any] = {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "event": event,
        "subject_type": context.subject_type,
        "subject_id": context.subject_id,
        "transition_event": context.event,
        "from_state": context.from_state,
        "to_state": context.to_state,
    }
    payload.update(fields)
    return payload
