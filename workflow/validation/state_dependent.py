"""Domain validation rules that only apply in some states or transitions."""

from __future__ import annotations

import enum
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from workflow.validation.base import Validation

if TYPE_CHECKING:
    from workflow.orchestration.subject import Subject


def _as_names(value: Any) -> list[str]:
    if value is None:
        return []
    if isinstance(value, (str, enum.Enum)):
        value = [value]
    return [str(item.value) if isinstance(item, enum.Enum) else str(item) for item in value]


class StateCondition(BaseModel):
    """When a rule applies.

    State options are matched against the current state name. Transition
    options are matched against the in-flight labels: the event name,
    ``<prior>_exit`` and ``<target>_entry``. Empty options impose nothing.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    if_in_state: list[str] = Field(default_factory=list)
    unless_in_state: list[str] = Field(default_factory=list)
    if_in_transition: list[str] = Field(default_factory=list)
    unless_in_transition: list[str] = Field(default_factory=list)

    @field_validator(
        "if_in_state", "unless_in_state", "if_in_transition", "unless_in_transition", mode="before"
    )
    @classmethod
    def normalize_names(cls, value: Any) -> list[str]:
        return _as_names(value)

    def matches_state(self, state: str) -> bool:
        if self.if_in_state and state not in self.if_in_state:
            return False
        return state not in self.unless_in_state

    def matches_transition(self, labels: list[str]) -> bool:
        if self.if_in_transition and not any(label in self.if_in_transition for label in labels):
            return False
        return not any(label in self.unless_in_transition for label in labels)

    def applies(self, subject: Subject) -> bool:
        return self.matches_state(subject.current_state.name) and self.matches_transition(
            transition_labels(subject)
        )


def transition_labels(subject: Subject) -> list[str]:
    context = subject.context
    labels: list[str] = []
    if context.triggering_event is not None:
        labels.append(context.triggering_event)
    if context.prior_state is not None:
        labels.append(f"{context.prior_state}_exit")
    if context.target_state is not None:
        labels.append(f"{context.target_state}_entry")
    return labels


@dataclass(frozen=True)
class Rule:
    check: Callable[[Any], bool]
    message: str
    condition: StateCondition


class StateDependentValidation(Validation):
    """Evaluate every applicable rule against the host object.

    Messages of the rules that failed on the last evaluation are kept in
    ``errors``.
    """

    def __init__(self) -> None:
        self.rules: list[Rule] = []
        self.errors: list[str] = []

    def add(self, check: Callable[[Any], bool], message: str, **options: Any) -> "StateDependentValidation":
        self.rules.append(Rule(check=check, message=message, condition=StateCondition(**options)))
        return self

    def is_valid(self, subject: Subject) -> bool:
        self.errors = [
            rule.message
            for rule in self.rules
            if rule.condition.applies(subject) and not rule.check(subject.host)
        ]
        return not self.errors

    @property
    def full_messages(self) -> str:
        return ", ".join(self.errors)
