"""Validation collaborators."""

from workflow.validation.base import AlwaysValid, CallableValidation, Validation
from workflow.validation.state_dependent import Rule, StateCondition, StateDependentValidation

__all__ = [
    "AlwaysValid",
    "CallableValidation",
    "Rule",
    "StateCondition",
    "StateDependentValidation",
    "Validation",
]
