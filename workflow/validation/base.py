"""Validation collaborator contract consulted before a transition commits."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from workflow.orchestration.subject import Subject


class Validation(ABC):
    """Decides whether the in-flight transition of ``subject`` is valid.

    Implementations may read ``subject.current_state`` and the labels on
    ``subject.context`` to decide which domain rules apply.
    """

    @abstractmethod
    def is_valid(self, subject: Subject) -> bool:
        raise NotImplementedError


class AlwaysValid(Validation):
    def is_valid(self, subject: Subject) -> bool:
        return True


class CallableValidation(Validation):
    """Adapt a plain predicate taking the host object."""

    def __init__(self, predicate: Callable[[Any], bool]) -> None:
        self.predicate = predicate

    def is_valid(self, subject: Subject) -> bool:
        return bool(self.predicate(subject.host))
