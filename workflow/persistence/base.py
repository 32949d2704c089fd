"""Persistence contract for the current state identifier and simple adapters."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from workflow.core.config import get_config


class Persistence(ABC):
    """Loads and stores the state name of one subject.

    ``transaction()`` scopes are used by the transactional processor: any
    exception leaving the scope must undo writes made inside it. The default
    scope snapshots the stored value and restores it on error.
    """

    @abstractmethod
    def load(self) -> str | None:
        raise NotImplementedError

    @abstractmethod
    def persist(self, state_name: str) -> Any:
        raise NotImplementedError

    def restore(self, state_name: str | None) -> None:
        raise NotImplementedError(f"{type(self).__name__} cannot restore a snapshot")

    @contextmanager
    def transaction(self) -> Iterator[None]:
        snapshot = self.load()
        try:
            yield
        except BaseException:
            self.restore(snapshot)
            raise


class MemoryPersistence(Persistence):
    """Keeps the state name on the collaborator itself."""

    def __init__(self, initial: str | None = None) -> None:
        self._state = initial

    def load(self) -> str | None:
        return self._state

    def persist(self, state_name: str) -> None:
        self._state = state_name

    def restore(self, state_name: str | None) -> None:
        self._state = state_name


class AttributePersistence(Persistence):
    """Reads and writes a plain attribute on the host object."""

    def __init__(self, host: Any, column: str | None = None) -> None:
        self.host = host
        self.column = column or get_config().STATE_COLUMN

    def load(self) -> str | None:
        return getattr(self.host, self.column, None)

    def persist(self, state_name: str) -> None:
        setattr(self.host, self.column, state_name)

    def restore(self, state_name: str | None) -> None:
        setattr(self.host, self.column, state_name)
