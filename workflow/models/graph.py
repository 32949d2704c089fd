"""Immutable state/event graph shared by every instance of a host type."""

from __future__ import annotations

import enum
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

Hook = Callable[..., Any]

_EMPTY: Mapping[str, Any] = MappingProxyType({})


def name_of(value: Any) -> str:
    """Normalize a state or event identifier (str or Enum member) to ``str``."""
    if isinstance(value, enum.Enum):
        return str(value.value)
    return str(value)


def frozen_mapping(values: Mapping[str, Any] | None) -> Mapping[str, Any]:
    if not values:
        return _EMPTY
    return MappingProxyType(dict(values))


@dataclass(frozen=True)
class Event:
    """A named edge leading to ``transitions_to``."""

    name: str
    transitions_to: str
    action: Hook | None = None
    meta: Mapping[str, Any] = field(default_factory=lambda: _EMPTY)

    @property
    def skip_all_validations(self) -> bool:
        return bool(self.meta.get("skip_all_validations", False))

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class State:
    """A named node holding its outgoing events and entry/exit hooks."""

    name: str
    events: Mapping[str, Event] = field(default_factory=lambda: _EMPTY)
    on_entry: Hook | None = None
    on_exit: Hook | None = None
    meta: Mapping[str, Any] = field(default_factory=lambda: _EMPTY)

    @property
    def terminal(self) -> bool:
        return bool(self.meta.get("terminal", False))

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class Specification:
    """The complete workflow graph for one host type.

    ``states`` preserves declaration order and ``initial_state`` is the first
    declared state. Event targets are not checked here; a target that names
    no declared state surfaces as ``WorkflowError`` on first use.
    """

    states: Mapping[str, State]
    initial_state: State
    on_transition: Hook | None = None
    on_failed_transition: Hook | None = None
    meta: Mapping[str, Any] = field(default_factory=lambda: _EMPTY)

    def state_names(self) -> list[str]:
        return list(self.states)

    def get_state(self, name: Any) -> State | None:
        return self.states.get(name_of(name))
