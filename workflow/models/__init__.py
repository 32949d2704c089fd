"""Workflow graph model and its builder."""

from workflow.models.builder import SpecificationBuilder, StateBuilder, build_specification
from workflow.models.graph import Event, Specification, State

__all__ = [
    "Event",
    "Specification",
    "SpecificationBuilder",
    "State",
    "StateBuilder",
    "build_specification",
]
