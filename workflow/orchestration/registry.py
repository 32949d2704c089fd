"""Per-type registry mapping host types to their workflow specification."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, TypeVar

from workflow.core.exceptions import WorkflowError
from workflow.models.graph import Specification
from workflow.orchestration.hooks import HookTable
from workflow.orchestration.processor import TransitionProcessor
from workflow.orchestration.subject import Subject
from workflow.persistence.base import Persistence
from workflow.validation.base import Validation

logger = logging.getLogger(__name__)

HostType = TypeVar("HostType", bound=type)


class Workflow:
    """A specification bound to a host type: its hook table and processor."""

    def __init__(
        self,
        specification: Specification,
        host_type: type | None = None,
        hooks: HookTable | None = None,
        processor: TransitionProcessor | None = None,
    ) -> None:
        self.specification = specification
        self.host_type = host_type
        if hooks is None:
            hooks = HookTable.from_host_type(host_type, specification) if host_type else HookTable()
        self.hooks = hooks
        self.processor = processor or TransitionProcessor()

    def attach(
        self,
        host: Any,
        persistence: Persistence | None = None,
        validation: Validation | None = None,
    ) -> Subject:
        return Subject(
            host,
            self.specification,
            persistence=persistence,
            validation=validation,
            hooks=self.hooks,
            processor=self.processor,
        )


class SpecificationRegistry:
    """Registry of specifications keyed by host type.

    Lookups resolve to the nearest registered type in the MRO, so a subtype
    that registers its own specification shadows its parent's. Resolutions
    are cached per looked-up type until the next registration.
    """

    def __init__(self, processor: TransitionProcessor | None = None) -> None:
        self.processor = processor or TransitionProcessor()
        self._specifications: dict[type, Specification] = {}
        self._resolved: dict[type, Workflow] = {}

    def register(self, host_type: type, specification: Specification) -> None:
        self._specifications[host_type] = specification
        self._resolved.clear()
        logger.debug(
            "workflow.registry.registered",
            extra={
                "event": "workflow.registry.registered",
                "subject_type": host_type.__name__,
                "states": specification.state_names(),
            },
        )

    def define(self, specification: Specification) -> Callable[[HostType], HostType]:
        """Class decorator registering ``specification`` for the decorated type."""

        def decorator(host_type: HostType) -> HostType:
            self.register(host_type, specification)
            return host_type

        return decorator

    def has(self, host_type: type) -> bool:
        return any(klass in self._specifications for klass in host_type.__mro__)

    def lookup(self, host_type: type) -> Workflow:
        cached = self._resolved.get(host_type)
        if cached is not None:
            return cached
        for klass in host_type.__mro__:
            specification = self._specifications.get(klass)
            if specification is not None:
                break
        else:
            raise WorkflowError(f"No workflow specification registered for {host_type.__name__}")
        resolved = Workflow(specification, host_type=host_type, processor=self.processor)
        self._resolved[host_type] = resolved
        return resolved

    def attach(
        self,
        host: Any,
        persistence: Persistence | None = None,
        validation: Validation | None = None,
    ) -> Subject:
        return self.lookup(type(host)).attach(host, persistence=persistence, validation=validation)


default_registry = SpecificationRegistry()
