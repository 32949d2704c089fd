from __future__ import annotations

import pytest

from workflow.core.exceptions import TransitionHalted
from workflow.models.builder import SpecificationBuilder
from workflow.orchestration.hooks import HookDispatcher, HookTable
from workflow.orchestration.subject import Subject
from workflow.persistence.base import MemoryPersistence


class Manuscript:
    def __init__(self) -> None:
        self.calls: list[tuple] = []

    def on_draft_exit(self, subject, new_state, event, *args):
        self.calls.append(("draft_exit", new_state, event, args))

    def on_reviewing_entry(self, subject, prior_state, event, *args):
        self.calls.append(("reviewing_entry", prior_state, event, args))

    def on_approved_entry(self, subject, prior_state, event, *args):
        self.calls.append(("approved_entry", prior_state, event, args))

    def submit(self, subject, *args):
        self.calls.append(("submit", args))

    def unrelated(self):
        return None


def _spec(explicit_entry=None):
    builder = SpecificationBuilder()
    builder.state("draft").event("submit", transitions_to="reviewing")
    with builder.state("reviewing") as s:
        s.event("approve", transitions_to="approved")
        if explicit_entry is not None:
            s.on_entry(explicit_entry)
    builder.state("approved")
    return builder.build()


def test_hook_table_collects_conventional_names_only():
    table = HookTable.from_host_type(Manuscript, _spec())
    assert table.names() == ["on_approved_entry", "on_draft_exit", "on_reviewing_entry", "submit"]
    assert table.has("submit")
    assert not table.has("unrelated")
    assert table.get("approve") is None


def test_hook_table_register_overwrites():
    table = HookTable()
    table.register("submit", lambda host, subject: "first")
    table.register("submit", lambda host, subject: "second")
    assert table.get("submit")(None, None) == "second"


def test_convention_hooks_run_when_no_explicit_callback():
    spec = _spec()
    host = Manuscript()
    subject = Subject(host, spec, hooks=HookTable.from_host_type(Manuscript, spec))

    subject.fire("submit", "alice")

    assert host.calls == [
        ("submit", ("alice",)),
        ("draft_exit", "reviewing", "submit", ("alice",)),
        ("reviewing_entry", "draft", "submit", ("alice",)),
    ]


def test_explicit_callback_wins_over_convention():
    explicit: list = []
    spec = _spec(explicit_entry=lambda subject, prior, event, *args: explicit.append((prior, event)))
    host = Manuscript()
    subject = Subject(host, spec, hooks=HookTable.from_host_type(Manuscript, spec))

    subject.fire("submit")

    assert explicit == [("draft", "submit")]
    assert all(call[0] != "reviewing_entry" for call in host.calls)


def test_missing_hooks_are_silent_noops():
    spec = _spec()
    subject = Subject(object(), spec)
    assert subject.fire("submit") is True
    assert subject.fire("approve") is True


def test_exit_hook_is_skipped_without_prior_state():
    spec = _spec()
    host = Manuscript()
    subject = Subject(host, spec, hooks=HookTable.from_host_type(Manuscript, spec))

    HookDispatcher().run_on_exit(subject, None, "draft", "submit")

    assert host.calls == []


def test_default_failed_transition_hook_overwrites_reason():
    subject = Subject(object(), _spec(), persistence=MemoryPersistence())
    subject.halt("real reason")

    HookDispatcher().run_on_failed_transition(subject, "draft", "reviewing", "submit")

    assert subject.halted is True
    assert subject.halted_because == "validation_failed"


def test_inline_callbacks_can_mutate_host():
    class Host:
        reviewed_by = None

    builder = SpecificationBuilder()
    builder.state("draft").event("submit", transitions_to="reviewing")
    with builder.state("reviewing") as s:

        @s.on_entry
        def remember(subject, prior, event, reviewer):
            subject.host.reviewed_by = reviewer

    host = Host()
    Subject(host, builder.build()).fire("submit", "bob")
    assert host.reviewed_by == "bob"


class GuardedManuscript:
    def __init__(self, ready: bool) -> None:
        self.ready = ready
        self.entered = False

    def submit(self, subject):
        if not self.ready:
            subject.halt("manuscript is not ready")

    def on_reviewing_entry(self, subject, prior_state, event):
        self.entered = True


def test_host_action_hook_can_halt_the_transition():
    spec = _spec()
    host = GuardedManuscript(ready=False)
    persistence = MemoryPersistence()
    subject = Subject(host, spec, persistence=persistence, hooks=HookTable.from_host_type(GuardedManuscript, spec))

    assert subject.fire("submit") is False
    assert subject.halted_because == "manuscript is not ready"
    assert persistence.load() is None
    assert subject.current_state.name == "draft"
    assert host.entered is False


def test_host_action_hook_lets_ready_host_through():
    spec = _spec()
    host = GuardedManuscript(ready=True)
    subject = Subject(host, spec, hooks=HookTable.from_host_type(GuardedManuscript, spec))

    assert subject.fire("submit") is True
    assert subject.current_state.name == "reviewing"
    assert host.entered is True


def test_host_exit_hook_can_raise_halt():
    class Locked:
        def on_draft_exit(self, subject, new_state, event):
            subject.halt_and_raise("locked for edits")

    spec = _spec()
    subject = Subject(Locked(), spec, hooks=HookTable.from_host_type(Locked, spec))

    with pytest.raises(TransitionHalted):
        subject.fire("submit")
    assert subject.halted_because == "locked for edits"
    assert subject.current_state.name == "draft"


def test_hook_table_skips_static_and_class_methods():
    class Host:
        @staticmethod
        def submit():
            return "static"

        @classmethod
        def on_reviewing_entry(cls, subject, prior_state, event):
            return "class"

        def on_draft_exit(self, subject, new_state, event):
            return "plain"

    table = HookTable.from_host_type(Host, _spec())

    assert table.names() == ["on_draft_exit"]
