from __future__ import annotations

import enum

import pytest
from pydantic import ValidationError

from workflow.orchestration.subject import Subject
from workflow.persistence.base import MemoryPersistence
from workflow.validation.base import CallableValidation
from workflow.validation.state_dependent import StateCondition, StateDependentValidation


class Stage(str, enum.Enum):
    DRAFT = "draft"
    REVIEWING = "reviewing"


class Paper:
    def __init__(self, title: str = "", abstract: str = "") -> None:
        self.title = title
        self.abstract = abstract


def test_condition_normalizes_single_values_and_enums():
    condition = StateCondition(if_in_state=Stage.DRAFT, unless_in_transition="reject")
    assert condition.if_in_state == ["draft"]
    assert condition.unless_in_transition == ["reject"]
    assert condition.unless_in_state == []


def test_condition_rejects_unknown_options():
    with pytest.raises(ValidationError):
        StateCondition(if_in_stage=["draft"])


def test_condition_state_matching():
    condition = StateCondition(if_in_state=["draft", "reviewing"], unless_in_state="reviewing")
    assert condition.matches_state("draft") is True
    assert condition.matches_state("reviewing") is False
    assert condition.matches_state("approved") is False


def test_condition_transition_matching():
    condition = StateCondition(if_in_transition=["submit", "reviewing_entry"])
    assert condition.matches_transition(["submit", "draft_exit", "reviewing_entry"]) is True
    assert condition.matches_transition(["approve", "reviewing_exit", "approved_entry"]) is False
    assert StateCondition().matches_transition([]) is True


def test_rules_apply_only_in_their_transition(review_spec):
    validation = StateDependentValidation().add(
        lambda paper: bool(paper.abstract), "abstract can't be blank", if_in_transition="submit"
    )
    subject = Subject(Paper(title="On Graphs"), review_spec, validation=validation)

    assert subject.fire("submit") is False
    assert validation.errors == ["abstract can't be blank"]

    subject.host.abstract = "We study graphs."
    assert subject.fire("submit") is True
    assert validation.errors == []


def test_entry_labels_select_rules(review_spec):
    validation = StateDependentValidation()
    validation.add(lambda paper: bool(paper.title), "title can't be blank", if_in_transition="approved_entry")
    validation.add(lambda paper: len(paper.title) < 5, "title too long", if_in_transition="draft_entry")
    subject = Subject(Paper(), review_spec, persistence=MemoryPersistence("reviewing"), validation=validation)

    assert subject.fire("approve") is False
    assert validation.full_messages == "title can't be blank"


def test_state_rules_use_current_state(review_spec):
    validation = StateDependentValidation().add(
        lambda paper: paper.title.istitle(), "title must be capitalized", unless_in_state=Stage.DRAFT
    )
    subject = Subject(Paper(title="lowercase"), review_spec, validation=validation)

    assert subject.fire("submit") is True
    assert subject.fire("approve") is False
    assert validation.errors == ["title must be capitalized"]


def test_callable_validation_receives_host(review_spec):
    paper = Paper(title="x")
    seen: list = []
    subject = Subject(paper, review_spec, validation=CallableValidation(lambda host: seen.append(host) or True))
    assert subject.fire("submit") is True
    assert seen == [paper]
