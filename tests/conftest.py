from __future__ import annotations

import pytest
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from workflow.core.config import get_config
from workflow.database.session import build_session_factory
from workflow.models.builder import SpecificationBuilder
from workflow.persistence.orm import WorkflowStateMixin


class ModelBase(DeclarativeBase):
    pass


class Document(ModelBase, WorkflowStateMixin):
    __tablename__ = "documents"

    id: Mapped[int] = mapped_column(primary_key=True)
    title: Mapped[str] = mapped_column(default="")


def _build_review_spec(on_transition=None, on_failed_transition=None):
    builder = SpecificationBuilder()
    with builder.state("draft") as s:
        s.event("submit", transitions_to="reviewing")
    with builder.state("reviewing") as s:
        s.event("approve", transitions_to="approved")
        s.event("reject", transitions_to="draft")
        s.allow("comment")
    builder.state("approved", meta={"terminal": True})
    if on_transition is not None:
        builder.on_transition(on_transition)
    if on_failed_transition is not None:
        builder.on_failed_transition(on_failed_transition)
    return builder.build()


@pytest.fixture(autouse=True)
def fresh_config():
    get_config.cache_clear()
    yield
    get_config.cache_clear()


@pytest.fixture
def review_spec():
    return _build_review_spec()


@pytest.fixture
def review_spec_factory():
    return _build_review_spec


@pytest.fixture
def document_model():
    return Document


@pytest.fixture
def session():
    factory = build_session_factory("sqlite:///:memory:")
    db = factory()
    ModelBase.metadata.create_all(bind=db.get_bind())
    try:
        yield db
    finally:
        db.close()
