"""Shared fixtures for crud unit tests"""

from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest
from sqlalchemy import create_engine
from sqlmodel import SQLModel, Session

from mdpost.core.models import Document, LoadedPost
from mdpost.core.serialize import serialize
from mdpost.core.utils.ids import content_hash
from mdpost.crud import models  # noqa: F401


def _make_loaded(
    path: str = "posts/hello.md",
    slug: str = "hello",
    title: str = "Hello",
    date: datetime = datetime(2020, 1, 1, 10, tzinfo=timezone.utc),
    categories: list = None,
    tags: list = None,
    extra: dict = None,
    body: str = "Body text.\n",
    ) -> LoadedPost:
    """Build a LoadedPost whose hash matches its serialized document."""
    doc = Document(
        title=title, date=date,
        categories=categories or [], tags=tags or [],
        extra=extra or {}, body=body,
    )
    return LoadedPost(path=Path(path), slug=slug, hash=content_hash(serialize(doc)), document=doc)


@pytest.fixture(name="make_loaded")
def make_loaded_fixture():
    return _make_loaded


@pytest.fixture(name="engine")
def engine_fixture():
    """In-memory SQLite engine with all tables created."""
    engine = create_engine("sqlite://", connect_args={"check_same_thread": False})
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)


@pytest.fixture(name="session")
def session_fixture(engine):
    """Fresh session per test; changes are not committed."""
    with Session(engine) as s:
        yield s


@pytest.fixture(name="corpus")
def corpus_fixture():
    """Three posts across two categories with overlapping tags."""
    return [
        _make_loaded(
            path="posts/angular.md", slug="angular", title="AngularJS Directives",
            date=datetime(2015, 3, 1, 9, tzinfo=timezone(timedelta(hours=8))),
            categories=["Frontend"], tags=["angularjs", "javascript"],
        ),
        _make_loaded(
            path="posts/react.md", slug="react", title="Thinking in React",
            date=datetime(2016, 7, 4, 12, tzinfo=timezone.utc),
            categories=["Frontend"], tags=["react", "javascript"],
        ),
        _make_loaded(
            path="posts/modules.md", slug="modules", title="CommonJS vs ES6 Modules",
            date=datetime(2016, 1, 20, 18, tzinfo=timezone(-timedelta(hours=5))),
            categories=["Modules", "JavaScript"], tags=["es6", "commonjs"],
        ),
    ]
