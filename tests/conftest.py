import datetime as dt

import pytest
from fastapi.testclient import TestClient

from filmshelf.db import Database
from filmshelf.main import create_app
from filmshelf.services.classification import ClassificationResolver
from filmshelf.services.films import FilmRepository
from filmshelf.services.genres import GenreResolver
from filmshelf.services.likes import LikeLedger
from filmshelf.services.models import FilmDraft
from filmshelf.services.ranking import RankingEngine
from filmshelf.services.users import UserStore

COMEDY = 1
DRAMA = 2
ANIMATION = 3
PG_13 = 3


@pytest.fixture
def database(tmp_path):
    db = Database(f"sqlite:///{tmp_path / 'catalog.db'}")
    db.init_models()
    yield db
    db.dispose()


@pytest.fixture
def session(database):
    with database.session_scope() as session:
        yield session


@pytest.fixture
def users():
    return UserStore()


@pytest.fixture
def films():
    return FilmRepository(ClassificationResolver(), GenreResolver())


@pytest.fixture
def ledger(films, users):
    return LikeLedger(films, users)


@pytest.fixture
def ranking(films):
    return RankingEngine(films)


@pytest.fixture
def make_draft():
    def _make(name="Film", *, year=2010, genres=(), classification_id=PG_13, **overrides):
        params = {
            "name": name,
            "description": f"{name} description",
            "release_date": dt.date(year, 6, 15),
            "duration": 120,
            "classification_id": classification_id,
            "genre_ids": list(genres),
        }
        params.update(overrides)
        return FilmDraft(**params)

    return _make


@pytest.fixture
def make_users(session, users):
    def _make(count):
        return [
            users.create(session, email=f"user{index}@example.com", login=f"user{index}").id
            for index in range(count)
        ]

    return _make


@pytest.fixture
def client(database):
    with TestClient(create_app(database)) as test_client:
        yield test_client
