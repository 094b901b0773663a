"""Film repository: CRUD over the films table plus hydration of full film views."""

from __future__ import annotations

import logging

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from filmshelf.core.exceptions import NotFoundError
from filmshelf.models import FilmRow
from filmshelf.services.classification import ClassificationResolver
from filmshelf.services.genres import GenreResolver
from filmshelf.services.likes import liking_users
from filmshelf.services.models import Film, FilmDraft

logger = logging.getLogger(__name__)


class FilmRepository:
    """High level data access helpers for films.

    Methods never commit; callers run them inside ``Database.session_scope``
    (or the ``get_session`` dependency) so that multi-step writes such as
    insert-then-attach-genres are committed or rolled back as a whole.
    """

    def __init__(
        self,
        classifications: ClassificationResolver,
        genres: GenreResolver,
    ) -> None:
        self.classifications = classifications
        self.genres = genres

    def get_by_id(self, session: Session, film_id: int) -> Film:
        row = session.get(FilmRow, film_id)
        if row is None:
            raise NotFoundError("film not found")
        return self.hydrate(session, row)

    def ensure_exists(self, session: Session, film_id: int) -> None:
        query = select(FilmRow.id).where(FilmRow.id == film_id)
        if session.execute(query).scalar_one_or_none() is None:
            raise NotFoundError("film not found")

    def list_all(self, session: Session) -> list[Film]:
        query = select(FilmRow).order_by(FilmRow.id)
        return [self.hydrate(session, row) for row in session.execute(query).scalars()]

    def add(self, session: Session, draft: FilmDraft) -> Film:
        self.classifications.resolve(session, draft.classification_id)
        row = FilmRow(
            name=draft.name,
            description=draft.description,
            release_date=draft.release_date,
            duration=draft.duration,
            classification_id=draft.classification_id,
        )
        session.add(row)
        session.flush()  # assign IDs before attaching genres
        self.genres.attach(session, row.id, draft.genre_ids)
        logger.info("Film %s added with id %s", draft.name, row.id)
        return self.hydrate(session, row)

    def update(self, session: Session, film_id: int, draft: FilmDraft) -> Film:
        """Replace every mutable field and the genre set of an existing film."""

        self.ensure_exists(session, film_id)
        self.classifications.resolve(session, draft.classification_id)
        result = session.execute(
            update(FilmRow)
            .where(FilmRow.id == film_id)
            .values(
                name=draft.name,
                description=draft.description,
                release_date=draft.release_date,
                duration=draft.duration,
                classification_id=draft.classification_id,
            )
            .execution_options(synchronize_session="fetch")
        )
        if not result.rowcount:
            raise NotFoundError("film not found")
        self.genres.replace(session, film_id, draft.genre_ids)
        logger.info("Film %s updated", film_id)
        return self.get_by_id(session, film_id)

    def hydrate(self, session: Session, row: FilmRow) -> Film:
        return Film(
            id=row.id,
            name=row.name,
            description=row.description,
            release_date=row.release_date,
            duration=row.duration,
            classification=self.classifications.resolve(session, row.classification_id),
            genres=self.genres.get(session, row.id),
            likes=liking_users(session, row.id),
        )
