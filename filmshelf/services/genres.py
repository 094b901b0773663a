"""Genre lookup and film/genre association helpers."""

from __future__ import annotations

import logging
from typing import Iterable

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from filmshelf.core.exceptions import NotFoundError
from filmshelf.models import FilmGenre, GenreName
from filmshelf.services.models import GenreRef

logger = logging.getLogger(__name__)


class GenreResolver:
    """Resolves genre ids to names and owns the film_genres rows."""

    def get_genre(self, session: Session, genre_id: int) -> GenreRef:
        row = session.get(GenreName, genre_id)
        if row is None:
            raise NotFoundError(f"genre {genre_id} not found")
        return GenreRef(id=row.id, name=row.name)

    def list_all(self, session: Session) -> list[GenreRef]:
        query = select(GenreName).order_by(GenreName.id)
        return [GenreRef(id=row.id, name=row.name) for row in session.execute(query).scalars()]

    def get(self, session: Session, film_id: int) -> list[GenreRef]:
        """Return the film's genres ordered by genre id."""

        query = (
            select(GenreName.id, GenreName.name)
            .join(FilmGenre, FilmGenre.genre_id == GenreName.id)
            .where(FilmGenre.film_id == film_id)
            .order_by(GenreName.id)
        )
        return [GenreRef(id=genre_id, name=name) for genre_id, name in session.execute(query)]

    def attach(self, session: Session, film_id: int, genre_ids: Iterable[int]) -> None:
        """Add associations for genres the film does not carry yet."""

        wanted = _unique(genre_ids)
        if not wanted:
            return
        known = set(
            session.execute(select(GenreName.id).where(GenreName.id.in_(wanted))).scalars()
        )
        missing = [genre_id for genre_id in wanted if genre_id not in known]
        if missing:
            raise NotFoundError(f"genre {missing[0]} not found")

        existing = set(
            session.execute(
                select(FilmGenre.genre_id).where(FilmGenre.film_id == film_id)
            ).scalars()
        )
        session.add_all(
            FilmGenre(film_id=film_id, genre_id=genre_id)
            for genre_id in wanted
            if genre_id not in existing
        )
        session.flush()
        logger.debug("Attached genres %s to film %s", wanted, film_id)

    def replace(self, session: Session, film_id: int, genre_ids: Iterable[int]) -> None:
        """Clear the film's genre set, then attach the given one."""

        session.execute(delete(FilmGenre).where(FilmGenre.film_id == film_id))
        self.attach(session, film_id, genre_ids)


def _unique(values: Iterable[int]) -> list[int]:
    seen: dict[int, None] = {}
    for value in values:
        seen.setdefault(value, None)
    return list(seen)
