"""Top-N films by like count, optionally filtered by genre and release year."""

from __future__ import annotations

import logging

from sqlalchemy import distinct, extract, func, select
from sqlalchemy.orm import Session

from filmshelf.core.exceptions import ValidationFailure
from filmshelf.models import FilmGenre, FilmRow, Like
from filmshelf.services.films import FilmRepository
from filmshelf.services.models import RankedFilm

logger = logging.getLogger(__name__)


class RankingEngine:
    def __init__(self, films: FilmRepository) -> None:
        self.films = films

    def top_by_likes(self, session: Session, count: int) -> list[RankedFilm]:
        return self.top_by_likes_filtered(session, count)

    def top_by_likes_filtered(
        self,
        session: Session,
        count: int,
        *,
        genre_id: int | None = None,
        year: int | None = None,
    ) -> list[RankedFilm]:
        """Return at most ``count`` films ordered by distinct likes, most liked first.

        ``None`` disables a filter. Likes are aggregated per film in their own
        subquery and genre membership is a semi-join, so a film with several
        genre rows is neither duplicated nor counted more than once per user.
        Ties keep film id order.
        """

        if count < 1:
            raise ValidationFailure("count must be positive")
        if genre_id is not None and genre_id < 1:
            raise ValidationFailure("genre id must be positive")
        if year is not None and year < 1:
            raise ValidationFailure("year must be positive")

        like_counts = (
            select(
                Like.film_id.label("film_id"),
                func.count(distinct(Like.user_id)).label("likes"),
            )
            .group_by(Like.film_id)
            .subquery()
        )
        like_count = func.coalesce(like_counts.c.likes, 0).label("like_count")
        query = select(FilmRow, like_count).outerjoin(
            like_counts, like_counts.c.film_id == FilmRow.id
        )
        if genre_id is not None:
            query = query.where(
                FilmRow.id.in_(select(FilmGenre.film_id).where(FilmGenre.genre_id == genre_id))
            )
        if year is not None:
            query = query.where(extract("year", FilmRow.release_date) == year)
        query = query.order_by(like_count.desc(), FilmRow.id).limit(count)

        logger.debug("Ranking query count=%s genre_id=%s year=%s", count, genre_id, year)
        return [
            RankedFilm(film=self.films.hydrate(session, row), like_count=likes)
            for row, likes in session.execute(query).all()
        ]
