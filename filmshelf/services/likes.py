"""Like ledger: (film, user) pairs and per-film like counts."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sqlalchemy import delete, distinct, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from filmshelf.core.exceptions import NotFoundError
from filmshelf.models import Like
from filmshelf.services.models import Film
from filmshelf.services.users import UserStore

if TYPE_CHECKING:
    from filmshelf.services.films import FilmRepository

logger = logging.getLogger(__name__)


def liking_users(session: Session, film_id: int) -> list[int]:
    """Return ids of users liking the film, ascending."""

    query = select(Like.user_id).where(Like.film_id == film_id).order_by(Like.user_id)
    return list(session.execute(query).scalars())


class LikeLedger:
    """Records likes as a set: liking the same film twice is a no-op."""

    def __init__(self, films: FilmRepository, users: UserStore) -> None:
        self.films = films
        self.users = users

    def like(self, session: Session, film_id: int, user_id: int) -> Film:
        self.films.ensure_exists(session, film_id)
        self._ensure_user(session, user_id)

        if self.has_liked(session, film_id, user_id):
            logger.debug("User %s already likes film %s", user_id, film_id)
        else:
            try:
                with session.begin_nested():
                    session.add(Like(film_id=film_id, user_id=user_id))
            except IntegrityError:
                # another transaction inserted the same pair after the check
                logger.debug("User %s already likes film %s", user_id, film_id)
            else:
                logger.info("User %s liked film %s", user_id, film_id)
        return self.films.get_by_id(session, film_id)

    def unlike(self, session: Session, film_id: int, user_id: int) -> Film:
        self._ensure_user(session, user_id)
        self.films.ensure_exists(session, film_id)

        result = session.execute(
            delete(Like).where(Like.film_id == film_id, Like.user_id == user_id)
        )
        if result.rowcount:
            logger.info("User %s removed like from film %s", user_id, film_id)
        return self.films.get_by_id(session, film_id)

    def has_liked(self, session: Session, film_id: int, user_id: int) -> bool:
        query = select(Like.user_id).where(Like.film_id == film_id, Like.user_id == user_id)
        return session.execute(query).scalar_one_or_none() is not None

    def count_likes(self, session: Session, film_id: int) -> int:
        query = select(func.count(distinct(Like.user_id))).where(Like.film_id == film_id)
        return session.execute(query).scalar_one()

    def get_likes(self, session: Session, film_id: int) -> list[int]:
        return liking_users(session, film_id)

    def _ensure_user(self, session: Session, user_id: int) -> None:
        if not self.users.exists(session, user_id):
            raise NotFoundError("user not found")
