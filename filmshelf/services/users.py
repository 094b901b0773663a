"""Read access to the user store."""

from __future__ import annotations

from datetime import date

from sqlalchemy import select
from sqlalchemy.orm import Session

from filmshelf.models import User


class UserStore:
    def exists(self, session: Session, user_id: int) -> bool:
        query = select(User.id).where(User.id == user_id)
        return session.execute(query).scalar_one_or_none() is not None

    def create(
        self,
        session: Session,
        *,
        email: str,
        login: str,
        name: str | None = None,
        birthday: date | None = None,
    ) -> User:
        user = User(email=email, login=login, name=name or login, birthday=birthday)
        session.add(user)
        session.flush()  # assign IDs before leaving scope
        return user
