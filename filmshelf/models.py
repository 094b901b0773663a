"""SQLAlchemy ORM models.

This module defines the catalog tables: films with their classification,
the film/genre association, likes, and the lookup tables the repositories
resolve against. Keeping them isolated here makes future Alembic migrations
simpler.
"""

from __future__ import annotations

from datetime import date

from sqlalchemy import CheckConstraint, Date, ForeignKey, Integer, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    pass


class Classification(Base):
    """Content/age rating label (G, PG, ...)."""

    __tablename__ = "classifications"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(16), unique=True)


class GenreName(Base):
    __tablename__ = "genre_names"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(64), unique=True)


class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    email: Mapped[str] = mapped_column(String(255))
    login: Mapped[str] = mapped_column(String(64))
    name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    birthday: Mapped[date | None] = mapped_column(Date, nullable=True)


class FilmRow(Base):
    """Core film fields; genres and likes live in their own tables."""

    __tablename__ = "films"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255))
    description: Mapped[str | None] = mapped_column(String(200), nullable=True)
    release_date: Mapped[date] = mapped_column(Date, index=True)
    duration: Mapped[int] = mapped_column(Integer)
    classification_id: Mapped[int] = mapped_column(
        ForeignKey("classifications.id"),
        nullable=False,
    )

    __table_args__ = (
        CheckConstraint("duration > 0", name="ck_films_duration_positive"),
        {"sqlite_autoincrement": True},
    )

    def __repr__(self) -> str:  # pragma: no cover - debugging helper
        return f"FilmRow(id={self.id}, name={self.name}, release_date={self.release_date})"


class FilmGenre(Base):
    __tablename__ = "film_genres"

    film_id: Mapped[int] = mapped_column(ForeignKey("films.id"), primary_key=True)
    genre_id: Mapped[int] = mapped_column(
        ForeignKey("genre_names.id"),
        primary_key=True,
        index=True,
    )


class Like(Base):
    """A user's like on a film; the composite key allows one like per pair."""

    __tablename__ = "likes"

    film_id: Mapped[int] = mapped_column(ForeignKey("films.id"), primary_key=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id"), primary_key=True)
