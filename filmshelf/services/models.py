"""Shared dataclasses for service layer."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date


@dataclass(frozen=True, slots=True)
class ClassificationLabel:
    id: int
    name: str


@dataclass(frozen=True, slots=True)
class GenreRef:
    id: int
    name: str | None = None


@dataclass(slots=True)
class FilmDraft:
    """Film fields supplied by a caller before the store assigns an id."""

    name: str
    release_date: date
    duration: int
    classification_id: int
    description: str | None = None
    genre_ids: list[int] = field(default_factory=list)


@dataclass(slots=True)
class Film:
    """Fully hydrated film: classification resolved, genres and likes attached."""

    id: int
    name: str
    release_date: date
    duration: int
    classification: ClassificationLabel
    description: str | None = None
    genres: list[GenreRef] = field(default_factory=list)
    likes: list[int] = field(default_factory=list)

    @property
    def genre_ids(self) -> list[int]:
        return [genre.id for genre in self.genres]


@dataclass(frozen=True, slots=True)
class RankedFilm:
    film: Film
    like_count: int
