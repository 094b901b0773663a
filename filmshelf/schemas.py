"""Request/response models for the HTTP layer."""

from __future__ import annotations

from datetime import date

from pydantic import BaseModel, ConfigDict, Field, field_validator

from filmshelf.services.models import ClassificationLabel, Film, FilmDraft, GenreRef

EARLIEST_RELEASE_DATE = date(1895, 12, 28)


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class IdRef(_CamelModel):
    id: int = Field(..., ge=1)


class LabelResponse(_CamelModel):
    id: int
    name: str | None = None

    @classmethod
    def from_domain(cls, label: ClassificationLabel | GenreRef) -> "LabelResponse":
        return cls(id=label.id, name=label.name)


class FilmRequest(_CamelModel):
    name: str = Field(..., description="Film title")
    description: str | None = Field(default=None, max_length=200)
    release_date: date = Field(..., alias="releaseDate")
    duration: int = Field(..., gt=0, description="Duration in minutes")
    mpa: IdRef
    genres: list[IdRef] = Field(default_factory=list)

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("name must not be blank")
        return value

    @field_validator("release_date")
    @classmethod
    def _not_before_cinema(cls, value: date) -> date:
        if value < EARLIEST_RELEASE_DATE:
            raise ValueError(f"release date must not be before {EARLIEST_RELEASE_DATE.isoformat()}")
        return value

    def to_draft(self) -> FilmDraft:
        return FilmDraft(
            name=self.name,
            description=self.description,
            release_date=self.release_date,
            duration=self.duration,
            classification_id=self.mpa.id,
            genre_ids=[genre.id for genre in self.genres],
        )


class FilmUpdateRequest(FilmRequest):
    id: int


class FilmResponse(_CamelModel):
    id: int
    name: str
    description: str | None = None
    release_date: date = Field(..., alias="releaseDate")
    duration: int
    mpa: LabelResponse
    genres: list[LabelResponse]
    likes: list[int]

    @classmethod
    def from_domain(cls, film: Film) -> "FilmResponse":
        return cls(
            id=film.id,
            name=film.name,
            description=film.description,
            release_date=film.release_date,
            duration=film.duration,
            mpa=LabelResponse.from_domain(film.classification),
            genres=[LabelResponse.from_domain(genre) for genre in film.genres],
            likes=list(film.likes),
        )


class RankedFilmResponse(FilmResponse):
    like_count: int = Field(..., alias="likeCount")
