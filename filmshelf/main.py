"""FastAPI entrypoint wiring the catalog repositories."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import APIRouter, Depends, FastAPI, Query, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from filmshelf.core.config import get_settings
from filmshelf.core.exceptions import NotFoundError, ValidationFailure
from filmshelf.core.logging_config import configure_logging
from filmshelf.db import Database, get_session
from filmshelf.schemas import (
    FilmRequest,
    FilmResponse,
    FilmUpdateRequest,
    LabelResponse,
    RankedFilmResponse,
)
from filmshelf.services.classification import ClassificationResolver
from filmshelf.services.films import FilmRepository
from filmshelf.services.genres import GenreResolver
from filmshelf.services.likes import LikeLedger
from filmshelf.services.ranking import RankingEngine
from filmshelf.services.users import UserStore

logger = logging.getLogger(__name__)

# Legacy clients send -1 for "no filter".
UNSET_FILTER = -1

classifications = ClassificationResolver()
genres = GenreResolver()
users = UserStore()
films = FilmRepository(classifications, genres)
likes = LikeLedger(films, users)
ranking = RankingEngine(films)

film_router = APIRouter(prefix="/films", tags=["Films"])
lookup_router = APIRouter(tags=["Lookups"])


@film_router.get("", response_model=list[FilmResponse])
def list_films(session: Session = Depends(get_session)) -> list[FilmResponse]:
    return [FilmResponse.from_domain(film) for film in films.list_all(session)]


@film_router.get("/popular", response_model=list[RankedFilmResponse])
def popular_films(
    count: int | None = Query(default=None, ge=1),
    genre_id: int | None = Query(default=None, alias="genreId"),
    year: int | None = Query(default=None),
    session: Session = Depends(get_session),
) -> list[RankedFilmResponse]:
    """Most liked films, optionally restricted to a genre and/or release year."""

    ranked = ranking.top_by_likes_filtered(
        session,
        count or get_settings().default_popular_count,
        genre_id=_optional_filter(genre_id),
        year=_optional_filter(year),
    )
    return [
        RankedFilmResponse(
            **FilmResponse.from_domain(item.film).model_dump(),
            like_count=item.like_count,
        )
        for item in ranked
    ]


@film_router.get("/{film_id}", response_model=FilmResponse)
def get_film(film_id: int, session: Session = Depends(get_session)) -> FilmResponse:
    return FilmResponse.from_domain(films.get_by_id(session, film_id))


@film_router.post("", response_model=FilmResponse, status_code=status.HTTP_201_CREATED)
def add_film(payload: FilmRequest, session: Session = Depends(get_session)) -> FilmResponse:
    return FilmResponse.from_domain(films.add(session, payload.to_draft()))


@film_router.put("", response_model=FilmResponse)
def update_film(
    payload: FilmUpdateRequest,
    session: Session = Depends(get_session),
) -> FilmResponse:
    return FilmResponse.from_domain(films.update(session, payload.id, payload.to_draft()))


@film_router.put("/{film_id}/like/{user_id}", response_model=FilmResponse)
def like_film(
    film_id: int,
    user_id: int,
    session: Session = Depends(get_session),
) -> FilmResponse:
    return FilmResponse.from_domain(likes.like(session, film_id, user_id))


@film_router.delete("/{film_id}/like/{user_id}", response_model=FilmResponse)
def unlike_film(
    film_id: int,
    user_id: int,
    session: Session = Depends(get_session),
) -> FilmResponse:
    return FilmResponse.from_domain(likes.unlike(session, film_id, user_id))


@lookup_router.get("/genres", response_model=list[LabelResponse])
def list_genres(session: Session = Depends(get_session)) -> list[LabelResponse]:
    return [LabelResponse.from_domain(genre) for genre in genres.list_all(session)]


@lookup_router.get("/genres/{genre_id}", response_model=LabelResponse)
def get_genre(genre_id: int, session: Session = Depends(get_session)) -> LabelResponse:
    return LabelResponse.from_domain(genres.get_genre(session, genre_id))


@lookup_router.get("/mpa", response_model=list[LabelResponse])
def list_classifications(session: Session = Depends(get_session)) -> list[LabelResponse]:
    return [LabelResponse.from_domain(label) for label in classifications.list_all(session)]


@lookup_router.get("/mpa/{classification_id}", response_model=LabelResponse)
def get_classification(
    classification_id: int,
    session: Session = Depends(get_session),
) -> LabelResponse:
    return LabelResponse.from_domain(classifications.resolve(session, classification_id))


@lookup_router.get("/liveness")
def liveness() -> dict:
    return {"status": "ok", "problems": []}


def create_app(database: Database | None = None) -> FastAPI:
    """Build the application; ``database`` overrides the one from settings."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Open the database handle and ensure tables before serving."""

        configure_logging()
        settings = get_settings()
        db = database or Database(settings.database_url)
        db.init_models(seed=settings.seed_reference_data)
        app.state.database = db
        logger.info("Database ready at %s", db.engine.url)
        try:
            yield
        finally:
            db.dispose()

    app = FastAPI(title="Film Catalog Service", lifespan=lifespan)
    app.add_exception_handler(NotFoundError, _not_found_handler)
    app.add_exception_handler(ValidationFailure, _validation_failure_handler)
    app.include_router(film_router)
    app.include_router(lookup_router)
    return app


def _optional_filter(value: int | None) -> int | None:
    if value is None or value == UNSET_FILTER:
        return None
    return value


async def _not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    logger.warning("%s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)})


async def _validation_failure_handler(request: Request, exc: ValidationFailure) -> JSONResponse:
    logger.warning("%s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": str(exc)})


app = create_app()
