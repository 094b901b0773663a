import pytest

from filmshelf.core.exceptions import ValidationFailure
from tests.conftest import COMEDY, DRAMA


def _like_many(session, ledger, film_id, user_ids):
    for user_id in user_ids:
        ledger.like(session, film_id, user_id)


@pytest.fixture
def catalog(session, films, ledger, make_draft, make_users):
    """A (2010, Comedy) liked 3x, B (2015, Drama) liked 1x, C (2010, Drama) never liked."""

    user_ids = make_users(3)
    film_a = films.add(session, make_draft("A", year=2010, genres=[COMEDY]))
    film_b = films.add(session, make_draft("B", year=2015, genres=[DRAMA]))
    film_c = films.add(session, make_draft("C", year=2010, genres=[DRAMA]))
    _like_many(session, ledger, film_a.id, user_ids)
    _like_many(session, ledger, film_b.id, user_ids[:1])
    return {"A": film_a.id, "B": film_b.id, "C": film_c.id, "users": user_ids}


def _summary(ranked):
    return [(item.film.name, item.like_count) for item in ranked]


def test_top_by_likes_orders_by_count_desc(session, ranking, catalog):
    ranked = ranking.top_by_likes(session, 10)

    assert _summary(ranked) == [("A", 3), ("B", 1), ("C", 0)]


def test_top_by_likes_limits_result(session, ranking, catalog):
    ranked = ranking.top_by_likes(session, 2)

    assert len(ranked) == 2
    counts = [item.like_count for item in ranked]
    assert counts == sorted(counts, reverse=True)


def test_unfiltered_equals_top_by_likes(session, ranking, catalog):
    assert ranking.top_by_likes_filtered(session, 5) == ranking.top_by_likes(session, 5)


def test_filter_by_year_only(session, ranking, catalog):
    ranked = ranking.top_by_likes_filtered(session, 5, year=2010)

    assert _summary(ranked) == [("A", 3), ("C", 0)]


def test_scenario_year_filter_returns_only_matching_film(session, films, ledger, ranking, make_draft, make_users):
    user_ids = make_users(3)
    film_a = films.add(session, make_draft("A", year=2010, genres=[COMEDY]))
    film_b = films.add(session, make_draft("B", year=2015, genres=[DRAMA]))
    _like_many(session, ledger, film_a.id, user_ids)
    _like_many(session, ledger, film_b.id, user_ids[:1])

    ranked = ranking.top_by_likes_filtered(session, 5, year=2010)

    assert _summary(ranked) == [("A", 3)]


def test_filter_by_genre_only(session, ranking, catalog):
    ranked = ranking.top_by_likes_filtered(session, 5, genre_id=DRAMA)

    assert _summary(ranked) == [("B", 1), ("C", 0)]


def test_filter_by_genre_and_year(session, ranking, catalog):
    ranked = ranking.top_by_likes_filtered(session, 5, genre_id=DRAMA, year=2010)

    assert _summary(ranked) == [("C", 0)]


def test_filter_without_matches(session, ranking, catalog):
    assert ranking.top_by_likes_filtered(session, 5, genre_id=COMEDY, year=2015) == []


def test_multi_genre_film_is_not_double_counted(session, films, ledger, ranking, make_draft, make_users):
    user_ids = make_users(3)
    film = films.add(session, make_draft("Dramedy", genres=[COMEDY, DRAMA]))
    _like_many(session, ledger, film.id, user_ids)

    for ranked in (
        ranking.top_by_likes(session, 5),
        ranking.top_by_likes_filtered(session, 5, genre_id=COMEDY),
        ranking.top_by_likes_filtered(session, 5, genre_id=DRAMA, year=2010),
    ):
        assert _summary(ranked) == [("Dramedy", 3)]


def test_ties_keep_film_id_order(session, films, ranking, make_draft):
    first = films.add(session, make_draft("First"))
    second = films.add(session, make_draft("Second"))

    ranked = ranking.top_by_likes(session, 5)

    assert [item.film.id for item in ranked] == [first.id, second.id]


def test_ranking_reflects_unlike(session, ledger, ranking, catalog):
    for user_id in catalog["users"][:2]:
        ledger.unlike(session, catalog["A"], user_id)

    ranked = ranking.top_by_likes(session, 2)

    assert [item.like_count for item in ranked] == [1, 1]
    assert [item.film.name for item in ranked] == ["A", "B"]


@pytest.mark.parametrize(
    "kwargs",
    [
        {"count": 0},
        {"count": 5, "genre_id": -1},
        {"count": 5, "year": -1},
    ],
)
def test_invalid_arguments_rejected(session, ranking, kwargs):
    count = kwargs.pop("count")
    with pytest.raises(ValidationFailure):
        ranking.top_by_likes_filtered(session, count, **kwargs)
