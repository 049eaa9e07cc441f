from datetime import datetime

from bson import ObjectId

from movie_search.models.movie import Movie, MovieSearchResponse


def test_object_id_becomes_string():
    oid = ObjectId()
    movie = Movie.model_validate({"_id": oid, "title": "Heat"})

    assert movie.id == str(oid)


def test_only_identifier_is_required():
    movie = Movie.model_validate({"_id": "abc"})

    assert movie.title is None
    assert movie.release_date is None
    assert movie.genres == []
    assert movie.cast == []
    assert movie.average_rating is None


def test_comma_joined_genres_are_split():
    movie = Movie.model_validate({"_id": "1", "genres": "Drama, Crime"})

    assert movie.genres == ["Drama", "Crime"]


def test_cast_string_is_split():
    movie = Movie.model_validate({"_id": "1", "cast": "Al Pacino, Robert De Niro"})

    assert movie.cast == ["Al Pacino", "Robert De Niro"]


def test_release_date_string_is_parsed():
    movie = Movie.model_validate({"_id": "1", "release_date": "2000-01-01"})

    assert movie.release_date == datetime(2000, 1, 1)


def test_blank_release_date_is_missing():
    assert Movie.model_validate({"_id": "1", "release_date": ""}).release_date is None


def test_numeric_title_is_coerced():
    assert Movie.model_validate({"_id": "1", "title": 1917}).title == "1917"


def test_production_countries_string_or_list():
    assert Movie.model_validate({"_id": "1", "production_countries": "Russia"}).production_countries == "Russia"
    assert Movie.model_validate(
        {"_id": "1", "production_countries": ["France", "Italy"]}
    ).production_countries == ["France", "Italy"]


def test_unknown_fields_are_preserved():
    movie = Movie.model_validate({"_id": "1", "tagline": "Why so serious?", "vote_count": 120})
    dumped = movie.model_dump(by_alias=True)

    assert dumped["tagline"] == "Why so serious?"
    assert dumped["vote_count"] == 120


def test_serializes_identifier_as_underscore_id():
    dumped = Movie.model_validate({"_id": "1", "title": "Heat"}).model_dump(by_alias=True)

    assert dumped["_id"] == "1"
    assert "id" not in dumped


def test_envelope_uses_camel_case_keys():
    envelope = MovieSearchResponse(
        total=3,
        total_pages=2,
        current_page=1,
        movies=[Movie.model_validate({"_id": "1"})],
    )
    dumped = envelope.model_dump(by_alias=True)

    assert set(dumped) == {"total", "totalPages", "currentPage", "movies"}
    assert dumped["totalPages"] == 2
    assert dumped["currentPage"] == 1


def test_envelope_parses_api_payload():
    envelope = MovieSearchResponse.model_validate(
        {"total": 0, "totalPages": 0, "currentPage": 4, "movies": []}
    )

    assert envelope.total_pages == 0
    assert envelope.current_page == 4
    assert envelope.movies == []


def test_wrongly_typed_fields_read_as_missing():
    movie = Movie.model_validate(
        {
            "_id": "1",
            "title": "Loose",
            "year": "unknown",
            "average_rating": "N/A",
            "runtime": {"minutes": 90},
            "release_date": "not a date",
            "adult": "maybe",
            "overview": ["not", "text"],
            "production_countries": 7,
            "cast": {"lead": "Ana"},
        }
    )

    assert movie.title == "Loose"
    assert movie.year is None
    assert movie.average_rating is None
    assert movie.runtime is None
    assert movie.release_date is None
    assert movie.adult is None
    assert movie.overview is None
    assert movie.production_countries is None
    assert movie.cast == []


def test_numeric_strings_are_read():
    movie = Movie.model_validate(
        {"_id": "1", "year": "1999", "average_rating": "7.5", "runtime": "120", "adult": "false"}
    )

    assert movie.year == 1999
    assert movie.average_rating == 7.5
    assert movie.runtime == 120
    assert movie.adult is False
