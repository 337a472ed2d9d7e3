"""Entity specific behaviour of the catalog facades."""

from __future__ import annotations

import pytest
import pytest_asyncio
from sqlalchemy import select

from catalog_rest.entities import Episode
from catalog_rest.entities import EpisodeRef
from catalog_rest.entities import Game
from catalog_rest.entities import Genre
from catalog_rest.entities import GenreRef
from catalog_rest.entities import Language
from catalog_rest.entities import Medium
from catalog_rest.entities import Movie
from catalog_rest.entities import MovieRef
from catalog_rest.entities import Music
from catalog_rest.entities import MusicRef
from catalog_rest.entities import Picture
from catalog_rest.entities import PictureRef
from catalog_rest.entities import Program
from catalog_rest.entities import Season
from catalog_rest.entities import SeasonRef
from catalog_rest.entities import Show
from catalog_rest.entities import ShowRef
from catalog_rest.entities import Song
from catalog_rest.entities import Time
from catalog_rest.facade import EpisodeFacade
from catalog_rest.facade import GameFacade
from catalog_rest.facade import GenreFacade
from catalog_rest.facade import MovieFacade
from catalog_rest.facade import MusicFacade
from catalog_rest.facade import PictureFacade
from catalog_rest.facade import ProgramFacade
from catalog_rest.facade import SeasonFacade
from catalog_rest.facade import ShowFacade
from catalog_rest.facade import SongFacade
from catalog_rest.orm import SeasonORM


def _movie(genre: Genre, **overrides) -> Movie:
    values = dict(
        czech_name="Pelíšky",
        original_name="Cosy Dens",
        year=1999,
        language=Language.CZ,
        subtitles=[Language.EN],
        media=[Medium(length=6000), Medium(length=900)],
        csfd="Pelisky",
        imdb_code=167331,
        wiki_en="Cosy_Dens",
        wiki_cz="Pelíšky",
        picture=None,
        note="",
        genres=[genre],
    )
    values.update(overrides)
    return Movie(**values)


def _show(genre: Genre, **overrides) -> Show:
    values = dict(
        czech_name="Přátelé",
        original_name="Friends",
        csfd="Pratele",
        imdb_code=108778,
        wiki_en="Friends",
        wiki_cz="Přátelé",
        picture=None,
        note="",
        genres=[genre],
    )
    values.update(overrides)
    return Show(**values)


def _season(number: int = 1, **overrides) -> Season:
    values = dict(
        number=number,
        start_year=1994,
        end_year=1995,
        language=Language.EN,
        subtitles=[Language.CZ],
        note="",
    )
    values.update(overrides)
    return Season(**values)


def _episode(number: int, length: int) -> Episode:
    return Episode(number=number, name=f"Episode {number}", length=length, note="")


@pytest_asyncio.fixture
async def genre(make_facade) -> Genre:
    facade = make_facade(GenreFacade)
    assert not (await facade.add(Genre(name="Comedy"))).is_error()
    return (await facade.get_all()).data[0]


@pytest.fixture
def movies(make_facade) -> MovieFacade:
    return make_facade(MovieFacade)


@pytest.fixture
def shows(make_facade) -> ShowFacade:
    return make_facade(ShowFacade)


@pytest.fixture
def seasons(make_facade) -> SeasonFacade:
    return make_facade(SeasonFacade)


@pytest.fixture
def episodes(make_facade) -> EpisodeFacade:
    return make_facade(EpisodeFacade)


async def _only(facade):
    (record,) = (await facade.get_all()).data
    return record


# movies


@pytest.mark.asyncio
async def test_movie_round_trip(movies, genre):
    assert not (await movies.add(_movie(genre))).is_error()

    movie = await _only(movies)

    assert movie.id is not None and movie.position == 0
    assert movie.czech_name == "Pelíšky"
    assert movie.language is Language.CZ
    assert movie.subtitles == [Language.EN]
    assert [(medium.number, medium.length) for medium in movie.media] == [(1, 6000), (2, 900)]
    assert movie.genres == [genre]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("overrides", "key"),
    [
        ({"year": 1939}, "MOVIE_YEAR_NOT_VALID"),
        ({"year": 2025}, "MOVIE_YEAR_NOT_VALID"),
        ({"year": None}, "MOVIE_YEAR_NULL"),
        ({"imdb_code": 0}, "MOVIE_IMDB_CODE_NOT_VALID"),
        ({"imdb_code": 10000000}, "MOVIE_IMDB_CODE_NOT_VALID"),
        ({"media": []}, "MOVIE_MEDIA_EMPTY"),
        ({"media": [Medium(length=-1)]}, "MEDIUM_LENGTH_NEGATIVE"),
        ({"subtitles": [None]}, "MOVIE_SUBTITLES_CONTAIN_NULL"),
        ({"media": [None]}, "MOVIE_MEDIA_CONTAIN_NULL"),
        ({"genres": [None]}, "MOVIE_GENRES_CONTAIN_NULL"),
        ({"czech_name": ""}, "MOVIE_CZECH_NAME_EMPTY"),
        ({"note": None}, "MOVIE_NOTE_NULL"),
        ({"genres": None}, "MOVIE_GENRES_NULL"),
        ({"genres": [Genre(name="Drama")]}, "GENRE_ID_NULL"),
    ],
)
async def test_movie_validation(movies, genre, overrides, key):
    result = await movies.add(_movie(genre, **overrides))
    assert key in result.keys()
    assert (await movies.get_all()).data == []


@pytest.mark.asyncio
async def test_movie_accepts_unknown_imdb_code(movies, genre):
    assert not (await movies.add(_movie(genre, imdb_code=-1))).is_error()


@pytest.mark.asyncio
async def test_movie_references_must_exist(movies, genre):
    missing_genre = Genre(id=999, name="Ghost")
    assert (await movies.add(_movie(missing_genre))).keys() == ["GENRE_NOT_EXIST"]
    assert (await movies.add(_movie(genre, picture=42))).keys() == ["PICTURE_NOT_EXIST"]


@pytest.mark.asyncio
async def test_movie_update_replaces_media(movies, genre):
    await movies.add(_movie(genre))
    movie = await _only(movies)

    result = await movies.update(movie.copy_with(media=[Medium(length=100)], note="Seen"))

    assert not result.is_error()
    updated = await _only(movies)
    assert [(medium.number, medium.length) for medium in updated.media] == [(1, 100)]
    assert updated.note == "Seen"


@pytest.mark.asyncio
async def test_movie_aggregates(movies, genre):
    await movies.add(_movie(genre))
    await movies.add(_movie(genre, media=[Medium(length=100)]))

    assert (await movies.get_total_media_count()).data == 3
    assert (await movies.get_total_length()).data == Time(7000)


@pytest.mark.asyncio
async def test_movie_duplicate_copies_media_and_genres(movies, genre):
    await movies.add(_movie(genre))
    original = await _only(movies)

    assert not (await movies.duplicate(MovieRef(id=original.id))).is_error()

    first, copy = (await movies.get_all()).data
    assert copy.id != first.id
    assert copy.position == 1
    assert copy.genres == first.genres
    assert [medium.length for medium in copy.media] == [6000, 900]
    assert {medium.id for medium in copy.media}.isdisjoint(m.id for m in first.media)
    assert (await movies.get_total_media_count()).data == 4


@pytest.mark.asyncio
async def test_removing_genre_detaches_it_from_movies(movies, genre, make_facade):
    await movies.add(_movie(genre))
    genres = make_facade(GenreFacade)

    assert not (await genres.remove(GenreRef(id=genre.id))).is_error()

    assert (await _only(movies)).genres == []


@pytest.mark.asyncio
async def test_movie_new_data_removes_media(movies, genre):
    await movies.add(_movie(genre))
    assert not (await movies.new_data()).is_error()
    assert (await movies.get_all()).data == []
    assert (await movies.get_total_media_count()).data == 0


# shows, seasons and episodes


async def _show_with_seasons(shows, seasons, episodes, genre, season_count=2):
    await shows.add(_show(genre))
    show = (await shows.get_all()).data[-1]
    for number in range(1, season_count + 1):
        assert not (await seasons.add(_season(number), ShowRef(id=show.id))).is_error()
    stored = (await seasons.find(ShowRef(id=show.id))).data
    for season in stored:
        for number, length in ((1, 1300), (2, 1400)):
            result = await episodes.add(_episode(number, length), SeasonRef(id=season.id))
            assert not result.is_error()
    return show, stored


@pytest.mark.asyncio
async def test_seasons_are_scoped_by_show(shows, seasons, episodes, genre):
    first_show, first_seasons = await _show_with_seasons(shows, seasons, episodes, genre)
    second_show, second_seasons = await _show_with_seasons(
        shows, seasons, episodes, genre, season_count=1
    )

    assert [season.position for season in first_seasons] == [0, 1]
    assert [season.position for season in second_seasons] == [0]
    found = (await seasons.find(ShowRef(id=second_show.id))).data
    assert [season.id for season in found] == [second_seasons[0].id]

    only = second_seasons[0]
    assert (await seasons.move_up(SeasonRef(id=only.id))).keys() == ["SEASON_NOT_MOVABLE"]
    assert (await seasons.move_down(SeasonRef(id=only.id))).keys() == ["SEASON_NOT_MOVABLE"]


@pytest.mark.asyncio
async def test_child_operations_check_parent(seasons, episodes):
    assert (await seasons.find(ShowRef(id=77))).keys() == ["SHOW_NOT_EXIST"]
    assert (await seasons.find(ShowRef())).keys() == ["SHOW_ID_NULL"]
    assert (await seasons.add(_season(), ShowRef(id=77))).keys() == ["SHOW_NOT_EXIST"]
    assert (await episodes.add(_episode(1, 10), SeasonRef(id=77))).keys() == [
        "SEASON_NOT_EXIST"
    ]


@pytest.mark.asyncio
async def test_season_validation(shows, seasons, genre):
    await shows.add(_show(genre))
    show = await _only(shows)

    result = await seasons.add(
        _season(0, start_year=2000, end_year=1999, language=None), ShowRef(id=show.id)
    )

    assert result.keys() == [
        "SEASON_NUMBER_NOT_POSITIVE",
        "SEASON_YEARS_NOT_VALID",
        "SEASON_LANGUAGE_NULL",
    ]


@pytest.mark.asyncio
async def test_season_update_checks_owner(shows, seasons, episodes, genre):
    show, stored = await _show_with_seasons(shows, seasons, episodes, genre)
    season = stored[0]

    changed = season.copy_with(note="Pilot season")
    assert not (await seasons.update(changed, ShowRef(id=show.id))).is_error()
    assert (await seasons.get(season.id)).data.note == "Pilot season"
    assert (await seasons.update(changed, ShowRef(id=999))).keys() == ["SHOW_NOT_EXIST"]


@pytest.mark.asyncio
async def test_show_aggregates(shows, seasons, episodes, genre):
    await _show_with_seasons(shows, seasons, episodes, genre)

    assert (await shows.get_seasons_count()).data == 2
    assert (await shows.get_episodes_count()).data == 4
    assert (await shows.get_total_length()).data == Time(2 * (1300 + 1400))


@pytest.mark.asyncio
async def test_show_duplicate_copies_seasons_and_episodes(shows, seasons, episodes, genre):
    show, _ = await _show_with_seasons(shows, seasons, episodes, genre)

    assert not (await shows.duplicate(ShowRef(id=show.id))).is_error()

    copy = (await shows.get_all()).data[-1]
    assert copy.id != show.id
    assert copy.genres == [genre]
    copied_seasons = (await seasons.find(ShowRef(id=copy.id))).data
    assert [season.number for season in copied_seasons] == [1, 2]
    copied_episodes = (await episodes.find(SeasonRef(id=copied_seasons[0].id))).data
    assert [(episode.number, episode.length) for episode in copied_episodes] == [
        (1, 1300),
        (2, 1400),
    ]
    assert (await shows.get_episodes_count()).data == 8


@pytest.mark.asyncio
async def test_season_duplicate_stays_in_show(shows, seasons, episodes, genre):
    show, stored = await _show_with_seasons(shows, seasons, episodes, genre)

    assert not (await seasons.duplicate(SeasonRef(id=stored[0].id))).is_error()

    found = (await seasons.find(ShowRef(id=show.id))).data
    assert [(season.number, season.position) for season in found] == [(1, 0), (2, 1), (1, 2)]
    assert len((await episodes.find(SeasonRef(id=found[2].id))).data) == 2


@pytest.mark.asyncio
async def test_removing_children_closes_gaps_in_their_scope(shows, seasons, episodes, genre):
    show, stored = await _show_with_seasons(shows, seasons, episodes, genre, season_count=3)
    first_season = SeasonRef(id=stored[0].id)
    await episodes.add(_episode(3, 1500), first_season)
    first_episode = (await episodes.find(first_season)).data[0]

    assert not (await episodes.remove(EpisodeRef(id=first_episode.id))).is_error()

    remaining = (await episodes.find(first_season)).data
    assert [(episode.number, episode.position) for episode in remaining] == [(2, 0), (3, 1)]
    untouched = (await episodes.find(SeasonRef(id=stored[2].id))).data
    assert [episode.position for episode in untouched] == [0, 1]
    assert (await shows.get_episodes_count()).data == 6

    assert not (await seasons.remove(SeasonRef(id=stored[1].id))).is_error()

    found = (await seasons.find(ShowRef(id=show.id))).data
    assert [(season.number, season.position) for season in found] == [(1, 0), (3, 1)]
    assert (await shows.get_seasons_count()).data == 2
    assert (await shows.get_episodes_count()).data == 4


@pytest.mark.asyncio
async def test_show_remove_cascades(shows, seasons, episodes, genre):
    show, _ = await _show_with_seasons(shows, seasons, episodes, genre)

    assert not (await shows.remove(ShowRef(id=show.id))).is_error()

    assert (await shows.get_seasons_count()).data == 0
    assert (await shows.get_episodes_count()).data == 0


@pytest.mark.asyncio
async def test_show_update_positions_cascades(shows, seasons, episodes, genre, session_factory):
    show, stored = await _show_with_seasons(shows, seasons, episodes, genre)
    async with session_factory() as session:
        async with session.begin():
            rows = (await session.scalars(select(SeasonORM).order_by(SeasonORM.id))).all()
            for row, position in zip(rows, (8, 3)):
                row.position = position

    assert not (await shows.update_positions()).is_error()

    found = (await seasons.find(ShowRef(id=show.id))).data
    assert [season.position for season in found] == [0, 1]
    assert [season.id for season in found] == [stored[1].id, stored[0].id]


@pytest.mark.asyncio
async def test_show_new_data_clears_children(shows, seasons, episodes, genre):
    await _show_with_seasons(shows, seasons, episodes, genre)

    assert not (await shows.new_data()).is_error()

    assert (await shows.get_all()).data == []
    assert (await shows.get_seasons_count()).data == 0
    assert (await shows.get_episodes_count()).data == 0


# music and songs


@pytest.mark.asyncio
async def test_music_songs_and_aggregates(make_facade):
    music = make_facade(MusicFacade)
    songs = make_facade(SongFacade)
    for name, media_count in (("Album", 2), ("Single", 1)):
        await music.add(Music(name=name, wiki_en="", wiki_cz="", media_count=media_count, note=""))
    album, single = (await music.get_all()).data
    for length in (200, 250):
        result = await songs.add(Song(name="Song", length=length, note=""), MusicRef(id=album.id))
        assert not result.is_error()

    assert [song.length for song in (await songs.find(MusicRef(id=album.id))).data] == [200, 250]
    assert (await songs.find(MusicRef(id=single.id))).data == []
    assert (await music.get_total_media_count()).data == 3
    assert (await music.get_total_length()).data == Time(450)
    assert (await music.get_songs_count()).data == 2

    assert not (await music.duplicate(MusicRef(id=album.id))).is_error()
    assert (await music.get_songs_count()).data == 4

    assert not (await music.new_data()).is_error()
    assert (await music.get_songs_count()).data == 0


@pytest.mark.asyncio
async def test_song_validation(make_facade):
    music = make_facade(MusicFacade)
    songs = make_facade(SongFacade)
    await music.add(Music(name="Album", wiki_en="", wiki_cz="", media_count=1, note=""))
    album = await _only(music)

    result = await songs.add(Song(name=None, length=-5, note=None), MusicRef(id=album.id))

    assert result.keys() == ["SONG_NAME_NULL", "SONG_LENGTH_NEGATIVE", "SONG_NOTE_NULL"]


# games and programs


@pytest.mark.asyncio
async def test_game_flags_default_to_false_and_media_sum(make_facade):
    games = make_facade(GameFacade)
    await games.add(Game(name="Doom", media_count=2, wiki_en="", wiki_cz="", other_data="", note="", crack=True))
    await games.add(Game(name="Quake", media_count=3, wiki_en="", wiki_cz="", other_data="", note=""))

    doom, quake = (await games.get_all()).data

    assert doom.crack is True and doom.saves is False
    assert quake.crack is False and quake.trainer is False
    assert (await games.get_total_media_count()).data == 5


@pytest.mark.asyncio
async def test_game_media_count_must_be_positive(make_facade):
    games = make_facade(GameFacade)
    result = await games.add(Game(name="Doom", media_count=0, wiki_en="", wiki_cz="", other_data="", note=""))
    assert result.keys() == ["GAME_MEDIA_COUNT_NOT_POSITIVE"]


@pytest.mark.asyncio
async def test_program_media_sum(make_facade):
    programs = make_facade(ProgramFacade)
    await programs.add(Program(name="Editor", media_count=4, wiki_en="", wiki_cz="", other_data="", note=""))
    program = await _only(programs)
    assert program.serial_key is False
    assert (await programs.get_total_media_count()).data == 4


# pictures


@pytest.mark.asyncio
async def test_picture_removal_clears_references(make_facade, movies, genre):
    pictures = make_facade(PictureFacade)
    assert not (await pictures.add(Picture(content=b"\xff\xd8jpeg"))).is_error()
    picture = await _only(pictures)
    assert picture.content == b"\xff\xd8jpeg"
    await movies.add(_movie(genre, picture=picture.id))

    assert not (await pictures.remove(PictureRef(id=picture.id))).is_error()

    assert (await _only(movies)).picture is None


@pytest.mark.asyncio
async def test_picture_content_is_required(make_facade):
    pictures = make_facade(PictureFacade)
    assert (await pictures.add(Picture())).keys() == ["PICTURE_CONTENT_NULL"]
    assert (await pictures.add(Picture(content=b""))).keys() == ["PICTURE_CONTENT_EMPTY"]
