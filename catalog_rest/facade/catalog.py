"""Facades for every catalog entity, with their aggregate counters."""

from __future__ import annotations

from typing import Any
from typing import Dict
from typing import List
from typing import Optional

from sqlalchemy import delete
from sqlalchemy import func
from sqlalchemy import select
from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession

from ..entities import Episode
from ..entities import Game
from ..entities import Genre
from ..entities import Movie
from ..entities import Music
from ..entities import Picture
from ..entities import Program
from ..entities import Season
from ..entities import Show
from ..entities import Song
from ..entities import Time
from ..orm import EpisodeORM
from ..orm import GameORM
from ..orm import GenreORM
from ..orm import MediumORM
from ..orm import MovieORM
from ..orm import MusicORM
from ..orm import PictureORM
from ..orm import ProgramORM
from ..orm import SeasonORM
from ..orm import ShowORM
from ..orm import SongORM
from ..orm import movie_genres
from ..orm import show_genres
from ..result import Result
from .base import MovableFacade
from .base import clone_row
from .validation import check_imdb_code
from .validation import check_items
from .validation import check_not_negative
from .validation import check_not_null
from .validation import check_positive
from .validation import check_text
from .validation import check_year


def _validate_genres(result: Result[Any], prefix: str, genres: Optional[List[Genre]]) -> None:
    if not check_items(result, prefix, "genres", genres):
        return
    for genre in genres:
        check_not_null(result, "GENRE", "id", genre.id)
        check_text(result, "GENRE", "name", genre.name)


async def _load_genres(
    session: AsyncSession, result: Result[Any], genres: List[Genre]
) -> List[GenreORM]:
    """Return the stored genres for ``genres``, reporting unknown ids."""

    ids = list(dict.fromkeys(genre.id for genre in genres))
    rows = (await session.scalars(select(GenreORM).where(GenreORM.id.in_(ids)))).all()
    found = {row.id: row for row in rows}
    if len(found) != len(ids):
        result.add_error("GENRE_NOT_EXIST", "Genre doesn't exist.")
    return [found[genre_id] for genre_id in ids if genre_id in found]


async def _check_picture(
    session: AsyncSession, result: Result[Any], picture_id: Optional[int]
) -> None:
    if picture_id is None:
        return
    found = await session.scalar(select(PictureORM.id).where(PictureORM.id == picture_id))
    if found is None:
        result.add_error("PICTURE_NOT_EXIST", "Picture doesn't exist.")


def _clone_season(season: SeasonORM, facade: MovableFacade) -> SeasonORM:
    copy = clone_row(season, show_id=None)
    facade.stamp(copy, created=True)
    for episode in season.episodes:
        episode_copy = clone_row(episode, season_id=None)
        facade.stamp(episode_copy, created=True)
        copy.episodes.append(episode_copy)
    return copy


class _AggregateMixin:
    async def _aggregate(self, stmt: Any) -> int:
        async with self._require_session_factory()() as session:
            value = await session.scalar(stmt)
        return int(value or 0)

    async def _sum(self, column: Any) -> int:
        return await self._aggregate(select(func.coalesce(func.sum(column), 0)))

    async def _count(self, column: Any) -> int:
        return await self._aggregate(select(func.count(column)))


class GenreFacade(MovableFacade[Genre]):
    entity = Genre
    prefix = "GENRE"
    label = "Genre"
    dependent_tables = (movie_genres, show_genres)

    def validate_data(self, data: Genre, result: Result[Any]) -> None:
        check_text(result, self.prefix, "name", data.name)

    async def before_remove(self, session: AsyncSession, row: GenreORM) -> None:
        for table in self.dependent_tables:
            await session.execute(delete(table).where(table.c.genre_id == row.id))


class MovieFacade(_AggregateMixin, MovableFacade[Movie]):
    """Movies with their media, genres and an optional picture."""

    entity = Movie
    prefix = "MOVIE"
    label = "Movie"
    dependent_tables = (MediumORM.__table__, movie_genres)

    def validate_data(self, data: Movie, result: Result[Any]) -> None:
        prefix = self.prefix
        check_text(result, prefix, "czech_name", data.czech_name)
        check_text(result, prefix, "original_name", data.original_name)
        check_year(result, prefix, "year", data.year, self.current_year())
        check_not_null(result, prefix, "language", data.language)
        check_items(result, prefix, "subtitles", data.subtitles)
        if check_items(result, prefix, "media", data.media):
            if not data.media:
                result.add_error(f"{prefix}_MEDIA_EMPTY", "Media mustn't be empty.")
            for medium in data.media:
                check_not_negative(result, "MEDIUM", "length", medium.length)
        check_not_null(result, prefix, "csfd", data.csfd)
        check_imdb_code(result, prefix, data.imdb_code)
        check_not_null(result, prefix, "wiki_en", data.wiki_en)
        check_not_null(result, prefix, "wiki_cz", data.wiki_cz)
        check_not_null(result, prefix, "note", data.note)
        _validate_genres(result, prefix, data.genres)

    async def resolve_references(
        self, session: AsyncSession, data: Movie, result: Result[Any]
    ) -> Dict[str, Any]:
        await _check_picture(session, result, data.picture)
        return {"genres": await _load_genres(session, result, data.genres)}

    def populate(self, row: MovieORM, data: Movie, references: Dict[str, Any]) -> None:
        super().populate(row, data, references)
        row.media = [
            MediumORM(number=number, length=medium.length)
            for number, medium in enumerate(data.media, start=1)
        ]
        row.genres = references["genres"]

    def copy_children(self, source: MovieORM, copy: MovieORM) -> None:
        copy.media = [clone_row(medium, movie_id=None) for medium in source.media]
        copy.genres = list(source.genres)

    async def get_total_media_count(self) -> Result[int]:
        return Result.of(await self._count(MediumORM.id))

    async def get_total_length(self) -> Result[Time]:
        return Result.of(Time(await self._sum(MediumORM.length)))


class ShowFacade(_AggregateMixin, MovableFacade[Show]):
    """Shows owning seasons, which own episodes."""

    entity = Show
    prefix = "SHOW"
    label = "Show"
    positioned_children = ((SeasonORM, "show_id"), (EpisodeORM, "season_id"))
    dependent_tables = (EpisodeORM.__table__, SeasonORM.__table__, show_genres)

    def validate_data(self, data: Show, result: Result[Any]) -> None:
        prefix = self.prefix
        check_text(result, prefix, "czech_name", data.czech_name)
        check_text(result, prefix, "original_name", data.original_name)
        check_not_null(result, prefix, "csfd", data.csfd)
        check_imdb_code(result, prefix, data.imdb_code)
        check_not_null(result, prefix, "wiki_en", data.wiki_en)
        check_not_null(result, prefix, "wiki_cz", data.wiki_cz)
        check_not_null(result, prefix, "note", data.note)
        _validate_genres(result, prefix, data.genres)

    async def resolve_references(
        self, session: AsyncSession, data: Show, result: Result[Any]
    ) -> Dict[str, Any]:
        await _check_picture(session, result, data.picture)
        return {"genres": await _load_genres(session, result, data.genres)}

    def populate(self, row: ShowORM, data: Show, references: Dict[str, Any]) -> None:
        super().populate(row, data, references)
        row.genres = references["genres"]

    def copy_children(self, source: ShowORM, copy: ShowORM) -> None:
        copy.genres = list(source.genres)
        copy.seasons = [_clone_season(season, self) for season in source.seasons]

    async def get_total_length(self) -> Result[Time]:
        return Result.of(Time(await self._sum(EpisodeORM.length)))

    async def get_seasons_count(self) -> Result[int]:
        return Result.of(await self._count(SeasonORM.id))

    async def get_episodes_count(self) -> Result[int]:
        return Result.of(await self._count(EpisodeORM.id))


class SeasonFacade(MovableFacade[Season]):
    entity = Season
    prefix = "SEASON"
    label = "Season"
    parent_orm = ShowORM
    parent_column = "show_id"
    parent_prefix = "SHOW"
    parent_label = "Show"
    positioned_children = ((EpisodeORM, "season_id"),)

    def validate_data(self, data: Season, result: Result[Any]) -> None:
        prefix = self.prefix
        current_year = self.current_year()
        check_positive(result, prefix, "number", data.number)
        check_year(result, prefix, "start_year", data.start_year, current_year)
        check_year(result, prefix, "end_year", data.end_year, current_year)
        if (
            data.start_year is not None
            and data.end_year is not None
            and data.start_year > data.end_year
        ):
            result.add_error(
                f"{prefix}_YEARS_NOT_VALID",
                "Starting year mustn't be greater than ending year.",
            )
        check_not_null(result, prefix, "language", data.language)
        check_items(result, prefix, "subtitles", data.subtitles)
        check_not_null(result, prefix, "note", data.note)

    def copy_children(self, source: SeasonORM, copy: SeasonORM) -> None:
        for episode in source.episodes:
            episode_copy = clone_row(episode, season_id=None)
            self.stamp(episode_copy, created=True)
            copy.episodes.append(episode_copy)


class EpisodeFacade(MovableFacade[Episode]):
    entity = Episode
    prefix = "EPISODE"
    label = "Episode"
    parent_orm = SeasonORM
    parent_column = "season_id"
    parent_prefix = "SEASON"
    parent_label = "Season"

    def validate_data(self, data: Episode, result: Result[Any]) -> None:
        check_positive(result, self.prefix, "number", data.number)
        check_text(result, self.prefix, "name", data.name)
        check_not_negative(result, self.prefix, "length", data.length)
        check_not_null(result, self.prefix, "note", data.note)


class GameFacade(_AggregateMixin, MovableFacade[Game]):
    entity = Game
    prefix = "GAME"
    label = "Game"

    FLAGS = ("crack", "serial_key", "patch", "trainer", "trainer_data", "editor", "saves")

    def validate_data(self, data: Game, result: Result[Any]) -> None:
        prefix = self.prefix
        check_text(result, prefix, "name", data.name)
        check_positive(result, prefix, "media_count", data.media_count)
        check_not_null(result, prefix, "wiki_en", data.wiki_en)
        check_not_null(result, prefix, "wiki_cz", data.wiki_cz)
        check_not_null(result, prefix, "other_data", data.other_data)
        check_not_null(result, prefix, "note", data.note)

    def populate(self, row: GameORM, data: Game, references: Dict[str, Any]) -> None:
        super().populate(row, data, references)
        for flag in self.FLAGS:
            setattr(row, flag, bool(getattr(data, flag)))

    async def get_total_media_count(self) -> Result[int]:
        return Result.of(await self._sum(GameORM.media_count))


class MusicFacade(_AggregateMixin, MovableFacade[Music]):
    entity = Music
    prefix = "MUSIC"
    label = "Music"
    positioned_children = ((SongORM, "music_id"),)
    dependent_tables = (SongORM.__table__,)

    def validate_data(self, data: Music, result: Result[Any]) -> None:
        prefix = self.prefix
        check_text(result, prefix, "name", data.name)
        check_not_null(result, prefix, "wiki_en", data.wiki_en)
        check_not_null(result, prefix, "wiki_cz", data.wiki_cz)
        check_positive(result, prefix, "media_count", data.media_count)
        check_not_null(result, prefix, "note", data.note)

    def copy_children(self, source: MusicORM, copy: MusicORM) -> None:
        for song in source.songs:
            song_copy = clone_row(song, music_id=None)
            self.stamp(song_copy, created=True)
            copy.songs.append(song_copy)

    async def get_total_media_count(self) -> Result[int]:
        return Result.of(await self._sum(MusicORM.media_count))

    async def get_total_length(self) -> Result[Time]:
        return Result.of(Time(await self._sum(SongORM.length)))

    async def get_songs_count(self) -> Result[int]:
        return Result.of(await self._count(SongORM.id))


class SongFacade(MovableFacade[Song]):
    entity = Song
    prefix = "SONG"
    label = "Song"
    parent_orm = MusicORM
    parent_column = "music_id"
    parent_prefix = "MUSIC"
    parent_label = "Music"

    def validate_data(self, data: Song, result: Result[Any]) -> None:
        check_text(result, self.prefix, "name", data.name)
        check_not_negative(result, self.prefix, "length", data.length)
        check_not_null(result, self.prefix, "note", data.note)


class ProgramFacade(_AggregateMixin, MovableFacade[Program]):
    entity = Program
    prefix = "PROGRAM"
    label = "Program"

    FLAGS = ("crack", "serial_key")

    def validate_data(self, data: Program, result: Result[Any]) -> None:
        prefix = self.prefix
        check_text(result, prefix, "name", data.name)
        check_positive(result, prefix, "media_count", data.media_count)
        check_not_null(result, prefix, "wiki_en", data.wiki_en)
        check_not_null(result, prefix, "wiki_cz", data.wiki_cz)
        check_not_null(result, prefix, "other_data", data.other_data)
        check_not_null(result, prefix, "note", data.note)

    def populate(self, row: ProgramORM, data: Program, references: Dict[str, Any]) -> None:
        super().populate(row, data, references)
        for flag in self.FLAGS:
            setattr(row, flag, bool(getattr(data, flag)))

    async def get_total_media_count(self) -> Result[int]:
        return Result.of(await self._sum(ProgramORM.media_count))


class PictureFacade(MovableFacade[Picture]):
    """Binary pictures referenced by movies and shows."""

    entity = Picture
    prefix = "PICTURE"
    label = "Picture"

    def validate_data(self, data: Picture, result: Result[Any]) -> None:
        if check_not_null(result, self.prefix, "content", data.content) and not data.content:
            result.add_error(f"{self.prefix}_CONTENT_EMPTY", "Content mustn't be empty.")

    async def before_remove(self, session: AsyncSession, row: PictureORM) -> None:
        for orm_model in (MovieORM, ShowORM):
            await session.execute(
                update(orm_model).where(orm_model.picture == row.id).values(picture=None)
            )

    async def before_clear(self, session: AsyncSession) -> None:
        for orm_model in (MovieORM, ShowORM):
            await session.execute(update(orm_model).values(picture=None))


__all__ = [
    "EpisodeFacade",
    "GameFacade",
    "GenreFacade",
    "MovieFacade",
    "MusicFacade",
    "PictureFacade",
    "ProgramFacade",
    "SeasonFacade",
    "ShowFacade",
    "SongFacade",
]
