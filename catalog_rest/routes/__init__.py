"""Resource registry of the catalog REST API."""

from __future__ import annotations

from typing import List
from typing import Tuple

from fastapi import APIRouter

from ..adapter import AggregateSpec
from ..adapter import ParentSpec
from ..adapter import ResourceSpec
from ..adapter import build_router
from ..adapter import facade_dependency
from ..entities import Episode
from ..entities import EpisodeRef
from ..entities import Game
from ..entities import GameRef
from ..entities import Genre
from ..entities import GenreRef
from ..entities import Movie
from ..entities import MovieRef
from ..entities import Music
from ..entities import MusicRef
from ..entities import Program
from ..entities import ProgramRef
from ..entities import Season
from ..entities import SeasonRef
from ..entities import Show
from ..entities import ShowRef
from ..entities import Song
from ..entities import SongRef
from ..entities import Time
from ..facade import EpisodeFacade
from ..facade import GameFacade
from ..facade import GenreFacade
from ..facade import MovieFacade
from ..facade import MusicFacade
from ..facade import ProgramFacade
from ..facade import SeasonFacade
from ..facade import ShowFacade
from ..facade import SongFacade
from ..schemas import EpisodeSchema
from ..schemas import GameSchema
from ..schemas import GenreSchema
from ..schemas import MovieSchema
from ..schemas import MusicSchema
from ..schemas import ProgramSchema
from ..schemas import SeasonSchema
from ..schemas import ShowSchema
from ..schemas import SongSchema
from . import languages
from . import pictures
from . import time


def _seconds(value: Time) -> int:
    return value.length


TOTAL_MEDIA = AggregateSpec("/totalMedia", "get_total_media_count")
TOTAL_LENGTH = AggregateSpec("/totalLength", "get_total_length", _seconds)

GENRES = ResourceSpec(
    name="genres",
    prefix="/catalog/genres",
    entity=Genre,
    ref_type=GenreRef,
    schema=GenreSchema,
    facade=facade_dependency(GenreFacade),
)

MOVIES = ResourceSpec(
    name="movies",
    prefix="/catalog/movies",
    entity=Movie,
    ref_type=MovieRef,
    schema=MovieSchema,
    facade=facade_dependency(MovieFacade),
    aggregates=(TOTAL_MEDIA, TOTAL_LENGTH),
)

SHOWS = ResourceSpec(
    name="shows",
    prefix="/catalog/shows",
    entity=Show,
    ref_type=ShowRef,
    schema=ShowSchema,
    facade=facade_dependency(ShowFacade),
    aggregates=(
        TOTAL_LENGTH,
        AggregateSpec("/seasonsCount", "get_seasons_count"),
        AggregateSpec("/episodesCount", "get_episodes_count"),
    ),
)

SEASONS = ResourceSpec(
    name="seasons",
    prefix="/catalog/shows/{showId}/seasons",
    entity=Season,
    ref_type=SeasonRef,
    schema=SeasonSchema,
    facade=facade_dependency(SeasonFacade),
    item_param="seasonId",
    parent=ParentSpec("showId", ShowRef),
)

EPISODES = ResourceSpec(
    name="episodes",
    prefix="/catalog/shows/{showId}/seasons/{seasonId}/episodes",
    entity=Episode,
    ref_type=EpisodeRef,
    schema=EpisodeSchema,
    facade=facade_dependency(EpisodeFacade),
    item_param="episodeId",
    parent=ParentSpec("seasonId", SeasonRef),
)

GAMES = ResourceSpec(
    name="games",
    prefix="/catalog/games",
    entity=Game,
    ref_type=GameRef,
    schema=GameSchema,
    facade=facade_dependency(GameFacade),
    aggregates=(TOTAL_MEDIA,),
)

MUSIC = ResourceSpec(
    name="music",
    prefix="/catalog/music",
    entity=Music,
    ref_type=MusicRef,
    schema=MusicSchema,
    facade=facade_dependency(MusicFacade),
    aggregates=(
        TOTAL_MEDIA,
        TOTAL_LENGTH,
        AggregateSpec("/songsCount", "get_songs_count"),
    ),
)

SONGS = ResourceSpec(
    name="songs",
    prefix="/catalog/music/{musicId}/songs",
    entity=Song,
    ref_type=SongRef,
    schema=SongSchema,
    facade=facade_dependency(SongFacade),
    item_param="songId",
    parent=ParentSpec("musicId", MusicRef),
)

PROGRAMS = ResourceSpec(
    name="programs",
    prefix="/catalog/programs",
    entity=Program,
    ref_type=ProgramRef,
    schema=ProgramSchema,
    facade=facade_dependency(ProgramFacade),
    aggregates=(TOTAL_MEDIA,),
)

RESOURCES: Tuple[ResourceSpec, ...] = (
    GENRES,
    MOVIES,
    SHOWS,
    SEASONS,
    EPISODES,
    GAMES,
    MUSIC,
    SONGS,
    PROGRAMS,
)


def catalog_routers() -> List[APIRouter]:
    """Return every router of the catalog API."""

    routers = [build_router(spec) for spec in RESOURCES]
    routers.extend([pictures.router, languages.router, time.router])
    return routers


__all__ = [
    "EPISODES",
    "GAMES",
    "GENRES",
    "MOVIES",
    "MUSIC",
    "PROGRAMS",
    "RESOURCES",
    "SEASONS",
    "SHOWS",
    "SONGS",
    "catalog_routers",
]
