"""Async SQLAlchemy facades validating, persisting and ordering catalog records."""

from .base import MovableFacade
from .base import SQLAlchemySessionMixin
from .catalog import EpisodeFacade
from .catalog import GameFacade
from .catalog import GenreFacade
from .catalog import MovieFacade
from .catalog import MusicFacade
from .catalog import PictureFacade
from .catalog import ProgramFacade
from .catalog import SeasonFacade
from .catalog import ShowFacade
from .catalog import SongFacade

__all__ = [
    "EpisodeFacade",
    "GameFacade",
    "GenreFacade",
    "MovableFacade",
    "MovieFacade",
    "MusicFacade",
    "PictureFacade",
    "ProgramFacade",
    "SQLAlchemySessionMixin",
    "SeasonFacade",
    "ShowFacade",
    "SongFacade",
]
