"""Catalog records, their key-only references, and the value types they use."""

from __future__ import annotations

from dataclasses import dataclass
from dataclasses import field
from enum import Enum
from typing import List
from typing import Optional

from .model import BaseModel
from .model import Ref
from .orm import EpisodeORM
from .orm import GameORM
from .orm import GenreORM
from .orm import MediumORM
from .orm import MovieORM
from .orm import MusicORM
from .orm import PictureORM
from .orm import ProgramORM
from .orm import SeasonORM
from .orm import ShowORM
from .orm import SongORM


class Language(str, Enum):
    CZ = "CZ"
    EN = "EN"
    FR = "FR"
    JP = "JP"
    SK = "SK"


SUBTITLE_LANGUAGES = (Language.CZ, Language.EN)


@dataclass(frozen=True)
class Time:
    """A length in seconds, printed as ``H:MM:SS`` or ``D:HH:MM:SS``."""

    length: int

    def __post_init__(self) -> None:
        if self.length < 0:
            raise ValueError("Time mustn't be negative number.")

    def __str__(self) -> str:
        days, remainder = divmod(self.length, 86400)
        hours, remainder = divmod(remainder, 3600)
        minutes, seconds = divmod(remainder, 60)
        if days > 0:
            return f"{days}:{hours:02d}:{minutes:02d}:{seconds:02d}"
        return f"{hours}:{minutes:02d}:{seconds:02d}"


@dataclass
class Genre(BaseModel):
    id: Optional[int] = None
    name: Optional[str] = None
    position: Optional[int] = None

    __orm_model__ = GenreORM


@dataclass
class Medium(BaseModel):
    """One physical medium of a movie."""

    id: Optional[int] = None
    number: Optional[int] = None
    length: Optional[int] = None

    __orm_model__ = MediumORM


@dataclass
class Movie(BaseModel):
    id: Optional[int] = None
    czech_name: Optional[str] = None
    original_name: Optional[str] = None
    year: Optional[int] = None
    language: Optional[Language] = None
    subtitles: Optional[List[Language]] = None
    media: Optional[List[Medium]] = None
    csfd: Optional[str] = None
    imdb_code: Optional[int] = None
    wiki_en: Optional[str] = None
    wiki_cz: Optional[str] = None
    picture: Optional[int] = None
    note: Optional[str] = None
    position: Optional[int] = None
    genres: Optional[List[Genre]] = None

    __orm_model__ = MovieORM


@dataclass
class Show(BaseModel):
    id: Optional[int] = None
    czech_name: Optional[str] = None
    original_name: Optional[str] = None
    csfd: Optional[str] = None
    imdb_code: Optional[int] = None
    wiki_en: Optional[str] = None
    wiki_cz: Optional[str] = None
    picture: Optional[int] = None
    note: Optional[str] = None
    position: Optional[int] = None
    genres: Optional[List[Genre]] = None

    __orm_model__ = ShowORM


@dataclass
class Season(BaseModel):
    id: Optional[int] = None
    number: Optional[int] = None
    start_year: Optional[int] = None
    end_year: Optional[int] = None
    language: Optional[Language] = None
    subtitles: Optional[List[Language]] = None
    note: Optional[str] = None
    position: Optional[int] = None

    __orm_model__ = SeasonORM


@dataclass
class Episode(BaseModel):
    id: Optional[int] = None
    number: Optional[int] = None
    name: Optional[str] = None
    length: Optional[int] = None
    note: Optional[str] = None
    position: Optional[int] = None

    __orm_model__ = EpisodeORM


@dataclass
class Game(BaseModel):
    id: Optional[int] = None
    name: Optional[str] = None
    media_count: Optional[int] = None
    wiki_en: Optional[str] = None
    wiki_cz: Optional[str] = None
    crack: Optional[bool] = None
    serial_key: Optional[bool] = None
    patch: Optional[bool] = None
    trainer: Optional[bool] = None
    trainer_data: Optional[bool] = None
    editor: Optional[bool] = None
    saves: Optional[bool] = None
    other_data: Optional[str] = None
    note: Optional[str] = None
    position: Optional[int] = None

    __orm_model__ = GameORM


@dataclass
class Music(BaseModel):
    id: Optional[int] = None
    name: Optional[str] = None
    wiki_en: Optional[str] = None
    wiki_cz: Optional[str] = None
    media_count: Optional[int] = None
    note: Optional[str] = None
    position: Optional[int] = None

    __orm_model__ = MusicORM


@dataclass
class Song(BaseModel):
    id: Optional[int] = None
    name: Optional[str] = None
    length: Optional[int] = None
    note: Optional[str] = None
    position: Optional[int] = None

    __orm_model__ = SongORM


@dataclass
class Program(BaseModel):
    id: Optional[int] = None
    name: Optional[str] = None
    media_count: Optional[int] = None
    wiki_en: Optional[str] = None
    wiki_cz: Optional[str] = None
    crack: Optional[bool] = None
    serial_key: Optional[bool] = None
    other_data: Optional[str] = None
    note: Optional[str] = None
    position: Optional[int] = None

    __orm_model__ = ProgramORM


@dataclass
class Picture(BaseModel):
    id: Optional[int] = None
    content: Optional[bytes] = field(default=None, repr=False)
    position: Optional[int] = None

    __orm_model__ = PictureORM


@dataclass(frozen=True)
class GenreRef(Ref):
    pass


@dataclass(frozen=True)
class MovieRef(Ref):
    pass


@dataclass(frozen=True)
class ShowRef(Ref):
    pass


@dataclass(frozen=True)
class SeasonRef(Ref):
    pass


@dataclass(frozen=True)
class EpisodeRef(Ref):
    pass


@dataclass(frozen=True)
class GameRef(Ref):
    pass


@dataclass(frozen=True)
class MusicRef(Ref):
    pass


@dataclass(frozen=True)
class SongRef(Ref):
    pass


@dataclass(frozen=True)
class ProgramRef(Ref):
    pass


@dataclass(frozen=True)
class PictureRef(Ref):
    pass
