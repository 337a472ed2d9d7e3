"""Pydantic wire schemas for catalog records.

Every field is optional so that partial payloads, such as the id-only bodies
of duplicate and move requests, validate. List items may be ``null`` too.
The facades decide which fields a given operation requires and report the
problems as result events. JSON keys are camelCase.
"""

from __future__ import annotations

from typing import Annotated
from typing import List
from typing import Optional

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field
from pydantic.alias_generators import to_camel

from .entities import Language

# range of a SQLite INTEGER column
INTEGER_MIN = -(2**63)
INTEGER_MAX = 2**63 - 1

StoredInt = Annotated[int, Field(ge=INTEGER_MIN, le=INTEGER_MAX)]


class CatalogSchema(BaseModel):
    """Base schema using camelCase aliases and rejecting unknown keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
    )


class GenreSchema(CatalogSchema):
    id: Optional[StoredInt] = None
    name: Optional[str] = None
    position: Optional[StoredInt] = None


class MediumSchema(CatalogSchema):
    id: Optional[StoredInt] = None
    number: Optional[StoredInt] = None
    length: Optional[StoredInt] = None


class MovieSchema(CatalogSchema):
    id: Optional[StoredInt] = None
    czech_name: Optional[str] = None
    original_name: Optional[str] = None
    year: Optional[StoredInt] = None
    language: Optional[Language] = None
    subtitles: Optional[List[Optional[Language]]] = None
    media: Optional[List[Optional[MediumSchema]]] = None
    csfd: Optional[str] = None
    imdb_code: Optional[StoredInt] = None
    wiki_en: Optional[str] = None
    wiki_cz: Optional[str] = None
    picture: Optional[StoredInt] = None
    note: Optional[str] = None
    position: Optional[StoredInt] = None
    genres: Optional[List[Optional[GenreSchema]]] = None


class ShowSchema(CatalogSchema):
    id: Optional[StoredInt] = None
    czech_name: Optional[str] = None
    original_name: Optional[str] = None
    csfd: Optional[str] = None
    imdb_code: Optional[StoredInt] = None
    wiki_en: Optional[str] = None
    wiki_cz: Optional[str] = None
    picture: Optional[StoredInt] = None
    note: Optional[str] = None
    position: Optional[StoredInt] = None
    genres: Optional[List[Optional[GenreSchema]]] = None


class SeasonSchema(CatalogSchema):
    id: Optional[StoredInt] = None
    number: Optional[StoredInt] = None
    start_year: Optional[StoredInt] = None
    end_year: Optional[StoredInt] = None
    language: Optional[Language] = None
    subtitles: Optional[List[Optional[Language]]] = None
    note: Optional[str] = None
    position: Optional[StoredInt] = None


class EpisodeSchema(CatalogSchema):
    id: Optional[StoredInt] = None
    number: Optional[StoredInt] = None
    name: Optional[str] = None
    length: Optional[StoredInt] = None
    note: Optional[str] = None
    position: Optional[StoredInt] = None


class GameSchema(CatalogSchema):
    id: Optional[StoredInt] = None
    name: Optional[str] = None
    media_count: Optional[StoredInt] = None
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
    position: Optional[StoredInt] = None


class MusicSchema(CatalogSchema):
    id: Optional[StoredInt] = None
    name: Optional[str] = None
    wiki_en: Optional[str] = None
    wiki_cz: Optional[str] = None
    media_count: Optional[StoredInt] = None
    note: Optional[str] = None
    position: Optional[StoredInt] = None


class SongSchema(CatalogSchema):
    id: Optional[StoredInt] = None
    name: Optional[str] = None
    length: Optional[StoredInt] = None
    note: Optional[str] = None
    position: Optional[StoredInt] = None


class ProgramSchema(CatalogSchema):
    id: Optional[StoredInt] = None
    name: Optional[str] = None
    media_count: Optional[StoredInt] = None
    wiki_en: Optional[str] = None
    wiki_cz: Optional[str] = None
    crack: Optional[bool] = None
    serial_key: Optional[bool] = None
    other_data: Optional[str] = None
    note: Optional[str] = None
    position: Optional[StoredInt] = None


__all__ = [
    "CatalogSchema",
    "INTEGER_MAX",
    "INTEGER_MIN",
    "EpisodeSchema",
    "GameSchema",
    "GenreSchema",
    "MediumSchema",
    "MovieSchema",
    "MusicSchema",
    "ProgramSchema",
    "SeasonSchema",
    "ShowSchema",
    "SongSchema",
    "StoredInt",
]
