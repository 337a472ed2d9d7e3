"""SQLAlchemy ORM schema backing the reference catalog facades."""

from sqlalchemy import Boolean
from sqlalchemy import Column
from sqlalchemy import DateTime
from sqlalchemy import ForeignKey
from sqlalchemy import Integer
from sqlalchemy import JSON
from sqlalchemy import LargeBinary
from sqlalchemy import String
from sqlalchemy import Table
from sqlalchemy.orm import declarative_base
from sqlalchemy.orm import relationship

Base = declarative_base()


class AuditMixin:
    """Who created and last updated a row, and when."""

    created_user = Column(String, nullable=True)
    created_time = Column(DateTime, nullable=True)
    updated_user = Column(String, nullable=True)
    updated_time = Column(DateTime, nullable=True)


movie_genres = Table(
    "movie_genres",
    Base.metadata,
    Column("movie_id", Integer, ForeignKey("movies.id", ondelete="CASCADE"), primary_key=True),
    Column("genre_id", Integer, ForeignKey("genres.id", ondelete="CASCADE"), primary_key=True),
)

show_genres = Table(
    "show_genres",
    Base.metadata,
    Column("show_id", Integer, ForeignKey("shows.id", ondelete="CASCADE"), primary_key=True),
    Column("genre_id", Integer, ForeignKey("genres.id", ondelete="CASCADE"), primary_key=True),
)


class GenreORM(AuditMixin, Base):
    __tablename__ = "genres"
    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    position = Column(Integer, nullable=False)


class PictureORM(AuditMixin, Base):
    __tablename__ = "pictures"
    id = Column(Integer, primary_key=True)
    content = Column(LargeBinary, nullable=False)
    position = Column(Integer, nullable=False)


class MediumORM(Base):
    __tablename__ = "media"
    id = Column(Integer, primary_key=True)
    movie_id = Column(Integer, ForeignKey("movies.id", ondelete="CASCADE"), nullable=False)
    number = Column(Integer, nullable=False)
    length = Column(Integer, nullable=False)


class MovieORM(AuditMixin, Base):
    __tablename__ = "movies"
    id = Column(Integer, primary_key=True)
    czech_name = Column(String, nullable=False)
    original_name = Column(String, nullable=False)
    year = Column(Integer, nullable=False)
    language = Column(String, nullable=False)
    subtitles = Column(JSON, nullable=False, default=list)
    csfd = Column(String, nullable=False)
    imdb_code = Column(Integer, nullable=False)
    wiki_en = Column(String, nullable=False)
    wiki_cz = Column(String, nullable=False)
    picture = Column(Integer, nullable=True)
    note = Column(String, nullable=False)
    position = Column(Integer, nullable=False)

    media = relationship(
        "MediumORM",
        cascade="all, delete-orphan",
        order_by="MediumORM.number",
        lazy="selectin",
    )
    genres = relationship(
        "GenreORM",
        secondary=movie_genres,
        order_by="GenreORM.position",
        lazy="selectin",
    )


class ShowORM(AuditMixin, Base):
    __tablename__ = "shows"
    id = Column(Integer, primary_key=True)
    czech_name = Column(String, nullable=False)
    original_name = Column(String, nullable=False)
    csfd = Column(String, nullable=False)
    imdb_code = Column(Integer, nullable=False)
    wiki_en = Column(String, nullable=False)
    wiki_cz = Column(String, nullable=False)
    picture = Column(Integer, nullable=True)
    note = Column(String, nullable=False)
    position = Column(Integer, nullable=False)

    genres = relationship(
        "GenreORM",
        secondary=show_genres,
        order_by="GenreORM.position",
        lazy="selectin",
    )
    seasons = relationship(
        "SeasonORM",
        back_populates="show",
        cascade="all, delete-orphan",
        order_by="SeasonORM.position",
        lazy="selectin",
    )


class SeasonORM(AuditMixin, Base):
    __tablename__ = "seasons"
    id = Column(Integer, primary_key=True)
    show_id = Column(Integer, ForeignKey("shows.id", ondelete="CASCADE"), nullable=False)
    number = Column(Integer, nullable=False)
    start_year = Column(Integer, nullable=False)
    end_year = Column(Integer, nullable=False)
    language = Column(String, nullable=False)
    subtitles = Column(JSON, nullable=False, default=list)
    note = Column(String, nullable=False)
    position = Column(Integer, nullable=False)

    show = relationship("ShowORM", back_populates="seasons")
    episodes = relationship(
        "EpisodeORM",
        back_populates="season",
        cascade="all, delete-orphan",
        order_by="EpisodeORM.position",
        lazy="selectin",
    )


class EpisodeORM(AuditMixin, Base):
    __tablename__ = "episodes"
    id = Column(Integer, primary_key=True)
    season_id = Column(Integer, ForeignKey("seasons.id", ondelete="CASCADE"), nullable=False)
    number = Column(Integer, nullable=False)
    name = Column(String, nullable=False)
    length = Column(Integer, nullable=False)
    note = Column(String, nullable=False)
    position = Column(Integer, nullable=False)

    season = relationship("SeasonORM", back_populates="episodes")


class GameORM(AuditMixin, Base):
    __tablename__ = "games"
    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    media_count = Column(Integer, nullable=False)
    wiki_en = Column(String, nullable=False)
    wiki_cz = Column(String, nullable=False)
    crack = Column(Boolean, nullable=False, default=False)
    serial_key = Column(Boolean, nullable=False, default=False)
    patch = Column(Boolean, nullable=False, default=False)
    trainer = Column(Boolean, nullable=False, default=False)
    trainer_data = Column(Boolean, nullable=False, default=False)
    editor = Column(Boolean, nullable=False, default=False)
    saves = Column(Boolean, nullable=False, default=False)
    other_data = Column(String, nullable=False)
    note = Column(String, nullable=False)
    position = Column(Integer, nullable=False)


class MusicORM(AuditMixin, Base):
    __tablename__ = "music"
    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    wiki_en = Column(String, nullable=False)
    wiki_cz = Column(String, nullable=False)
    media_count = Column(Integer, nullable=False)
    note = Column(String, nullable=False)
    position = Column(Integer, nullable=False)

    songs = relationship(
        "SongORM",
        back_populates="music",
        cascade="all, delete-orphan",
        order_by="SongORM.position",
        lazy="selectin",
    )


class SongORM(AuditMixin, Base):
    __tablename__ = "songs"
    id = Column(Integer, primary_key=True)
    music_id = Column(Integer, ForeignKey("music.id", ondelete="CASCADE"), nullable=False)
    name = Column(String, nullable=False)
    length = Column(Integer, nullable=False)
    note = Column(String, nullable=False)
    position = Column(Integer, nullable=False)

    music = relationship("MusicORM", back_populates="songs")


class ProgramORM(AuditMixin, Base):
    __tablename__ = "programs"
    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    media_count = Column(Integer, nullable=False)
    wiki_en = Column(String, nullable=False)
    wiki_cz = Column(String, nullable=False)
    crack = Column(Boolean, nullable=False, default=False)
    serial_key = Column(Boolean, nullable=False, default=False)
    other_data = Column(String, nullable=False)
    note = Column(String, nullable=False)
    position = Column(Integer, nullable=False)
