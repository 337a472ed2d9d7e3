"""REST service for a catalog of movies, shows, games, music and programs."""

from .app import create_app
from .controller import CatalogErrorException
from .controller import InputException
from .controller import process_result
from .result import Event
from .result import Result
from .result import Severity

__all__ = [
    "CatalogErrorException",
    "Event",
    "InputException",
    "Result",
    "Severity",
    "create_app",
    "process_result",
]
