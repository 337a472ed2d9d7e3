"""Field checks shared by the catalog facades.

Every helper appends error events to a :class:`~catalog_rest.result.Result`
using keys shaped ``<ENTITY>_<FIELD>_<PROBLEM>``.
"""

from __future__ import annotations

from typing import Any
from typing import Iterable
from typing import Optional

from ..result import Result

MIN_YEAR = 1940
MAX_IMDB_CODE = 9999999
IMDB_CODE_UNKNOWN = -1


def _label(field_name: str) -> str:
    return field_name.replace("_", " ").capitalize()


def _key(prefix: str, field_name: str, problem: str) -> str:
    return f"{prefix}_{field_name.upper()}_{problem}"


def check_not_null(result: Result[Any], prefix: str, field_name: str, value: Any) -> bool:
    """Record ``<PREFIX>_<FIELD>_NULL`` when ``value`` is ``None``."""

    if value is None:
        result.add_error(
            _key(prefix, field_name, "NULL"), f"{_label(field_name)} mustn't be null."
        )
        return False
    return True


def check_null(result: Result[Any], prefix: str, field_name: str, value: Any) -> None:
    if value is not None:
        result.add_error(
            _key(prefix, field_name, "NOT_NULL"), f"{_label(field_name)} must be null."
        )


def check_text(result: Result[Any], prefix: str, field_name: str, value: Optional[str]) -> None:
    """Require a non-null string that is not blank."""

    if check_not_null(result, prefix, field_name, value) and not value.strip():
        result.add_error(
            _key(prefix, field_name, "EMPTY"),
            f"{_label(field_name)} mustn't be empty string.",
        )


def check_positive(result: Result[Any], prefix: str, field_name: str, value: Optional[int]) -> None:
    if check_not_null(result, prefix, field_name, value) and value <= 0:
        result.add_error(
            _key(prefix, field_name, "NOT_POSITIVE"),
            f"{_label(field_name)} must be positive number.",
        )


def check_not_negative(result: Result[Any], prefix: str, field_name: str, value: Optional[int]) -> None:
    if check_not_null(result, prefix, field_name, value) and value < 0:
        result.add_error(
            _key(prefix, field_name, "NEGATIVE"),
            f"{_label(field_name)} mustn't be negative number.",
        )


def check_year(
    result: Result[Any],
    prefix: str,
    field_name: str,
    value: Optional[int],
    current_year: int,
) -> None:
    """Require a year between 1940 and ``current_year`` inclusive."""

    if check_not_null(result, prefix, field_name, value) and not (
        MIN_YEAR <= value <= current_year
    ):
        result.add_error(
            _key(prefix, field_name, "NOT_VALID"),
            f"{_label(field_name)} must be between {MIN_YEAR} and {current_year}.",
        )


def check_imdb_code(result: Result[Any], prefix: str, value: Optional[int]) -> None:
    """IMDB code is either unknown (-1) or between 1 and 9999999."""

    if not check_not_null(result, prefix, "imdb_code", value):
        return
    if value != IMDB_CODE_UNKNOWN and not (1 <= value <= MAX_IMDB_CODE):
        result.add_error(
            f"{prefix}_IMDB_CODE_NOT_VALID",
            f"IMDB code must be between 1 and {MAX_IMDB_CODE} or -1.",
        )


def check_items(
    result: Result[Any], prefix: str, field_name: str, values: Optional[Iterable[Any]]
) -> bool:
    """Require a non-null collection without ``None`` members."""

    if not check_not_null(result, prefix, field_name, values):
        return False
    if any(value is None for value in values):
        result.add_error(
            _key(prefix, field_name, "CONTAIN_NULL"),
            f"{_label(field_name)} mustn't contain null value.",
        )
        return False
    return True


__all__ = [
    "IMDB_CODE_UNKNOWN",
    "MAX_IMDB_CODE",
    "MIN_YEAR",
    "check_imdb_code",
    "check_items",
    "check_not_negative",
    "check_not_null",
    "check_null",
    "check_positive",
    "check_text",
    "check_year",
]
