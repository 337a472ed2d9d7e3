# catalog_rest/model.py
from __future__ import annotations

from dataclasses import asdict
from dataclasses import dataclass
from dataclasses import fields
from dataclasses import is_dataclass
from dataclasses import replace
from enum import Enum
from typing import Any
from typing import Dict
from typing import Optional
from typing import Type
from typing import TypeVar
from typing import Union
from typing import get_args
from typing import get_origin
from typing import get_type_hints

__all__ = [
    "BaseModel",
    "Ref",
    "dataclass_from_dict",
]

T = TypeVar("T")


def _unwrap_optional(tp: Any) -> Any:
    """Return ``X`` for ``Optional[X]`` and ``tp`` unchanged otherwise."""
    if get_origin(tp) is Union:
        members = [arg for arg in get_args(tp) if arg is not type(None)]
        if len(members) == 1:
            return members[0]
    return tp


def _construct(tp, value):
    if value is None:
        return None
    origin = get_origin(tp)
    if origin is Union:
        for sub in get_args(tp):
            if sub is type(None):
                continue
            try:
                return _construct(sub, value)
            except (TypeError, ValueError):
                continue
        raise ValueError(f"No matching type for Union {tp}")
    if is_dataclass(tp):
        if isinstance(value, tp):
            return value
        if not isinstance(value, dict):
            raise TypeError(f"Cannot build {tp.__name__} from {type(value).__name__}")
        hints = get_type_hints(tp)
        kwargs = {}
        for f in fields(tp):
            if f.init and f.name in value:
                kwargs[f.name] = _construct(hints[f.name], value[f.name])
        return tp(**kwargs)  # type: ignore
    if origin is list and isinstance(value, (list, tuple)):
        args = get_args(tp)
        item_type = args[0] if args else Any
        return [_construct(item_type, v) for v in value]
    if isinstance(tp, type) and issubclass(tp, Enum):
        return tp(value)
    return value


def dataclass_from_dict(cls: Type[T], data: Dict[str, Any]) -> T:
    """Build a dataclass instance, including nested dataclasses, from a mapping.

    Args:
        cls (Type[T]): Target dataclass type.
        data (Dict[str, Any]): Field values keyed by attribute name. Missing
            keys keep the dataclass defaults.

    Returns:
        T: Instance of ``cls``.
    """
    return _construct(cls, data)


def _from_orm_value(tp: Any, value: Any) -> Any:
    if value is None:
        return None
    tp = _unwrap_optional(tp)
    if get_origin(tp) is list:
        (item_type,) = get_args(tp)
        return [_from_orm_value(item_type, item) for item in value]
    if isinstance(tp, type) and issubclass(tp, BaseModel):
        return tp.from_orm(value)
    if isinstance(tp, type) and issubclass(tp, Enum):
        return tp(value)
    return value


def _to_column_value(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, list):
        return [_to_column_value(item) for item in value]
    return value


@dataclass
class BaseModel:
    """
    Base data model for catalog records, with dictionary and ORM conversions.
    Subclasses set ``__orm_model__`` to the mapped SQLAlchemy class.
    """

    __orm_model__ = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls: Type[T], data: Dict[str, Any]) -> T:
        return dataclass_from_dict(cls, data)

    def copy_with(self: T, **changes: Any) -> T:
        return replace(self, **changes)  # type: ignore[type-var]

    @classmethod
    def nested_fields(cls) -> Dict[str, Type["BaseModel"]]:
        """Return fields holding nested records, mapped to their record type."""
        nested = {}
        for name, hint in get_type_hints(cls).items():
            tp = _unwrap_optional(hint)
            if get_origin(tp) is list:
                tp = get_args(tp)[0]
            if isinstance(tp, type) and issubclass(tp, BaseModel):
                nested[name] = tp
        return nested

    def column_values(self, *, exclude: tuple = ()) -> Dict[str, Any]:
        """Return plain column values, skipping nested records and ``exclude``."""
        nested = self.nested_fields()
        return {
            f.name: _to_column_value(getattr(self, f.name))
            for f in fields(self)
            if f.name not in nested and f.name not in exclude
        }

    @classmethod
    def from_orm(cls: Type[T], orm_obj) -> T:
        """Instantiate a dataclass from an ORM row, converting nested rows too."""
        hints = get_type_hints(cls)
        kwargs = {
            f.name: _from_orm_value(hints[f.name], getattr(orm_obj, f.name, None))
            for f in fields(cls)  # type: ignore[arg-type]
        }
        return cls(**kwargs)


@dataclass(frozen=True)
class Ref:
    """Key-only reference to a stored record.

    Used wherever an operation addresses a record by identity alone, so no
    other field ever needs to be filled with a placeholder value.
    """

    id: Optional[int] = None

