"""Outcome type returned by every facade call."""

from __future__ import annotations

from dataclasses import dataclass
from dataclasses import field
from enum import Enum
from typing import Any
from typing import Dict
from typing import Generic
from typing import List
from typing import Optional
from typing import TypeVar

T = TypeVar("T")


class Severity(str, Enum):
    """Severity of a single result event."""

    INFO = "INFO"
    WARN = "WARN"
    ERROR = "ERROR"


class ResultStatus(str, Enum):
    """Aggregate status of a result, the worst severity of its events."""

    OK = "OK"
    WARN = "WARN"
    ERROR = "ERROR"


@dataclass(frozen=True)
class Event:
    """A keyed message attached to a result."""

    severity: Severity
    key: str
    message: str

    def to_dict(self) -> Dict[str, str]:
        return {"severity": self.severity.value, "key": self.key, "message": self.message}


@dataclass
class Result(Generic[T]):
    """Data produced by a facade call together with its validation events.

    A result is an error as soon as one ``ERROR`` event is attached; its data
    is then meaningless and callers must not read it.
    """

    data: Optional[T] = None
    events: List[Event] = field(default_factory=list)

    @property
    def status(self) -> ResultStatus:
        severities = {event.severity for event in self.events}
        if Severity.ERROR in severities:
            return ResultStatus.ERROR
        if Severity.WARN in severities:
            return ResultStatus.WARN
        return ResultStatus.OK

    def is_error(self) -> bool:
        return self.status is ResultStatus.ERROR

    def add_event(self, event: Event) -> None:
        self.events.append(event)

    def add_error(self, key: str, message: str) -> None:
        self.events.append(Event(Severity.ERROR, key, message))

    def extend(self, other: "Result[Any]") -> None:
        """Append the events of ``other`` to this result."""
        self.events.extend(other.events)

    def keys(self) -> List[str]:
        return [event.key for event in self.events]

    def to_dict(self, include_data: bool = False) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "status": self.status.value,
            "events": [event.to_dict() for event in self.events],
        }
        if include_data:
            payload["data"] = self.data
        return payload

    @classmethod
    def of(cls, data: Optional[T]) -> "Result[T]":
        return cls(data=data)

    @classmethod
    def error(cls, key: str, message: str) -> "Result[T]":
        result: Result[T] = cls()
        result.add_error(key, message)
        return result


__all__ = ["Event", "Result", "ResultStatus", "Severity"]
