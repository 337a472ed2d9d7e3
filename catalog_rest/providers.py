"""Account and clock providers handed to the facades."""

from __future__ import annotations

from dataclasses import dataclass
from dataclasses import field
from datetime import datetime
from typing import Callable
from typing import FrozenSet
from typing import Protocol


ROLE_ADMIN = "ADMIN"
ROLE_USER = "USER"


@dataclass(frozen=True)
class Account:
    """An authenticated caller."""

    username: str
    roles: FrozenSet[str] = field(default_factory=frozenset)

    def has_any_role(self, *roles: str) -> bool:
        return bool(self.roles.intersection(roles))


ANONYMOUS_ACCOUNT = Account(username="anonymous", roles=frozenset({ROLE_ADMIN}))


class AccountProvider(Protocol):
    def get_account(self) -> Account:
        ...


class StaticAccountProvider:
    """Provide one fixed account, typically the caller of the current request."""

    def __init__(self, account: Account) -> None:
        self._account = account

    def get_account(self) -> Account:
        return self._account


TimeProvider = Callable[[], datetime]


def system_time() -> datetime:
    """Return the current local time."""

    return datetime.now()


__all__ = [
    "ANONYMOUS_ACCOUNT",
    "Account",
    "AccountProvider",
    "ROLE_ADMIN",
    "ROLE_USER",
    "StaticAccountProvider",
    "TimeProvider",
    "system_time",
]
