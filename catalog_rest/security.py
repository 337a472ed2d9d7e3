"""HTTP Basic authentication against the configured catalog accounts."""

from __future__ import annotations

import logging
from typing import Optional

import nacl.pwhash
from fastapi import Depends
from fastapi import HTTPException
from fastapi import Request
from fastapi import status
from fastapi.security import HTTPBasic
from fastapi.security import HTTPBasicCredentials
from nacl.exceptions import InvalidkeyError

from .providers import ANONYMOUS_ACCOUNT
from .providers import Account
from .providers import ROLE_ADMIN
from .providers import ROLE_USER
from .settings import CatalogSettings


logger = logging.getLogger(__name__)

ALLOWED_ROLES = (ROLE_ADMIN, ROLE_USER)

_basic_credentials = HTTPBasic(auto_error=False)


def hash_password(password: str) -> str:
    """Return an argon2id hash string suitable for ``AccountSettings``."""

    return nacl.pwhash.str(password.encode("utf-8")).decode("ascii")


def verify_password(password_hash: str, password: str) -> bool:
    """Return ``True`` when ``password`` matches ``password_hash``."""

    try:
        return nacl.pwhash.verify(
            password_hash.encode("ascii"), password.encode("utf-8")
        )
    except InvalidkeyError:
        return False


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Basic"},
    )


def authenticate(
    settings: CatalogSettings,
    credentials: Optional[HTTPBasicCredentials],
) -> Account:
    """Resolve the account making a request.

    Args:
        settings (CatalogSettings): Configuration holding the known accounts.
        credentials (Optional[HTTPBasicCredentials]): Credentials sent by the
            client, if any.

    Returns:
        Account: The authenticated account, or the anonymous administrator
        when authentication is disabled.

    Raises:
        HTTPException: 401 for missing or wrong credentials, 403 when the
            account holds neither the ``ADMIN`` nor the ``USER`` role.
    """

    if not settings.auth_enabled:
        return ANONYMOUS_ACCOUNT
    if credentials is None:
        raise _unauthorized("Authentication required")

    configured = settings.find_account(credentials.username)
    if configured is None or not verify_password(
        configured.password_hash, credentials.password
    ):
        logger.warning("Rejected credentials for user %s", credentials.username)
        raise _unauthorized("Invalid username or password")

    account = Account(username=configured.username, roles=frozenset(configured.roles))
    if not account.has_any_role(*ALLOWED_ROLES):
        logger.warning("User %s lacks a catalog role", account.username)
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN, detail="Insufficient role"
        )
    return account


def get_current_account(
    request: Request,
    credentials: Optional[HTTPBasicCredentials] = Depends(_basic_credentials),
) -> Account:
    """FastAPI dependency returning the caller's account.

    Declared synchronous so password hashing runs in the threadpool.
    """

    return authenticate(request.app.state.settings, credentials)


__all__ = [
    "ALLOWED_ROLES",
    "authenticate",
    "get_current_account",
    "hash_password",
    "verify_password",
]
