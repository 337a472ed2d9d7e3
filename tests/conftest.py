"""Shared fixtures for the catalog test suite."""

from __future__ import annotations

from datetime import datetime
from typing import Any
from typing import Callable
from typing import Dict

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

from catalog_rest.app import create_app
from catalog_rest.database import create_engine_and_session
from catalog_rest.database import initialise_schema
from catalog_rest.providers import Account
from catalog_rest.providers import ROLE_ADMIN
from catalog_rest.providers import StaticAccountProvider
from catalog_rest.settings import CatalogSettings


FIXED_NOW = datetime(2024, 5, 1, 12, 0, 0)


def fixed_clock() -> datetime:
    """Clock returning the same instant for every call."""

    return FIXED_NOW


@pytest_asyncio.fixture
async def session_factory(tmp_path):
    """Create a SQLite database with the catalog schema."""

    engine, factory = create_engine_and_session(
        f"sqlite+aiosqlite:///{tmp_path / 'catalog.db'}"
    )
    await initialise_schema(engine)
    yield factory
    await engine.dispose()


@pytest.fixture
def now() -> datetime:
    return FIXED_NOW


@pytest.fixture
def account_provider() -> StaticAccountProvider:
    return StaticAccountProvider(Account("tester", frozenset({ROLE_ADMIN})))


@pytest.fixture
def make_facade(session_factory, account_provider) -> Callable[[type], Any]:
    """Return a builder instantiating a facade bound to the test database."""

    def build(facade_type: type) -> Any:
        return facade_type(
            session_factory,
            account_provider=account_provider,
            time_provider=fixed_clock,
        )

    return build


@pytest.fixture
def client(tmp_path):
    """HTTP client for an application with authentication disabled."""

    settings = CatalogSettings(
        database_url=str(tmp_path / "api.db"),
        auth_enabled=False,
    )
    app = create_app(settings, time_provider=fixed_clock)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def movie_payload() -> Callable[..., Dict[str, Any]]:
    """Return a builder for valid movie JSON bodies."""

    def build(genre: Dict[str, Any], **overrides: Any) -> Dict[str, Any]:
        payload = {
            "czechName": "Pelíšky",
            "originalName": "Cosy Dens",
            "year": 1999,
            "language": "CZ",
            "subtitles": ["EN"],
            "media": [{"length": 6900}],
            "csfd": "Pelisky",
            "imdbCode": 167331,
            "wikiEn": "Cosy_Dens",
            "wikiCz": "Pelíšky",
            "picture": None,
            "note": "",
            "genres": [genre],
        }
        payload.update(overrides)
        return payload

    return build
