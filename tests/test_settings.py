"""Tests for configuration loading."""

from __future__ import annotations

import json

import pytest
from pydantic import ValidationError

from catalog_rest.settings import AccountSettings
from catalog_rest.settings import CatalogSettings
from catalog_rest.settings import create_settings_loader
from catalog_rest.settings import load_catalog_settings


@pytest.fixture(autouse=True)
def _clear_config_env(monkeypatch):
    monkeypatch.delenv("CATALOG_CONFIG_JSON", raising=False)
    monkeypatch.delenv("CATALOG_CONFIG_PATH", raising=False)


def test_defaults_when_no_configuration(tmp_path):
    settings = load_catalog_settings(default_path=tmp_path / "absent.json")

    assert settings.auth_enabled is True
    assert settings.allowed_origins == ["*"]
    assert settings.allowed_methods == ["GET", "POST", "PUT", "DELETE"]
    assert settings.database_url is None
    assert settings.title == "Catalog"


def test_json_environment_wins_over_files(tmp_path, monkeypatch):
    config_file = tmp_path / "config.json"
    config_file.write_text(json.dumps({"title": "From file"}), encoding="utf-8")
    monkeypatch.setenv("CATALOG_CONFIG_PATH", str(config_file))
    monkeypatch.setenv("CATALOG_CONFIG_JSON", json.dumps({"title": "From env"}))

    assert load_catalog_settings().title == "From env"


def test_path_environment_is_read(tmp_path, monkeypatch):
    config_file = tmp_path / "config.json"
    config_file.write_text(
        json.dumps({"database_url": " catalog.db ", "docs_enabled": False}),
        encoding="utf-8",
    )
    monkeypatch.setenv("CATALOG_CONFIG_PATH", str(config_file))

    settings = load_catalog_settings()

    assert settings.database_url == "catalog.db"
    assert settings.docs_enabled is False


def test_missing_explicit_file_is_an_error(tmp_path, monkeypatch):
    monkeypatch.setenv("CATALOG_CONFIG_PATH", str(tmp_path / "missing.json"))
    with pytest.raises(FileNotFoundError):
        load_catalog_settings()


def test_invalid_json_is_reported(monkeypatch):
    monkeypatch.setenv("CATALOG_CONFIG_JSON", "[1, 2]")
    with pytest.raises(ValueError):
        load_catalog_settings()
    monkeypatch.setenv("CATALOG_CONFIG_JSON", "{not json")
    with pytest.raises(ValueError):
        load_catalog_settings()


def test_comma_separated_lists_are_split():
    settings = CatalogSettings(
        allowed_origins="http://a.example, http://b.example",
        allowed_methods="get,post",
    )
    assert settings.allowed_origins == ["http://a.example", "http://b.example"]
    assert settings.allowed_methods == ["GET", "POST"]


def test_account_roles_are_normalised():
    account = AccountSettings(
        username=" admin ", password_hash="hash", roles=["role_admin", "user"]
    )
    assert account.username == "admin"
    assert account.roles == ["ADMIN", "USER"]
    assert AccountSettings(username="u", password_hash="h").roles == ["USER"]


def test_blank_username_is_rejected():
    with pytest.raises(ValidationError):
        AccountSettings(username="   ", password_hash="hash")


def test_find_account():
    settings = CatalogSettings(
        accounts=[{"username": "alice", "password_hash": "x", "roles": ["ADMIN"]}]
    )
    assert settings.find_account("alice").roles == ["ADMIN"]
    assert settings.find_account("bob") is None


def test_settings_loader_caches(tmp_path, monkeypatch):
    loader = create_settings_loader(default_path=tmp_path / "absent.json")
    first = loader()
    monkeypatch.setenv("CATALOG_CONFIG_JSON", json.dumps({"title": "Changed"}))
    assert loader() is first
