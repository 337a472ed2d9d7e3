"""Pydantic models and loaders for the catalog service configuration."""

from __future__ import annotations

import json
import os
from functools import lru_cache
from pathlib import Path
from typing import Any
from typing import Callable
from typing import Dict
from typing import List
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel
from pydantic import Field
from pydantic import field_validator

from .providers import ROLE_USER


load_dotenv()

CONFIG_JSON_ENV_VAR = "CATALOG_CONFIG_JSON"
CONFIG_PATH_ENV_VAR = "CATALOG_CONFIG_PATH"
DEFAULT_CONFIG_PATH = Path("catalog_config.json")


class AccountSettings(BaseModel):
    """A user allowed to call the API."""

    username: str = Field(..., min_length=1)
    password_hash: str = Field(..., min_length=1)
    roles: List[str] = Field(default_factory=lambda: [ROLE_USER])

    @field_validator("username")
    @classmethod
    def _validate_username(cls, value: str) -> str:
        cleaned = value.strip()
        if not cleaned:
            raise ValueError("username cannot be empty")
        return cleaned

    @field_validator("roles", mode="before")
    @classmethod
    def _normalise_roles(cls, value: Any) -> List[str]:
        """Upper-case role names and strip an optional ``ROLE_`` prefix."""

        if isinstance(value, str):
            value = [value]
        roles = []
        for role in value or []:
            cleaned = str(role).strip().upper()
            if cleaned.startswith("ROLE_"):
                cleaned = cleaned[len("ROLE_"):]
            if cleaned:
                roles.append(cleaned)
        return roles


class CatalogSettings(BaseModel):
    """Runtime configuration of the catalog REST service."""

    database_url: Optional[str] = None
    allowed_origins: List[str] = Field(default_factory=lambda: ["*"])
    allowed_methods: List[str] = Field(
        default_factory=lambda: ["GET", "POST", "PUT", "DELETE"]
    )
    auth_enabled: bool = True
    accounts: List[AccountSettings] = Field(default_factory=list)
    log_level: str = "INFO"
    docs_enabled: bool = True
    title: str = "Catalog"
    description: str = "Catalog of movies, shows, games, music and programs"
    version: str = "1.0.0"

    @field_validator("database_url", mode="before")
    @classmethod
    def _normalise_database_url(cls, value: Optional[str]) -> Optional[str]:
        """Return ``None`` when the database URL is blank."""

        if value is None:
            return None
        cleaned = str(value).strip()
        return cleaned or None

    @field_validator("allowed_origins", "allowed_methods", mode="before")
    @classmethod
    def _split_csv(cls, value: Any) -> Any:
        """Accept comma separated strings as well as lists."""

        if isinstance(value, str):
            return [item.strip() for item in value.split(",") if item.strip()]
        return value

    @field_validator("allowed_methods")
    @classmethod
    def _upper_methods(cls, value: List[str]) -> List[str]:
        return [method.upper() for method in value]

    def find_account(self, username: str) -> Optional[AccountSettings]:
        for account in self.accounts:
            if account.username == username:
                return account
        return None


def _load_config_from_json(raw_json: str) -> Dict[str, Any]:
    """Return configuration data parsed from a raw JSON string."""

    try:
        parsed = json.loads(raw_json)
    except json.JSONDecodeError as exc:
        raise ValueError("Invalid JSON supplied via environment variable") from exc

    if not isinstance(parsed, dict):
        raise ValueError("Configuration JSON must decode to a mapping")

    return parsed


def _load_config_from_path(path: Path) -> Dict[str, Any]:
    """Return configuration data parsed from a JSON file."""

    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")
    with path.open("r", encoding="utf-8") as handle:
        return _load_config_from_json(handle.read())


def load_catalog_settings(
    *,
    default_path: Optional[Path] = DEFAULT_CONFIG_PATH,
    env_json_var: str = CONFIG_JSON_ENV_VAR,
    env_path_var: str = CONFIG_PATH_ENV_VAR,
) -> CatalogSettings:
    """Load catalog settings from environment variables or a JSON file.

    Raw JSON in ``env_json_var`` wins over a file named by ``env_path_var``,
    which wins over ``default_path``. A missing default file simply yields
    the built-in defaults, a missing file named explicitly is an error.

    Args:
        default_path (Optional[Path]): File read when no override is given.
        env_json_var (str): Environment variable holding raw JSON.
        env_path_var (str): Environment variable pointing at a JSON file.

    Returns:
        CatalogSettings: Parsed configuration model.
    """

    raw_json = os.getenv(env_json_var)
    if raw_json:
        config_data = _load_config_from_json(raw_json)
    else:
        path_override = os.getenv(env_path_var)
        if path_override:
            config_data = _load_config_from_path(Path(path_override).expanduser())
        elif default_path is not None and default_path.exists():
            config_data = _load_config_from_path(default_path)
        else:
            config_data = {}

    return CatalogSettings(**config_data)


def create_settings_loader(
    *,
    default_path: Optional[Path] = DEFAULT_CONFIG_PATH,
    env_json_var: str = CONFIG_JSON_ENV_VAR,
    env_path_var: str = CONFIG_PATH_ENV_VAR,
) -> Callable[[], CatalogSettings]:
    """Return a cached callable that loads catalog settings."""

    @lru_cache(maxsize=1)
    def _loader() -> CatalogSettings:
        return load_catalog_settings(
            default_path=default_path,
            env_json_var=env_json_var,
            env_path_var=env_path_var,
        )

    return _loader


get_settings = create_settings_loader()

__all__ = [
    "AccountSettings",
    "CatalogSettings",
    "create_settings_loader",
    "get_settings",
    "load_catalog_settings",
]
