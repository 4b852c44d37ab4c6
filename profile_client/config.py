"""
Configuration management utilities for profile_client.
"""

from __future__ import annotations

import json
import os
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Mapping, Sequence

from dotenv import dotenv_values

from profile_client.exceptions import ConfigurationError

ENV_VAR_MAP = {
    "supabase_url": "SUPABASE_URL",
    "supabase_key": "SUPABASE_ANON_KEY",
    "storage_bucket": "PROFILE_STORAGE_BUCKET",
    "metadata_table": "PROFILE_METADATA_TABLE",
    "profile_api_url": "PROFILE_API_URL",
    "viewer_username": "PROFILE_VIEWER_USERNAME",
    "request_timeout": "PROFILE_REQUEST_TIMEOUT",
    "preferences_path": "PROFILE_PREFERENCES_PATH",
}

DEFAULT_STORAGE_BUCKET = "media"
DEFAULT_METADATA_TABLE = "content"
DEFAULT_REQUEST_TIMEOUT = 10.0
DEFAULT_PREFERENCES_PATH = Path("~/.profile_client/preferences.json")


@dataclass(slots=True)
class ClientSettings:
    """Settings shared by the upload pipeline, profile services and preferences."""

    supabase_url: str | None = None
    supabase_key: str | None = None
    storage_bucket: str | None = None
    metadata_table: str | None = None
    profile_api_url: str | None = None
    viewer_username: str | None = None
    request_timeout: str | None = None
    preferences_path: str | None = None

    def is_empty(self) -> bool:
        return all(value in (None, "") for value in asdict(self).values())

    def merge(self, other: "ClientSettings") -> "ClientSettings":
        """Merge setting sets, preferring non-null values from ``self``."""

        return ClientSettings(
            **{
                item.name: getattr(self, item.name) or getattr(other, item.name)
                for item in fields(self)
            }
        )

    @property
    def bucket(self) -> str:
        return self.storage_bucket or DEFAULT_STORAGE_BUCKET

    @property
    def table(self) -> str:
        return self.metadata_table or DEFAULT_METADATA_TABLE

    @property
    def timeout(self) -> float:
        if not self.request_timeout:
            return DEFAULT_REQUEST_TIMEOUT
        try:
            return float(self.request_timeout)
        except ValueError as exc:
            raise ConfigurationError(
                f"Request timeout '{self.request_timeout}' is not a number."
            ) from exc

    @property
    def preferences_file(self) -> Path:
        raw = Path(self.preferences_path) if self.preferences_path else DEFAULT_PREFERENCES_PATH
        return raw.expanduser()

    @classmethod
    def from_mapping(cls, data: Mapping[str, object | None]) -> "ClientSettings":
        values: dict[str, str | None] = {}
        for name in ENV_VAR_MAP:
            value = data.get(name)
            values[name] = str(value) if value not in (None, "") else None
        return cls(**values)


class ConfigManager:
    """Loads settings from environment variables, a dotenv file or a JSON file."""

    def __init__(
        self,
        settings_path: Path | None = None,
        *,
        env: Mapping[str, str] | None = None,
        dotenv_path: Path | None = None,
    ) -> None:
        self._settings_path = settings_path or Path("config/profile_client.json")
        self._env = os.environ if env is None else env
        self._dotenv_path = dotenv_path or Path(".env")

    def load_settings(
        self,
        priority: Sequence[str] = ("env", "dotenv", "file"),
    ) -> ClientSettings:
        """
        Load settings, filling gaps from each source in the requested order.

        Raises:
            ConfigurationError: when no source provides any setting.
            ValueError: for unknown source names.
        """

        settings = ClientSettings()
        for source in priority:
            if source == "env":
                loaded = self._load_from_env()
            elif source == "dotenv":
                loaded = self._load_from_dotenv()
            elif source == "file":
                loaded = self._load_from_file()
            else:
                raise ValueError(f"Unknown settings source '{source}'.")

            if loaded is not None:
                settings = settings.merge(loaded)

        if settings.is_empty():
            raise ConfigurationError("profile_client settings are not configured.")
        return settings

    def _load_from_env(self) -> ClientSettings | None:
        return self._from_env_names(self._env)

    def _load_from_dotenv(self) -> ClientSettings | None:
        if not self._dotenv_path.exists():
            return None
        return self._from_env_names(dotenv_values(self._dotenv_path))

    def _load_from_file(self) -> ClientSettings | None:
        if not self._settings_path.exists():
            return None

        with self._settings_path.open("r", encoding="utf-8") as fp:
            data = json.load(fp)

        if not isinstance(data, Mapping):
            raise ConfigurationError(
                f"Settings file {self._settings_path} did not contain a mapping."
            )

        settings = ClientSettings.from_mapping(data)
        return settings if not settings.is_empty() else None

    @staticmethod
    def _from_env_names(source: Mapping[str, str | None]) -> ClientSettings | None:
        values = {field: source.get(env_name) for field, env_name in ENV_VAR_MAP.items()}
        settings = ClientSettings.from_mapping(values)
        return settings if not settings.is_empty() else None
