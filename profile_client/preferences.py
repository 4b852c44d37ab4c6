"""
Persisted theme preference exposed as a reactive store.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Callable, Mapping, Protocol

from profile_client.models import THEMES, Theme

logger = logging.getLogger(__name__)

THEME_KEY = "theme"
DEFAULT_THEME: Theme = "light"
COLOR_SCHEME_ENV = "COLOR_SCHEME"

Listener = Callable[[Theme], None]


class PreferenceBackend(Protocol):
    """Key-value storage holding preference strings across sessions."""

    def read(self, key: str) -> str | None:
        ...

    def write(self, key: str, value: str) -> None:
        ...


class MemoryPreferenceBackend:
    """Backend keeping values for the lifetime of the process only."""

    def __init__(self, initial: Mapping[str, str] | None = None) -> None:
        self.values: dict[str, str] = dict(initial or {})

    def read(self, key: str) -> str | None:
        return self.values.get(key)

    def write(self, key: str, value: str) -> None:
        self.values[key] = value


class FilePreferenceBackend:
    """Backend storing preferences as a JSON object on disk."""

    def __init__(self, path: Path) -> None:
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    def read(self, key: str) -> str | None:
        value = self._load().get(key)
        return value if isinstance(value, str) else None

    def write(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value
        self._path.parent.mkdir(parents=True, exist_ok=True)
        with self._path.open("w", encoding="utf-8") as fp:
            json.dump(data, fp, indent=2, sort_keys=True)

    def _load(self) -> dict[str, object]:
        if not self._path.exists():
            return {}
        try:
            with self._path.open("r", encoding="utf-8") as fp:
                data = json.load(fp)
        except (OSError, ValueError) as exc:
            logger.warning("Ignoring unreadable preference file %s: %s", self._path, exc)
            return {}
        return data if isinstance(data, dict) else {}


def env_prefers_dark(env: Mapping[str, str] | None = None) -> bool:
    """System dark-mode signal taken from the ``COLOR_SCHEME`` environment variable."""
    source = os.environ if env is None else env
    return source.get(COLOR_SCHEME_ENV, "").strip().lower() == "dark"


class PreferenceStore:
    """Reactive cell holding the current theme.

    The initial value comes from the backend, else the system signal, else
    ``light``. Listeners are called synchronously in registration order: once
    on subscription and again after every change. The new value is persisted
    before any listener runs.
    """

    def __init__(
        self,
        backend: PreferenceBackend,
        *,
        prefers_dark: Callable[[], bool] = env_prefers_dark,
    ) -> None:
        self._backend = backend
        self._listeners: list[Listener] = []
        self._value: Theme = self._initial_value(prefers_dark)

    @property
    def value(self) -> Theme:
        return self._value

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener`` and call it with the current value.

        Returns:
            A callable removing the listener.
        """
        self._listeners.append(listener)
        listener(self._value)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def set(self, theme: Theme) -> None:
        if theme not in THEMES:
            raise ValueError(f"Unknown theme '{theme}'.")
        self._backend.write(THEME_KEY, theme)
        self._value = theme
        for listener in list(self._listeners):
            listener(theme)

    def toggle(self) -> Theme:
        self.set("dark" if self._value == "light" else "light")
        return self._value

    def _initial_value(self, prefers_dark: Callable[[], bool]) -> Theme:
        stored = self._backend.read(THEME_KEY)
        if stored in THEMES:
            return stored  # type: ignore[return-value]
        if stored is not None:
            logger.warning("Ignoring unknown persisted theme %r", stored)
        return "dark" if prefers_dark() else DEFAULT_THEME
