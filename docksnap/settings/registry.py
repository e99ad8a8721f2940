"""Реестр настроек: JSON-файл, значения по умолчанию и переменные окружения."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Callable, Dict, Mapping, Optional, Tuple

from docksnap.exceptions import SettingsIOError, SettingsNotFoundError, SettingsValidationError
from docksnap.settings.groups import DaemonSettings, LoggingSettings, SettingsGroup

DEFAULT_CONFIG_PATH = Path.home() / ".docksnap" / "config.json"

# Переменная окружения -> (группа, ключ, преобразование)
ENV_OVERRIDES: Dict[str, Tuple[str, str, Callable[[str], Any]]] = {
    "DOCKSNAP_DOCKER_HOST": ("daemon", "docker_host", str),
    "DOCKSNAP_TIMEOUT_SEC": ("daemon", "timeout_sec", int),
    "DOCKSNAP_REQUEST_TIMEOUT_SEC": ("daemon", "request_timeout_sec", int),
    "DOCKSNAP_LOG_LEVEL": ("logging", "level", str),
}


class SettingsRegistry:
    """Хранит группы настроек и загружает их с диска."""

    def __init__(self, config_path: Optional[Path] = None) -> None:
        self._logger = logging.getLogger(__name__)
        self._file_path = config_path or DEFAULT_CONFIG_PATH
        self._settings: Dict[str, SettingsGroup] = {
            "daemon": DaemonSettings(),
            "logging": LoggingSettings(),
        }

    @property
    def config_path(self) -> Path:
        return self._file_path

    # --------------------------------------------------------------------- API
    def get_value(self, group: str, key: str, default: Any = None) -> Any:
        settings_group = self._settings.get(group)
        if not settings_group:
            if default is not None:
                return default
            raise SettingsNotFoundError(f"{group}.{key}")
        try:
            return settings_group.get(key)
        except SettingsNotFoundError:
            if default is not None:
                return default
            raise

    def set_value(self, group: str, key: str, value: Any) -> None:
        self.get_group(group).set(key, value)

    def get_group(self, group: str) -> SettingsGroup:
        try:
            return self._settings[group]
        except KeyError:
            raise SettingsNotFoundError(group) from None

    def save_to_disk(self, path: Optional[Path] = None) -> None:
        target = path or self._file_path
        payload = {name: group.to_dict() for name, group in self._settings.items()}
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")
        except OSError as exc:
            raise SettingsIOError(target, str(exc)) from exc

    def load_from_disk(
        self, path: Optional[Path] = None, *, environ: Optional[Mapping[str, str]] = None
    ) -> None:
        """Читает config.json (если он есть) и применяет переменные окружения."""

        target = path or self._file_path
        if target.exists():
            try:
                content = json.loads(target.read_text(encoding="utf-8"))
            except (OSError, json.JSONDecodeError) as exc:
                raise SettingsIOError(target, str(exc)) from exc
            if not isinstance(content, dict):
                raise SettingsIOError(target, "top-level JSON value must be an object")
            for name, group in self._settings.items():
                group_data = content.get(name, {})
                if isinstance(group_data, dict):
                    group.from_dict(group_data)
        else:
            self._logger.info("Config file %s not found, using defaults.", target)
        self.apply_environment(os.environ if environ is None else environ)

    def apply_environment(self, environ: Mapping[str, str]) -> None:
        for variable, (group, key, convert) in ENV_OVERRIDES.items():
            raw = environ.get(variable)
            if raw is None or raw == "":
                continue
            try:
                value = convert(raw)
            except ValueError as exc:
                raise SettingsValidationError(variable, raw, str(exc)) from exc
            self.set_value(group, key, value)
            self._logger.debug("Setting %s.%s overridden by %s", group, key, variable)
