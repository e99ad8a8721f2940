"""Группы настроек с валидацией значений."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, Tuple

from docksnap.exceptions import SettingsNotFoundError, SettingsValidationError
from docksnap.settings.validators import (
    ApiVersionValidator,
    ChoiceValidator,
    DockerHostValidator,
    FlagValidator,
    IntRangeValidator,
    Validator,
)


class SettingsGroup(ABC):
    """Абстрактная база для конкретных групп настроек."""

    group_name: str = ""

    def __init__(self) -> None:
        self._defaults: Dict[str, Any] = self._initial_values()
        self._validators: Dict[str, Validator] = self._build_validators()
        self._values: Dict[str, Any] = dict(self._defaults)

    @abstractmethod
    def _initial_values(self) -> Dict[str, Any]:
        """Значения по умолчанию для группы."""

    @abstractmethod
    def _build_validators(self) -> Dict[str, Validator]:
        """Валидаторы для ключей группы."""

    def keys(self) -> Tuple[str, ...]:
        return tuple(self._defaults)

    def get(self, key: str) -> Any:
        return self._values[self._require_key(key)]

    def set(self, key: str, value: Any) -> None:
        """Нормализует и сохраняет значение; ошибка проверки - SettingsValidationError."""

        validator = self._validators.get(self._require_key(key))
        if validator is not None:
            try:
                value = validator.clean(value)
            except ValueError as exc:
                raise SettingsValidationError(f"{self.group_name}.{key}", value, str(exc)) from exc
        self._values[key] = value

    def to_dict(self) -> Dict[str, Any]:
        return dict(self._values)

    def from_dict(self, data: Dict[str, Any]) -> None:
        """Заполняет значениями из словаря, неизвестные ключи пропускаются."""

        for key, value in data.items():
            if key in self._defaults:
                self.set(key, value)

    def reset_to_defaults(self) -> None:
        self._values = dict(self._defaults)

    def _require_key(self, key: str) -> str:
        if key not in self._defaults:
            raise SettingsNotFoundError(f"{self.group_name}.{key}")
        return key


class DaemonSettings(SettingsGroup):
    """Параметры подключения к Docker-демону."""

    group_name = "daemon"

    def _initial_values(self) -> Dict[str, Any]:
        return {
            "docker_host": "",  # пусто: брать DOCKER_HOST из окружения
            "api_version": "auto",
            "timeout_sec": 60,
            "request_timeout_sec": 0,  # 0: без ограничения на отдельный вызов
        }

    def _build_validators(self) -> Dict[str, Validator]:
        return {
            "docker_host": DockerHostValidator(),
            "api_version": ApiVersionValidator(),
            "timeout_sec": IntRangeValidator(1, 600),
            "request_timeout_sec": IntRangeValidator(0, 600),
        }


class LoggingSettings(SettingsGroup):
    """Настройки логирования."""

    group_name = "logging"

    def _initial_values(self) -> Dict[str, Any]:
        return {
            "enabled": True,
            "level": "INFO",
            "max_file_size_mb": 10,
            "max_archived_files": 5,
        }

    def _build_validators(self) -> Dict[str, Validator]:
        return {
            "enabled": FlagValidator(),
            "level": ChoiceValidator(["DEBUG", "INFO", "WARNING", "ERROR"]),
            "max_file_size_mb": IntRangeValidator(1, 1000),
            "max_archived_files": IntRangeValidator(1, 50),
        }
