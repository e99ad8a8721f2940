"""Общая база исключений и ошибки подсистемы настроек."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Optional

LOGGER = logging.getLogger(__name__)


class DocksnapError(Exception):
    """Исключение с контекстом; при создании пишется в лог с уровнем log_level."""

    log_level: int = logging.ERROR

    def __init__(self, message: str, *, context: Optional[Dict[str, Any]] = None) -> None:
        self.message = message
        self.context = context or {}
        super().__init__(message)
        LOGGER.log(self.log_level, "%s | context=%s", message, self.context)


class SettingsError(DocksnapError):
    """Ошибка настройки, адресуемой ключом вида "группа.ключ"."""

    def __init__(self, key: str, reason: str, **context: Any) -> None:
        self.key = key
        self.reason = reason
        super().__init__(f"Setting '{key}': {reason}", context={"key": key, "reason": reason, **context})


class SettingsNotFoundError(SettingsError):
    def __init__(self, key: str) -> None:
        super().__init__(key, "not found")


class SettingsValidationError(SettingsError):
    def __init__(self, key: str, value: Any, reason: str) -> None:
        self.value = value
        super().__init__(key, f"{reason} (value={value!r})", value=value)


class SettingsIOError(SettingsError):
    """Файл конфигурации не читается или не записывается."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        super().__init__(str(path), reason)
