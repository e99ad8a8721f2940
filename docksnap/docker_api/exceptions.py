"""Исключения при работе с Docker-демоном и его снимком."""

from __future__ import annotations

import logging
from typing import Optional

from docksnap.exceptions import DocksnapError


class DaemonError(DocksnapError):
    """Базовое исключение подсистемы docker_api."""


class DockerAPIError(DaemonError):
    """Удалённый вызов Docker API завершился ошибкой."""

    # Оборачивается в RefreshError, VolumeCreateError или VolumeRemoveError
    log_level = logging.DEBUG

    def __init__(self, reason: str, operation: Optional[str] = None) -> None:
        self.reason = reason
        self.operation = operation
        prefix = f"{operation}: " if operation else ""
        super().__init__(f"{prefix}{reason}", context={"operation": operation})


class DaemonConnectionError(DaemonError):
    """Не удалось установить соединение с демоном."""

    def __init__(self, target: str, reason: str) -> None:
        self.target = target
        self.reason = reason
        super().__init__(
            f"Cannot connect to Docker daemon at {target}: {reason}",
            context={"target": target, "reason": reason},
        )


class RefreshError(DaemonError):
    """Обновление одной категории снимка не удалось."""

    def __init__(self, category: str, reason: str) -> None:
        self.category = category
        self.reason = reason
        super().__init__(
            f"Failed to refresh {category}: {reason}",
            context={"category": category, "reason": reason},
        )


class OptionParseError(DaemonError):
    """Некорректная строка key=value в параметрах создания тома."""

    def __init__(self, key: str, value: str, reason: str) -> None:
        self.key = key
        self.value = value
        self.reason = reason
        super().__init__(
            f"Cannot parse option '{key}': {reason} (value={value!r})",
            context={"key": key, "value": value, "reason": reason},
        )


class VolumeCreateError(DaemonError):
    """Демон отклонил создание тома."""

    def __init__(self, name: Optional[str], reason: str) -> None:
        self.name = name
        self.reason = reason
        label = name or "<generated>"
        super().__init__(
            f"Failed to create volume {label}: {reason}",
            context={"name": name, "reason": reason},
        )


class VolumeRemoveError(DaemonError):
    """Демон отклонил удаление тома."""

    def __init__(self, name: str, reason: str) -> None:
        self.name = name
        self.reason = reason
        super().__init__(
            f"Failed to remove volume {name}: {reason}",
            context={"name": name, "reason": reason},
        )


class VolumeNotFoundError(DaemonError):
    """Том с указанным именем отсутствует в снимке."""

    log_level = logging.DEBUG

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"No volume {name} found", context={"name": name})


class DeadlineExceededError(DaemonError):
    """Удалённый вызов не уложился в отведённое время."""

    def __init__(self, operation: str, timeout: float) -> None:
        self.operation = operation
        self.timeout = timeout
        super().__init__(
            f"{operation} timed out after {timeout} seconds",
            context={"operation": operation, "timeout": timeout},
        )
