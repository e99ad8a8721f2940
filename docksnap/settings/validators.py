"""Проверка и нормализация значений настроек.

Валидатор возвращает значение в том виде, в котором его нужно сохранить,
либо бросает ValueError с описанием причины.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from typing import Any, Iterable, Optional

DOCKER_HOST_SCHEMES = ("unix://", "tcp://", "npipe://", "http://", "https://", "ssh://")
API_VERSION_PATTERN = re.compile(r"auto|\d+\.\d+")


class Validator(ABC):
    @abstractmethod
    def clean(self, value: Any) -> Any:
        """Возвращает нормализованное значение или бросает ValueError."""


class IntRangeValidator(Validator):
    """Целое число в границах [min_value, max_value]; bool не принимается."""

    def __init__(self, min_value: Optional[int] = None, max_value: Optional[int] = None) -> None:
        self.min_value = min_value
        self.max_value = max_value

    def clean(self, value: Any) -> int:
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError(f"expected integer, got {type(value).__name__}")
        if (self.min_value is not None and value < self.min_value) or (
            self.max_value is not None and value > self.max_value
        ):
            raise ValueError(f"out of range [{self.min_value}, {self.max_value}]")
        return value


class FlagValidator(Validator):
    def clean(self, value: Any) -> bool:
        if not isinstance(value, bool):
            raise ValueError(f"expected bool, got {type(value).__name__}")
        return value


class ChoiceValidator(Validator):
    """Строка из фиксированного набора, регистр не учитывается."""

    def __init__(self, choices: Iterable[str]) -> None:
        self.choices = tuple(choice.upper() for choice in choices)

    def clean(self, value: Any) -> str:
        if not isinstance(value, str) or value.upper() not in self.choices:
            raise ValueError(f"expected one of {', '.join(self.choices)}")
        return value.upper()


class DockerHostValidator(Validator):
    """Адрес демона. Пустая строка означает DOCKER_HOST из окружения.

    Голый путь к сокету дополняется схемой unix://.
    """

    def clean(self, value: Any) -> str:
        if not isinstance(value, str):
            raise ValueError(f"expected string, got {type(value).__name__}")
        host = value.strip()
        if host.startswith("/"):
            host = f"unix://{host}"
        if host and not host.lower().startswith(DOCKER_HOST_SCHEMES):
            raise ValueError(f"unsupported scheme, expected one of {', '.join(DOCKER_HOST_SCHEMES)}")
        return host


class ApiVersionValidator(Validator):
    """Версия Docker API: "auto" (согласование с демоном) или вида 1.43."""

    def clean(self, value: Any) -> str:
        if not isinstance(value, str) or not API_VERSION_PATTERN.fullmatch(value):
            raise ValueError("expected 'auto' or a version like '1.43'")
        return value
