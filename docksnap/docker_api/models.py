"""Структуры данных снимка демона и запросов на создание томов."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Tuple


class ResourceCategory(str, Enum):
    """Категории ресурсов, которые хранит снимок."""

    CONTAINERS = "containers"
    IMAGES = "images"
    INFO = "info"
    NETWORKS = "networks"
    VOLUMES = "volumes"


# Порядок обновления при инициализации снимка
REFRESH_ORDER: Tuple[ResourceCategory, ...] = (
    ResourceCategory.CONTAINERS,
    ResourceCategory.IMAGES,
    ResourceCategory.INFO,
    ResourceCategory.NETWORKS,
    ResourceCategory.VOLUMES,
)


@dataclass(frozen=True, slots=True)
class Volume:
    """Том Docker в том виде, в каком его вернул демон."""

    name: str
    driver: str
    labels: Dict[str, str] = field(default_factory=dict)
    options: Dict[str, str] = field(default_factory=dict)
    mountpoint: str = ""
    scope: str = ""
    created_at: Optional[str] = None

    @classmethod
    def from_api(cls, data: Mapping[str, Any]) -> "Volume":
        """Строит модель из JSON-ответа Docker API (Labels/Options могут быть null)."""

        return cls(
            name=data["Name"],
            driver=data.get("Driver") or "",
            labels=dict(data.get("Labels") or {}),
            options=dict(data.get("Options") or {}),
            mountpoint=data.get("Mountpoint") or "",
            scope=data.get("Scope") or "",
            created_at=data.get("CreatedAt"),
        )


@dataclass(slots=True)
class VolumeCreateRequest:
    """Параметры одного запроса на создание тома."""

    name: Optional[str] = None  # None: имя назначит демон
    driver: Optional[str] = None  # None: драйвер демона по умолчанию
    labels: Dict[str, str] = field(default_factory=dict)
    driver_opts: Dict[str, str] = field(default_factory=dict)
