"""Снимок состояния Docker-демона.

Класс `DaemonSnapshot` хранит пять категорий ресурсов (контейнеры, образы,
информацию о демоне, сети и тома). Каждая категория обновляется отдельно и
целиком заменяется результатом последнего успешного запроса; при ошибке
прежнее значение сохраняется. Согласованность между категориями не
гарантируется: они могут быть получены в разное время.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Mapping, Optional, TypeVar

from docksnap.docker_api import volumes as volume_ops
from docksnap.docker_api.client import DaemonClient
from docksnap.docker_api.exceptions import DockerAPIError, RefreshError
from docksnap.docker_api.models import REFRESH_ORDER, ResourceCategory, Volume

LOGGER = logging.getLogger(__name__)

T = TypeVar("T")


class DaemonSnapshot:
    """Локальная копия состояния демона с пообъектным обновлением."""

    def __init__(self, client: DaemonClient) -> None:
        self.client = client
        self.containers: List[Dict[str, Any]] = []
        self.images: List[Dict[str, Any]] = []
        self.info: Dict[str, Any] = {}
        self.networks: List[Dict[str, Any]] = []
        self.volumes: List[Volume] = []

    @classmethod
    def initialize(cls, client: DaemonClient, *, timeout: Optional[float] = None) -> "DaemonSnapshot":
        """Создаёт снимок и последовательно заполняет все категории.

        Первая же ошибка прерывает инициализацию, частично заполненный
        снимок при этом не возвращается.
        """

        snapshot = cls(client)
        for category in REFRESH_ORDER:
            snapshot.refresh(category, timeout=timeout)
        LOGGER.info(
            "Snapshot initialized: %d containers, %d images, %d networks, %d volumes",
            len(snapshot.containers),
            len(snapshot.images),
            len(snapshot.networks),
            len(snapshot.volumes),
        )
        return snapshot

    # ----------------------------------------------------------------- refresh
    def refresh(self, category: ResourceCategory | str, *, timeout: Optional[float] = None) -> None:
        """Обновляет одну категорию по её имени."""

        try:
            resolved = ResourceCategory(category)
        except ValueError:
            raise ValueError(f"Unknown resource category: {category!r}") from None
        handlers: Mapping[ResourceCategory, Callable[..., None]] = {
            ResourceCategory.CONTAINERS: self.refresh_containers,
            ResourceCategory.IMAGES: self.refresh_images,
            ResourceCategory.INFO: self.refresh_info,
            ResourceCategory.NETWORKS: self.refresh_networks,
            ResourceCategory.VOLUMES: self.refresh_volumes,
        }
        handlers[resolved](timeout=timeout)

    def refresh_containers(self, *, timeout: Optional[float] = None) -> None:
        """Загружает все контейнеры, включая остановленные."""

        self.containers = self._fetch(
            ResourceCategory.CONTAINERS,
            lambda: self.client.list_containers(all=True),
            timeout,
        )
        LOGGER.debug("Refreshed containers: %d", len(self.containers))

    def refresh_images(self, *, timeout: Optional[float] = None) -> None:
        """Загружает все образы, включая промежуточные."""

        self.images = self._fetch(
            ResourceCategory.IMAGES,
            lambda: self.client.list_images(all=True),
            timeout,
        )
        LOGGER.debug("Refreshed images: %d", len(self.images))

    def refresh_info(self, *, timeout: Optional[float] = None) -> None:
        self.info = self._fetch(ResourceCategory.INFO, self.client.info, timeout)
        LOGGER.debug("Refreshed daemon info")

    def refresh_networks(self, *, timeout: Optional[float] = None) -> None:
        self.networks = self._fetch(
            ResourceCategory.NETWORKS,
            lambda: self.client.list_networks(),
            timeout,
        )
        LOGGER.debug("Refreshed networks: %d", len(self.networks))

    def refresh_volumes(self, *, timeout: Optional[float] = None) -> None:
        """Загружает все тома (пустой фильтр)."""

        raw_volumes = self._fetch(
            ResourceCategory.VOLUMES,
            lambda: self.client.list_volumes(filters={}),
            timeout,
        )
        try:
            volumes = [Volume.from_api(item) for item in raw_volumes]
        except (KeyError, TypeError, AttributeError) as exc:
            raise RefreshError("volumes", f"malformed volume entry: {exc!r}") from exc
        self.volumes = volumes
        LOGGER.debug("Refreshed volumes: %d", len(self.volumes))

    # ----------------------------------------------------------------- volumes
    def create_volume(self, options: Mapping[str, str], *, timeout: Optional[float] = None) -> str:
        """Создаёт том; увидеть его в снимке можно после refresh_volumes."""

        return volume_ops.create_volume(self.client, options, timeout=timeout)

    def remove_volume(
        self, name: str, *, force: bool = False, timeout: Optional[float] = None
    ) -> None:
        """Удаляет том; снимок не меняется до refresh_volumes."""

        volume_ops.remove_volume(self.client, name, force=force, timeout=timeout)

    def find_volume_by_name(self, name: str) -> Volume:
        """Ищет том только среди закэшированных."""

        return volume_ops.find_volume_by_name(self.volumes, name)

    def volume_names(self) -> List[str]:
        return [volume.name for volume in self.volumes]

    # ----------------------------------------------------------------- helpers
    def _fetch(self, category: ResourceCategory, loader: Callable[[], T], timeout: Optional[float]) -> T:
        try:
            with self.client.deadline(timeout):
                return loader()
        except DockerAPIError as exc:
            raise RefreshError(category.value, exc.reason) from exc
