"""Абстракция клиента Docker-демона и её реализация поверх docker-py."""

from __future__ import annotations

import logging
import os
from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Any, Callable, Dict, Iterator, List, Optional

import docker
from docker.errors import DockerException
from requests.exceptions import RequestException, Timeout

from docksnap.docker_api.exceptions import (
    DaemonConnectionError,
    DeadlineExceededError,
    DockerAPIError,
)

LOGGER = logging.getLogger(__name__)

DEFAULT_DOCKER_HOST = "unix:///var/run/docker.sock"
DEFAULT_TIMEOUT = 60


class DaemonClient(ABC):
    """Набор удалённых операций, от которых зависит снимок демона.

    Реализации возвращают «сырые» JSON-структуры Docker API и бросают
    DockerAPIError, если демон отклонил запрос или недоступен, и
    DeadlineExceededError, если запрос прерван по истечении deadline().
    """

    @abstractmethod
    def deadline(self, timeout: Optional[float]) -> Any:
        """Контекстный менеджер: ограничивает время каждого запроса внутри блока.

        Запрос, не уложившийся в timeout, прерывается на уровне транспорта.
        None или 0 означает отсутствие ограничения.
        """

    @abstractmethod
    def list_containers(self, all: bool = True) -> List[Dict[str, Any]]:
        """Список контейнеров (all=True включает остановленные)."""

    @abstractmethod
    def list_images(self, all: bool = True) -> List[Dict[str, Any]]:
        """Список образов (all=True включает промежуточные слои)."""

    @abstractmethod
    def info(self) -> Dict[str, Any]:
        """Общая информация о демоне."""

    @abstractmethod
    def list_networks(self, filters: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
        """Список сетей."""

    @abstractmethod
    def list_volumes(self, filters: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
        """Список томов."""

    @abstractmethod
    def create_volume(
        self,
        name: Optional[str] = None,
        driver: Optional[str] = None,
        labels: Optional[Dict[str, str]] = None,
        driver_opts: Optional[Dict[str, str]] = None,
    ) -> Dict[str, Any]:
        """Создаёт том и возвращает его описание."""

    @abstractmethod
    def remove_volume(self, name: str, force: bool = False) -> None:
        """Удаляет том по имени."""


class DockerClientWrapper(DaemonClient):
    """Реализация DaemonClient через низкоуровневый APIClient docker-py."""

    def __init__(self, raw_client: Any) -> None:
        self._client = raw_client  # docker.DockerClient или совместимый объект

    def get_raw_client(self) -> Any:
        """Возвращает внутренний docker client."""

        return self._client

    @contextmanager
    def deadline(self, timeout: Optional[float]) -> Iterator[None]:
        # APIClient передаёт self.timeout в requests для каждого запроса
        if timeout is None or timeout <= 0:
            yield
            return
        api = self._client.api
        previous = api.timeout
        api.timeout = timeout
        try:
            yield
        finally:
            api.timeout = previous

    def list_containers(self, all: bool = True) -> List[Dict[str, Any]]:
        return self._invoke("list containers", self._client.api.containers, all=all)

    def list_images(self, all: bool = True) -> List[Dict[str, Any]]:
        return self._invoke("list images", self._client.api.images, all=all)

    def info(self) -> Dict[str, Any]:
        return self._invoke("get info", self._client.api.info)

    def list_networks(self, filters: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
        return self._invoke("list networks", self._client.api.networks, filters=filters or None)

    def list_volumes(self, filters: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
        body = self._invoke("list volumes", self._client.api.volumes, filters=filters or None)
        # Демон возвращает null вместо пустого списка
        return list((body or {}).get("Volumes") or [])

    def create_volume(
        self,
        name: Optional[str] = None,
        driver: Optional[str] = None,
        labels: Optional[Dict[str, str]] = None,
        driver_opts: Optional[Dict[str, str]] = None,
    ) -> Dict[str, Any]:
        return self._invoke(
            "create volume",
            self._client.api.create_volume,
            name=name,
            driver=driver,
            driver_opts=driver_opts or None,
            labels=labels or None,
        )

    def remove_volume(self, name: str, force: bool = False) -> None:
        self._invoke("remove volume", self._client.api.remove_volume, name, force=force)

    def _invoke(self, operation: str, func: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except Timeout as exc:
            raise DeadlineExceededError(operation, self._client.api.timeout) from exc
        except (DockerException, RequestException) as exc:
            raise DockerAPIError(str(exc), operation=operation) from exc


def connect(
    base_url: Optional[str] = None,
    *,
    timeout: int = DEFAULT_TIMEOUT,
    api_version: str = "auto",
) -> DockerClientWrapper:
    """Подключается к демону, согласует версию API и проверяет ответ на ping.

    Без base_url настройки берутся из окружения (DOCKER_HOST,
    DOCKER_TLS_VERIFY, DOCKER_CERT_PATH). Любая ошибка превращается в
    DaemonConnectionError с сообщением исходного исключения.
    """

    target = base_url or os.environ.get("DOCKER_HOST") or DEFAULT_DOCKER_HOST
    try:
        if base_url:
            raw_client = docker.DockerClient(base_url=base_url, version=api_version, timeout=timeout)
        else:
            raw_client = docker.from_env(version=api_version, timeout=timeout)
        raw_client.ping()
    except (DockerException, RequestException) as exc:
        raise DaemonConnectionError(target, str(exc)) from exc

    LOGGER.info("Connected to Docker daemon at %s", target)
    return DockerClientWrapper(raw_client)
