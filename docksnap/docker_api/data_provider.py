"""Сборка снимка демона по настройкам приложения.

Связывает `SettingsRegistry` с функцией `connect` и `DaemonSnapshot`:
подключение выполняется отдельным шагом, затем готовый клиент передаётся
в инициализацию снимка.
"""

from __future__ import annotations

import logging
from typing import Optional

from docksnap.docker_api.client import DaemonClient, DockerClientWrapper, connect
from docksnap.docker_api.snapshot import DaemonSnapshot
from docksnap.settings.registry import SettingsRegistry

LOGGER = logging.getLogger(__name__)


class DockerDataProvider:
    """Создаёт клиент и снимок демона с учётом настроек группы daemon."""

    def __init__(self, settings: SettingsRegistry) -> None:
        self._settings = settings

    @property
    def request_timeout(self) -> Optional[float]:
        """Ограничение на один удалённый вызов или None."""

        value = int(self._settings.get_value("daemon", "request_timeout_sec", default=0))
        return float(value) if value > 0 else None

    def connect(self) -> DockerClientWrapper:
        """Подключается к демону; ошибка подключения не перехватывается."""

        docker_host = self._settings.get_value("daemon", "docker_host") or None
        return connect(
            docker_host,
            timeout=int(self._settings.get_value("daemon", "timeout_sec")),
            api_version=self._settings.get_value("daemon", "api_version"),
        )

    def open_snapshot(self, client: Optional[DaemonClient] = None) -> DaemonSnapshot:
        """Возвращает полностью заполненный снимок."""

        daemon_client = client if client is not None else self.connect()
        LOGGER.debug("Initializing snapshot (request timeout: %s)", self.request_timeout)
        return DaemonSnapshot.initialize(daemon_client, timeout=self.request_timeout)
