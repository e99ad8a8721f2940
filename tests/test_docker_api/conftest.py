"""Общие фикстуры: in-memory реализация DaemonClient."""

from __future__ import annotations

import uuid
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional

import pytest

from docksnap.docker_api.client import DaemonClient
from docksnap.docker_api.exceptions import DeadlineExceededError, DockerAPIError


class FakeDaemonClient(DaemonClient):
    """Демон в памяти со сценарием ответов и записью вызовов."""

    def __init__(self) -> None:
        self.containers: List[Dict[str, Any]] = [
            {"Id": "c1", "Names": ["/web"], "State": "running"},
            {"Id": "c2", "Names": ["/db"], "State": "exited"},
        ]
        self.images: List[Dict[str, Any]] = [
            {"Id": "sha256:aaa", "RepoTags": ["demo:latest"]},
            {"Id": "sha256:bbb", "RepoTags": None},
        ]
        self.daemon_info: Dict[str, Any] = {"ID": "daemon-1", "Driver": "overlay2"}
        self.networks: List[Dict[str, Any]] = [
            {"Id": "n1", "Name": "bridge", "Driver": "bridge"},
            {"Id": "n2", "Name": "host", "Driver": "host"},
        ]
        self.volumes: Dict[str, Dict[str, Any]] = {}
        self.in_use: set[str] = set()
        self.default_driver = "local"
        self.failures: Dict[str, str] = {}
        self.calls: List[tuple[str, Dict[str, Any]]] = []
        # Операции, на которые "демон" не отвечает: под deadline() они прерываются
        self.stalled: set[str] = set()
        self.timeout: Optional[float] = None

    # --------------------------------------------------------------- helpers
    def _record(self, operation: str, **kwargs: Any) -> None:
        self.calls.append((operation, kwargs))
        if operation in self.stalled and self.timeout:
            raise DeadlineExceededError(operation, self.timeout)
        if operation in self.failures:
            raise DockerAPIError(self.failures[operation], operation=operation)

    @contextmanager
    def deadline(self, timeout: Optional[float]) -> Iterator[None]:
        previous = self.timeout
        self.timeout = timeout or None
        try:
            yield
        finally:
            self.timeout = previous

    def called(self, operation: str) -> bool:
        return any(name == operation for name, _ in self.calls)

    def add_volume(self, name: str, **fields: Any) -> None:
        self.volumes[name] = {
            "Name": name,
            "Driver": fields.get("driver", self.default_driver),
            "Labels": fields.get("labels"),
            "Options": fields.get("options"),
            "Mountpoint": f"/var/lib/docker/volumes/{name}/_data",
            "Scope": "local",
        }

    # ----------------------------------------------------------- capability
    def list_containers(self, all: bool = True) -> List[Dict[str, Any]]:
        self._record("list_containers", all=all)
        return list(self.containers)

    def list_images(self, all: bool = True) -> List[Dict[str, Any]]:
        self._record("list_images", all=all)
        return list(self.images)

    def info(self) -> Dict[str, Any]:
        self._record("info")
        return dict(self.daemon_info)

    def list_networks(self, filters: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
        self._record("list_networks", filters=filters)
        return list(self.networks)

    def list_volumes(self, filters: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
        self._record("list_volumes", filters=filters)
        return [dict(item) for item in self.volumes.values()]

    def create_volume(
        self,
        name: Optional[str] = None,
        driver: Optional[str] = None,
        labels: Optional[Dict[str, str]] = None,
        driver_opts: Optional[Dict[str, str]] = None,
    ) -> Dict[str, Any]:
        self._record("create_volume", name=name, driver=driver, labels=labels, driver_opts=driver_opts)
        volume_name = name or uuid.uuid4().hex
        if volume_name in self.volumes:
            raise DockerAPIError(f"volume {volume_name} already exists", operation="create volume")
        self.add_volume(
            volume_name,
            driver=driver or self.default_driver,
            labels=dict(labels or {}),
            options=dict(driver_opts or {}),
        )
        return dict(self.volumes[volume_name])

    def remove_volume(self, name: str, force: bool = False) -> None:
        self._record("remove_volume", name=name, force=force)
        if name not in self.volumes:
            raise DockerAPIError(f"get {name}: no such volume", operation="remove volume")
        if name in self.in_use and not force:
            raise DockerAPIError(f"remove {name}: volume is in use", operation="remove volume")
        del self.volumes[name]


@pytest.fixture
def fake_client() -> FakeDaemonClient:
    return FakeDaemonClient()
