"""Функции для работы с томами Docker."""

from __future__ import annotations

import logging
from typing import Dict, Mapping, Optional, Sequence

from docksnap.docker_api.client import DaemonClient
from docksnap.docker_api.exceptions import (
    DockerAPIError,
    OptionParseError,
    VolumeCreateError,
    VolumeNotFoundError,
    VolumeRemoveError,
)
from docksnap.docker_api.models import Volume, VolumeCreateRequest

LOGGER = logging.getLogger(__name__)

PAIR_SEPARATOR = ","


def parse_key_value_list(raw: str, *, option_key: str) -> Dict[str, str]:
    """Разбирает строку вида "a=1,b=2" в словарь.

    Пустые элементы пропускаются, пробелы вокруг ключа и значения
    отбрасываются. При повторе ключа побеждает последнее значение; значение
    может содержать "=".
    """

    result: Dict[str, str] = {}
    for chunk in raw.split(PAIR_SEPARATOR):
        pair = chunk.strip()
        if not pair:
            continue
        key, sep, value = pair.partition("=")
        key = key.strip()
        value = value.strip()
        if not sep:
            raise OptionParseError(option_key, raw, f"pair {pair!r} has no '='")
        if not key:
            raise OptionParseError(option_key, raw, f"pair {pair!r} has an empty key")
        result[key] = value
    return result


def build_create_request(options: Mapping[str, str]) -> VolumeCreateRequest:
    """Собирает запрос на создание тома из произвольного набора опций.

    Учитываются ключи name, driver, labels и options, остальные игнорируются.
    """

    return VolumeCreateRequest(
        name=options.get("name") or None,
        driver=options.get("driver") or None,
        labels=parse_key_value_list(options.get("labels", ""), option_key="labels"),
        driver_opts=parse_key_value_list(options.get("options", ""), option_key="options"),
    )


def create_volume(
    client: DaemonClient,
    options: Mapping[str, str],
    *,
    timeout: Optional[float] = None,
) -> str:
    """Создаёт том и возвращает его имя. Снимок при этом не обновляется."""

    request = build_create_request(options)

    try:
        with client.deadline(timeout):
            created = client.create_volume(
                name=request.name,
                driver=request.driver,
                labels=request.labels,
                driver_opts=request.driver_opts,
            )
    except DockerAPIError as exc:
        raise VolumeCreateError(request.name, exc.reason) from exc

    name = str(created.get("Name") or request.name or "")
    LOGGER.info("Created volume %s", name)
    return name


def remove_volume(
    client: DaemonClient,
    name: str,
    *,
    force: bool = False,
    timeout: Optional[float] = None,
) -> None:
    """Удаляет том. Снимок при этом не обновляется."""

    try:
        with client.deadline(timeout):
            client.remove_volume(name, force=force)
    except DockerAPIError as exc:
        raise VolumeRemoveError(name, exc.reason) from exc
    LOGGER.info("Removed volume %s", name)


def find_volume_by_name(volumes: Sequence[Volume], name: str) -> Volume:
    """Ищет том в закэшированном списке, не обращаясь к демону."""

    for volume in volumes:
        if volume.name == name:
            return volume
    raise VolumeNotFoundError(name)
