"""Тесты снимка состояния демона."""

from __future__ import annotations

import logging

import pytest

from docksnap.docker_api.exceptions import DeadlineExceededError, RefreshError, VolumeNotFoundError
from docksnap.docker_api.models import REFRESH_ORDER, ResourceCategory, Volume
from docksnap.docker_api.snapshot import DaemonSnapshot


def test_new_snapshot_is_empty(fake_client) -> None:
    snapshot = DaemonSnapshot(fake_client)
    assert snapshot.containers == []
    assert snapshot.images == []
    assert snapshot.info == {}
    assert snapshot.networks == []
    assert snapshot.volumes == []
    assert fake_client.calls == []


def test_refresh_stores_exactly_what_daemon_returned(fake_client) -> None:
    fake_client.add_volume("data", labels={"env": "dev"})
    snapshot = DaemonSnapshot(fake_client)

    snapshot.refresh_containers()
    snapshot.refresh_images()
    snapshot.refresh_info()
    snapshot.refresh_networks()
    snapshot.refresh_volumes()

    assert snapshot.containers == fake_client.containers
    assert snapshot.images == fake_client.images
    assert snapshot.info == fake_client.daemon_info
    assert snapshot.networks == fake_client.networks
    assert snapshot.volumes == [Volume.from_api(fake_client.volumes["data"])]


def test_refresh_requests_everything(fake_client) -> None:
    snapshot = DaemonSnapshot(fake_client)
    snapshot.refresh_containers()
    snapshot.refresh_images()
    snapshot.refresh_volumes()
    assert ("list_containers", {"all": True}) in fake_client.calls
    assert ("list_images", {"all": True}) in fake_client.calls
    assert ("list_volumes", {"filters": {}}) in fake_client.calls


def test_refresh_replaces_instead_of_merging(fake_client) -> None:
    snapshot = DaemonSnapshot(fake_client)
    snapshot.refresh_containers()
    fake_client.containers = [{"Id": "c3", "Names": ["/cache"], "State": "running"}]

    snapshot.refresh_containers()

    assert snapshot.containers == [{"Id": "c3", "Names": ["/cache"], "State": "running"}]


@pytest.mark.parametrize(
    ("category", "operation", "attribute"),
    [
        (ResourceCategory.CONTAINERS, "list_containers", "containers"),
        (ResourceCategory.IMAGES, "list_images", "images"),
        (ResourceCategory.INFO, "info", "info"),
        (ResourceCategory.NETWORKS, "list_networks", "networks"),
        (ResourceCategory.VOLUMES, "list_volumes", "volumes"),
    ],
)
def test_failed_refresh_keeps_previous_value(fake_client, category, operation, attribute) -> None:
    fake_client.add_volume("keep")
    snapshot = DaemonSnapshot(fake_client)
    snapshot.refresh(category)
    before = getattr(snapshot, attribute)

    fake_client.failures[operation] = "daemon unavailable"
    with pytest.raises(RefreshError) as excinfo:
        snapshot.refresh(category)

    assert excinfo.value.category == category.value
    assert "daemon unavailable" in str(excinfo.value)
    assert getattr(snapshot, attribute) is before


def test_failed_refresh_does_not_touch_other_categories(fake_client) -> None:
    snapshot = DaemonSnapshot(fake_client)
    snapshot.refresh_containers()
    fake_client.failures["list_images"] = "boom"

    with pytest.raises(RefreshError):
        snapshot.refresh_images()

    assert snapshot.containers == fake_client.containers


def test_refresh_accepts_category_name(fake_client) -> None:
    snapshot = DaemonSnapshot(fake_client)
    snapshot.refresh("networks")
    assert snapshot.networks == fake_client.networks


def test_refresh_unknown_category(fake_client) -> None:
    snapshot = DaemonSnapshot(fake_client)
    with pytest.raises(ValueError):
        snapshot.refresh("plugins")


def test_malformed_volume_listing_is_refresh_error(fake_client) -> None:
    snapshot = DaemonSnapshot(fake_client)
    fake_client.volumes["broken"] = {"Driver": "local"}

    with pytest.raises(RefreshError) as excinfo:
        snapshot.refresh_volumes()

    assert excinfo.value.category == "volumes"
    assert snapshot.volumes == []


def test_initialize_populates_all_categories_in_order(fake_client) -> None:
    fake_client.add_volume("data")

    snapshot = DaemonSnapshot.initialize(fake_client)

    order = [name for name, _ in fake_client.calls]
    assert order == ["list_containers", "list_images", "info", "list_networks", "list_volumes"]
    assert [category.value for category in REFRESH_ORDER] == [
        "containers",
        "images",
        "info",
        "networks",
        "volumes",
    ]
    assert snapshot.containers == fake_client.containers
    assert snapshot.info == fake_client.daemon_info
    assert snapshot.volume_names() == ["data"]


def test_initialize_fails_fast_on_first_error(fake_client) -> None:
    fake_client.failures["info"] = "info endpoint failed"
    fake_client.failures["list_volumes"] = "never reached"

    with pytest.raises(RefreshError) as excinfo:
        DaemonSnapshot.initialize(fake_client)

    assert excinfo.value.category == "info"
    assert not fake_client.called("list_networks")
    assert not fake_client.called("list_volumes")


def test_deadline_leaves_cache_unchanged(fake_client) -> None:
    snapshot = DaemonSnapshot(fake_client)
    snapshot.refresh_containers()
    before = snapshot.containers

    fake_client.stalled.add("list_containers")
    with pytest.raises(DeadlineExceededError) as excinfo:
        snapshot.refresh_containers(timeout=0.05)

    assert excinfo.value.operation == "list_containers"
    assert excinfo.value.timeout == 0.05
    assert snapshot.containers is before


def test_find_volume_before_refresh_is_not_found(fake_client) -> None:
    fake_client.add_volume("data")
    snapshot = DaemonSnapshot(fake_client)
    with pytest.raises(VolumeNotFoundError):
        snapshot.find_volume_by_name("data")
    assert fake_client.calls == []


def test_deadline_is_released_after_refresh(fake_client) -> None:
    snapshot = DaemonSnapshot(fake_client)
    fake_client.stalled.add("list_images")

    snapshot.refresh_images()

    assert fake_client.timeout is None
    assert snapshot.images == fake_client.images


def test_failed_refresh_logs_single_error(fake_client, caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.DEBUG)
    snapshot = DaemonSnapshot(fake_client)
    fake_client.failures["list_networks"] = "socket closed"

    with pytest.raises(RefreshError):
        snapshot.refresh_networks()

    errors = [record for record in caplog.records if record.levelno >= logging.ERROR]
    assert len(errors) == 1
    assert "Failed to refresh networks" in errors[0].getMessage()


def test_adapter_bug_is_not_reported_as_refresh_error(fake_client, monkeypatch: pytest.MonkeyPatch) -> None:
    def broken_listing(all: bool = True):
        raise TypeError("unexpected keyword")

    monkeypatch.setattr(fake_client, "list_containers", broken_listing)
    snapshot = DaemonSnapshot(fake_client)

    with pytest.raises(TypeError, match="unexpected keyword"):
        snapshot.refresh_containers()
    assert snapshot.containers == []


def test_non_mapping_volume_entry_is_refresh_error(fake_client, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(fake_client, "list_volumes", lambda filters=None: ["not-a-volume"])
    snapshot = DaemonSnapshot(fake_client)

    with pytest.raises(RefreshError) as excinfo:
        snapshot.refresh_volumes()

    assert excinfo.value.category == "volumes"
    assert "malformed volume entry" in excinfo.value.reason
