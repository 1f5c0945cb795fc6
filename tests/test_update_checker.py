"""Tests for the self-update decision and the record-backed update checker."""

from __future__ import annotations

import asyncio
import json
from datetime import datetime, timedelta

import pytest

from alfred_caniuse.core.update_checker import (
    NeedsCheck,
    UpdateChecker,
    decide,
    is_update_needed,
)
from alfred_caniuse.exceptions import RemoteUnavailableError
from alfred_caniuse.models.update import UpdateCheckRecord
from alfred_caniuse.storage.cache import CacheSlot, JsonCodec
from alfred_caniuse.storage.disk_store import DiskStore

VERSION = "0.3.0"
RELEASES = "https://github.com/alfred-caniuse/alfred-caniuse/releases"
CURRENT_LOCATION = f"{RELEASES}/download/v{VERSION}/package.zip"
NEWER_LOCATION = f"{RELEASES}/download/v0.4.0/package.zip"


class FakeProbe:
    """Stands in for ReleaseProbe.latest_location and counts calls."""

    def __init__(self, location: str | None = None, error: Exception | None = None) -> None:
        self.location = location
        self.error = error
        self.calls = 0

    async def __call__(self) -> str:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.location


def _record(now: datetime, **overrides) -> UpdateCheckRecord:
    fields = {"update_needed": False, "checked_with": VERSION, "last_check": now}
    fields.update(overrides)
    return UpdateCheckRecord(**fields)


def _slot(store: DiskStore) -> CacheSlot[UpdateCheckRecord]:
    return CacheSlot(store, "update-check.json", JsonCodec(UpdateCheckRecord))


def _checker(store: DiskStore, probe: FakeProbe, now: datetime) -> UpdateChecker:
    return UpdateChecker(
        _slot(store),
        probe,
        running_version=VERSION,
        download_url=RELEASES,
        clock=lambda: now,
    )


def test_recent_check_needs_no_probe(now: datetime) -> None:
    record = _record(now, last_check=now - timedelta(hours=23))

    assert decide(record, VERSION, now) is NeedsCheck.NO


def test_day_old_check_needs_probe(now: datetime) -> None:
    record = _record(now, last_check=now - timedelta(hours=25))

    assert decide(record, VERSION, now) is NeedsCheck.YES


@pytest.mark.parametrize("age", [timedelta(0), timedelta(hours=25), timedelta(days=400)])
def test_known_outdated_regardless_of_age(now: datetime, age: timedelta) -> None:
    record = _record(now, update_needed=True, last_check=now - age)

    assert decide(record, VERSION, now) is NeedsCheck.KNOWN_OUTDATED


@pytest.mark.parametrize("update_needed", [True, False])
def test_version_mismatch_always_needs_probe(now: datetime, update_needed: bool) -> None:
    record = _record(now, checked_with="0.2.9", update_needed=update_needed)

    assert decide(record, VERSION, now) is NeedsCheck.YES


def test_missing_record_needs_probe(now: datetime) -> None:
    assert decide(None, VERSION, now) is NeedsCheck.YES


def test_custom_interval_is_honoured(now: datetime) -> None:
    record = _record(now, last_check=now - timedelta(hours=2))

    assert decide(record, VERSION, now, interval=timedelta(hours=1)) is NeedsCheck.YES


def test_location_containing_version_is_up_to_date() -> None:
    assert is_update_needed(CURRENT_LOCATION, VERSION) is False
    assert is_update_needed("https://example.com/app-0.3.0+build.7.zip", VERSION) is False


def test_location_without_version_needs_update() -> None:
    assert is_update_needed(NEWER_LOCATION, VERSION) is True


def test_first_run_probes_and_persists_record(store: DiskStore, now: datetime) -> None:
    probe = FakeProbe(CURRENT_LOCATION)

    notification = asyncio.run(_checker(store, probe, now).check_for_update())

    assert notification is None
    assert probe.calls == 1
    saved = _slot(store).read().payload
    assert saved == _record(now)


def test_newer_release_is_reported_and_remembered(store: DiskStore, now: datetime) -> None:
    probe = FakeProbe(NEWER_LOCATION)
    checker = _checker(store, probe, now)

    first = asyncio.run(checker.check_for_update())
    second = asyncio.run(checker.check_for_update())

    assert first is not None
    assert first.url == RELEASES
    assert second == first
    assert probe.calls == 1
    assert _slot(store).read().payload.update_needed is True


def test_recent_record_skips_probe(store: DiskStore, now: datetime) -> None:
    _slot(store).write(_record(now, last_check=now - timedelta(hours=1)))
    probe = FakeProbe(error=AssertionError("probe must not run"))

    assert asyncio.run(_checker(store, probe, now).check_for_update()) is None
    assert probe.calls == 0


def test_stale_record_is_rewritten(store: DiskStore, now: datetime) -> None:
    _slot(store).write(_record(now, last_check=now - timedelta(days=3)))
    probe = FakeProbe(CURRENT_LOCATION)

    asyncio.run(_checker(store, probe, now).check_for_update())

    assert probe.calls == 1
    assert _slot(store).read().payload.last_check == now


def test_corrupt_record_is_purged_and_probe_runs(store: DiskStore, now: datetime) -> None:
    store.replace("update-check.json", b"\x00\x01 not json at all")
    probe = FakeProbe(CURRENT_LOCATION)

    notification = asyncio.run(_checker(store, probe, now).check_for_update())

    assert notification is None
    assert probe.calls == 1
    assert _slot(store).read().payload == _record(now)


def test_partial_record_never_reports_outdated(store: DiskStore, now: datetime) -> None:
    store.replace("update-check.json", json.dumps({"update_needed": True}).encode())
    probe = FakeProbe(CURRENT_LOCATION)

    assert asyncio.run(_checker(store, probe, now).check_for_update()) is None
    assert probe.calls == 1


def test_unavailable_remote_skips_persistence(store: DiskStore, now: datetime) -> None:
    probe = FakeProbe(error=RemoteUnavailableError("network unreachable"))

    assert asyncio.run(_checker(store, probe, now).check_for_update()) is None
    assert not store.path("update-check.json").exists()


def test_failed_record_write_is_swallowed(
    store: DiskStore, now: datetime, monkeypatch: pytest.MonkeyPatch
) -> None:
    def _read_only(name: str, data: bytes) -> None:
        raise PermissionError("read-only file system")

    monkeypatch.setattr(store, "replace", _read_only)
    probe = FakeProbe(NEWER_LOCATION)

    notification = asyncio.run(_checker(store, probe, now).check_for_update())

    assert notification is not None
    assert not store.path("update-check.json").exists()


def test_record_file_is_human_readable(store: DiskStore, now: datetime) -> None:
    _slot(store).write(_record(now))

    data = json.loads(store.path("update-check.json").read_text(encoding="utf-8"))

    assert data["checked_with"] == VERSION
    assert data["update_needed"] is False
    assert datetime.fromisoformat(data["last_check"].replace("Z", "+00:00")) == now


def test_naive_timestamp_is_read_as_utc(now: datetime) -> None:
    record = UpdateCheckRecord.model_validate_json(
        '{"update_needed": false, "checked_with": "0.3.0", '
        '"last_check": "2026-10-18T12:00:00.000001"}'
    )

    assert record.last_check.tzinfo is not None
    assert record.last_check - now == timedelta(microseconds=1)
