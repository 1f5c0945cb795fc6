"""Shared pytest fixtures for cache, update check and CLI tests."""

from __future__ import annotations

import copy
from datetime import datetime, timezone
from pathlib import Path

import pytest

from alfred_caniuse.models.database import FeatureDatabase
from alfred_caniuse.storage.disk_store import DiskStore

SAMPLE_DATABASE = {
    "versions": {
        "1.9.0": {"number": "1.9.0", "release_date": "2016-05-26"},
        "1.10.0": {"number": "1.10.0", "release_date": "2016-07-07"},
        "1.65.0": {
            "number": "1.65.0",
            "channel": "stable",
            "release_date": "2022-11-03",
            "blog_post_path": "2022/11/03/Rust-1.65.0.html",
            "gh_milestone_id": 90,
        },
        "1.66.0": {"number": "1.66.0", "channel": "beta"},
    },
    "features": {
        "let_else": {
            "title": "let-else statements",
            "flag": "let_else",
            "rfc_id": 3137,
            "tracking_issue_id": 87335,
            "version_number": "1.65.0",
        },
        "generic_associated_types": {
            "title": "generic associated types",
            "flag": "generic_associated_types",
            "version_number": "1.65.0",
        },
        "question_mark": {
            "title": "? operator",
            "items": ["?"],
            "version_number": "1.10.0",
        },
        "never_type": {"title": "never type", "flag": "never_type"},
        "from_the_future": {"title": "time travel", "version_number": "9.99.0"},
    },
}


class FakeClock:
    """Settable replacement for `time.time`."""

    def __init__(self, now: float = 0.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def database_payload() -> dict:
    """Return the raw JSON payload as published by caniuse.rs."""
    return copy.deepcopy(SAMPLE_DATABASE)


@pytest.fixture
def sample_db(database_payload: dict) -> FeatureDatabase:
    """Return a small feature database with stable, beta and unstable entries."""
    return FeatureDatabase.model_validate(database_payload)


@pytest.fixture
def store(tmp_path: Path) -> DiskStore:
    """Return a DiskStore rooted in a not-yet-existing cache directory."""
    return DiskStore(tmp_path / "cache")


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def now() -> datetime:
    return datetime(2026, 10, 18, 12, 0, tzinfo=timezone.utc)
