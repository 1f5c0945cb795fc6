"""
Wires configuration into the caches, remote clients and services.
"""

from dataclasses import dataclass
from datetime import timedelta

from alfred_caniuse import __version__
from alfred_caniuse.api.client import CaniuseClient
from alfred_caniuse.api.release_probe import ReleaseProbe
from alfred_caniuse.models.config import AppConfig
from alfred_caniuse.models.database import FeatureDatabase
from alfred_caniuse.models.update import UpdateCheckRecord
from alfred_caniuse.storage.cache import (
    CachedArtifact,
    CacheSlot,
    CompressedJsonCodec,
    JsonCodec,
)
from alfred_caniuse.storage.disk_store import DiskStore

from .database_provider import DatabaseProvider
from .update_checker import UpdateChecker

DATABASE_CACHE_FILENAME = "caniuse.json.gz"
UPDATE_CHECK_FILENAME = "update-check.json"


@dataclass
class AppContext:
    """Everything one invocation needs, built from a validated AppConfig."""

    config: AppConfig
    database_cache: CachedArtifact[FeatureDatabase]
    update_record: CacheSlot[UpdateCheckRecord]
    database_provider: DatabaseProvider
    # None when no release location is configured
    update_checker: UpdateChecker | None

    @classmethod
    def from_config(
        cls, config: AppConfig, running_version: str = __version__
    ) -> "AppContext":
        store = DiskStore(config.cache_dir)
        database_cache = CachedArtifact(
            store,
            DATABASE_CACHE_FILENAME,
            CompressedJsonCodec(FeatureDatabase),
            max_age=config.cache_ttl_hours * 3600,
        )
        update_record = CacheSlot(
            store, UPDATE_CHECK_FILENAME, JsonCodec(UpdateCheckRecord)
        )
        client = CaniuseClient(config.database_url, timeout=config.fetch_timeout)

        update_checker = None
        if config.releases_url:
            probe = ReleaseProbe(
                config.releases_url, timeout=config.update_probe_timeout
            )
            update_checker = UpdateChecker(
                update_record,
                probe.latest_location,
                running_version=running_version,
                download_url=config.releases_url,
                interval=timedelta(hours=config.update_check_interval_hours),
            )
        return cls(
            config=config,
            database_cache=database_cache,
            update_record=update_record,
            database_provider=DatabaseProvider(database_cache, client),
            update_checker=update_checker,
        )

    def clear_caches(self) -> bool:
        """Removes both cache files. Returns False if any removal failed."""
        removed_db = self.database_cache.clear()
        removed_record = self.update_record.purge()
        return removed_db and removed_record
