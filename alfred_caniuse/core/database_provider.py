"""
Decides whether the feature database is reused from cache or fetched.
"""

import logging

from alfred_caniuse.api.client import CaniuseClient
from alfred_caniuse.models.database import FeatureDatabase
from alfred_caniuse.storage.cache import CachedArtifact

log = logging.getLogger(__name__)


class DatabaseProvider:
    """Serves the feature database, fetching it only on a cache miss."""

    def __init__(self, cache: CachedArtifact[FeatureDatabase], client: CaniuseClient):
        self.cache = cache
        self.client = client

    async def get_database(self) -> FeatureDatabase:
        """
        Raises:
            DatabaseFetchError: If nothing usable is cached and the fetch fails.
        """
        if (db := self.cache.load()) is not None:
            log.debug("Using cached feature database.")
            return db

        db = await self.client.fetch_database()
        self.cache.store(db)
        return db
