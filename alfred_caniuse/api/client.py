"""
HTTP client for the caniuse.rs feature database.
"""

import asyncio
import logging
import time

import aiohttp
from pydantic import ValidationError

from alfred_caniuse import __version__
from alfred_caniuse.exceptions import DatabaseFetchError
from alfred_caniuse.models.database import FeatureDatabase

log = logging.getLogger(__name__)

USER_AGENT = f"alfred-caniuse/{__version__}"


class CaniuseClient:
    """Downloads the published feature database."""

    def __init__(self, database_url: str, timeout: float = 30.0):
        """
        Args:
            database_url: Location of the features JSON document.
            timeout: Total seconds allowed for the request.
        """
        self.database_url = database_url
        self.timeout = timeout

    async def fetch_database(self) -> FeatureDatabase:
        """
        Fetches and validates the feature database.

        Raises:
            DatabaseFetchError: On network, HTTP status or decoding failures.
        """
        timeout = aiohttp.ClientTimeout(total=self.timeout)
        start_time = time.monotonic()
        try:
            async with (
                aiohttp.ClientSession(
                    timeout=timeout, headers={"User-Agent": USER_AGENT}
                ) as session,
                session.get(self.database_url) as response,
            ):
                response.raise_for_status()
                body = await response.read()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise DatabaseFetchError(
                f"Could not download feature database from {self.database_url}: {e}"
            ) from e

        duration_ms = (time.monotonic() - start_time) * 1000
        log.debug(
            f"Fetched feature database ({len(body)} bytes) in {duration_ms:.0f}ms."
        )

        try:
            return FeatureDatabase.model_validate_json(body)
        except ValidationError as e:
            raise DatabaseFetchError(f"Feature database is malformed: {e}") from e
