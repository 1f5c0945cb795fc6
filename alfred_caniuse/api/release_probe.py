"""
Resolves where the latest release download points to.

The releases page answers `/latest/download/<asset>` with a redirect to the
concrete, versioned asset. Only the redirect target is of interest, so the
redirect is never followed.
"""

import asyncio
import logging

import aiohttp

from alfred_caniuse.exceptions import RemoteUnavailableError

from .client import USER_AGENT

log = logging.getLogger(__name__)

LATEST_ASSET_PATH = "/latest/download/package.zip"


class ReleaseProbe:
    """Asks the release host for the location of the latest package."""

    def __init__(self, releases_url: str, timeout: float = 1.0):
        self.releases_url = releases_url.rstrip("/")
        self.timeout = timeout

    @property
    def probe_url(self) -> str:
        return self.releases_url + LATEST_ASSET_PATH

    async def latest_location(self) -> str:
        """
        Returns the Location header of the latest-release redirect.

        Raises:
            RemoteUnavailableError: On network errors, timeouts, HTTP errors,
            or a response without a Location header.
        """
        timeout = aiohttp.ClientTimeout(total=self.timeout)
        try:
            async with (
                aiohttp.ClientSession(
                    timeout=timeout, headers={"User-Agent": USER_AGENT}
                ) as session,
                session.get(self.probe_url, allow_redirects=False) as response,
            ):
                response.raise_for_status()
                location = response.headers.get("Location")
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise RemoteUnavailableError(f"Release probe failed: {e}") from e

        if not location:
            raise RemoteUnavailableError(
                f"No location header in update check response from {self.probe_url}"
            )

        log.debug(f"Latest release resolves to {location}")
        return location
