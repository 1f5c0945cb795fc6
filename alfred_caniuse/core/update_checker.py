"""
Self-update check.

The outcome of the last release probe is memoized in a small JSON record so
that the network is consulted at most once per interval, and never while a
previously detected update is still pending.
"""

import logging
from collections.abc import Awaitable, Callable
from datetime import datetime, timedelta, timezone
from enum import Enum

from alfred_caniuse.exceptions import CacheError, RemoteUnavailableError
from alfred_caniuse.models.update import UpdateCheckRecord, UpdateNotification
from alfred_caniuse.storage.cache import CacheSlot

log = logging.getLogger(__name__)

DEFAULT_CHECK_INTERVAL = timedelta(hours=24)


class NeedsCheck(Enum):
    """Whether the release probe should run this time."""

    YES = "yes"
    NO = "no"
    KNOWN_OUTDATED = "known_outdated"


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def decide(
    record: UpdateCheckRecord | None,
    running_version: str,
    now: datetime,
    interval: timedelta = DEFAULT_CHECK_INTERVAL,
) -> NeedsCheck:
    """Decides from the stored record whether the release probe is needed."""
    if record is None:
        return NeedsCheck.YES

    # Right after an upgrade the record describes another version
    if record.checked_with != running_version:
        return NeedsCheck.YES

    # Flag resets once the tool is upgraded
    if record.update_needed:
        return NeedsCheck.KNOWN_OUTDATED

    if now - record.last_check > interval:
        return NeedsCheck.YES
    return NeedsCheck.NO


def is_update_needed(latest_location: str, running_version: str) -> bool:
    """
    Judges a release location against the running version.

    For a download URL like `host/releases/download/v1.2.3/package.zip` it is
    enough that the running version appears somewhere in it. This tolerates
    `v` prefixes and build suffixes without parsing versions, at the price of
    accepting a spurious match in an unrelated path segment.
    """
    return running_version not in latest_location


class UpdateChecker:
    """Decides, probes and records whether a newer release exists."""

    def __init__(
        self,
        record_slot: CacheSlot[UpdateCheckRecord],
        probe: Callable[[], Awaitable[str]],
        running_version: str,
        download_url: str,
        interval: timedelta = DEFAULT_CHECK_INTERVAL,
        clock: Callable[[], datetime] = _utc_now,
    ):
        """
        Args:
            record_slot: Where the last check outcome is persisted.
            probe: Coroutine function returning the latest release location.
            running_version: Version of the running tool.
            download_url: Page the notification points the user to.
            interval: Minimum time between two probes.
            clock: Returns the current, timezone-aware time.
        """
        self.record_slot = record_slot
        self.probe = probe
        self.running_version = running_version
        self.download_url = download_url
        self.interval = interval
        self._clock = clock

    def needs_check(self) -> NeedsCheck:
        """
        Evaluates the stored record.

        An unreadable or undecodable record is removed and treated like a
        missing one, so it can never report an update on its own.
        """
        try:
            entry = self.record_slot.read()
        except (CacheError, OSError) as e:
            log.debug(f"Update check cache failed: {e}")
            log.debug(f"Deleting update check file from: {self.record_slot.path}")
            self.record_slot.purge()
            return NeedsCheck.YES

        record = entry.payload if entry else None
        return decide(record, self.running_version, self._clock(), self.interval)

    async def check_for_update(self) -> UpdateNotification | None:
        """Returns a notification if an update is available, None otherwise."""
        decision = self.needs_check()

        if decision is NeedsCheck.NO:
            log.debug("Skipping update check.")
            return None
        if decision is NeedsCheck.KNOWN_OUTDATED:
            return self._notification()

        log.debug("Update check will be performed.")
        try:
            latest_location = await self.probe()
        except RemoteUnavailableError as e:
            # No connection is a normal condition; try again next run
            log.debug(f"Error fetching update: {e}")
            return None

        update_needed = is_update_needed(latest_location, self.running_version)
        self._save_record(update_needed)

        if not update_needed:
            log.debug("No update available.")
            return None
        return self._notification()

    def _save_record(self, update_needed: bool) -> None:
        record = UpdateCheckRecord(
            update_needed=update_needed,
            checked_with=self.running_version,
            last_check=self._clock(),
        )
        try:
            self.record_slot.write(record)
        except (CacheError, OSError) as e:
            log.warning(f"Failed to save update check record: {e}")
            self.record_slot.purge()

    def _notification(self) -> UpdateNotification:
        return UpdateNotification(url=self.download_url)
