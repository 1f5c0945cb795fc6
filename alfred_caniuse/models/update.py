"""
Models for the persisted self-update check.
"""

from datetime import datetime, timezone

from pydantic import BaseModel, field_validator


class UpdateCheckRecord(BaseModel):
    """Outcome of the last remote update check."""

    # After a check, store the result
    update_needed: bool
    # Tool version that filled in update_needed
    checked_with: str
    # When the release probe last ran
    last_check: datetime

    @field_validator("last_check")
    @classmethod
    def ensure_utc(cls, v: datetime) -> datetime:
        """Reads naive timestamps as UTC so ages can always be computed."""
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v.astimezone(timezone.utc)


class UpdateNotification(BaseModel):
    """What the launcher shows when a newer release is available."""

    title: str = "A workflow update is available."
    subtitle: str = "Press enter to go to download page."
    url: str
