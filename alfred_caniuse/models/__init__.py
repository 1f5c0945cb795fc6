"""
Data Models Layer.

This package contains Pydantic models that define the core data structures
used throughout the application: configuration, the feature database and
the update check record.
"""

from .config import AppConfig
from .database import FeatureDatabase, FeatureData, VersionData
from .update import UpdateCheckRecord, UpdateNotification

__all__ = [
    "AppConfig",
    "FeatureData",
    "FeatureDatabase",
    "UpdateCheckRecord",
    "UpdateNotification",
    "VersionData",
]
