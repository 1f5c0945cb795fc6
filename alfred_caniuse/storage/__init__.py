"""
Storage Layer.

This package handles all data persistence: the configuration file and the
on-disk caches for the feature database and the update check record.
"""

from .cache import CachedArtifact, CacheSlot, CompressedJsonCodec, JsonCodec
from .config_manager import ConfigManager
from .disk_store import DiskStore

__all__ = [
    "CacheSlot",
    "CachedArtifact",
    "CompressedJsonCodec",
    "ConfigManager",
    "DiskStore",
    "JsonCodec",
]
