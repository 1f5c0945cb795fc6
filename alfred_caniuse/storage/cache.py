"""
File-backed caches built on DiskStore.

A CacheSlot owns one named file and a codec. CachedArtifact adds a
time-to-live measured from the file's creation time, and turns every read or
write failure into a cache miss plus a cleanup of the file.
"""

import gzip
import logging
import time
import zlib
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Generic, Protocol, TypeVar

from pydantic import BaseModel, ValidationError

from alfred_caniuse.exceptions import CacheError, CorruptCacheError, StaleCacheError

from .disk_store import DiskStore, StoredBlob

log = logging.getLogger(__name__)

T = TypeVar("T")
ModelT = TypeVar("ModelT", bound=BaseModel)


class Codec(Protocol[T]):
    """Converts a value to and from its on-disk bytes."""

    def encode(self, value: T) -> bytes: ...

    def decode(self, data: bytes) -> T: ...


class JsonCodec(Generic[ModelT]):
    """Pretty, human-inspectable JSON for a pydantic model."""

    def __init__(self, model: type[ModelT]):
        self.model = model

    def encode(self, value: ModelT) -> bytes:
        try:
            return value.model_dump_json(indent=2).encode("utf-8")
        except ValueError as e:
            raise CorruptCacheError(f"failed to encode {self.model.__name__}: {e}") from e

    def decode(self, data: bytes) -> ModelT:
        try:
            return self.model.model_validate_json(data)
        except ValidationError as e:
            raise CorruptCacheError(f"failed to decode {self.model.__name__}: {e}") from e


class CompressedJsonCodec(JsonCodec[ModelT]):
    """JsonCodec wrapped in gzip."""

    def encode(self, value: ModelT) -> bytes:
        return gzip.compress(super().encode(value))

    def decode(self, data: bytes) -> ModelT:
        try:
            raw = gzip.decompress(data)
        except (OSError, EOFError, zlib.error) as e:
            raise CorruptCacheError(f"failed to decompress cache file: {e}") from e
        return super().decode(raw)


@dataclass(frozen=True)
class CacheEntry(Generic[T]):
    """A decoded value together with the creation time of its backing file."""

    payload: T
    created_at: float


class CacheSlot(Generic[T]):
    """One named file in a DiskStore holding a codec-encoded value."""

    def __init__(self, disk: DiskStore, name: str, codec: Codec[T]):
        self.disk = disk
        self.name = name
        self.codec = codec

    @property
    def path(self) -> Path:
        return self.disk.path(self.name)

    def read(self) -> CacheEntry[T] | None:
        """
        Returns the stored entry, or None if nothing is stored.

        Raises:
            CacheError: If the stored bytes cannot be decoded.
            OSError: If the file exists but cannot be read.
        """
        blob = self.disk.read(self.name)
        if blob is None:
            return None
        self._validate(blob)
        return CacheEntry(self.codec.decode(blob.data), blob.created_at)

    def write(self, value: T) -> None:
        self.disk.replace(self.name, self.codec.encode(value))

    def purge(self) -> bool:
        return self.disk.purge(self.name)

    def _validate(self, blob: StoredBlob) -> None:
        """Checks a stored blob before it is decoded; raises CacheError to reject it."""


class CachedArtifact(CacheSlot[T]):
    """
    A single cached value that is trusted for at most `max_age` seconds.

    Neither `load` nor `store` ever raises. Any anomaly (unreadable file,
    stale entry, undecodable bytes, failed write) is logged, the backing file
    is removed, and the caller sees a plain cache miss.
    """

    def __init__(
        self,
        disk: DiskStore,
        name: str,
        codec: Codec[T],
        max_age: float,
        clock: Callable[[], float] = time.time,
    ):
        super().__init__(disk, name, codec)
        self.max_age = max_age
        self._clock = clock

    def load(self) -> T | None:
        """Returns the cached value, or None if it is absent or cannot be trusted."""
        try:
            entry = self.read()
        except (CacheError, OSError) as e:
            log.debug(f"Cache read failed for '{self.name}': {e}")
            self.purge()
            return None

        if entry is None:
            log.debug(f"No cached value for '{self.name}'.")
            return None
        return entry.payload

    def _validate(self, blob: StoredBlob) -> None:
        # Age is checked before decoding so stale files are dropped cheaply
        age = self._clock() - blob.created_at
        if age < 0:
            raise StaleCacheError(f"cache file was created {-age:.0f}s in the future")
        if age > self.max_age:
            raise StaleCacheError(f"cache is too old ({age:.0f}s > {self.max_age:.0f}s)")

    def store(self, value: T) -> None:
        """Caches a value. Failures are logged and leave no file behind."""
        try:
            self.write(value)
        except (CacheError, OSError) as e:
            log.warning(f"Cache write failed for '{self.name}': {e}")
            self.purge()
            return
        log.debug(f"Cached '{self.name}' at {self.path}")

    def clear(self) -> bool:
        """Removes the cached value on request."""
        return self.purge()
