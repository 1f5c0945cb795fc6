"""
Pydantic models for the caniuse.rs feature database.

Field definitions follow the caniuse.rs build data (features.toml and
versions.toml). Fields the tool does not know about are ignored on load.
"""

from enum import Enum
from typing import NamedTuple

from pydantic import BaseModel, Field


class Channel(str, Enum):
    """Release channel a Rust version belongs to."""

    STABLE = "stable"
    BETA = "beta"
    NIGHTLY = "nightly"


class VersionData(BaseModel):
    """A single Rust release."""

    # Rust version number, e.g. "1.0.0"
    number: str
    # Not specifying the channel upstream is equivalent to "stable"
    channel: Channel = Channel.STABLE
    # Release date, in format "yyyy-mm-dd"
    release_date: str | None = None
    release_notes: str | None = None
    blog_post_path: str | None = None
    gh_milestone_id: int | None = None


class FeatureData(BaseModel):
    """A language or library feature tracked by caniuse.rs."""

    title: str
    flag: str | None = None
    rfc_id: int | None = None
    impl_pr_id: int | None = None
    tracking_issue_id: int | None = None
    stabilization_pr_id: int | None = None
    doc_path: str | None = None
    edition_guide_path: str | None = None
    unstable_book_path: str | None = None
    items: list[str] = Field(default_factory=list)
    # The version number at which the feature was stabilized
    version_number: str | None = None


class FeatureMatch(NamedTuple):
    """Result of a feature lookup, with its stabilizing version if known."""

    slug: str
    feature: FeatureData
    version: VersionData | None


def version_sort_key(number: str) -> tuple[int, ...]:
    """Turns '1.70.0' into (1, 70, 0); non-numeric parts sort as zero."""
    parts = []
    for part in number.split("."):
        digits = "".join(ch for ch in part if ch.isdigit())
        parts.append(int(digits) if digits else 0)
    return tuple(parts)


class FeatureDatabase(BaseModel):
    """The full feature database: versions and features keyed by unique strings."""

    versions: dict[str, VersionData] = Field(default_factory=dict)
    features: dict[str, FeatureData] = Field(default_factory=dict)

    def lookup(self, query: str) -> FeatureMatch | None:
        """
        Finds a feature by its exact slug.

        A feature naming a version that is missing from `versions` still
        matches; the returned match simply carries no version info.
        """
        feature = self.features.get(query)
        if feature is None:
            return None

        version = None
        if feature.version_number:
            version = self.versions.get(feature.version_number)
        return FeatureMatch(query, feature, version)

    def recent_versions(self, limit: int = 5) -> list[VersionData]:
        """Returns versions ordered newest first."""
        ordered = sorted(
            self.versions.values(),
            key=lambda v: version_sort_key(v.number),
            reverse=True,
        )
        return ordered[:limit]

    def features_since(self, version_number: str) -> list[FeatureMatch]:
        """Returns the features stabilized in the given version, sorted by slug."""
        version = self.versions.get(version_number)
        return [
            FeatureMatch(slug, feature, version)
            for slug, feature in sorted(self.features.items())
            if feature.version_number == version_number
        ]
