"""
Remote API Layer.

This package handles all communication with caniuse.rs and the release host.
"""

from .client import CaniuseClient
from .release_probe import ReleaseProbe

__all__ = ["CaniuseClient", "ReleaseProbe"]
