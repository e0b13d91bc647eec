"""Durable backends that make a manifest discoverable.

- File tree: macOS and Linux, JSON files under the Mozilla directories
- Registry: Windows, a key whose default value points at the manifest file
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from webext_manifests.paths import Locations, Platform
from webext_manifests.publishers.base import Publication, Publisher
from webext_manifests.publishers.file_tree import FileTreePublisher
from webext_manifests.publishers.registry import RegistryPublisher


def publisher_for(platform: Platform, home: Optional[Path] = None) -> Publisher:
    """Return the backend used on ``platform``."""
    if platform.uses_registry:
        return RegistryPublisher()
    return FileTreePublisher(Locations(platform, home=home))


__all__ = [
    "FileTreePublisher",
    "Publication",
    "Publisher",
    "RegistryPublisher",
    "publisher_for",
]
