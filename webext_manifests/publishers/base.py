"""Publisher interface and its result type."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from webext_manifests.models.kinds import ManifestKind, Visibility
from webext_manifests.models.manifest import Manifest


@dataclass
class Publication:
    """Where a manifest ended up."""

    kind: ManifestKind
    visibility: Visibility
    name: str
    destination: str  # File path or full registry key
    backend: str  # "file-tree" or "registry"


class Publisher(ABC):
    """Writes a finalized manifest where the browser will discover it.

    Publishing is idempotent: registering the same name again replaces the
    previous registration in place.
    """

    backend: str = ""

    @abstractmethod
    def publish(
        self, visibility: Visibility, kind: ManifestKind, manifest: Manifest
    ) -> Publication:
        """Publish ``manifest`` for ``visibility``."""
