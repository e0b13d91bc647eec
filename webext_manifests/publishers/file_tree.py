"""File tree publisher for macOS and Linux.

Writes the manifest as pretty-printed JSON to
``<root>/<kind folder>/<name>.json``. Missing directories are created and an
existing file of the same name is overwritten. Directories created before a
failed write are left in place.
"""

from __future__ import annotations

import json
import logging

from webext_manifests.errors import MalformedManifestError, ManifestIOError
from webext_manifests.models.kinds import ManifestKind, Visibility
from webext_manifests.models.manifest import Manifest
from webext_manifests.paths import Locations
from webext_manifests.publishers.base import Publication, Publisher

logger = logging.getLogger(__name__)


class FileTreePublisher(Publisher):
    """Publishes manifests as JSON files under the Mozilla directories."""

    backend = "file-tree"

    def __init__(self, locations: Locations):
        if locations.platform.uses_registry:
            raise ValueError(f"{locations.platform.value} has no file tree layout")
        self.locations = locations

    def publish(
        self, visibility: Visibility, kind: ManifestKind, manifest: Manifest
    ) -> Publication:
        dest = self.locations.destination_file(visibility, kind, manifest.name)

        try:
            content = json.dumps(manifest.to_dict(), indent=2, allow_nan=False)
        except ValueError as e:
            raise MalformedManifestError(manifest.source or manifest.name, [str(e)]) from e

        try:
            dest.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ManifestIOError(dest.parent, e.strerror or str(e)) from e

        try:
            with open(dest, "w", encoding="utf-8") as f:
                f.write(content)
        except OSError as e:
            raise ManifestIOError(dest, e.strerror or str(e)) from e

        logger.debug("Wrote %s", dest)
        return Publication(
            kind=kind,
            visibility=visibility,
            name=manifest.name,
            destination=str(dest),
            backend=self.backend,
        )
