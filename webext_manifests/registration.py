"""Register manifest files: read, validate, resolve, then publish.

Each entry point takes a visibility scope and the path of a manifest file:

1. Read and parse the manifest as its kind's typed model
2. Validate the name (every kind, every platform)
3. Rewrite ``path`` to an absolute path, for kinds that carry one
4. Hand the finalized manifest to the platform's publisher

Nothing is written before step 4, so a bad name or a missing ``path`` target
leaves no trace on disk or in the registry.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from webext_manifests.models.kinds import ManifestKind, Visibility
from webext_manifests.models.manifest import Manifest, read_manifest
from webext_manifests.paths import (
    Locations,
    Platform,
    resolve_native_messaging_path,
    resolve_pkcs11_path,
)
from webext_manifests.publishers import Publication, Publisher, publisher_for
from webext_manifests.utils.validator import validate_name

logger = logging.getLogger(__name__)


class Registrar:
    """Registers manifests for one platform.

    Args:
        platform: Target platform. Defaults to the running one.
        home: Home directory for per-user registrations. Defaults to the
            invoking user's.
        publisher: Backend to publish with. Defaults to the platform's.
    """

    def __init__(
        self,
        platform: Optional[Platform] = None,
        home: Optional[Path] = None,
        publisher: Optional[Publisher] = None,
    ):
        self.platform = platform or Platform.current()
        self.home = Path(home).absolute() if home is not None else None
        self.publisher = publisher or publisher_for(self.platform, home=self.home)

    def register(
        self, kind: ManifestKind, visibility: Visibility, manifest_path: str | Path
    ) -> Publication:
        """Register the manifest file at ``manifest_path`` as a ``kind`` manifest."""
        manifest_path = Path(manifest_path)
        manifest = read_manifest(manifest_path, kind)
        validate_name(manifest.name)
        self._resolve_path(manifest, manifest_path)

        publication = self.publisher.publish(visibility, kind, manifest)
        logger.info(
            "Registered %s manifest %r (%s) at %s",
            kind.value,
            manifest.name,
            visibility.value,
            publication.destination,
        )
        return publication

    def register_native_messaging(
        self, visibility: Visibility, manifest_path: str | Path
    ) -> Publication:
        return self.register(ManifestKind.NATIVE_MESSAGING, visibility, manifest_path)

    def register_managed_storage(
        self, visibility: Visibility, manifest_path: str | Path
    ) -> Publication:
        return self.register(ManifestKind.MANAGED_STORAGE, visibility, manifest_path)

    def register_pkcs11_modules(
        self, visibility: Visibility, manifest_path: str | Path
    ) -> Publication:
        return self.register(ManifestKind.PKCS11, visibility, manifest_path)

    def locate(self, kind: ManifestKind, visibility: Visibility, name: str) -> str:
        """Where a manifest called ``name`` would be published. Writes nothing."""
        validate_name(name)
        return Locations(self.platform, home=self.home).describe(visibility, kind, name)

    def _resolve_path(self, manifest: Manifest, manifest_path: Path) -> None:
        # The registry only stores a pointer to the untouched file
        if self.platform.uses_registry or not manifest.kind.has_path:
            return
        if manifest.kind is ManifestKind.NATIVE_MESSAGING:
            manifest.path = resolve_native_messaging_path(manifest_path, manifest.path)
        elif manifest.kind is ManifestKind.PKCS11:
            manifest.path = resolve_pkcs11_path(manifest_path, manifest.path, self.platform)


def register_native_messaging(visibility: Visibility, manifest_path: str | Path) -> Publication:
    """Register a native messaging host manifest with Firefox.

    On macOS and Linux the manifest is copied into the native messaging
    directory with ``path`` made absolute. On Windows a registry key pointing
    at the manifest file is created.
    """
    return Registrar().register_native_messaging(visibility, manifest_path)


def register_managed_storage(visibility: Visibility, manifest_path: str | Path) -> Publication:
    """Register a managed storage manifest with Firefox.

    On macOS and Linux the manifest is copied into the managed storage
    directory. On Windows a registry key pointing at the manifest file is
    created.
    """
    return Registrar().register_managed_storage(visibility, manifest_path)


def register_pkcs11_modules(visibility: Visibility, manifest_path: str | Path) -> Publication:
    """Register a PKCS #11 module manifest with Firefox.

    On macOS and Linux the manifest is copied into the PKCS #11 modules
    directory with ``path`` made absolute. On Windows a registry key pointing
    at the manifest file is created.
    """
    return Registrar().register_pkcs11_modules(visibility, manifest_path)
