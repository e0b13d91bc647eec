"""Windows registry publisher.

Creates (or opens) ``HKEY_...\\SOFTWARE\\Mozilla\\<kind folder>\\<name>`` and
sets its default value to the absolute path of the manifest file. The
manifest content itself is not copied anywhere.
"""

from __future__ import annotations

import logging
from pathlib import Path

from webext_manifests.errors import ManifestIOError
from webext_manifests.models.kinds import ManifestKind, Visibility
from webext_manifests.models.manifest import Manifest
from webext_manifests.paths import Locations, Platform, canonicalize
from webext_manifests.publishers.base import Publication, Publisher

logger = logging.getLogger(__name__)


class RegistryPublisher(Publisher):
    """Publishes manifests as registry keys pointing at the manifest file.

    ``winreg`` defaults to the standard library module, imported on first
    use so the package still imports on other platforms.
    """

    backend = "registry"

    def __init__(self, winreg=None):
        self._winreg = winreg
        self.locations = Locations(Platform.WINDOWS)

    @property
    def winreg(self):
        if self._winreg is None:
            try:
                import winreg
            except ImportError as e:
                raise ManifestIOError(
                    "winreg", "the Windows registry is only available on Windows"
                ) from e
            self._winreg = winreg
        return self._winreg

    def publish(
        self, visibility: Visibility, kind: ManifestKind, manifest: Manifest
    ) -> Publication:
        if manifest.source is None:
            raise ValueError(f"Manifest {manifest.name!r} was not read from a file")
        manifest_path = canonicalize(manifest.source)

        root_name, subkey = self.locations.registry_key(visibility, kind, manifest.name)
        self._set_default_value(root_name, subkey, manifest_path)

        destination = f"{root_name}\\{subkey}"
        logger.debug("Set %s to %s", destination, manifest_path)
        return Publication(
            kind=kind,
            visibility=visibility,
            name=manifest.name,
            destination=destination,
            backend=self.backend,
        )

    def _set_default_value(self, root_name: str, subkey: str, manifest_path: Path) -> None:
        reg = self.winreg
        root = getattr(reg, root_name)
        try:
            with reg.CreateKey(root, subkey) as key:
                reg.SetValueEx(key, "", 0, reg.REG_SZ, str(manifest_path))
        except OSError as e:
            raise ManifestIOError(f"{root_name}\\{subkey}", e.strerror or str(e)) from e
