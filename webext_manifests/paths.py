"""Path resolution: where manifests point to and where they are published.

Two separate questions are answered here:

1. The absolute path a manifest's ``path`` field must carry once published.
   Native messaging hosts are resolved against the manifest's directory;
   PKCS #11 modules are joined onto the manifest file path itself.
2. The destination of the manifest: a file under a per-platform directory
   tree on macOS and Linux, or a registry key on Windows.

All naming is driven by the lookup tables below, keyed by platform and kind.
"""

from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional

from webext_manifests.errors import ManifestIOError, UnknownHomeError
from webext_manifests.models.kinds import ManifestKind, Visibility

logger = logging.getLogger(__name__)


class Platform(Enum):
    """Host platform families with distinct discovery layouts."""

    LINUX = "linux"  # Every Unix-like system other than macOS
    MACOS = "macos"
    WINDOWS = "windows"

    @classmethod
    def current(cls) -> Platform:
        """Detect the platform this process runs on."""
        if sys.platform == "darwin":
            return cls.MACOS
        if os.name == "nt":
            return cls.WINDOWS
        return cls.LINUX

    @property
    def uses_registry(self) -> bool:
        return self is Platform.WINDOWS


# --- Naming tables ---

KIND_FOLDERS: dict[tuple[Platform, ManifestKind], str] = {
    (Platform.MACOS, ManifestKind.NATIVE_MESSAGING): "NativeMessagingHosts",
    (Platform.MACOS, ManifestKind.MANAGED_STORAGE): "ManagedStorage",
    (Platform.MACOS, ManifestKind.PKCS11): "PKCS11Modules",
    (Platform.LINUX, ManifestKind.NATIVE_MESSAGING): "native-messaging-hosts",
    (Platform.LINUX, ManifestKind.MANAGED_STORAGE): "managed-storage",
    (Platform.LINUX, ManifestKind.PKCS11): "pkcs11-modules",
    (Platform.WINDOWS, ManifestKind.NATIVE_MESSAGING): "NativeMessagingHosts",
    (Platform.WINDOWS, ManifestKind.MANAGED_STORAGE): "ManagedStorage",
    (Platform.WINDOWS, ManifestKind.PKCS11): "PKCS11Modules",
}

# Global roots are absolute, per-user roots are relative to the home directory
BASE_DIRS: dict[Platform, dict[Visibility, str]] = {
    Platform.MACOS: {
        Visibility.GLOBAL: "/Library/Application Support/Mozilla",
        Visibility.PER_USER: "Library/Application Support/Mozilla",
    },
    Platform.LINUX: {
        Visibility.GLOBAL: "/usr/lib/mozilla",
        Visibility.PER_USER: ".mozilla",
    },
}

REGISTRY_ROOTS: dict[Visibility, str] = {
    Visibility.GLOBAL: "HKEY_LOCAL_MACHINE",
    Visibility.PER_USER: "HKEY_CURRENT_USER",
}

REGISTRY_BASE = r"SOFTWARE\Mozilla"


def kind_folder(platform: Platform, kind: ManifestKind) -> str:
    """Name of the directory or registry folder holding manifests of ``kind``."""
    return KIND_FOLDERS[(platform, kind)]


# --- Manifest ``path`` resolution ---


def canonicalize(path: str | Path) -> Path:
    """Return the absolute path with symlinks resolved. The path must exist."""
    try:
        return Path(path).resolve(strict=True)
    except (OSError, RuntimeError, ValueError) as e:
        reason = getattr(e, "strerror", None) or str(e)
        raise ManifestIOError(path, reason) from e


def anchor_native_messaging_path(manifest_path: Path, target: Path) -> Path:
    """Join a native messaging ``path`` onto the manifest's directory."""
    return manifest_path.parent / target


def anchor_pkcs11_path(manifest_path: Path, target: Path) -> Path:
    """Join a PKCS #11 ``path`` onto the manifest file path itself."""
    return manifest_path / target


def resolve_native_messaging_path(manifest_path: str | Path, target: str | Path) -> Path:
    manifest_path = canonicalize(manifest_path)
    resolved = canonicalize(anchor_native_messaging_path(manifest_path, Path(target)))
    logger.debug("Resolved native messaging path %s -> %s", target, resolved)
    return resolved


def resolve_pkcs11_path(
    manifest_path: str | Path, target: str | Path, platform: Platform
) -> Path:
    """Resolve a PKCS #11 module path.

    On Windows the path is returned unchanged; the browser interprets it
    relative to the registered manifest.
    """
    if platform.uses_registry:
        return Path(target)
    manifest_path = canonicalize(manifest_path)
    resolved = canonicalize(anchor_pkcs11_path(manifest_path, Path(target)))
    logger.debug("Resolved PKCS #11 path %s -> %s", target, resolved)
    return resolved


# --- Destinations ---


def home_dir() -> Path:
    """Home directory of the invoking user."""
    try:
        home = Path.home()
    except (RuntimeError, KeyError) as e:
        raise UnknownHomeError(str(e)) from e
    if not home.is_absolute():
        raise UnknownHomeError(f"'{home}' is not an absolute path")
    return home


@dataclass
class Locations:
    """Destination layout for one platform.

    ``home`` overrides the detected home directory for per-user registrations.
    """

    platform: Platform
    home: Optional[Path] = None

    def __post_init__(self):
        # An explicit home is taken relative to the working directory
        if self.home is not None:
            self.home = Path(self.home).absolute()

    def base_dir(self, visibility: Visibility) -> Path:
        if self.platform.uses_registry:
            raise ValueError("Windows manifests are published to the registry, not a directory")
        base = BASE_DIRS[self.platform][visibility]
        if visibility is Visibility.GLOBAL:
            return Path(base)
        home = self.home if self.home is not None else home_dir()
        return home / base

    def destination_dir(self, visibility: Visibility, kind: ManifestKind) -> Path:
        return self.base_dir(visibility) / kind_folder(self.platform, kind)

    def destination_file(self, visibility: Visibility, kind: ManifestKind, name: str) -> Path:
        """File a manifest called ``name`` is written to."""
        return self.destination_dir(visibility, kind) / f"{name}.json"

    def registry_key(self, visibility: Visibility, kind: ManifestKind, name: str) -> tuple[str, str]:
        """Return ``(root key name, subkey path)`` for a manifest called ``name``."""
        subkey = "\\".join([REGISTRY_BASE, kind_folder(Platform.WINDOWS, kind), name])
        return REGISTRY_ROOTS[visibility], subkey

    def describe(self, visibility: Visibility, kind: ManifestKind, name: str) -> str:
        """Human readable destination, a file path or a full registry key."""
        if self.platform.uses_registry:
            root, subkey = self.registry_key(visibility, kind, name)
            return f"{root}\\{subkey}"
        return str(self.destination_file(visibility, kind, name))
