"""Manifest kinds and registration scopes."""

from __future__ import annotations

from enum import Enum


class ManifestKind(Enum):
    """The kinds of native manifest Firefox discovers."""

    NATIVE_MESSAGING = "native-messaging"
    MANAGED_STORAGE = "managed-storage"
    PKCS11 = "pkcs11"

    @property
    def has_path(self) -> bool:
        return self is not ManifestKind.MANAGED_STORAGE


class Visibility(Enum):
    """Scope a manifest is registered for."""

    GLOBAL = "global"  # Machine-wide, usually needs elevated rights
    PER_USER = "per-user"  # Rooted at the invoking user's home directory
