"""Typed models for the three native manifest kinds.

Each model is read from a JSON file, checked against its kind's schema and
serialized back in the field order Firefox documents. Unknown fields are
dropped. The file a manifest was read from is kept in ``source`` but is never
written out.
"""

from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional, Union

from webext_manifests.errors import MalformedManifestError, ManifestIOError
from webext_manifests.models.kinds import ManifestKind
from webext_manifests.spec.schema_validator import validate_schema

logger = logging.getLogger(__name__)

NATIVE_MESSAGING_TYPE = "stdio"
MANAGED_STORAGE_TYPE = "storage"
PKCS11_TYPE = "pkcs11"


# --- Native messaging ---


@dataclass
class NativeMessagingManifest:
    """Manifest for a native messaging host an extension can talk to over stdio.

    ``name`` must match the name passed to ``runtime.connectNative()`` and, on
    macOS and Linux, the published file name (without ``.json``).
    """

    name: str
    description: str
    path: Path
    allowed_extensions: list[str] = field(default_factory=list)
    type: str = NATIVE_MESSAGING_TYPE
    source: Optional[Path] = field(default=None, compare=False, repr=False)

    kind = ManifestKind.NATIVE_MESSAGING

    @classmethod
    def from_dict(cls, data: dict, source: Optional[Path] = None) -> NativeMessagingManifest:
        return cls(
            name=data["name"],
            description=data["description"],
            path=Path(data["path"]),
            allowed_extensions=list(data["allowed_extensions"]),
            type=data["type"],
            source=source,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "path": str(self.path),
            "type": self.type,
            "allowed_extensions": list(self.allowed_extensions),
        }


# --- Managed storage ---


@dataclass
class ManagedStorageManifest:
    """Read-only data an extension reads through ``storage.managed``.

    ``data`` may be any JSON value and is passed through untouched.
    """

    name: str
    description: str
    data: Any = None
    type: str = MANAGED_STORAGE_TYPE
    source: Optional[Path] = field(default=None, compare=False, repr=False)

    kind = ManifestKind.MANAGED_STORAGE

    @classmethod
    def from_dict(cls, data: dict, source: Optional[Path] = None) -> ManagedStorageManifest:
        return cls(
            name=data["name"],
            description=data["description"],
            data=data["data"],
            type=data["type"],
            source=source,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "type": self.type,
            "data": self.data,
        }


# --- PKCS #11 ---


@dataclass
class Pkcs11Manifest:
    """Manifest for a PKCS #11 security module an extension may install."""

    name: str
    description: str
    path: Path
    allowed_extensions: list[str] = field(default_factory=list)
    type: str = PKCS11_TYPE
    source: Optional[Path] = field(default=None, compare=False, repr=False)

    kind = ManifestKind.PKCS11

    @classmethod
    def from_dict(cls, data: dict, source: Optional[Path] = None) -> Pkcs11Manifest:
        return cls(
            name=data["name"],
            description=data["description"],
            path=Path(data["path"]),
            allowed_extensions=list(data["allowed_extensions"]),
            type=data["type"],
            source=source,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "path": str(self.path),
            "type": self.type,
            "allowed_extensions": list(self.allowed_extensions),
        }


Manifest = Union[NativeMessagingManifest, ManagedStorageManifest, Pkcs11Manifest]

MANIFEST_CLASSES: dict[ManifestKind, type] = {
    ManifestKind.NATIVE_MESSAGING: NativeMessagingManifest,
    ManifestKind.MANAGED_STORAGE: ManagedStorageManifest,
    ManifestKind.PKCS11: Pkcs11Manifest,
}


def load_json(path: str | Path) -> Any:
    """Read and decode a JSON file.

    Raises:
        ManifestIOError: If the file cannot be opened or read.
        MalformedManifestError: If the content is not valid JSON.
    """
    path = Path(path)
    try:
        f = open(path, encoding="utf-8")
    except (OSError, ValueError) as e:
        raise ManifestIOError(path, getattr(e, "strerror", None) or str(e)) from e

    with f:
        try:
            return json.load(f, parse_constant=_reject_constant, parse_float=_finite_float)
        except json.JSONDecodeError as e:
            raise MalformedManifestError(path, [f"invalid JSON: {e}"]) from e
        except UnicodeDecodeError as e:
            raise MalformedManifestError(path, [f"not UTF-8 text: {e}"]) from e
        except NonFiniteNumberError as e:
            raise MalformedManifestError(path, [str(e)]) from e
        except OSError as e:
            raise ManifestIOError(path, e.strerror or str(e)) from e


class NonFiniteNumberError(ValueError):
    """A number JSON cannot represent: NaN, Infinity or an overflowing literal."""


def _reject_constant(name: str):
    raise NonFiniteNumberError(f"invalid JSON: {name} is not a JSON value")


def _finite_float(text: str) -> float:
    value = float(text)
    if not math.isfinite(value):
        raise NonFiniteNumberError(f"invalid JSON: number {text} is out of range")
    return value


def parse_manifest(data: Any, kind: ManifestKind, source: Optional[Path] = None) -> Manifest:
    """Build the typed model for ``kind`` from already-decoded JSON."""
    issues = validate_schema(data, kind)
    if issues:
        raise MalformedManifestError(source or "<memory>", issues)
    return MANIFEST_CLASSES[kind].from_dict(data, source=source)


def read_manifest(path: str | Path, kind: ManifestKind) -> Manifest:
    """Read a manifest file of the given kind.

    Raises:
        ManifestIOError: If the file cannot be read.
        MalformedManifestError: If the file is not JSON or lacks required fields.
    """
    path = Path(path)
    manifest = parse_manifest(load_json(path), kind, source=path)
    logger.debug("Read %s manifest %r from %s", kind.value, manifest.name, path)
    return manifest
