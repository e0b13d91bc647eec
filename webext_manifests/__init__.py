"""Register WebExtension native manifests with Firefox.

Publishes native-messaging host, managed-storage and PKCS #11 module manifests
to the location where the browser looks for them: a directory tree on macOS
and Linux, registry keys on Windows.
"""

from webext_manifests.errors import (
    InvalidNameError,
    MalformedManifestError,
    ManifestIOError,
    RegistrationError,
    UnknownHomeError,
)
from webext_manifests.models.kinds import ManifestKind, Visibility
from webext_manifests.paths import Platform
from webext_manifests.registration import (
    Registrar,
    register_managed_storage,
    register_native_messaging,
    register_pkcs11_modules,
)

__version__ = "0.1.0"

__all__ = [
    "InvalidNameError",
    "MalformedManifestError",
    "ManifestIOError",
    "ManifestKind",
    "Platform",
    "Registrar",
    "RegistrationError",
    "UnknownHomeError",
    "Visibility",
    "register_managed_storage",
    "register_native_messaging",
    "register_pkcs11_modules",
]
