"""Error types raised by manifest registration.

Every failure surfaces as a subclass of :class:`RegistrationError` so callers
can catch the whole family at once. Nothing here is retried internally.
"""

from __future__ import annotations

from pathlib import Path


class RegistrationError(Exception):
    """Base class for all registration failures."""


class ManifestIOError(RegistrationError):
    """Raised when a file or registry operation fails.

    Covers missing manifests, unreadable files, path targets that cannot be
    canonicalized, directory creation and write failures.
    """

    def __init__(self, path: str | Path, reason: str):
        self.path = str(path)
        self.reason = reason
        super().__init__(f"I/O error on '{self.path}': {reason}")


class MalformedManifestError(RegistrationError):
    """Raised when a manifest is not valid JSON or does not have the expected shape."""

    def __init__(self, path: str | Path, issues: list[str]):
        self.path = str(path)
        self.issues = list(issues)
        super().__init__(f"Malformed manifest '{self.path}': {'; '.join(self.issues)}")


class InvalidNameError(RegistrationError):
    """Raised when a manifest name does not match ``^\\w+(\\.\\w+)*$``."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Name in the manifest is invalid: {name!r}")


class UnknownHomeError(RegistrationError):
    """Raised when the home directory of the current user cannot be determined."""

    def __init__(self, reason: str = ""):
        self.reason = reason
        message = "Cannot determine the home directory of the user"
        super().__init__(f"{message}: {reason}" if reason else message)
