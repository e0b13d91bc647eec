"""Check manifest names and whole manifest files.

``validate_name`` is the check applied during registration. For reporting
every problem in a file at once without raising, use
``validate_manifest_file``.
"""

from __future__ import annotations

import re
from pathlib import Path

from webext_manifests.errors import InvalidNameError, RegistrationError
from webext_manifests.models.kinds import ManifestKind
from webext_manifests.models.manifest import load_json
from webext_manifests.spec.schema_validator import validate_schema

# Word characters separated by single dots, no leading or trailing dot
NAME_PATTERN = re.compile(r"\w+(\.\w+)*")


def is_valid_name(name: str) -> bool:
    """Return True if ``name`` fully matches the manifest name format."""
    return isinstance(name, str) and NAME_PATTERN.fullmatch(name) is not None


def validate_name(name: str) -> None:
    """Raise :class:`InvalidNameError` unless ``name`` is a valid manifest name."""
    if not is_valid_name(name):
        raise InvalidNameError(name)


def validate_manifest_file(manifest_path: str | Path, kind: ManifestKind) -> list[str]:
    """Validate a manifest file without registering it.

    Returns a list of issues found. Empty list means valid.
    """
    path = Path(manifest_path)

    try:
        data = load_json(path)
    except RegistrationError as e:
        return [str(e)]

    issues = validate_schema(data, kind)

    name = data.get("name") if isinstance(data, dict) else None
    if isinstance(name, str) and not is_valid_name(name):
        issues.append(f"Invalid name {name!r}: must match ^\\w+(\\.\\w+)*$")

    return issues
