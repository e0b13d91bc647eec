"""Tests for the manifest schemas and the schema validator."""

from webext_manifests.models.kinds import ManifestKind
from webext_manifests.spec.schema import get_schema
from webext_manifests.spec.schema_validator import validate_schema


def _native_messaging(**overrides) -> dict:
    data = {
        "name": "com.example.host",
        "description": "Example host",
        "path": "/usr/bin/host",
        "type": "stdio",
        "allowed_extensions": ["ext@example.org"],
    }
    data.update(overrides)
    return data


def test_every_kind_has_a_schema():
    for kind in ManifestKind:
        schema = get_schema(kind)
        assert schema["type"] == "object"
        assert "name" in schema["required"]
        assert "description" in schema["required"]


def test_path_required_only_for_path_kinds():
    for kind in ManifestKind:
        assert ("path" in get_schema(kind)["required"]) == kind.has_path


def test_valid_native_messaging():
    assert validate_schema(_native_messaging(), ManifestKind.NATIVE_MESSAGING) == []


def test_extra_fields_are_ignored():
    data = _native_messaging(allowed_origins=["chrome-extension://abc/"], extra=1)
    assert validate_schema(data, ManifestKind.NATIVE_MESSAGING) == []


def test_missing_required_fields():
    data = _native_messaging()
    del data["path"]
    del data["allowed_extensions"]
    issues = validate_schema(data, ManifestKind.NATIVE_MESSAGING)
    assert any("'path'" in i for i in issues)
    assert any("'allowed_extensions'" in i for i in issues)


def test_wrong_type_tag():
    issues = validate_schema(_native_messaging(type="pkcs11"), ManifestKind.NATIVE_MESSAGING)
    assert len(issues) == 1
    assert "not in allowed values" in issues[0]


def test_wrong_field_types():
    data = _native_messaging(description=3, allowed_extensions=["ok", 7])
    issues = validate_schema(data, ManifestKind.NATIVE_MESSAGING)
    assert any(i.startswith(".description:") for i in issues)
    assert any(i.startswith(".allowed_extensions[1]:") for i in issues)


def test_top_level_must_be_object():
    issues = validate_schema(["not", "an", "object"], ManifestKind.PKCS11)
    assert issues == ["/: expected type 'object', got array"]


def test_managed_storage_data_accepts_any_json():
    for data in ({"colour": "blue"}, [1, 2], "text", 4, None, True):
        manifest = {
            "name": "ext_example",
            "description": "Policy data",
            "type": "storage",
            "data": data,
        }
        assert validate_schema(manifest, ManifestKind.MANAGED_STORAGE) == []


def test_pkcs11_requires_pkcs11_tag():
    manifest = {
        "name": "my_module",
        "description": "Token",
        "path": "/usr/lib/libtoken.so",
        "type": "stdio",
        "allowed_extensions": [],
    }
    issues = validate_schema(manifest, ManifestKind.PKCS11)
    assert any(".type" in i for i in issues)
