"""
Unit tests for neo-store value objects.

Covers permission tags, path parsing and value classification.
"""

import pytest

from neo_store import (
    AccessOperation,
    AccessResult,
    InvalidPath,
    Permission,
    PermissionDenied,
    Store,
    StorePath,
    ValueKind,
    classify_value,
)


class TestPermission:
    """Test permission tags and their read/write grants."""

    @pytest.mark.parametrize(
        "permission, can_read, can_write",
        [
            (Permission.READ, True, False),
            (Permission.WRITE, False, True),
            (Permission.READ_WRITE, True, True),
            (Permission.NONE, False, False),
        ],
    )
    def test_grants(self, permission, can_read, can_write):
        assert permission.allows_read is can_read
        assert permission.allows_write is can_write

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("r", Permission.READ),
            ("w", Permission.WRITE),
            ("rw", Permission.READ_WRITE),
            ("none", Permission.NONE),
            ("read", Permission.READ),
            ("write", Permission.WRITE),
            ("read-write", Permission.READ_WRITE),
            ("READ_WRITE", Permission.READ_WRITE),
            (Permission.WRITE, Permission.WRITE),
        ],
    )
    def test_coerce(self, raw, expected):
        assert Permission.coerce(raw) is expected

    def test_coerce_rejects_unknown(self):
        with pytest.raises(ValueError, match="Unknown permission"):
            Permission.coerce("admin")


class TestStorePath:
    """Test path parsing and validation."""

    def test_parse_segments(self):
        path = StorePath.parse("user:profile:name")
        assert path.segments == ("user", "profile", "name")
        assert path.head == "user"
        assert path.leaf == "name"
        assert path.intermediates == ("user", "profile")
        assert path.depth == 3
        assert str(path) == "user:profile:name"

    def test_single_segment(self):
        path = StorePath.parse("name")
        assert path.intermediates == ()
        assert path.head == path.leaf == "name"

    def test_slicing(self):
        path = StorePath.parse("a:b:c:d")
        assert str(path.prefix(2)) == "a:b"
        assert str(path.suffix(2)) == "c:d"
        assert str(path.child(["e"])) == "a:b:c:d:e"

    def test_from_parts(self):
        assert str(StorePath.from_parts("", "a:b", StorePath.parse("c"))) == "a:b:c"

    def test_parse_is_idempotent(self):
        path = StorePath.parse("a:b")
        assert StorePath.parse(path) is path

    def test_empty_path(self):
        with pytest.raises(InvalidPath) as exc_info:
            StorePath.parse("")
        assert exc_info.value.error_code == "STORE_PATH_EMPTY"

    @pytest.mark.parametrize("raw", [":a", "a:", "a::b", ":"])
    def test_empty_segment(self, raw):
        with pytest.raises(InvalidPath) as exc_info:
            StorePath.parse(raw)
        assert exc_info.value.error_code == "STORE_PATH_EMPTY_SEGMENT"

    def test_not_a_string(self):
        with pytest.raises(InvalidPath):
            StorePath.parse(42)

    def test_invalid_path_is_value_error(self):
        with pytest.raises(ValueError):
            StorePath.parse("a::b")


class TestValueKind:
    """Test classification of stored values."""

    @pytest.mark.parametrize(
        "value, kind",
        [
            (None, ValueKind.ABSENT),
            (0, ValueKind.SCALAR),
            ("", ValueKind.SCALAR),
            (False, ValueKind.SCALAR),
            (1.5, ValueKind.SCALAR),
            ([1, 2], ValueKind.ARRAY),
            ({}, ValueKind.OBJECT),
            ({"a": 1}, ValueKind.OBJECT),
            (lambda: 1, ValueKind.LAZY),
        ],
    )
    def test_classify(self, value, kind):
        assert classify_value(value) is kind

    def test_store_is_child(self, store):
        assert classify_value(store) is ValueKind.CHILD

    def test_containers(self):
        assert ValueKind.OBJECT.is_container
        assert ValueKind.CHILD.is_container
        assert not ValueKind.ARRAY.is_container
        assert not ValueKind.SCALAR.is_container


class TestAccessResult:
    """Test the non-raising outcome wrapper."""

    def test_success(self):
        result = AccessResult.success("a", AccessOperation.READ, 5)
        assert result.ok
        assert bool(result)
        assert result.unwrap() == 5
        assert result.value_or(0) == 5
        assert not result.denied

    def test_failure(self):
        error = PermissionDenied.for_read("a", "a")
        result = AccessResult.failure("a", AccessOperation.READ, error)
        assert not result.ok
        assert result.denied
        assert not result.invalid
        assert result.value_or("fallback") == "fallback"
        with pytest.raises(PermissionDenied):
            result.unwrap()


class TestErrors:
    """Test structured error details."""

    def test_permission_denied_details(self):
        error = PermissionDenied.for_write("a:b", "b", owner="Store", permission=Permission.READ)
        assert error.operation is AccessOperation.WRITE
        assert error.error_code == "STORE_WRITE_DENIED"
        data = error.to_dict()
        assert data["error_type"] == "PermissionDenied"
        assert data["details"]["key"] == "b"
        assert data["details"]["permission"] == "r"

    def test_rescoped_keeps_key(self):
        error = PermissionDenied.for_read("x", "x", owner="Child").rescoped("a:x")
        assert error.path == "a:x"
        assert error.key == "x"
        assert error.owner == "Child"
