"""Pytest configuration and fixtures for neo-store tests."""

import pytest

from neo_store import Permission, PermissionRegistry, Restrict, Store, StoreSettings


@pytest.fixture
def settings():
    """Default settings, isolated from NEO_STORE_* variables in the environment."""
    return StoreSettings(
        default_policy=Permission.READ_WRITE,
        child_store_key="store",
        detect_cycles=True,
        log_operations=False,
    )


@pytest.fixture
def store(settings):
    """Empty store with default settings."""
    return Store(settings=settings)


@pytest.fixture
def registry():
    """Registry separate from the process-wide one."""
    return PermissionRegistry()


class GatedStore(Store):
    """Store with one field per permission tag."""

    readable = Restrict("r")
    writable = Restrict("w")
    open_field = Restrict("rw")
    hidden = Restrict("none")


class LockedStore(Store):
    """Store whose undeclared keys are read-only."""

    default_policy = Permission.READ
    scratch = Restrict("rw")


@pytest.fixture
def gated_store(settings):
    """Store with r / w / rw / none fields."""
    return GatedStore(settings=settings)


@pytest.fixture
def locked_store(settings):
    """Read-only store with a single writable field."""
    return LockedStore(settings=settings)
