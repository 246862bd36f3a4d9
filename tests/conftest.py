"""Pytest configuration shared by all test suites.

This configuration ensures:
1. Required settings exist before any ``src`` module is imported
2. Markers are registered (unit, api)
3. Coroutine tests are marked for pytest-asyncio automatically
4. Common authorization fixtures (registry, identity factory)
"""

import inspect
import os

# Settings are loaded at import time of src.core.config
os.environ.setdefault("SECRET_KEY", "test-secret-key-for-session-tokens-0123456789")
os.environ.setdefault("ENVIRONMENT", "testing")
os.environ.setdefault("BCRYPT_ROUNDS", "10")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest  # noqa: E402
from uuid_extensions import uuid7  # noqa: E402

from src.application.services import PermissionRegistry  # noqa: E402
from src.config.permissions import DEFAULT_ACCESS_POLICY  # noqa: E402
from src.domain.enums import UserRole  # noqa: E402
from src.domain.value_objects import Identity  # noqa: E402


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: fast, isolated unit tests")
    config.addinivalue_line("markers", "api: HTTP tests through TestClient")


def pytest_collection_modifyitems(items):
    """Mark coroutine tests for pytest-asyncio."""
    for item in items:
        test_function = getattr(item, "function", None)
        if test_function is not None and inspect.iscoroutinefunction(test_function):
            item.add_marker(pytest.mark.asyncio)


@pytest.fixture
def registry() -> PermissionRegistry:
    """Permission registry over the application's access policy."""
    return PermissionRegistry(DEFAULT_ACCESS_POLICY)


@pytest.fixture
def make_identity():
    """Factory for identities of a given role.

    Usage:
        identity = make_identity(UserRole.OPERATOR)
    """

    def _make(
        role: UserRole = UserRole.VIEWER,
        email: str | None = None,
    ) -> Identity:
        return Identity(
            user_id=uuid7(),
            email=email or f"{role.value.lower()}@example.com",
            role=role,
        )

    return _make
