"""
Pytest configuration and global fixtures.

This module provides shared fixtures used across all tests.
"""

from collections.abc import Generator

import pytest
from hypothesis import HealthCheck, settings

from typed_intl.core.context import IntlContext, reset_default_context
from typed_intl.utils.config import reload_settings

SETTINGS_ENV_VARS = (
    "TYPED_INTL_PREFERRED_LANGUAGE",
    "TYPED_INTL_FALLBACK_LANGUAGE",
    "TYPED_INTL_LOG_LEVEL",
    "TYPED_INTL_JSON_LOGS",
    "TYPED_INTL_DEV_MODE",
)

# Every test runs with the function-scoped context fixtures below
settings.register_profile(
    "typed-intl", suppress_health_check=[HealthCheck.function_scoped_fixture]
)
settings.load_profile("typed-intl")


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch) -> Generator[None, None, None]:
    """Run every test without TYPED_INTL_* variables from the outer environment."""
    for name in SETTINGS_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    reload_settings()
    yield
    reload_settings()


@pytest.fixture(autouse=True)
def intl_context(isolated_settings) -> Generator[IntlContext, None, None]:
    """
    Provide a fresh default context for each test.

    Preferred language and format presets set by one test never leak into
    another.
    """
    context = reset_default_context(IntlContext())
    yield context
    reset_default_context(IntlContext())


@pytest.fixture
def german_context() -> IntlContext:
    """A standalone context preferring German."""
    return IntlContext(preferred_language="de")
