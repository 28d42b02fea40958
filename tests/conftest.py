"""Pytest configuration for the Govee Lights test-suite."""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path

import pytest

root_path = Path(__file__).resolve().parent.parent
if str(root_path) not in sys.path:
    sys.path.insert(0, str(root_path))

from govee_lights.config import GoveeLightsConfig  # noqa: E402


@pytest.fixture
def client_config() -> GoveeLightsConfig:
    """Return a configuration with an explicit API key."""

    return GoveeLightsConfig(api_key="test-key", base_url="https://govee.test/v1")


def pytest_configure(config: pytest.Config) -> None:
    """Register markers used throughout the test suite."""

    config.addinivalue_line(
        "markers", "asyncio: mark coroutine tests to execute via asyncio loop"
    )


def pytest_pyfunc_call(pyfuncitem: pytest.Function) -> bool | None:
    """Execute coroutine tests within a dedicated event loop."""

    test_function = pyfuncitem.obj
    if not asyncio.iscoroutinefunction(test_function):
        return None

    testargs = {
        arg: pyfuncitem.funcargs[arg] for arg in pyfuncitem._fixtureinfo.argnames
    }
    loop = asyncio.new_event_loop()
    try:
        asyncio.set_event_loop(loop)
        loop.run_until_complete(test_function(**testargs))
    finally:
        asyncio.set_event_loop(None)
        loop.close()
    return True
