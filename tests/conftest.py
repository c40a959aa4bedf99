"""
Test configuration for the trusted-cert test suite.
"""

import os
from collections.abc import Sequence

import pytest

from trusted_cert.config import reset_settings
from trusted_cert.runners import RunnerResult


# Test markers
def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line("markers", "integration: mark test as an integration test")


# Collection settings
def pytest_collection_modifyitems(config, items):
    """Modify test collection to add markers."""
    for item in items:
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch, tmp_path):
    """Keep TRUSTED_CERT_* variables and any .env file out of the tests."""
    for key in list(os.environ):
        if key.startswith("TRUSTED_CERT_"):
            monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)
    reset_settings()
    yield
    reset_settings()


class FakeRunner:
    """Elevated runner that records calls and returns a canned result."""

    def __init__(self, result: RunnerResult | None = None) -> None:
        self.result = result or RunnerResult()
        self.calls: list[tuple[list[str], str]] = []

    async def run(self, argv: Sequence[str], *, prompt: str) -> RunnerResult:
        self.calls.append((list(argv), prompt))
        return self.result


@pytest.fixture
def fake_runner():
    """Runner that succeeds with empty output."""
    return FakeRunner()


@pytest.fixture
def make_runner():
    """Factory for runners returning a specific RunnerResult."""

    def _make(**kwargs) -> FakeRunner:
        return FakeRunner(RunnerResult(**kwargs))

    return _make
