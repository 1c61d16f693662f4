"""Pytest configuration and shared fixtures for nvisy-sdk tests."""

import pytest

TEST_API_KEY = "nv-test-key-5ecret-0123456789"


@pytest.fixture(autouse=True)
def clear_env(monkeypatch):
    """Auto-cleanup: Clear Nvisy environment variables around each test.

    This prevents test pollution when testing credential resolution, including
    values python-dotenv loads into the environment during a test.
    """
    import os

    test_prefixes = ("NVISY_", "TEST_")

    for key in list(os.environ.keys()):
        if any(key.startswith(prefix) for prefix in test_prefixes):
            monkeypatch.delenv(key, raising=False)

    yield

    for key in list(os.environ.keys()):
        if any(key.startswith(prefix) for prefix in test_prefixes):
            os.environ.pop(key, None)


@pytest.fixture
def api_key():
    return TEST_API_KEY


@pytest.fixture
def config(api_key):
    """Config with default settings and the test API key."""
    from nvisy_sdk import NvisyConfig

    return NvisyConfig.builder().with_api_key(api_key).build()


@pytest.fixture
def recording_sleep():
    from nvisy_sdk.testing import RecordingSleep

    return RecordingSleep()


@pytest.fixture
def make_client(config, recording_sleep):
    """Factory building a client over a StubTransport with scripted outcomes."""
    from nvisy_sdk import NvisyClient
    from nvisy_sdk.testing import StubTransport

    def _make(*outcomes, client_config=None):
        transport = StubTransport(outcomes)
        client = NvisyClient(client_config or config, transport=transport, sleep=recording_sleep)
        return client, transport

    return _make
