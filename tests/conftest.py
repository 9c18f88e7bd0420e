"""Shared fixtures for the chat_reflow test suite."""

import os
from unittest.mock import MagicMock

import pytest

from chat_reflow.config import Settings, reset_settings


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch, tmp_path):
    """Keep tests away from the developer's environment and .env file."""
    for key in list(os.environ):
        if key.upper().startswith("CHAT_REFLOW_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def settings():
    return Settings(_env_file=None)


def make_client(*replies):
    """Build a mock Anthropic client that answers with the given texts in order."""
    client = MagicMock()
    responses = []
    for text in replies:
        block = MagicMock(type="text", text=text)
        responses.append(MagicMock(content=[block]))
    client.messages.create.side_effect = responses
    return client


@pytest.fixture
def client_factory():
    return make_client
