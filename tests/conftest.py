import os

import pytest

os.environ.setdefault("LLM_PROVIDER", "openai")

from backend.config import Settings  # noqa: E402


class FakeProvider:
    """Stands in for an LLM provider and records every prompt it receives."""

    name = "OpenAI"

    def __init__(self, reply="", error=None):
        self.reply = reply
        self.error = error
        self.prompts = []

    def complete(self, prompt):
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.fixture
def settings(tmp_path):
    return Settings(api_key="sk-test-key", build_dir=str(tmp_path / "build"))


@pytest.fixture
def fake_provider():
    return FakeProvider()


@pytest.fixture(autouse=True)
def reset_provider_cache():
    from backend import llm

    llm.get_provider.cache_clear()
    yield
    llm.get_provider.cache_clear()
