"""
Pytest fixtures for the scam analyzer. The completion service is faked so
no test touches the network.
"""

from __future__ import annotations

import pytest


class FakeCompletion:
    """Returns a canned reply (or raises) and records every prompt it receives."""

    def __init__(self, reply: str = "", error: Exception | None = None):
        self.reply = reply
        self.error = error
        self.prompts: list[str] = []

    def complete(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.fixture
def fake_completion():
    return FakeCompletion()


@pytest.fixture
def client(fake_completion, monkeypatch):
    """FastAPI TestClient with the analyzer bound to the fake completion service."""
    monkeypatch.delenv("GROQ_API_KEY", raising=False)
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)

    from fastapi.testclient import TestClient

    from analyzer import ScamAnalyzer
    from main import app, get_analyzer

    app.dependency_overrides[get_analyzer] = lambda: ScamAnalyzer(fake_completion)
    yield TestClient(app)
    app.dependency_overrides.clear()
