"""
Tests for the completion client. Provider SDK clients are mocked.
"""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest

from errors import UpstreamFailure
from llm_client import CompletionClient


def _reply(content):
    response = MagicMock()
    response.choices[0].message.content = content
    return response


def test_groq_preferred_when_both_keys_set():
    with patch("llm_client.Groq") as groq_cls:
        client = CompletionClient(groq_api_key="gsk_test", openai_api_key="sk-test", groq_model="llama-test")
    groq_cls.assert_called_once_with(api_key="gsk_test")
    assert client.provider == "groq"
    assert client.model == "llama-test"


def test_openai_used_without_groq_key():
    with patch("openai.OpenAI") as openai_cls:
        client = CompletionClient(openai_api_key="sk-test", openai_model="gpt-test")
    openai_cls.assert_called_once_with(api_key="sk-test")
    assert client.provider == "openai"
    assert client.model == "gpt-test"


def test_openai_fallback_when_groq_init_fails():
    with patch("llm_client.Groq", side_effect=RuntimeError("bad key")), patch("openai.OpenAI"):
        client = CompletionClient(groq_api_key="gsk_test", openai_api_key="sk-test")
    assert client.provider == "openai"


def test_complete_sends_prompt_in_json_mode():
    with patch("llm_client.Groq") as groq_cls:
        client = CompletionClient(groq_api_key="gsk_test", groq_model="llama-test", temperature=0.1)
    sdk = groq_cls.return_value
    sdk.chat.completions.create.return_value = _reply('  {"verdict": "SCAM"}\n')

    assert client.complete("PROMPT") == '{"verdict": "SCAM"}'
    sdk.chat.completions.create.assert_called_once_with(
        model="llama-test",
        messages=[{"role": "user", "content": "PROMPT"}],
        response_format={"type": "json_object"},
        temperature=0.1,
    )


def test_complete_without_provider_fails_upstream():
    client = CompletionClient()
    assert client.provider is None
    with pytest.raises(UpstreamFailure):
        client.complete("PROMPT")


def test_provider_error_wrapped_as_upstream_failure():
    with patch("llm_client.Groq") as groq_cls:
        client = CompletionClient(groq_api_key="gsk_test")
    groq_cls.return_value.chat.completions.create.side_effect = ConnectionError("quota exceeded")

    with pytest.raises(UpstreamFailure) as exc_info:
        client.complete("PROMPT")
    assert exc_info.value.provider == "groq"
    assert isinstance(exc_info.value.__cause__, ConnectionError)


@pytest.mark.parametrize("content", [None, "", "   "])
def test_empty_reply_is_upstream_failure(content):
    with patch("llm_client.Groq") as groq_cls:
        client = CompletionClient(groq_api_key="gsk_test")
    groq_cls.return_value.chat.completions.create.return_value = _reply(content)

    with pytest.raises(UpstreamFailure):
        client.complete("PROMPT")
