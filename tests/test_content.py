import json

import pytest

from backend import content
from backend.prompts import build_clean_prompt, build_generate_prompt


def test_clean_prompt_embeds_transcript():
    prompt = build_clean_prompt("so um today we talk about coffee")
    assert "Raw transcript:\nso um today we talk about coffee\n" in prompt
    assert "Do NOT" in prompt


def test_generate_prompt_keeps_json_braces():
    prompt = build_generate_prompt("Host: Hi.", "My Video")
    assert '"seoTitle": "string"' in prompt
    assert "Clean Transcript: Host: Hi." in prompt
    assert "Video Title Context: My Video" in prompt


def test_transcript_with_braces_is_not_reformatted():
    prompt = build_clean_prompt("code sample {x}")
    assert "code sample {x}" in prompt


@pytest.mark.parametrize(
    "raw,expected",
    [
        ('```json\n{"a": 1}\n```', '{"a": 1}'),
        ('```\n{"a": 1}\n```\n', '{"a": 1}'),
        ('  {"a": 1}  ', '{"a": 1}'),
    ],
)
def test_strip_code_fences(raw, expected):
    assert content.strip_code_fences(raw) == expected


def test_clean_transcript_strips_reply(fake_provider):
    fake_provider.reply = "\n  Speaker 1: Hello.  \n"
    assert content.clean_transcript(fake_provider, "hello") == "Speaker 1: Hello."


def test_generate_content_parses_fenced_json(fake_provider):
    payload = {"seoTitle": "T", "metaDescription": "M", "faqs": [], "keyTakeaways": []}
    fake_provider.reply = "```json\n" + json.dumps(payload) + "\n```"
    assert content.generate_content(fake_provider, "text") == payload


@pytest.mark.parametrize("reply", ["not json at all", '["a", "b"]'])
def test_generate_content_rejects_non_objects(fake_provider, reply):
    fake_provider.reply = reply
    with pytest.raises(content.ContentParseError) as exc_info:
        content.generate_content(fake_provider, "text")
    assert exc_info.value.raw == reply


def test_provider_errors_propagate(fake_provider):
    from backend.llm import ProviderError

    fake_provider.error = ProviderError(500, "down")
    with pytest.raises(ProviderError):
        content.clean_transcript(fake_provider, "text")


@pytest.mark.parametrize(
    "status,message,expected",
    [
        (429, "x", "Anthropic API rate limit exceeded. Please try again in a few minutes."),
        (401, "x", "Invalid API key configuration"),
        (400, "x", "Invalid request format"),
        (503, "overloaded", "overloaded"),
        (503, None, "Service temporarily unavailable"),
    ],
)
def test_describe_provider_error(status, message, expected):
    assert content.describe_provider_error(status, message, "Anthropic") == expected
