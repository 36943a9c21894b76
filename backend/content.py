import json
import logging
import re

from backend.llm import LLMProvider
from backend.prompts import build_clean_prompt, build_generate_prompt

logger = logging.getLogger(__name__)

_FENCE_OPEN = re.compile(r"```json\n?")
_FENCE_ANY = re.compile(r"```\n?")


class ContentParseError(Exception):
    """The model reply for content generation was not a JSON object."""

    def __init__(self, raw: str):
        self.raw = raw
        super().__init__("Failed to parse generated content")


def strip_code_fences(text: str) -> str:
    """Remove Markdown code fences the model sometimes wraps JSON in."""
    return _FENCE_ANY.sub("", _FENCE_OPEN.sub("", text)).strip()


def describe_provider_error(status_code: int, message: str | None, provider_name: str = "OpenAI") -> str:
    if status_code == 429:
        return f"{provider_name} API rate limit exceeded. Please try again in a few minutes."
    if status_code == 401:
        return "Invalid API key configuration"
    if status_code == 400:
        return "Invalid request format"
    return message or "Service temporarily unavailable"


def clean_transcript(provider: LLMProvider, transcript: str) -> str:
    logger.info("Cleaning transcript, length=%d", len(transcript))
    reply = provider.complete(build_clean_prompt(transcript))
    return reply.strip()


def generate_content(provider: LLMProvider, transcript: str, video_title: str | None = None) -> dict:
    """Ask the model for SEO content and return the parsed JSON object.

    The object is returned as the model produced it; only code fences and
    surrounding whitespace are removed before parsing.
    """
    logger.info("Generating content, transcript length=%d", len(transcript))
    reply = strip_code_fences(provider.complete(build_generate_prompt(transcript, video_title)))

    try:
        content = json.loads(reply)
    except json.JSONDecodeError as e:
        logger.error("Failed to parse model response: %s", reply)
        raise ContentParseError(reply) from e

    if not isinstance(content, dict):
        logger.error("Model response is not a JSON object: %s", reply)
        raise ContentParseError(reply)
    return content
