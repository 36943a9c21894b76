"""HTTP client for the relay service plus the helpers the form needs.

Nothing here talks to YouTube's APIs: the video ID is parsed from the URL and
the thumbnail address is derived from it.
"""

import json
import logging
import os
import re
from dataclasses import dataclass, field
from typing import Callable, Optional

import requests

logger = logging.getLogger(__name__)

BACKEND_URL = os.getenv("BACKEND_URL", "http://localhost:8080")

VIDEO_ID_PATTERN = re.compile(r"(?:youtube\.com/watch\?v=|youtu\.be/)([^&\n?#]+)")

STEP_EXTRACTING = "🔍 Extracting video information..."
STEP_CLEANING = "🤖 Cleaning transcript with AI..."
STEP_GENERATING = "✨ Generating SEO content with AI..."
STEP_FINALIZING = "📝 Finalizing content..."


class RelayError(Exception):
    """A conversion step failed; the message is meant for the user."""


@dataclass
class ConversionResult:
    video_id: str
    formatted_transcript: str
    thumbnail_url: str
    seo_title: str
    meta_description: str
    faqs: list = field(default_factory=list)
    key_takeaways: list = field(default_factory=list)
    schema_markup: str = ""


def extract_video_id(url: str) -> Optional[str]:
    match = VIDEO_ID_PATTERN.search(url or "")
    return match.group(1) if match else None


def thumbnail_url(video_id: str) -> str:
    return f"https://img.youtube.com/vi/{video_id}/maxresdefault.jpg"


def default_video_title(video_id: str) -> str:
    return f"Video Content - {video_id}"


def normalize_faqs(value) -> list:
    """Coerce the model's ``faqs`` into a list of question/answer dicts.

    A bare string becomes a question with an empty answer; anything else that
    is not a dict is dropped.
    """
    if isinstance(value, dict):
        value = [value]
    if not isinstance(value, list):
        return []

    faqs = []
    for item in value:
        if isinstance(item, dict):
            faqs.append({
                "question": str(item.get("question") or ""),
                "answer": str(item.get("answer") or ""),
            })
        elif isinstance(item, str) and item.strip():
            faqs.append({"question": item.strip(), "answer": ""})
    return faqs


def normalize_takeaways(value) -> list:
    if isinstance(value, str):
        return [value] if value.strip() else []
    if not isinstance(value, list):
        return []
    return [str(item) for item in value if item not in (None, "")]


def build_faq_schema(faqs: list) -> str:
    """Render FAQs as a JSON-LD FAQPage script block."""
    schema = {
        "@context": "https://schema.org",
        "@type": "FAQPage",
        "mainEntity": [
            {
                "@type": "Question",
                "name": faq.get("question"),
                "acceptedAnswer": {"@type": "Answer", "text": faq.get("answer")},
            }
            for faq in faqs
        ],
    }
    return f'<script type="application/ld+json">\n{json.dumps(schema, indent=2)}\n</script>'


def format_takeaways(items: list) -> str:
    return "\n".join(f"{i}. {item}" for i, item in enumerate(items, start=1))


def thumbnail_filename(seo_title: str) -> str:
    name = re.sub(r"[^a-zA-Z0-9\s]", "-", seo_title or "")
    return re.sub(r"\s+", "-", name) + ".jpg"


def download_thumbnail(url: str, timeout: float = 30) -> Optional[bytes]:
    # None tells the page to offer a plain link instead
    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
    except requests.RequestException as e:
        logger.error("Error downloading thumbnail: %s", e)
        return None
    return response.content


class RelayClient:
    def __init__(self, base_url: str = BACKEND_URL, timeout: float = 300):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def clean_transcript(self, text: str) -> str:
        """Return the cleaned transcript, or ``text`` unchanged if cleaning fails."""
        if not text:
            return ""

        try:
            response = requests.post(
                f"{self.base_url}/api/clean-transcript",
                json={"transcript": text},
                timeout=self.timeout,
            )
            if not response.ok:
                logger.error("Failed to clean transcript (HTTP %s), using original", response.status_code)
                return text
            data = response.json()
        except (requests.RequestException, ValueError) as e:
            logger.error("Error cleaning transcript: %s", e)
            return text

        logger.info("Transcript cleaned successfully")
        if not isinstance(data, dict):
            logger.error("Relay returned %s instead of an object, using original", type(data).__name__)
            return text
        return data.get("cleanedTranscript") or text

    def generate_content(self, transcript: str, video_title: str) -> dict:
        try:
            response = requests.post(
                f"{self.base_url}/api/generate-content",
                json={"transcript": transcript, "videoTitle": video_title},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error("Error generating content: %s", e)
            raise RelayError(str(e) or "Failed to generate content") from e

        try:
            data = response.json()
        except ValueError as e:
            logger.error("Relay returned a non-JSON body (HTTP %s)", response.status_code)
            raise RelayError("Failed to generate content") from e

        if not response.ok:
            message = data.get("error") if isinstance(data, dict) else None
            raise RelayError(message or "Failed to generate content")

        if not isinstance(data, dict):
            logger.error("Relay returned %s instead of an object", type(data).__name__)
            raise RelayError("Failed to generate content")
        return data

    def process(
        self,
        url: str,
        transcript: str,
        on_step: Optional[Callable[[str], None]] = None,
    ) -> ConversionResult:
        """Run the clean -> generate sequence for one video."""
        report = on_step or (lambda step: None)

        if not url or not transcript:
            raise RelayError("Please provide both URL and transcript")

        report(STEP_EXTRACTING)
        video_id = extract_video_id(url)
        if not video_id:
            raise RelayError("Invalid YouTube URL")

        report(STEP_CLEANING)
        formatted_transcript = self.clean_transcript(transcript)

        report(STEP_GENERATING)
        generated = self.generate_content(formatted_transcript, default_video_title(video_id))

        report(STEP_FINALIZING)
        faqs = normalize_faqs(generated.get("faqs"))
        return ConversionResult(
            video_id=video_id,
            formatted_transcript=formatted_transcript,
            thumbnail_url=thumbnail_url(video_id),
            seo_title=str(generated.get("seoTitle") or ""),
            meta_description=str(generated.get("metaDescription") or ""),
            faqs=faqs,
            key_takeaways=normalize_takeaways(generated.get("keyTakeaways")),
            schema_markup=str(generated.get("schemaMarkup") or build_faq_schema(faqs)),
        )
