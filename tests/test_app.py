from pathlib import Path
from unittest.mock import patch

import pytest
import streamlit as st
from streamlit.testing.v1 import AppTest

from frontend.client import ConversionResult, RelayError

APP_PATH = str(Path(__file__).resolve().parent.parent / "frontend" / "app.py")

RESULT = ConversionResult(
    video_id="abc123",
    formatted_transcript="Host: Welcome.",
    thumbnail_url="https://img.youtube.com/vi/abc123/maxresdefault.jpg",
    seo_title="Brew Better Coffee",
    meta_description="Five tips for brewing coffee at home.",
    faqs=[{"question": "What grind?", "answer": "Medium."}],
    key_takeaways=["Use fresh beans"],
    schema_markup="<div itemscope></div>",
)


@pytest.fixture(autouse=True)
def clear_thumbnail_cache():
    st.cache_data.clear()
    yield
    st.cache_data.clear()


def _submit(at, url, transcript):
    at.text_input[0].input(url)
    at.text_area[0].input(transcript)
    at.button[0].click()
    return at.run()


@patch("frontend.client.RelayClient.process")
def test_missing_inputs_show_warning(process):
    at = AppTest.from_file(APP_PATH).run()
    _submit(at, "", "")

    assert at.warning[0].value == "Please provide both URL and transcript"
    process.assert_not_called()


@patch("frontend.client.download_thumbnail", return_value=b"jpeg-bytes")
@patch("frontend.client.RelayClient.process", return_value=RESULT)
def test_results_persist_across_reruns(process, download):
    at = AppTest.from_file(APP_PATH).run()
    _submit(at, "https://youtu.be/abc123", "raw transcript")

    assert at.session_state["results"] == RESULT
    assert "Brew Better Coffee" in [code.value for code in at.code]

    at.run()

    assert process.call_count == 1
    assert at.session_state["results"] == RESULT
    assert "1. Use fresh beans" in [code.value for code in at.code]
    assert len(at.get("download_button")) == 1
    assert download.call_count == 1


@patch("frontend.client.download_thumbnail", return_value=None)
@patch("frontend.client.RelayClient.process", return_value=RESULT)
def test_thumbnail_link_when_download_fails(process, download):
    at = AppTest.from_file(APP_PATH).run()
    _submit(at, "https://youtu.be/abc123", "raw transcript")

    assert at.get("download_button") == []
    assert len(at.get("link_button")) == 1


@patch("frontend.client.RelayClient.process", side_effect=RelayError("Invalid YouTube URL"))
def test_relay_error_is_shown(process):
    at = AppTest.from_file(APP_PATH).run()
    _submit(at, "https://example.com/video", "raw transcript")

    assert at.error[0].value == "Error: Invalid YouTube URL"
    assert at.session_state["results"] is None
