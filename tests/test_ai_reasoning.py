# tests/test_ai_reasoning.py
import asyncio
import base64
import json

import httpx
import pytest

from src.config.settings import Settings
from src.core.ai_reasoning import GeminiBackend
from src.models.evaluation import ResponseType
from src.models.question import QuestionType


def _settings():
    return Settings(
        google_ai_api_key="test-key",
        use_generation_backend=True,
        gemini_base_url="https://gemini.test",
        gemini_model="gemini-test",
    )


def _reply(text: str) -> httpx.Response:
    return httpx.Response(200, json={"candidates": [{"content": {"parts": [{"text": text}]}}]})


def _backend(handler) -> GeminiBackend:
    client = httpx.AsyncClient(base_url="https://gemini.test", transport=httpx.MockTransport(handler))
    return GeminiBackend(_settings(), client=client)


def test_requires_api_key():
    with pytest.raises(ValueError):
        GeminiBackend(Settings(google_ai_api_key=""))


def test_generate_questions_parses_json_list():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        seen["key"] = request.headers.get("x-goog-api-key")
        seen["body"] = json.loads(request.content)
        return _reply(
            'Here you go:\n[{"question_text": "Why this team?", "question_type": "general"},'
            ' {"question_text": "Design a cache.", "question_type": "TECHNICAL"},'
            ' {"question_text": "  "}, "Plain string question?"]'
        )

    backend = _backend(handler)
    questions = asyncio.run(backend.generate_questions("Software Engineer", None, "advanced", 3))

    assert seen["path"] == "/v1beta/models/gemini-test:generateContent"
    assert seen["key"] == "test-key"
    assert "Software Engineer" in seen["body"]["contents"][0]["parts"][0]["text"]
    assert [q.question_text for q in questions] == ["Why this team?", "Design a cache.", "Plain string question?"]
    assert [q.question_type for q in questions] == [QuestionType.GENERAL, QuestionType.TECHNICAL, None]


def test_generate_questions_rejects_non_json():
    backend = _backend(lambda request: _reply("I cannot help with that."))
    with pytest.raises(ValueError):
        asyncio.run(backend.generate_questions("Software Engineer", None, None, 3))


def test_analyze_response_parses_and_clamps():
    payload = {
        "feedback_text": "Solid structure.",
        "strengths": ["Structure"],
        "improvement_areas": "Add numbers",
        "confidence_score": 1.4,
    }
    backend = _backend(lambda request: _reply(f"```json\n{json.dumps(payload)}\n```"))

    feedback = asyncio.run(
        backend.analyze_response("Q?", "A.", ResponseType.TEXT, "Product Manager")
    )
    assert feedback.feedback_text == "Solid structure."
    assert feedback.strengths == ["Structure"]
    assert feedback.improvement_areas == ["Add numbers"]
    assert feedback.confidence_score == 1.0


@pytest.mark.parametrize("raw_score", ["NaN", "Infinity", "-Infinity"])
def test_analyze_response_drops_non_finite_score(raw_score):
    reply = '{"feedback_text": "Clear answer.", "confidence_score": ' + raw_score + "}"
    backend = _backend(lambda request: _reply(reply))

    feedback = asyncio.run(
        backend.analyze_response("Q?", "A.", ResponseType.TEXT, "Product Manager")
    )
    assert feedback.feedback_text == "Clear answer."
    assert feedback.confidence_score is None


def test_analyze_response_requires_feedback_text():
    backend = _backend(lambda request: _reply('{"strengths": []}'))
    with pytest.raises(ValueError):
        asyncio.run(backend.analyze_response("Q?", "A.", ResponseType.TEXT, "Product Manager"))


def test_http_errors_propagate():
    backend = _backend(lambda request: httpx.Response(500, json={"error": "boom"}))
    with pytest.raises(httpx.HTTPStatusError):
        asyncio.run(backend.analyze_response("Q?", "A.", ResponseType.TEXT, "Product Manager"))


def test_transcribe_downloads_media_and_sends_inline_data():
    recording = b"webm-bytes"
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.host == "media.test":
            seen["download_key"] = request.headers.get("x-goog-api-key")
            return httpx.Response(200, content=recording)
        seen["body"] = json.loads(request.content)
        return _reply("  I shipped the feature on time.  ")

    backend = _backend(handler)
    text = asyncio.run(backend.transcribe_media("http://media.test/bucket/a.webm", ResponseType.AUDIO))

    assert text == "I shipped the feature on time."
    assert seen["download_key"] is None
    inline = seen["body"]["contents"][0]["parts"][1]["inline_data"]
    assert inline["mime_type"] == "audio/webm"
    assert base64.b64decode(inline["data"]) == recording
