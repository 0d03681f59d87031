# tests/test_faq_client.py
"""Tests for the LLM-backed FAQ client using a mocked transport."""

import json

import httpx
import pytest

from campus_qa.services.errors import FaqGenerationError
from campus_qa.services.faq import SYSTEM_PROMPT, FaqClient, FaqConfig, FaqInput, parse_completion

CONFIG = FaqConfig(
    api_key="gsk-test",
    base_url="https://llm.test/openai/v1",
    model="llama3-70b-8192",
    timeout_seconds=5.0,
)

FAQ_INPUT = FaqInput(
    question_title="How do I reverse a list?",
    question_content="I want the last element first.",
    answer_content="Use slicing with a negative step.",
    question_id=7,
)


def _completion(content: str | None) -> dict:
    return {"choices": [{"message": {"role": "assistant", "content": content}}]}


def _client(handler) -> FaqClient:
    return FaqClient(CONFIG, transport=httpx.MockTransport(handler))


def test_generate_sends_chat_completion_request() -> None:
    seen: dict = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["auth"] = request.headers["Authorization"]
        seen["body"] = json.loads(request.content)
        faq = {"question": "How to reverse a list?", "answer": "Slice it.", "tags": ["python", "lists"]}
        return httpx.Response(200, json=_completion(json.dumps(faq)))

    output = _client(handler).generate(FAQ_INPUT)

    assert output.question == "How to reverse a list?"
    assert output.tags == ["python", "lists"]
    assert seen["url"] == "https://llm.test/openai/v1/chat/completions"
    assert seen["auth"] == "Bearer gsk-test"
    body = seen["body"]
    assert body["model"] == "llama3-70b-8192"
    assert body["temperature"] == 0.3
    assert body["max_tokens"] == 1024
    assert body["response_format"] == {"type": "json_object"}
    assert body["messages"][0] == {"role": "system", "content": SYSTEM_PROMPT}
    assert "Question: How do I reverse a list?" in body["messages"][1]["content"]
    assert "Answer: Use slicing with a negative step." in body["messages"][1]["content"]


def test_http_error_becomes_generation_error() -> None:
    client = _client(lambda request: httpx.Response(429, json={"error": "rate_limit"}))
    with pytest.raises(FaqGenerationError):
        client.generate(FAQ_INPUT)


def test_transport_failure_becomes_generation_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("boom", request=request)

    with pytest.raises(FaqGenerationError):
        _client(handler).generate(FAQ_INPUT)


def test_missing_api_key_is_rejected() -> None:
    config = FaqConfig(api_key=None, base_url=CONFIG.base_url, model=CONFIG.model, timeout_seconds=1.0)
    client = FaqClient(config, transport=httpx.MockTransport(lambda r: httpx.Response(200)))
    assert not client.enabled
    with pytest.raises(FaqGenerationError):
        client.generate(FAQ_INPUT)


@pytest.mark.parametrize(
    "payload",
    [
        {"choices": []},
        _completion(None),
        _completion("not json"),
        _completion(json.dumps({"question": "q", "answer": "a"})),
        _completion(json.dumps({"question": "", "answer": "a", "tags": []})),
        _completion(json.dumps(["question", "answer"])),
    ],
)
def test_parse_completion_rejects_bad_payloads(payload: dict) -> None:
    with pytest.raises(FaqGenerationError):
        parse_completion(payload)
