import asyncio
import json

import pytest

import feedback_logic
import openai_client
from feedback_logic import LLMContractError, LLMNotConfiguredError, LLMUpstreamError


GOOD_REPLY = json.dumps({
    "overallSentiment": "Positive",
    "keyTrends": ["Fast Wi-Fi", "  ", "Friendly staff"],
    "suggestedImprovements": ["More standing desks"],
})


def test_prompt_contains_feedback_and_business():
    prompt = feedback_logic.build_feedback_prompt("  Coffee is cold.  ", "Hive")

    assert "\"Hive\"" in prompt
    assert "Coffee is cold." in prompt
    assert "overallSentiment" in prompt


def test_parse_normalises_reply():
    analysis = feedback_logic.parse_feedback_analysis(GOOD_REPLY)

    assert analysis == {
        "overallSentiment": "positive",
        "keyTrends": ["Fast Wi-Fi", "Friendly staff"],
        "suggestedImprovements": ["More standing desks"],
    }


@pytest.mark.parametrize("text", [
    "not json",
    "[]",
    json.dumps({"overallSentiment": "angry", "keyTrends": [], "suggestedImprovements": []}),
    json.dumps({"overallSentiment": "neutral", "keyTrends": "wifi", "suggestedImprovements": []}),
    json.dumps({"overallSentiment": "neutral", "keyTrends": [1], "suggestedImprovements": []}),
])
def test_parse_rejects_bad_replies(text):
    with pytest.raises(LLMContractError):
        feedback_logic.parse_feedback_analysis(text)


def test_analyze_feedback_uses_llm_reply(monkeypatch):
    seen = {}

    async def fake_call(prompt):
        seen["prompt"] = prompt
        return GOOD_REPLY

    monkeypatch.setattr(openai_client, "_call_text", fake_call)

    analysis = asyncio.run(openai_client.analyze_feedback("Great Wi-Fi"))

    assert analysis["overallSentiment"] == "positive"
    assert "Great Wi-Fi" in seen["prompt"]


def test_missing_api_key(monkeypatch):
    monkeypatch.setattr(openai_client.settings, "OPENAI_API_KEY", None)

    with pytest.raises(LLMNotConfiguredError):
        asyncio.run(openai_client.analyze_feedback("Great Wi-Fi"))


def test_analyze_endpoint(client, monkeypatch):
    async def fake_analyze(feedback):
        return feedback_logic.parse_feedback_analysis(GOOD_REPLY)

    monkeypatch.setattr(openai_client, "analyze_feedback", fake_analyze)

    response = client.post("/api/v1/feedback/analyze", json={"feedback": "Love the place"})

    assert response.status_code == 200
    assert response.json()["keyTrends"] == ["Fast Wi-Fi", "Friendly staff"]


@pytest.mark.parametrize("error,status", [
    (LLMNotConfiguredError("no key"), 503),
    (LLMUpstreamError("timeout"), 502),
    (LLMContractError("bad json"), 502),
])
def test_analyze_endpoint_errors(client, monkeypatch, error, status):
    async def failing(feedback):
        raise error

    monkeypatch.setattr(openai_client, "analyze_feedback", failing)

    response = client.post("/api/v1/feedback/analyze", json={"feedback": "Meh"})

    assert response.status_code == status


def test_empty_feedback_is_rejected(client):
    assert client.post("/api/v1/feedback/analyze", json={"feedback": ""}).status_code == 422
