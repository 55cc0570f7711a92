import json

SENTIMENTS = ("positive", "negative", "neutral")


class LLMUpstreamError(RuntimeError):
    """Ошибка на стороне провайдера LLM (сеть, таймаут, сервис недоступен)."""
    pass


class LLMNotConfiguredError(LLMUpstreamError):
    """Ключ OpenAI не задан в .env."""
    pass


class LLMContractError(RuntimeError):
    """Ответ LLM не соответствует ожидаемому формату."""
    pass


def build_feedback_prompt(feedback: str, business_name: str) -> str:
    return (
        f"You are a customer satisfaction analysis tool for \"{business_name}\" co-working space.\n"
        "Return ONLY valid JSON. No markdown. No extra text.\n"
        "Output schema:\n"
        "  {\"overallSentiment\": \"positive|negative|neutral\",\n"
        "   \"keyTrends\": [\"...\"],\n"
        "   \"suggestedImprovements\": [\"...\"]}\n"
        "Rules:\n"
        "  - keyTrends and suggestedImprovements must be short, actionable insights.\n"
        "  - Consider workspace comfort, amenities, staff interaction and overall environment.\n"
        "  - Focus on specific, recurring themes; mention both positive and negative aspects.\n"
        "\n"
        f"Feedback:\n{feedback.strip()}\n"
    )


def _string_list(data: dict, key: str) -> list[str]:
    raw = data.get(key)
    if not isinstance(raw, list):
        raise LLMContractError(f"Feedback: '{key}' must be a list of strings.")

    out = []
    for item in raw:
        if not isinstance(item, str):
            raise LLMContractError(f"Feedback: all items in '{key}' must be strings.")
        s = item.strip()
        if s:
            out.append(s)
    return out


def parse_feedback_analysis(text: str) -> dict:
    """
    Разбирает JSON-ответ модели и проверяет его форму.
    Тональность приводится к нижнему регистру и должна быть одной из SENTIMENTS.
    """
    try:
        data = json.loads(text)
    except ValueError:
        snippet = text[:200].replace("\n", " ")
        raise LLMContractError(f"Feedback: invalid JSON. Snippet: {snippet!r}")

    if not isinstance(data, dict):
        raise LLMContractError("Feedback: expected a JSON object.")

    sentiment = data.get("overallSentiment")
    if not isinstance(sentiment, str) or sentiment.strip().lower() not in SENTIMENTS:
        raise LLMContractError("Feedback: 'overallSentiment' must be positive, negative or neutral.")

    return {
        "overallSentiment": sentiment.strip().lower(),
        "keyTrends": _string_list(data, "keyTrends"),
        "suggestedImprovements": _string_list(data, "suggestedImprovements"),
    }
