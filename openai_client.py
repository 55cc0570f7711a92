import logging

from openai import AsyncOpenAI

import feedback_logic
from config import settings
from feedback_logic import LLMContractError, LLMNotConfiguredError, LLMUpstreamError

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = "Return only valid JSON. Do not include markdown or extra text."


def _client() -> AsyncOpenAI:
    if not settings.OPENAI_API_KEY:
        raise LLMNotConfiguredError("OpenAI API key is not configured.")
    return AsyncOpenAI(api_key=settings.OPENAI_API_KEY)


async def _call_text(prompt: str) -> str:
    client = _client()
    try:
        resp = await client.chat.completions.create(
            model=settings.OPENAI_MODEL_FEEDBACK,
            messages=[
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ],
            temperature=settings.OPENAI_TEMPERATURE_FEEDBACK,
            max_tokens=800,
            response_format={"type": "json_object"},
        )
    except Exception as e:
        raise LLMUpstreamError(f"OpenAI API error: {e}") from e

    content = (resp.choices[0].message.content or "").strip() if resp.choices else ""
    if not content:
        raise LLMContractError("LLM returned empty response text.")

    return content


async def analyze_feedback(feedback: str) -> dict:
    """
    Анализ отзыва клиента: общая тональность, ключевые темы, что улучшить.
    Raises:
        LLMUpstreamError: сеть / провайдер / не задан ключ
        LLMContractError: невалидный JSON или не та структура
    """
    prompt = feedback_logic.build_feedback_prompt(feedback, settings.BUSINESS_NAME)
    text = await _call_text(prompt)
    analysis = feedback_logic.parse_feedback_analysis(text)
    logger.info(f"💬 Отзыв проанализирован: {analysis['overallSentiment']}, тем: {len(analysis['keyTrends'])}")
    return analysis
