from fastapi import APIRouter, HTTPException

import openai_client
import schemas
from feedback_logic import LLMContractError, LLMNotConfiguredError, LLMUpstreamError


router = APIRouter(
    prefix="/api/v1/feedback",
    tags=["Feedback"]
)


@router.post("/analyze")
async def analyze_feedback(data: schemas.FeedbackAnalyzeRequest):
    """
    AI-анализ отзыва: overallSentiment, keyTrends, suggestedImprovements.
    """
    try:
        return await openai_client.analyze_feedback(data.feedback)
    except LLMNotConfiguredError as e:
        raise HTTPException(status_code=503, detail=str(e))
    except (LLMUpstreamError, LLMContractError) as e:
        raise HTTPException(status_code=502, detail=str(e))
