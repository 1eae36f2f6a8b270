"""Trend-idea endpoint for short-video creators."""

from fastapi import APIRouter, Depends, Query

from kenai.api.deps import get_llm
from kenai.core.models import TrendsResponse
from kenai.services.llm import BaseLLM
from kenai.services.trends import generate_trends

router = APIRouter(tags=["trends"])


@router.get("/trends", response_model=TrendsResponse)
async def trends(niche: str = Query(""), llm: BaseLLM = Depends(get_llm)):
    """3-5 clip ideas with hashtags for a niche; never fails."""
    return await generate_trends(llm, niche)
