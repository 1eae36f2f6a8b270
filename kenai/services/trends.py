"""Short-video idea generator.

Asks the LLM for 3-5 clip ideas for a niche and validates the JSON answer.
Any failure, or an answer without ideas, yields a fixed fallback list so the
endpoint always returns something usable.
"""

import json
import logging

from pydantic import ValidationError

from kenai.core.config import get_settings
from kenai.core.models import TrendIdea, TrendsResponse
from kenai.core.utils import strip_code_fences
from kenai.services.llm import BaseLLM

logger = logging.getLogger(__name__)

DEFAULT_NICHE = "broad Swedish audience, Swedish TikTok, motivation"

SYSTEM_PROMPT = (
    "You are a Swedish social media expert who helps creators make short "
    "TikTok / Instagram Reels / YouTube Shorts clips. You like clear hooks, "
    "simple language and mix Swedish and English hashtags."
)

FALLBACK = TrendsResponse(
    platform="ai_niche_mock",
    country="SE",
    items=[
        TrendIdea(
            title="Gym motivation 2025 - before/after training",
            idea="Show clips of being tired before the gym and cut to the energy after the session.",
            hashtags=["#gymtok", "#svensktiktok", "#träning", "#motivation", "#beforeafter", "#glowup"],
        ),
        TrendIdea(
            title="Money tips - 1 thing to change in 2025",
            idea="A short clip where you name ONE concrete habit that improves your finances.",
            hashtags=["#ekonomi", "#pengar", "#sparande", "#investera", "#aktier", "#moneytips"],
        ),
        TrendIdea(
            title="POV: You start taking your life seriously",
            idea="Fast cuts: gym, working at the computer, cooking, reading a book - tempo and energy.",
            hashtags=["#glowup", "#selfimprovement", "#2025", "#svensktiktok", "#mindset", "#grind"],
        ),
    ],
)


def build_prompt(niche: str, language: str) -> str:
    return (
        "Create 3-5 ideas for short clips based on what is trending online right now.\n\n"
        f"Niche / audience: {niche}.\n\n"
        "For each idea return:\n"
        '- "title": a short title\n'
        f'- "idea": 1-2 sentences in {language} describing the clip\n'
        '- "hashtags": an array of 8-15 hashtags, mixed Swedish/English, relevant to the idea\n\n'
        "Return PURE JSON in the format:\n"
        '{"platform":"ai_niche","country":"SE","items":[{"title":"...","idea":"...","hashtags":["..."]}]}'
    )


async def generate_trends(llm: BaseLLM, niche: str = "") -> TrendsResponse:
    """Return clip ideas for ``niche``, or the fallback list."""
    niche = niche.strip() or DEFAULT_NICHE
    prompt = build_prompt(niche, get_settings().summary_language)

    try:
        raw = await llm.generate(prompt, system=SYSTEM_PROMPT, temperature=0.8)
    except Exception:
        logger.warning("Trend generation failed, returning fallback", exc_info=True)
        return FALLBACK

    try:
        parsed = TrendsResponse.model_validate(json.loads(strip_code_fences(raw)))
    except (json.JSONDecodeError, ValidationError) as exc:
        logger.error("Could not parse trend JSON: %s", exc)
        return FALLBACK

    if not parsed.items:
        logger.warning("LLM returned no trend ideas, returning fallback")
        return FALLBACK
    return parsed
