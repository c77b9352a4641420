"""
Recommendation Augmenter

Enriches the top career matches with pathway steps, skill gaps, action items
and courses. The generative provider is tried first under a hard timeout;
any failure (no provider, timeout, bad JSON, schema mismatch, generic output)
is mapped to the rule-based fallback, so callers always get a complete
Recommendation.
"""

import json
import logging
import re
import time
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FuturesTimeoutError
from typing import Any, Callable, List, Mapping, Optional

from pydantic import BaseModel, Field, ValidationError

from ..config import Settings, get_settings
from ..logic.contracts import (
    ActionItem,
    CareerMatch,
    CourseSuggestion,
    Recommendation,
    SkillGap,
    StudentProfile,
)
from ..logic.errors import ProviderError, ProviderMalformedResponseError, ProviderTimeoutError
from .fallback import build_fallback_recommendation
from .prompt_builder import build_user_prompt
from .provider import GenerativeTextProvider
from .safety_rules import JSON_OUTPUT_FORMAT_INSTRUCTION

logger = logging.getLogger(__name__)

PLACEHOLDER_PATTERNS = (
    re.compile(r"\[[^\]]*\]"),
    re.compile(r"\b(lorem ipsum|tbd|todo|career x|placeholder)\b", re.IGNORECASE),
    re.compile(r"^\s*step\s*\d+\s*$", re.IGNORECASE),
)


class GeneratedRecommendation(BaseModel):
    """Schema the provider's JSON must satisfy."""
    pathway_steps: List[str] = Field(min_length=3, max_length=6)
    timeline: str = Field(min_length=1)
    skill_gaps: List[SkillGap] = Field(min_length=2, max_length=5)
    action_items: List[ActionItem] = Field(min_length=2, max_length=6)
    courses: List[CourseSuggestion] = Field(default_factory=list, max_length=8)

    class Config:
        str_strip_whitespace = True


class GenerationResult(BaseModel):
    """Outcome of one generative attempt: either a recommendation or an error."""
    career_id: str
    recommendation: Optional[Recommendation] = None
    error: Optional[str] = None
    attempts: int = 0

    @property
    def ok(self) -> bool:
        return self.recommendation is not None


# =============================================================================
# RESPONSE HANDLING
# =============================================================================

def clean_json_text(raw: str) -> str:
    """Strip code fences and any text outside the outermost braces."""
    text = raw.strip()
    text = re.sub(r"^```(?:json)?\s*", "", text)
    text = re.sub(r"\s*```$", "", text)
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end <= start:
        raise ProviderMalformedResponseError("No JSON object in provider response")
    return text[start:end + 1]


def _looks_generic(text: str) -> bool:
    return any(pattern.search(text) for pattern in PLACEHOLDER_PATTERNS)


def parse_generated(raw: str, match: CareerMatch) -> Recommendation:
    """Validate provider text against the schema; raises ProviderMalformedResponseError."""
    try:
        data = json.loads(clean_json_text(raw))
    except json.JSONDecodeError as e:
        raise ProviderMalformedResponseError(f"Invalid JSON: {e}") from e

    try:
        generated = GeneratedRecommendation.model_validate(data)
    except ValidationError as e:
        raise ProviderMalformedResponseError(f"Schema mismatch: {e.error_count()} error(s)") from e

    career = match.career
    if any(not step.strip() for step in generated.pathway_steps):
        raise ProviderMalformedResponseError("Pathway contains an empty step")
    if any(_looks_generic(step) for step in generated.pathway_steps):
        raise ProviderMalformedResponseError("Pathway contains placeholder text")
    if not any(career.title.lower() in step.lower() for step in generated.pathway_steps):
        raise ProviderMalformedResponseError(f"Pathway never mentions {career.title}")

    return Recommendation(
        career_id=career.id,
        career_title=career.title,
        sector=career.sector,
        pathway_steps=generated.pathway_steps,
        timeline=generated.timeline,
        skill_gaps=generated.skill_gaps,
        action_items=generated.action_items,
        courses=generated.courses,
        source="generative",
    )


def call_with_timeout(fn: Callable[[], str], timeout: float) -> str:
    """
    Run `fn` in a worker thread and stop waiting after `timeout` seconds.
    A call that overruns is abandoned, never joined.
    """
    executor = ThreadPoolExecutor(max_workers=1)
    future = executor.submit(fn)
    try:
        return future.result(timeout=timeout)
    except FuturesTimeoutError:
        future.cancel()
        raise ProviderTimeoutError(timeout)
    finally:
        executor.shutdown(wait=False)


def resolve_recommendation(
    result: GenerationResult,
    match: CareerMatch,
    profile: StudentProfile,
) -> Recommendation:
    """Map a generation result to a recommendation; failures become the fallback."""
    if result.ok:
        return result.recommendation
    return build_fallback_recommendation(match, profile)


# =============================================================================
# AUGMENTER
# =============================================================================

class RecommendationAugmenter:
    def __init__(
        self,
        provider: Optional[GenerativeTextProvider] = None,
        settings: Optional[Settings] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.provider = provider
        self.settings = settings or get_settings()
        self.sleep = sleep

    def attempt_generative(
        self,
        profile: StudentProfile,
        match: CareerMatch,
        answers: Optional[Mapping[str, Any]] = None,
    ) -> GenerationResult:
        """One bounded generative attempt (plus optional retry). Never raises."""
        if self.provider is None:
            return GenerationResult(career_id=match.career_id, error="Generative provider not configured")

        prompt = build_user_prompt(profile, match, answers)
        timeout = self.settings.ai_timeout_seconds
        max_attempts = 1 + self.settings.ai_max_retries
        last_error = None

        for attempt in range(1, max_attempts + 1):
            try:
                raw = call_with_timeout(
                    lambda: self.provider.request(prompt, JSON_OUTPUT_FORMAT_INSTRUCTION, timeout),
                    timeout,
                )
                recommendation = parse_generated(raw, match)
                return GenerationResult(career_id=match.career_id, recommendation=recommendation, attempts=attempt)
            except ProviderTimeoutError as e:
                last_error = str(e)
                logger.warning(f"⏱️ Provider timeout for {match.career_id} (attempt {attempt}/{max_attempts})")
            except ProviderError as e:
                last_error = str(e)
                logger.warning(f"⚠️ Provider failed for {match.career_id} (attempt {attempt}/{max_attempts}): {e}")
            except Exception as e:
                last_error = f"Unexpected provider error: {e}"
                logger.warning(f"⚠️ Unexpected provider error for {match.career_id}: {e}")

        return GenerationResult(career_id=match.career_id, error=last_error, attempts=max_attempts)

    def recommend(
        self,
        profile: StudentProfile,
        match: CareerMatch,
        answers: Optional[Mapping[str, Any]] = None,
    ) -> Recommendation:
        result = self.attempt_generative(profile, match, answers)
        if not result.ok:
            logger.info(f"🧩 Using rule-based recommendation for {match.career_id}")
        return resolve_recommendation(result, match, profile)

    def augment(
        self,
        profile: StudentProfile,
        matches: List[CareerMatch],
        answers: Optional[Mapping[str, Any]] = None,
        top_n: Optional[int] = None,
    ) -> List[Recommendation]:
        """
        Recommendations for the top N matches, generated one at a time with a
        delay between provider calls.
        """
        top_n = top_n or self.settings.top_recommendations
        selected = matches[:top_n]
        recommendations: List[Recommendation] = []

        for index, match in enumerate(selected):
            if index > 0 and self.provider is not None:
                self.sleep(self.settings.ai_inter_call_delay_seconds)
            recommendations.append(self.recommend(profile, match, answers))

        generated = sum(1 for r in recommendations if r.source == "generative")
        logger.info(f"📝 Built {len(recommendations)} recommendations ({generated} generative)")
        return recommendations
