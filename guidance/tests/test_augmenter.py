"""
Test recommendation augmentation: generative path, fallback path and the academic plan.
"""

import json
import re
import time

import pytest

from guidance.ai.augmenter import RecommendationAugmenter, clean_json_text, parse_generated
from guidance.ai.fallback import build_fallback_recommendation
from guidance.logic.catalog import default_catalog
from guidance.logic.contracts import CareerMatch, StudentProfile
from guidance.logic.errors import ProviderError, ProviderMalformedResponseError
from guidance.logic.output_assembler import build_academic_plan


# Words that belong to one sector's advice and should never show up in another's
SECTOR_TERMS = {
    "healthcare": ["patient", "clinical", "anatomy", "medical terminology"],
    "technology": ["programming", "python", "coding", "software", "github"],
    "infrastructure": ["osha", "blueprint", "contractor", "job site"],
    "creative": ["portfolio", "adobe", "color theory"],
    "business": ["accounting", "quickbooks", "marketing", "deca"],
    "public-service": ["law enforcement", "fire science", "explorer", "criminal justice"],
    "education": ["lesson", "classroom", "child development"],
}


def _match(career_id, score=70, explicit=False):
    career = default_catalog().get(career_id)
    return CareerMatch(
        career_id=career.id,
        career=career,
        match_score=score,
        reasoning_factors=["Interest in healthcare"],
        explicit_selection=explicit,
        rank=1,
    )


def _texts(recommendation):
    parts = list(recommendation.pathway_steps)
    parts += [f"{g.skill} {g.how_to_acquire}" for g in recommendation.skill_gaps]
    parts += [a.description for a in recommendation.action_items]
    parts += [f"{c.course} {c.reason}" for c in recommendation.courses]
    text = " ".join(parts).lower()
    return text.replace(recommendation.career_title.lower(), "")


def _generated_payload(title):
    return {
        "pathway_steps": [
            f"Take biology and chemistry to prepare for {title} training",
            f"Earn the degree required to work as a {title}",
            "Pass the licensing exam",
        ],
        "timeline": "2-3 years",
        "skill_gaps": [
            {"skill": "Medical terminology", "importance": "Critical", "how_to_acquire": "Community college course"},
            {"skill": "Patient care", "importance": "Important", "how_to_acquire": "Volunteer at a clinic"},
        ],
        "action_items": [
            {"priority": "high", "timeline": "immediate", "category": "education",
             "description": "Sign up for anatomy next semester"},
            {"priority": "medium", "timeline": "short-term", "category": "experience",
             "description": "Shadow a nurse for a day"},
        ],
        "courses": [
            {"course": "Biology", "relevance": "essential", "reason": "Core science for health careers"},
        ],
    }


class GoodProvider:
    """Answers with a valid plan for whatever career the prompt names."""

    def __init__(self):
        self.calls = 0

    def request(self, prompt, schema_hint, timeout):
        self.calls += 1
        title = re.search(r'"title": "([^"]+)"', prompt).group(1)
        return json.dumps(_generated_payload(title))


class FailingProvider:
    def __init__(self):
        self.calls = 0

    def request(self, prompt, schema_hint, timeout):
        self.calls += 1
        raise ProviderError("service unavailable")


class SlowProvider:
    def request(self, prompt, schema_hint, timeout):
        time.sleep(1.0)
        return "{}"


class StaticProvider:
    def __init__(self, text):
        self.text = text

    def request(self, prompt, schema_hint, timeout):
        return self.text


class FlakyProvider(GoodProvider):
    """Fails once, then answers."""

    def request(self, prompt, schema_hint, timeout):
        if self.calls == 0:
            self.calls += 1
            raise ProviderError("temporary failure")
        return super().request(prompt, schema_hint, timeout)


def _assert_complete_fallback(recommendation):
    assert recommendation.source == "fallback"
    assert recommendation.pathway_steps
    assert len(recommendation.skill_gaps) >= 2
    assert len(recommendation.action_items) >= 2
    assert recommendation.timeline


# =============================================================================
# FALLBACK
# =============================================================================

def test_fallback_is_deterministic():
    profile = StudentProfile(interests=["Healthcare"])
    match = _match("registered_nurse")

    first = build_fallback_recommendation(match, profile)
    second = build_fallback_recommendation(match, profile)
    assert first.model_dump_json() == second.model_dump_json()


def test_fallback_mentions_career_and_timeline():
    recommendation = build_fallback_recommendation(_match("registered_nurse"), StudentProfile())

    assert recommendation.career_title == "Registered Nurse"
    assert any("Registered Nurse" in step for step in recommendation.pathway_steps)
    assert recommendation.timeline == "2-3 years"
    assert "RN License" in [g.skill for g in recommendation.skill_gaps]


@pytest.mark.parametrize("career", list(default_catalog()), ids=lambda c: c.id)
def test_fallback_stays_inside_its_sector(career):
    recommendation = build_fallback_recommendation(_match(career.id), StudentProfile())
    text = _texts(recommendation)

    _assert_complete_fallback(recommendation)
    assert 3 <= len(recommendation.pathway_steps) <= 6
    for sector, terms in SECTOR_TERMS.items():
        if sector == career.sector:
            continue
        leaked = [term for term in terms if term in text]
        assert not leaked, f"{career.id} advice mentions {sector} terms: {leaked}"


def test_fallback_adds_paid_training_for_income_constraint():
    match = _match("registered_nurse")
    plain = build_fallback_recommendation(match, StudentProfile())
    constrained = build_fallback_recommendation(
        match, StudentProfile(constraints=["earn_income_within_one_year"])
    )

    assert len(constrained.action_items) == len(plain.action_items) + 1
    assert "paid training" in constrained.action_items[1].description


def test_fallback_actions_follow_grade():
    """Younger students plan ahead; seniors and graduates get near-term steps only."""
    match = _match("registered_nurse")

    freshman = build_fallback_recommendation(match, StudentProfile(grade="9"))
    electives = [a for a in freshman.action_items if "electives" in a.description]
    assert len(electives) == 1
    assert electives[0].timeline == "long-term"
    assert any(a.timeline == "long-term" and a.category == "skills" for a in freshman.action_items)

    senior = build_fallback_recommendation(match, StudentProfile(grade="12"))
    descriptions = [a.description for a in senior.action_items]
    assert "Apply to Registered Nurse training programs and financial aid before spring deadlines." in descriptions
    assert all(a.timeline != "long-term" for a in senior.action_items)
    assert len(senior.action_items) <= 6


def test_fallback_actions_without_grade_skip_grade_step():
    recommendation = build_fallback_recommendation(_match("registered_nurse"), StudentProfile())
    text = " ".join(a.description for a in recommendation.action_items)
    assert "electives around" not in text
    assert "spring deadlines" not in text


def test_dispatcher_advice_is_about_calls_not_fitness():
    recommendation = build_fallback_recommendation(_match("emergency_dispatcher"), StudentProfile())
    text = _texts(recommendation)

    assert "agility" not in text
    assert "fitness" not in text
    assert "call" in text


@pytest.mark.parametrize("career_id", [
    "civil_engineer",
    "mechanical_engineer",
    "structural_engineer",
    "electrical_engineer",
    "aerospace_engineer",
])
def test_engineer_advice_skips_trade_training(career_id):
    recommendation = build_fallback_recommendation(_match(career_id), StudentProfile())
    text = _texts(recommendation)

    for term in ("osha", "contractor", "job site", "pre-apprenticeship"):
        assert term not in text
    assert "calculus" in text
    assert "Professional Engineer (PE) License" in [g.skill for g in recommendation.skill_gaps]


def test_trade_careers_keep_sector_advice():
    recommendation = build_fallback_recommendation(_match("welder"), StudentProfile())
    assert "osha" in _texts(recommendation)


def test_no_provider_uses_fallback(settings):
    profile = StudentProfile(interests=["Healthcare"])
    matches = [_match("registered_nurse"), _match("dental_hygienist"), _match("welder")]

    recommendations = RecommendationAugmenter(provider=None, settings=settings).augment(profile, matches)
    assert [r.career_id for r in recommendations] == ["registered_nurse", "dental_hygienist", "welder"]
    for recommendation in recommendations:
        _assert_complete_fallback(recommendation)


# =============================================================================
# GENERATIVE
# =============================================================================

def test_valid_generative_response_accepted(settings):
    provider = GoodProvider()
    augmenter = RecommendationAugmenter(provider=provider, settings=settings)

    recommendation = augmenter.recommend(StudentProfile(), _match("registered_nurse"))
    assert recommendation.source == "generative"
    assert recommendation.career_id == "registered_nurse"
    assert recommendation.sector == "healthcare"
    assert provider.calls == 1


def test_provider_failure_falls_back_after_retry(settings):
    provider = FailingProvider()
    augmenter = RecommendationAugmenter(provider=provider, settings=settings)

    result = augmenter.attempt_generative(StudentProfile(), _match("registered_nurse"))
    assert not result.ok
    assert result.attempts == 2
    assert provider.calls == 2

    _assert_complete_fallback(augmenter.recommend(StudentProfile(), _match("registered_nurse")))


def test_retry_can_recover(settings):
    provider = FlakyProvider()
    result = RecommendationAugmenter(provider=provider, settings=settings).attempt_generative(
        StudentProfile(), _match("registered_nurse")
    )
    assert result.ok
    assert result.attempts == 2


def test_provider_timeout_falls_back(settings):
    settings = settings.model_copy(update={"ai_timeout_seconds": 0.05})
    augmenter = RecommendationAugmenter(provider=SlowProvider(), settings=settings)

    start = time.perf_counter()
    recommendation = augmenter.recommend(StudentProfile(), _match("welder"))
    elapsed = time.perf_counter() - start

    _assert_complete_fallback(recommendation)
    assert elapsed < 0.9


@pytest.mark.parametrize("raw", [
    "not json at all",
    "{\"pathway_steps\": [\"x\"]}",
    "{broken",
])
def test_malformed_responses_fall_back(settings, raw):
    augmenter = RecommendationAugmenter(provider=StaticProvider(raw), settings=settings)
    _assert_complete_fallback(augmenter.recommend(StudentProfile(), _match("registered_nurse")))


@pytest.mark.parametrize("field, index, key, value", [
    ("skill_gaps", 0, "skill", ""),
    ("skill_gaps", 0, "how_to_acquire", "   "),
    ("skill_gaps", 1, "importance", "banana"),
    ("action_items", 0, "priority", "whenever"),
    ("action_items", 1, "timeline", "someday"),
    ("action_items", 0, "category", "vibes"),
    ("action_items", 1, "description", ""),
    ("courses", 0, "course", ""),
    ("courses", 0, "relevance", "optional"),
])
def test_invalid_field_values_rejected(field, index, key, value):
    payload = _generated_payload("Registered Nurse")
    payload[field][index][key] = value

    with pytest.raises(ProviderMalformedResponseError):
        parse_generated(json.dumps(payload), _match("registered_nurse"))


def test_blank_pathway_step_or_timeline_rejected():
    payload = _generated_payload("Registered Nurse")
    payload["pathway_steps"].append("   ")
    with pytest.raises(ProviderMalformedResponseError):
        parse_generated(json.dumps(payload), _match("registered_nurse"))

    payload = _generated_payload("Registered Nurse")
    payload["timeline"] = " "
    with pytest.raises(ProviderMalformedResponseError):
        parse_generated(json.dumps(payload), _match("registered_nurse"))


def test_invalid_enum_value_falls_back(settings):
    payload = _generated_payload("Registered Nurse")
    payload["action_items"][0]["priority"] = "whenever"
    augmenter = RecommendationAugmenter(provider=StaticProvider(json.dumps(payload)), settings=settings)

    recommendation = augmenter.recommend(StudentProfile(), _match("registered_nurse"))
    _assert_complete_fallback(recommendation)
    assert {a.priority for a in recommendation.action_items} <= {"high", "medium", "low"}


def test_generic_response_rejected():
    payload = _generated_payload("Registered Nurse")
    payload["pathway_steps"] = ["Research [Career]", "Get a degree", "Apply for jobs"]

    with pytest.raises(ProviderMalformedResponseError):
        parse_generated(json.dumps(payload), _match("registered_nurse"))


def test_response_for_wrong_career_rejected():
    payload = _generated_payload("Welder")
    with pytest.raises(ProviderMalformedResponseError):
        parse_generated(json.dumps(payload), _match("registered_nurse"))


def test_clean_json_text_strips_fences():
    raw = "Here you go:\n```json\n{\"a\": 1}\n```"
    assert json.loads(clean_json_text(raw)) == {"a": 1}

    with pytest.raises(ProviderMalformedResponseError):
        clean_json_text("no braces here")


def test_calls_are_sequential_with_delay(settings):
    settings = settings.model_copy(update={"ai_inter_call_delay_seconds": 1.5})
    sleeps = []
    augmenter = RecommendationAugmenter(provider=GoodProvider(), settings=settings, sleep=sleeps.append)

    matches = [_match("registered_nurse"), _match("dental_hygienist"), _match("medical_assistant")]
    recommendations = augmenter.augment(StudentProfile(), matches)

    assert [r.source for r in recommendations] == ["generative"] * 3
    assert sleeps == [1.5, 1.5]


def test_augment_only_covers_top_n(settings):
    matches = [_match(c.id) for c in list(default_catalog())[:5]]
    recommendations = RecommendationAugmenter(settings=settings).augment(StudentProfile(), matches, top_n=2)
    assert len(recommendations) == 2


# =============================================================================
# ACADEMIC PLAN
# =============================================================================

def test_academic_plan_merges_shared_courses():
    profile = StudentProfile()
    nurse = build_fallback_recommendation(_match("registered_nurse"), profile)
    teacher = build_fallback_recommendation(_match("elementary_school_teacher"), profile)

    plan = build_academic_plan([nurse, teacher])
    by_course = {c.course: c for c in plan.courses}

    psychology = by_course["Psychology"]
    assert psychology.relevance == "recommended"
    assert psychology.supports == ["Registered Nurse", "Elementary School Teacher"]
    assert len(plan.courses) == len(by_course)

    order = {"essential": 0, "recommended": 1, "helpful": 2}
    ranks = [order[c.relevance] for c in plan.courses]
    assert ranks == sorted(ranks)


def _plan_inputs():
    profile = StudentProfile()
    return [
        build_fallback_recommendation(_match("registered_nurse"), profile),
        build_fallback_recommendation(_match("elementary_school_teacher"), profile),
    ]


def _titles(courses):
    return [c.course for c in courses]


def test_academic_plan_for_underclassman():
    plan = build_academic_plan(_plan_inputs(), grade="9")

    assert plan.grade == "9"
    assert {c.relevance for c in plan.current_year} == {"essential"}
    assert {c.relevance for c in plan.next_year} == {"recommended"}
    assert {c.relevance for c in plan.long_term} == {"helpful"}
    assert all(c.timing == "current_year" for c in plan.current_year)
    assert sorted(_titles(plan.courses)) == sorted(
        _titles(plan.current_year) + _titles(plan.next_year) + _titles(plan.long_term)
    )


def test_academic_plan_for_senior_has_no_next_year():
    plan = build_academic_plan(_plan_inputs(), grade="12")

    assert plan.next_year == []
    assert "Psychology" in _titles(plan.current_year)
    assert {c.relevance for c in plan.current_year} == {"essential", "recommended"}
    assert {c.relevance for c in plan.long_term} == {"helpful"}


def test_academic_plan_for_graduate_is_long_term():
    plan = build_academic_plan(_plan_inputs(), grade="graduated")

    assert plan.current_year == [] and plan.next_year == []
    assert len(plan.long_term) == len(plan.courses)


def test_academic_plan_without_grade_plans_like_a_junior():
    assert build_academic_plan(_plan_inputs()).model_dump(exclude={"grade"}) == \
        build_academic_plan(_plan_inputs(), grade="11").model_dump(exclude={"grade"})


def test_submission_with_failing_provider(settings, other_work_responses):
    """The whole pipeline still returns complete recommendations when the provider is down."""
    from guidance.logic.runner import AssessmentRunner

    runner = AssessmentRunner(settings=settings, provider=FailingProvider())
    result = runner.submit(other_work_responses, "other_work")

    assert len(result.recommendations) == settings.top_recommendations
    for recommendation in result.recommendations:
        _assert_complete_fallback(recommendation)
    assert len(result.explanations) == len(result.matches)


class RecordingProvider(GoodProvider):
    """Keeps every prompt it was sent."""

    def __init__(self):
        super().__init__()
        self.prompts = []

    def request(self, prompt, schema_hint, timeout):
        self.prompts.append(prompt)
        return super().request(prompt, schema_hint, timeout)


def test_prompt_omits_answers_from_other_paths(settings, exploring_responses):
    """An answer only another path asks for never reaches the provider."""
    from guidance.logic.runner import AssessmentRunner

    provider = RecordingProvider()
    exploring_responses["named_career"] = "Dragon Tamer"
    result = AssessmentRunner(settings=settings, provider=provider).submit(exploring_responses, "exploring")

    assert provider.prompts
    assert all("Dragon Tamer" not in prompt for prompt in provider.prompts)
    assert "named_career" in {w.question_id for w in result.validation.warnings}


def test_prompt_keeps_named_career_on_its_own_path(settings, other_work_responses):
    from guidance.logic.runner import AssessmentRunner

    provider = RecordingProvider()
    other_work_responses["named_career"] = "Dragon Tamer"
    AssessmentRunner(settings=settings, provider=provider).submit(other_work_responses, "other_work")

    assert any("Dragon Tamer" in prompt for prompt in provider.prompts)


def test_submission_plan_uses_student_grade(settings, other_work_responses):
    from guidance.logic.runner import AssessmentRunner

    other_work_responses["grade"] = "12"
    result = AssessmentRunner(settings=settings, use_default_provider=False).submit(other_work_responses, "other_work")

    assert result.academic_plan.grade == "12"
    assert result.academic_plan.next_year == []
    assert result.academic_plan.current_year
