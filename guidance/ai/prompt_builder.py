from typing import Any, Dict, Mapping, Optional
import json

from ..logic.constants import TIMELINE_BY_EDUCATION
from ..logic.contracts import CareerMatch, StudentProfile
from .safety_rules import SAFETY_RULES, SYSTEM_ROLE_DEFINITION, JSON_OUTPUT_FORMAT_INSTRUCTION


def build_system_prompt(schema_hint: str = JSON_OUTPUT_FORMAT_INSTRUCTION) -> str:
    """Constructs the static system prompt."""
    rules_str = "\n".join([f"- {rule}" for rule in SAFETY_RULES])

    return f"""{SYSTEM_ROLE_DEFINITION}

SAFETY RULES (NON-NEGOTIABLE):
{rules_str}

OUTPUT FORMAT:
{schema_hint}
"""


def build_user_prompt(
    profile: StudentProfile,
    match: CareerMatch,
    answers: Optional[Mapping[str, Any]] = None,
) -> str:
    """
    Constructs the user prompt for one career.
    Only a compact profile summary is sent; raw answers are limited to narratives.
    """
    career = match.career

    # 1. Profile summary
    profile_summary = {
        "grade": profile.grade,
        "interests": profile.interests,
        "strong_subjects": profile.skills,
        "education_goal": profile.education_goal,
        "work_environment": profile.work_environment_preference,
        "constraints": profile.constraints,
        "traits": profile.traits,
    }

    # 2. Career facts
    career_summary = {
        "title": career.title,
        "sector": career.sector,
        "required_education": career.required_education,
        "certifications": list(career.certifications),
        "average_salary": career.average_salary,
        "growth_outlook": career.growth_outlook,
        "typical_timeline": TIMELINE_BY_EDUCATION.get(career.required_education),
    }

    narratives = _narratives(profile, answers)

    selection_note = (
        "The student named this career directly. Build the plan around it."
        if match.explicit_selection
        else f"This career scored {match.match_score}/100 for the student."
    )

    return f"""
STUDENT PROFILE:
{json.dumps(profile_summary, indent=2)}

IN THEIR OWN WORDS:
{json.dumps(narratives, indent=2)}

CAREER:
{json.dumps(career_summary, indent=2)}

CONTEXT:
{selection_note}
Match reasons: {", ".join(match.reasoning_factors) or "general profile fit"}

TASK:
Write a step-by-step plan for this student to become a {career.title}.
Stay inside the {career.sector} field. Adhere strictly to the safety rules.
"""


def _narratives(profile: StudentProfile, answers: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    narratives = {
        "interests": profile.interests_narrative,
        "experience": profile.experience_narrative,
        "inspiration": profile.inspiration_narrative,
    }
    if answers and answers.get("named_career"):
        narratives["named_career"] = answers.get("named_career")
    return {k: v for k, v in narratives.items() if v}
