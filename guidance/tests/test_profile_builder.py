"""
Test StudentProfile construction from raw answers.
"""

import copy

from guidance.logic.constants import PathId
from guidance.logic.profile_builder import build_profile


def test_defaults_for_empty_answers():
    profile = build_profile({}, "exploring")

    assert profile.path == PathId.EXPLORING
    assert profile.interests == ["General Exploration"]
    assert profile.education_goal == "certificate"
    assert profile.work_environment_preference == "no_preference"
    assert profile.zip_code == "00000"
    assert profile.grade is None
    assert profile.skills == []
    assert profile.explicit_career is None


def test_subject_ratings_become_skills_and_tiers(other_work_responses):
    profile = build_profile(other_work_responses, "other_work")

    assert sorted(profile.skills) == ["math", "science"]
    assert profile.academic_performance == {
        "math": "good",
        "science": "excellent",
        "english": "average",
        "art": "struggling",
    }
    assert profile.education_goal == "associate"
    assert profile.zip_code == "30301"
    assert profile.grade == "11"


def test_interests_per_path(hands_on_responses, other_work_responses, exploring_responses):
    hands_on = build_profile(hands_on_responses, "hands_on")
    assert hands_on.interests == ["Hands-on Work"]
    assert hands_on.work_environment_preference == "outdoor"

    other_work = build_profile(other_work_responses, "other_work")
    assert other_work.interests == ["Healthcare", "Helping Others"]
    assert other_work.career_category == "healthcare"

    exploring = build_profile(exploring_responses, "exploring")
    assert exploring.interests == ["Creative Arts", "Hands-on Work"]
    assert exploring.traits == ["creative", "hands_on"]


def test_narratives_copied_verbatim(exploring_responses):
    text = "  I like drawing,   and fixing up my BIKE!  "
    exploring_responses["undecided_interests_hobbies"] = text
    exploring_responses["impact_inspiration"] = "My aunt, a nurse."

    profile = build_profile(exploring_responses, "exploring")
    assert profile.interests_narrative == text
    assert profile.inspiration_narrative == "My aunt, a nurse."


def test_explicit_career_from_follow_up(other_work_responses):
    other_work_responses["healthcare_career"] = "registered_nurse"
    profile = build_profile(other_work_responses, "other_work")
    assert profile.explicit_career == "registered_nurse"


def test_not_sure_is_not_an_explicit_career(other_work_responses, hands_on_responses):
    other_work_responses["healthcare_career"] = "not_sure"
    assert build_profile(other_work_responses, "other_work").explicit_career is None
    assert build_profile(hands_on_responses, "hands_on").explicit_career is None


def test_named_career_used_when_no_follow_up(other_work_responses):
    other_work_responses["named_career"] = "  Dental Hygienist "
    profile = build_profile(other_work_responses, "other_work")
    assert profile.explicit_career == "Dental Hygienist"


def test_ignored_answers_do_not_leak(other_work_responses):
    """Follow-ups whose trigger is not met never reach the profile."""
    other_work_responses["technology_career"] = "software_developer"
    other_work_responses["undecided_personal_traits"] = ["leader"]

    profile = build_profile(other_work_responses, "other_work")
    assert profile.explicit_career is None
    assert profile.traits == []


def test_none_constraint_dropped(other_work_responses):
    other_work_responses["career_constraints"] = ["none"]
    assert build_profile(other_work_responses, "other_work").constraints == []

    other_work_responses["career_constraints"] = ["earn_income_within_one_year"]
    assert build_profile(other_work_responses, "other_work").constraints == ["earn_income_within_one_year"]


def test_build_profile_is_pure(exploring_responses):
    snapshot = copy.deepcopy(exploring_responses)

    first = build_profile(exploring_responses, "exploring")
    second = build_profile(exploring_responses, "exploring")

    assert first == second
    assert exploring_responses == snapshot
