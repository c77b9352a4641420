import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

# In-memory database and no live provider for the whole test run
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["USE_REAL_AI"] = "false"

import pytest

from guidance.config import Settings
from guidance.logic.runner import AssessmentRunner


BASE_RESPONSES = {
    "grade": "11",
    "zip_code": "30301",
    "education_commitment": "associate",
    "subject_strengths": {"math": 4, "science": 5, "english": 3, "art": 2},
}


@pytest.fixture
def settings():
    return Settings(
        use_real_ai=False,
        ai_timeout_seconds=0.2,
        ai_max_retries=1,
        ai_inter_call_delay_seconds=0,
    )


@pytest.fixture
def runner(settings):
    return AssessmentRunner(settings=settings, use_default_provider=False)


@pytest.fixture
def hands_on_responses():
    return {
        **BASE_RESPONSES,
        "work_preference_main": "hard_hat",
        "hard_hat_specific": "building_fixing",
        "building_career": "not_sure",
        "work_environment": "outdoor",
    }


@pytest.fixture
def other_work_responses():
    return {
        **BASE_RESPONSES,
        "work_preference_main": "non_hard_hat",
        "non_hard_hat_specific": "healthcare",
        "other_work_interests": ["helping_others"],
    }


@pytest.fixture
def exploring_responses():
    return {
        **BASE_RESPONSES,
        "work_preference_main": "unable_to_decide",
        "undecided_interests_hobbies": "I like drawing and fixing up my bike",
        "undecided_personal_traits": ["creative", "hands_on"],
        "interest_areas": ["creative", "building_fixing"],
    }
