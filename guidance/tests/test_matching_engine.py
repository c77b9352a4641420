"""
Test the matching engine: scoring, ranking, diversity and explicit selection.
"""

import pytest
from pydantic import ValidationError

from guidance.logic.aggregator import aggregate_scores
from guidance.logic.catalog import CareerCatalog, default_catalog
from guidance.logic.contracts import Career, StudentProfile
from guidance.logic.engine import MatchingEngine
from guidance.logic.errors import CatalogLookupError
from guidance.logic.explainability import explain_factors, explain_match


def _career(id, salary, sector="business", education="certificate", **kwargs):
    return Career(
        id=id,
        title=id.replace("_", " ").title(),
        sector=sector,
        required_education=education,
        average_salary=salary,
        **kwargs,
    )


# =============================================================================
# SCORING
# =============================================================================

@pytest.mark.parametrize("profile", [
    StudentProfile(),
    StudentProfile(
        path="other_work",
        interests=["Technology"],
        education_goal="high_school",
        constraints=["earn_income_within_one_year", "limited_budget_for_school", "physical_limitations"],
        work_environment_preference="outdoor",
    ),
    StudentProfile(
        interests=["Healthcare", "Helping Others", "Science"],
        traits=["helpful", "detail_oriented"],
        academic_performance={"science": "excellent", "math": "excellent"},
        education_goal="associate",
        work_environment_preference="indoor",
    ),
])
def test_scores_stay_in_bounds(profile):
    for career in default_catalog():
        scored = aggregate_scores(profile, career)
        assert 0 <= scored.match_score <= 100


def test_healthcare_associate_student():
    """A healthcare student aiming for an associate degree gets a healthcare associate career on top."""
    profile = StudentProfile(path="other_work", interests=["Healthcare"], education_goal="associate")
    matches = MatchingEngine().match(profile)

    print("=" * 60)
    print("HEALTHCARE / ASSOCIATE")
    print("=" * 60)
    for match in matches[:5]:
        print(f"  #{match.rank}: {match.career.title} - {match.match_score}")

    top = matches[0]
    assert top.career.sector == "healthcare"
    assert top.career.required_education == "associate"
    assert top.match_score >= 70
    assert "Interest in healthcare" in top.reasoning_factors


def test_constraint_penalty_lowers_score():
    career = default_catalog().get("software_developer")
    free = StudentProfile(interests=["Technology"], education_goal="bachelor")
    constrained = free.model_copy(update={"constraints": ["earn_income_within_one_year"]})

    assert aggregate_scores(constrained, career).match_score < aggregate_scores(free, career).match_score
    assert "Takes more than a year before you can earn" not in aggregate_scores(constrained, career).factors


def test_environment_preference_scoring():
    outdoor = StudentProfile(work_environment_preference="outdoor")
    indoor_career = _career("office_clerk", 40000, work_environment="indoor")
    outdoor_career = _career("park_ranger", 40000, work_environment="outdoor")

    assert aggregate_scores(outdoor, outdoor_career).match_score > aggregate_scores(outdoor, indoor_career).match_score


# =============================================================================
# RANKING
# =============================================================================

def test_ties_broken_by_salary_then_catalog_order():
    catalog = CareerCatalog([
        _career("first_low", 40000),
        _career("second_high", 70000),
        _career("third_high", 70000),
    ])
    matches = MatchingEngine(catalog=catalog).match(StudentProfile(path="other_work"))

    assert [m.career_id for m in matches] == ["second_high", "third_high", "first_low"]
    assert [m.rank for m in matches] == [1, 2, 3]


def test_limit_truncates_results():
    profile = StudentProfile(path="other_work", interests=["Business"])
    assert len(MatchingEngine().match(profile, limit=5)) == 5
    assert len(MatchingEngine(default_limit=7).match(profile)) == 7


def test_exploring_path_returns_three_sectors():
    profile = StudentProfile(path="exploring", interests=["Healthcare"], education_goal="associate")
    matches = MatchingEngine().match(profile)

    sectors = [m.career.sector for m in matches]
    assert len(matches) == 3
    assert len(set(sectors)) == 3
    assert sectors[0] == "healthcare"
    assert matches[0].match_score >= matches[1].match_score >= matches[2].match_score


def test_exploring_with_too_few_sectors_returns_what_exists():
    catalog = CareerCatalog([
        _career("clerk", 40000, sector="business"),
        _career("cashier", 30000, sector="business"),
        _career("nurse_aide", 35000, sector="healthcare"),
    ])
    matches = MatchingEngine(catalog=catalog).match(StudentProfile(path="exploring"))

    assert [m.career_id for m in matches] == ["clerk", "nurse_aide"]


# =============================================================================
# EXPLICIT SELECTION
# =============================================================================

def test_explicit_selection_pinned_first_even_with_low_score():
    profile = StudentProfile(
        path="other_work",
        interests=["Technology"],
        education_goal="bachelor",
        explicit_career="welder",
    )
    matches = MatchingEngine().match(profile)

    top = matches[0]
    assert top.career_id == "welder"
    assert top.explicit_selection
    assert top.rank == 1
    assert top.reasoning_factors[0] == "Named directly by you"
    assert top.match_score < matches[1].match_score
    assert [m.career_id for m in matches].count("welder") == 1
    assert not any(m.explicit_selection for m in matches[1:])


def test_explicit_selection_by_title():
    profile = StudentProfile(path="other_work", explicit_career="Registered Nurse")
    assert MatchingEngine().match(profile)[0].career_id == "registered_nurse"


def test_explicit_selection_on_exploring_path():
    profile = StudentProfile(path="exploring", interests=["Healthcare"], explicit_career="welder")
    matches = MatchingEngine().match(profile)

    assert matches[0].career_id == "welder"
    assert len(matches) == 3
    assert len({m.career.sector for m in matches}) == 3


def test_unknown_explicit_selection_is_ignored():
    profile = StudentProfile(path="other_work", interests=["Healthcare"], explicit_career="Astronaut")
    matches = MatchingEngine().match(profile)

    assert matches
    assert not any(m.explicit_selection for m in matches)


# =============================================================================
# CATALOG / LABOR MARKET
# =============================================================================

def test_catalog_is_read_only():
    catalog = default_catalog()
    career = catalog.get("electrician")

    with pytest.raises(ValidationError):
        career.average_salary = 1
    assert isinstance(catalog.all(), tuple)
    assert len(catalog.sectors()) == 7


def test_catalog_lookup():
    catalog = default_catalog()
    assert catalog.lookup("dental-hygienist").id == "dental_hygienist"
    assert catalog.lookup("HVAC Technician").id == "hvac_technician"
    with pytest.raises(CatalogLookupError):
        catalog.lookup("astronaut")


def test_labor_market_attached():
    profile = StudentProfile(path="other_work", interests=["Healthcare"], education_goal="associate")
    top = MatchingEngine().match(profile)[0]

    assert top.local_demand == "high"
    assert top.salary_min < top.career.average_salary < top.salary_max


class BrokenLaborMarket:
    def estimate(self, zip_code, careers):
        raise RuntimeError("upstream down")


def test_labor_market_failure_does_not_fail_matching():
    profile = StudentProfile(path="other_work", interests=["Healthcare"])
    matches = MatchingEngine(labor_market=BrokenLaborMarket()).match(profile)

    assert matches
    assert all(m.local_demand == "unknown" for m in matches)
    assert all(m.salary_min is None for m in matches)


# =============================================================================
# EXPLANATIONS
# =============================================================================

def test_explanation_format():
    text = explain_factors(82, ["Interest in healthcare", "Associate degree matches your education goal"])
    assert text == "82% match because interest in healthcare, associate degree matches your education goal."


def test_explanation_without_factors():
    assert explain_factors(50, []) == "50% match because general profile fit."


def test_explanation_uses_only_match_factors():
    profile = StudentProfile(path="other_work", interests=["Healthcare"], education_goal="associate")
    match = MatchingEngine().match(profile)[0]
    text = explain_match(match)

    assert text.startswith(f"{match.match_score}% match because ")
    assert "weight" not in text
    assert "0.4" not in text
