"""
Question Bank

The fixed questionnaire: common questions asked on every path, followed by
one table of path-specific questions per PathId. Loaded once at import.
"""

from typing import Dict, List, Optional, Sequence, Tuple

from .constants import BRANCHING_QUESTION_ID, PathId, QuestionType
from .contracts import ConditionalTrigger, Question, QuestionOption
from .errors import UnknownPathError


def _opts(*pairs: Tuple[str, str]) -> Tuple[QuestionOption, ...]:
    return tuple(QuestionOption(value=value, label=label) for value, label in pairs)


def _when(parent_id: str, parent_value: str) -> ConditionalTrigger:
    return ConditionalTrigger(parent_id=parent_id, parent_value=parent_value)


SUBJECTS = (
    "math",
    "science",
    "english",
    "art",
    "technology",
    "history",
    "physical_ed",
    "languages",
)

TRAIT_OPTIONS = _opts(
    ("hands_on", "I like working with my hands"),
    ("problem_solver", "I enjoy solving problems"),
    ("independent", "I work well on my own"),
    ("detail_oriented", "I pay close attention to details"),
    ("analytical", "I like analyzing information"),
    ("creative", "I am creative"),
    ("helpful", "I like helping people"),
    ("leader", "I like to take the lead"),
    ("communicator", "I communicate well"),
    ("team_player", "I enjoy working on a team"),
)

NOT_SURE = ("not_sure", "I'm not sure yet")


# =============================================================================
# COMMON QUESTIONS
# =============================================================================

COMMON_QUESTIONS: Tuple[Question, ...] = (
    Question(
        id="grade",
        text="What grade are you in?",
        type=QuestionType.SINGLE_CHOICE,
        options=_opts(
            ("9", "9th grade"),
            ("10", "10th grade"),
            ("11", "11th grade"),
            ("12", "12th grade"),
            ("graduated", "Already graduated"),
        ),
        required=True,
    ),
    Question(
        id="zip_code",
        text="What is your ZIP code?",
        type=QuestionType.FREE_TEXT,
        required=True,
        pattern=r"^\d{5}$",
        max_length=5,
    ),
    Question(
        id=BRANCHING_QUESTION_ID,
        text="Which kind of work sounds more like you?",
        type=QuestionType.SINGLE_CHOICE,
        options=_opts(
            ("hard_hat", "Hands-on work: building, fixing, or working outdoors"),
            ("non_hard_hat", "Other work: offices, hospitals, schools, studios"),
            ("unable_to_decide", "I can't decide yet"),
        ),
        required=True,
        branching=True,
    ),
    Question(
        id="education_commitment",
        text="How much education or training after high school are you willing to do?",
        type=QuestionType.SINGLE_CHOICE,
        options=_opts(
            ("high_school", "I want to start working right after high school"),
            ("certificate", "A short certificate or training program"),
            ("associate", "A 2-year associate degree"),
            ("bachelor", "A 4-year bachelor's degree"),
            ("advanced", "A graduate or professional degree"),
        ),
        required=True,
    ),
    Question(
        id="subject_strengths",
        text="Rate how strong you are in each subject (1 = struggling, 5 = excellent).",
        type=QuestionType.MATRIX,
        subjects=SUBJECTS,
        scale_min=1,
        scale_max=5,
        required=True,
    ),
    Question(
        id="work_environment",
        text="Where would you most like to work?",
        type=QuestionType.SINGLE_CHOICE,
        options=_opts(
            ("indoor", "Indoors"),
            ("outdoor", "Outdoors"),
            ("mixed", "A mix of both"),
            ("no_preference", "No preference"),
        ),
    ),
    Question(
        id="career_constraints",
        text="Do any of these apply to you?",
        type=QuestionType.MULTI_CHOICE,
        options=_opts(
            ("earn_income_within_one_year", "I need to earn an income within a year"),
            ("limited_budget_for_school", "I have a limited budget for school"),
            ("physical_limitations", "I have physical limitations"),
            ("none", "None of these"),
        ),
        max_selections=3,
    ),
    Question(
        id="support_confidence",
        text="How confident are you that you have support to reach your goals?",
        type=QuestionType.RATING,
        scale_min=1,
        scale_max=5,
    ),
    Question(
        id="impact_inspiration",
        text="What kind of impact would you like your work to have?",
        type=QuestionType.FREE_TEXT,
        max_length=1000,
    ),
)


NAMED_CAREER = Question(
    id="named_career",
    text="Is there one specific career you already have in mind?",
    type=QuestionType.FREE_TEXT,
    max_length=120,
)


# =============================================================================
# PATH: HANDS-ON
# =============================================================================

HANDS_ON_QUESTIONS: Tuple[Question, ...] = (
    Question(
        id="hard_hat_specific",
        text="Which hands-on work interests you most?",
        type=QuestionType.SINGLE_CHOICE,
        options=_opts(
            ("building_fixing", "Building and fixing things"),
            ("creating_designs", "Designing things that get built"),
            NOT_SURE,
        ),
        required=True,
    ),
    Question(
        id="building_career",
        text="Which of these careers sounds best?",
        type=QuestionType.SINGLE_CHOICE,
        options=_opts(
            ("electrician", "Electrician"),
            ("plumber", "Plumber"),
            ("hvac_technician", "HVAC Technician"),
            ("welder", "Welder"),
            ("construction_worker", "Construction Worker"),
            ("automotive_technician", "Automotive Technician"),
            NOT_SURE,
        ),
        trigger=_when("hard_hat_specific", "building_fixing"),
    ),
    Question(
        id="design_career",
        text="Which of these careers sounds best?",
        type=QuestionType.SINGLE_CHOICE,
        options=_opts(
            ("civil_engineer", "Civil Engineer"),
            ("mechanical_engineer", "Mechanical Engineer"),
            ("structural_engineer", "Structural Engineer"),
            ("electrical_engineer", "Electrical Engineer"),
            ("aerospace_engineer", "Aerospace Engineer"),
            NOT_SURE,
        ),
        trigger=_when("hard_hat_specific", "creating_designs"),
    ),
    Question(
        id="hands_on_experience",
        text="Tell us about anything you have built, fixed, or repaired.",
        type=QuestionType.FREE_TEXT,
        max_length=1000,
    ),
    NAMED_CAREER,
)


# =============================================================================
# PATH: OTHER WORK
# =============================================================================

OTHER_WORK_QUESTIONS: Tuple[Question, ...] = (
    Question(
        id="non_hard_hat_specific",
        text="Which area interests you most?",
        type=QuestionType.SINGLE_CHOICE,
        options=_opts(
            ("technology", "Technology and computers"),
            ("healthcare", "Healthcare"),
            ("education", "Teaching and education"),
            ("business", "Business and office work"),
            ("creative", "Art, design, and media"),
            ("public_safety", "Public safety and rescue"),
            NOT_SURE,
        ),
        required=True,
    ),
    Question(
        id="technology_career",
        text="Which technology career sounds best?",
        type=QuestionType.SINGLE_CHOICE,
        options=_opts(
            ("software_developer", "Software Developer"),
            ("web_developer", "Web Developer"),
            ("it_support_specialist", "IT Support Specialist"),
            ("cybersecurity_specialist", "Cybersecurity Specialist"),
            ("data_analyst", "Data Analyst"),
            NOT_SURE,
        ),
        trigger=_when("non_hard_hat_specific", "technology"),
    ),
    Question(
        id="healthcare_career",
        text="Which healthcare career sounds best?",
        type=QuestionType.SINGLE_CHOICE,
        options=_opts(
            ("registered_nurse", "Registered Nurse"),
            ("licensed_practical_nurse", "Licensed Practical Nurse"),
            ("medical_assistant", "Medical Assistant"),
            ("dental_hygienist", "Dental Hygienist"),
            ("emergency_medical_technician", "Emergency Medical Technician"),
            NOT_SURE,
        ),
        trigger=_when("non_hard_hat_specific", "healthcare"),
    ),
    Question(
        id="education_career",
        text="Which education career sounds best?",
        type=QuestionType.SINGLE_CHOICE,
        options=_opts(
            ("elementary_school_teacher", "Elementary School Teacher"),
            ("paraprofessional_educator", "Paraprofessional Educator"),
            ("school_counselor", "School Counselor"),
            NOT_SURE,
        ),
        trigger=_when("non_hard_hat_specific", "education"),
    ),
    Question(
        id="business_career",
        text="Which business career sounds best?",
        type=QuestionType.SINGLE_CHOICE,
        options=_opts(
            ("administrative_assistant", "Administrative Assistant"),
            ("bookkeeper", "Bookkeeper"),
            ("sales_representative", "Sales Representative"),
            ("accountant", "Accountant"),
            NOT_SURE,
        ),
        trigger=_when("non_hard_hat_specific", "business"),
    ),
    Question(
        id="creative_career",
        text="Which creative career sounds best?",
        type=QuestionType.SINGLE_CHOICE,
        options=_opts(
            ("graphic_designer", "Graphic Designer"),
            ("photographer", "Photographer"),
            ("interior_designer", "Interior Designer"),
            NOT_SURE,
        ),
        trigger=_when("non_hard_hat_specific", "creative"),
    ),
    Question(
        id="public_safety_career",
        text="Which public safety career sounds best?",
        type=QuestionType.SINGLE_CHOICE,
        options=_opts(
            ("police_officer", "Police Officer"),
            ("firefighter", "Firefighter"),
            ("emergency_dispatcher", "Emergency Dispatcher"),
            NOT_SURE,
        ),
        trigger=_when("non_hard_hat_specific", "public_safety"),
    ),
    Question(
        id="other_work_interests",
        text="What else interests you? (pick up to 3)",
        type=QuestionType.MULTI_CHOICE,
        options=_opts(
            ("helping_others", "Helping others"),
            ("data_analysis", "Working with data"),
            ("research", "Research and discovery"),
            ("business", "Running a business"),
            ("creative", "Creating things"),
            ("technology", "Technology"),
        ),
        max_selections=3,
    ),
    NAMED_CAREER,
)


# =============================================================================
# PATH: EXPLORING
# =============================================================================

EXPLORING_QUESTIONS: Tuple[Question, ...] = (
    Question(
        id="undecided_interests_hobbies",
        text="What do you enjoy doing in your free time?",
        type=QuestionType.FREE_TEXT,
        required=True,
        min_length=3,
        max_length=1000,
    ),
    Question(
        id="undecided_work_experience",
        text="Describe any jobs, volunteering, or responsibilities you have had.",
        type=QuestionType.FREE_TEXT,
        max_length=1000,
    ),
    Question(
        id="undecided_personal_traits",
        text="Which of these describe you? (pick up to 3)",
        type=QuestionType.MULTI_CHOICE,
        options=TRAIT_OPTIONS,
        required=True,
        min_selections=1,
        max_selections=3,
    ),
    Question(
        id="interest_areas",
        text="Which areas would you like to learn more about?",
        type=QuestionType.MULTI_CHOICE,
        options=_opts(
            ("technology", "Technology"),
            ("healthcare", "Healthcare"),
            ("education", "Education"),
            ("business", "Business"),
            ("creative", "Art and design"),
            ("public_safety", "Public safety"),
            ("building_fixing", "Building and fixing"),
            ("outdoors", "Working outdoors"),
        ),
        max_selections=4,
    ),
)


PATH_QUESTIONS: Dict[PathId, Tuple[Question, ...]] = {
    PathId.HANDS_ON: HANDS_ON_QUESTIONS,
    PathId.OTHER_WORK: OTHER_WORK_QUESTIONS,
    PathId.EXPLORING: EXPLORING_QUESTIONS,
}

# Questions whose answer is a catalog career id
SPECIFIC_CAREER_QUESTIONS: Tuple[str, ...] = (
    "building_career",
    "design_career",
    "technology_career",
    "healthcare_career",
    "education_career",
    "business_career",
    "creative_career",
    "public_safety_career",
)


def _index(questions: Sequence[Question]) -> Dict[str, Question]:
    index: Dict[str, Question] = {}
    for question in questions:
        index.setdefault(question.id, question)
    return index


_ALL_QUESTIONS: Dict[str, Question] = _index(
    COMMON_QUESTIONS + HANDS_ON_QUESTIONS + OTHER_WORK_QUESTIONS + EXPLORING_QUESTIONS
)


def questions_for_path(path: PathId) -> List[Question]:
    """Ordered union of the common questions and the path's own questions."""
    try:
        path = PathId(path)
    except ValueError:
        raise UnknownPathError(f"Unknown path: {path}")
    return list(COMMON_QUESTIONS) + list(PATH_QUESTIONS[path])


def get_question(question_id: str) -> Optional[Question]:
    return _ALL_QUESTIONS.get(question_id)
