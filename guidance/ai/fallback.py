"""
Rule-based recommendation content.

Used whenever the generative provider is disabled or fails. Output depends only
on the career and the student's grade and constraints, so identical inputs
always give identical recommendations. Every table is keyed by sector and
only uses that sector's own vocabulary. A few careers whose day-to-day work
differs from the rest of their sector carry their own rows.
"""

from typing import Dict, List, Tuple

from ..logic.constants import (
    CONSTRAINT_EARN_INCOME,
    EARN_INCOME_MAX_YEARS,
    FINAL_HIGH_SCHOOL_YEAR,
    TIMELINE_BY_EDUCATION,
    ActionTimeline,
    Sector,
)
from ..logic.contracts import ActionItem, CareerMatch, CourseSuggestion, Recommendation, SkillGap, StudentProfile
from ..logic.output_assembler import grade_year

MAX_SKILL_GAPS = 5
MAX_ACTION_ITEMS = 6
MAX_PATHWAY_STEPS = 6

# (skill, importance, how to acquire)
SECTOR_SKILL_GAPS: Dict[Sector, List[Tuple[str, str, str]]] = {
    Sector.HEALTHCARE: [
        ("Medical terminology", "Critical", "Take a medical terminology course at a community college or online."),
        ("Anatomy and physiology", "Critical", "Take anatomy and physiology in high school or at a community college."),
        ("Patient communication", "Important", "Volunteer at a hospital or care facility to practice talking with patients."),
        ("Infection control", "Important", "Learn standard precautions through a nursing assistant or first aid class."),
    ],
    Sector.INFRASTRUCTURE: [
        ("Blueprint reading", "Critical", "Take a drafting or blueprint reading class at a trade school."),
        ("Job site safety", "Critical", "Complete OSHA 10 safety training."),
        ("Shop math", "Important", "Practice measurement, fractions, and geometry in math and shop classes."),
        ("Tool handling", "Important", "Take a shop class or help with home repair projects."),
    ],
    Sector.TECHNOLOGY: [
        ("Programming fundamentals", "Critical", "Learn Python through free online courses and small projects."),
        ("Computer networking", "Important", "Study for an entry-level networking certification."),
        ("Troubleshooting", "Important", "Set up and repair computers for family, friends, or school."),
        ("Version control", "Helpful", "Publish your coding projects on GitHub."),
    ],
    Sector.CREATIVE: [
        ("Digital design tools", "Critical", "Learn Adobe Photoshop and Illustrator through school or online tutorials."),
        ("Portfolio development", "Critical", "Collect your best pieces into an online portfolio."),
        ("Color theory and composition", "Important", "Take art and design classes and study work you admire."),
        ("Client communication", "Helpful", "Take on small paid projects for local groups."),
    ],
    Sector.BUSINESS: [
        ("Accounting basics", "Critical", "Take an introductory accounting class."),
        ("Business writing", "Important", "Practice writing clear emails and reports in English class."),
        ("QuickBooks", "Important", "Complete a free QuickBooks tutorial."),
        ("Customer service", "Helpful", "Work a part-time job serving customers."),
    ],
    Sector.PUBLIC_SERVICE: [
        ("Physical fitness", "Critical", "Train for the agility test used by your local department."),
        ("Crisis communication", "Important", "Practice staying calm and clear in an explorer or cadet program."),
        ("Laws and procedures", "Important", "Take a criminal justice or fire science class at a community college."),
        ("First aid and CPR", "Helpful", "Get certified through the Red Cross or your local department."),
    ],
    Sector.EDUCATION: [
        ("Lesson planning", "Critical", "Help a teacher prepare lessons or assist at a summer program."),
        ("Child development", "Important", "Take a psychology or child development class."),
        ("Classroom management", "Important", "Volunteer as a tutor or coach for younger students."),
        ("Public speaking", "Helpful", "Join speech, debate, or other presentation activities."),
    ],
}

# (priority, timeline, category, description)
SECTOR_ACTIONS: Dict[Sector, List[Tuple[str, str, str, str]]] = {
    Sector.HEALTHCARE: [
        ("high", "immediate", "education", "Enroll in biology and health science classes next semester."),
        ("medium", "short-term", "experience", "Volunteer at a local hospital, clinic, or nursing home."),
        ("medium", "long-term", "skills", "Earn CPR and first aid certification."),
    ],
    Sector.INFRASTRUCTURE: [
        ("high", "immediate", "education", "Sign up for shop, drafting, or construction classes."),
        ("medium", "short-term", "experience", "Apply for a pre-apprenticeship or summer job with a local contractor."),
        ("medium", "long-term", "skills", "Complete OSHA 10 safety training."),
    ],
    Sector.TECHNOLOGY: [
        ("high", "immediate", "skills", "Start a free online coding course and finish one small project."),
        ("medium", "short-term", "experience", "Join a robotics, coding, or computer club."),
        ("medium", "long-term", "education", "Take AP Computer Science if your school offers it."),
    ],
    Sector.CREATIVE: [
        ("high", "immediate", "skills", "Practice every week and save your best work for a portfolio."),
        ("medium", "short-term", "experience", "Join yearbook, art club, or the school paper."),
        ("medium", "long-term", "education", "Take art and digital design electives."),
    ],
    Sector.BUSINESS: [
        ("high", "immediate", "education", "Take business, economics, or accounting electives."),
        ("medium", "short-term", "experience", "Get a part-time job that involves customers or handling money."),
        ("medium", "long-term", "networking", "Join DECA or FBLA at your school."),
    ],
    Sector.PUBLIC_SERVICE: [
        ("high", "immediate", "experience", "Join a police or fire explorer program in your area."),
        ("medium", "short-term", "skills", "Start a regular fitness routine to prepare for agility tests."),
        ("medium", "long-term", "education", "Take a criminal justice or fire science course at a community college."),
    ],
    Sector.EDUCATION: [
        ("high", "immediate", "experience", "Tutor younger students through your school or library."),
        ("medium", "short-term", "networking", "Ask a teacher you admire if you can help in their classroom."),
        ("medium", "long-term", "education", "Take psychology and child development electives."),
    ],
}

# (course, relevance, reason)
SECTOR_COURSES: Dict[Sector, List[Tuple[str, str, str]]] = {
    Sector.HEALTHCARE: [
        ("Biology", "essential", "Foundation for anatomy and health science."),
        ("Chemistry", "essential", "Required by most nursing and health programs."),
        ("Health Science", "recommended", "Introduces patient care careers."),
        ("Psychology", "helpful", "Helps you understand and support patients."),
    ],
    Sector.INFRASTRUCTURE: [
        ("Geometry", "essential", "Used for measurements and layouts."),
        ("Physics", "recommended", "Explains forces, electricity, and motion on the job."),
        ("Construction Technology", "recommended", "Hands-on practice with tools and blueprints."),
        ("Drafting / CAD", "helpful", "Teaches blueprint reading and design."),
    ],
    Sector.TECHNOLOGY: [
        ("Computer Science", "essential", "Teaches programming and problem solving."),
        ("Algebra II", "essential", "Builds the logic used in coding."),
        ("Statistics", "recommended", "Useful for working with data."),
        ("Digital Electronics", "helpful", "Shows how computers work inside."),
    ],
    Sector.CREATIVE: [
        ("Studio Art", "essential", "Builds drawing and composition skills."),
        ("Digital Design", "essential", "Teaches Adobe design tools."),
        ("Photography", "recommended", "Trains your eye for light and framing."),
        ("Art History", "helpful", "Gives context for styles and color theory."),
    ],
    Sector.BUSINESS: [
        ("Accounting", "essential", "Teaches how businesses track money."),
        ("Economics", "recommended", "Explains markets and pricing."),
        ("Business Management", "recommended", "Introduces marketing and operations."),
        ("Speech", "helpful", "Builds confidence presenting to clients."),
    ],
    Sector.PUBLIC_SERVICE: [
        ("Government", "essential", "Explains how laws and public agencies work."),
        ("Physical Education", "essential", "Prepares you for agility and fitness tests."),
        ("Criminal Justice", "recommended", "Introduces law enforcement careers."),
        ("Spanish", "helpful", "Helps you serve more people in your community."),
    ],
    Sector.EDUCATION: [
        ("English", "essential", "Builds the reading and writing you will teach."),
        ("Psychology", "recommended", "Explains how students learn and grow."),
        ("Child Development", "recommended", "Prepares you for classroom work."),
        ("Speech", "helpful", "Builds confidence leading a group."),
    ],
}

SECTOR_EXPERIENCE_STEP: Dict[Sector, str] = {
    Sector.HEALTHCARE: "Volunteer or shadow at a hospital or clinic to see {title} work up close",
    Sector.INFRASTRUCTURE: "Find a summer job or pre-apprenticeship on a job site to practice {title} skills",
    Sector.TECHNOLOGY: "Build small projects on your own to practice {title} skills",
    Sector.CREATIVE: "Create pieces for a portfolio that shows your work as an aspiring {title}",
    Sector.BUSINESS: "Get a part-time job in an office or store to see how a {title} works day to day",
    Sector.PUBLIC_SERVICE: "Join a youth explorer or cadet program to learn what a {title} does",
    Sector.EDUCATION: "Volunteer as a tutor or camp counselor to practice working with students as a future {title}",
}

EDUCATION_STEPS: Dict[str, List[str]] = {
    "high_school": [
        "Finish high school with classes that prepare you to work as a {title}",
        "{experience}",
        "Apply for entry-level {title} positions and learn on the job",
    ],
    "certificate": [
        "Take high school courses that build a foundation for a {title} career",
        "Complete a certificate or training program for {title} work",
        "{experience}",
        "Start working as an entry-level {title}",
    ],
    "associate": [
        "Take high school courses that build a foundation for a {title} career",
        "Earn a two-year associate degree accepted for {title} work",
        "{experience}",
        "Start working as a {title}",
    ],
    "bachelor": [
        "Take advanced high school courses that prepare you for a {title} degree",
        "Earn a four-year bachelor's degree related to {title} work",
        "{experience}",
        "Land your first job as a {title}",
    ],
    "advanced": [
        "Take advanced high school courses that prepare you for a {title} degree",
        "Earn a bachelor's degree that qualifies you for {title} graduate study",
        "Complete the graduate program required for {title} work",
        "{experience}",
        "Start practicing as a {title}",
    ],
}


# Careers whose work does not fit their sector's general advice
ENGINEERING_CAREERS = (
    "civil_engineer",
    "mechanical_engineer",
    "structural_engineer",
    "electrical_engineer",
    "aerospace_engineer",
)

_ENGINEERING_SKILL_GAPS = [
    ("Calculus", "Critical", "Take precalculus and AP Calculus before you graduate."),
    ("Physics", "Critical", "Take physics, ideally at the AP level, to learn forces, energy, and motion."),
    ("Technical drawing and CAD", "Important", "Learn a CAD tool such as Fusion 360 through a class or free tutorials."),
    ("Engineering design process", "Helpful", "Join a robotics or engineering competition team."),
]
_ENGINEERING_ACTIONS = [
    ("high", "immediate", "education", "Take the most advanced math and physics classes your school offers."),
    ("medium", "short-term", "experience", "Apply to an engineering summer camp or join a robotics team."),
    ("medium", "long-term", "research", "Compare ABET-accredited engineering programs and their admission requirements."),
]
_ENGINEERING_COURSES = [
    ("Calculus", "essential", "Used throughout engineering coursework."),
    ("Physics", "essential", "Explains the forces and energy engineers design around."),
    ("Chemistry", "recommended", "Required by most engineering programs."),
    ("Drafting / CAD", "helpful", "Teaches technical drawing and design."),
]

CAREER_SKILL_GAPS: Dict[str, List[Tuple[str, str, str]]] = {
    **{career_id: _ENGINEERING_SKILL_GAPS for career_id in ENGINEERING_CAREERS},
    "emergency_dispatcher": [
        ("Call handling", "Critical", "Practice calm, clear phone conversations in a customer-facing job or a volunteer hotline."),
        ("Multitasking under pressure", "Important", "Take on roles where you track several tasks at once, such as event staffing."),
        ("Typing speed and accuracy", "Important", "Build typing speed in a keyboarding class or with free typing drills."),
        ("First aid and CPR", "Helpful", "Get certified through the Red Cross or your local department."),
    ],
}

CAREER_ACTIONS: Dict[str, List[Tuple[str, str, str, str]]] = {
    **{career_id: _ENGINEERING_ACTIONS for career_id in ENGINEERING_CAREERS},
    "emergency_dispatcher": [
        ("high", "immediate", "experience", "Ask your local 911 center about sit-along visits for students."),
        ("medium", "short-term", "skills", "Build your typing speed and practice clear phone communication."),
        ("medium", "long-term", "education", "Take a public safety telecommunications course at a community college."),
    ],
}

CAREER_COURSES: Dict[str, List[Tuple[str, str, str]]] = {
    **{career_id: _ENGINEERING_COURSES for career_id in ENGINEERING_CAREERS},
    "emergency_dispatcher": [
        ("English", "essential", "Builds the clear communication used on every call."),
        ("Government", "essential", "Explains how public agencies and emergency services work."),
        ("Keyboarding", "recommended", "Builds the typing speed needed to log calls quickly."),
        ("Spanish", "helpful", "Helps you serve more callers in your community."),
    ],
}

CAREER_EXPERIENCE_STEP: Dict[str, str] = {
    **{
        career_id: "Join an engineering competition team or summer program to practice {title} skills"
        for career_id in ENGINEERING_CAREERS
    },
    "emergency_dispatcher": "Visit a local 911 center and sit along with dispatchers to learn what a {title} does",
}

# (priority, timeline, category, description) keyed by school year
GRADE_ACTIONS: Dict[int, Tuple[str, str, str, str]] = {
    9: ("medium", "long-term", "education", "Plan your remaining high school electives around {title} requirements."),
    10: ("medium", "long-term", "education", "Plan your remaining high school electives around {title} requirements."),
    11: ("high", "short-term", "research", "Visit schools or training programs that prepare students to become a {title}."),
    12: ("high", "immediate", "research", "Apply to {title} training programs and financial aid before spring deadlines."),
    13: ("high", "immediate", "research", "Apply to {title} training programs and financial aid before spring deadlines."),
}


def _sector(career_sector: str) -> Sector:
    return Sector(career_sector)


def _experience_step(career) -> str:
    template = CAREER_EXPERIENCE_STEP.get(career.id) or SECTOR_EXPERIENCE_STEP[_sector(career.sector)]
    return template.format(title=career.title)


def fallback_pathway(match: CareerMatch) -> List[str]:
    career = match.career
    experience = _experience_step(career)
    steps = [
        template.format(title=career.title, experience=experience)
        for template in EDUCATION_STEPS[career.required_education]
    ]
    for certification in career.certifications[:1]:
        steps.insert(len(steps) - 1, f"Earn the {certification} required to work as a {career.title}")
    return steps[:MAX_PATHWAY_STEPS]


def fallback_skill_gaps(match: CareerMatch) -> List[SkillGap]:
    career = match.career
    rows = CAREER_SKILL_GAPS.get(career.id) or SECTOR_SKILL_GAPS[_sector(career.sector)]
    gaps = [SkillGap(skill=s, importance=i, how_to_acquire=h) for s, i, h in rows[:3]]
    if career.certifications:
        certification = career.certifications[0]
        gaps.append(SkillGap(
            skill=certification,
            importance="Critical",
            how_to_acquire=f"Prepare for the {certification} exam required for {career.title} work.",
        ))
    else:
        s, i, h = rows[3]
        gaps.append(SkillGap(skill=s, importance=i, how_to_acquire=h))
    return gaps[:MAX_SKILL_GAPS]


def fallback_action_items(match: CareerMatch, profile: StudentProfile) -> List[ActionItem]:
    """
    Counselor visit, career or sector actions, a grade-specific step, then an interview.

    Seniors and graduates have no long runway left, so long-term sector actions
    are pulled into the short term for them.
    """
    career = match.career
    year = grade_year(profile.grade) if profile.grade is not None else None
    compressed = year is not None and year >= FINAL_HIGH_SCHOOL_YEAR

    items = [
        ActionItem(
            priority="high",
            timeline="immediate",
            category="research",
            description=f"Talk with your school counselor about the courses that lead to becoming a {career.title}.",
        )
    ]
    rows = CAREER_ACTIONS.get(career.id) or SECTOR_ACTIONS[_sector(career.sector)]
    for p, t, c, d in rows:
        if compressed and t == ActionTimeline.LONG_TERM.value:
            t = ActionTimeline.SHORT_TERM.value
        items.append(ActionItem(priority=p, timeline=t, category=c, description=d))
    if year is not None:
        p, t, c, d = GRADE_ACTIONS[year]
        items.append(ActionItem(priority=p, timeline=t, category=c, description=d.format(title=career.title)))
    items.append(ActionItem(
        priority="medium",
        timeline="short-term",
        category="networking",
        description=f"Interview a working {career.title} about their day-to-day work.",
    ))
    if CONSTRAINT_EARN_INCOME in profile.constraints and career.time_to_entry_years > EARN_INCOME_MAX_YEARS:
        items.insert(1, ActionItem(
            priority="high",
            timeline="immediate",
            category="research",
            description=f"Look for paid training or work-study options on the way to becoming a {career.title}.",
        ))
    return items[:MAX_ACTION_ITEMS]


def fallback_courses(match: CareerMatch) -> List[CourseSuggestion]:
    career = match.career
    rows = CAREER_COURSES.get(career.id) or SECTOR_COURSES[_sector(career.sector)]
    return [CourseSuggestion(course=c, relevance=r, reason=why) for c, r, why in rows]


def build_fallback_recommendation(match: CareerMatch, profile: StudentProfile) -> Recommendation:
    """Deterministic recommendation for one matched career."""
    career = match.career
    return Recommendation(
        career_id=career.id,
        career_title=career.title,
        sector=career.sector,
        pathway_steps=fallback_pathway(match),
        timeline=TIMELINE_BY_EDUCATION[career.required_education],
        skill_gaps=fallback_skill_gaps(match),
        action_items=fallback_action_items(match, profile),
        courses=fallback_courses(match),
        source="fallback",
    )
