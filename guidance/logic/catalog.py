"""
Career Catalog

Immutable reference set of careers. Built once per process and shared by
reference; callers can inject a substitute catalog for testing.
"""

from functools import lru_cache
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from .constants import SECTOR_INTEREST_MAP, EducationTier, Sector
from .contracts import Career
from .errors import CatalogLookupError


def _career(
    id: str,
    title: str,
    sector: Sector,
    education: EducationTier,
    salary: int,
    *,
    description: str,
    outlook: str,
    certifications: Tuple[str, ...] = (),
    keywords: Tuple[str, ...] = (),
    traits: Tuple[str, ...] = (),
    subjects: Tuple[str, ...] = (),
    environment: str = "indoor",
    entry_years: float = 0.0,
    physical: str = "low",
) -> Career:
    return Career(
        id=id,
        title=title,
        sector=sector,
        description=description,
        required_education=education,
        average_salary=salary,
        certifications=certifications,
        growth_outlook=outlook,
        keywords=SECTOR_INTEREST_MAP[sector] + keywords,
        trait_tags=traits,
        subject_affinity=subjects,
        work_environment=environment,
        time_to_entry_years=entry_years,
        physical_demand=physical,
    )


E = EducationTier
S = Sector

DEFAULT_CAREERS: Tuple[Career, ...] = (
    # HEALTHCARE
    _career(
        "registered_nurse", "Registered Nurse", S.HEALTHCARE, E.ASSOCIATE, 75000,
        description="Provide and coordinate patient care and educate patients about health conditions.",
        outlook="Much faster than average (9% growth)",
        certifications=("RN License", "BLS Certification"),
        keywords=("nursing",),
        traits=("helpful", "detail_oriented", "team_player", "communicator"),
        subjects=("science", "math"),
        entry_years=2.0, physical="medium",
    ),
    _career(
        "dental_hygienist", "Dental Hygienist", S.HEALTHCARE, E.ASSOCIATE, 81000,
        description="Clean teeth, examine patients for oral disease, and teach oral hygiene.",
        outlook="Faster than average (7% growth)",
        certifications=("RDH License",),
        traits=("detail_oriented", "helpful", "independent"),
        subjects=("science",),
        entry_years=2.0,
    ),
    _career(
        "licensed_practical_nurse", "Licensed Practical Nurse", S.HEALTHCARE, E.CERTIFICATE, 50000,
        description="Provide basic nursing care under the direction of registered nurses and doctors.",
        outlook="Faster than average (6% growth)",
        certifications=("LPN License",),
        keywords=("nursing",),
        traits=("helpful", "team_player"),
        subjects=("science",),
        entry_years=1.0, physical="medium",
    ),
    _career(
        "medical_assistant", "Medical Assistant", S.HEALTHCARE, E.CERTIFICATE, 37000,
        description="Perform administrative and clinical tasks to support physicians.",
        outlook="Much faster than average (16% growth)",
        certifications=("CMA or RMA Certification",),
        traits=("helpful", "detail_oriented", "communicator"),
        subjects=("science", "english"),
        entry_years=1.0,
    ),
    _career(
        "emergency_medical_technician", "Emergency Medical Technician", S.HEALTHCARE, E.CERTIFICATE, 38000,
        description="Respond to emergency calls and provide medical care on scene and in transport.",
        outlook="Faster than average (7% growth)",
        certifications=("EMT Certification", "CPR/AED"),
        keywords=("public safety",),
        traits=("helpful", "problem_solver", "team_player"),
        subjects=("science", "physical_ed"),
        environment="mixed", entry_years=0.5, physical="high",
    ),
    _career(
        "community_health_worker", "Community Health Worker", S.HEALTHCARE, E.CERTIFICATE, 43000,
        description="Help communities adopt healthy behaviors and reach health services.",
        outlook="Much faster than average (13% growth)",
        certifications=("CHW Certification",),
        keywords=("community",),
        traits=("helpful", "communicator"),
        subjects=("english", "languages"),
        environment="mixed", entry_years=0.5,
    ),
    _career(
        "physical_therapist", "Physical Therapist", S.HEALTHCARE, E.ADVANCED, 97000,
        description="Help injured or ill people improve movement and manage pain.",
        outlook="Much faster than average (15% growth)",
        certifications=("State PT License",),
        traits=("helpful", "communicator", "problem_solver"),
        subjects=("science", "physical_ed"),
        entry_years=7.0, physical="medium",
    ),

    # INFRASTRUCTURE
    _career(
        "electrician", "Electrician", S.INFRASTRUCTURE, E.CERTIFICATE, 60000,
        description="Install, maintain, and repair electrical wiring and equipment.",
        outlook="Faster than average (6% growth)",
        certifications=("Journeyman Electrician License", "OSHA 10"),
        keywords=("electrical",),
        traits=("hands_on", "problem_solver", "detail_oriented"),
        subjects=("math", "science"),
        environment="mixed", entry_years=0.5, physical="high",
    ),
    _career(
        "plumber", "Plumber", S.INFRASTRUCTURE, E.CERTIFICATE, 59000,
        description="Install and repair water, gas, and drainage piping systems.",
        outlook="Average growth (2% growth)",
        certifications=("Journeyman Plumber License",),
        traits=("hands_on", "problem_solver", "independent"),
        subjects=("math",),
        environment="mixed", entry_years=0.5, physical="high",
    ),
    _career(
        "hvac_technician", "HVAC Technician", S.INFRASTRUCTURE, E.CERTIFICATE, 51000,
        description="Install and service heating, ventilation, and air conditioning systems.",
        outlook="Faster than average (6% growth)",
        certifications=("EPA 608 Certification",),
        traits=("hands_on", "problem_solver"),
        subjects=("math", "science"),
        environment="mixed", entry_years=1.0, physical="high",
    ),
    _career(
        "welder", "Welder", S.INFRASTRUCTURE, E.CERTIFICATE, 47000,
        description="Join metal parts for structures, vehicles, and equipment.",
        outlook="Average growth (2% growth)",
        certifications=("AWS Certified Welder",),
        traits=("hands_on", "detail_oriented", "independent"),
        subjects=("math",),
        environment="mixed", entry_years=0.5, physical="high",
    ),
    _career(
        "construction_worker", "Construction Worker", S.INFRASTRUCTURE, E.HIGH_SCHOOL, 40000,
        description="Perform physical labor on building and infrastructure job sites.",
        outlook="Average growth (4% growth)",
        certifications=("OSHA 10",),
        traits=("hands_on", "team_player"),
        subjects=("physical_ed",),
        environment="outdoor", entry_years=0.0, physical="high",
    ),
    _career(
        "automotive_technician", "Automotive Technician", S.INFRASTRUCTURE, E.CERTIFICATE, 46000,
        description="Inspect, maintain, and repair cars and light trucks.",
        outlook="Average growth (2% growth)",
        certifications=("ASE Certification",),
        keywords=("engines",),
        traits=("hands_on", "problem_solver"),
        subjects=("technology", "science"),
        entry_years=1.0, physical="medium",
    ),
    _career(
        "civil_engineer", "Civil Engineer", S.INFRASTRUCTURE, E.BACHELOR, 88000,
        description="Design and supervise construction of roads, bridges, and water systems.",
        outlook="Faster than average (8% growth)",
        certifications=("Professional Engineer (PE) License", "EIT Certification"),
        traits=("analytical", "problem_solver", "leader"),
        subjects=("math", "science"),
        environment="mixed", entry_years=4.0,
    ),
    _career(
        "mechanical_engineer", "Mechanical Engineer", S.INFRASTRUCTURE, E.BACHELOR, 95000,
        description="Design, develop, and test mechanical devices and systems.",
        outlook="Average growth (4% growth)",
        certifications=("Professional Engineer (PE) License",),
        traits=("analytical", "problem_solver", "creative"),
        subjects=("math", "science", "technology"),
        entry_years=4.0,
    ),
    _career(
        "structural_engineer", "Structural Engineer", S.INFRASTRUCTURE, E.BACHELOR, 92000,
        description="Design and analyze the load-bearing parts of buildings and bridges.",
        outlook="Faster than average (8% growth)",
        certifications=("Professional Engineer (PE) License", "Structural Engineer (SE) License"),
        traits=("analytical", "detail_oriented"),
        subjects=("math", "science"),
        entry_years=4.0,
    ),
    _career(
        "electrical_engineer", "Electrical Engineer", S.INFRASTRUCTURE, E.BACHELOR, 103000,
        description="Design and develop electrical systems and equipment.",
        outlook="Average growth (3% growth)",
        certifications=("Professional Engineer (PE) License",),
        keywords=("electrical",),
        traits=("analytical", "problem_solver"),
        subjects=("math", "science", "technology"),
        entry_years=4.0,
    ),
    _career(
        "aerospace_engineer", "Aerospace Engineer", S.INFRASTRUCTURE, E.BACHELOR, 118000,
        description="Design, develop, and test aircraft, spacecraft, and related systems.",
        outlook="Faster than average (8% growth)",
        certifications=("Professional Engineer (PE) License",),
        traits=("analytical", "problem_solver", "detail_oriented"),
        subjects=("math", "science"),
        entry_years=4.0,
    ),

    # TECHNOLOGY
    _career(
        "software_developer", "Software Developer", S.TECHNOLOGY, E.BACHELOR, 110000,
        description="Design and build applications and the systems that run them.",
        outlook="Much faster than average (25% growth)",
        keywords=("coding",),
        traits=("analytical", "problem_solver", "independent", "creative"),
        subjects=("math", "technology"),
        entry_years=4.0,
    ),
    _career(
        "web_developer", "Web Developer", S.TECHNOLOGY, E.ASSOCIATE, 78000,
        description="Build and maintain websites and web applications.",
        outlook="Much faster than average (16% growth)",
        keywords=("coding", "design"),
        traits=("creative", "problem_solver", "detail_oriented"),
        subjects=("technology", "art"),
        entry_years=2.0,
    ),
    _career(
        "it_support_specialist", "IT Support Specialist", S.TECHNOLOGY, E.CERTIFICATE, 55000,
        description="Help people and organizations keep their computers and networks working.",
        outlook="Average growth (5% growth)",
        certifications=("CompTIA A+",),
        keywords=("helping others",),
        traits=("problem_solver", "helpful", "communicator"),
        subjects=("technology",),
        entry_years=1.0,
    ),
    _career(
        "cybersecurity_specialist", "Cybersecurity Specialist", S.TECHNOLOGY, E.BACHELOR, 102000,
        description="Protect networks and data from attacks and unauthorized access.",
        outlook="Much faster than average (32% growth)",
        certifications=("CompTIA Security+",),
        traits=("analytical", "detail_oriented", "problem_solver"),
        subjects=("technology", "math"),
        entry_years=4.0,
    ),
    _career(
        "data_analyst", "Data Analyst", S.TECHNOLOGY, E.BACHELOR, 82000,
        description="Turn raw data into findings that help organizations decide.",
        outlook="Much faster than average (23% growth)",
        keywords=("data", "math"),
        traits=("analytical", "detail_oriented"),
        subjects=("math", "technology"),
        entry_years=4.0,
    ),

    # CREATIVE
    _career(
        "graphic_designer", "Graphic Designer", S.CREATIVE, E.ASSOCIATE, 57000,
        description="Create visual concepts that communicate ideas for print and screens.",
        outlook="Average growth (3% growth)",
        traits=("creative", "detail_oriented", "independent"),
        subjects=("art", "technology"),
        entry_years=2.0,
    ),
    _career(
        "photographer", "Photographer", S.CREATIVE, E.HIGH_SCHOOL, 40000,
        description="Capture images of people, events, and places for clients and media.",
        outlook="Average growth (4% growth)",
        traits=("creative", "independent"),
        subjects=("art",),
        environment="mixed", entry_years=0.5, physical="medium",
    ),
    _career(
        "interior_designer", "Interior Designer", S.CREATIVE, E.BACHELOR, 61000,
        description="Plan functional and attractive indoor spaces for homes and businesses.",
        outlook="Slower than average (1% growth)",
        traits=("creative", "communicator", "detail_oriented"),
        subjects=("art", "math"),
        entry_years=4.0,
    ),

    # BUSINESS
    _career(
        "administrative_assistant", "Administrative Assistant", S.BUSINESS, E.HIGH_SCHOOL, 40000,
        description="Keep an office running by organizing schedules, records, and communication.",
        outlook="Declining (-8% change)",
        traits=("detail_oriented", "communicator", "team_player"),
        subjects=("english", "technology"),
        entry_years=0.0,
    ),
    _career(
        "bookkeeper", "Bookkeeper", S.BUSINESS, E.CERTIFICATE, 45000,
        description="Record financial transactions and keep accounts balanced.",
        outlook="Declining (-5% change)",
        keywords=("math",),
        traits=("detail_oriented", "independent", "analytical"),
        subjects=("math",),
        entry_years=0.5,
    ),
    _career(
        "sales_representative", "Sales Representative", S.BUSINESS, E.HIGH_SCHOOL, 62000,
        description="Sell products and services to businesses and consumers.",
        outlook="Average growth (4% growth)",
        traits=("communicator", "leader"),
        subjects=("english",),
        environment="mixed", entry_years=0.0,
    ),
    _career(
        "accountant", "Accountant", S.BUSINESS, E.BACHELOR, 79000,
        description="Prepare and examine financial records and tax filings.",
        outlook="Average growth (4% growth)",
        certifications=("CPA License",),
        keywords=("math",),
        traits=("analytical", "detail_oriented"),
        subjects=("math",),
        entry_years=4.0,
    ),

    # PUBLIC SERVICE
    _career(
        "police_officer", "Police Officer", S.PUBLIC_SERVICE, E.CERTIFICATE, 65000,
        description="Protect lives and property by patrolling communities and responding to calls.",
        outlook="Average growth (3% growth)",
        certifications=("POST Certification",),
        traits=("leader", "communicator", "problem_solver"),
        subjects=("history", "physical_ed"),
        environment="mixed", entry_years=1.0, physical="high",
    ),
    _career(
        "firefighter", "Firefighter", S.PUBLIC_SERVICE, E.CERTIFICATE, 52000,
        description="Respond to fires and rescue calls to protect people and property.",
        outlook="Average growth (4% growth)",
        certifications=("Firefighter I/II",),
        traits=("team_player", "hands_on", "helpful"),
        subjects=("physical_ed", "science"),
        environment="mixed", entry_years=1.0, physical="high",
    ),
    _career(
        "emergency_dispatcher", "Emergency Dispatcher", S.PUBLIC_SERVICE, E.HIGH_SCHOOL, 46000,
        description="Answer calls for help and send the right responders.",
        outlook="Average growth (3% growth)",
        certifications=("Telecommunicator Certification",),
        traits=("communicator", "detail_oriented", "helpful"),
        subjects=("english",),
        entry_years=0.5,
    ),

    # EDUCATION
    _career(
        "elementary_school_teacher", "Elementary School Teacher", S.EDUCATION, E.BACHELOR, 61000,
        description="Teach young students core subjects and help them grow socially.",
        outlook="Average growth (1% growth)",
        certifications=("State Teaching License",),
        traits=("communicator", "helpful", "creative", "leader"),
        subjects=("english", "history", "art"),
        entry_years=4.0,
    ),
    _career(
        "paraprofessional_educator", "Paraprofessional Educator", S.EDUCATION, E.ASSOCIATE, 31000,
        description="Support teachers by working with students individually and in small groups.",
        outlook="Average growth (1% growth)",
        certifications=("ParaPro Assessment",),
        traits=("helpful", "team_player"),
        subjects=("english",),
        entry_years=1.0,
    ),
    _career(
        "school_counselor", "School Counselor", S.EDUCATION, E.ADVANCED, 61000,
        description="Help students with academic plans, career choices, and personal challenges.",
        outlook="Average growth (4% growth)",
        certifications=("State School Counselor Certification",),
        traits=("helpful", "communicator"),
        subjects=("english", "history"),
        entry_years=6.0,
    ),
)


def _normalize(reference: str) -> str:
    return reference.strip().lower().replace("-", "_").replace(" ", "_")


class CareerCatalog:
    """Read-only career lookup, keyed by id and by title."""

    def __init__(self, careers: Iterable[Career]):
        self._careers: Tuple[Career, ...] = tuple(careers)
        self._by_id: Dict[str, Career] = {}
        self._by_title: Dict[str, Career] = {}
        for career in self._careers:
            if career.id in self._by_id:
                raise ValueError(f"Duplicate career id: {career.id}")
            self._by_id[career.id] = career
            self._by_title.setdefault(_normalize(career.title), career)

    def __iter__(self) -> Iterator[Career]:
        return iter(self._careers)

    def __len__(self) -> int:
        return len(self._careers)

    def all(self) -> Tuple[Career, ...]:
        return self._careers

    def get(self, career_id: str) -> Optional[Career]:
        return self._by_id.get(career_id)

    def find_by_title(self, title: str) -> Optional[Career]:
        return self._by_title.get(_normalize(title))

    def lookup(self, reference: str) -> Career:
        """Find a career by id or title; raises CatalogLookupError when absent."""
        career = (
            self._by_id.get(reference)
            or self._by_id.get(_normalize(reference))
            or self.find_by_title(reference)
        )
        if career is None:
            raise CatalogLookupError(reference)
        return career

    def sectors(self) -> List[str]:
        seen: List[str] = []
        for career in self._careers:
            if career.sector not in seen:
                seen.append(career.sector)
        return seen


@lru_cache()
def default_catalog() -> CareerCatalog:
    return CareerCatalog(DEFAULT_CAREERS)
