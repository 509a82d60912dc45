"""
Feature Extraction for résumé scoring.

Responsibilities:
- Turn extracted résumé text into CandidateFeatures.
- Infer skills, years of experience, location and education level.

Non-Responsibilities:
- No weighting logic.
- No threshold logic.
- No persistence.

Invariant:
Extraction is rule-based and deterministic: the same text, required
skills and reference date always produce the same features.
"""

import re
from datetime import date
from typing import Iterable, Optional, Sequence, Set, Tuple

from resumescore.logger import get_logger
from resumescore.models import (
    EDUCATION_ASSOCIATES,
    EDUCATION_BACHELORS,
    EDUCATION_DIPLOMA,
    EDUCATION_HIGH_SCHOOL,
    EDUCATION_MASTERS,
    EDUCATION_MBA,
    EDUCATION_NOT_SPECIFIED,
    EDUCATION_PHD,
    UNKNOWN_LOCATION,
    CandidateFeatures,
    MatchMeta,
)
from pipelines.matching.detectors import (
    detect_contextual_skills,
    detect_ngram_aliases,
    detect_phrase_aliases,
    detect_required_skills,
    detect_token_aliases,
)

MAX_EXPLICIT_YEARS = 60
MAX_RANGE_MONTHS = 600  # ranges of 50 years or more are treated as noise

# Tried in order; the first pattern that yields a plausible value wins.
EXPERIENCE_PATTERNS: Tuple["re.Pattern[str]", ...] = (
    # "8+ years of experience", "8 yrs experience"
    re.compile(r"(\d+(?:\.\d+)?)\+?\s*(?:years?|yrs?)[\s\-]*(?:of\s+)?(?:experience|exp|work)", re.I),
    # "experience: 8 years", "total experience - 8+ yrs"
    re.compile(r"(?:total\s+)?experience\s*[:\-–—]\s*(\d+(?:\.\d+)?)\+?\s*(?:years?|yrs?)", re.I),
    # "over 8 years", "more than 8 years", "approx. 8 years"
    re.compile(r"(?:over|more than|approx(?:imately)?\.?)\s*(\d+(?:\.\d+)?)\s*(?:years?|yrs?)", re.I),
    # "professional experience of 8 years"
    re.compile(r"professional\s+experience\s+of\s+(\d+(?:\.\d+)?)\+?\s*(?:years?|yrs?)", re.I),
)

MONTHS = {
    "jan": 1, "january": 1, "feb": 2, "february": 2, "mar": 3, "march": 3,
    "apr": 4, "april": 4, "may": 5, "jun": 6, "june": 6,
    "jul": 7, "july": 7, "aug": 8, "august": 8, "sep": 9, "sept": 9, "september": 9,
    "oct": 10, "october": 10, "nov": 11, "november": 11, "dec": 12, "december": 12,
}

# "Jan 2018 – Dec 2022", "2018 - 2022", "March 2019 to Present"
DATE_RANGE_PATTERN = re.compile(
    r"(?:([A-Za-z]+)\s+)?\b(\d{4})\s*(?:[-–—]+|\bto\b)\s*(?:([A-Za-z]+)\s+)?(\d{4}|present|current|now|ongoing)\b",
    re.I,
)
_OPEN_ENDED = {"present", "current", "now", "ongoing"}

LOCATION_LABEL_PATTERN = re.compile(
    r"\b(?i:location|city|based\s+(?:in|at)|residing\s+(?:in|at)|current(?:ly)?\s*(?:in|at|location)"
    r"|address|hometown|lives?\s+in)[ \t]*[:\-–—]?[ \t]*([A-Z][A-Za-z ,]+)"
)

# Checked in list order; the first whole-word hit wins.
KNOWN_LOCATIONS: Tuple[str, ...] = (
    # India
    "bangalore", "bengaluru", "mumbai", "delhi", "new delhi", "hyderabad",
    "chennai", "pune", "kolkata", "ahmedabad", "jaipur", "lucknow",
    "chandigarh", "indore", "bhopal", "nagpur", "visakhapatnam",
    "coimbatore", "kochi", "thiruvananthapuram", "gurgaon", "gurugram",
    "noida", "ghaziabad", "faridabad", "mysore", "mysuru", "mangalore",
    "mangaluru", "surat", "vadodara", "rajkot", "nashik", "aurangabad",
    "patna", "ranchi", "bhubaneswar", "guwahati", "dehradun",
    # US
    "new york", "san francisco", "los angeles", "chicago", "seattle",
    "austin", "boston", "denver", "dallas", "houston", "atlanta",
    "miami", "portland", "phoenix", "san jose", "san diego",
    "washington dc", "washington d.c.", "raleigh", "charlotte",
    "minneapolis", "salt lake city", "philadelphia", "pittsburgh",
    # Global
    "london", "berlin", "amsterdam", "paris", "dublin", "toronto",
    "vancouver", "sydney", "melbourne", "singapore", "tokyo",
    "hong kong", "dubai", "tel aviv", "stockholm", "zurich",
    "barcelona", "lisbon", "warsaw", "prague", "vienna",
    # Work arrangements
    "remote", "work from home", "wfh", "hybrid",
)

_LOCATION_PATTERNS = tuple(
    (name, re.compile(r"(?<!\w)" + re.escape(name) + r"(?!\w)", re.I)) for name in KNOWN_LOCATIONS
)


def _degree(body: str) -> "re.Pattern[str]":
    return re.compile(r"(?<!\w)(?:" + body + r")(?!\w)")


# (rank, level, pattern): lower rank wins regardless of where in the text it matches.
# Undotted abbreviations are case-sensitive so "be", "ba" or "MS Excel" in
# prose do not read as degrees; bare "MS" counts only before "in" or "of".
EDUCATION_PATTERNS: Tuple[Tuple[int, str, "re.Pattern[str]"], ...] = (
    (1, EDUCATION_PHD, _degree(r"(?i:ph\.?\s?d\.?|doctorate|doctor of philosophy)")),
    (2, EDUCATION_MBA, _degree(r"(?i:m\.b\.a\.?)|MBA")),
    (3, EDUCATION_MASTERS, _degree(
        r"(?i:master[’']?s|master\s+(?:of|in)|master\s+degree)"
        r"|(?i:m\.s\.?|m\.sc\.?|m\.eng\.?|m\.tech\.?|m\.a\.?)"
        r"|MSc|MEng|MTech|MS(?=\s+(?:in|of)\b)"
    )),
    (4, EDUCATION_BACHELORS, _degree(
        r"(?i:bachelor(?:[’']?s)?)"
        r"|(?i:b\.s\.?|b\.sc\.?|b\.eng\.?|b\.tech\.?|b\.a\.?|b\.e\.?)"
        r"|BSc|BEng|BTech|BS|BA|BE"
    )),
    (5, EDUCATION_ASSOCIATES, _degree(r"(?i:associate[’']?s(?:\s+degree)?|associate\s+degree)")),
    (6, EDUCATION_DIPLOMA, _degree(r"(?i:diploma|certification|certificate)")),
    (7, EDUCATION_HIGH_SCHOOL, _degree(r"(?i:high school|secondary|12th|10th)|HSC|SSC")),
)


def detect_skills(text: str, required_skills: Iterable[str] = ()) -> Set[str]:
    """Union of all five skill detectors over the lower-cased text."""
    text_lower = text.lower()
    return (
        detect_phrase_aliases(text_lower)
        | detect_token_aliases(text_lower)
        | detect_ngram_aliases(text_lower)
        | detect_required_skills(text_lower, required_skills)
        | detect_contextual_skills(text_lower)
    )


def infer_experience(text: str, today: Optional[date] = None) -> Tuple[float, bool]:
    """
    Estimate total years of professional experience.

    Explicit statements ("8+ years of experience") take precedence over
    employment date ranges. Date ranges are summed as found: overlapping
    roles are counted twice.
    """
    for pattern in EXPERIENCE_PATTERNS:
        match = pattern.search(text)
        if match:
            years = float(match.group(1))
            if 0 <= years < MAX_EXPLICIT_YEARS:
                return years, True

    years = years_from_date_ranges(text, today=today)
    if years > 0:
        return years, True

    return 0.0, False


def years_from_date_ranges(text: str, today: Optional[date] = None) -> float:
    """Sum every employment date range in the text, in years rounded to one decimal."""
    today = today or date.today()
    total_months = 0

    for match in DATE_RANGE_PATTERN.finditer(text):
        start_word, start_year, end_word, end_token = match.groups()
        start_month = MONTHS.get((start_word or "").lower(), 1)

        if end_token.lower() in _OPEN_ENDED:
            end_year, end_month = today.year, today.month
        else:
            end_year = int(end_token)
            end_month = MONTHS.get((end_word or "").lower(), 12)

        months = (end_year - int(start_year)) * 12 + (end_month - start_month)
        if 0 < months < MAX_RANGE_MONTHS:
            total_months += months

    return round(total_months / 12, 1)


def infer_location(text: str) -> Tuple[str, bool]:
    match = LOCATION_LABEL_PATTERN.search(text)
    if match:
        location = match.group(1).strip().rstrip(", ").strip()
        if 2 <= len(location) <= 50:
            return location, True

    for name, pattern in _LOCATION_PATTERNS:
        if pattern.search(text):
            return " ".join(w[:1].upper() + w[1:] for w in name.split(" ")), True

    return UNKNOWN_LOCATION, False


def infer_education(text: str) -> Tuple[str, bool]:
    """Highest-ranked education level mentioned anywhere in the text."""
    for _rank, level, pattern in sorted(EDUCATION_PATTERNS, key=lambda p: p[0]):
        if pattern.search(text):
            return level, True
    return EDUCATION_NOT_SPECIFIED, False


def extract_features(
    text: str,
    required_skills: Sequence[str] = (),
    today: Optional[date] = None,
) -> CandidateFeatures:
    """
    Extract structured candidate features from résumé text.

    Args:
        text: Plain text produced by the document parser.
        required_skills: Skills the target opening asks for; each one is
            actively searched for under all of its aliases.
        today: Reference date for open-ended ranges ("2019 - Present").

    Returns:
        CandidateFeatures with sorted canonical skills and match flags.
    """
    skills = sorted(detect_skills(text, required_skills))
    experience_years, experience_matched = infer_experience(text, today=today)
    location, location_matched = infer_location(text)
    education_level, education_matched = infer_education(text)

    features = CandidateFeatures(
        skills=skills,
        experience_years=experience_years,
        location=location,
        education_level=education_level,
        match_meta=MatchMeta(
            skills_found_count=len(skills),
            experience_matched=experience_matched,
            location_matched=location_matched,
            education_matched=education_matched,
        ),
    )

    get_logger().info(
        "Feature extraction complete",
        skills_count=len(skills),
        experience_years=experience_years,
        location=location,
        education=education_level,
        experience_matched=experience_matched,
        location_matched=location_matched,
        education_matched=education_matched,
    )
    return features
