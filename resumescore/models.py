"""
Value types passed between pipeline stages.

These are plain in-memory records; the persisted aggregate lives in
resumescore.database.
"""

from dataclasses import dataclass, field, asdict
from enum import Enum
from typing import Dict, List, Optional


PDF_CONTENT_TYPE = "application/pdf"
TEXT_CONTENT_TYPE = "text/plain"

EDUCATION_PHD = "PhD"
EDUCATION_MBA = "MBA"
EDUCATION_MASTERS = "Master's"
EDUCATION_BACHELORS = "Bachelor's"
EDUCATION_ASSOCIATES = "Associate's"
EDUCATION_DIPLOMA = "Diploma/Certificate"
EDUCATION_HIGH_SCHOOL = "High School"
EDUCATION_NOT_SPECIFIED = "Not specified"

UNKNOWN_LOCATION = "Unknown"


class Confidence(str, Enum):
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"


class PipelineStage(str, Enum):
    IDLE = "idle"
    PARSING = "parsing"
    EXTRACTING = "extracting"
    SCORING = "scoring"
    PERSISTING = "persisting"
    DONE = "done"


@dataclass(frozen=True)
class RawDocument:
    """Uploaded file as handed over by the caller."""

    content: bytes
    content_type: str
    filename: str


@dataclass(frozen=True)
class ParsedText:
    text: str
    page_count: int
    content_type: str


@dataclass(frozen=True)
class MatchMeta:
    skills_found_count: int
    experience_matched: bool
    location_matched: bool
    education_matched: bool


@dataclass(frozen=True)
class CandidateFeatures:
    """Structured features extracted from résumé text."""

    skills: List[str]
    experience_years: float
    location: str
    education_level: str
    match_meta: MatchMeta

    def to_dict(self) -> Dict:
        return asdict(self)


@dataclass(frozen=True)
class JobRequirement:
    """Requirements of a job opening, as read at scoring time."""

    required_skills: List[str] = field(default_factory=list)
    required_experience_years: float = 0.0
    required_location: str = ""


@dataclass(frozen=True)
class ScoreResult:
    skill_score: float
    experience_score: float
    location_score: float
    final_score: float
    confidence: Confidence
    reason: str

    def to_dict(self) -> Dict:
        data = asdict(self)
        data["confidence"] = self.confidence.value
        return data


@dataclass
class PipelineResult:
    """Outcome of one pipeline run, fresh or replayed."""

    profile_id: str
    features: CandidateFeatures
    score: ScoreResult
    latency_ms: Optional[float]
    replayed: bool = False
    stage_timings_ms: Dict[str, float] = field(default_factory=dict)

    def to_dict(self) -> Dict:
        return {
            "profile_id": self.profile_id,
            "replayed": self.replayed,
            "latency_ms": self.latency_ms,
            "stage_timings_ms": dict(self.stage_timings_ms),
            "features": self.features.to_dict(),
            "score": self.score.to_dict(),
        }
