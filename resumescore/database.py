"""
Database schema and connection management.

Uses SQLite with SQLAlchemy for job openings and scored candidate
profiles. The schema itself enforces the profile invariants: one row per
idempotency key, and score columns that are either all empty or all set.
"""

import uuid
from datetime import datetime
from pathlib import Path
from sqlalchemy import (
    JSON,
    CheckConstraint,
    Column,
    DateTime,
    Float,
    Index,
    String,
    Text,
    UniqueConstraint,
    create_engine,
    event,
    inspect,
)
from sqlalchemy.orm import declarative_base, sessionmaker

from .errors import ImmutableProfileError
from .models import CandidateFeatures, Confidence, JobRequirement, MatchMeta, ScoreResult

Base = declarative_base()

SCORE_COLUMNS = (
    "skill_score",
    "experience_score",
    "location_score",
    "final_score",
    "confidence",
    "reason",
)


def _new_id() -> str:
    return str(uuid.uuid4())


class JobOpening(Base):
    """Job opening a résumé is scored against."""

    __tablename__ = "job_openings"

    id = Column(String, primary_key=True, default=_new_id)
    tenant_id = Column(String, nullable=False, index=True)
    title = Column(String, nullable=False)
    department = Column(String, nullable=False, default="")
    location = Column(String, nullable=False, default="")
    required_skills = Column(JSON, nullable=False, default=list)
    required_experience = Column(Float, nullable=False, default=0.0)
    description = Column(Text, nullable=True)
    status = Column(String, nullable=False, default="OPEN")
    created_at = Column(DateTime, nullable=False, default=datetime.now)
    updated_at = Column(DateTime, nullable=False, default=datetime.now, onupdate=datetime.now)


class CandidateProfile(Base):
    """Scored résumé submission. Written once, never edited."""

    __tablename__ = "candidate_profiles"
    __table_args__ = (
        UniqueConstraint("filename", "opening_id", "user_id", "tenant_id", name="uq_profile_idempotency_key"),
        CheckConstraint(
            "(" + " AND ".join(f"{c} IS NULL" for c in SCORE_COLUMNS) + ") OR ("
            + " AND ".join(f"{c} IS NOT NULL" for c in SCORE_COLUMNS) + ")",
            name="ck_profile_score_all_or_nothing",
        ),
        Index("ix_profile_tenant_created", "tenant_id", "created_at"),
    )

    id = Column(String, primary_key=True, default=_new_id)
    tenant_id = Column(String, nullable=False)
    user_id = Column(String, nullable=False, index=True)
    opening_id = Column(String, nullable=False, index=True)
    filename = Column(String, nullable=False)
    resume_key = Column(String, nullable=False)  # object storage pointer
    resume_bucket = Column(String, nullable=False)

    # Extracted features, frozen at scoring time
    candidate_skills = Column(JSON, nullable=False)
    candidate_experience = Column(Float, nullable=False)
    candidate_location = Column(String, nullable=False)
    candidate_education = Column(String, nullable=False)
    match_meta = Column(JSON, nullable=False)
    resume_text = Column(Text, nullable=False)  # capped excerpt

    # Requirement snapshot, never re-read from the opening
    job_required_skills = Column(JSON, nullable=False)
    job_required_experience = Column(Float, nullable=False)
    job_required_location = Column(String, nullable=False)

    skill_score = Column(Float, nullable=True)
    experience_score = Column(Float, nullable=True)
    location_score = Column(Float, nullable=True)
    final_score = Column(Float, nullable=True)
    confidence = Column(String, nullable=True)
    reason = Column(Text, nullable=True)
    latency_ms = Column(Float, nullable=True)

    created_at = Column(DateTime, nullable=False, default=datetime.now)

    @property
    def is_finalized(self) -> bool:
        return self.final_score is not None

    def to_features(self) -> CandidateFeatures:
        return CandidateFeatures(
            skills=list(self.candidate_skills),
            experience_years=self.candidate_experience,
            location=self.candidate_location,
            education_level=self.candidate_education,
            match_meta=MatchMeta(**self.match_meta),
        )

    def to_requirement(self) -> JobRequirement:
        return JobRequirement(
            required_skills=list(self.job_required_skills),
            required_experience_years=self.job_required_experience,
            required_location=self.job_required_location,
        )

    def to_score(self) -> ScoreResult:
        return ScoreResult(
            skill_score=self.skill_score,
            experience_score=self.experience_score,
            location_score=self.location_score,
            final_score=self.final_score,
            confidence=Confidence(self.confidence),
            reason=self.reason,
        )


@event.listens_for(CandidateProfile, "before_update")
def _reject_finalized_updates(mapper, connection, target):
    """A profile may be finalized once (inside its creating transaction), then never changed."""
    history = inspect(target).attrs.final_score.history
    previous = history.deleted or history.unchanged
    if any(value is not None for value in previous):
        raise ImmutableProfileError(f"Candidate profile {target.id} is finalized and cannot be modified")


def _sqlite_url(db_path: Path) -> str:
    return f"sqlite:///{db_path}"


def init_database(db_path: Path) -> None:
    """
    Initialize database and create tables.

    Args:
        db_path: Path to SQLite database file
    """
    db_path = Path(db_path)
    db_path.parent.mkdir(parents=True, exist_ok=True)
    engine = create_engine(_sqlite_url(db_path))
    Base.metadata.create_all(engine)
    engine.dispose()


def get_session_factory(db_path: Path) -> sessionmaker:
    """
    Build a session factory bound to the SQLite database.

    Args:
        db_path: Path to SQLite database file

    Returns:
        sessionmaker producing sessions that keep loaded attributes after commit
    """
    engine = create_engine(_sqlite_url(Path(db_path)))
    return sessionmaker(bind=engine, expire_on_commit=False)


def get_session(db_path: Path):
    """
    Get database session.

    Args:
        db_path: Path to SQLite database file

    Returns:
        SQLAlchemy session
    """
    return get_session_factory(db_path)()
