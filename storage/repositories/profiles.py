"""
Candidate Profiles Repository.

Responsibilities:
- Idempotency lookup by (filename, opening, user, tenant).
- The single atomic create-and-finalize write of a scored profile.
- Tenant-scoped listing.

Non-Responsibilities:
- No business logic.
- No feature extraction.
- No scoring.

Invariant:
A profile is either absent or fully scored. Creation and finalization
happen in one transaction; there is no way to call them separately.
"""

from typing import Dict, List, Optional, Tuple

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from resumescore.database import CandidateProfile
from resumescore.errors import PersistenceFailure
from resumescore.models import CandidateFeatures, JobRequirement, ScoreResult


class ProfileRepository:
    def __init__(self, session_factory):
        self._session_factory = session_factory

    def find_existing(
        self, filename: str, opening_id: str, user_id: str, tenant_id: str
    ) -> Optional[CandidateProfile]:
        with self._session_factory() as session:
            return self._find_existing(session, filename, opening_id, user_id, tenant_id)

    def create_and_finalize(
        self,
        *,
        tenant_id: str,
        user_id: str,
        opening_id: str,
        filename: str,
        resume_key: str,
        resume_bucket: str,
        features: CandidateFeatures,
        requirement: JobRequirement,
        resume_text: str,
        score: ScoreResult,
        latency_ms: float,
    ) -> Tuple[CandidateProfile, bool]:
        """
        Insert the profile with its features and requirement snapshot, then
        record the score, all in one transaction.

        A row that already exists for the idempotency key (a concurrent
        submission won the race) is returned instead of a second row.

        Returns:
            (profile, created) where created is False for a folded duplicate.

        Raises:
            PersistenceFailure: the write failed; nothing was committed.
        """
        try:
            with self._session_factory() as session:
                with session.begin():
                    profile = CandidateProfile(
                        tenant_id=tenant_id,
                        user_id=user_id,
                        opening_id=opening_id,
                        filename=filename,
                        resume_key=resume_key,
                        resume_bucket=resume_bucket,
                        candidate_skills=list(features.skills),
                        candidate_experience=features.experience_years,
                        candidate_location=features.location,
                        candidate_education=features.education_level,
                        match_meta=features.to_dict()["match_meta"],
                        resume_text=resume_text,
                        job_required_skills=list(requirement.required_skills),
                        job_required_experience=requirement.required_experience_years,
                        job_required_location=requirement.required_location,
                    )
                    session.add(profile)
                    session.flush()
                    self._finalize(profile, score, latency_ms)
                    session.flush()
                return profile, True
        except IntegrityError as e:
            existing = self.find_existing(filename, opening_id, user_id, tenant_id)
            if existing is not None and existing.is_finalized:
                return existing, False
            raise PersistenceFailure(
                f"Profile write rejected: {e.orig}",
                tenant_id=tenant_id,
                opening_id=opening_id,
                filename=filename,
            ) from e
        except SQLAlchemyError as e:
            raise PersistenceFailure(
                f"Profile write failed and was rolled back: {e}",
                tenant_id=tenant_id,
                opening_id=opening_id,
                filename=filename,
            ) from e

    @staticmethod
    def _finalize(profile: CandidateProfile, score: ScoreResult, latency_ms: float) -> None:
        profile.skill_score = score.skill_score
        profile.experience_score = score.experience_score
        profile.location_score = score.location_score
        profile.final_score = score.final_score
        profile.confidence = score.confidence.value
        profile.reason = score.reason
        profile.latency_ms = latency_ms

    def list_profiles(self, tenant_id: str) -> List[Dict]:
        """Tenant's scored profiles, newest first."""
        stmt = (
            select(CandidateProfile)
            .where(CandidateProfile.tenant_id == tenant_id)
            .order_by(CandidateProfile.created_at.desc())
        )
        with self._session_factory() as session:
            return [
                {
                    "id": p.id,
                    "filename": p.filename,
                    "opening_id": p.opening_id,
                    "user_id": p.user_id,
                    "candidate_skills": list(p.candidate_skills),
                    "candidate_experience": p.candidate_experience,
                    "candidate_location": p.candidate_location,
                    "candidate_education": p.candidate_education,
                    "final_score": p.final_score,
                    "skill_score": p.skill_score,
                    "experience_score": p.experience_score,
                    "location_score": p.location_score,
                    "confidence": p.confidence,
                    "reason": p.reason,
                    "latency_ms": p.latency_ms,
                    "created_at": p.created_at,
                }
                for p in session.scalars(stmt).all()
            ]

    def count(self, tenant_id: Optional[str] = None) -> int:
        stmt = select(func.count(CandidateProfile.id))
        if tenant_id is not None:
            stmt = stmt.where(CandidateProfile.tenant_id == tenant_id)
        with self._session_factory() as session:
            return session.scalar(stmt)

    @staticmethod
    def _find_existing(session, filename, opening_id, user_id, tenant_id) -> Optional[CandidateProfile]:
        stmt = select(CandidateProfile).where(
            CandidateProfile.filename == filename,
            CandidateProfile.opening_id == opening_id,
            CandidateProfile.user_id == user_id,
            CandidateProfile.tenant_id == tenant_id,
        )
        return session.scalars(stmt).first()
