"""
Job Openings Repository.

Responsibilities:
- Tenant-scoped reads of job openings and their requirements.
- Creating openings from validated input.

Non-Responsibilities:
- No business logic.
- No scoring.

Invariant:
An opening is only ever visible to the tenant that owns it.
"""

import uuid
from typing import Dict, List, Optional, Sequence

from sqlalchemy import func, select

from resumescore.database import CandidateProfile, JobOpening
from resumescore.models import JobRequirement


class OpeningRepository:
    def __init__(self, session_factory):
        self._session_factory = session_factory

    def get_requirement(self, opening_id: str, tenant_id: str) -> Optional[JobRequirement]:
        """Requirements of an opening, or None if it is missing or owned by another tenant."""
        with self._session_factory() as session:
            opening = session.get(JobOpening, opening_id)
            if opening is None or opening.tenant_id != tenant_id:
                return None
            return JobRequirement(
                required_skills=list(opening.required_skills or []),
                required_experience_years=float(opening.required_experience or 0.0),
                required_location=opening.location or "",
            )

    def create_opening(
        self,
        tenant_id: str,
        title: str,
        required_skills: Sequence[str] = (),
        required_experience: float = 0.0,
        location: str = "",
        department: str = "",
        description: Optional[str] = None,
        opening_id: Optional[str] = None,
        status: str = "OPEN",
    ) -> JobOpening:
        with self._session_factory() as session:
            with session.begin():
                opening = JobOpening(
                    id=opening_id or str(uuid.uuid4()),
                    tenant_id=tenant_id,
                    title=title,
                    department=department,
                    location=location,
                    required_skills=list(required_skills),
                    required_experience=float(required_experience),
                    description=description,
                    status=status,
                )
                session.add(opening)
            return opening

    def list_openings(self, tenant_id: str) -> List[Dict]:
        """Tenant's openings, newest first, with the number of profiles submitted to each."""
        profile_counts = (
            select(CandidateProfile.opening_id, func.count(CandidateProfile.id).label("profile_count"))
            .where(CandidateProfile.tenant_id == tenant_id)
            .group_by(CandidateProfile.opening_id)
            .subquery()
        )
        stmt = (
            select(JobOpening, func.coalesce(profile_counts.c.profile_count, 0))
            .outerjoin(profile_counts, profile_counts.c.opening_id == JobOpening.id)
            .where(JobOpening.tenant_id == tenant_id)
            .order_by(JobOpening.created_at.desc())
        )
        with self._session_factory() as session:
            return [
                {
                    "id": opening.id,
                    "title": opening.title,
                    "department": opening.department,
                    "location": opening.location,
                    "required_skills": list(opening.required_skills or []),
                    "required_experience": opening.required_experience,
                    "description": opening.description,
                    "status": opening.status,
                    "profile_count": count,
                    "created_at": opening.created_at,
                }
                for opening, count in session.execute(stmt).all()
            ]
