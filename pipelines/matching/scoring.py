"""
Scoring Logic for candidate/opening matching (v1).

Responsibilities:
- Compute a deterministic match score between candidate features and an
  opening's requirements.
- Emit a score breakdown and explanation.

Non-Responsibilities:
- No database access.
- No feature extraction.

Invariant:
Given identical inputs, this module must always return
the same score and explanation.

    final = 0.5 * skill + 0.3 * experience + 0.2 * location
"""

from typing import List, Sequence, Tuple

from resumescore.models import CandidateFeatures, Confidence, JobRequirement, ScoreResult
from resumescore.normalize import same_location
from resumescore.skills import canonicalize

WEIGHT_SKILL = 0.5
WEIGHT_EXPERIENCE = 0.3
WEIGHT_LOCATION = 0.2

HIGH_THRESHOLD = 0.75
MEDIUM_THRESHOLD = 0.45


def _round4(value: float) -> float:
    return round(value, 4)


def _years(value: float) -> str:
    # 10.0 -> "10", 4.9 -> "4.9"
    return f"{value:g}"


def score_skills(
    candidate_skills: Sequence[str], required_skills: Sequence[str]
) -> Tuple[float, List[str], List[str]]:
    """
    Share of required skills the candidate has, compared by canonical name.

    Required skills naming the same canonical skill count once. With no
    required skills the score is 1.

    Returns:
        (score, matched, missing) where matched/missing hold the required
        skills as written on the opening.
    """
    required: List[str] = []
    seen = set()
    for skill in required_skills:
        canonical = canonicalize(skill)
        if canonical not in seen:
            seen.add(canonical)
            required.append(skill)

    if not required:
        return 1.0, [], []

    candidate = {canonicalize(s) for s in candidate_skills}
    matched = [s for s in required if canonicalize(s) in candidate]
    missing = [s for s in required if canonicalize(s) not in candidate]
    return len(matched) / len(required), matched, missing


def score_experience(candidate_years: float, required_years: float) -> Tuple[float, str]:
    if required_years <= 0:
        return 1.0, "No experience requirement."

    score = min(candidate_years / required_years, 1.0)
    if score >= 1:
        detail = f"Candidate has {_years(candidate_years)} yrs (>= {_years(required_years)} required)."
    else:
        detail = (
            f"Candidate has {_years(candidate_years)} yrs "
            f"(< {_years(required_years)} required, {score * 100:.0f}% match)."
        )
    return score, detail


def score_location(candidate_location: str, required_location: str) -> Tuple[float, str]:
    if not candidate_location or not required_location:
        return 1.0, "No location constraint."

    if same_location(candidate_location, required_location):
        return 1.0, f'Location match: "{candidate_location}" equals required "{required_location}".'
    return 0.0, f'Location mismatch: "{candidate_location}" differs from required "{required_location}".'


def derive_confidence(final_score: float) -> Confidence:
    if final_score >= HIGH_THRESHOLD:
        return Confidence.HIGH
    if final_score >= MEDIUM_THRESHOLD:
        return Confidence.MEDIUM
    return Confidence.LOW


def score_candidate(features: CandidateFeatures, requirement: JobRequirement) -> ScoreResult:
    """
    Score candidate features against an opening's requirements.

    Pure and total: no I/O, no randomness, safe to call inside a database
    transaction or from several threads at once.
    """
    skill, matched, missing = score_skills(features.skills, requirement.required_skills)
    experience, experience_detail = score_experience(
        features.experience_years, requirement.required_experience_years
    )
    location, location_detail = score_location(features.location, requirement.required_location)

    final = _round4(
        WEIGHT_SKILL * skill
        + WEIGHT_EXPERIENCE * experience
        + WEIGHT_LOCATION * location
    )
    confidence = derive_confidence(final)

    reason_parts = []
    if matched:
        reason_parts.append(f"Skills matched: [{', '.join(matched)}].")
    if missing:
        reason_parts.append(f"Skills missing: [{', '.join(missing)}].")
    reason_parts.append(f"Skill score: {skill * 100:.0f}% (weight {WEIGHT_SKILL}).")
    reason_parts.append(
        f"{experience_detail} Experience score: {experience * 100:.0f}% (weight {WEIGHT_EXPERIENCE})."
    )
    reason_parts.append(
        f"{location_detail} Location score: {location * 100:.0f}% (weight {WEIGHT_LOCATION})."
    )
    reason_parts.append(f"Final weighted score: {final * 100:.1f}%. Confidence: {confidence.value}.")

    return ScoreResult(
        skill_score=_round4(skill),
        experience_score=_round4(experience),
        location_score=_round4(location),
        final_score=final,
        confidence=confidence,
        reason=" ".join(reason_parts),
    )
