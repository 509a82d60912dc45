"""
Résumé Scoring Orchestrator.

Responsibilities:
- Run one submission through parse, extract, score and persist.
- Replay an already scored submission instead of recomputing it.
- Time each stage and report failures as typed errors.

Non-Responsibilities:
- No extraction rules.
- No scoring rules.
- No SQL.

Invariant:
A submission either produces exactly one fully scored profile or leaves
no trace in storage. Resubmitting the same (filename, opening, user,
tenant) returns the stored result unchanged.
"""

import time
from typing import Dict, Optional

from resumescore.env import Settings
from resumescore.errors import EmptyExtraction, OpeningNotFound, PersistenceFailure, PipelineError
from resumescore.logger import StructuredLogger, get_logger
from resumescore.models import PipelineResult, PipelineStage, RawDocument
from resumescore.parser import parse_document
from resumescore.retry import exponential_backoff
from pipelines.matching.features import extract_features
from pipelines.matching.scoring import score_candidate


def build_resume_key(tenant_id: str, opening_id: str, filename: str, timestamp_ms: int) -> str:
    """Object storage key under which the uploaded file is kept."""
    return f"resumes/{tenant_id}/{opening_id}/{timestamp_ms}_{filename}"


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 2)


class ResumePipeline:
    """
    Sequential state machine over PipelineStage.

    Stages run inline on the caller's thread. Collaborators are the two
    repositories; both are safe to share between threads because every
    call opens its own session.
    """

    def __init__(self, openings, profiles, settings: Optional[Settings] = None, logger: Optional[StructuredLogger] = None):
        self.openings = openings
        self.profiles = profiles
        self.settings = settings or Settings()
        self.logger = logger or get_logger()

    def submit(self, document: RawDocument, opening_id: str, user_id: str, tenant_id: str) -> PipelineResult:
        """
        Score an uploaded résumé against an opening and persist the result.

        Raises:
            OpeningNotFound: opening missing or owned by another tenant.
            UnsupportedFormat, ParseFailure, EmptyExtraction: bad document.
            PersistenceFailure: a storage call failed and nothing was written; safe to retry.
        """
        context = {"tenant_id": tenant_id, "opening_id": opening_id, "filename": document.filename}
        self.logger.record_run_started()
        self.logger.info("Pipeline run started", user_id=user_id, **context)

        try:
            result = self._run(document, opening_id, user_id, tenant_id, context)
        except PipelineError as e:
            self._fail(e, context)
            raise

        if result.replayed:
            self.logger.record_run_replayed()
        else:
            self.logger.record_run_success()
        self.logger.info(
            "Pipeline run complete",
            stage=PipelineStage.DONE.value,
            profile_id=result.profile_id,
            replayed=result.replayed,
            final_score=result.score.final_score,
            confidence=result.score.confidence.value,
            latency_ms=result.latency_ms,
            **context,
        )
        return result

    def _run(self, document: RawDocument, opening_id: str, user_id: str, tenant_id: str, context: Dict) -> PipelineResult:
        run_started = time.perf_counter()
        timings: Dict[str, float] = {}

        existing = self._storage_call(
            "Profile lookup", context, self.profiles.find_existing, document.filename, opening_id, user_id, tenant_id
        )
        if existing is not None and existing.is_finalized:
            self.logger.info("Replaying stored profile", profile_id=existing.id, **context)
            return PipelineResult(
                profile_id=existing.id,
                features=existing.to_features(),
                score=existing.to_score(),
                latency_ms=existing.latency_ms,
                replayed=True,
            )

        requirement = self._storage_call("Opening lookup", context, self.openings.get_requirement, opening_id, tenant_id)
        if requirement is None:
            raise OpeningNotFound(
                f"Opening {opening_id!r} not found for tenant {tenant_id!r}",
                tenant_id=tenant_id,
                opening_id=opening_id,
                filename=document.filename,
            )

        started = self._enter(PipelineStage.PARSING, context)
        try:
            parsed = parse_document(document.content, document.content_type, document.filename)
        except PipelineError as e:
            e.tenant_id, e.opening_id = tenant_id, opening_id
            raise
        if not parsed.text:
            raise EmptyExtraction(
                f"No text could be extracted from {document.filename!r}",
                tenant_id=tenant_id,
                opening_id=opening_id,
                filename=document.filename,
            )
        self._leave(PipelineStage.PARSING, started, timings, context, pages=parsed.page_count)

        started = self._enter(PipelineStage.EXTRACTING, context)
        features = extract_features(parsed.text, requirement.required_skills)
        self._leave(PipelineStage.EXTRACTING, started, timings, context, skills_count=len(features.skills))

        started = self._enter(PipelineStage.SCORING, context)
        score = score_candidate(features, requirement)
        self._leave(PipelineStage.SCORING, started, timings, context, final_score=score.final_score)

        started = self._enter(PipelineStage.PERSISTING, context)
        latency_ms = _elapsed_ms(run_started)
        profile, created = self._storage_call(
            "Persisting profile",
            context,
            self.profiles.create_and_finalize,
            tenant_id=tenant_id,
            user_id=user_id,
            opening_id=opening_id,
            filename=document.filename,
            resume_key=build_resume_key(tenant_id, opening_id, document.filename, int(time.time() * 1000)),
            resume_bucket=self.settings.resume_bucket,
            features=features,
            requirement=requirement,
            resume_text=parsed.text[: self.settings.text_cap],
            score=score,
            latency_ms=latency_ms,
        )
        self._leave(PipelineStage.PERSISTING, started, timings, context, profile_id=profile.id)

        if not created:
            # A concurrent submission committed first; report its result.
            self.logger.info("Duplicate submission folded into existing profile", profile_id=profile.id, **context)
            return PipelineResult(
                profile_id=profile.id,
                features=profile.to_features(),
                score=profile.to_score(),
                latency_ms=profile.latency_ms,
                replayed=True,
                stage_timings_ms=timings,
            )

        return PipelineResult(
            profile_id=profile.id,
            features=features,
            score=score,
            latency_ms=latency_ms,
            stage_timings_ms=timings,
        )

    def _storage_call(self, description: str, context: Dict, call, *args, **kwargs):
        """Invoke a repository method; any storage error becomes a retryable PersistenceFailure."""
        try:
            return call(*args, **kwargs)
        except PipelineError:
            raise
        except Exception as e:
            raise PersistenceFailure(f"{description} failed: {e}", **context) from e

    def _enter(self, stage: PipelineStage, context: Dict) -> float:
        self.logger.debug("Stage started", stage=stage.value, **context)
        return time.perf_counter()

    def _leave(self, stage: PipelineStage, started: float, timings: Dict[str, float], context: Dict, **details) -> None:
        elapsed = _elapsed_ms(started)
        timings[stage.value] = elapsed
        self.logger.record_stage_latency(stage.value, elapsed)
        self.logger.debug("Stage complete", stage=stage.value, elapsed_ms=elapsed, **details, **context)

    def _fail(self, error: PipelineError, context: Dict) -> None:
        self.logger.record_run_failure(type(error).__name__)
        self.logger.error(
            "Pipeline run failed",
            error=str(error),
            error_type=type(error).__name__,
            retryable=error.retryable,
            **context,
        )


def submit_with_retry(
    pipeline: ResumePipeline,
    document: RawDocument,
    opening_id: str,
    user_id: str,
    tenant_id: str,
    max_retries: int = 2,
    base_delay: float = 0.5,
) -> PipelineResult:
    """
    Submit with end-to-end retries on rolled-back persistence failures.

    A retry after a write that did commit is answered by the idempotency
    lookup, so no duplicate profile can result. Input errors are raised
    on the first attempt.

    Raises:
        RetryError: every attempt failed to persist.
    """

    def log_retry(attempt, error, delay):
        pipeline.logger.warning(
            f"Retrying submission (attempt {attempt}/{max_retries}) after {delay:.2f}s",
            error=str(error),
            tenant_id=tenant_id,
            opening_id=opening_id,
            filename=document.filename,
        )

    @exponential_backoff(
        max_retries=max_retries,
        base_delay=base_delay,
        exceptions=(PersistenceFailure,),
        on_retry=log_retry,
    )
    def attempt():
        return pipeline.submit(document, opening_id, user_id, tenant_id)

    return attempt()
