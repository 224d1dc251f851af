"""Candidate pipeline operations: intake, status moves, interviews and export."""

import csv
import io
import logging
from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from hiregenius.models.orm import ActivityEvent, Candidate, Job
from hiregenius.models.schemas import (
    CandidateCreate,
    CandidateResponse,
    CandidateStatus,
    JobStatus,
    PipelineStage,
    RejectionReason,
)
from hiregenius.services import onboarding_service, pipeline

logger = logging.getLogger(__name__)

CSV_HEADER = ["ID", "Name", "Email", "Job Title", "Status", "Skill Fit", "Experience Fit", "Applied Date"]

INTERVIEW_SCHEDULABLE = {CandidateStatus.sourced, CandidateStatus.screening, CandidateStatus.interview}


class JobNotOpen(ValueError):
    pass


def to_naive_utc(value: datetime) -> datetime:
    """Timestamps are stored as naive UTC; convert aware client times before saving."""
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def to_response(candidate: Candidate, fit: pipeline.Fit) -> CandidateResponse:
    return CandidateResponse(
        id=candidate.id,
        name=candidate.name,
        email=candidate.email,
        avatar_url=candidate.avatar_url or "",
        job_title=candidate.job_title,
        skills=candidate.skills or [],
        experience_level=candidate.experience_level,
        status=candidate.status,
        source=candidate.source,
        skill_fit=fit.skill_fit,
        experience_fit=fit.experience_fit,
        rejection_reason=candidate.rejection_reason,
        interview_at=candidate.interview_at,
        feedback_summary=candidate.feedback_summary,
        applied_date=candidate.applied_date,
        next_actions=pipeline.next_actions(candidate.status),
    )


async def load_jobs(db: AsyncSession) -> list[Job]:
    result = await db.execute(select(Job))
    return list(result.scalars().all())


async def get_job_by_title(db: AsyncSession, title: str) -> Job | None:
    result = await db.execute(select(Job).where(Job.title == title))
    return result.scalar_one_or_none()


async def load_candidates(db: AsyncSession, owner_id: str, job_title: str | None = None) -> list[Candidate]:
    query = select(Candidate).where(Candidate.owner_id == owner_id)
    if job_title is not None:
        query = query.where(Candidate.job_title == job_title)
    result = await db.execute(query.order_by(Candidate.applied_date.desc()))
    return list(result.scalars().all())


async def get_candidate(db: AsyncSession, owner_id: str, candidate_id: UUID) -> Candidate | None:
    result = await db.execute(
        select(Candidate).where(Candidate.id == candidate_id, Candidate.owner_id == owner_id)
    )
    return result.scalar_one_or_none()


async def candidate_fit(db: AsyncSession, candidate: Candidate) -> pipeline.Fit:
    job = await get_job_by_title(db, candidate.job_title)
    return pipeline.compute_fit(candidate, job)


def record_activity(db: AsyncSession, owner_id: str, message: str, candidate_id: UUID | None = None) -> None:
    db.add(ActivityEvent(owner_id=owner_id, candidate_id=candidate_id, message=message))


async def apply_status_change(
    db: AsyncSession,
    candidate: Candidate,
    status: CandidateStatus,
    rejection_reason: RejectionReason | None = None,
) -> None:
    """Write a status change and its side effects. Does not check the transition table."""
    status = CandidateStatus(status)
    now = datetime.utcnow()
    candidate.status = status.value
    candidate.status_changed_at = now

    if status == CandidateStatus.rejected:
        candidate.rejection_reason = (rejection_reason or RejectionReason.other).value
    else:
        candidate.rejection_reason = None

    if status == CandidateStatus.hired:
        candidate.hired_at = now
        await onboarding_service.create_new_hire(db, candidate)
        logger.info("Candidate %s hired for %s", candidate.id, candidate.job_title)

    record_activity(
        db,
        candidate.owner_id,
        f"{candidate.name} moved to {status.value} for {candidate.job_title}",
        candidate.id,
    )


async def create_candidate(db: AsyncSession, owner_id: str, body: CandidateCreate) -> Candidate:
    """Add a candidate to the pipeline at Sourced. The job must exist and be Open."""
    job = await get_job_by_title(db, body.job_title)
    if job is None:
        raise JobNotOpen(f"No job titled '{body.job_title}'")
    if JobStatus(job.status) != JobStatus.open:
        raise JobNotOpen(f"Job '{job.title}' is not open for applications")

    now = datetime.utcnow()
    candidate = Candidate(
        owner_id=owner_id,
        name=body.name,
        email=body.email,
        avatar_url="",
        job_title=job.title,
        skills=body.skills,
        experience_level=body.experience_level.value,
        status=CandidateStatus.sourced.value,
        source=body.source.value,
        applied_date=now,
        status_changed_at=now,
    )
    db.add(candidate)
    await db.flush()
    record_activity(db, owner_id, f"{candidate.name} applied for {candidate.job_title}", candidate.id)
    await db.commit()
    await db.refresh(candidate)
    return candidate


async def list_candidates(
    db: AsyncSession,
    owner_id: str,
    query: str | None = None,
    stage: PipelineStage | None = None,
) -> list[CandidateResponse]:
    candidates = await load_candidates(db, owner_id)
    fits = pipeline.fits_by_candidate(candidates, await load_jobs(db))
    return [
        to_response(c, fits[c.id])
        for c in candidates
        if pipeline.matches_query(c, query) and pipeline.in_stage(c, stage)
    ]


async def update_status(
    db: AsyncSession,
    candidate: Candidate,
    status: CandidateStatus,
    rejection_reason: RejectionReason | None = None,
) -> Candidate:
    """Move a candidate along the funnel. Raises InvalidTransition on illegal moves."""
    pipeline.ensure_transition(candidate.status, status)
    await apply_status_change(db, candidate, status, rejection_reason)
    await db.commit()
    await db.refresh(candidate)
    return candidate


async def schedule_interview(db: AsyncSession, candidate: Candidate, interview_at: datetime) -> Candidate:
    current = CandidateStatus(candidate.status)
    if current not in INTERVIEW_SCHEDULABLE:
        raise pipeline.InvalidTransition(f"Cannot schedule an interview for a candidate in {current.value}")

    interview_at = to_naive_utc(interview_at)
    candidate.interview_at = interview_at
    if current != CandidateStatus.interview:
        await apply_status_change(db, candidate, CandidateStatus.interview)
    else:
        record_activity(
            db,
            candidate.owner_id,
            f"Interview with {candidate.name} rescheduled to {interview_at:%Y-%m-%d %H:%M}",
            candidate.id,
        )
    await db.commit()
    await db.refresh(candidate)
    return candidate


async def save_feedback_summary(db: AsyncSession, candidate: Candidate, summary: str) -> None:
    candidate.feedback_summary = summary
    await db.commit()


def export_csv(candidates: list[CandidateResponse]) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for c in candidates:
        writer.writerow([
            c.id,
            c.name,
            c.email,
            c.job_title,
            c.status.value,
            c.skill_fit,
            c.experience_fit,
            c.applied_date.isoformat(),
        ])
    return buffer.getvalue()
