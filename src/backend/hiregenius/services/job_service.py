"""Job postings and the candidate status cascades they trigger."""

import logging
from datetime import datetime

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from hiregenius.models.orm import Candidate, Job
from hiregenius.models.schemas import (
    FunnelStage,
    JobAnalytics,
    JobCreate,
    JobResponse,
    JobStatus,
    JobUpdate,
)
from hiregenius.services import candidate_service, pipeline

logger = logging.getLogger(__name__)


class DuplicateJob(ValueError):
    pass


class MissingScheduleTime(ValueError):
    pass


def to_response(job: Job, candidate_count: int = 0) -> JobResponse:
    return JobResponse(
        id=job.id,
        title=job.title,
        department=job.department,
        status=job.status,
        required_skills=job.required_skills or [],
        required_experience_level=job.required_experience_level,
        scheduled_time=job.scheduled_time,
        candidate_count=candidate_count,
        created_at=job.created_at,
    )


async def apply_cascade(db: AsyncSession, owner_id: str, job: Job, status: JobStatus) -> int:
    """Apply the status cascade for ``job`` to the owner's applicants. Returns moves made."""
    candidates = await candidate_service.load_candidates(db, owner_id, job_title=job.title)
    fits = {c.id: pipeline.compute_fit(c, job) for c in candidates}
    changes = pipeline.cascade_for_job_status(status, candidates, fits)
    for change in changes:
        await candidate_service.apply_status_change(
            db, change.candidate, change.status, change.rejection_reason
        )
    if changes:
        logger.info("Job %s -> %s moved %d candidates", job.id, JobStatus(status).value, len(changes))
    return len(changes)


async def create_job(db: AsyncSession, owner_id: str, body: JobCreate) -> Job:
    if await candidate_service.get_job_by_title(db, body.title) is not None:
        raise DuplicateJob(f"A job titled '{body.title}' already exists")

    job = Job(
        title=body.title,
        department=body.department,
        status=JobStatus.open.value,
        required_skills=body.required_skills,
        required_experience_level=body.required_experience_level.value,
        created_at=datetime.utcnow(),
    )
    db.add(job)
    await db.flush()
    await apply_cascade(db, owner_id, job, JobStatus.open)
    await db.commit()
    await db.refresh(job)
    return job


async def update_job(db: AsyncSession, owner_id: str, job: Job, body: JobUpdate) -> Job:
    """Apply a partial update. A status in the payload re-runs that status's cascade."""
    changes = body.model_dump(exclude_unset=True)

    if body.status == JobStatus.scheduled and (body.scheduled_time or job.scheduled_time) is None:
        raise MissingScheduleTime("A scheduled job needs a scheduled_time")

    new_title = changes.get("title")
    if new_title is not None and new_title != job.title:
        existing = await candidate_service.get_job_by_title(db, new_title)
        if existing is not None:
            raise DuplicateJob(f"A job titled '{new_title}' already exists")
        for c in await candidate_service.load_candidates(db, owner_id, job_title=job.title):
            c.job_title = new_title

    for field, value in changes.items():
        if value is None:
            continue
        if isinstance(value, datetime):
            value = candidate_service.to_naive_utc(value)
        setattr(job, field, value.value if hasattr(value, "value") else value)

    await db.flush()
    if body.status is not None:
        await apply_cascade(db, owner_id, job, body.status)
    await db.commit()
    await db.refresh(job)
    return job


async def schedule_job(db: AsyncSession, job: Job, scheduled_time: datetime) -> Job:
    job.status = JobStatus.scheduled.value
    job.scheduled_time = candidate_service.to_naive_utc(scheduled_time)
    await db.commit()
    await db.refresh(job)
    return job


async def list_jobs(db: AsyncSession, owner_id: str) -> list[JobResponse]:
    result = await db.execute(select(Job).order_by(Job.created_at.desc()))
    jobs = result.scalars().all()
    titles = await db.execute(select(Candidate.job_title).where(Candidate.owner_id == owner_id))
    counts: dict[str, int] = {}
    for title in titles.scalars().all():
        counts[title] = counts.get(title, 0) + 1
    return [to_response(j, counts.get(j.title, 0)) for j in jobs]


async def job_analytics(db: AsyncSession, owner_id: str, job: Job) -> JobAnalytics:
    candidates = await candidate_service.load_candidates(db, owner_id, job_title=job.title)
    counts = pipeline.funnel_counts(candidates)
    return JobAnalytics(
        job_id=job.id,
        job_title=job.title,
        funnel=[FunnelStage(stage=stage, count=count) for stage, count in counts.items()],
    )
