"""Job posting endpoints. Jobs are shared; cascades touch only the caller's candidates."""

import uuid

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from hiregenius.core.auth import UserContext, get_current_user
from hiregenius.core.database import get_db
from hiregenius.models.orm import Job
from hiregenius.models.schemas import JobAnalytics, JobCreate, JobResponse, JobSchedule, JobUpdate
from hiregenius.services import job_service

router = APIRouter(prefix="/jobs", tags=["Jobs"])


async def _get_job_or_404(db: AsyncSession, job_id: uuid.UUID) -> Job:
    result = await db.execute(select(Job).where(Job.id == job_id))
    job = result.scalar_one_or_none()
    if job is None:
        raise HTTPException(status_code=404, detail="Job not found")
    return job


@router.post("", response_model=JobResponse, status_code=status.HTTP_201_CREATED)
async def create_job(
    body: JobCreate,
    user: UserContext = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Create an Open job. Your candidates already tagged with this title go back to Sourced."""
    try:
        job = await job_service.create_job(db, user.user_id, body)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return job_service.to_response(job)


@router.get("", response_model=list[JobResponse])
async def list_jobs(
    user: UserContext = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """List all jobs with how many of your candidates applied to each."""
    return await job_service.list_jobs(db, user.user_id)


@router.get("/{job_id}", response_model=JobResponse)
async def get_job(
    job_id: uuid.UUID,
    user: UserContext = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    job = await _get_job_or_404(db, job_id)
    return job_service.to_response(job)


@router.patch("/{job_id}", response_model=JobResponse)
async def update_job(
    job_id: uuid.UUID,
    body: JobUpdate,
    user: UserContext = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Edit a job. Setting status On Process auto-screens applicants by fit; Open resets them to Sourced."""
    job = await _get_job_or_404(db, job_id)
    try:
        job = await job_service.update_job(db, user.user_id, job, body)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return job_service.to_response(job)


@router.post("/{job_id}/schedule", response_model=JobResponse)
async def schedule_job(
    job_id: uuid.UUID,
    body: JobSchedule,
    user: UserContext = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Mark a job as Scheduled for the given date and time."""
    job = await _get_job_or_404(db, job_id)
    job = await job_service.schedule_job(db, job, body.scheduled_time)
    return job_service.to_response(job)


@router.get("/{job_id}/analytics", response_model=JobAnalytics)
async def job_analytics(
    job_id: uuid.UUID,
    user: UserContext = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Funnel counts (Sourced through Hired) for this job's applicants."""
    job = await _get_job_or_404(db, job_id)
    return await job_service.job_analytics(db, user.user_id, job)
