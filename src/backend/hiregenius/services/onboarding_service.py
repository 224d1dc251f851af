"""Onboarding checklists for hired candidates."""

import logging
from datetime import date
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from hiregenius.models.orm import Candidate, Job, NewHire, OnboardingTask
from hiregenius.models.schemas import (
    NewHireResponse,
    OnboardingStatus,
    OnboardingTaskResponse,
    TaskStatus,
)
from hiregenius.services.pipeline import round_half_up

logger = logging.getLogger(__name__)

DEFAULT_ONBOARDING_TASKS = [
    "Sign offer letter",
    "Complete HR paperwork",
    "Set up workstation",
    "Meet the team",
    "Complete first-week training",
]


def onboarding_progress(tasks: list[OnboardingTask]) -> int:
    """Percent of tasks completed, 0 for an empty checklist."""
    if not tasks:
        return 0
    done = sum(1 for t in tasks if TaskStatus(t.status) == TaskStatus.completed)
    return round_half_up(done / len(tasks) * 100)


def derive_skill_gaps(job: Job | None, skills: list[str]) -> list[str]:
    """Required skills of the job that the hire does not list, in the job's order."""
    if job is None:
        return []
    have = {s.strip().lower() for s in skills}
    return [s for s in (job.required_skills or []) if s.strip().lower() not in have]


def to_response(hire: NewHire, tasks: list[OnboardingTask]) -> NewHireResponse:
    ordered = sorted(tasks, key=lambda t: t.position)
    return NewHireResponse(
        id=hire.id,
        candidate_id=hire.candidate_id,
        name=hire.name,
        avatar_url=hire.avatar_url or "",
        job_title=hire.job_title,
        hire_date=hire.hire_date,
        onboarding_status=hire.onboarding_status,
        progress=onboarding_progress(ordered),
        tasks=[
            OnboardingTaskResponse(id=t.id, name=t.name, status=t.status)
            for t in ordered
        ],
    )


async def create_new_hire(db: AsyncSession, candidate: Candidate, hire_date: date | None = None) -> NewHire:
    """Open an onboarding record with the default checklist. Caller commits."""
    hire = NewHire(
        owner_id=candidate.owner_id,
        candidate_id=candidate.id,
        name=candidate.name,
        avatar_url=candidate.avatar_url or "",
        job_title=candidate.job_title,
        hire_date=hire_date or date.today(),
        onboarding_status=OnboardingStatus.on_track.value,
    )
    db.add(hire)
    await db.flush()
    for position, name in enumerate(DEFAULT_ONBOARDING_TASKS):
        db.add(OnboardingTask(
            new_hire_id=hire.id,
            name=name,
            status=TaskStatus.not_started.value,
            position=position,
        ))
    logger.info("Created onboarding checklist for %s", hire.id)
    return hire


async def get_new_hire(db: AsyncSession, owner_id: str, hire_id: UUID) -> NewHire | None:
    result = await db.execute(
        select(NewHire).where(NewHire.id == hire_id, NewHire.owner_id == owner_id)
    )
    return result.scalar_one_or_none()


async def load_tasks(db: AsyncSession, hire_ids: list[UUID]) -> dict[UUID, list[OnboardingTask]]:
    if not hire_ids:
        return {}
    result = await db.execute(
        select(OnboardingTask)
        .where(OnboardingTask.new_hire_id.in_(hire_ids))
        .order_by(OnboardingTask.position)
    )
    tasks: dict[UUID, list[OnboardingTask]] = {hid: [] for hid in hire_ids}
    for task in result.scalars().all():
        tasks[task.new_hire_id].append(task)
    return tasks


async def list_new_hires(db: AsyncSession, owner_id: str) -> list[NewHireResponse]:
    result = await db.execute(
        select(NewHire).where(NewHire.owner_id == owner_id).order_by(NewHire.hire_date.desc())
    )
    hires = list(result.scalars().all())
    tasks = await load_tasks(db, [h.id for h in hires])
    return [to_response(h, tasks[h.id]) for h in hires]


async def describe_new_hire(db: AsyncSession, hire: NewHire) -> NewHireResponse:
    tasks = await load_tasks(db, [hire.id])
    return to_response(hire, tasks[hire.id])


async def update_task_status(
    db: AsyncSession,
    hire: NewHire,
    task_id: UUID,
    status: TaskStatus,
) -> OnboardingTask | None:
    result = await db.execute(
        select(OnboardingTask).where(
            OnboardingTask.id == task_id,
            OnboardingTask.new_hire_id == hire.id,
        )
    )
    task = result.scalar_one_or_none()
    if task is None:
        return None
    task.status = status.value
    await db.commit()
    return task


async def update_onboarding_status(db: AsyncSession, hire: NewHire, status: OnboardingStatus) -> NewHire:
    hire.onboarding_status = status.value
    await db.commit()
    await db.refresh(hire)
    return hire


async def skill_gaps_for(db: AsyncSession, hire: NewHire) -> list[str]:
    """Gaps between the job's required skills and what the hired candidate listed."""
    job_result = await db.execute(select(Job).where(Job.title == hire.job_title))
    job = job_result.scalar_one_or_none()
    skills: list[str] = []
    if hire.candidate_id is not None:
        cand_result = await db.execute(select(Candidate).where(Candidate.id == hire.candidate_id))
        candidate = cand_result.scalar_one_or_none()
        if candidate is not None:
            skills = candidate.skills or []
    return derive_skill_gaps(job, skills)
