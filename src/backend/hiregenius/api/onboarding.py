"""Onboarding endpoints for hired candidates."""

import uuid

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from hiregenius.core.auth import UserContext, get_current_user
from hiregenius.core.database import get_db
from hiregenius.models.orm import NewHire
from hiregenius.models.schemas import (
    LearningRecommendations,
    LearningRequest,
    NewHireResponse,
    OnboardingStatusUpdate,
    TaskUpdate,
)
from hiregenius.services import llm_service, onboarding_service

router = APIRouter(prefix="/onboarding", tags=["Onboarding"])


async def _get_hire_or_404(db: AsyncSession, user: UserContext, hire_id: uuid.UUID) -> NewHire:
    hire = await onboarding_service.get_new_hire(db, user.user_id, hire_id)
    if hire is None:
        raise HTTPException(status_code=404, detail="New hire not found")
    return hire


@router.get("", response_model=list[NewHireResponse])
async def list_new_hires(
    user: UserContext = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Track the onboarding journey of your new team members."""
    return await onboarding_service.list_new_hires(db, user.user_id)


@router.get("/{hire_id}", response_model=NewHireResponse)
async def get_new_hire(
    hire_id: uuid.UUID,
    user: UserContext = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    hire = await _get_hire_or_404(db, user, hire_id)
    return await onboarding_service.describe_new_hire(db, hire)


@router.patch("/{hire_id}", response_model=NewHireResponse)
async def update_onboarding_status(
    hire_id: uuid.UUID,
    body: OnboardingStatusUpdate,
    user: UserContext = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Flag a new hire as On Track, At Risk or Delayed."""
    hire = await _get_hire_or_404(db, user, hire_id)
    hire = await onboarding_service.update_onboarding_status(db, hire, body.onboarding_status)
    return await onboarding_service.describe_new_hire(db, hire)


@router.patch("/{hire_id}/tasks/{task_id}", response_model=NewHireResponse)
async def update_task(
    hire_id: uuid.UUID,
    task_id: uuid.UUID,
    body: TaskUpdate,
    user: UserContext = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    hire = await _get_hire_or_404(db, user, hire_id)
    task = await onboarding_service.update_task_status(db, hire, task_id, body.status)
    if task is None:
        raise HTTPException(status_code=404, detail="Task not found")
    return await onboarding_service.describe_new_hire(db, hire)


@router.post("/{hire_id}/learning-recommendations", response_model=LearningRecommendations)
async def recommend_learning(
    hire_id: uuid.UUID,
    body: LearningRequest | None = None,
    user: UserContext = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Suggest learning resources for skill gaps. Gaps default to missing job requirements."""
    hire = await _get_hire_or_404(db, user, hire_id)
    requested = body.skill_gaps if body is not None else None
    skill_gaps = [s for s in (requested or []) if s.strip()]
    if not skill_gaps:
        skill_gaps = await onboarding_service.skill_gaps_for(db, hire)
    if not skill_gaps:
        raise HTTPException(status_code=400, detail="No skill gaps to recommend learning for")
    return await llm_service.recommend_personalized_learning(user.user_id, hire.job_title, skill_gaps)
