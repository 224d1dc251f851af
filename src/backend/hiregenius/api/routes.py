"""Aggregate API router mounted under /api/v1."""

from fastapi import APIRouter

from hiregenius.api import assistant, candidates, insights, jobs, onboarding

router = APIRouter()
router.include_router(jobs.router)
router.include_router(candidates.router)
router.include_router(onboarding.router)
router.include_router(insights.router)
router.include_router(assistant.router)
