"""Candidate pipeline endpoints, scoped to the calling user."""

import uuid

from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, Response, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession

from hiregenius.core.auth import UserContext, get_current_user
from hiregenius.core.database import get_db
from hiregenius.models.orm import Candidate
from hiregenius.models.schemas import (
    CandidateCreate,
    CandidateResponse,
    CandidateStatus,
    FeedbackSummary,
    FeedbackSummaryRequest,
    InterviewSchedule,
    ParsedResume,
    PipelineStage,
    RejectRequest,
    ResumeParseRequest,
    ScreeningQuestions,
    StatusUpdate,
)
from hiregenius.prompts.screening_questions import DEFAULT_JOB_DESCRIPTION, describe_job
from hiregenius.services import candidate_service, llm_service, resume_service

router = APIRouter(prefix="/candidates", tags=["Candidates"])


async def _get_candidate_or_404(db: AsyncSession, user: UserContext, candidate_id: uuid.UUID) -> Candidate:
    candidate = await candidate_service.get_candidate(db, user.user_id, candidate_id)
    if candidate is None:
        raise HTTPException(status_code=404, detail="Candidate not found")
    return candidate


async def _respond(db: AsyncSession, candidate: Candidate) -> CandidateResponse:
    fit = await candidate_service.candidate_fit(db, candidate)
    return candidate_service.to_response(candidate, fit)


async def _job_skills(db: AsyncSession, job_title: str | None) -> list[str] | None:
    if not job_title:
        return None
    job = await candidate_service.get_job_by_title(db, job_title)
    if job is None:
        return None
    return job.required_skills or []


@router.post("", response_model=CandidateResponse, status_code=status.HTTP_201_CREATED)
async def create_candidate(
    body: CandidateCreate,
    user: UserContext = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Add a candidate to an Open job. New candidates start at Sourced."""
    try:
        candidate = await candidate_service.create_candidate(db, user.user_id, body)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return await _respond(db, candidate)


@router.get("", response_model=list[CandidateResponse])
async def list_candidates(
    q: str | None = Query(default=None, description="Matches name, email or job title"),
    stage: PipelineStage = Query(default=PipelineStage.all),
    user: UserContext = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """List your candidates with skill and experience fit against their job."""
    return await candidate_service.list_candidates(db, user.user_id, q, stage)


@router.get("/export")
async def export_candidates(
    q: str | None = Query(default=None),
    stage: PipelineStage = Query(default=PipelineStage.all),
    user: UserContext = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Download the (filtered) candidate list as CSV."""
    candidates = await candidate_service.list_candidates(db, user.user_id, q, stage)
    return Response(
        content=candidate_service.export_csv(candidates),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": 'attachment; filename="candidates.csv"'},
    )


@router.post("/parse-resume", response_model=ParsedResume)
async def parse_resume(
    body: ResumeParseRequest,
    user: UserContext = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Extract name, email, skills and experience level from a resume data URI."""
    job_skills = await _job_skills(db, body.job_title)
    try:
        mime_type, data = resume_service.decode_data_uri(body.resume_data_uri)
        return await resume_service.parse_resume(user.user_id, mime_type, data, job_skills)
    except resume_service.UnsupportedResume as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


@router.post("/parse-resume/upload", response_model=ParsedResume)
async def parse_resume_upload(
    file: UploadFile = File(..., description="PDF resume file"),
    job_title: str | None = Form(default=None, description="Narrow skills to this job's requirements"),
    user: UserContext = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Same as parse-resume, for a PDF sent as a multipart upload."""
    if not file.filename or not file.filename.lower().endswith(".pdf"):
        raise HTTPException(status_code=400, detail="Only PDF files are accepted")
    job_skills = await _job_skills(db, job_title)
    pdf_bytes = await file.read()
    try:
        return await resume_service.parse_resume(user.user_id, resume_service.PDF_MIME, pdf_bytes, job_skills)
    except resume_service.UnsupportedResume as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


@router.get("/{candidate_id}", response_model=CandidateResponse)
async def get_candidate(
    candidate_id: uuid.UUID,
    user: UserContext = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Candidate profile, including the moves currently available."""
    candidate = await _get_candidate_or_404(db, user, candidate_id)
    return await _respond(db, candidate)


@router.patch("/{candidate_id}/status", response_model=CandidateResponse)
async def update_status(
    candidate_id: uuid.UUID,
    body: StatusUpdate,
    user: UserContext = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Move a candidate to the next stage. Hiring opens an onboarding checklist."""
    candidate = await _get_candidate_or_404(db, user, candidate_id)
    try:
        candidate = await candidate_service.update_status(db, candidate, body.status, body.rejection_reason)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return await _respond(db, candidate)


@router.post("/{candidate_id}/reject", response_model=CandidateResponse)
async def reject_candidate(
    candidate_id: uuid.UUID,
    body: RejectRequest | None = None,
    user: UserContext = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Reject a candidate. Without a reason the rejection is recorded as Other."""
    candidate = await _get_candidate_or_404(db, user, candidate_id)
    reason = body.reason if body is not None else None
    try:
        candidate = await candidate_service.update_status(db, candidate, CandidateStatus.rejected, reason)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return await _respond(db, candidate)


@router.post("/{candidate_id}/interview", response_model=CandidateResponse)
async def schedule_interview(
    candidate_id: uuid.UUID,
    body: InterviewSchedule,
    user: UserContext = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Schedule (or reschedule) an interview; moves the candidate to Interview."""
    candidate = await _get_candidate_or_404(db, user, candidate_id)
    try:
        candidate = await candidate_service.schedule_interview(db, candidate, body.interview_at)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return await _respond(db, candidate)


@router.post("/{candidate_id}/screening-questions", response_model=ScreeningQuestions)
async def screening_questions(
    candidate_id: uuid.UUID,
    user: UserContext = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Generate five screening questions for this candidate's role and skills."""
    candidate = await _get_candidate_or_404(db, user, candidate_id)
    job = await candidate_service.get_job_by_title(db, candidate.job_title)
    if job is not None:
        job_description = describe_job(job.required_experience_level, job.required_skills or [])
    else:
        job_description = DEFAULT_JOB_DESCRIPTION
    return await llm_service.generate_screening_questions(
        user_id=user.user_id,
        job_role=candidate.job_title,
        job_description=job_description,
        candidate_skills=", ".join(candidate.skills or []),
    )


@router.post("/{candidate_id}/feedback-summary", response_model=FeedbackSummary)
async def summarize_feedback(
    candidate_id: uuid.UUID,
    body: FeedbackSummaryRequest,
    user: UserContext = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Summarize raw interview feedback and keep the summary on the candidate."""
    candidate = await _get_candidate_or_404(db, user, candidate_id)
    summary = await llm_service.summarize_interview_feedback(user.user_id, body.feedback)
    await candidate_service.save_feedback_summary(db, candidate, summary.summary)
    return summary
