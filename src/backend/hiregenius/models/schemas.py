"""Pydantic schemas for API request/response validation and model output."""

from datetime import date, datetime
from enum import Enum
from uuid import UUID

from pydantic import BaseModel, Field

from hiregenius.prompts.screening_questions import QUESTION_COUNT


# --- Enums ---

class CandidateStatus(str, Enum):
    sourced = "Sourced"
    screening = "Screening"
    interview = "Interview"
    offer = "Offer"
    hired = "Hired"
    rejected = "Rejected"


class ExperienceLevel(str, Enum):
    entry_level = "Entry-level"
    mid_level = "Mid-level"
    senior = "Senior"
    lead = "Lead"


class JobStatus(str, Enum):
    scheduled = "Scheduled"
    open = "Open"
    on_process = "On Process"
    completed = "Completed"


class OnboardingStatus(str, Enum):
    on_track = "On Track"
    at_risk = "At Risk"
    delayed = "Delayed"


class TaskStatus(str, Enum):
    completed = "Completed"
    in_progress = "In Progress"
    not_started = "Not Started"


class RejectionReason(str, Enum):
    skill_mismatch = "Skill Mismatch"
    compensation = "Compensation"
    culture_fit = "Culture Fit"
    better_offer = "Better Offer"
    other = "Other"


class ApplicationSource(str, Enum):
    linkedin = "LinkedIn"
    indeed = "Indeed"
    referrals = "Referrals"
    company_website = "Company Website"
    other = "Other"


class PipelineStage(str, Enum):
    """Candidate list filters. ``screening`` covers Sourced and Screening."""
    all = "all"
    screening = "screening"
    interview = "interview"
    offer = "offer"
    hired = "hired"
    rejected = "rejected"


# --- Job schemas ---

class JobCreate(BaseModel):
    title: str = Field(min_length=1, max_length=300, examples=["Senior Backend Engineer"])
    department: str = Field(default="", max_length=200, examples=["Engineering"])
    required_skills: list[str] = Field(default_factory=list, examples=[["Python", "PostgreSQL", "Docker"]])
    required_experience_level: ExperienceLevel = ExperienceLevel.mid_level


class JobUpdate(BaseModel):
    title: str | None = Field(default=None, min_length=1, max_length=300)
    department: str | None = Field(default=None, max_length=200)
    required_skills: list[str] | None = None
    required_experience_level: ExperienceLevel | None = None
    status: JobStatus | None = None
    scheduled_time: datetime | None = None


class JobSchedule(BaseModel):
    scheduled_time: datetime = Field(description="When the job opens", examples=["2026-11-02T10:00:00"])


class JobResponse(BaseModel):
    id: UUID
    title: str
    department: str
    status: JobStatus
    required_skills: list[str]
    required_experience_level: ExperienceLevel
    scheduled_time: datetime | None
    candidate_count: int = 0
    created_at: datetime


class FunnelStage(BaseModel):
    stage: CandidateStatus
    count: int


class JobAnalytics(BaseModel):
    job_id: UUID
    job_title: str
    funnel: list[FunnelStage]


# --- Candidate schemas ---

class CandidateCreate(BaseModel):
    model_config = {"str_strip_whitespace": True}

    name: str = Field(min_length=1, max_length=300, examples=["Jane Smith"])
    email: str = Field(min_length=3, max_length=300, examples=["jane.smith@example.com"])
    job_title: str = Field(min_length=1, max_length=300, examples=["Senior Backend Engineer"])
    skills: list[str] = Field(default_factory=list, examples=[["Python", "Docker"]])
    experience_level: ExperienceLevel = ExperienceLevel.entry_level
    source: ApplicationSource = ApplicationSource.other


class CandidateResponse(BaseModel):
    id: UUID
    name: str
    email: str
    avatar_url: str
    job_title: str
    skills: list[str]
    experience_level: ExperienceLevel
    status: CandidateStatus
    source: ApplicationSource
    skill_fit: int
    experience_fit: int
    rejection_reason: RejectionReason | None = None
    interview_at: datetime | None = None
    feedback_summary: str | None = None
    applied_date: datetime
    next_actions: list[CandidateStatus] = Field(default_factory=list)


class StatusUpdate(BaseModel):
    status: CandidateStatus
    rejection_reason: RejectionReason | None = Field(
        default=None, description="Only used when moving to Rejected"
    )


class RejectRequest(BaseModel):
    reason: RejectionReason = RejectionReason.other


class InterviewSchedule(BaseModel):
    interview_at: datetime = Field(examples=["2026-11-05T10:00:00"])


# --- Resume parsing ---

class ResumeParseRequest(BaseModel):
    resume_data_uri: str = Field(
        min_length=1,
        description="Resume as a data URI: 'data:<mimetype>;base64,<encoded_data>'",
        examples=["data:text/plain;base64,SmFuZSBTbWl0aApqYW5lQGV4YW1wbGUuY29t"],
    )
    job_title: str | None = Field(
        default=None, description="When set, extracted skills are narrowed to this job's required skills"
    )


class ParsedResume(BaseModel):
    """Structured output expected from the LLM when reading a resume."""
    name: str
    email: str
    skills: list[str]
    experience_level: ExperienceLevel


# --- AI flows ---

class ScreeningQuestions(BaseModel):
    """Structured output expected from the LLM: exactly QUESTION_COUNT questions."""
    screening_questions: list[str] = Field(min_length=QUESTION_COUNT, max_length=QUESTION_COUNT)


class FeedbackSummaryRequest(BaseModel):
    model_config = {"str_strip_whitespace": True}

    feedback: str = Field(min_length=1, description="Raw interview feedback to summarize")


class FeedbackSummary(BaseModel):
    summary: str


class ChatRequest(BaseModel):
    model_config = {"str_strip_whitespace": True}

    message: str = Field(min_length=1, max_length=4000, examples=["How do I move a candidate to the offer stage?"])


class ChatResponse(BaseModel):
    response: str


class LearningRequest(BaseModel):
    skill_gaps: list[str] | None = Field(
        default=None, description="Leave empty to derive gaps from the job's required skills"
    )


class LearningRecommendations(BaseModel):
    learning_recommendations: list[str]


# --- Onboarding schemas ---

class OnboardingTaskResponse(BaseModel):
    id: UUID
    name: str
    status: TaskStatus


class NewHireResponse(BaseModel):
    id: UUID
    candidate_id: UUID | None
    name: str
    avatar_url: str
    job_title: str
    hire_date: date
    onboarding_status: OnboardingStatus
    progress: int
    tasks: list[OnboardingTaskResponse]


class TaskUpdate(BaseModel):
    status: TaskStatus


class OnboardingStatusUpdate(BaseModel):
    onboarding_status: OnboardingStatus


# --- Dashboard and reports ---

class ActivityResponse(BaseModel):
    id: UUID
    candidate_id: UUID | None
    message: str
    created_at: datetime


class TopCandidate(BaseModel):
    id: UUID
    name: str
    job_title: str
    skill_fit: int
    experience_fit: int


class DashboardSummary(BaseModel):
    open_positions: int
    candidates_to_review: int
    new_hires: int
    upcoming_interviews: int
    hiring_funnel: list[FunnelStage]
    top_candidates: list[TopCandidate]
    recent_activity: list[ActivityResponse]


class TimeToHire(BaseModel):
    month: str = Field(description="YYYY-MM")
    days: int = Field(description="Average whole days from application to hire")
    hires: int


class RejectionReasonCount(BaseModel):
    reason: RejectionReason
    count: int
    percent: int


class SourceCount(BaseModel):
    source: ApplicationSource
    count: int


class ReportSummary(BaseModel):
    time_to_hire: list[TimeToHire]
    rejection_reasons: list[RejectionReasonCount]
    application_sources: list[SourceCount]
