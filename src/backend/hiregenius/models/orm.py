"""SQLAlchemy ORM models.

Jobs are shared across users. Candidates, new hires and activity events
belong to the user that created them (``owner_id``) and every query on
them is filtered by owner.
"""

import uuid
from datetime import date, datetime

from sqlalchemy import CheckConstraint, ForeignKey, Index, String, Text
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    pass


class Job(Base):
    __tablename__ = "jobs"

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    title: Mapped[str] = mapped_column(String(300), nullable=False, unique=True)
    department: Mapped[str] = mapped_column(String(200), nullable=False, default="")
    status: Mapped[str] = mapped_column(String(20), default="Open")
    required_skills: Mapped[list] = mapped_column(JSONB, default=list)
    required_experience_level: Mapped[str] = mapped_column(String(20), default="Mid-level")
    scheduled_time: Mapped[datetime | None] = mapped_column(nullable=True)
    created_at: Mapped[datetime] = mapped_column(default=datetime.utcnow)


class Candidate(Base):
    __tablename__ = "candidates"

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    owner_id: Mapped[str] = mapped_column(String(200), nullable=False)
    name: Mapped[str] = mapped_column(String(300), nullable=False)
    email: Mapped[str] = mapped_column(String(300), nullable=False)
    avatar_url: Mapped[str] = mapped_column(String(500), default="")
    job_title: Mapped[str] = mapped_column(String(300), nullable=False)
    skills: Mapped[list] = mapped_column(JSONB, default=list)
    experience_level: Mapped[str] = mapped_column(String(20), default="Entry-level")
    status: Mapped[str] = mapped_column(String(20), default="Sourced")
    source: Mapped[str] = mapped_column(String(50), default="Other")
    rejection_reason: Mapped[str | None] = mapped_column(String(50), nullable=True)
    interview_at: Mapped[datetime | None] = mapped_column(nullable=True)
    feedback_summary: Mapped[str | None] = mapped_column(Text, nullable=True)
    applied_date: Mapped[datetime] = mapped_column(default=datetime.utcnow)
    status_changed_at: Mapped[datetime] = mapped_column(default=datetime.utcnow)
    hired_at: Mapped[datetime | None] = mapped_column(nullable=True)

    __table_args__ = (
        Index("idx_candidates_owner", "owner_id"),
        Index("idx_candidates_owner_job", "owner_id", "job_title"),
    )


class NewHire(Base):
    __tablename__ = "new_hires"

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    owner_id: Mapped[str] = mapped_column(String(200), nullable=False)
    candidate_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), ForeignKey("candidates.id"), nullable=True
    )
    name: Mapped[str] = mapped_column(String(300), nullable=False)
    avatar_url: Mapped[str] = mapped_column(String(500), default="")
    job_title: Mapped[str] = mapped_column(String(300), nullable=False)
    hire_date: Mapped[date] = mapped_column(default=date.today)
    onboarding_status: Mapped[str] = mapped_column(String(20), default="On Track")
    created_at: Mapped[datetime] = mapped_column(default=datetime.utcnow)

    __table_args__ = (Index("idx_new_hires_owner", "owner_id"),)


class OnboardingTask(Base):
    __tablename__ = "onboarding_tasks"

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    new_hire_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("new_hires.id", ondelete="CASCADE"), nullable=False
    )
    name: Mapped[str] = mapped_column(String(300), nullable=False)
    status: Mapped[str] = mapped_column(String(20), default="Not Started")
    position: Mapped[int] = mapped_column(default=0)

    __table_args__ = (
        CheckConstraint("position >= 0", name="ck_task_position"),
        Index("idx_tasks_new_hire", "new_hire_id"),
    )


class ActivityEvent(Base):
    __tablename__ = "activity_events"

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    owner_id: Mapped[str] = mapped_column(String(200), nullable=False)
    candidate_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), ForeignKey("candidates.id"), nullable=True
    )
    message: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(default=datetime.utcnow)

    __table_args__ = (Index("idx_activity_owner_created", "owner_id", "created_at"),)
