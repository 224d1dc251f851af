"""Tests for the database-backed candidate and job operations, run against a fake session."""

import asyncio
from datetime import date, datetime, timezone
from uuid import uuid4

import pytest

from hiregenius.models.orm import ActivityEvent, Candidate, Job, NewHire, OnboardingTask
from hiregenius.models.schemas import (
    CandidateCreate,
    CandidateStatus,
    InterviewSchedule,
    JobSchedule,
    JobStatus,
    JobUpdate,
    RejectionReason,
)
from hiregenius.services import candidate_service, job_service, onboarding_service
from hiregenius.services.candidate_service import JobNotOpen
from hiregenius.services.job_service import DuplicateJob, MissingScheduleTime
from hiregenius.services.pipeline import InvalidTransition


def _job(title="Backend Engineer", status="Open", skills=("Python", "PostgreSQL", "Docker"), level="Senior"):
    return Job(
        id=uuid4(),
        title=title,
        department="Engineering",
        status=status,
        required_skills=list(skills),
        required_experience_level=level,
    )


def _candidate(name="Jane Doe", status="Sourced", skills=(), level="Mid-level", job_title="Backend Engineer"):
    return Candidate(
        id=uuid4(),
        owner_id="user-1",
        name=name,
        email=f"{name.split()[0].lower()}@example.com",
        job_title=job_title,
        skills=list(skills),
        experience_level=level,
        status=status,
        source="Other",
        applied_date=datetime(2026, 1, 1),
    )


class TestNaiveUtc:
    def test_aware_time_converted_to_utc(self):
        aware = datetime(2026, 11, 2, 10, 0, tzinfo=timezone.utc)
        assert candidate_service.to_naive_utc(aware) == datetime(2026, 11, 2, 10, 0)

    def test_offset_time_shifted(self):
        parsed = JobSchedule(scheduled_time="2026-11-02T10:00:00+02:00").scheduled_time
        converted = candidate_service.to_naive_utc(parsed)
        assert converted == datetime(2026, 11, 2, 8, 0)
        assert converted.tzinfo is None

    def test_naive_time_unchanged(self):
        naive = datetime(2026, 11, 2, 10, 0)
        assert candidate_service.to_naive_utc(naive) is naive


class TestCreateCandidate:
    def _body(self, job_title="Backend Engineer"):
        return CandidateCreate(
            name="  Jane Doe ",
            email="jane@example.com",
            job_title=job_title,
            skills=["Python"],
        )

    def test_unknown_job_refused(self, make_session):
        session = make_session([])
        with pytest.raises(JobNotOpen):
            asyncio.run(candidate_service.create_candidate(session, "user-1", self._body("Astronaut")))
        assert session.added == []
        assert session.commits == 0

    def test_job_not_open_refused(self, make_session):
        session = make_session([_job(status="Completed")])
        with pytest.raises(JobNotOpen):
            asyncio.run(candidate_service.create_candidate(session, "user-1", self._body()))
        assert session.commits == 0

    def test_starts_at_sourced_with_activity(self, make_session):
        session = make_session([_job()])
        candidate = asyncio.run(candidate_service.create_candidate(session, "user-1", self._body()))

        assert candidate.name == "Jane Doe"
        assert candidate.owner_id == "user-1"
        assert candidate.status == "Sourced"
        assert candidate.experience_level == "Entry-level"
        assert candidate.source == "Other"
        [event] = session.added_of(ActivityEvent)
        assert event.candidate_id == candidate.id
        assert "applied" in event.message
        assert session.commits == 1


class TestUpdateStatus:
    def test_hire_opens_onboarding_checklist(self, make_session):
        session = make_session()
        candidate = _candidate(status="Offer")

        asyncio.run(candidate_service.update_status(session, candidate, CandidateStatus.hired))

        assert candidate.status == "Hired"
        assert candidate.hired_at is not None
        assert candidate.status_changed_at == candidate.hired_at
        [hire] = session.added_of(NewHire)
        assert hire.candidate_id == candidate.id
        assert hire.owner_id == "user-1"
        assert hire.onboarding_status == "On Track"
        tasks = sorted(session.added_of(OnboardingTask), key=lambda t: t.position)
        assert [t.name for t in tasks] == onboarding_service.DEFAULT_ONBOARDING_TASKS
        assert all(t.new_hire_id == hire.id for t in tasks)
        assert all(t.status == "Not Started" for t in tasks)
        assert session.commits == 1

    def test_reject_defaults_reason_to_other(self, make_session):
        candidate = _candidate(status="Screening")
        asyncio.run(candidate_service.update_status(make_session(), candidate, CandidateStatus.rejected))
        assert candidate.status == "Rejected"
        assert candidate.rejection_reason == "Other"

    def test_reject_stores_given_reason(self, make_session):
        candidate = _candidate(status="Interview")
        asyncio.run(candidate_service.update_status(
            make_session(), candidate, CandidateStatus.rejected, RejectionReason.compensation
        ))
        assert candidate.rejection_reason == "Compensation"

    def test_leaving_rejected_clears_reason(self, make_session):
        candidate = _candidate(status="Rejected")
        candidate.rejection_reason = "Culture Fit"
        asyncio.run(candidate_service.apply_status_change(make_session(), candidate, CandidateStatus.sourced))
        assert candidate.status == "Sourced"
        assert candidate.rejection_reason is None

    def test_illegal_move_writes_nothing(self, make_session):
        session = make_session()
        candidate = _candidate(status="Sourced")
        with pytest.raises(InvalidTransition):
            asyncio.run(candidate_service.update_status(session, candidate, CandidateStatus.hired))
        assert candidate.status == "Sourced"
        assert session.added == []
        assert session.commits == 0


class TestScheduleInterview:
    def test_offer_cannot_be_scheduled(self, make_session):
        candidate = _candidate(status="Offer")
        with pytest.raises(InvalidTransition):
            asyncio.run(candidate_service.schedule_interview(
                make_session(), candidate, datetime(2026, 11, 5, 10, 0)
            ))
        assert candidate.interview_at is None

    def test_sourced_moves_to_interview_with_utc_time(self, make_session):
        session = make_session()
        candidate = _candidate(status="Sourced")
        when = InterviewSchedule(interview_at="2026-11-05T10:00:00Z").interview_at

        asyncio.run(candidate_service.schedule_interview(session, candidate, when))

        assert candidate.status == "Interview"
        assert candidate.interview_at == datetime(2026, 11, 5, 10, 0)
        assert candidate.interview_at.tzinfo is None
        assert session.commits == 1

    def test_interview_only_reschedules(self, make_session):
        session = make_session()
        candidate = _candidate(status="Interview")
        changed_at = datetime(2026, 1, 2)
        candidate.status_changed_at = changed_at
        candidate.interview_at = datetime(2026, 11, 5, 10, 0)

        asyncio.run(candidate_service.schedule_interview(session, candidate, datetime(2026, 11, 6, 14, 30)))

        assert candidate.status == "Interview"
        assert candidate.status_changed_at == changed_at
        assert candidate.interview_at == datetime(2026, 11, 6, 14, 30)
        [event] = session.added_of(ActivityEvent)
        assert "rescheduled to 2026-11-06 14:30" in event.message


class TestUpdateJob:
    def test_scheduled_without_time_refused(self, make_session):
        session = make_session()
        job = _job()
        with pytest.raises(MissingScheduleTime):
            asyncio.run(job_service.update_job(session, "user-1", job, JobUpdate(status="Scheduled")))
        assert job.status == "Open"
        assert session.commits == 0

    def test_scheduled_with_offset_time_stored_as_utc(self, make_session):
        session = make_session()
        job = _job()
        body = JobUpdate(status="Scheduled", scheduled_time="2026-11-02T10:00:00+02:00")

        asyncio.run(job_service.update_job(session, "user-1", job, body))

        assert job.status == "Scheduled"
        assert job.scheduled_time == datetime(2026, 11, 2, 8, 0)
        assert session.commits == 1

    def test_title_change_renames_applicants(self, make_session):
        applicants = [_candidate("Ann Lee"), _candidate("Bo Kim", status="Interview")]
        session = make_session([], applicants)
        job = _job()

        asyncio.run(job_service.update_job(session, "user-1", job, JobUpdate(title="Platform Engineer")))

        assert job.title == "Platform Engineer"
        assert [c.job_title for c in applicants] == ["Platform Engineer", "Platform Engineer"]
        assert session.commits == 1

    def test_title_taken_by_another_job_refused(self, make_session):
        session = make_session([_job(title="Platform Engineer")])
        job = _job()
        with pytest.raises(DuplicateJob):
            asyncio.run(job_service.update_job(session, "user-1", job, JobUpdate(title="Platform Engineer")))
        assert job.title == "Backend Engineer"


def test_schedule_job_stores_utc(make_session):
    session = make_session()
    job = _job()
    when = JobSchedule(scheduled_time="2026-11-02T10:00:00Z").scheduled_time

    asyncio.run(job_service.schedule_job(session, job, when))

    assert job.status == "Scheduled"
    assert job.scheduled_time == datetime(2026, 11, 2, 10, 0)
    assert job.scheduled_time.tzinfo is None


class TestApplyCascade:
    def test_on_process_moves_and_persists(self, make_session):
        strong = _candidate("Ann Lee", skills=["Python", "PostgreSQL", "Docker"], level="Senior")
        weak = _candidate("Bo Kim", status="Screening", skills=[], level="Entry-level")
        middle = _candidate("Cy Park", skills=["Python"], level="Senior")
        offer = _candidate("Di Ross", status="Offer", skills=["Python", "PostgreSQL", "Docker"], level="Senior")
        session = make_session([strong, weak, middle, offer])
        job = _job(status="On Process")

        moved = asyncio.run(job_service.apply_cascade(session, "user-1", job, JobStatus.on_process))

        assert moved == 2
        assert strong.status == "Interview"
        assert weak.status == "Rejected"
        assert weak.rejection_reason == "Skill Mismatch"
        assert middle.status == "Sourced"
        assert offer.status == "Offer"
        assert len(session.added_of(ActivityEvent)) == 2

    def test_reopen_returns_applicants_to_sourced(self, make_session):
        interviewing = _candidate("Ann Lee", status="Interview")
        rejected = _candidate("Bo Kim", status="Rejected")
        rejected.rejection_reason = "Skill Mismatch"
        hired = _candidate("Cy Park", status="Hired")
        session = make_session([interviewing, rejected, hired])

        moved = asyncio.run(job_service.apply_cascade(session, "user-1", _job(), JobStatus.open))

        assert moved == 2
        assert interviewing.status == "Sourced"
        assert rejected.status == "Sourced"
        assert rejected.rejection_reason is None
        assert hired.status == "Hired"
        assert session.added_of(NewHire) == []


def test_new_hire_keeps_given_hire_date(make_session):
    session = make_session()
    candidate = _candidate(status="Hired")

    hire = asyncio.run(onboarding_service.create_new_hire(session, candidate, hire_date=date(2026, 1, 5)))

    assert hire.hire_date == date(2026, 1, 5)
    assert len(session.added_of(OnboardingTask)) == len(onboarding_service.DEFAULT_ONBOARDING_TASKS)
