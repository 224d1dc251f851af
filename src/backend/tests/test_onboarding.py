"""Tests for onboarding checklist helpers."""

from datetime import date
from uuid import uuid4

from hiregenius.models.orm import Job, NewHire, OnboardingTask
from hiregenius.models.schemas import TaskStatus
from hiregenius.services import onboarding_service


def _task(name, status="Not Started", position=0):
    return OnboardingTask(id=uuid4(), new_hire_id=uuid4(), name=name, status=status, position=position)


def test_default_checklist():
    assert len(onboarding_service.DEFAULT_ONBOARDING_TASKS) == 5
    assert onboarding_service.DEFAULT_ONBOARDING_TASKS[0] == "Sign offer letter"


class TestProgress:
    def test_empty_checklist(self):
        assert onboarding_service.onboarding_progress([]) == 0

    def test_partial(self):
        tasks = [
            _task("a", "Completed"),
            _task("b", "In Progress"),
            _task("c", "Not Started"),
        ]
        assert onboarding_service.onboarding_progress(tasks) == 33

    def test_two_thirds_rounds_up(self):
        tasks = [_task("a", "Completed"), _task("b", "Completed"), _task("c")]
        assert onboarding_service.onboarding_progress(tasks) == 67


class TestSkillGaps:
    def test_missing_required_skills(self):
        job = Job(title="Frontend Engineer", required_skills=["React", "Next.js", "GraphQL"])
        assert onboarding_service.derive_skill_gaps(job, ["react", "CSS"]) == ["Next.js", "GraphQL"]

    def test_no_job(self):
        assert onboarding_service.derive_skill_gaps(None, ["React"]) == []

    def test_no_gaps(self):
        job = Job(title="Analyst", required_skills=["SQL"])
        assert onboarding_service.derive_skill_gaps(job, ["SQL"]) == []


def test_response_orders_tasks_by_position():
    hire = NewHire(
        id=uuid4(),
        owner_id="user-1",
        candidate_id=None,
        name="Dan Okafor",
        avatar_url="",
        job_title="Data Analyst",
        hire_date=date(2026, 3, 2),
        onboarding_status="At Risk",
    )
    tasks = [
        _task("Meet the team", "Completed", position=3),
        _task("Sign offer letter", "Completed", position=0),
        _task("Set up workstation", position=2),
        _task("Complete HR paperwork", "In Progress", position=1),
    ]
    response = onboarding_service.to_response(hire, tasks)
    assert [t.name for t in response.tasks] == [
        "Sign offer letter",
        "Complete HR paperwork",
        "Set up workstation",
        "Meet the team",
    ]
    assert response.tasks[1].status == TaskStatus.in_progress
    assert response.progress == 50
    assert response.onboarding_status.value == "At Risk"
