"""Tests for Pydantic schema validation -- the parsing layer between requests, LLM output and our DB."""

import json

import pytest
from pydantic import ValidationError

from hiregenius.models.schemas import (
    CandidateCreate,
    ChatRequest,
    ExperienceLevel,
    FeedbackSummaryRequest,
    JobCreate,
    JobUpdate,
    ParsedResume,
    ScreeningQuestions,
    StatusUpdate,
)
from hiregenius.prompts.screening_questions import QUESTION_COUNT, SYSTEM_PROMPT


class TestScreeningQuestions:
    def test_five_questions_parse(self):
        raw = {"screening_questions": [f"Question {i}?" for i in range(5)]}
        parsed = ScreeningQuestions.model_validate(raw)
        assert len(parsed.screening_questions) == 5

    def test_four_questions_rejected(self):
        with pytest.raises(ValidationError):
            ScreeningQuestions.model_validate({"screening_questions": ["a", "b", "c", "d"]})

    def test_six_questions_rejected(self):
        with pytest.raises(ValidationError):
            ScreeningQuestions.model_validate({"screening_questions": list("abcdef")})

    def test_count_matches_prompt(self):
        assert "exactly {} questions".format(QUESTION_COUNT) in SYSTEM_PROMPT
        ScreeningQuestions(screening_questions=["q"] * QUESTION_COUNT)
        with pytest.raises(ValidationError):
            ScreeningQuestions(screening_questions=["q"] * (QUESTION_COUNT + 1))


class TestParsedResume:
    def test_parses_from_json_string(self):
        """Simulates parsing raw LLM text output."""
        llm_output = json.dumps({
            "name": "Jane Smith",
            "email": "jane@example.com",
            "skills": ["Python", "FastAPI"],
            "experience_level": "Senior",
        })
        parsed = ParsedResume.model_validate_json(llm_output)
        assert parsed.name == "Jane Smith"
        assert parsed.experience_level == ExperienceLevel.senior

    def test_invalid_experience_level_rejected(self):
        with pytest.raises(ValidationError):
            ParsedResume.model_validate({
                "name": "Jane",
                "email": "jane@example.com",
                "skills": [],
                "experience_level": "Principal",
            })


class TestJobSchemas:
    def test_defaults(self):
        job = JobCreate(title="Data Analyst")
        assert job.required_experience_level == ExperienceLevel.mid_level
        assert job.required_skills == []
        assert job.department == ""

    def test_empty_title_rejected(self):
        with pytest.raises(ValidationError):
            JobCreate(title="")

    def test_update_tracks_only_sent_fields(self):
        update = JobUpdate.model_validate({"status": "On Process"})
        assert update.model_dump(exclude_unset=True) == {"status": update.status}

    def test_update_rejects_unknown_status(self):
        with pytest.raises(ValidationError):
            JobUpdate.model_validate({"status": "Paused"})


class TestCandidateCreate:
    def test_valid_candidate(self):
        c = CandidateCreate(name="Jane Doe", email="jane@example.com", job_title="Data Analyst")
        assert c.experience_level == ExperienceLevel.entry_level
        assert c.skills == []
        assert c.source.value == "Other"

    def test_whitespace_is_stripped(self):
        c = CandidateCreate(name="  Jane Doe ", email=" jane@example.com", job_title="Data Analyst ")
        assert c.name == "Jane Doe"
        assert c.job_title == "Data Analyst"

    @pytest.mark.parametrize("field", ["name", "email", "job_title"])
    def test_required_fields_must_not_be_blank(self, field):
        data = {"name": "Jane", "email": "jane@example.com", "job_title": "Data Analyst"}
        data[field] = "   "
        with pytest.raises(ValidationError):
            CandidateCreate(**data)


def test_status_update_rejects_unknown_status():
    with pytest.raises(ValidationError):
        StatusUpdate.model_validate({"status": "Onboarding"})


def test_blank_chat_message_rejected():
    with pytest.raises(ValidationError):
        ChatRequest(message="   ")


def test_blank_feedback_rejected():
    with pytest.raises(ValidationError):
        FeedbackSummaryRequest(feedback="\n\t ")
