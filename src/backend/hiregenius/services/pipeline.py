"""Hiring funnel rules: fit scoring, status transitions and job-status cascades.

Everything here is pure. Callers load ORM rows and persist the outcome.
"""

import math
from typing import Iterable, NamedTuple

from hiregenius.models.orm import Candidate, Job
from hiregenius.models.schemas import (
    CandidateStatus,
    ExperienceLevel,
    JobStatus,
    PipelineStage,
    RejectionReason,
)

EXPERIENCE_RANK = {
    ExperienceLevel.entry_level: 1,
    ExperienceLevel.mid_level: 2,
    ExperienceLevel.senior: 3,
    ExperienceLevel.lead: 4,
}

# Funnel stages shown on charts. Rejected is reported separately.
FUNNEL_STAGES = [
    CandidateStatus.sourced,
    CandidateStatus.screening,
    CandidateStatus.interview,
    CandidateStatus.offer,
    CandidateStatus.hired,
]

TERMINAL_STATUSES = {CandidateStatus.hired, CandidateStatus.rejected}

ALLOWED_TRANSITIONS: dict[CandidateStatus, set[CandidateStatus]] = {
    CandidateStatus.sourced: {CandidateStatus.screening, CandidateStatus.interview, CandidateStatus.rejected},
    CandidateStatus.screening: {CandidateStatus.interview, CandidateStatus.rejected},
    CandidateStatus.interview: {CandidateStatus.offer, CandidateStatus.rejected},
    CandidateStatus.offer: {CandidateStatus.hired, CandidateStatus.rejected},
    CandidateStatus.hired: set(),
    CandidateStatus.rejected: set(),
}

# Threshold (exclusive) used when a job moves to On Process
AUTO_SCREEN_THRESHOLD = 50


class InvalidTransition(ValueError):
    pass


class Fit(NamedTuple):
    skill_fit: int
    experience_fit: int


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _normalize_skills(skills: Iterable[str]) -> set[str]:
    return {s.strip().lower() for s in skills if s and s.strip()}


def compute_fit(candidate: Candidate, job: Job | None) -> Fit:
    """Score how well a candidate matches the job they applied for (0-100 each)."""
    if job is None:
        return Fit(0, 0)

    required = _normalize_skills(job.required_skills or [])
    if required:
        matching = _normalize_skills(candidate.skills or []) & required
        skill_fit = round_half_up(len(matching) / len(required) * 100)
    else:
        skill_fit = 0

    candidate_rank = EXPERIENCE_RANK[ExperienceLevel(candidate.experience_level)]
    required_rank = EXPERIENCE_RANK[ExperienceLevel(job.required_experience_level)]
    experience_fit = min(round_half_up(candidate_rank / required_rank * 100), 100)

    return Fit(skill_fit, experience_fit)


def fits_by_candidate(candidates: Iterable[Candidate], jobs: Iterable[Job]) -> dict:
    """Map candidate id -> Fit, linking candidates to jobs by title."""
    job_map = {job.title: job for job in jobs}
    return {c.id: compute_fit(c, job_map.get(c.job_title)) for c in candidates}


def allowed_transitions(status: CandidateStatus) -> set[CandidateStatus]:
    return ALLOWED_TRANSITIONS[CandidateStatus(status)]


def next_actions(status: CandidateStatus) -> list[CandidateStatus]:
    """Forward moves offered for a candidate, in funnel order. Reject is separate."""
    targets = allowed_transitions(status) - {CandidateStatus.rejected}
    return [s for s in FUNNEL_STAGES if s in targets]


def ensure_transition(current: CandidateStatus, target: CandidateStatus) -> None:
    current = CandidateStatus(current)
    target = CandidateStatus(target)
    if target not in ALLOWED_TRANSITIONS[current]:
        raise InvalidTransition(f"Cannot move a candidate from {current.value} to {target.value}")


class StatusChange(NamedTuple):
    candidate: Candidate
    status: CandidateStatus
    rejection_reason: RejectionReason | None = None


def cascade_for_job_status(
    job_status: JobStatus,
    candidates: Iterable[Candidate],
    fits: dict,
) -> list[StatusChange]:
    """Status changes triggered when a job enters ``job_status``.

    ``candidates`` must already be narrowed to the job's applicants.
    Candidates already in the target status are left out.
    """
    job_status = JobStatus(job_status)
    changes: list[StatusChange] = []

    if job_status == JobStatus.open:
        for c in candidates:
            status = CandidateStatus(c.status)
            if status in (CandidateStatus.hired, CandidateStatus.sourced):
                continue
            changes.append(StatusChange(c, CandidateStatus.sourced))

    elif job_status == JobStatus.on_process:
        for c in candidates:
            if CandidateStatus(c.status) not in (CandidateStatus.sourced, CandidateStatus.screening):
                continue
            fit = fits.get(c.id, Fit(0, 0))
            if fit.skill_fit > AUTO_SCREEN_THRESHOLD and fit.experience_fit > AUTO_SCREEN_THRESHOLD:
                changes.append(StatusChange(c, CandidateStatus.interview))
            elif fit.skill_fit < AUTO_SCREEN_THRESHOLD and fit.experience_fit < AUTO_SCREEN_THRESHOLD:
                changes.append(StatusChange(c, CandidateStatus.rejected, RejectionReason.skill_mismatch))

    return changes


def matches_query(candidate: Candidate, query: str | None) -> bool:
    if not query:
        return True
    q = query.lower()
    return (
        q in candidate.name.lower()
        or q in candidate.email.lower()
        or q in candidate.job_title.lower()
    )


def in_stage(candidate: Candidate, stage: PipelineStage | None) -> bool:
    if stage is None or stage == PipelineStage.all:
        return True
    status = CandidateStatus(candidate.status)
    if stage == PipelineStage.screening:
        return status in (CandidateStatus.sourced, CandidateStatus.screening)
    return status.value.lower() == stage.value


def funnel_counts(candidates: Iterable[Candidate]) -> dict[CandidateStatus, int]:
    counts = {stage: 0 for stage in FUNNEL_STAGES}
    for c in candidates:
        status = CandidateStatus(c.status)
        if status in counts:
            counts[status] += 1
    return counts
