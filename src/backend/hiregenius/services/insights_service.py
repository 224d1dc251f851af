"""Dashboard and report aggregations over a user's pipeline."""

from collections import defaultdict
from typing import Iterable

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from hiregenius.core.config import settings
from hiregenius.models.orm import ActivityEvent, Candidate, Job
from hiregenius.models.schemas import (
    ActivityResponse,
    ApplicationSource,
    CandidateStatus,
    DashboardSummary,
    FunnelStage,
    JobStatus,
    RejectionReason,
    RejectionReasonCount,
    ReportSummary,
    SourceCount,
    TimeToHire,
    TopCandidate,
)
from hiregenius.services import candidate_service, pipeline


def top_candidates(candidates: Iterable[Candidate], fits: dict, limit: int) -> list[TopCandidate]:
    """Best combined skill + experience fit first; ties broken by name."""
    ranked = sorted(
        candidates,
        key=lambda c: (-(fits[c.id].skill_fit + fits[c.id].experience_fit), c.name.lower()),
    )
    return [
        TopCandidate(
            id=c.id,
            name=c.name,
            job_title=c.job_title,
            skill_fit=fits[c.id].skill_fit,
            experience_fit=fits[c.id].experience_fit,
        )
        for c in ranked[:limit]
    ]


def build_dashboard(
    jobs: list[Job],
    candidates: list[Candidate],
    events: list[ActivityEvent],
    top_limit: int,
) -> DashboardSummary:
    statuses = [CandidateStatus(c.status) for c in candidates]
    fits = pipeline.fits_by_candidate(candidates, jobs)
    return DashboardSummary(
        open_positions=sum(1 for j in jobs if JobStatus(j.status) == JobStatus.open),
        candidates_to_review=sum(
            1 for s in statuses if s in (CandidateStatus.sourced, CandidateStatus.screening)
        ),
        new_hires=statuses.count(CandidateStatus.hired),
        upcoming_interviews=statuses.count(CandidateStatus.interview),
        hiring_funnel=[
            FunnelStage(stage=stage, count=count)
            for stage, count in pipeline.funnel_counts(candidates).items()
        ],
        top_candidates=top_candidates(candidates, fits, top_limit),
        recent_activity=[
            ActivityResponse(
                id=e.id,
                candidate_id=e.candidate_id,
                message=e.message,
                created_at=e.created_at,
            )
            for e in events
        ],
    )


def time_to_hire(candidates: Iterable[Candidate]) -> list[TimeToHire]:
    """Average days from application to hire, grouped by hire month."""
    by_month: dict[str, list[int]] = defaultdict(list)
    for c in candidates:
        if c.hired_at is None or CandidateStatus(c.status) != CandidateStatus.hired:
            continue
        days = max((c.hired_at - c.applied_date).days, 0)
        by_month[c.hired_at.strftime("%Y-%m")].append(days)
    return [
        TimeToHire(month=month, days=pipeline.round_half_up(sum(days) / len(days)), hires=len(days))
        for month, days in sorted(by_month.items())
    ]


def rejection_reasons(candidates: Iterable[Candidate]) -> list[RejectionReasonCount]:
    counts = {reason: 0 for reason in RejectionReason}
    for c in candidates:
        if CandidateStatus(c.status) != CandidateStatus.rejected:
            continue
        reason = RejectionReason(c.rejection_reason) if c.rejection_reason else RejectionReason.other
        counts[reason] += 1
    total = sum(counts.values())
    return [
        RejectionReasonCount(
            reason=reason,
            count=count,
            percent=pipeline.round_half_up(count / total * 100) if total else 0,
        )
        for reason, count in counts.items()
        if count
    ]


def application_sources(candidates: Iterable[Candidate]) -> list[SourceCount]:
    counts = {source: 0 for source in ApplicationSource}
    for c in candidates:
        counts[ApplicationSource(c.source or ApplicationSource.other)] += 1
    return [SourceCount(source=source, count=count) for source, count in counts.items()]


def build_reports(candidates: list[Candidate]) -> ReportSummary:
    return ReportSummary(
        time_to_hire=time_to_hire(candidates),
        rejection_reasons=rejection_reasons(candidates),
        application_sources=application_sources(candidates),
    )


async def dashboard(db: AsyncSession, owner_id: str) -> DashboardSummary:
    jobs = await candidate_service.load_jobs(db)
    candidates = await candidate_service.load_candidates(db, owner_id)
    events_result = await db.execute(
        select(ActivityEvent)
        .where(ActivityEvent.owner_id == owner_id)
        .order_by(ActivityEvent.created_at.desc())
        .limit(settings.recent_activity_limit)
    )
    events = list(events_result.scalars().all())
    return build_dashboard(jobs, candidates, events, settings.top_candidates_limit)


async def reports(db: AsyncSession, owner_id: str) -> ReportSummary:
    return build_reports(await candidate_service.load_candidates(db, owner_id))
