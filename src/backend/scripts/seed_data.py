"""Seed script: inserts sample jobs and candidates for the demo user.

Run via: python scripts/seed_data.py
"""

import asyncio
import uuid
from datetime import datetime, timedelta

from jose import jwt
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from hiregenius.core.auth import DEMO_USER_ID
from hiregenius.core.config import settings
from hiregenius.models.orm import ActivityEvent, Candidate, Job
from hiregenius.services import onboarding_service

JOB_IDS = [
    uuid.UUID("22222222-2222-2222-2222-222222222201"),
    uuid.UUID("22222222-2222-2222-2222-222222222202"),
    uuid.UUID("22222222-2222-2222-2222-222222222203"),
]

JOBS = [
    {
        "id": JOB_IDS[0],
        "title": "Senior Backend Engineer",
        "department": "Engineering",
        "status": "Open",
        "required_skills": ["Python", "PostgreSQL", "Redis", "Docker", "Kubernetes"],
        "required_experience_level": "Senior",
    },
    {
        "id": JOB_IDS[1],
        "title": "Product Designer",
        "department": "Design",
        "status": "Open",
        "required_skills": ["Figma", "User Research", "Prototyping"],
        "required_experience_level": "Mid-level",
    },
    {
        "id": JOB_IDS[2],
        "title": "Data Analyst",
        "department": "Analytics",
        "status": "Completed",
        "required_skills": ["SQL", "Python", "Tableau"],
        "required_experience_level": "Entry-level",
    },
]

CANDIDATES = [
    {
        "name": "Alice Chen",
        "email": "alice.chen@example.com",
        "job_title": "Senior Backend Engineer",
        "skills": ["Python", "PostgreSQL", "Redis", "Docker", "Kubernetes"],
        "experience_level": "Senior",
        "status": "Interview",
        "source": "LinkedIn",
        "days_ago": 12,
    },
    {
        "name": "Bob Martinez",
        "email": "bob.m@example.com",
        "job_title": "Senior Backend Engineer",
        "skills": ["Python", "Docker"],
        "experience_level": "Mid-level",
        "status": "Screening",
        "source": "Indeed",
        "days_ago": 8,
    },
    {
        "name": "Carol Davis",
        "email": "carol.d@example.com",
        "job_title": "Product Designer",
        "skills": ["Figma", "Prototyping"],
        "experience_level": "Senior",
        "status": "Offer",
        "source": "Referrals",
        "days_ago": 20,
    },
    {
        "name": "Dan Okafor",
        "email": "dan.okafor@example.com",
        "job_title": "Data Analyst",
        "skills": ["SQL", "Python", "Tableau"],
        "experience_level": "Mid-level",
        "status": "Hired",
        "source": "Company Website",
        "days_ago": 40,
        "hired_days_ago": 10,
    },
    {
        "name": "Eve Novak",
        "email": "eve.novak@example.com",
        "job_title": "Data Analyst",
        "skills": ["Excel"],
        "experience_level": "Entry-level",
        "status": "Rejected",
        "source": "LinkedIn",
        "days_ago": 35,
        "rejection_reason": "Skill Mismatch",
    },
]


async def seed() -> None:
    engine = create_async_engine(settings.database_url)
    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async with session_factory() as session:
        result = await session.execute(select(Job).where(Job.id == JOB_IDS[0]))
        if result.scalar_one_or_none():
            print("Seed data already exists. Skipping.")
            await engine.dispose()
            return

        for job in JOBS:
            session.add(Job(**job))
        await session.flush()

        now = datetime.utcnow()
        for c in CANDIDATES:
            applied = now - timedelta(days=c["days_ago"])
            hired_at = now - timedelta(days=c["hired_days_ago"]) if "hired_days_ago" in c else None
            candidate = Candidate(
                owner_id=DEMO_USER_ID,
                name=c["name"],
                email=c["email"],
                job_title=c["job_title"],
                skills=c["skills"],
                experience_level=c["experience_level"],
                status=c["status"],
                source=c["source"],
                rejection_reason=c.get("rejection_reason"),
                applied_date=applied,
                status_changed_at=hired_at or applied,
                hired_at=hired_at,
            )
            session.add(candidate)
            await session.flush()
            session.add(ActivityEvent(
                owner_id=DEMO_USER_ID,
                candidate_id=candidate.id,
                message=f"{candidate.name} moved to {candidate.status} for {candidate.job_title}",
            ))
            if hired_at is not None:
                await onboarding_service.create_new_hire(session, candidate, hire_date=hired_at.date())

        await session.commit()

    await engine.dispose()

    token = jwt.encode(
        {"sub": DEMO_USER_ID, "role": "admin"},
        settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
    )

    print("=" * 60)
    print("Seed data inserted successfully!")
    print("=" * 60)
    print()
    print(f"User:      {DEMO_USER_ID}")
    print(f"Job IDs:   {', '.join(str(j) for j in JOB_IDS)}")
    print()
    print(f"JWT Token: {token}")
    print()
    print("Test with:")
    print(f'  export TOKEN="{token}"')
    print()
    print("  # Dashboard")
    print('  curl -s -H "Authorization: Bearer $TOKEN" http://localhost:8000/api/v1/dashboard | python -m json.tool')
    print()
    print("  # Candidates in interview")
    print('  curl -s -H "Authorization: Bearer $TOKEN" "http://localhost:8000/api/v1/candidates?stage=interview" | python -m json.tool')
    print()
    print("  # Move the backend role to On Process (auto-screens applicants)")
    print('  curl -s -X PATCH -H "Authorization: Bearer $TOKEN" -H "Content-Type: application/json" \\')
    print('    -d \'{"status": "On Process"}\' \\')
    print(f"    http://localhost:8000/api/v1/jobs/{JOB_IDS[0]} | python -m json.tool")


if __name__ == "__main__":
    asyncio.run(seed())
