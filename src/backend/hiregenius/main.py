"""FastAPI application entry point."""

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from hiregenius.api.routes import router
from hiregenius.core.config import settings
from hiregenius.services.llm_service import AIServiceError, BudgetExceeded

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="HireGenius - Recruiting Pipeline",
    description="""
Recruiting pipeline backend: job postings, candidate tracking, onboarding,
dashboards and AI helpers for recruiters.

## Candidate funnel
Sourced → Screening → Interview → Offer → Hired, with Reject available at any
open stage. Skill fit and experience fit are computed against the job the
candidate applied for.

## Job status cascades
- **Open**: the job's candidates go back to Sourced (hires are kept)
- **On Process**: candidates with both fits above 50 move to Interview, both below 50 are rejected

## AI helpers
- Resume parsing (PDF or text) into name, email, skills and experience level
- Five role-based screening questions per candidate
- Interview feedback summaries
- Personalized learning recommendations for new hires
- Xyro, a general-purpose chat assistant

## Authentication
Send a Bearer JWT (`sub` = user id). Without one, requests run as the demo user
unless `HIREGENIUS_ALLOW_DEMO_USER=false`.
""",
    version="1.0.0",
    openapi_tags=[
        {"name": "Jobs", "description": "Create, edit and schedule job postings"},
        {"name": "Candidates", "description": "Track candidates through the hiring funnel"},
        {"name": "Onboarding", "description": "Checklists and learning plans for new hires"},
        {"name": "Dashboard", "description": "Pipeline overview"},
        {"name": "Reports", "description": "Hiring metrics"},
        {"name": "Assistant", "description": "Xyro chat assistant"},
    ],
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(router, prefix="/api/v1")


@app.exception_handler(AIServiceError)
async def ai_service_error_handler(request: Request, exc: AIServiceError):
    logger.warning("AI request %s failed: %s", request.url.path, exc.user_message)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.user_message})


@app.exception_handler(BudgetExceeded)
async def budget_exceeded_handler(request: Request, exc: BudgetExceeded):
    return JSONResponse(status_code=429, content={"detail": str(exc)})


@app.get("/health", tags=["System"])
async def health():
    """Health check endpoint used by Docker."""
    return {"status": "ok"}
