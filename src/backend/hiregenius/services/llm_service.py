"""LLM integration via LangChain + OpenAI with per-user usage tracking.

Every flow is a single request: build prompts, call the model once, parse the
JSON reply into a Pydantic schema. Provider failures are translated here so
routes only ever see ``AIServiceError`` subclasses.
"""

import json
import logging

import redis.asyncio as redis
from langchain_core.messages import HumanMessage, SystemMessage
from langchain_openai import ChatOpenAI
from pydantic import BaseModel, ValidationError

from hiregenius.core.config import settings
from hiregenius.models.schemas import (
    ChatResponse,
    FeedbackSummary,
    LearningRecommendations,
    ParsedResume,
    ScreeningQuestions,
)
from hiregenius.prompts import assistant_chat as chat_prompts
from hiregenius.prompts import feedback_summary as feedback_prompts
from hiregenius.prompts import learning_recommendations as learning_prompts
from hiregenius.prompts import resume_parsing as resume_prompts
from hiregenius.prompts import screening_questions as screening_prompts

logger = logging.getLogger(__name__)

OVERLOADED_MESSAGE = "The AI service is currently overloaded. Please try again in a few moments."
GENERIC_ERROR_MESSAGE = "An unexpected error occurred while communicating with the AI."
CHAT_OVERLOADED_REPLY = (
    "The AI is currently experiencing high demand, which may cause it to be "
    "temporarily unavailable. Please try again in a few moments."
)

_OVERLOAD_STATUS_CODES = {429, 503}
_OVERLOAD_MARKERS = ("503 service unavailable", "overloaded")

USAGE_TTL_SECONDS = 60 * 60 * 24 * 31  # ~1 month

_redis_client: redis.Redis | None = None


class AIServiceError(Exception):
    """Model call failed. ``user_message`` is safe to show to end users."""

    status_code = 502

    def __init__(self, user_message: str = GENERIC_ERROR_MESSAGE):
        super().__init__(user_message)
        self.user_message = user_message


class AIServiceOverloaded(AIServiceError):
    status_code = 503

    def __init__(self, user_message: str = OVERLOADED_MESSAGE):
        super().__init__(user_message)


class AIResponseError(AIServiceError):
    """The model answered, but not with the structure we asked for."""


class BudgetExceeded(ValueError):
    pass


def get_llm(temperature: float = 0) -> ChatOpenAI:
    """Create a ChatOpenAI instance (stateless, no need to cache)."""
    return ChatOpenAI(
        model=settings.openai_model,
        api_key=settings.openai_api_key,
        temperature=temperature,
        max_tokens=1500,
    )


def get_redis_client() -> redis.Redis:
    global _redis_client
    if _redis_client is None:
        _redis_client = redis.from_url(settings.redis_url, decode_responses=True)
    return _redis_client


def _calls_key(user_id: str) -> str:
    return f"user:{user_id}:llm_calls_month"


def _tokens_key(user_id: str) -> str:
    return f"user:{user_id}:tokens_month"


async def check_budget(user_id: str) -> bool:
    """Check if the user has remaining LLM budget for the current month."""
    r = get_redis_client()
    current = await r.get(_calls_key(user_id))
    if current is None:
        return True
    return int(current) < settings.default_monthly_llm_budget


async def increment_usage(user_id: str, tokens: int) -> None:
    """Track LLM calls and tokens per user per month."""
    r = get_redis_client()
    pipe = r.pipeline()
    pipe.incr(_calls_key(user_id))
    pipe.expire(_calls_key(user_id), USAGE_TTL_SECONDS)
    pipe.incrby(_tokens_key(user_id), tokens)
    pipe.expire(_tokens_key(user_id), USAGE_TTL_SECONDS)
    await pipe.execute()


def translate_provider_error(exc: Exception) -> AIServiceError:
    """Map a raw provider exception to the error users should see."""
    status_code = getattr(exc, "status_code", None)
    text = str(exc).lower()
    if status_code in _OVERLOAD_STATUS_CODES or any(m in text for m in _OVERLOAD_MARKERS):
        return AIServiceOverloaded()
    return AIServiceError()


def strip_code_fences(raw_text: str) -> str:
    """Remove a surrounding ```json ... ``` block if the model added one."""
    text = raw_text.strip()
    if text.startswith("```"):
        lines = text.split("\n")
        lines = lines[1:]  # drop opening fence
        if lines and lines[-1].strip() == "```":
            lines = lines[:-1]
        text = "\n".join(lines)
    return text


def parse_model_output(raw_text: str, schema: type[BaseModel]) -> BaseModel:
    try:
        parsed = json.loads(strip_code_fences(raw_text))
        return schema.model_validate(parsed)
    except (json.JSONDecodeError, ValidationError) as exc:
        logger.error("LLM returned invalid %s: %s", schema.__name__, raw_text[:500])
        raise AIResponseError() from exc


async def _invoke(
    user_id: str,
    system_prompt: str,
    user_prompt: str,
    schema: type[BaseModel],
    prompt_version: str,
    temperature: float = 0,
) -> BaseModel:
    """Run one model call and return the validated structured output.

    Raises BudgetExceeded before calling out when the user is over budget.
    """
    logger.info("LLM request %s (prompt %s) for user %s", schema.__name__, prompt_version, user_id)
    if not await check_budget(user_id):
        raise BudgetExceeded("Monthly AI budget exceeded for this user")

    llm = get_llm(temperature=temperature)
    messages = [
        SystemMessage(content=system_prompt),
        HumanMessage(content=user_prompt),
    ]

    try:
        response = await llm.ainvoke(messages)
    except Exception as exc:
        logger.error("LLM call for %s failed: %s", schema.__name__, exc)
        raise translate_provider_error(exc) from exc

    raw_text = response.content
    logger.info("LLM raw response (%s): %s", schema.__name__, raw_text[:500])

    usage = response.response_metadata.get("token_usage", {})
    await increment_usage(user_id, usage.get("total_tokens", 0))

    return parse_model_output(raw_text, schema)


async def generate_screening_questions(
    user_id: str,
    job_role: str,
    job_description: str,
    candidate_skills: str,
) -> ScreeningQuestions:
    system_prompt, user_prompt = screening_prompts.build_screening_questions_prompt(
        job_role=job_role,
        job_description=job_description,
        candidate_skills=candidate_skills,
    )
    return await _invoke(
        user_id, system_prompt, user_prompt, ScreeningQuestions, screening_prompts.PROMPT_VERSION
    )


async def parse_resume_text(user_id: str, resume_text: str) -> ParsedResume:
    system_prompt, user_prompt = resume_prompts.build_resume_parsing_prompt(resume_text)
    return await _invoke(user_id, system_prompt, user_prompt, ParsedResume, resume_prompts.PROMPT_VERSION)


async def summarize_interview_feedback(user_id: str, feedback: str) -> FeedbackSummary:
    system_prompt, user_prompt = feedback_prompts.build_feedback_summary_prompt(feedback)
    return await _invoke(
        user_id, system_prompt, user_prompt, FeedbackSummary, feedback_prompts.PROMPT_VERSION
    )


async def recommend_personalized_learning(
    user_id: str,
    job_role: str,
    skill_gaps: list[str],
) -> LearningRecommendations:
    system_prompt, user_prompt = learning_prompts.build_learning_prompt(job_role, skill_gaps)
    return await _invoke(
        user_id, system_prompt, user_prompt, LearningRecommendations, learning_prompts.PROMPT_VERSION
    )


async def assistant_chat(user_id: str, message: str) -> ChatResponse:
    """Answer a free-form message. Overload becomes a polite reply, not an error."""
    system_prompt, user_prompt = chat_prompts.build_chat_prompt(message)
    try:
        return await _invoke(
            user_id,
            system_prompt,
            user_prompt,
            ChatResponse,
            chat_prompts.PROMPT_VERSION,
            temperature=settings.chat_temperature,
        )
    except AIServiceOverloaded:
        return ChatResponse(response=CHAT_OVERLOADED_REPLY)
