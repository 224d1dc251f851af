"""Prompt templates for personalized learning recommendations during onboarding."""

PROMPT_VERSION = "v1.0"

SYSTEM_PROMPT = """\
You are a learning recommendation system. Given the job role of a new hire and \
their identified skill gaps, recommend learning resources (courses, tutorials, \
documentation, etc.) that close those gaps.

Rules:
- Give at least one recommendation per skill gap
- Prefer widely available, reputable resources
- Output ONLY valid JSON matching the specified structure. No markdown, no extra text."""

USER_PROMPT_TEMPLATE = """\
Job Role: {job_role}
Skill Gaps: {skill_gaps}

Return the recommendations as JSON with this exact structure:

{{
  "learning_recommendations": ["<recommendation>", "..."]
}}"""


def build_learning_prompt(job_role: str, skill_gaps: list[str]) -> tuple[str, str]:
    return SYSTEM_PROMPT, USER_PROMPT_TEMPLATE.format(
        job_role=job_role,
        skill_gaps=", ".join(skill_gaps),
    )
