"""Prompt templates for role-based screening question generation.

Versioned so generated questions can be traced back to the prompt.
"""

PROMPT_VERSION = "v1.0"

QUESTION_COUNT = 5

SYSTEM_PROMPT = f"""\
You are an AI assistant that writes screening questions for recruiters.

Rules:
- Write exactly {QUESTION_COUNT} questions
- Each question must test something the role actually needs
- Tailor questions to the candidate's listed skills and to gaps against the role
- Never ask about protected characteristics (age, gender, race, religion, etc.)
- Output ONLY valid JSON matching the specified structure. No markdown, no extra text."""

USER_PROMPT_TEMPLATE = """\
Job Role: {job_role}
Job Description: {job_description}
Candidate Skills: {candidate_skills}

Return the questions as JSON with this exact structure:

{{
  "screening_questions": ["<question 1>", "<question 2>", "<question 3>", "<question 4>", "<question 5>"]
}}"""

DEFAULT_JOB_DESCRIPTION = "A challenging and rewarding role for a skilled professional."


def describe_job(required_experience_level: str, required_skills: list[str]) -> str:
    """Short job description used when the job exists but has no free-text body."""
    return (
        f"Required experience: {required_experience_level}. "
        f"Required skills: {', '.join(required_skills)}"
    )


def build_screening_questions_prompt(
    job_role: str,
    job_description: str,
    candidate_skills: str,
) -> tuple[str, str]:
    """Returns (system_prompt, user_prompt)."""
    user_prompt = USER_PROMPT_TEMPLATE.format(
        job_role=job_role,
        job_description=job_description,
        candidate_skills=candidate_skills or "None listed",
    )
    return SYSTEM_PROMPT, user_prompt
