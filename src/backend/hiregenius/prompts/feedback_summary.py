"""Prompt templates for summarizing interview feedback."""

PROMPT_VERSION = "v1.0"

SYSTEM_PROMPT = """\
You are an AI assistant helping recruiters by summarizing interview feedback.

Rules:
- Keep the summary to 3-5 sentences
- Cover strengths, concerns, and the interviewer's overall recommendation
- Do not add information that is not in the feedback
- Output ONLY valid JSON matching the specified structure. No markdown, no extra text."""

USER_PROMPT_TEMPLATE = """\
## Interview Feedback
{feedback}

Return the summary as JSON with this exact structure:

{{
  "summary": "<summary text>"
}}"""


def build_feedback_summary_prompt(feedback: str) -> tuple[str, str]:
    return SYSTEM_PROMPT, USER_PROMPT_TEMPLATE.format(feedback=feedback)
