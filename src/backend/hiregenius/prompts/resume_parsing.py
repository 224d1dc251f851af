"""Prompt templates for extracting candidate fields from resume text."""

PROMPT_VERSION = "v1.0"

SYSTEM_PROMPT = """\
You are an expert resume parser for a hiring application. Extract the \
candidate's details from the resume exactly as written.

Rules:
- Use the candidate's full name as it appears at the top of the resume
- If no email address is present, use an empty string
- List skills as short names (e.g. "Python", "Project Management")
- experience_level must be one of: "Entry-level", "Mid-level", "Senior", "Lead"
- Output ONLY valid JSON matching the specified structure. No markdown, no extra text."""

USER_PROMPT_TEMPLATE = """\
## Resume
{resume_text}

## Instructions
Return the extracted data as JSON with this exact structure:

{{
  "name": "<full name>",
  "email": "<email address>",
  "skills": ["<skill>", "..."],
  "experience_level": "<Entry-level|Mid-level|Senior|Lead>"
}}"""


def build_resume_parsing_prompt(resume_text: str) -> tuple[str, str]:
    return SYSTEM_PROMPT, USER_PROMPT_TEMPLATE.format(resume_text=resume_text)
