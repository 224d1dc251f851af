"""Resume intake: decode uploaded documents and extract candidate fields."""

import base64
import binascii
import logging

import fitz  # PyMuPDF

from hiregenius.models.schemas import ParsedResume
from hiregenius.services import llm_service

logger = logging.getLogger(__name__)

PDF_MIME = "application/pdf"
MIN_RESUME_CHARS = 10


class UnsupportedResume(ValueError):
    pass


def decode_data_uri(data_uri: str) -> tuple[str, bytes]:
    """Split ``data:<mime>;base64,<data>`` into (mime_type, raw bytes)."""
    if not data_uri.startswith("data:") or "," not in data_uri:
        raise UnsupportedResume("Resume must be a data URI: data:<mimetype>;base64,<data>")

    header, encoded = data_uri[len("data:"):].split(",", 1)
    parts = header.split(";")
    mime_type = parts[0].strip().lower()
    if "base64" not in parts[1:]:
        raise UnsupportedResume("Resume data URI must be base64 encoded")
    if not mime_type:
        raise UnsupportedResume("Resume data URI is missing a MIME type")

    try:
        return mime_type, base64.b64decode(encoded, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise UnsupportedResume("Resume data is not valid base64") from exc


def extract_text_from_pdf(pdf_bytes: bytes) -> str:
    """Extract all text from a PDF file's bytes."""
    try:
        doc = fitz.open(stream=pdf_bytes, filetype="pdf")
    except RuntimeError as exc:
        raise UnsupportedResume("Could not open PDF") from exc
    pages = [page.get_text() for page in doc]
    doc.close()
    return "\n".join(pages).strip()


def extract_resume_text(mime_type: str, data: bytes) -> str:
    if mime_type == PDF_MIME:
        text = extract_text_from_pdf(data)
    elif mime_type.startswith("text/"):
        text = data.decode("utf-8", errors="replace").strip()
    else:
        raise UnsupportedResume(f"Unsupported resume format: {mime_type}")

    if len(text) < MIN_RESUME_CHARS:
        raise UnsupportedResume("Could not extract text from resume")
    return text


def narrow_skills(skills: list[str], allowed: list[str]) -> list[str]:
    """Keep only skills the job asks for, using the job's spelling."""
    allowed_map = {s.strip().lower(): s for s in allowed}
    narrowed = []
    for skill in skills:
        match = allowed_map.get(skill.strip().lower())
        if match is not None and match not in narrowed:
            narrowed.append(match)
    return narrowed


async def parse_resume(
    user_id: str,
    mime_type: str,
    data: bytes,
    job_skills: list[str] | None = None,
) -> ParsedResume:
    """Extract name, email, skills and experience level from a resume document.

    When ``job_skills`` is given the result only lists skills from that list.
    """
    text = extract_resume_text(mime_type, data)
    parsed = await llm_service.parse_resume_text(user_id, text)
    logger.info("Parsed resume for %s (%d skills)", parsed.name, len(parsed.skills))
    if job_skills is not None:
        parsed.skills = narrow_skills(parsed.skills, job_skills)
    return parsed
