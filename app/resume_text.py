"""
Flatten a builder resume document into a plain-text block.

The output feeds downstream text analysis, so it is deterministic: identity
lines first, then SUMMARY, WORK EXPERIENCE, EDUCATION and SKILLS sections, each
emitted only when it has content. Absent fields are skipped, never an error.
"""
from __future__ import annotations

from typing import Any, Mapping


def _section_header(title: str) -> str:
    return f"\n--- {title.upper()} ---\n"


def _add_section(parts: list[str], title: str, content: str | list[str] | None) -> None:
    if not content:
        return
    parts.append(_section_header(title))
    if isinstance(content, list):
        parts.append(", ".join(content) + "\n")
    else:
        parts.append(f"{content}\n")


def resume_to_text(data: Mapping[str, Any] | None) -> str:
    """Return the text projection of a resume document (camelCase keys)."""
    if not data:
        return ""

    parts: list[str] = []

    for key in ("name", "email", "phone"):
        if data.get(key):
            parts.append(f"{data[key]}\n")

    _add_section(parts, "Summary", data.get("summary"))

    work = data.get("workExperience") or []
    if work:
        parts.append(_section_header("Work Experience"))
        for job in work:
            parts.append(f"\n{job.get('title') or ''} at {job.get('company') or ''}\n")
            if job.get("description"):
                parts.append(f"{job['description']}\n")

    education = data.get("education") or []
    if education:
        parts.append(_section_header("Education"))
        for edu in education:
            # fieldOfStudy renders as "" when absent ("in  from"), not elided
            parts.append(
                f"\n{edu.get('degree') or ''} in {edu.get('fieldOfStudy') or ''} "
                f"from {edu.get('institution') or ''}\n"
            )

    _add_section(parts, "Skills", list(data.get("skills") or []))

    return "".join(parts).strip()
