"""Service code generation and validation.

Codes look like ``CAT-ABBR`` (``LAB-CBC``, ``RAD-CXRPA``): upper-case
letters, digits and single hyphens, at most 24 characters.
"""

import re
from collections.abc import Iterable

from clinic_engine.errors import ServiceCodeError

MAX_CODE_LENGTH = 24
MAX_UNIQUE_SUFFIX = 999

CATEGORY_PREFIXES = {
    "consultation": "CONS",
    "laboratory": "LAB",
    "radiology": "RAD",
    "ultrasound": "US",
    "pharmacy": "PHARM",
    "procedure": "PROC",
}
DEFAULT_PREFIX = "SVC"

STOPWORDS = frozenset({
    "for", "and", "or", "the", "a", "an", "of", "with", "in", "on", "at",
    "to", "by", "from", "as", "is", "was", "are", "were", "be", "been",
})

_PAREN_ABBR_RE = re.compile(r"\(([A-Za-z0-9-]+)\)")
_WORD_SPLIT_RE = re.compile(r"[\s\-/]+")


def sanitize_code(code: str | None) -> str:
    """Upper-case and reduce to ``[A-Z0-9-]`` with single inner hyphens."""
    if not code:
        return ""
    cleaned = re.sub(r"[^A-Z0-9-]", "-", code.upper())
    cleaned = re.sub(r"-+", "-", cleaned)
    return cleaned.strip("-")


def validate_service_code(code: str | None) -> str | None:
    """Return an error message for an invalid code, None if valid or empty."""
    if not code or not code.strip():
        return None

    trimmed = code.strip()
    if not re.fullmatch(r"[A-Z0-9-]+", trimmed):
        return "Service code must only contain uppercase letters, numbers, and hyphens"
    if "--" in trimmed:
        return "Service code must not contain consecutive hyphens"
    if trimmed.startswith("-") or trimmed.endswith("-"):
        return "Service code must not start or end with a hyphen"
    if len(trimmed) > MAX_CODE_LENGTH:
        return f"Service code must not exceed {MAX_CODE_LENGTH} characters"
    return None


def _abbreviation(service_name: str) -> str:
    paren = _PAREN_ABBR_RE.search(service_name)
    if paren:
        return sanitize_code(paren.group(1))

    words = [
        w.strip() for w in _WORD_SPLIT_RE.split(service_name)
        if w.strip() and w.strip().lower() not in STOPWORDS
    ]
    if not words:
        return "SERVICE"
    if len(words) == 1:
        return sanitize_code(words[0][:8])
    if len(words) == 2:
        return sanitize_code(words[0][:4] + words[1][:4])
    return sanitize_code("".join(w[0] for w in words[:6]))


def generate_service_code(service_name: str, category: str) -> str:
    prefix = CATEGORY_PREFIXES.get(category, DEFAULT_PREFIX)
    abbr = _abbreviation(service_name)
    code = f"{prefix}-{abbr}"
    if len(code) > MAX_CODE_LENGTH:
        code = f"{prefix}-{abbr[:MAX_CODE_LENGTH - len(prefix) - 1]}"
    return code


def ensure_unique_code(code: str, existing_codes: Iterable[str | None]) -> str:
    """Append ``-02``, ``-03``... until ``code`` collides with nothing.

    Comparison is case-insensitive. The base is shortened when the suffix
    would push the code past the length limit.
    """
    existing = {c.upper() for c in existing_codes if c}
    if code.upper() not in existing:
        return code

    room = MAX_CODE_LENGTH - len(code) - 1
    for counter in range(2, MAX_UNIQUE_SUFFIX + 1):
        suffix = str(counter).zfill(2)
        if len(suffix) > room:
            candidate = f"{code[:MAX_CODE_LENGTH - len(suffix) - 1]}-{suffix}"
        else:
            candidate = f"{code}-{suffix}"
        if candidate.upper() not in existing:
            return candidate

    raise ServiceCodeError(f"Unable to generate unique code for base: {code}")


def generate_and_validate_service_code(
    service_name: str,
    category: str,
    existing_codes: Iterable[str | None] = (),
) -> str:
    """Generate a unique, valid code for a new catalog service."""
    code = ensure_unique_code(generate_service_code(service_name, category), existing_codes)
    sanitized = sanitize_code(code)
    error = validate_service_code(sanitized)
    if error:
        raise ServiceCodeError(f"Generated code validation failed: {error}")
    return sanitized
