import re
from typing import Iterable

DEFAULT_COUNTRY_CODES = ("55", "372", "358")
DEFAULT_COUNTRY_CODE = "55"

# Bare national numbers (area code + subscriber) for the default country
NATIONAL_LENGTHS = {10, 11}

_ANNOTATION_RE = re.compile(r"\s*\([^)]*\)\s*")


def normalize_name(name: str) -> str:
    if not name:
        return ""
    return name.strip().lower()


def strip_annotation(name: str) -> str:
    """Drop parenthesized notes: "John (bring a gift)" -> "John"."""
    return _ANNOTATION_RE.sub(" ", name).strip()


def phone_digits(raw: str) -> str:
    return re.sub(r"\D", "", raw or "")


def normalize_phone(
    raw: str,
    country_codes: Iterable[str] = DEFAULT_COUNTRY_CODES,
    default_country_code: str = DEFAULT_COUNTRY_CODE,
) -> str:
    if not raw:
        return ""
    digits = phone_digits(raw)

    if any(digits.startswith(code) for code in country_codes):
        return f"+{digits}"
    if len(digits) in NATIONAL_LENGTHS:
        return f"+{default_country_code}{digits}"
    if len(digits) > 11:
        # Unknown country code already present
        return raw if raw.startswith("+") else f"+{digits}"
    # Too short to tell
    return raw


def deduplicate(values: Iterable[str]) -> list[str]:
    """Deduplicate values while preserving order."""
    seen = set()
    result = []
    for value in values:
        if value not in seen:
            seen.add(value)
            result.append(value)
    return result
