from typing import Any, Dict, Iterable, List

REQUIRED_STR_FIELDS = ["name"]
OPTIONAL_STR_FIELDS = ["email"]


class ConfigurationError(ValueError):
    """Raised when separators or the country-code table are unusable."""
    pass


def _is_non_empty_str(v: Any) -> bool:
    return isinstance(v, str) and v.strip() != ""


def validate_contact(data: Dict[str, Any]) -> List[str]:
    """
    Returns a list of validation error messages. Empty list means valid.
    A usable contact needs a name and at least one phone.
    """
    errors: List[str] = []

    for f in REQUIRED_STR_FIELDS:
        if f not in data:
            errors.append(f"Missing required field: {f}")
        elif not _is_non_empty_str(data[f]):
            errors.append(f"Field '{f}' must be a non-empty string")

    for f in OPTIONAL_STR_FIELDS:
        if f in data and not isinstance(data[f], str):
            errors.append(f"Field '{f}' must be a string if provided")

    phones = data.get("phones")
    if not isinstance(phones, (list, tuple)):
        errors.append("Field 'phones' must be a list")
    elif not phones:
        errors.append("Field 'phones' must contain at least one phone")
    elif not all(_is_non_empty_str(p) for p in phones):
        errors.append("Field 'phones' must only contain non-empty strings")

    return errors


def validate_separators(separators: Iterable[Any]) -> List[str]:
    if isinstance(separators, str):
        return ["Separators must be a list of strings, not a single string"]
    errors: List[str] = []
    for i, sep in enumerate(separators):
        if not isinstance(sep, str):
            errors.append(f"Separator {i} must be a string, got {type(sep).__name__}")
        elif sep == "":
            errors.append(f"Separator {i} must not be empty")
    return errors


def validate_country_codes(codes: Iterable[Any]) -> List[str]:
    errors: List[str] = []
    for i, code in enumerate(codes):
        if not isinstance(code, str) or not code.isdigit():
            errors.append(f"Country code {i} must be a string of digits, got {code!r}")
    return errors
