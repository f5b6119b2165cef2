"""
vCard directory loader.

Parses address-book exports into Candidates. Phones are normalized on the
way in so the matcher and link builder only ever see international numbers.
"""

import re
from pathlib import Path
from typing import Iterable, List, Optional

from .logger import get_logger
from .matcher import Candidate
from .normalize import DEFAULT_COUNTRY_CODE, DEFAULT_COUNTRY_CODES, deduplicate, normalize_phone
from .schema import validate_contact

logger = get_logger()

_CARD_RE = re.compile(r"BEGIN:VCARD(.*?)(?:END:VCARD|(?=BEGIN:VCARD)|\Z)", re.IGNORECASE | re.DOTALL)
_ESCAPES = {"n": "\n", "N": "\n", ",": ",", ";": ";", "\\": "\\"}


def _unfold(text: str) -> List[str]:
    """Join continuation lines (leading space or tab) onto the previous line."""
    lines: List[str] = []
    for line in text.splitlines():
        if line[:1] in (" ", "\t") and lines:
            lines[-1] += line[1:]
        elif line.strip():
            lines.append(line)
    return lines


def _unescape(value: str) -> str:
    return re.sub(r"\\(.)", lambda m: _ESCAPES.get(m.group(1), m.group(0)), value).strip()


def _parse_line(line: str):
    key, sep, value = line.partition(":")
    if not sep:
        return None, ""
    # "item1.TEL;type=CELL" -> "TEL"
    prop = key.split(";", 1)[0].split(".")[-1].strip().upper()
    return prop, value


def parse_vcard_content(
    content: str,
    country_codes: Iterable[str] = DEFAULT_COUNTRY_CODES,
    default_country_code: str = DEFAULT_COUNTRY_CODE,
) -> Optional[Candidate]:
    """
    Parse a single vCard into a Candidate.

    Uses FN for the name, falling back to the N components. Returns None
    when the card has no usable name or phone.
    """
    full_name = ""
    structured_name = ""
    raw_phones: List[str] = []
    email = ""

    for line in _unfold(content):
        prop, value = _parse_line(line)
        if prop == "FN" and not full_name:
            full_name = _unescape(value)
        elif prop == "N" and not structured_name:
            # Family;Given;Additional;Prefix;Suffix
            parts = [_unescape(p) for p in re.split(r"(?<!\\);", value)]
            given_first = parts[1:2] + parts[:1] + parts[2:]
            structured_name = " ".join(p for p in given_first if p)
        elif prop == "TEL":
            raw_phones.append(value.strip())
        elif prop == "EMAIL" and not email:
            email = value.strip()

    phones = deduplicate(
        p for p in (normalize_phone(raw, country_codes, default_country_code) for raw in raw_phones) if p
    )
    record = {"name": full_name or structured_name, "phones": phones, "email": email}
    if validate_contact(record):
        return None
    return Candidate(name=record["name"], phones=tuple(phones), email=email)


def parse_vcard_file(
    path: Path,
    country_codes: Iterable[str] = DEFAULT_COUNTRY_CODES,
    default_country_code: str = DEFAULT_COUNTRY_CODE,
) -> List[Candidate]:
    """
    Parse every vCard in a .vcf file.

    Cards without a name or a phone are skipped with a warning.

    Raises:
        OSError: If the file cannot be read
    """
    country_codes = tuple(country_codes)
    content = path.read_text(encoding="utf-8")
    contacts = []
    for index, match in enumerate(_CARD_RE.finditer(content)):
        contact = parse_vcard_content(match.group(1), country_codes, default_country_code)
        if contact is None:
            logger.warning("Skipping vCard without name or phone", file=str(path), card=index)
            continue
        contacts.append(contact)
    return contacts


def load_contacts_from_directory(
    directory: Path = Path("data/vcards"),
    country_codes: Iterable[str] = DEFAULT_COUNTRY_CODES,
    default_country_code: str = DEFAULT_COUNTRY_CODE,
) -> List[Candidate]:
    """
    Load contacts from every .vcf file in a directory.

    Files are read in name order; files named like "example.vcf" are ignored.

    Args:
        directory: Directory holding the address-book exports
        country_codes: Known country-code prefixes for phone normalization
        default_country_code: Code prepended to bare national numbers

    Returns:
        Candidates in file order, then card order within each file

    Raises:
        FileNotFoundError: If the directory does not exist
    """
    directory = Path(directory)
    if not directory.is_dir():
        raise FileNotFoundError(f"Contacts directory not found: {directory}")

    country_codes = tuple(country_codes)
    vcard_files = sorted(
        p for p in directory.iterdir()
        if p.is_file()
        and p.name.lower().endswith(".vcf")
        and "example.vcf" not in p.name.lower()
    )

    contacts: List[Candidate] = []
    for path in vcard_files:
        contacts.extend(parse_vcard_file(path, country_codes, default_country_code))

    logger.info(f"Loaded {len(contacts)} contacts", directory=str(directory), files=len(vcard_files))
    logger.record_contacts_loaded(len(contacts))
    return contacts
