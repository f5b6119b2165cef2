"""
Pytest configuration and shared fixtures.
"""

import pytest
from pathlib import Path
from typing import List

from guestlinks.logger import StructuredLogger
from guestlinks.matcher import Candidate, NameMatcher


@pytest.fixture
def quiet_logger(tmp_path) -> StructuredLogger:
    """Logger writing only to a temporary directory."""
    return StructuredLogger(name="test", log_dir=tmp_path, enable_console=False)


@pytest.fixture
def brazilian_contacts() -> List[Candidate]:
    """Address book with accented Portuguese names."""
    return [
        Candidate("João Silva", ("+551234567890",)),
        Candidate("Maria Santos", ("+550987654321",)),
        Candidate("José Oliveira", ("+551122334455",)),
        Candidate("Ana Costa", ("+555566778899",)),
        Candidate("Pedro Alves", ("+559988776655",)),
        Candidate("Carla Lima", ("+554433221100",)),
    ]


@pytest.fixture
def guest_contacts() -> List[Candidate]:
    """Exact entries for the names used in group tests."""
    return [
        Candidate("John", ("+5511911110000", "+5511911110001")),
        Candidate("Mary", ("+5511922220000",)),
        Candidate("Jane", ("+5511933330000",)),
        Candidate("Bob", ("+5511944440000",)),
    ]


@pytest.fixture
def guest_matcher(guest_contacts) -> NameMatcher:
    return NameMatcher(guest_contacts)


class ScriptedDisambiguator:
    """Fake disambiguator returning canned answers and recording each call."""

    def __init__(self, *answers):
        self.answers = list(answers)
        self.calls = []

    def __call__(self, name, matches):
        self.calls.append((name, list(matches)))
        return self.answers.pop(0)


@pytest.fixture
def scripted():
    return ScriptedDisambiguator


@pytest.fixture
def sample_vcard() -> str:
    """Two contacts, one with two phones, plus a card without phone."""
    return (
        "BEGIN:VCARD\r\n"
        "VERSION:3.0\r\n"
        "FN:João Silva\r\n"
        "N:Silva;João;;;\r\n"
        "TEL;TYPE=CELL:(11) 98765-4321\r\n"
        "item1.TEL;type=HOME:+372 5123 4567\r\n"
        "EMAIL;TYPE=INTERNET:joao@example.com\r\n"
        "END:VCARD\r\n"
        "BEGIN:VCARD\r\n"
        "VERSION:3.0\r\n"
        "N:Santos;Maria;;;\r\n"
        "TEL:+55 21 99999-0000\r\n"
        "END:VCARD\r\n"
        "BEGIN:VCARD\r\n"
        "VERSION:3.0\r\n"
        "FN:No Phone\r\n"
        "END:VCARD\r\n"
    )


@pytest.fixture
def vcard_dir(tmp_path, sample_vcard) -> Path:
    """Directory with one real export and an example file to ignore."""
    directory = tmp_path / "vcards"
    directory.mkdir()
    (directory / "contacts.vcf").write_text(sample_vcard, encoding="utf-8")
    (directory / "example.vcf").write_text(
        "BEGIN:VCARD\nFN:Example Person\nTEL:11988887777\nEND:VCARD\n", encoding="utf-8"
    )
    (directory / "notes.txt").write_text("not a vcard", encoding="utf-8")
    return directory
