"""
Tests for the vCard directory loader.
"""

import pytest
from guestlinks.contacts import (
    load_contacts_from_directory,
    parse_vcard_content,
    parse_vcard_file,
)
from guestlinks.matcher import Candidate


class TestParseVCardContent:
    """Test parsing a single card."""

    def test_full_card(self):
        """Name, phones and email are read and phones normalized."""
        contact = parse_vcard_content(
            "BEGIN:VCARD\nVERSION:3.0\nFN:João Silva\n"
            "TEL;TYPE=CELL:(11) 98765-4321\n"
            "item1.TEL;type=HOME:+372 5123 4567\n"
            "EMAIL:joao@example.com\nEND:VCARD\n"
        )
        assert contact == Candidate(
            name="João Silva",
            phones=("+5511987654321", "+37251234567"),
            email="joao@example.com",
        )

    def test_structured_name_fallback(self):
        """Without FN the N components are used, given name first."""
        contact = parse_vcard_content("N:Santos;Maria;;;\nTEL:21999990000\n")
        assert contact.name == "Maria Santos"

    def test_duplicate_phones_collapsed(self):
        """The same number written twice is kept once."""
        contact = parse_vcard_content(
            "FN:Ana\nTEL:+55 11 91234-5678\nTEL:11912345678\n"
        )
        assert contact.phones == ("+5511912345678",)

    def test_folded_and_escaped_lines(self):
        """Continuation lines are joined and escapes decoded."""
        contact = parse_vcard_content(
            "FN:Costa\\, Ana\n  Maria\nTEL:11912345678\n"
        )
        assert contact.name == "Costa, Ana Maria"

    def test_missing_phone(self):
        """Cards without a phone are not contacts."""
        assert parse_vcard_content("FN:No Phone\n") is None

    def test_missing_name(self):
        """Cards without a name are not contacts."""
        assert parse_vcard_content("TEL:11912345678\n") is None


class TestParseVCardFile:
    """Test parsing a file with several cards."""

    def test_multiple_cards(self, tmp_path, sample_vcard):
        """Valid cards are returned in file order, invalid ones dropped."""
        path = tmp_path / "contacts.vcf"
        path.write_text(sample_vcard, encoding="utf-8")

        contacts = parse_vcard_file(path)

        assert [c.name for c in contacts] == ["João Silva", "Maria Santos"]
        assert contacts[1].phones == ("+5521999990000",)

    def test_custom_country_codes(self, tmp_path):
        """Country-code settings reach phone normalization."""
        path = tmp_path / "contacts.vcf"
        path.write_text("BEGIN:VCARD\nFN:Sam\nTEL:2025550143\nEND:VCARD\n", encoding="utf-8")
        contacts = parse_vcard_file(path, country_codes=(), default_country_code="1")
        assert contacts[0].phones == ("+12025550143",)


class TestLoadContactsFromDirectory:
    """Test loading a directory of exports."""

    def test_loads_vcf_files(self, vcard_dir):
        """Only real .vcf exports are loaded."""
        contacts = load_contacts_from_directory(vcard_dir)
        assert [c.name for c in contacts] == ["João Silva", "Maria Santos"]

    def test_files_in_name_order(self, vcard_dir):
        """Files are read in name order."""
        (vcard_dir / "a_family.VCF").write_text(
            "BEGIN:VCARD\nFN:Pedro Alves\nTEL:11900001111\nEND:VCARD\n", encoding="utf-8"
        )
        contacts = load_contacts_from_directory(vcard_dir)
        assert contacts[0].name == "Pedro Alves"
        assert len(contacts) == 3

    def test_missing_directory(self, tmp_path):
        """A missing directory is an error for the caller."""
        with pytest.raises(FileNotFoundError):
            load_contacts_from_directory(tmp_path / "missing")
