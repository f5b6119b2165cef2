from dataclasses import dataclass, field
from typing import List, Sequence
from urllib.parse import quote

from .normalize import phone_digits, strip_annotation
from .resolver import ResolvedGroup

WHATSAPP_BASE_URL = "https://wa.me/"


@dataclass(frozen=True)
class InvitationLink:
    query: str
    contact_name: str
    phone: str
    confidence: float
    url: str


@dataclass
class Invitation:
    title: str
    is_group: bool
    message: str
    links: List[InvitationLink] = field(default_factory=list)
    # unfilled template, edited on the page
    template: str = ""


def format_message(template: str, names: str) -> str:
    """Fill {names} when the template has it, otherwise {name}."""
    if "{names}" in template:
        return template.replace("{names}", names)
    return template.replace("{name}", names)


def whatsapp_link(phone: str, message: str) -> str:
    # wa.me wants the bare international number, without "+" or formatting
    return f"{WHATSAPP_BASE_URL}{phone_digits(phone)}?text={quote(message, safe='')}"


def confidence_level(confidence: float) -> str:
    if confidence >= 0.8:
        return "high"
    if confidence >= 0.5:
        return "medium"
    return "low"


def build_invitations(
    resolved: Sequence[ResolvedGroup],
    individual_template: str,
    group_template: str,
) -> List[Invitation]:
    """
    Build one invitation per resolved group.

    Every confirmed contact gets its own link carrying the same message,
    since a wa.me link addresses a single number.
    """
    invitations = []
    for group in resolved:
        title = strip_annotation(group.original_entry)
        template = group_template if group.is_group else individual_template
        message = format_message(template, title)
        links = [
            InvitationLink(
                query=contact.query,
                contact_name=contact.match.name,
                phone=contact.phone,
                confidence=contact.match.confidence,
                url=whatsapp_link(contact.phone, message),
            )
            for contact in group.contacts
        ]
        invitations.append(
            Invitation(
                title=title,
                is_group=group.is_group,
                message=message,
                links=links,
                template=template,
            )
        )
    return invitations
