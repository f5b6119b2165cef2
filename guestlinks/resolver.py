"""
Group resolution for guest-list entries.

Responsibilities:
- Split an entry such as "John e Mary" into individual names.
- Look each name up with NameMatcher.
- Accept obvious matches, and hand ambiguous ones to a disambiguation
  callable (usually a human at a prompt).
- Record every name that could not be resolved, with the reason.

Non-Responsibilities:
- No file access and no rendering.
- No prompting of its own; the disambiguator decides how to ask.

Invariant:
Entries and names are processed strictly in input order, and only one
disambiguation is in flight at a time.
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, NamedTuple, Optional, Sequence

from .logger import StructuredLogger, get_logger
from .matcher import Match, NameMatcher
from .normalize import normalize_name, strip_annotation
from .schema import ConfigurationError, validate_separators

DEFAULT_SEPARATORS = (",", " e ")


class SelectionError(ValueError):
    """Raised when a disambiguator returns a selection it was not offered."""
    pass


class SkipReason(Enum):
    NO_MATCHES = "No matches found"
    USER_SKIPPED = "Skipped by user"


class Selection(NamedTuple):
    """One pick from a disambiguation: index into the offered matches, and the phone."""

    index: int
    phone: str


@dataclass(frozen=True)
class ResolvedContact:
    match: Match
    phone: str
    query: str


@dataclass
class ResolvedGroup:
    original_entry: str
    is_group: bool
    contacts: List[ResolvedContact] = field(default_factory=list)


@dataclass(frozen=True)
class SkipRecord:
    name: str
    reason: SkipReason


@dataclass
class ResolutionResult:
    resolved: List[ResolvedGroup] = field(default_factory=list)
    skipped: List[SkipRecord] = field(default_factory=list)


# (name, matches) -> selections, or None to decline
Disambiguator = Callable[[str, Sequence[Match]], Optional[Sequence[Selection]]]


def decline_all(name: str, matches: Sequence[Match]) -> None:
    """Disambiguator that never picks; every ambiguous name is skipped."""
    return None


class GroupResolver:
    """Turns raw guest-list entries into resolved groups and skip records."""

    def __init__(
        self,
        matcher: NameMatcher,
        disambiguate: Disambiguator,
        separators: Sequence[str] = DEFAULT_SEPARATORS,
        logger: Optional[StructuredLogger] = None,
    ):
        """
        Args:
            matcher: NameMatcher over the loaded contacts
            disambiguate: Callable asked to choose when several matches remain
            separators: Literal substrings that separate names in a group entry
            logger: Logger for events and metrics (default: global logger)

        Raises:
            ConfigurationError: If any separator is empty or not a string
        """
        errors = validate_separators(separators)
        if errors:
            raise ConfigurationError("Invalid separators: " + "; ".join(errors))

        self.matcher = matcher
        self.disambiguate = disambiguate
        self.separators = tuple(separators)
        self.logger = logger or get_logger()
        self._split_re = (
            re.compile("|".join(re.escape(sep) for sep in self.separators))
            if self.separators else None
        )

    def is_group(self, entry: str) -> bool:
        return any(sep in entry for sep in self.separators)

    def split_entry(self, entry: str) -> List[str]:
        """Split an entry into names with annotations stripped. Blank names are kept."""
        if self.is_group(entry):
            pieces = [piece.strip() for piece in self._split_re.split(entry)]
        else:
            pieces = [entry.strip()]
        return [strip_annotation(piece) for piece in pieces]

    def resolve(self, entries: Sequence[str]) -> ResolutionResult:
        result = ResolutionResult()

        for entry in entries:
            self.logger.record_entry()
            contacts: List[ResolvedContact] = []
            for name in self.split_entry(entry):
                accepted = self._resolve_name(name, result.skipped)
                contacts.extend(accepted)

            if contacts:
                result.resolved.append(
                    ResolvedGroup(
                        original_entry=entry,
                        is_group=self.is_group(entry),
                        contacts=contacts,
                    )
                )

        return result

    def _resolve_name(self, name: str, skipped: List[SkipRecord]) -> List[ResolvedContact]:
        matches = self.matcher.find_matches(name)

        if not matches:
            self.logger.info("No matches found", name=name)
            self._skip(name, SkipReason.NO_MATCHES, skipped)
            return []

        best = matches[0] if len(matches) == 1 else self._auto_pick(name, matches)
        if best is not None and best.phones:
            self.logger.debug("Resolved automatically", name=name, contact=best.name)
            self.logger.record_resolved(automatic=True)
            return [ResolvedContact(match=best, phone=best.phones[0], query=name)]

        self.logger.record_prompt()
        selections = self.disambiguate(name, matches)
        if selections is None:
            self.logger.info("Skipped by user", name=name)
            self._skip(name, SkipReason.USER_SKIPPED, skipped)
            return []

        contacts = []
        for selection in self._check_selections(name, selections, matches):
            contacts.append(
                ResolvedContact(match=matches[selection.index], phone=selection.phone, query=name)
            )
            self.logger.record_resolved()
        return contacts

    def _auto_pick(self, name: str, matches: Sequence[Match]) -> Optional[Match]:
        """The single match whose name equals, contains or is contained by name, if unique."""
        q = normalize_name(name)
        close = []
        for match in matches:
            c = normalize_name(match.name)
            if q == c or q in c or c in q:
                close.append(match)
        return close[0] if len(close) == 1 else None

    def _check_selections(
        self, name: str, selections: Sequence[Selection], matches: Sequence[Match]
    ) -> List[Selection]:
        checked = [Selection(*selection) for selection in selections]
        if not checked:
            raise SelectionError(
                f"Empty selection for {name!r}; decline by returning None"
            )
        for selection in checked:
            if not 0 <= selection.index < len(matches):
                raise SelectionError(
                    f"Selection index {selection.index} out of range for {name!r} "
                    f"({len(matches)} matches offered)"
                )
            if not selection.phone:
                raise SelectionError(f"Selection for {name!r} has no phone")
        return checked

    def _skip(self, name: str, reason: SkipReason, skipped: List[SkipRecord]):
        skipped.append(SkipRecord(name=name, reason=reason))
        self.logger.record_skip(reason.value)
