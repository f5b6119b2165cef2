"""Console disambiguation: ask which contact and phone a guest name means."""

from typing import Callable, List, Optional, Sequence, Tuple

from .matcher import Match
from .resolver import Selection

SKIP_CHOICE = "0"


class ConsoleDisambiguator:
    """
    Interactive disambiguator for GroupResolver.

    Lists every (contact, phone) option with a number. The answer may pick
    several options ("1,3"); "0" skips the name.
    """

    def __init__(
        self,
        input_func: Callable[[str], str] = input,
        print_func: Callable[..., None] = print,
    ):
        self.input_func = input_func
        self.print_func = print_func

    @staticmethod
    def options(matches: Sequence[Match]) -> List[Tuple[int, str]]:
        """Flatten matches into (match index, phone) options, in display order."""
        return [(i, phone) for i, match in enumerate(matches) for phone in match.phones]

    def __call__(self, name: str, matches: Sequence[Match]) -> Optional[List[Selection]]:
        options = self.options(matches)
        if not options:
            self.print_func(f'\nNo phone numbers for "{name}" in the matching contacts; skipping.')
            return None

        self.print_func(f'\nSelect contact for "{name}":')
        for number, (index, phone) in enumerate(options, start=1):
            match = matches[index]
            self.print_func(
                f"  {number}. {match.name} ({phone}) - Confidence: {round(match.confidence * 100)}%"
            )
        self.print_func(f"  {SKIP_CHOICE}. Skip this invite")

        while True:
            answer = self.input_func("Choice (comma-separated for several): ").strip()
            if answer == SKIP_CHOICE:
                return None
            picks = self._parse_answer(answer, len(options))
            if picks:
                return [Selection(*options[p - 1]) for p in picks]
            self.print_func(f"Please enter numbers between 1 and {len(options)}, or {SKIP_CHOICE} to skip.")

    @staticmethod
    def _parse_answer(answer: str, option_count: int) -> List[int]:
        picks: List[int] = []
        for part in answer.split(","):
            part = part.strip()
            if not part.isdigit() or not 1 <= int(part) <= option_count:
                return []
            if int(part) not in picks:
                picks.append(int(part))
        return picks
