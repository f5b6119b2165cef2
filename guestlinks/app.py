import argparse
import webbrowser
from pathlib import Path
from typing import List, Optional

from . import __version__
from .contacts import load_contacts_from_directory
from .env import Settings, load_env, load_settings
from .logger import get_logger
from .matcher import NameMatcher
from .messages import build_invitations
from .normalize import normalize_phone
from .prompt import ConsoleDisambiguator
from .render import render_html, write_html
from .resolver import GroupResolver, ResolutionResult, SkipReason, decline_all
from .schema import ConfigurationError


def read_names(path: Path) -> List[str]:
    with path.open("r", encoding="utf-8") as f:
        return [line.strip() for line in f if line.strip()]


def read_message(path: Path) -> str:
    return path.read_text(encoding="utf-8").strip()


def _require_file(path: Path, label: str) -> Path:
    if not path.exists():
        raise SystemExit(f"{label} not found: {path}")
    return path


def _load_contacts(args: argparse.Namespace, settings: Settings):
    contacts_dir = Path(args.contacts) if args.contacts else settings.contacts_dir
    try:
        return load_contacts_from_directory(
            contacts_dir, settings.country_codes, settings.default_country_code
        )
    except FileNotFoundError as e:
        raise SystemExit(str(e))


def build_page(
    names: List[str],
    resolver: GroupResolver,
    individual_message: str,
    group_message: str,
    output: Path,
) -> ResolutionResult:
    """Resolve the guest list and write the confirmation page."""
    result = resolver.resolve(names)
    invitations = build_invitations(result.resolved, individual_message, group_message)
    write_html(output, render_html(invitations, result.skipped))
    return result


def cmd_build(args: argparse.Namespace, settings: Settings) -> None:
    names_path = _require_file(Path(args.names) if args.names else settings.names_file, "Names file")
    individual_path = _require_file(
        Path(args.individual_message) if args.individual_message else settings.individual_message_file,
        "Individual message",
    )
    group_path = _require_file(
        Path(args.group_message) if args.group_message else settings.group_message_file,
        "Group message",
    )
    output = Path(args.output) if args.output else settings.output_file

    contacts = _load_contacts(args, settings)
    disambiguate = decline_all if args.no_input else ConsoleDisambiguator()
    resolver = GroupResolver(NameMatcher(contacts), disambiguate, settings.separators)

    result = build_page(
        read_names(names_path),
        resolver,
        read_message(individual_path),
        read_message(group_path),
        output,
    )

    not_found = sum(1 for s in result.skipped if s.reason is SkipReason.NO_MATCHES)
    user_skipped = len(result.skipped) - not_found
    print(f"Invitations: {len(result.resolved)}")
    print(f"Not found: {not_found}  Skipped: {user_skipped}")
    print(f"Written: {output.resolve()}")
    if args.open:
        webbrowser.open(output.resolve().as_uri())
    get_logger().log_metrics_summary()


def cmd_match(args: argparse.Namespace, settings: Settings) -> None:
    matcher = NameMatcher(_load_contacts(args, settings))
    matches = matcher.find_matches(args.name)
    if not matches:
        print(f"No matches found for {args.name}")
        return
    for match in matches:
        print(f"{match.confidence:.2f}  {match.name}  {', '.join(match.phones)}")


def cmd_phone(args: argparse.Namespace, settings: Settings) -> None:
    print(normalize_phone(args.number, settings.country_codes, settings.default_country_code))


def cmd_contacts(args: argparse.Namespace, settings: Settings) -> None:
    contacts = _load_contacts(args, settings)
    for contact in contacts:
        print(f"{contact.name}: {', '.join(contact.phones)}")
    print(f"Total: {len(contacts)}")


def main(argv: Optional[List[str]] = None) -> None:
    # Load .env (GROUP_SEPARATORS, COUNTRY_CODES, paths)
    load_env()
    parser = argparse.ArgumentParser(prog="guestlinks", description="Guest list to WhatsApp invitation links")
    parser.add_argument("--version", action="store_true", help="Show version")

    subparsers = parser.add_subparsers(dest="command")
    bld = subparsers.add_parser("build", help="Match the guest list against contacts and write the invitation page")
    bld.add_argument("--names", help="Guest list, one entry per line (default: data/names.txt)")
    bld.add_argument("--contacts", help="Directory of .vcf files (default: data/vcards)")
    bld.add_argument("--individual-message", help="Template with {name} (default: data/individual_message.txt)")
    bld.add_argument("--group-message", help="Template with {names} (default: data/group_message.txt)")
    bld.add_argument("--output", help="Output HTML path (default: dist/index.html)")
    bld.add_argument("--no-input", action="store_true", help="Never prompt; ambiguous names are skipped")
    bld.add_argument("--open", action="store_true", help="Open the written page in the default browser")
    bld.set_defaults(func=cmd_build)

    mat = subparsers.add_parser("match", help="Show the best contact matches for a name")
    mat.add_argument("--name", required=True, help="Name to look up")
    mat.add_argument("--contacts", help="Directory of .vcf files (default: data/vcards)")
    mat.set_defaults(func=cmd_match)

    phn = subparsers.add_parser("phone", help="Normalize a phone number to international format")
    phn.add_argument("--number", required=True, help="Raw phone number")
    phn.set_defaults(func=cmd_phone)

    lst = subparsers.add_parser("contacts", help="List loaded contacts")
    lst.add_argument("--contacts", help="Directory of .vcf files (default: data/vcards)")
    lst.set_defaults(func=cmd_contacts)

    args = parser.parse_args(argv)

    if args.version:
        print(__version__)
        return

    try:
        settings = load_settings()
    except ConfigurationError as e:
        raise SystemExit(str(e))

    if hasattr(args, "func"):
        args.func(args, settings)
        return

    parser.print_help()


if __name__ == "__main__":
    main()
