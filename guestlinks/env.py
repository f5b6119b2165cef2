import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional, Tuple

from dotenv import load_dotenv

from .normalize import DEFAULT_COUNTRY_CODE, DEFAULT_COUNTRY_CODES
from .resolver import DEFAULT_SEPARATORS
from .schema import ConfigurationError, validate_country_codes, validate_separators


def load_env() -> None:
    """Load .env from the current directory if present."""
    env_path = Path.cwd() / ".env"
    if not env_path.exists():
        return
    load_dotenv(dotenv_path=env_path)


@dataclass(frozen=True)
class Settings:
    separators: Tuple[str, ...] = DEFAULT_SEPARATORS
    country_codes: Tuple[str, ...] = DEFAULT_COUNTRY_CODES
    default_country_code: str = DEFAULT_COUNTRY_CODE
    contacts_dir: Path = Path("data/vcards")
    names_file: Path = Path("data/names.txt")
    individual_message_file: Path = Path("data/individual_message.txt")
    group_message_file: Path = Path("data/group_message.txt")
    output_file: Path = Path("dist/index.html")


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """
    Build Settings from environment variables, falling back to defaults.

    GROUP_SEPARATORS is split on "|" and kept verbatim, so " e " keeps its
    spaces. COUNTRY_CODES is comma-separated.

    Raises:
        ConfigurationError: If separators or country codes are invalid
    """
    env = os.environ if environ is None else environ
    defaults = Settings()

    separators = defaults.separators
    if env.get("GROUP_SEPARATORS"):
        separators = tuple(env["GROUP_SEPARATORS"].split("|"))

    country_codes = defaults.country_codes
    if env.get("COUNTRY_CODES"):
        country_codes = tuple(c.strip() for c in env["COUNTRY_CODES"].split(","))

    default_country_code = env.get("DEFAULT_COUNTRY_CODE", "").strip() or defaults.default_country_code

    errors = validate_separators(separators)
    errors += validate_country_codes(country_codes + (default_country_code,))
    if errors:
        raise ConfigurationError("Invalid configuration: " + "; ".join(errors))

    def path_setting(key: str, default: Path) -> Path:
        value = env.get(key)
        return Path(value) if value else default

    return Settings(
        separators=separators,
        country_codes=country_codes,
        default_country_code=default_country_code,
        contacts_dir=path_setting("CONTACTS_DIR", defaults.contacts_dir),
        names_file=path_setting("NAMES_FILE", defaults.names_file),
        individual_message_file=path_setting("INDIVIDUAL_MESSAGE_FILE", defaults.individual_message_file),
        group_message_file=path_setting("GROUP_MESSAGE_FILE", defaults.group_message_file),
        output_file=path_setting("OUTPUT_FILE", defaults.output_file),
    )
