"""Environment-driven settings."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from shivvaas.models import Precision

_ROOT = Path(__file__).parent.parent.parent


@dataclass(frozen=True)
class Settings:
    ephemeris_dir: Path  # Where skyfield looks for (and downloads) kernels
    ephemeris_file: str  # JPL kernel name
    precision: Precision
    lang: str
    log_level: str


def load_settings(dotenv: bool = True) -> Settings:
    """Read settings from the environment.

    Args:
        dotenv: Load a ``.env`` file first (values already in the environment win).

    Returns:
        Settings populated from ``SHIVVAAS_*`` variables, with defaults for anything unset.
    """
    if dotenv:
        load_dotenv()
    return Settings(
        ephemeris_dir=Path(
            os.environ.get("SHIVVAAS_EPHEMERIS_DIR", str(_ROOT / "resources"))
        ),
        ephemeris_file=os.environ.get("SHIVVAAS_EPHEMERIS_FILE", "de421.bsp"),
        precision=Precision(os.environ.get("SHIVVAAS_PRECISION", "series").lower()),
        lang=os.environ.get("SHIVVAAS_LANG", "en"),
        log_level=os.environ.get("SHIVVAAS_LOG_LEVEL", "WARNING").upper(),
    )


def configure_logging(level: str = "WARNING") -> None:
    """Basic console logging for applications embedding the calculator."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
