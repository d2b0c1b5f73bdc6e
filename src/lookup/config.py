from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel

ENV_PREFIX = "VISACHECK_"


class Settings(BaseModel):
    """
    Where reference data comes from and how the lookup reports what it does.
    Unset data paths fall back to the files bundled with the package.
    """

    requirements_path: Optional[Path] = None
    countries_path: Optional[Path] = None
    holdings_path: Optional[Path] = None
    links_path: Optional[Path] = None
    event_log_path: Optional[Path] = None
    log_level: str = "WARNING"


def _path(name: str) -> Optional[Path]:
    value = os.getenv(ENV_PREFIX + name, "").strip()
    return Path(value) if value else None


def load_settings(use_dotenv: bool = True) -> Settings:
    if use_dotenv:
        load_dotenv()
    return Settings(
        requirements_path=_path("REQUIREMENTS_PATH"),
        countries_path=_path("COUNTRIES_PATH"),
        holdings_path=_path("HOLDINGS_PATH"),
        links_path=_path("LINKS_PATH"),
        event_log_path=_path("EVENT_LOG_PATH"),
        log_level=os.getenv(ENV_PREFIX + "LOG_LEVEL", "WARNING").upper(),
    )


def log_level(name: str) -> int:
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else logging.WARNING


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=log_level(settings.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
