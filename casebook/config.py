"""
Casebook configuration — environment variables (optionally from .env).

  CASEBOOK_CONTENT_DIR     use-case documents root   (default: use-cases)
  CASEBOOK_SKILLS_DIR      skills root               (default: skills)
  CASEBOOK_CATEGORIES      comma-separated category enum (empty: no enum)
  CASEBOOK_WATCH_INTERVAL  watch poll interval, seconds (default: 2.0)
  CASEBOOK_LOG_LEVEL       logging level              (default: INFO)
"""

import logging
import os
from typing import List, Optional

from dotenv import find_dotenv, load_dotenv

logger = logging.getLogger(__name__)


def _split_csv(raw: str) -> List[str]:
    return [item.strip() for item in raw.split(",") if item.strip()]


class Settings:
    """Resolved runtime settings."""

    def __init__(
        self,
        content_dir: Optional[str] = None,
        skills_dir: Optional[str] = None,
        categories: Optional[List[str]] = None,
        watch_interval: Optional[float] = None,
        log_level: Optional[str] = None,
    ):
        self.content_dir = content_dir or os.getenv("CASEBOOK_CONTENT_DIR", "use-cases")
        self.skills_dir = skills_dir or os.getenv("CASEBOOK_SKILLS_DIR", "skills")
        if categories is None:
            categories = _split_csv(os.getenv("CASEBOOK_CATEGORIES", ""))
        self.categories = categories
        if watch_interval is None:
            raw_interval = os.getenv("CASEBOOK_WATCH_INTERVAL", "2.0")
            try:
                watch_interval = float(raw_interval)
            except ValueError:
                logger.warning("Invalid CASEBOOK_WATCH_INTERVAL=%r, using 2.0", raw_interval)
                watch_interval = 2.0
        self.watch_interval = watch_interval
        self.log_level = (log_level or os.getenv("CASEBOOK_LOG_LEVEL", "INFO")).upper()

    def __repr__(self):
        return (
            f"Settings(content_dir={self.content_dir!r}, skills_dir={self.skills_dir!r}, "
            f"categories={self.categories!r}, watch_interval={self.watch_interval!r})"
        )


def load_settings(dotenv_path: Optional[str] = None, **overrides) -> Settings:
    """Load .env (default: nearest one from the working directory, without
    overriding the real environment) and build Settings."""
    load_dotenv(dotenv_path or find_dotenv(usecwd=True))
    return Settings(**overrides)
