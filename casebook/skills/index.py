"""Generates skills/index.json from all SKILL.md files."""

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from casebook.skills.registry import SkillRegistry

logger = logging.getLogger(__name__)

INDEX_FILE = "index.json"


def isoformat_utc(now: datetime) -> str:
    """ISO-8601 in UTC with millisecond precision and a Z suffix."""
    now = now.astimezone(timezone.utc)
    return now.strftime("%Y-%m-%dT%H:%M:%S.") + f"{now.microsecond // 1000:03d}Z"


def build_index(registry: SkillRegistry, now: Optional[datetime] = None) -> dict:
    """Build the skills index document from a registry."""
    entries = []
    categories = set()

    for skill in registry.list_all():
        entries.append({
            "name": skill["name"],
            "slug": skill["slug"],
            "description": skill["description"],
            "category": skill["category"],
            "tags": skill["tags"],
        })
        if skill["category"]:
            categories.add(skill["category"])

    return {
        "skills": entries,
        "categories": sorted(categories),
        "updatedAt": isoformat_utc(now or datetime.now(timezone.utc)),
    }


def write_json(data: dict, path) -> Path:
    """Write pretty-printed JSON with a trailing newline."""
    out_path = Path(path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(json.dumps(data, ensure_ascii=False, indent=2) + "\n", encoding="utf-8")
    return out_path


def write_index(index: dict, path) -> Path:
    """Write the skills index to path."""
    out_path = write_json(index, path)
    logger.info(
        "Generated %s with %d skills and %d categories",
        out_path.name, len(index["skills"]), len(index["categories"]),
    )
    return out_path
