"""Use-case catalog — a JSON index of the document corpus for publishing."""

import logging
from datetime import datetime, timezone
from typing import Dict, List, Optional

from casebook.skills.index import isoformat_utc

logger = logging.getLogger(__name__)


def _str_list(value) -> List[str]:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, str) and item.strip()]


def build_catalog(documents: List[dict], now: Optional[datetime] = None) -> dict:
    """Build a catalog from loaded documents (see UseCaseLoader.list_documents).

    Returns: {useCases, categories, skills, updatedAt}
      - useCases: entries sorted by slug
      - categories: category -> [slug, ...]
      - skills: skill identifier -> [slug, ...] of documents using it
    """
    entries = []
    by_category: Dict[str, List[str]] = {}
    by_skill: Dict[str, List[str]] = {}

    for doc in documents:
        header = doc["header"]
        category = header.get("category") if isinstance(header.get("category"), str) else ""
        entries.append({
            "slug": doc["slug"],
            "title": header.get("title") or "",
            "description": header.get("description") or "",
            "category": category,
            "skills": _str_list(header.get("skills")),
            "tags": _str_list(header.get("tags")),
            "path": doc["path"],
        })

    entries.sort(key=lambda e: e["slug"])
    for entry in entries:
        if entry["category"]:
            by_category.setdefault(entry["category"], []).append(entry["slug"])
        for skill in entry["skills"]:
            by_skill.setdefault(skill, []).append(entry["slug"])

    logger.info(
        "Catalog: %d use cases, %d categories, %d referenced skills",
        len(entries), len(by_category), len(by_skill),
    )
    return {
        "useCases": entries,
        "categories": {k: by_category[k] for k in sorted(by_category)},
        "skills": {k: by_skill[k] for k in sorted(by_skill)},
        "updatedAt": isoformat_utc(now or datetime.now(timezone.utc)),
    }
