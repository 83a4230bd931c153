"""
Casebook Skills — SKILL.md loader

Each skill lives in its own directory under the skills root and is described
by a SKILL.md file with YAML frontmatter (name, description, category, tags).
"""

import logging
import re
from pathlib import Path
from typing import List, Optional

from casebook.frontmatter import FrontmatterError, parse_frontmatter

logger = logging.getLogger(__name__)

SKILL_FILE = "SKILL.md"


class SkillLoader:
    """Load and parse SKILL.md files from a skills directory."""

    def __init__(self, skills_dir: Optional[str] = None):
        self.skills_dir = Path(skills_dir) if skills_dir else Path("skills")

    def list_skill_dirs(self) -> List[Path]:
        """Return skill directories (direct children of skills_dir), sorted by name."""
        if not self.skills_dir.is_dir():
            return []
        return sorted(
            (p for p in self.skills_dir.iterdir() if p.is_dir() and not p.name.startswith(".")),
            key=lambda p: p.name,
        )

    def load_skill(self, skill_dir: Path) -> Optional[dict]:
        """Load a skill from a directory containing SKILL.md.

        Returns:
            Dict with name, slug, description, category, tags, path, body,
            or None when SKILL.md is missing, unparseable or has no name.
        """
        skill_md = Path(skill_dir) / SKILL_FILE
        if not skill_md.is_file():
            return None

        try:
            content = skill_md.read_text(encoding="utf-8")
            header, body = parse_frontmatter(content, path=str(skill_md))
        except (OSError, UnicodeDecodeError, FrontmatterError) as e:
            logger.warning("Failed to load skill %s: %s", skill_md, e)
            return None

        name = self._as_text(header.get("name"))
        if not name:
            logger.debug("Skipping %s: no name in frontmatter", skill_md)
            return None

        metadata = header.get("metadata")
        if not isinstance(metadata, dict):
            metadata = {}

        category = header.get("category") or metadata.get("category") or ""
        tags = header.get("tags")
        if tags is None:
            tags = metadata.get("tags", [])

        return {
            "name": name,
            "slug": Path(skill_dir).name,
            "description": self._fold(self._as_text(header.get("description"))),
            "category": self._as_text(category),
            "tags": self._as_list(tags),
            "path": str(skill_md),
            "body": body,
        }

    def list_skills(self) -> List[dict]:
        """Load every skill under skills_dir, ordered by directory name."""
        skills = []
        for skill_dir in self.list_skill_dirs():
            skill = self.load_skill(skill_dir)
            if skill:
                skills.append(skill)
        return skills

    def _as_text(self, value) -> str:
        """Coerce a scalar frontmatter value into a stripped string."""
        if value is None:
            return ""
        return str(value).strip()

    def _fold(self, text: str) -> str:
        """Collapse multiline (>- or |) descriptions onto one line."""
        return re.sub(r"\s+", " ", text).strip()

    def _as_list(self, value) -> List[str]:
        """Normalize tags given as a YAML list or a comma-separated string."""
        if not value:
            return []
        if isinstance(value, str):
            value = value.split(",")
        if not isinstance(value, (list, tuple)):
            value = [value]
        cleaned = []
        seen = set()
        for item in value:
            token = str(item).strip().strip("\"'")
            if not token or token in seen:
                continue
            seen.add(token)
            cleaned.append(token)
        return cleaned
