"""
Casebook Skills Registry — Indexes skills by name and directory slug.
"""

import logging
from typing import List, Optional

from casebook.skills.skill_loader import SkillLoader

logger = logging.getLogger(__name__)


class SkillRegistry:
    """Registry that indexes all skills and answers lookups for the validator."""

    def __init__(self, skills_dir: Optional[str] = None):
        self.loader = SkillLoader(skills_dir)
        self._skills: List[dict] = []
        self._index: dict = {}
        self._scan()

    @property
    def available(self) -> bool:
        """True when the skills directory exists (even if it holds no skills)."""
        return self.loader.skills_dir.is_dir()

    def _scan(self):
        """Scan skills directory and index all skills."""
        self._skills = self.loader.list_skills()
        self._index = {}
        for skill in self._skills:
            for key in (skill["name"], skill["slug"]):
                if key in self._index and self._index[key] is not skill:
                    logger.warning(
                        "Skill identifier '%s' is declared twice (%s, %s)",
                        key, self._index[key]["path"], skill["path"],
                    )
                    continue
                self._index[key] = skill

        if self._skills:
            logger.info("Skills registry: %d skills indexed", len(self._skills))
        elif self.available:
            logger.info("Skills registry: no skills found in %s", self.loader.skills_dir)

    def refresh(self):
        """Re-scan skills directory (call when skills are added/removed)."""
        self._scan()

    def exists(self, identifier: str) -> bool:
        """Whether a skill with this name or directory slug is registered."""
        return identifier in self._index

    def get(self, identifier: str) -> Optional[dict]:
        """Get skill info by name or slug."""
        return self._index.get(identifier)

    def list_all(self) -> List[dict]:
        """List all indexed skills, ordered by directory name."""
        return list(self._skills)

    def categories(self) -> List[str]:
        """Sorted, de-duplicated non-empty skill categories."""
        return sorted({s["category"] for s in self._skills if s.get("category")})
