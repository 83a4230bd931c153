"""
Casebook Skills

Skills are directories holding a SKILL.md manual. Use-case documents refer to
them by name (or directory slug) in their ``skills`` front matter list.
"""

from casebook.skills.skill_loader import SkillLoader
from casebook.skills.registry import SkillRegistry
from casebook.skills.index import build_index, write_index

__all__ = ["SkillLoader", "SkillRegistry", "build_index", "write_index"]
