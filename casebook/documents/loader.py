"""
Casebook Documents — Use-case document loader

Use-case documents are markdown files with YAML frontmatter (title, slug,
description, skills, category, tags) followed by narrative body sections.
"""

import logging
from pathlib import Path
from typing import List, Optional

from casebook.documents.schema import SKIP_DIRS, SKIP_FILES
from casebook.frontmatter import FrontmatterError, parse_frontmatter

logger = logging.getLogger(__name__)


class UseCaseLoader:
    """Discover and parse use-case markdown documents."""

    def __init__(self, content_dir: Optional[str] = None):
        self.content_dir = Path(content_dir) if content_dir else Path("use-cases")

    def list_paths(self) -> List[Path]:
        """All document paths under content_dir, sorted."""
        if not self.content_dir.is_dir():
            return []

        paths = []
        for md_file in self.content_dir.rglob("*.md"):
            rel_parts = md_file.relative_to(self.content_dir).parts
            if any(part.startswith(".") or part in SKIP_DIRS for part in rel_parts[:-1]):
                continue
            if md_file.name in SKIP_FILES or not md_file.is_file():
                continue
            paths.append(md_file)
        return sorted(paths)

    def load(self, path) -> dict:
        """Load a single document.

        Returns:
            Dict with 'path', 'slug', 'header' (parsed YAML), 'body' (markdown).

        Raises:
            FrontmatterError: the header block is not a valid YAML mapping.
            OSError: the file cannot be read.
        """
        path = Path(path)
        content = path.read_text(encoding="utf-8")
        header, body = parse_frontmatter(content, path=str(path))
        slug = header.get("slug")
        return {
            "path": str(path),
            "slug": slug if isinstance(slug, str) and slug else path.stem,
            "header": header,
            "body": body,
        }

    def list_documents(self) -> List[dict]:
        """Load every document, skipping (and logging) unreadable ones."""
        documents = []
        for path in self.list_paths():
            try:
                documents.append(self.load(path))
            except (OSError, UnicodeDecodeError, FrontmatterError) as e:
                logger.warning("Failed to load document %s: %s", path, e)
        logger.info("Loaded %d use-case documents from %s", len(documents), self.content_dir)
        return documents
