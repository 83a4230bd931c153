"""
Casebook Front Matter — YAML header codec for markdown content files.

Use-case documents and SKILL.md files both start with a YAML block
delimited by ``---`` lines, followed by a free-form markdown body.
"""

import logging
import re
from typing import List, Optional, Tuple

import yaml

logger = logging.getLogger(__name__)

_FRONTMATTER_RE = re.compile(r"\A---[ \t]*\r?\n(.*?)(?:\r?\n)?^---[ \t]*(?:\r?\n|\Z)", re.DOTALL | re.MULTILINE)

# [text](target); images (![alt](src)) are excluded by the lookbehind
_LINK_RE = re.compile(r"(?<!!)\[[^\]]*\]\(\s*<?([^)\s>]+)>?(?:\s+\"[^\"]*\")?\s*\)")

# [label]: target reference definitions (footnotes like [^1]: are not links)
_REF_DEF_RE = re.compile(r"^ {0,3}\[(?!\^)[^\]]+\]:\s*<?([^\s>]+)>?")


class FrontmatterError(ValueError):
    """Front matter block exists but cannot be read as a YAML mapping."""

    def __init__(self, message: str, path: Optional[str] = None):
        self.path = path
        super().__init__(f"{path}: {message}" if path else message)


def split_frontmatter(content: str) -> Tuple[Optional[str], str]:
    """Split raw front matter text from the markdown body.

    Returns:
        (raw_yaml, body). raw_yaml is None when there is no header block.
    """
    if content.startswith("\ufeff"):
        content = content[1:]
    match = _FRONTMATTER_RE.match(content)
    if not match:
        return None, content
    return match.group(1), content[match.end():]


def parse_frontmatter(content: str, path: Optional[str] = None) -> Tuple[dict, str]:
    """Parse YAML front matter from markdown content.

    Returns:
        (header_dict, body_string)

    Raises:
        FrontmatterError: YAML is malformed or is not a mapping.
    """
    raw, body = split_frontmatter(content)
    if raw is None:
        return {}, body

    try:
        header = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise FrontmatterError(f"invalid YAML in front matter: {e}", path) from e

    if header is None:
        return {}, body
    if not isinstance(header, dict):
        raise FrontmatterError(
            f"front matter must be a mapping, got {type(header).__name__}", path
        )
    return header, body


def dump_frontmatter(header: dict, body: str) -> str:
    """Serialize a header dict and body back into a markdown document."""
    if not header:
        return f"---\n---\n{body}"
    raw = yaml.safe_dump(
        header,
        sort_keys=False,
        allow_unicode=True,
        default_flow_style=False,
    )
    return f"---\n{raw}---\n{body}"


def split_sections(body: str) -> List[Tuple[Optional[str], str]]:
    """Split a markdown body on level-2 headings.

    Text before the first ``## `` heading is returned under a ``None`` heading.
    Headings inside fenced code blocks are ignored.
    """
    sections: List[Tuple[Optional[str], str]] = []
    current_section: Optional[str] = None
    current_lines: list = []
    in_fence = False

    for line in body.split("\n"):
        if line.lstrip().startswith(("```", "~~~")):
            in_fence = not in_fence
        if not in_fence and line.startswith("## "):
            if current_section is not None or any(ln.strip() for ln in current_lines):
                sections.append((current_section, "\n".join(current_lines)))
            current_section = line[3:].strip()
            current_lines = []
        else:
            current_lines.append(line)

    # Last section
    if current_section is not None or any(ln.strip() for ln in current_lines):
        sections.append((current_section, "\n".join(current_lines)))

    return sections


def extract_links(body: str) -> List[str]:
    """Return inline and reference-definition link targets, skipping fenced code blocks."""
    links = []
    in_fence = False
    for line in body.split("\n"):
        if line.lstrip().startswith(("```", "~~~")):
            in_fence = not in_fence
            continue
        if in_fence:
            continue
        links.extend(_LINK_RE.findall(line))
        ref = _REF_DEF_RE.match(line)
        if ref:
            links.append(ref.group(1))
    return links
