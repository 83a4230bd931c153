"""
Casebook Validator — Front matter and body checks across a use-case corpus.

Per-document checks cover schema completeness, field types, slug format,
category/skill references, relative links and section order. Corpus-level
checks cover slug uniqueness.
"""

import json
import logging
import re
from pathlib import Path
from typing import Iterable, List, Optional, Tuple
from urllib.parse import unquote

from casebook.documents.schema import (
    EXPECTED_SECTIONS,
    LIST_OF_STR_FIELDS,
    NON_EMPTY_FIELDS,
    REQUIRED_FIELDS,
    IssueCode,
    Severity,
    is_kebab_case,
    make_issue,
)
from casebook.documents.loader import UseCaseLoader
from casebook.frontmatter import (
    FrontmatterError,
    extract_links,
    parse_frontmatter,
    split_frontmatter,
    split_sections,
)

logger = logging.getLogger(__name__)

_SCHEME_RE = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.\-]*:")


class ValidationReport:
    """Outcome of validating a set of documents."""

    def __init__(self, documents_checked: int = 0, issues: Optional[List[dict]] = None):
        self.documents_checked = documents_checked
        self.issues: List[dict] = issues or []

    @property
    def errors(self) -> List[dict]:
        return [i for i in self.issues if i["severity"] == Severity.ERROR.value]

    @property
    def warnings(self) -> List[dict]:
        return [i for i in self.issues if i["severity"] == Severity.WARNING.value]

    @property
    def ok(self) -> bool:
        return not self.errors

    def codes(self) -> List[str]:
        """Issue codes in report order (handy for assertions and summaries)."""
        return [i["code"] for i in self.issues]

    def to_dict(self) -> dict:
        return {
            "ok": self.ok,
            "documents_checked": self.documents_checked,
            "error_count": len(self.errors),
            "warning_count": len(self.warnings),
            "issues": list(self.issues),
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False, indent=2)

    def format_text(self) -> str:
        """Human-readable report, one line per issue plus a summary line."""
        lines = []
        for issue in self.issues:
            field = f" [{issue['field']}]" if issue.get("field") else ""
            lines.append(
                f"{issue['path']}: {issue['severity']}: {issue['code']}{field}: {issue['message']}"
            )
        lines.append(
            f"{self.documents_checked} documents checked, "
            f"{len(self.errors)} errors, {len(self.warnings)} warnings"
        )
        return "\n".join(lines)


# ------------------------------------------------------------------
# Per-document checks
# ------------------------------------------------------------------

def _check_fields(header: dict, path: str, issues: List[dict]):
    for field, expected_type in REQUIRED_FIELDS.items():
        if field not in header:
            issues.append(make_issue(
                IssueCode.MISSING_REQUIRED_FIELD, path,
                f"missing required field '{field}'", field,
            ))
            continue

        value = header[field]
        if value is None:
            if field in NON_EMPTY_FIELDS:
                issues.append(make_issue(IssueCode.EMPTY_FIELD, path, f"field '{field}' is empty", field))
            else:
                issues.append(make_issue(
                    IssueCode.INVALID_TYPE, path, f"field '{field}' must be a list", field,
                ))
            continue

        if not isinstance(value, expected_type):
            issues.append(make_issue(
                IssueCode.INVALID_TYPE, path,
                f"field '{field}' must be a {'list' if expected_type is list else 'string'}, "
                f"got {type(value).__name__}",
                field,
            ))
            continue

        if field in LIST_OF_STR_FIELDS:
            bad = [item for item in value if not isinstance(item, str) or not item.strip()]
            if bad:
                issues.append(make_issue(
                    IssueCode.INVALID_TYPE, path,
                    f"field '{field}' must contain only non-empty strings, got {bad!r}",
                    field,
                ))
                continue

        if field in NON_EMPTY_FIELDS:
            empty = not value.strip() if isinstance(value, str) else not value
            if empty:
                issues.append(make_issue(IssueCode.EMPTY_FIELD, path, f"field '{field}' is empty", field))


def _check_slug(header: dict, path: str, issues: List[dict]):
    slug = header.get("slug")
    if not isinstance(slug, str) or not slug.strip():
        return
    if not is_kebab_case(slug):
        issues.append(make_issue(
            IssueCode.INVALID_SLUG, path, f"slug '{slug}' is not kebab-case", "slug",
        ))
    stem = Path(path).stem
    if stem != slug:
        issues.append(make_issue(
            IssueCode.SLUG_FILENAME_MISMATCH, path,
            f"slug '{slug}' does not match file name '{stem}'", "slug",
        ))


def _check_references(
    header: dict,
    path: str,
    issues: List[dict],
    allowed_categories: Optional[Iterable[str]],
    skill_registry,
):
    category = header.get("category")
    if allowed_categories and isinstance(category, str) and category.strip():
        allowed = set(allowed_categories)
        if category not in allowed:
            issues.append(make_issue(
                IssueCode.UNKNOWN_CATEGORY, path,
                f"category '{category}' is not one of: {', '.join(sorted(allowed))}",
                "category",
            ))

    if skill_registry is None or not skill_registry.available:
        return
    skills = header.get("skills")
    if not isinstance(skills, list):
        return
    for skill in skills:
        if isinstance(skill, str) and skill.strip() and not skill_registry.exists(skill):
            issues.append(make_issue(
                IssueCode.UNKNOWN_SKILL, path, f"unknown skill '{skill}'", "skills",
            ))


def _check_links(body: str, path: str, issues: List[dict]):
    base = Path(path).parent
    for target in extract_links(body):
        if target.startswith(("#", "/")) or _SCHEME_RE.match(target):
            continue
        local = unquote(target.split("#", 1)[0].split("?", 1)[0])
        if not local:
            continue
        if not (base / local).exists():
            issues.append(make_issue(
                IssueCode.BROKEN_LINK, path, f"relative link target not found: {target}",
            ))


def _check_sections(body: str, path: str, issues: List[dict]):
    headings = [h.casefold() for h, _ in split_sections(body) if h]
    positions = []
    for expected in EXPECTED_SECTIONS:
        key = expected.casefold()
        if key not in headings:
            issues.append(make_issue(
                IssueCode.SECTION_MISSING, path, f"missing section '## {expected}'",
            ))
            continue
        positions.append((headings.index(key), expected))

    found_order = [name for _, name in sorted(positions)]
    expected_order = [name for _, name in positions]
    if found_order != expected_order:
        issues.append(make_issue(
            IssueCode.SECTION_ORDER, path,
            f"sections out of order: {', '.join(found_order)} "
            f"(expected {', '.join(expected_order)})",
        ))


def _check_document(
    path: str,
    content: str,
    allowed_categories: Optional[Iterable[str]] = None,
    skill_registry=None,
) -> Tuple[List[dict], dict]:
    issues: List[dict] = []

    raw, _ = split_frontmatter(content)
    if raw is None:
        issues.append(make_issue(
            IssueCode.MISSING_FRONTMATTER, path, "document has no YAML front matter block",
        ))
        return issues, {}

    try:
        header, body = parse_frontmatter(content, path=path)
    except FrontmatterError as e:
        issues.append(make_issue(IssueCode.INVALID_FRONTMATTER, path, str(e)))
        return issues, {}

    _check_fields(header, path, issues)
    _check_slug(header, path, issues)
    _check_references(header, path, issues, allowed_categories, skill_registry)
    _check_links(body, path, issues)
    _check_sections(body, path, issues)
    return issues, header


def validate_document(
    path: str,
    content: str,
    allowed_categories: Optional[Iterable[str]] = None,
    skill_registry=None,
) -> List[dict]:
    """Validate a single document's text.

    Args:
        path: Document path (used for messages and relative link resolution).
        content: Full markdown text.
        allowed_categories: Category enum; None or empty disables the check.
        skill_registry: SkillRegistry; skill references are checked only when
            its directory exists.

    Returns:
        List of issue dicts (code, severity, path, field, message).
    """
    issues, _ = _check_document(path, content, allowed_categories, skill_registry)
    return issues


# ------------------------------------------------------------------
# Corpus validation
# ------------------------------------------------------------------

class CorpusValidator:
    """Validate every use-case document under a content directory."""

    def __init__(
        self,
        content_dir: Optional[str] = None,
        skill_registry=None,
        allowed_categories: Optional[Iterable[str]] = None,
    ):
        self.loader = UseCaseLoader(content_dir)
        self.skill_registry = skill_registry
        self.allowed_categories = list(allowed_categories) if allowed_categories else []

    @property
    def content_dir(self) -> Path:
        return self.loader.content_dir

    def validate(self) -> ValidationReport:
        """Validate the whole corpus."""
        return self.validate_paths(self.loader.list_paths())

    def validate_paths(self, paths: Iterable) -> ValidationReport:
        """Validate the given documents, including slug uniqueness among them."""
        report = ValidationReport()
        seen_slugs: dict = {}

        for path in paths:
            path = str(path)
            report.documents_checked += 1
            try:
                content = Path(path).read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as e:
                logger.warning("Failed to read %s: %s", path, e)
                report.issues.append(make_issue(
                    IssueCode.INVALID_FRONTMATTER, path, f"cannot read document: {e}",
                ))
                continue

            issues, header = _check_document(
                path, content, self.allowed_categories, self.skill_registry,
            )
            report.issues.extend(issues)

            slug = header.get("slug")
            if not isinstance(slug, str) or not slug.strip():
                continue
            if slug in seen_slugs:
                report.issues.append(make_issue(
                    IssueCode.DUPLICATE_SLUG, path,
                    f"duplicate slug '{slug}' (first declared in {seen_slugs[slug]})",
                    "slug",
                ))
            else:
                seen_slugs[slug] = path

        logger.info(
            "Validated %d documents: %d errors, %d warnings",
            report.documents_checked, len(report.errors), len(report.warnings),
        )
        return report
