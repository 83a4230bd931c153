"""Front matter schema for use-case documents."""

import re
from enum import Enum

# Field name → expected python type
REQUIRED_FIELDS = {
    "title": str,
    "slug": str,
    "description": str,
    "skills": list,
    "category": str,
    "tags": list,
}

# Required fields that must also be non-empty (tags may be an empty list)
NON_EMPTY_FIELDS = ("title", "slug", "description", "skills", "category")

# Fields holding lists of strings
LIST_OF_STR_FIELDS = ("skills", "tags")

SLUG_RE = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")

# Body sections in their conventional order
EXPECTED_SECTIONS = (
    "The Problem",
    "The Solution",
    "Step-by-Step Walkthrough",
    "Real-World Example",
)

# Files in a content directory that are not use-case documents
SKIP_FILES = {"README.md", "index.md"}
SKIP_DIRS = {"node_modules", "_site", "dist", "build"}


class Severity(Enum):
    ERROR = "error"
    WARNING = "warning"


class IssueCode(Enum):
    MISSING_FRONTMATTER = "missing-frontmatter"
    INVALID_FRONTMATTER = "invalid-frontmatter"
    MISSING_REQUIRED_FIELD = "missing-required-field"
    EMPTY_FIELD = "empty-field"
    INVALID_TYPE = "invalid-type"
    INVALID_SLUG = "invalid-slug"
    DUPLICATE_SLUG = "duplicate-slug"
    UNKNOWN_CATEGORY = "unknown-category"
    UNKNOWN_SKILL = "unknown-skill"
    BROKEN_LINK = "broken-link"
    SECTION_MISSING = "section-missing"
    SECTION_ORDER = "section-order"
    SLUG_FILENAME_MISMATCH = "slug-filename-mismatch"


# Issue code → severity
ISSUE_SEVERITY = {code: Severity.ERROR for code in IssueCode}
ISSUE_SEVERITY.update({
    IssueCode.SECTION_MISSING: Severity.WARNING,
    IssueCode.SECTION_ORDER: Severity.WARNING,
    IssueCode.SLUG_FILENAME_MISMATCH: Severity.WARNING,
})


def is_kebab_case(slug: str) -> bool:
    return bool(SLUG_RE.match(slug))


def make_issue(code: IssueCode, path: str, message: str, field=None) -> dict:
    """Build an issue record."""
    return {
        "code": code.value,
        "severity": ISSUE_SEVERITY[code].value,
        "path": path,
        "field": field,
        "message": message,
    }
