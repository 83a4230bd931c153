"""Tests for casebook.documents — loader, per-document checks and corpus validation."""

import json

import pytest

from casebook.documents.loader import UseCaseLoader
from casebook.documents.validator import CorpusValidator, ValidationReport, validate_document
from casebook.skills.registry import SkillRegistry
from conftest import make_use_case


def _codes(issues):
    return [i["code"] for i in issues]


def _write(root, name, content):
    path = root / name
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


# ------------------------------------------------------------------
# Loader
# ------------------------------------------------------------------

class TestUseCaseLoader:

    def test_list_paths_skips_readme_and_hidden(self, content_dir):
        _write(content_dir, ".drafts/wip.md", make_use_case(slug="wip"))
        _write(content_dir, "nested/kafka-setup.md", make_use_case(slug="kafka-setup"))
        paths = UseCaseLoader(str(content_dir)).list_paths()
        assert [p.name for p in paths] == [
            "build-mcp-server.md",
            "merge-pdf-reports.md",
            "kafka-setup.md",
        ]

    def test_load(self, content_dir):
        doc = UseCaseLoader(str(content_dir)).load(content_dir / "build-mcp-server.md")
        assert doc["slug"] == "build-mcp-server"
        assert doc["header"]["category"] == "development"
        assert "## The Solution" in doc["body"]

    def test_list_documents_skips_broken(self, content_dir):
        _write(content_dir, "broken.md", "---\ntitle: [nope\n---\n")
        docs = UseCaseLoader(str(content_dir)).list_documents()
        assert sorted(d["slug"] for d in docs) == ["build-mcp-server", "merge-pdf-reports"]

    def test_slug_falls_back_to_stem(self, tmp_path):
        _write(tmp_path, "untitled.md", "---\ntitle: x\n---\n")
        assert UseCaseLoader(str(tmp_path)).load(tmp_path / "untitled.md")["slug"] == "untitled"

    def test_missing_dir(self, tmp_path):
        assert UseCaseLoader(str(tmp_path / "nope")).list_paths() == []


# ------------------------------------------------------------------
# Single document checks
# ------------------------------------------------------------------

class TestValidateDocument:

    def test_valid_document_has_no_issues(self, tmp_path):
        path = str(tmp_path / "build-mcp-server.md")
        assert validate_document(path, make_use_case()) == []

    def test_missing_category_names_field(self, tmp_path):
        content = make_use_case().replace("category: development\n", "")
        issues = validate_document(str(tmp_path / "build-mcp-server.md"), content)
        assert _codes(issues) == ["missing-required-field"]
        assert issues[0]["field"] == "category"
        assert issues[0]["severity"] == "error"
        assert "category" in issues[0]["message"]

    def test_missing_frontmatter(self, tmp_path):
        issues = validate_document(str(tmp_path / "x.md"), "# Just a heading\n")
        assert _codes(issues) == ["missing-frontmatter"]

    def test_invalid_frontmatter(self, tmp_path):
        issues = validate_document(str(tmp_path / "x.md"), "---\ntitle: [x\n---\n")
        assert _codes(issues) == ["invalid-frontmatter"]

    def test_empty_frontmatter_reports_every_field(self, tmp_path):
        body = make_use_case().split("---\n", 2)[2]
        issues = validate_document(str(tmp_path / "x.md"), "---\n---\n" + body)
        missing = [i["field"] for i in issues if i["code"] == "missing-required-field"]
        assert missing == ["title", "slug", "description", "skills", "category", "tags"]

    def test_empty_values(self, tmp_path):
        content = make_use_case(title="", skills=()).replace("skills:\n", "skills: []\n")
        issues = validate_document(str(tmp_path / "build-mcp-server.md"), content)
        empty = sorted(i["field"] for i in issues if i["code"] == "empty-field")
        assert empty == ["skills", "title"]

    def test_null_category_is_empty(self, tmp_path):
        content = make_use_case().replace("category: development", "category:")
        issues = validate_document(str(tmp_path / "build-mcp-server.md"), content)
        assert [(i["code"], i["field"]) for i in issues] == [("empty-field", "category")]

    def test_empty_tags_allowed(self, tmp_path):
        content = make_use_case().replace("tags: [automation, agents]", "tags: []")
        assert validate_document(str(tmp_path / "build-mcp-server.md"), content) == []

    def test_skills_must_be_list_of_strings(self, tmp_path):
        content = make_use_case().replace("skills:\n  - mcp-builder\n", "skills: mcp-builder\n")
        issues = validate_document(str(tmp_path / "build-mcp-server.md"), content)
        assert [(i["code"], i["field"]) for i in issues] == [("invalid-type", "skills")]

    def test_non_string_list_items(self, tmp_path):
        content = make_use_case(skills=("mcp-builder", "42"))
        content = content.replace("  - 42", "  - 42\n  - ''")
        issues = validate_document(str(tmp_path / "build-mcp-server.md"), content)
        assert [(i["code"], i["field"]) for i in issues] == [("invalid-type", "skills")]

    def test_title_must_be_string(self, tmp_path):
        content = make_use_case().replace('title: "Build an MCP Server"', "title: 2024")
        issues = validate_document(str(tmp_path / "build-mcp-server.md"), content)
        assert [(i["code"], i["field"]) for i in issues] == [("invalid-type", "title")]

    @pytest.mark.parametrize("slug", ["Build-MCP", "build_mcp", "build--mcp", "-build", "build mcp"])
    def test_invalid_slug(self, tmp_path, slug):
        content = make_use_case().replace("slug: build-mcp-server", f"slug: '{slug}'")
        issues = validate_document(str(tmp_path / f"{slug}.md"), content)
        assert "invalid-slug" in _codes(issues)

    def test_slug_filename_mismatch_is_warning(self, tmp_path):
        issues = validate_document(str(tmp_path / "mcp.md"), make_use_case())
        assert _codes(issues) == ["slug-filename-mismatch"]
        assert issues[0]["severity"] == "warning"

    def test_unknown_category(self, tmp_path):
        issues = validate_document(
            str(tmp_path / "build-mcp-server.md"), make_use_case(),
            allowed_categories=["documents", "devops"],
        )
        assert _codes(issues) == ["unknown-category"]
        assert "devops" in issues[0]["message"]

    def test_known_category(self, tmp_path):
        issues = validate_document(
            str(tmp_path / "build-mcp-server.md"), make_use_case(),
            allowed_categories=["development"],
        )
        assert issues == []

    def test_unknown_skill(self, tmp_path, skills_dir):
        registry = SkillRegistry(str(skills_dir))
        content = make_use_case(skills=("mcp-builder", "kafka-setup"))
        issues = validate_document(str(tmp_path / "build-mcp-server.md"), content, skill_registry=registry)
        assert _codes(issues) == ["unknown-skill"]
        assert "kafka-setup" in issues[0]["message"]

    def test_skill_check_skipped_without_registry_dir(self, tmp_path):
        registry = SkillRegistry(str(tmp_path / "no-skills"))
        content = make_use_case(skills=("anything",))
        issues = validate_document(str(tmp_path / "build-mcp-server.md"), content, skill_registry=registry)
        assert issues == []

    def test_broken_relative_link(self, tmp_path):
        (tmp_path / "skills" / "mcp-builder").mkdir(parents=True)
        (tmp_path / "skills" / "mcp-builder" / "SKILL.md").write_text("x", encoding="utf-8")
        content = make_use_case() + (
            "\nSee [skill](skills/mcp-builder/SKILL.md#usage), "
            "[missing](skills/kafka/SKILL.md), [web](https://example.com), "
            "[top](#the-problem), [mail](mailto:a@b.c).\n"
        )
        issues = validate_document(str(tmp_path / "build-mcp-server.md"), content)
        assert _codes(issues) == ["broken-link"]
        assert "skills/kafka/SKILL.md" in issues[0]["message"]

    def test_broken_reference_link(self, tmp_path):
        content = make_use_case() + "\nSee [the skill][mcp].\n\n[mcp]: skills/missing/SKILL.md\n"
        issues = validate_document(str(tmp_path / "build-mcp-server.md"), content)
        assert _codes(issues) == ["broken-link"]
        assert "skills/missing/SKILL.md" in issues[0]["message"]

    def test_bom_prefixed_document_is_valid(self, tmp_path):
        path = str(tmp_path / "build-mcp-server.md")
        assert validate_document(path, "\ufeff" + make_use_case()) == []

    def test_missing_section_is_warning(self, tmp_path):
        content = make_use_case().replace("## Real-World Example\n", "")
        issues = validate_document(str(tmp_path / "build-mcp-server.md"), content)
        assert _codes(issues) == ["section-missing"]
        assert issues[0]["severity"] == "warning"

    def test_section_order_is_warning(self, tmp_path):
        content = make_use_case()
        content = content.replace("## The Problem", "## TMP").replace("## The Solution", "## The Problem")
        content = content.replace("## TMP", "## The Solution")
        issues = validate_document(str(tmp_path / "build-mcp-server.md"), content)
        assert _codes(issues) == ["section-order"]
        assert issues[0]["severity"] == "warning"


# ------------------------------------------------------------------
# Corpus validation
# ------------------------------------------------------------------

class TestCorpusValidator:

    def test_valid_corpus(self, content_dir, skills_dir):
        validator = CorpusValidator(str(content_dir), SkillRegistry(str(skills_dir)))
        report = validator.validate()
        assert report.ok
        assert report.documents_checked == 2
        assert report.issues == []

    def test_duplicate_slug(self, content_dir):
        _write(content_dir, "copy/build-mcp-server.md", make_use_case())
        report = CorpusValidator(str(content_dir)).validate()

        assert not report.ok
        dupes = [i for i in report.errors if i["code"] == "duplicate-slug"]
        assert len(dupes) == 1
        assert "build-mcp-server" in dupes[0]["message"]
        assert dupes[0]["path"].endswith("copy/build-mcp-server.md")
        assert str(content_dir / "build-mcp-server.md") in dupes[0]["message"]

    def test_duplicate_slug_across_different_files(self, tmp_path):
        _write(tmp_path, "a.md", make_use_case())
        _write(tmp_path, "b.md", make_use_case())
        report = CorpusValidator(str(tmp_path)).validate()
        assert "duplicate-slug" in report.codes()

    def test_missing_category_fails_corpus(self, content_dir):
        _write(content_dir, "no-category.md",
               make_use_case(slug="no-category").replace("category: development\n", ""))
        report = CorpusValidator(str(content_dir)).validate()
        assert not report.ok
        assert [(i["code"], i["field"]) for i in report.errors] == [("missing-required-field", "category")]

    def test_category_enum(self, content_dir):
        report = CorpusValidator(str(content_dir), allowed_categories=["development"]).validate()
        assert report.codes() == ["unknown-category"]

    def test_validate_paths_subset(self, content_dir):
        report = CorpusValidator(str(content_dir)).validate_paths([content_dir / "merge-pdf-reports.md"])
        assert report.documents_checked == 1
        assert report.ok

    def test_unreadable_file(self, tmp_path):
        path = tmp_path / "latin1.md"
        path.write_bytes(b"---\ntitle: caf\xe9\n---\n")
        report = CorpusValidator(str(tmp_path)).validate()
        assert report.codes() == ["invalid-frontmatter"]


class TestValidationReport:

    def _report(self):
        return ValidationReport(3, [
            {"code": "duplicate-slug", "severity": "error", "path": "b.md",
             "field": "slug", "message": "duplicate slug 'x'"},
            {"code": "section-missing", "severity": "warning", "path": "c.md",
             "field": None, "message": "missing section '## The Problem'"},
        ])

    def test_errors_and_warnings(self):
        report = self._report()
        assert len(report.errors) == 1
        assert len(report.warnings) == 1
        assert not report.ok

    def test_to_dict(self):
        data = json.loads(self._report().to_json())
        assert data["ok"] is False
        assert data["documents_checked"] == 3
        assert data["error_count"] == 1
        assert data["warning_count"] == 1

    def test_format_text(self):
        text = self._report().format_text()
        lines = text.splitlines()
        assert lines[0] == "b.md: error: duplicate-slug [slug]: duplicate slug 'x'"
        assert lines[1].startswith("c.md: warning: section-missing: ")
        assert lines[-1] == "3 documents checked, 1 errors, 1 warnings"

    def test_empty_report_ok(self):
        assert ValidationReport().ok
