"""Shared pytest fixtures for casebook tests."""

import pytest


USE_CASE_TEMPLATE = """\
---
title: "{title}"
slug: {slug}
description: "{description}"
skills:
{skills}
category: {category}
tags: [automation, agents]
---

## The Problem
Teams lose hours every week doing this by hand.

## The Solution
Ask the agent to use the skill.

## Step-by-Step Walkthrough
1. Describe the task.
2. Review the output.

## Real-World Example
A five-person team shipped in a day.
"""

SKILL_TEMPLATE = """\
---
name: {name}
description: >-
  {description}
  across multiple lines.
metadata:
  category: {category}
tags: [{tags}]
---

# {name}

Instructions go here.
"""


def make_use_case(
    slug="build-mcp-server",
    title="Build an MCP Server",
    description="Scaffold an MCP server with an agent",
    skills=("mcp-builder",),
    category="development",
):
    skills_yaml = "\n".join(f"  - {s}" for s in skills)
    return USE_CASE_TEMPLATE.format(
        title=title, slug=slug, description=description,
        skills=skills_yaml, category=category,
    )


def make_skill(name, description="Does a thing", category="development", tags="python, cli"):
    return SKILL_TEMPLATE.format(name=name, description=description, category=category, tags=tags)


@pytest.fixture(autouse=True)
def no_casebook_env(monkeypatch):
    """Ensure no ambient CASEBOOK_* settings leak into tests."""
    for var in (
        "CASEBOOK_CONTENT_DIR",
        "CASEBOOK_SKILLS_DIR",
        "CASEBOOK_CATEGORIES",
        "CASEBOOK_WATCH_INTERVAL",
        "CASEBOOK_LOG_LEVEL",
    ):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def skills_dir(tmp_path):
    """A skills root with two valid skills and one directory lacking SKILL.md."""
    root = tmp_path / "skills"
    for name, category in (("mcp-builder", "development"), ("pdf-merge-split", "documents")):
        (root / name).mkdir(parents=True)
        (root / name / "SKILL.md").write_text(make_skill(name, category=category), encoding="utf-8")
    (root / "no-skill-file").mkdir()
    return root


@pytest.fixture
def content_dir(tmp_path):
    """A use-case root with two valid documents and a README."""
    root = tmp_path / "use-cases"
    root.mkdir()
    (root / "build-mcp-server.md").write_text(make_use_case(), encoding="utf-8")
    (root / "merge-pdf-reports.md").write_text(
        make_use_case(
            slug="merge-pdf-reports",
            title="Merge PDF Reports",
            description="Combine monthly reports into one PDF",
            skills=("pdf-merge-split",),
            category="documents",
        ),
        encoding="utf-8",
    )
    (root / "README.md").write_text("# Use cases\n", encoding="utf-8")
    return root
