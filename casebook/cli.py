#!/usr/bin/env python3
"""
Casebook CLI — validate, index and watch a use-case/skills content repo.

Usage:
    casebook validate [--content-dir DIR] [--skills-dir DIR] [--category C ...]
                      [--format text|json] [--strict]
    casebook index    [--skills-dir DIR] [--output PATH]
    casebook catalog  [--content-dir DIR] [--output PATH]
    casebook watch    [--content-dir DIR] [--skills-dir DIR] [--interval SECS]

Exit codes: 0 ok, 1 validation failed, 2 usage/config error.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from casebook.config import Settings, load_settings
from casebook.documents.catalog import build_catalog
from casebook.documents.loader import UseCaseLoader
from casebook.documents.validator import CorpusValidator, ValidationReport
from casebook.services.watcher import CorpusWatcher
from casebook.skills.index import INDEX_FILE, build_index, write_index, write_json
from casebook.skills.registry import SkillRegistry

logger = logging.getLogger("casebook")

EXIT_OK = 0
EXIT_INVALID = 1
EXIT_USAGE = 2

CATALOG_FILE = "catalog.json"


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="casebook",
        description="Validate and index use-case documents and skills",
    )
    parser.add_argument("--env-file", type=str, default=None, help="Path to a .env file")
    parser.add_argument("--log-level", type=str, default=None, help="Logging level (default: INFO)")
    sub = parser.add_subparsers(dest="command", required=True)

    validate = sub.add_parser("validate", help="Validate front matter across the corpus")
    validate.add_argument("--content-dir", type=str, default=None, help="Use-case documents root")
    validate.add_argument("--skills-dir", type=str, default=None, help="Skills root")
    validate.add_argument("--category", action="append", dest="categories", default=None,
                          help="Allowed category (repeatable); overrides CASEBOOK_CATEGORIES")
    validate.add_argument("--format", choices=["text", "json"], default="text",
                          help="Report format (default: text)")
    validate.add_argument("--strict", action="store_true", help="Treat warnings as failures")

    index = sub.add_parser("index", help="Generate skills/index.json from SKILL.md files")
    index.add_argument("--skills-dir", type=str, default=None, help="Skills root")
    index.add_argument("--output", type=str, default=None, help="Output path (default: <skills-dir>/index.json)")

    catalog = sub.add_parser("catalog", help="Generate a JSON catalog of use-case documents")
    catalog.add_argument("--content-dir", type=str, default=None, help="Use-case documents root")
    catalog.add_argument("--output", type=str, default=None, help="Output path (default: <content-dir>/catalog.json)")

    watch = sub.add_parser("watch", help="Re-validate whenever documents or skills change")
    watch.add_argument("--content-dir", type=str, default=None, help="Use-case documents root")
    watch.add_argument("--skills-dir", type=str, default=None, help="Skills root")
    watch.add_argument("--category", action="append", dest="categories", default=None,
                       help="Allowed category (repeatable)")
    watch.add_argument("--interval", type=float, default=None, help="Poll interval in seconds")

    return parser


def _settings_from_args(args) -> Settings:
    return load_settings(
        args.env_file,
        content_dir=getattr(args, "content_dir", None),
        skills_dir=getattr(args, "skills_dir", None),
        categories=getattr(args, "categories", None),
        watch_interval=getattr(args, "interval", None),
        log_level=args.log_level,
    )


def _emit(report: ValidationReport, fmt: str):
    if fmt == "json":
        print(report.to_json())
    else:
        print(report.format_text())


def _exit_code(report: ValidationReport, strict: bool) -> int:
    if not report.ok or (strict and report.warnings):
        return EXIT_INVALID
    return EXIT_OK


def cmd_validate(args, settings: Settings) -> int:
    if not Path(settings.content_dir).is_dir():
        logger.error("Content directory not found: %s", settings.content_dir)
        return EXIT_USAGE

    registry = SkillRegistry(settings.skills_dir)
    validator = CorpusValidator(settings.content_dir, registry, settings.categories)
    report = validator.validate()
    _emit(report, args.format)
    return _exit_code(report, args.strict)


def cmd_index(args, settings: Settings) -> int:
    registry = SkillRegistry(settings.skills_dir)
    if not registry.available:
        logger.error("Skills directory not found: %s", settings.skills_dir)
        return EXIT_USAGE

    output = args.output or str(Path(settings.skills_dir) / INDEX_FILE)
    index = build_index(registry)
    write_index(index, output)
    print(f"Generated {output} with {len(index['skills'])} skills "
          f"and {len(index['categories'])} categories")
    return EXIT_OK


def cmd_catalog(args, settings: Settings) -> int:
    if not Path(settings.content_dir).is_dir():
        logger.error("Content directory not found: %s", settings.content_dir)
        return EXIT_USAGE

    documents = UseCaseLoader(settings.content_dir).list_documents()
    output = args.output or str(Path(settings.content_dir) / CATALOG_FILE)
    catalog = build_catalog(documents)
    write_json(catalog, output)
    print(f"Generated {output} with {len(catalog['useCases'])} use cases")
    return EXIT_OK


def cmd_watch(args, settings: Settings) -> int:
    if not Path(settings.content_dir).is_dir():
        logger.error("Content directory not found: %s", settings.content_dir)
        return EXIT_USAGE

    registry = SkillRegistry(settings.skills_dir)
    validator = CorpusValidator(settings.content_dir, registry, settings.categories)
    skills_root = Path(settings.skills_dir).resolve()

    def revalidate(changed: List[Path]):
        if any(skills_root in Path(p).resolve().parents for p in changed):
            registry.refresh()
        _emit(validator.validate(), "text")

    _emit(validator.validate(), "text")
    watcher = CorpusWatcher(
        [settings.content_dir, settings.skills_dir],
        on_change=revalidate,
        check_interval=settings.watch_interval,
    )
    watcher.run()
    return EXIT_OK


COMMANDS = {
    "validate": cmd_validate,
    "index": cmd_index,
    "catalog": cmd_catalog,
    "watch": cmd_watch,
}


def main(argv: Optional[List[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    settings = _settings_from_args(args)

    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=getattr(logging, settings.log_level, logging.INFO),
    )
    return COMMANDS[args.command](args, settings)


if __name__ == "__main__":
    sys.exit(main())
