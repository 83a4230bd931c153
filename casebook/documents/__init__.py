"""Casebook Documents — use-case loading, validation and cataloguing."""

from casebook.documents.loader import UseCaseLoader
from casebook.documents.validator import CorpusValidator, ValidationReport, validate_document
from casebook.documents.catalog import build_catalog

__all__ = [
    "UseCaseLoader",
    "CorpusValidator",
    "ValidationReport",
    "validate_document",
    "build_catalog",
]
