"""Schema registry, field rules and the validation engine.

These are the contracts a feed is checked against:
- `schemas` declares every known file (required/optional fields, key field).
- `rules` holds the named field predicates and the field -> rules mapping.
- `validate` turns both into error/warning reports without raising.
"""

from __future__ import annotations

from gtfs_engine.models.rules import FIELD_VALIDATIONS, Rule, check, describe_route_type
from gtfs_engine.models.schemas import GTFS_SPEC, FeedSpec, TableSchema
from gtfs_engine.models.validate import (
    ValidationIssue,
    ValidationReport,
    Validator,
    validate_feed,
    validate_file,
)

__all__ = [
    "FIELD_VALIDATIONS",
    "GTFS_SPEC",
    "FeedSpec",
    "Rule",
    "TableSchema",
    "ValidationIssue",
    "ValidationReport",
    "Validator",
    "check",
    "describe_route_type",
    "validate_feed",
    "validate_file",
]
