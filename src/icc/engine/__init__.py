"""Cleaner, intent parser and comparator for IOS-style configurations."""

from icc.engine.cleaner import (
    clean_configuration,
    config_stats,
    process_configuration,
    split_into_batches,
    validate_config,
)
from icc.engine.comparator import DEFAULT_ALLOWED_VARIABLES, compare_by_intent, severity_class
from icc.engine.engine import ComplianceEngine
from icc.engine.models import (
    ComparisonResult,
    ConfigLine,
    DeviationKind,
    DeviationRecord,
    Severity,
)
from icc.engine.parser import parse_configuration
from icc.engine.sections import format_section_name

__all__ = [
    "DEFAULT_ALLOWED_VARIABLES",
    "ComparisonResult",
    "ComplianceEngine",
    "ConfigLine",
    "DeviationKind",
    "DeviationRecord",
    "Severity",
    "clean_configuration",
    "compare_by_intent",
    "config_stats",
    "format_section_name",
    "parse_configuration",
    "process_configuration",
    "severity_class",
    "split_into_batches",
    "validate_config",
]
