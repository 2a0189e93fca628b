"""Records produced by the cleaner, parser and comparator.

Everything here is a frozen dataclass: built once per call, never mutated,
safe to hand to any number of readers.
"""

from __future__ import annotations

import enum
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

NOT_CONFIGURED = "NOT CONFIGURED"
NOT_IN_BASELINE = "NOT IN BASELINE"


class Severity(str, enum.Enum):
    """How much a deviation matters."""

    CRITICAL = "critical"
    WARNING = "warning"
    INFO = "info"


class DeviationKind(str, enum.Enum):
    """Why a deviation was recorded."""

    MISSING = "missing"
    DEVIATED = "deviated"
    EXTRA = "extra"


class ItemStatus(str, enum.Enum):
    """Outcome of a single compared line, as shown in the flat table."""

    COMPLIANT = "compliant"
    DEVIATED = "deviated"
    MISSING = "missing"
    EXTRA = "extra"


@dataclass(frozen=True)
class ConfigLine:
    """A classified line of configuration within one section."""

    text: str
    section: str
    intent: str
    normalized: str
    is_variable: bool = False
    required: bool = False

    @property
    def match_key(self) -> tuple[str, str]:
        """Key used to locate the counterpart line on the other side.

        Only the prefix of the normalized value is used, so that a line with a
        different value is still found and reported as deviated.
        """
        return self.intent, self.normalized.split(":", 1)[0]


@dataclass(frozen=True)
class DeviationRecord:
    """A baseline expectation that was not met, or an unexpected addition."""

    section: str
    intent: str
    kind: DeviationKind
    description: str
    expected: str
    actual: str
    severity: Severity
    is_variable: bool = False


@dataclass(frozen=True)
class SectionStats:
    """Per-section breakdown of baseline outcomes."""

    compliant: int = 0
    deviated: int = 0
    missing: int = 0


@dataclass(frozen=True)
class ComparisonItem:
    """One row of the flat result table."""

    section: str
    intent: str
    expected: str
    actual: str
    status: ItemStatus

    @property
    def key(self) -> str:
        return f"{self.section}::{self.intent}"


@dataclass(frozen=True)
class ComparisonResult:
    """Outcome of comparing an actual configuration against a baseline."""

    compliant: int = 0
    deviated: int = 0
    missing: int = 0
    extra: int = 0
    deviations: tuple[DeviationRecord, ...] = ()
    section_stats: Mapping[str, SectionStats] = field(
        default_factory=lambda: MappingProxyType({})
    )
    items: tuple[ComparisonItem, ...] = ()

    @property
    def total(self) -> int:
        """Number of baseline lines that took part in the comparison."""
        return self.compliant + self.deviated + self.missing

    @property
    def compliance_score(self) -> float:
        """Percentage of baseline lines found compliant (100.0 when none)."""
        if self.total == 0:
            return 100.0
        return round(self.compliant / self.total * 100, 1)

    def to_records(self) -> list[dict[str, str]]:
        """Flatten the result into rows for tabular display."""
        return [
            {
                "key": item.key,
                "expected": item.expected,
                "actual": item.actual,
                "status": item.status.value,
            }
            for item in self.items
        ]


@dataclass(frozen=True)
class ProcessingResult:
    """A cleaned configuration with a few facts about it."""

    cleaned: str
    line_count: int
    sections: tuple[str, ...]
    duration_ms: float


@dataclass(frozen=True)
class BatchInfo:
    """A contiguous line range of a larger configuration (1-based, inclusive)."""

    index: int
    total: int
    start_line: int
    end_line: int
    content: str


@dataclass(frozen=True)
class ConfigStats:
    """Lightweight statistics about a configuration."""

    total_lines: int
    command_lines: int
    interfaces: int
    routing_protocols: tuple[str, ...]
    access_lists: int


@dataclass(frozen=True)
class ValidationReport:
    """Structural checks on a configuration. Warnings never block processing."""

    is_valid: bool
    errors: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()
