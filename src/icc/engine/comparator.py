"""Intent-based comparison of a configuration against a baseline.

Lines are compared within their section only, by intent rather than by
literal text, so line order, spacing and cosmetic formatting never matter.

Matching works in two steps. A line's match key (its intent plus the
prefix of its normalized value) locates the counterpart line on the other
side. The full normalized values then decide whether the pair is compliant
or deviated.

Outcomes per baseline line:
    compliant   counterpart found with the same normalized value
    deviated    counterpart found with a different value
    missing     no counterpart in the same section

Lines on the actual side whose match key has no baseline counterpart are
reported as extra (always severity info). Lines no rule recognises
(intent 'generic') take no part in the comparison on either side.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable, Sequence
from types import MappingProxyType

import structlog

from icc.engine.models import (
    NOT_CONFIGURED,
    NOT_IN_BASELINE,
    ComparisonItem,
    ComparisonResult,
    ConfigLine,
    DeviationKind,
    DeviationRecord,
    ItemStatus,
    SectionStats,
    Severity,
)
from icc.engine.parser import parse_configuration
from icc.engine.rules import DEFAULT_RULES, GENERIC_INTENT, Rule

logger = structlog.get_logger()

DEFAULT_ALLOWED_VARIABLES: frozenset[str] = frozenset(
    {"hostname", "description", "ntp-server", "logging-host"}
)

_SEVERITY_CLASSES: dict[Severity, str] = {
    Severity.CRITICAL: "red",
    Severity.WARNING: "yellow",
    Severity.INFO: "blue",
}


def normalize_intents(intents: Iterable[str]) -> frozenset[str]:
    """Strip and lower-case intent tags, dropping empty ones."""
    return frozenset(tag for tag in (intent.strip().lower() for intent in intents) if tag)


def _severity_for(line: ConfigLine) -> Severity:
    return Severity.CRITICAL if line.required else Severity.WARNING


def _index_by_key(lines: Iterable[ConfigLine]) -> dict[tuple[str, str], list[ConfigLine]]:
    index: dict[tuple[str, str], list[ConfigLine]] = defaultdict(list)
    for line in lines:
        if line.intent != GENERIC_INTENT:
            index[line.match_key].append(line)
    return index


def _pick_counterpart(candidates: list[ConfigLine], baseline_values: set[str]) -> ConfigLine:
    """Pick the actual line a deviated baseline line is reported against.

    Prefer a candidate that does not itself satisfy another baseline line.
    """
    for candidate in candidates:
        if candidate.normalized not in baseline_values:
            return candidate
    return candidates[0]


class _Tally:
    """Running totals for a single comparison call."""

    def __init__(self) -> None:
        self.counts: dict[ItemStatus, int] = {status: 0 for status in ItemStatus}
        self.sections: dict[str, dict[ItemStatus, int]] = {}
        self.deviations: list[DeviationRecord] = []
        self.items: list[ComparisonItem] = []

    def record(
        self,
        status: ItemStatus,
        line: ConfigLine,
        expected: str,
        actual: str,
        deviation: DeviationRecord | None = None,
    ) -> None:
        self.counts[status] += 1
        if status != ItemStatus.EXTRA:
            section = self.sections.setdefault(
                line.section,
                {ItemStatus.COMPLIANT: 0, ItemStatus.DEVIATED: 0, ItemStatus.MISSING: 0},
            )
            section[status] += 1
        if deviation is not None:
            self.deviations.append(deviation)
        self.items.append(ComparisonItem(
            section=line.section,
            intent=line.intent,
            expected=expected,
            actual=actual,
            status=status,
        ))

    def result(self) -> ComparisonResult:
        section_stats = {
            name: SectionStats(
                compliant=counts[ItemStatus.COMPLIANT],
                deviated=counts[ItemStatus.DEVIATED],
                missing=counts[ItemStatus.MISSING],
            )
            for name, counts in self.sections.items()
        }
        return ComparisonResult(
            compliant=self.counts[ItemStatus.COMPLIANT],
            deviated=self.counts[ItemStatus.DEVIATED],
            missing=self.counts[ItemStatus.MISSING],
            extra=self.counts[ItemStatus.EXTRA],
            deviations=tuple(self.deviations),
            section_stats=MappingProxyType(section_stats),
            items=tuple(self.items),
        )


def _missing(tally: _Tally, line: ConfigLine, description: str, *, is_variable: bool) -> None:
    tally.record(
        ItemStatus.MISSING,
        line,
        expected=line.text,
        actual=NOT_CONFIGURED,
        deviation=DeviationRecord(
            section=line.section,
            intent=line.intent,
            kind=DeviationKind.MISSING,
            description=description,
            expected=line.text,
            actual=NOT_CONFIGURED,
            severity=_severity_for(line),
            is_variable=is_variable,
        ),
    )


def _compare_section(
    tally: _Tally,
    baseline_lines: Sequence[ConfigLine],
    actual_lines: Sequence[ConfigLine],
    allowed_variables: frozenset[str],
) -> None:
    actual_index = _index_by_key(actual_lines)
    actual_by_intent: dict[str, ConfigLine] = {}
    for line in actual_lines:
        actual_by_intent.setdefault(line.intent, line)
    baseline_values = {line.normalized for line in baseline_lines}

    for line in baseline_lines:
        if line.intent == GENERIC_INTENT:
            continue

        if line.intent in allowed_variables:
            present = actual_by_intent.get(line.intent)
            if present is not None:
                tally.record(ItemStatus.COMPLIANT, line, expected=line.text, actual=present.text)
            else:
                _missing(tally, line, f"Missing {line.intent} configuration", is_variable=True)
            continue

        candidates = actual_index.get(line.match_key)
        if not candidates:
            _missing(tally, line, "Missing required configuration", is_variable=False)
            continue

        exact = next((c for c in candidates if c.normalized == line.normalized), None)
        if exact is not None:
            tally.record(ItemStatus.COMPLIANT, line, expected=line.text, actual=exact.text)
            continue

        counterpart = _pick_counterpart(candidates, baseline_values)
        tally.record(
            ItemStatus.DEVIATED,
            line,
            expected=line.text,
            actual=counterpart.text,
            deviation=DeviationRecord(
                section=line.section,
                intent=line.intent,
                kind=DeviationKind.DEVIATED,
                description=f"Configuration mismatch for {line.intent}",
                expected=line.text,
                actual=counterpart.text,
                severity=_severity_for(line),
            ),
        )


def _collect_extras(
    tally: _Tally,
    actual_lines: Sequence[ConfigLine],
    baseline_lines: Sequence[ConfigLine],
    allowed_variables: frozenset[str],
) -> None:
    baseline_keys = {line.match_key for line in baseline_lines}
    baseline_intents = {line.intent for line in baseline_lines}
    for line in actual_lines:
        if line.intent == GENERIC_INTENT or line.match_key in baseline_keys:
            continue
        # already counted compliant by presence in the baseline pass
        if line.intent in allowed_variables and line.intent in baseline_intents:
            continue
        tally.record(
            ItemStatus.EXTRA,
            line,
            expected=NOT_IN_BASELINE,
            actual=line.text,
            deviation=DeviationRecord(
                section=line.section,
                intent=line.intent,
                kind=DeviationKind.EXTRA,
                description="Extra configuration not in baseline",
                expected=NOT_IN_BASELINE,
                actual=line.text,
                severity=Severity.INFO,
            ),
        )


def compare_by_intent(
    baseline: str,
    actual: str,
    allowed_variables: Iterable[str] | None = None,
    *,
    rules: Sequence[Rule] = DEFAULT_RULES,
) -> ComparisonResult:
    """Compare an actual configuration against a baseline by intent.

    Args:
        baseline: Baseline configuration text (the authority on structure).
        actual: Configuration text to check.
        allowed_variables: Intents whose value may differ; only their presence
            is checked. Defaults to DEFAULT_ALLOWED_VARIABLES.
        rules: Ordered rule table used to classify both sides.

    Returns:
        ComparisonResult. Deviations are in discovery order: baseline
        sections first, then extras in actual section order.

    Raises:
        TypeError: If either configuration is not a string.
    """
    for name, value in (("baseline", baseline), ("actual", actual)):
        if not isinstance(value, str):
            raise TypeError(f"{name} configuration must be str, got {type(value).__name__}")

    allowed = (
        DEFAULT_ALLOWED_VARIABLES
        if allowed_variables is None
        else normalize_intents(allowed_variables)
    )

    baseline_sections = parse_configuration(baseline, rules)
    actual_sections = parse_configuration(actual, rules)
    tally = _Tally()

    for section_id, baseline_lines in baseline_sections.items():
        _compare_section(tally, baseline_lines, actual_sections.get(section_id, []), allowed)

    for section_id, actual_lines in actual_sections.items():
        _collect_extras(tally, actual_lines, baseline_sections.get(section_id, []), allowed)

    result = tally.result()
    logger.debug(
        "config_compared",
        baseline_sections=len(baseline_sections),
        actual_sections=len(actual_sections),
        compliant=result.compliant,
        deviated=result.deviated,
        missing=result.missing,
        extra=result.extra,
    )
    return result


def severity_class(severity: Severity | str) -> str:
    """Stable display colour for a severity.

    Raises:
        ValueError: If the severity is unknown.
    """
    return _SEVERITY_CLASSES[Severity(severity)]
