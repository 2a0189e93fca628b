"""ComplianceEngine: the single entry point for presentation code.

Bundles a rule table, the allowed-variable intents and the input size cap,
and runs the clean → parse → compare pipeline. Holds no per-call state, so
one instance can serve any number of callers.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

import structlog

from icc.config import Settings
from icc.engine import cleaner
from icc.engine.comparator import DEFAULT_ALLOWED_VARIABLES, compare_by_intent, normalize_intents
from icc.engine.models import (
    BatchInfo,
    ComparisonResult,
    ConfigLine,
    ConfigStats,
    ProcessingResult,
    ValidationReport,
)
from icc.engine.parser import parse_configuration
from icc.engine.rules import DEFAULT_RULES, Rule, build_rule_table, load_rule_pack
from icc.exceptions import InputTooLargeError

logger = structlog.get_logger()


class ComplianceEngine:
    """Intent-based compliance checks over configuration text.

    Args:
        rules: Ordered rule table. Defaults to DEFAULT_RULES.
        allowed_variables: Intents checked for presence only.
            Defaults to DEFAULT_ALLOWED_VARIABLES.
        max_input_bytes: Reject texts larger than this (UTF-8 encoded).
            None disables the cap.
        batch_size: Lines per batch for split().
    """

    def __init__(
        self,
        rules: Sequence[Rule] | None = None,
        allowed_variables: Iterable[str] | None = None,
        max_input_bytes: int | None = None,
        batch_size: int = 500,
    ) -> None:
        self._rules = tuple(rules) if rules is not None else DEFAULT_RULES
        self._allowed = (
            normalize_intents(allowed_variables)
            if allowed_variables is not None
            else DEFAULT_ALLOWED_VARIABLES
        )
        self._max_input_bytes = max_input_bytes
        self._batch_size = batch_size

    @classmethod
    def from_settings(cls, settings: Settings, rule_pack: str | None = None) -> ComplianceEngine:
        """Build an engine from Settings, optionally with a YAML rule pack.

        Rule pack rules take priority over the defaults.

        Raises:
            RulePackError: If the rule pack is invalid.
        """
        rules = DEFAULT_RULES
        if rule_pack is not None:
            rules = build_rule_table(load_rule_pack(rule_pack))
        return cls(
            rules=rules,
            allowed_variables=settings.allowed_variables,
            max_input_bytes=settings.max_input_bytes,
            batch_size=settings.batch_size,
        )

    @property
    def rules(self) -> tuple[Rule, ...]:
        return self._rules

    @property
    def allowed_variables(self) -> frozenset[str]:
        return self._allowed

    def _check_size(self, text: str) -> None:
        if not isinstance(text, str):
            raise TypeError(f"configuration must be str, got {type(text).__name__}")
        if self._max_input_bytes is None:
            return
        size = len(text.encode("utf-8"))
        if size > self._max_input_bytes:
            logger.warning("input_rejected", size=size, limit=self._max_input_bytes)
            raise InputTooLargeError(size, self._max_input_bytes)

    def clean(self, raw: str) -> str:
        self._check_size(raw)
        return cleaner.clean_configuration(raw)

    def process(self, raw: str) -> ProcessingResult:
        self._check_size(raw)
        return cleaner.process_configuration(raw)

    def stats(self, text: str) -> ConfigStats:
        self._check_size(text)
        return cleaner.config_stats(text)

    def validate(self, text: str) -> ValidationReport:
        self._check_size(text)
        return cleaner.validate_config(text)

    def split(self, text: str) -> list[BatchInfo]:
        self._check_size(text)
        return cleaner.split_into_batches(text, self._batch_size)

    def parse(self, text: str) -> dict[str, list[ConfigLine]]:
        self._check_size(text)
        return parse_configuration(text, self._rules)

    def compare(
        self,
        baseline: str,
        actual: str,
        allowed_variables: Iterable[str] | None = None,
    ) -> ComparisonResult:
        """Clean both configurations and compare them by intent.

        Args:
            baseline: Raw baseline configuration.
            actual: Raw configuration to check.
            allowed_variables: Per-call override of the engine's allowed intents.

        Returns:
            ComparisonResult.

        Raises:
            TypeError: If either input is not a string.
            InputTooLargeError: If either input exceeds the size cap.
        """
        self._check_size(baseline)
        self._check_size(actual)
        return compare_by_intent(
            cleaner.clean_configuration(baseline),
            cleaner.clean_configuration(actual),
            self._allowed if allowed_variables is None else allowed_variables,
            rules=self._rules,
        )
