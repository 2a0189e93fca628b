"""Intent rule table.

Each rule maps a line pattern to an intent and a normalization function.
The table is an ordered tuple scanned linearly: the first matching rule
wins, so specific patterns must come before catch-alls. The table is
built once at import time and never mutated.

Additional rules can be loaded from a YAML rule pack (see load_rule_pack)
and placed ahead of or behind the defaults with build_rule_table().
"""

from __future__ import annotations

import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass

import structlog
import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from icc.exceptions import RulePackError

logger = structlog.get_logger()

GENERIC_INTENT = "generic"

_IP = r"(\d+\.\d+\.\d+\.\d+)"
_WHITESPACE = re.compile(r"\s+")


@dataclass(frozen=True)
class Rule:
    """A pattern → intent rule with its normalizer."""

    intent: str
    pattern: re.Pattern[str]
    normalize: Callable[[re.Match[str]], str]
    is_variable: bool = False  # only presence matters when the intent is allowed to vary
    required: bool = False  # missing or deviated lines are critical


def _rule(
    intent: str,
    pattern: str,
    normalize: Callable[[re.Match[str]], str],
    *,
    is_variable: bool = False,
    required: bool = False,
) -> Rule:
    return Rule(
        intent=intent,
        pattern=re.compile(pattern, re.IGNORECASE),
        normalize=normalize,
        is_variable=is_variable,
        required=required,
    )


DEFAULT_RULES: tuple[Rule, ...] = (
    _rule(
        "hostname", r"^hostname\s+(.+)$",
        lambda m: "hostname:configured",
        is_variable=True,
    ),
    _rule(
        "ip-address", rf"^ip\s+address\s+{_IP}\s+{_IP}$",
        lambda m: f"ip:{m[1]}/{m[2]}",
        required=True,
    ),
    _rule(
        "duplex", r"^duplex\s+(auto|full|half)$",
        lambda m: f"duplex:{m[1].lower()}",
    ),
    _rule(
        "speed", r"^speed\s+(auto|\d+)$",
        lambda m: f"speed:{m[1].lower()}",
    ),
    _rule(
        "ospf-network", rf"^network\s+{_IP}\s+{_IP}\s+area\s+(\d+)$",
        lambda m: f"ospf-network:{m[1]}/{m[2]}/area{m[3]}",
        required=True,
    ),
    _rule(
        "static-route", rf"^ip\s+route\s+{_IP}\s+{_IP}\s+{_IP}$",
        lambda m: f"route:{m[1]}/{m[2]}->{m[3]}",
        required=True,
    ),
    _rule(
        "ntp-server", rf"^ntp\s+server\s+{_IP}$",
        lambda m: f"ntp:{m[1]}",
        is_variable=True,
    ),
    _rule(
        "logging-host", rf"^logging\s+host\s+{_IP}$",
        lambda m: f"logging-host:{m[1]}",
        is_variable=True,
    ),
    _rule(
        "logging-level", r"^logging\s+trap\s+(\w+)$",
        lambda m: f"logging-level:{m[1].lower()}",
        required=True,
    ),
    _rule(
        "routing-process", r"^router\s+(ospf|eigrp|bgp)\s+(\d+)$",
        lambda m: f"routing:{m[1].lower()}/{m[2]}",
        required=True,
    ),
    _rule(
        "interface", r"^interface\s+(.+)$",
        lambda m: f"interface:{m[1]}",
        required=True,
    ),
    _rule(
        "description", r"^description\s+(.+)$",
        lambda m: "description:configured",
        is_variable=True,
    ),
    _rule(
        "shutdown-state", r"^(no\s+)?shutdown$",
        lambda m: f"shutdown:{'no' if m[1] else 'yes'}",
        required=True,
    ),
    _rule(
        "access-list", r"^(ip\s+)?access-list\s+(.+)$",
        lambda m: f"acl:{m[2]}",
    ),
    _rule(
        "banner", r"^banner\s+(\w+)\s+(.+)$",
        lambda m: f"banner:{m[1]}",
        is_variable=True,
    ),
)


def generic_value(line: str) -> str:
    """Normalized value for a line no rule recognises."""
    return f"{GENERIC_INTENT}:" + _WHITESPACE.sub("-", line.strip().lower())


def classify_line(line: str, rules: Sequence[Rule] = DEFAULT_RULES) -> tuple[Rule | None, str]:
    """Find the first rule matching a line and normalize it.

    Args:
        line: A configuration line; surrounding whitespace is ignored.
        rules: Ordered rule table.

    Returns:
        (rule, normalized value), or (None, generic value) when nothing matches.
    """
    stripped = line.strip()
    for rule in rules:
        match = rule.pattern.match(stripped)
        if match:
            return rule, rule.normalize(match)
    return None, generic_value(stripped)


# --- Rule packs ---


class RuleSpec(BaseModel):
    """One rule as written in a YAML rule pack."""

    model_config = ConfigDict(extra="forbid")

    intent: str
    pattern: str
    template: str
    variable: bool = False
    required: bool = False

    @field_validator("intent")
    @classmethod
    def intent_is_tag(cls, v: str) -> str:
        tag = v.strip().lower()
        if not tag:
            raise ValueError("intent must be a non-empty string")
        if tag == GENERIC_INTENT:
            raise ValueError("'generic' is reserved for unrecognised lines")
        return tag

    @field_validator("pattern")
    @classmethod
    def pattern_compiles(cls, v: str) -> str:
        try:
            re.compile(v)
        except re.error as exc:
            raise ValueError(f"invalid regular expression: {exc}") from exc
        return v

    @model_validator(mode="after")
    def template_fits_pattern(self) -> RuleSpec:
        """Every placeholder in the template must name an existing group."""
        group_count = re.compile(self.pattern).groups
        try:
            self.template.format(*([""] * (group_count + 1)))
        except (IndexError, KeyError, ValueError) as exc:
            raise ValueError(
                f"template {self.template!r} does not fit a pattern with {group_count} group(s)"
            ) from exc
        return self

    def to_rule(self) -> Rule:
        template = self.template

        def normalize(match: re.Match[str]) -> str:
            groups = [g if g is not None else "" for g in match.groups()]
            return template.format(match[0], *groups)

        return _rule(
            self.intent,
            self.pattern,
            normalize,
            is_variable=self.variable,
            required=self.required,
        )


class RulePack(BaseModel):
    """Top-level YAML rule pack document."""

    model_config = ConfigDict(extra="forbid")

    rules: list[RuleSpec] = Field(min_length=1)


def load_rule_pack(yaml_text: str) -> tuple[Rule, ...]:
    """Parse and validate a YAML rule pack.

    Uses yaml.safe_load() only. Example document::

        rules:
          - intent: snmp-community
            pattern: '^snmp-server\\s+community\\s+(\\S+)\\s+(RO|RW)$'
            template: 'snmp-community:{2}'
            required: true

    Args:
        yaml_text: Rule pack document.

    Returns:
        Rules in document order.

    Raises:
        RulePackError: If the YAML is malformed, empty, or fails validation.
    """
    try:
        data = yaml.safe_load(yaml_text)
    except yaml.YAMLError as exc:
        raise RulePackError(f"Rule pack is not valid YAML: {exc}") from exc

    if data is None:
        raise RulePackError("Rule pack is empty")

    try:
        pack = RulePack.model_validate(data)
    except ValidationError as exc:
        raise RulePackError(f"Rule pack failed validation: {exc}") from exc

    rules = tuple(spec.to_rule() for spec in pack.rules)
    logger.info("rule_pack_loaded", rule_count=len(rules), intents=[r.intent for r in rules])
    return rules


def build_rule_table(
    extra: Sequence[Rule],
    base: Sequence[Rule] = DEFAULT_RULES,
    *,
    prepend: bool = True,
) -> tuple[Rule, ...]:
    """Combine extra rules with a base table, keeping priority order.

    Args:
        extra: Additional rules, highest priority first.
        base: Existing table.
        prepend: Put extra rules ahead of the base table (they win ties).

    Returns:
        New immutable rule table.
    """
    if prepend:
        return tuple(extra) + tuple(base)
    return tuple(base) + tuple(extra)
