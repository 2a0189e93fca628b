"""Intent parser: turns configuration text into classified lines per section."""

from __future__ import annotations

from collections.abc import Sequence

from icc.engine.cleaner import COMMENT_MARKER, split_lines
from icc.engine.models import ConfigLine
from icc.engine.rules import DEFAULT_RULES, GENERIC_INTENT, Rule, classify_line
from icc.engine.sections import GLOBAL_SECTION, next_section


def parse_line(
    line: str,
    section_id: str,
    rules: Sequence[Rule] = DEFAULT_RULES,
) -> ConfigLine | None:
    """Classify a single line.

    Args:
        line: Raw configuration line.
        section_id: Id of the section the line belongs to.
        rules: Ordered rule table.

    Returns:
        ConfigLine, or None for blank lines and bare '!' separators.
    """
    stripped = line.strip()
    if not stripped or stripped == COMMENT_MARKER:
        return None

    rule, normalized = classify_line(stripped, rules)
    if rule is None:
        return ConfigLine(
            text=stripped,
            section=section_id,
            intent=GENERIC_INTENT,
            normalized=normalized,
        )
    return ConfigLine(
        text=stripped,
        section=section_id,
        intent=rule.intent,
        normalized=normalized,
        is_variable=rule.is_variable,
        required=rule.required,
    )


def parse_configuration(
    text: str,
    rules: Sequence[Rule] = DEFAULT_RULES,
) -> dict[str, list[ConfigLine]]:
    """Parse configuration text into classified lines grouped by section.

    The declaration line that opens a section ('interface ...',
    'router ospf 1') is itself part of that section. Sections appear in
    the order they are first seen.

    Args:
        text: Configuration text, cleaned or raw.
        rules: Ordered rule table.

    Returns:
        Mapping of section id to its lines in source order.
    """
    sections: dict[str, list[ConfigLine]] = {}
    current = GLOBAL_SECTION

    for line in split_lines(text):
        stripped = line.strip()
        if not stripped or stripped == COMMENT_MARKER:
            continue

        current = next_section(current, line)
        parsed = parse_line(stripped, current.id, rules)
        if parsed is not None:
            sections.setdefault(current.id, []).append(parsed)

    return sections
