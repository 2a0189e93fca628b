"""Section tracking for IOS-style configurations.

A section is the scope a line is compared in: the global scope, one
interface, or one routing process. Walking a configuration is a two-state
machine (inside a named section, or in the global scope) driven by
next_section():

    * an unindented 'interface <name>' or 'router <proto> <id>' line opens
      a named section
    * any other unindented line returns to the global scope
    * indented lines never change the current section
"""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass

_INTERFACE_OPENER = re.compile(r"^interface\s+(.+)$", re.IGNORECASE)
_ROUTER_OPENER = re.compile(r"^router\s+(\w+)\s+(\d+)$", re.IGNORECASE)


class SectionKind(str, enum.Enum):
    """Kind of configuration scope."""

    GLOBAL = "global"
    INTERFACE = "interface"
    ROUTER = "router"


@dataclass(frozen=True)
class Section:
    """A configuration scope. Equal sections have equal ids."""

    kind: SectionKind
    name: str = ""  # interface name, or routing protocol for ROUTER
    process_id: str = ""

    @property
    def id(self) -> str:
        if self.kind == SectionKind.INTERFACE:
            return f"interface:{self.name}"
        if self.kind == SectionKind.ROUTER:
            return f"router:{self.name}:{self.process_id}"
        return "global"

    @classmethod
    def from_id(cls, section_id: str) -> Section:
        """Rebuild a Section from its id string.

        Raises:
            ValueError: If the id is not a recognised section id.
        """
        if section_id == "global":
            return GLOBAL_SECTION
        kind, _, rest = section_id.partition(":")
        if kind == SectionKind.INTERFACE.value and rest:
            return cls(SectionKind.INTERFACE, name=rest)
        if kind == SectionKind.ROUTER.value:
            protocol, _, process_id = rest.partition(":")
            if protocol and process_id:
                return cls(SectionKind.ROUTER, name=protocol, process_id=process_id)
        raise ValueError(f"Not a section id: {section_id!r}")


GLOBAL_SECTION = Section(SectionKind.GLOBAL)


def is_indented(line: str) -> bool:
    """True if the line starts with a space or a tab."""
    return line.startswith((" ", "\t"))


def section_opener(line: str) -> Section | None:
    """Return the section an unindented declaration line opens, if any."""
    if is_indented(line):
        return None
    stripped = line.strip()

    interface_match = _INTERFACE_OPENER.match(stripped)
    if interface_match:
        return Section(SectionKind.INTERFACE, name=interface_match.group(1))

    router_match = _ROUTER_OPENER.match(stripped)
    if router_match:
        return Section(
            SectionKind.ROUTER,
            name=router_match.group(1),
            process_id=router_match.group(2),
        )
    return None


def next_section(current: Section, line: str) -> Section:
    """Transition the section state machine on one line.

    Args:
        current: The section before this line.
        line: The raw (not stripped) line.

    Returns:
        The section this line belongs to.
    """
    if is_indented(line):
        return current
    opened = section_opener(line)
    return opened if opened is not None else GLOBAL_SECTION


def format_section_name(section_id: str) -> str:
    """Human-readable label for a section id.

    'global' → 'Global', 'interface:Gi0/1' → 'Gi0/1',
    'router:ospf:1' → 'OSPF 1'. Unknown ids are returned unchanged.
    """
    try:
        section = Section.from_id(section_id)
    except ValueError:
        return section_id
    if section.kind == SectionKind.INTERFACE:
        return section.name
    if section.kind == SectionKind.ROUTER:
        return f"{section.name.upper()} {section.process_id}"
    return "Global"
