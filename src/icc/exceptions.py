"""Exceptions raised by the compliance engine.

The comparison itself never raises for text input. These cover the
edges where callers hand the engine something it cannot accept.
"""

from __future__ import annotations


class ComplianceError(Exception):
    """Base class for all engine errors."""


class RulePackError(ComplianceError, ValueError):
    """A rule pack could not be parsed or failed validation."""


class InputTooLargeError(ComplianceError, ValueError):
    """A configuration text exceeds the configured size cap."""

    def __init__(self, size: int, limit: int) -> None:
        self.size = size
        self.limit = limit
        super().__init__(f"Configuration is {size} bytes, limit is {limit} bytes")
