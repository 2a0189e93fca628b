"""Configuration cleaning, statistics and structural validation.

Pure functions over text, no I/O. Cleaning removes everything that carries
no configuration intent (comments, decorative separators, blank lines,
trailing whitespace) while keeping line order and indentation.
"""

from __future__ import annotations

import re
import time

import structlog

from icc.engine.models import BatchInfo, ConfigStats, ProcessingResult, ValidationReport

logger = structlog.get_logger()

COMMENT_MARKER = "!"

_INTERFACE_PATTERN = re.compile(r"^interface\s+(.+)$", re.IGNORECASE)
_ROUTER_PROCESS_PATTERN = re.compile(r"^router\s+(\w+)\s+(\d+)$", re.IGNORECASE)
_ROUTER_PATTERN = re.compile(r"^router\s+(\w+)", re.IGNORECASE)
_ACCESS_LIST_PATTERN = re.compile(r"^(ip\s+)?access-list", re.IGNORECASE)
_HOSTNAME_PATTERN = re.compile(r"^hostname\s+", re.IGNORECASE)

_MIN_EXPECTED_LINES = 5


def _is_comment_or_blank(stripped: str) -> bool:
    return not stripped or stripped.startswith(COMMENT_MARKER)


def split_lines(text: str) -> list[str]:
    """Split text on line breaks after folding CRLF and CR into LF.

    Only newlines separate lines. Other characters str.splitlines() treats
    as breaks (form feed, NEL, U+2028 and friends) stay inside their line.
    """
    return text.replace("\r\n", "\n").replace("\r", "\n").split("\n")


def clean_configuration(raw: str) -> str:
    """Strip comments, separators, blank lines and trailing whitespace.

    Lines whose stripped content starts with '!' are dropped whole, which
    covers bare separators as well as banner and section-title comments.
    Leading indentation is kept because it carries section structure.

    Args:
        raw: Raw configuration text with any newline convention.

    Returns:
        Cleaned text joined with '\\n'. Empty input yields an empty string.
    """
    cleaned_lines: list[str] = []
    for line in split_lines(raw):
        if _is_comment_or_blank(line.strip()):
            continue
        cleaned_lines.append(line.rstrip())
    return "\n".join(cleaned_lines)


def split_into_batches(text: str, batch_size: int = 500) -> list[BatchInfo]:
    """Split text into contiguous line ranges.

    Joining the batch contents with '\\n' reproduces the input exactly, so
    batching has no effect on what the parser or comparator sees.

    Args:
        text: Configuration text.
        batch_size: Maximum number of lines per batch.

    Returns:
        List of BatchInfo objects in line order.

    Raises:
        ValueError: If batch_size is less than 1.
    """
    if batch_size < 1:
        raise ValueError("batch_size must be at least 1")

    lines = text.split("\n")
    total = -(-len(lines) // batch_size)
    batches: list[BatchInfo] = []
    for start in range(0, len(lines), batch_size):
        chunk = lines[start:start + batch_size]
        batches.append(BatchInfo(
            index=start // batch_size,
            total=total,
            start_line=start + 1,
            end_line=start + len(chunk),
            content="\n".join(chunk),
        ))
    return batches


def process_configuration(raw: str) -> ProcessingResult:
    """Clean a raw configuration and collect its section labels.

    Args:
        raw: Raw configuration text.

    Returns:
        ProcessingResult with the cleaned text, its line count, labels such
        as 'Interface: Gi0/1' or 'Router: OSPF 1', and the time taken.
    """
    started = time.perf_counter()

    cleaned = clean_configuration(raw)
    lines = cleaned.split("\n")

    labels: list[str] = []
    for line in lines:
        interface_match = _INTERFACE_PATTERN.match(line)
        router_match = _ROUTER_PROCESS_PATTERN.match(line)
        if interface_match:
            labels.append(f"Interface: {interface_match.group(1)}")
        elif router_match:
            labels.append(f"Router: {router_match.group(1).upper()} {router_match.group(2)}")

    duration_ms = (time.perf_counter() - started) * 1000

    logger.debug(
        "configuration_processed",
        raw_lines=len(split_lines(raw)),
        cleaned_lines=len(lines),
        sections=len(labels),
        duration_ms=round(duration_ms, 3),
    )

    return ProcessingResult(
        cleaned=cleaned,
        line_count=len(lines),
        sections=tuple(labels),
        duration_ms=duration_ms,
    )


def config_stats(cleaned: str) -> ConfigStats:
    """Count command lines, interfaces, routing protocols and ACL lines.

    Args:
        cleaned: Configuration text, normally the output of clean_configuration().

    Returns:
        ConfigStats. Routing protocols are upper-cased and listed once each,
        in the order they first appear.
    """
    lines = cleaned.split("\n")
    command_lines = 0
    interfaces = 0
    access_lists = 0
    protocols: dict[str, None] = {}

    for line in lines:
        stripped = line.strip()
        if _is_comment_or_blank(stripped):
            continue

        command_lines += 1

        if _INTERFACE_PATTERN.match(stripped):
            interfaces += 1

        router_match = _ROUTER_PATTERN.match(stripped)
        if router_match:
            protocols.setdefault(router_match.group(1).upper(), None)

        if _ACCESS_LIST_PATTERN.match(stripped):
            access_lists += 1

    return ConfigStats(
        total_lines=len(lines),
        command_lines=command_lines,
        interfaces=interfaces,
        routing_protocols=tuple(protocols),
        access_lists=access_lists,
    )


def validate_config(cleaned: str) -> ValidationReport:
    """Run basic structural checks on a configuration.

    Only an empty configuration is an error. Short configurations and ones
    without a hostname or any interface produce warnings.

    Args:
        cleaned: Configuration text.

    Returns:
        ValidationReport.
    """
    if not cleaned or not cleaned.strip():
        return ValidationReport(is_valid=False, errors=("Configuration is empty",))

    lines = cleaned.split("\n")
    warnings: list[str] = []

    if len(lines) < _MIN_EXPECTED_LINES:
        warnings.append("Configuration seems very short")

    if not any(_HOSTNAME_PATTERN.match(line.strip()) for line in lines):
        warnings.append("No hostname configured")

    if not any(_INTERFACE_PATTERN.match(line.strip()) for line in lines):
        warnings.append("No interfaces found in configuration")

    return ValidationReport(is_valid=True, warnings=tuple(warnings))
