"""Tests for configuration cleaning, stats, validation and batching."""

from __future__ import annotations

import pytest

from icc.engine.cleaner import (
    clean_configuration,
    config_stats,
    process_configuration,
    split_into_batches,
    split_lines,
    validate_config,
)
from icc.engine.comparator import compare_by_intent


class TestCleanConfiguration:
    """Comment, separator and whitespace stripping."""

    def test_drops_comments_and_separators(self) -> None:
        raw = "!\n! ==== Interfaces ====\nhostname R1\n  ! indented comment\n!\n"
        assert clean_configuration(raw) == "hostname R1"

    def test_drops_blank_lines(self) -> None:
        raw = "hostname R1\n\n   \n\t\ninterface Gi0/1\n"
        assert clean_configuration(raw) == "hostname R1\ninterface Gi0/1"

    def test_right_trims_but_keeps_indentation(self) -> None:
        raw = "interface Gi0/1   \n ip address 10.0.0.1 255.255.255.0\t\n"
        assert clean_configuration(raw) == "interface Gi0/1\n ip address 10.0.0.1 255.255.255.0"

    def test_preserves_order(self) -> None:
        raw = "c\nb\n!\na\n"
        assert clean_configuration(raw).split("\n") == ["c", "b", "a"]

    def test_windows_line_endings(self) -> None:
        raw = "hostname R1\r\n!\r\ninterface Gi0/1\r\n no shutdown\r\n"
        assert clean_configuration(raw) == "hostname R1\ninterface Gi0/1\n no shutdown"

    @pytest.mark.parametrize("brk", ["\x0b", "\x0c", "\x1c", "\x85", "\u2028", "\u2029"])
    def test_only_newlines_break_lines(self, brk: str) -> None:
        raw = f"interface Gi0/1\n description Core{brk}link\n duplex full"
        assert clean_configuration(raw) == raw

    def test_split_lines_folds_carriage_returns(self) -> None:
        assert split_lines("a\r\nb\rc\x85d\n") == ["a", "b", "c\x85d", ""]

    def test_empty_input(self) -> None:
        assert clean_configuration("") == ""
        assert clean_configuration("!\n!\n\n") == ""

    def test_sample_config(self, baseline_config: str) -> None:
        cleaned = clean_configuration(baseline_config)
        assert len(cleaned.split("\n")) == 23
        assert "!" not in cleaned

    @pytest.mark.parametrize("raw", [
        "",
        "!\n",
        "hostname R1  \n\n! x\n interface Gi0/1 \r\n",
        "a\r\nb\rc\n\n  \n",
        "\t!\n\tdescription tab indented   ",
    ])
    def test_idempotent(self, raw: str) -> None:
        once = clean_configuration(raw)
        assert clean_configuration(once) == once

    def test_idempotent_on_sample(self, baseline_config: str) -> None:
        once = clean_configuration(baseline_config)
        assert clean_configuration(once) == once


class TestConfigStats:
    """Statistics derived from cleaned text."""

    def test_sample_config(self, baseline_config: str) -> None:
        stats = config_stats(clean_configuration(baseline_config))
        assert stats.total_lines == 23
        assert stats.command_lines == 23
        assert stats.interfaces == 2
        assert stats.routing_protocols == ("OSPF",)
        assert stats.access_lists == 1

    def test_protocols_deduplicated_in_first_seen_order(self) -> None:
        text = "router bgp 65000\nrouter ospf 1\nrouter ospf 2\nrouter BGP 65001\nrouter rip"
        assert config_stats(text).routing_protocols == ("BGP", "OSPF", "RIP")

    def test_named_access_lists(self) -> None:
        text = "ip access-list extended EDGE\naccess-list 10 permit any\naccess-list 10 deny any"
        assert config_stats(text).access_lists == 3

    def test_ignores_comments_in_uncleaned_text(self) -> None:
        stats = config_stats("! comment\nhostname R1\n\n")
        assert stats.command_lines == 1
        assert stats.total_lines == 4

    def test_empty(self) -> None:
        stats = config_stats("")
        assert stats.total_lines == 1
        assert stats.command_lines == 0
        assert stats.routing_protocols == ()


class TestValidateConfig:
    """Structural validation; only emptiness is an error."""

    def test_empty_is_error(self) -> None:
        report = validate_config("")
        assert report.is_valid is False
        assert report.errors == ("Configuration is empty",)
        assert report.warnings == ()

    def test_whitespace_only_is_error(self) -> None:
        assert validate_config("  \n\t\n").is_valid is False

    def test_full_config_has_no_warnings(self, baseline_config: str) -> None:
        report = validate_config(clean_configuration(baseline_config))
        assert report.is_valid is True
        assert report.errors == ()
        assert report.warnings == ()

    def test_short_config_warns(self) -> None:
        report = validate_config("hostname R1\ninterface Gi0/1")
        assert report.is_valid is True
        assert report.warnings == ("Configuration seems very short",)

    def test_missing_hostname_and_interfaces_warn(self) -> None:
        text = "\n".join(f"ip route 10.{i}.0.0 255.255.0.0 10.0.0.1" for i in range(6))
        report = validate_config(text)
        assert report.is_valid is True
        assert "No hostname configured" in report.warnings
        assert "No interfaces found in configuration" in report.warnings
        assert "Configuration seems very short" not in report.warnings


class TestProcessConfiguration:
    """Cleaning wrapped with section labels and timing."""

    def test_sample_config(self, baseline_config: str) -> None:
        result = process_configuration(baseline_config)
        assert result.cleaned == clean_configuration(baseline_config)
        assert result.line_count == 23
        assert result.sections == (
            "Interface: GigabitEthernet0/0",
            "Interface: GigabitEthernet0/1",
            "Router: OSPF 1",
        )
        assert result.duration_ms >= 0.0

    def test_indented_declarations_are_not_sections(self) -> None:
        result = process_configuration("hostname R1\n interface Gi0/1\n")
        assert result.sections == ()

    def test_empty(self) -> None:
        result = process_configuration("")
        assert result.cleaned == ""
        assert result.line_count == 1
        assert result.sections == ()


class TestSplitIntoBatches:
    """Line-range batching."""

    def test_ranges(self) -> None:
        text = "\n".join(f"line {i}" for i in range(1200))
        batches = split_into_batches(text, batch_size=500)
        assert [(b.start_line, b.end_line) for b in batches] == [(1, 500), (501, 1000), (1001, 1200)]
        assert [b.index for b in batches] == [0, 1, 2]
        assert all(b.total == 3 for b in batches)

    def test_rejoin_reproduces_input(self, baseline_config: str) -> None:
        batches = split_into_batches(baseline_config, batch_size=7)
        assert "\n".join(b.content for b in batches) == baseline_config

    def test_single_batch(self) -> None:
        batches = split_into_batches("a\nb", batch_size=500)
        assert len(batches) == 1
        assert batches[0].content == "a\nb"
        assert batches[0].end_line == 2

    def test_invalid_batch_size(self) -> None:
        with pytest.raises(ValueError, match="at least 1"):
            split_into_batches("a", batch_size=0)

    def test_batched_comparison_matches_unbatched(
        self, baseline_config: str, drifted_config: str
    ) -> None:
        cleaned = clean_configuration(baseline_config)
        reassembled = "\n".join(b.content for b in split_into_batches(cleaned, batch_size=4))
        assert compare_by_intent(reassembled, drifted_config) == compare_by_intent(
            cleaned, drifted_config
        )
