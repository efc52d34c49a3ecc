"""
Remediation enrichment tests
Tests: duration formatting, summary block, no-op conditions
"""

import pytest

from hookradar.decision.enrichment import enrich_with_remediation, format_duration
from hookradar.schemas import Decision, RemediationResult, RemediationResults


class TestFormatDuration:
    """Test duration rendering"""

    @pytest.mark.parametrize(
        "seconds,expected",
        [
            (0.0, "0ms"),
            (0.010, "10ms"),
            (0.999, "999ms"),
            (1.0, "1.0s"),
            (2.345, "2.3s"),
            (12.0, "12.0s"),
        ],
    )
    def test_format(self, seconds, expected):
        """Test duration rendering"""
        assert format_duration(seconds) == expected


class TestEnrichWithRemediation:
    """Test reason enrichment"""

    def _results(self, *results: RemediationResult, executed: bool = True) -> RemediationResults:
        return RemediationResults(
            executed=executed,
            results=list(results),
            total_duration=0.012,
            protocol_name="block-protocol",
        )

    def test_not_executed_is_noop(self):
        """Test that skipped remediation leaves the reason alone"""
        decision = Decision(block=True, reason="blocked")

        enrich_with_remediation(decision, self._results(RemediationResult("log", True, "ok"), executed=False))

        assert decision.reason == "blocked"

    def test_empty_results_is_noop(self):
        """Test that empty results leave the reason alone"""
        decision = Decision(block=True, reason="blocked")

        enrich_with_remediation(decision, self._results())

        assert decision.reason == "blocked"

    def test_appends_summary_after_blank_line(self):
        """Test appends summary after blank line"""
        decision = Decision(block=True, reason="blocked")
        results = self._results(
            RemediationResult("log", True, "Logged 2 findings to audit.log", duration=0.003),
            RemediationResult("webhook", False, "Webhook to hooks.example.com returned HTTP 500", duration=1.5),
        )

        enrich_with_remediation(decision, results)

        assert decision.reason == (
            "blocked\n\n"
            "Remediation actions taken (2 strategies, 12ms total):\n"
            "  ✓ Logged 2 findings to audit.log (3ms)\n"
            "  ✗ Webhook to hooks.example.com returned HTTP 500 (1.5s)"
        )

    def test_empty_reason_gets_summary_only(self):
        """Test empty reason gets summary only"""
        decision = Decision(block=False, reason="")

        enrich_with_remediation(decision, self._results(RemediationResult("log", True, "ok", duration=0.01)))

        assert decision.reason.startswith("Remediation actions taken (1 strategy, ")

    @pytest.mark.parametrize("block", [True, False])
    def test_block_flag_untouched(self, block):
        """Test block flag untouched"""
        decision = Decision(block=block, reason="x")

        enrich_with_remediation(decision, self._results(RemediationResult("log", False, "failed")))

        assert decision.block is block
