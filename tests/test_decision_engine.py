"""
Decision engine tests
Tests: fail-open on scan errors, threshold filtering, reason message
"""

import pytest

from hookradar.core.config import DecisionSettings
from hookradar.core.constants import SEVERITY_LEVELS, severity_level
from hookradar.core.exceptions import ScannerError
from hookradar.decision.engine import DecisionEngine, build_reason_message
from tests.factories import make_finding, make_scan_results


class TestDecisionEngine:
    """Test block/allow decisions"""

    def test_no_findings_allows(self, decision_settings):
        """Test no findings allows"""
        decision = DecisionEngine(decision_settings).evaluate(make_scan_results())

        assert decision.block is False
        assert decision.reason == ""
        assert decision.metadata == {}

    def test_scan_error_fails_open(self, decision_settings):
        """Test scan error fails open"""
        results = make_scan_results([make_finding(severity="critical")], error=ScannerError("binary missing"))

        decision = DecisionEngine(decision_settings).evaluate(results)

        assert decision.block is False
        assert decision.metadata["scan_error"] == "binary missing"

    def test_scan_error_fails_closed_when_configured(self):
        """Test scan error fails closed when configured"""
        settings = DecisionSettings(fail_open=False)
        results = make_scan_results(error=ScannerError("timed out"))

        decision = DecisionEngine(settings).evaluate(results)

        assert decision.block is True
        assert "timed out" in decision.reason
        assert decision.metadata["scan_error"] == "timed out"

    def test_high_finding_blocks_at_high_threshold(self, decision_settings, high_finding):
        """Test high finding blocks at high threshold"""
        decision = DecisionEngine(decision_settings).evaluate(make_scan_results([high_finding]))

        assert decision.block is True
        assert "1 security finding" in decision.reason
        assert "github_token" in decision.reason
        assert decision.metadata["finding_count"] == 1

    def test_high_finding_allowed_at_critical_threshold(self, high_finding):
        """Test high finding allowed at critical threshold"""
        settings = DecisionSettings(severity_threshold="critical")

        decision = DecisionEngine(settings).evaluate(make_scan_results([high_finding]))

        assert decision.block is False
        assert decision.metadata["filtered_findings"] == [high_finding]

    def test_below_threshold_findings_never_block(self, decision_settings):
        """Test below threshold findings never block"""
        findings = [make_finding(severity=s) for s in ("low", "medium", "info", "bogus")]

        decision = DecisionEngine(decision_settings).evaluate(make_scan_results(findings))

        assert decision.block is False

    def test_only_relevant_findings_reported(self, decision_settings, sample_findings):
        """Test only relevant findings reported"""
        decision = DecisionEngine(decision_settings).evaluate(make_scan_results(sample_findings))

        assert decision.block is True
        assert decision.metadata["findings"] == [sample_findings[1]]
        assert "aws_access_key_id" not in decision.reason

    def test_block_on_findings_disabled_still_records(self, high_finding):
        """Test block on findings disabled still records"""
        settings = DecisionSettings(block_on_findings=False)

        decision = DecisionEngine(settings).evaluate(make_scan_results([high_finding]))

        assert decision.block is False
        assert decision.reason == ""
        assert decision.metadata["findings"] == [high_finding]
        assert decision.metadata["finding_count"] == 1

    def test_evaluation_is_deterministic(self, decision_settings, sample_findings):
        """Test evaluation is deterministic"""
        engine = DecisionEngine(decision_settings)
        first = engine.evaluate(make_scan_results(sample_findings))
        second = engine.evaluate(make_scan_results(sample_findings))

        assert first == second


class TestThresholdMonotonicity:
    """Lower thresholds block on a superset of findings"""

    def test_blocking_sets_are_nested(self):
        """Test blocking sets are nested"""
        findings = [make_finding(severity=s, type=f"t_{s}") for s in ("low", "medium", "info", "high", "critical", "x")]
        thresholds = sorted(SEVERITY_LEVELS, key=severity_level)

        for lower, higher in zip(thresholds, thresholds[1:]):
            low_set = DecisionEngine(DecisionSettings(severity_threshold=lower)).filter_by_severity(findings)
            high_set = DecisionEngine(DecisionSettings(severity_threshold=higher)).filter_by_severity(findings)
            assert set(f.type for f in high_set) <= set(f.type for f in low_set)


class TestReasonMessage:
    """Test the human-readable block explanation"""

    def test_single_finding_format(self):
        """Test single finding format"""
        finding = make_finding(severity="high", type="github_token", location="prompt", description="GitHub token")

        reason = build_reason_message([finding])

        assert reason == (
            "\nVault Radar detected 1 security finding:\n\n"
            "1. [HIGH] github_token: GitHub token (prompt)\n"
            "\nPlease remove or redact sensitive information before proceeding."
        )

    def test_plural_and_numbering(self):
        """Test plural and numbering"""
        findings = [
            make_finding(severity="critical", type="aws_secret_key"),
            make_finding(severity="high", type="github_token"),
        ]

        reason = build_reason_message(findings)

        assert "2 security findings:" in reason
        assert "1. [CRITICAL] aws_secret_key" in reason
        assert "2. [HIGH] github_token" in reason

    def test_optional_parts_omitted(self):
        """Test optional parts omitted"""
        finding = make_finding(severity="high", type="secret", location="", description="")

        reason = build_reason_message([finding])

        assert "1. [HIGH] secret\n" in reason

    def test_empty_findings(self):
        """Test empty findings"""
        assert build_reason_message([]) == "Security scan completed with no findings"
