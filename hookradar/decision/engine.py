# hookradar/decision/engine.py
import logging
from typing import List

from hookradar.core.config import DecisionSettings
from hookradar.core.constants import BLOCK_ADVICE, severity_level
from hookradar.schemas.decision import Decision
from hookradar.schemas.finding import Finding, ScanResults

logger = logging.getLogger(__name__)


class DecisionEngine:
    """
    Turns scan results into a block/allow decision.

    Pure function of the scan results and the decision settings: identical
    inputs always give identical decisions, and nothing is raised.
    """

    def __init__(self, settings: DecisionSettings):
        self.settings = settings

    def evaluate(self, results: ScanResults) -> Decision:
        decision = Decision(block=False, metadata={})

        if results.error is not None:
            decision.metadata["scan_error"] = str(results.error)
            if not self.settings.fail_open:
                decision.block = True
                decision.reason = f"Security scan failed: {results.error}"
            policy = "open" if self.settings.fail_open else "closed"
            logger.warning(f"Scan error, applying fail-{policy} policy", extra={"error": str(results.error)})
            return decision

        if not results.has_findings or not results.findings:
            return decision

        relevant = self.filter_by_severity(results.findings)

        if not relevant:
            decision.metadata["filtered_findings"] = list(results.findings)
            logger.debug(
                "no findings meet severity threshold",
                extra={"threshold": self.settings.severity_threshold, "finding_count": len(results.findings)},
            )
            return decision

        decision.metadata["findings"] = relevant
        decision.metadata["finding_count"] = len(relevant)

        if self.settings.block_on_findings:
            decision.block = True
            decision.reason = build_reason_message(relevant)

        return decision

    def filter_by_severity(self, findings: List[Finding]) -> List[Finding]:
        """Keep findings at or above the configured threshold, in scanner order"""
        threshold = severity_level(self.settings.severity_threshold)
        return [f for f in findings if severity_level(f.severity) >= threshold]


def build_reason_message(findings: List[Finding]) -> str:
    """Human-readable explanation of why the action was blocked"""
    if not findings:
        return "Security scan completed with no findings"

    count = len(findings)
    noun = "security finding" if count == 1 else "security findings"
    lines = [f"\nVault Radar detected {count} {noun}:\n"]

    for i, finding in enumerate(findings, start=1):
        line = f"{i}. [{finding.severity.upper()}] {finding.type}"
        if finding.description:
            line += f": {finding.description}"
        if finding.location:
            line += f" ({finding.location})"
        lines.append(line)

    return "\n".join(lines) + "\n\n" + BLOCK_ADVICE
