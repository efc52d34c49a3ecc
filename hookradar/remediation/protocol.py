# hookradar/remediation/protocol.py
from typing import List

from hookradar.core.config import ProtocolSettings, StrategySettings, TriggerSettings
from hookradar.core.constants import severity_level
from hookradar.schemas.finding import Finding
from hookradar.schemas.remediation import RemediationInput


class Protocol:
    """A named set of strategies and the triggers that select it"""

    def __init__(
        self,
        name: str,
        triggers: TriggerSettings,
        strategies: List[StrategySettings],
    ):
        self.name = name
        self.triggers = triggers
        self.strategies = strategies

    @classmethod
    def from_settings(cls, cfg: ProtocolSettings) -> "Protocol":
        return cls(name=cfg.name, triggers=cfg.triggers, strategies=list(cfg.strategies))

    def should_execute(self, remediation_input: RemediationInput) -> bool:
        """
        AND of every active trigger.

        A protocol with neither on_block nor on_findings set never runs.
        Severity and finding-type conditions only apply when there are findings.
        """
        triggers = self.triggers
        scan = remediation_input.scan_results

        if triggers.on_block and not remediation_input.decision.block:
            return False

        if triggers.on_findings and not scan.has_findings:
            return False

        if not triggers.on_block and not triggers.on_findings:
            return False

        if triggers.severity_threshold and scan.has_findings:
            if not matches_severity_threshold(scan.findings, triggers.severity_threshold):
                return False

        if triggers.finding_types and scan.has_findings:
            if not matches_finding_types(scan.findings, triggers.finding_types):
                return False

        return True

    def __repr__(self) -> str:
        return f"Protocol(name={self.name!r}, strategies={[s.type for s in self.strategies]!r})"


def matches_severity_threshold(findings: List[Finding], threshold: str) -> bool:
    """True if any finding meets or exceeds the threshold"""
    threshold_level = severity_level(threshold)
    return any(severity_level(f.severity) >= threshold_level for f in findings)


def matches_finding_types(findings: List[Finding], patterns: List[str]) -> bool:
    """True if any finding type matches any pattern"""
    return any(match_pattern(f.type, pattern) for f in findings for pattern in patterns)


def match_pattern(value: str, pattern: str) -> bool:
    """
    Glob-style match where `*` stands for any run of characters.

    Without a `*` the match is exact. "aws_*" matches "aws_access_key_id"
    but not "github_token"; "*_token" and "aws*key*id" work as expected.
    The prefix and suffix may not overlap, so "ab*ab" does not match "ab",
    unlike a plain in-order substring search.
    """
    if pattern == "*":
        return True

    if "*" not in pattern:
        return value == pattern

    parts = pattern.split("*")
    prefix, suffix = parts[0], parts[-1]

    if len(value) < len(prefix) + len(suffix):
        return False
    if not value.startswith(prefix) or not value.endswith(suffix):
        return False

    pos = len(prefix)
    end = len(value) - len(suffix)
    for part in parts[1:-1]:
        if not part:
            continue
        idx = value.find(part, pos, end)
        if idx == -1:
            return False
        pos = idx + len(part)

    return True
