# hookradar/schemas/__init__.py
from hookradar.schemas.decision import Decision
from hookradar.schemas.finding import Finding, ScanContent, ScanResults
from hookradar.schemas.hook import HookInput
from hookradar.schemas.remediation import (
    RemediationInput,
    RemediationResult,
    RemediationResults,
)

__all__ = [
    "Decision",
    "Finding",
    "HookInput",
    "RemediationInput",
    "RemediationResult",
    "RemediationResults",
    "ScanContent",
    "ScanResults",
]
