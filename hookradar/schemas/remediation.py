# hookradar/schemas/remediation.py
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from hookradar.schemas.decision import Decision
from hookradar.schemas.finding import ScanResults
from hookradar.schemas.hook import HookInput


@dataclass
class RemediationInput:
    """Read-only bundle handed to every strategy"""

    scan_results: ScanResults
    hook_input: HookInput
    decision: Decision
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    framework: str = ""


@dataclass
class RemediationResult:
    strategy_type: str
    success: bool
    message: str
    duration: float = 0.0  # seconds
    metadata: Dict[str, Any] = field(default_factory=dict)
    error: Optional[BaseException] = None


@dataclass
class RemediationResults:
    """
    Outcome of one remediation pass.

    `executed` is False when remediation is disabled or no protocol matched.
    `results` is in completion order, not configuration order.
    """

    executed: bool = False
    results: List[RemediationResult] = field(default_factory=list)
    total_duration: float = 0.0
    protocol_name: str = ""
