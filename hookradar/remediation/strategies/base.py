# hookradar/remediation/strategies/base.py
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from hookradar.core.config import StrategySettings
from hookradar.remediation.context import RemediationContext
from hookradar.schemas.remediation import RemediationInput, RemediationResult


class BaseRemediationStrategy(ABC):
    """Abstract base class for all remediation strategies"""

    strategy_type: str = ""

    @classmethod
    @abstractmethod
    def from_config(cls, cfg: StrategySettings) -> "BaseRemediationStrategy":
        """Build the strategy from its protocol config; raise StrategyValidationError if invalid"""
        pass

    @abstractmethod
    async def execute(
        self,
        context: RemediationContext,
        remediation_input: RemediationInput,
    ) -> RemediationResult:
        """Perform the remediation action. Must not mutate the input."""
        pass

    def validate(self) -> None:
        """Raise StrategyValidationError when the configuration is unusable"""
        pass

    def success(self, message: str, **metadata: Any) -> RemediationResult:
        return RemediationResult(
            strategy_type=self.strategy_type,
            success=True,
            message=message,
            metadata=metadata,
        )

    def failure(
        self,
        message: str,
        error: Optional[BaseException] = None,
        **metadata: Any,
    ) -> RemediationResult:
        return RemediationResult(
            strategy_type=self.strategy_type,
            success=False,
            message=message,
            metadata=metadata,
            error=error,
        )

    def cancelled(self, context: RemediationContext, message: str) -> RemediationResult:
        return self.failure(message, context.error())


def format_timestamp(ts: datetime) -> str:
    """RFC 3339 with a Z suffix for UTC"""
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return ts.astimezone(timezone.utc).isoformat(timespec="seconds").replace("+00:00", "Z")


def build_event(remediation_input: RemediationInput) -> Dict[str, Any]:
    """JSON-safe description of the hook invocation shared by log and webhook"""
    findings = remediation_input.scan_results.findings
    return {
        "timestamp": format_timestamp(remediation_input.timestamp),
        "framework": remediation_input.framework,
        "session_id": remediation_input.hook_input.session_id,
        "blocked": remediation_input.decision.block,
        "finding_count": len(findings),
        "findings": [f.model_dump() for f in findings],
    }


def pluralize_findings(count: int) -> str:
    return "1 finding" if count == 1 else f"{count} findings"
