"""Builders and fake strategies shared by the test modules"""

import asyncio
from datetime import datetime, timezone
from typing import List, Optional

from hookradar.core.config import (
    ProtocolSettings,
    RemediationSettings,
    StrategySettings,
    TriggerSettings,
)
from hookradar.core.exceptions import StrategyValidationError
from hookradar.remediation.context import RemediationContext
from hookradar.remediation.strategies import BaseRemediationStrategy
from hookradar.schemas import (
    Decision,
    Finding,
    HookInput,
    RemediationInput,
    RemediationResult,
    ScanResults,
)


# ==================== Builders ====================


def make_finding(
    severity: str = "high",
    type: str = "aws_access_key_id",
    location: str = "prompt",
    description: str = "AWS access key ID",
) -> Finding:
    return Finding(severity=severity, type=type, location=location, description=description)


def make_scan_results(findings: Optional[List[Finding]] = None, error: Optional[BaseException] = None) -> ScanResults:
    findings = findings or []
    return ScanResults(has_findings=bool(findings), findings=findings, duration=0.01, error=error)


def make_input(
    findings: Optional[List[Finding]] = None,
    block: bool = True,
    session_id: str = "test-session-123",
) -> RemediationInput:
    return RemediationInput(
        scan_results=make_scan_results(findings),
        hook_input=HookInput(
            framework="claude",
            hook_type="UserPromptSubmit",
            raw_data={"session_id": session_id, "hook_event_name": "UserPromptSubmit"},
        ),
        decision=Decision(block=block, reason="Security findings detected"),
        timestamp=datetime(2025, 10, 16, 14, 30, 45, tzinfo=timezone.utc),
        framework="claude",
    )


def make_remediation_settings(
    strategies: List[str],
    enabled: bool = True,
    timeout_seconds: float = 5,
    triggers: Optional[TriggerSettings] = None,
    name: str = "block-protocol",
) -> RemediationSettings:
    return RemediationSettings(
        enabled=enabled,
        timeout_seconds=timeout_seconds,
        protocols=[
            ProtocolSettings(
                name=name,
                triggers=triggers or TriggerSettings(on_block=True),
                strategies=[StrategySettings(type=t) for t in strategies],
            )
        ],
    )


# ==================== Fake strategies ====================


class StaticStrategy(BaseRemediationStrategy):
    """Sleeps, then succeeds or fails with a fixed message"""

    def __init__(self, strategy_type: str = "static", succeed: bool = True, delay: float = 0.0):
        self.strategy_type = strategy_type
        self.succeed = succeed
        self.delay = delay
        self.calls = 0

    @classmethod
    def from_config(cls, cfg: StrategySettings) -> "StaticStrategy":
        return cls(cfg.type)

    async def execute(self, context: RemediationContext, remediation_input: RemediationInput) -> RemediationResult:
        self.calls += 1
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.succeed:
            return self.success(f"{self.strategy_type} done")
        return self.failure(f"{self.strategy_type} failed", RuntimeError("static failure"))


class RaisingStrategy(BaseRemediationStrategy):
    strategy_type = "raising"

    @classmethod
    def from_config(cls, cfg: StrategySettings) -> "RaisingStrategy":
        return cls()

    async def execute(self, context, remediation_input):
        raise RuntimeError("strategy exploded")


class CooperativeSlowStrategy(BaseRemediationStrategy):
    """Polls the context until cancelled, then reports a cancelled failure"""

    strategy_type = "slow"

    def __init__(self):
        self.finished = asyncio.Event()

    @classmethod
    def from_config(cls, cfg: StrategySettings) -> "CooperativeSlowStrategy":
        return cls()

    async def execute(self, context, remediation_input):
        try:
            for _ in range(500):
                if context.cancelled:
                    return self.cancelled(context, "Slow operation cancelled")
                await asyncio.sleep(0.01)
            return self.success("slow done")
        finally:
            self.finished.set()


class InvalidStrategy(BaseRemediationStrategy):
    strategy_type = "invalid"

    @classmethod
    def from_config(cls, cfg: StrategySettings) -> "InvalidStrategy":
        return cls()

    async def execute(self, context, remediation_input):
        return self.success("never runs")

    def validate(self) -> None:
        raise StrategyValidationError("missing required option")


