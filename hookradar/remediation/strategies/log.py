# hookradar/remediation/strategies/log.py
import asyncio
import json
import os
from pathlib import Path

from hookradar.core.config import StrategySettings
from hookradar.core.exceptions import StrategyValidationError
from hookradar.remediation.context import RemediationContext
from hookradar.remediation.strategies.base import (
    BaseRemediationStrategy,
    build_event,
    pluralize_findings,
)
from hookradar.schemas.remediation import RemediationInput, RemediationResult


class LogStrategy(BaseRemediationStrategy):
    """Appends finding details to a log file, as JSON lines or readable text"""

    strategy_type = "log"
    FORMATS = ("json", "text")

    def __init__(self, log_file: str, format: str = "json"):
        self.log_file = log_file
        self.format = format or "json"

    @classmethod
    def from_config(cls, cfg: StrategySettings) -> "LogStrategy":
        log_file = cfg.config.get("log_file")
        if not isinstance(log_file, str) or not log_file:
            raise StrategyValidationError("log_file is required")

        fmt = cfg.config.get("format") or "json"
        strategy = cls(log_file=log_file, format=str(fmt))
        strategy.validate()
        return strategy

    def validate(self) -> None:
        if not self.log_file:
            raise StrategyValidationError("log_file cannot be empty")
        if self.format not in self.FORMATS:
            raise StrategyValidationError(f"format must be 'json' or 'text', got: {self.format}")

    async def execute(
        self,
        context: RemediationContext,
        remediation_input: RemediationInput,
    ) -> RemediationResult:
        if context.cancelled:
            return self.cancelled(context, "Log operation cancelled")

        try:
            log_path = self.expand_path(self.log_file)
        except RuntimeError as e:
            return self.failure(f"Failed to expand log path: {e}", e)

        try:
            await asyncio.to_thread(log_path.parent.mkdir, parents=True, exist_ok=True)
        except OSError as e:
            return self.failure(f"Failed to create log directory: {e}", e)

        if self.format == "json":
            content = self.format_json(remediation_input)
        else:
            content = self.format_text(remediation_input)

        if context.cancelled:
            return self.cancelled(context, "Log operation cancelled before write")

        try:
            await asyncio.to_thread(self._append, log_path, content)
        except OSError as e:
            return self.failure(f"Failed to write to log file: {e}", e)

        finding_count = len(remediation_input.scan_results.findings)
        return self.success(
            f"Logged {pluralize_findings(finding_count)} to {log_path.name}",
            log_file=str(log_path),
            format=self.format,
            finding_count=finding_count,
        )

    @staticmethod
    def expand_path(path: str) -> Path:
        if path.startswith("~"):
            return Path(os.path.expanduser(path))
        return Path(path)

    @staticmethod
    def _append(path: Path, content: str) -> None:
        with open(path, "a", encoding="utf-8") as f:
            f.write(content + "\n")

    def format_json(self, remediation_input: RemediationInput) -> str:
        return json.dumps(build_event(remediation_input))

    def format_text(self, remediation_input: RemediationInput) -> str:
        timestamp = remediation_input.timestamp.strftime("%Y-%m-%d %H:%M:%S")
        findings = remediation_input.scan_results.findings
        blocked = "true" if remediation_input.decision.block else "false"

        lines = [
            f"[{timestamp}] Framework: {remediation_input.framework} | "
            f"Session: {remediation_input.hook_input.session_id} | "
            f"Findings: {len(findings)} | Blocked: {blocked}"
        ]
        for finding in findings:
            line = f"  - [{finding.severity.upper()}] {finding.type}"
            if finding.description:
                line += f": {finding.description}"
            if finding.location:
                line += f" ({finding.location})"
            lines.append(line)

        return "\n".join(lines)
