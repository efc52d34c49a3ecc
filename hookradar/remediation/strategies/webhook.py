# hookradar/remediation/strategies/webhook.py
from typing import Dict, Optional

import httpx

from hookradar.core.config import StrategySettings
from hookradar.core.exceptions import StrategyValidationError
from hookradar.remediation.context import RemediationContext
from hookradar.remediation.strategies.base import (
    BaseRemediationStrategy,
    build_event,
    pluralize_findings,
)
from hookradar.schemas.remediation import RemediationInput, RemediationResult

DEFAULT_TIMEOUT_SECONDS = 10.0


class WebhookStrategy(BaseRemediationStrategy):
    """POSTs the finding report as JSON to an HTTP endpoint"""

    strategy_type = "webhook"

    def __init__(
        self,
        url: str,
        headers: Optional[Dict[str, str]] = None,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.url = url
        self.headers = headers or {}
        self.timeout_seconds = timeout_seconds
        self._transport = transport

    @classmethod
    def from_config(cls, cfg: StrategySettings) -> "WebhookStrategy":
        url = cfg.config.get("url")
        if not isinstance(url, str) or not url:
            raise StrategyValidationError("url is required")

        headers = cfg.config.get("headers") or {}
        if not isinstance(headers, dict):
            raise StrategyValidationError("headers must be a mapping")

        try:
            timeout = float(cfg.config.get("timeout_seconds", DEFAULT_TIMEOUT_SECONDS))
        except (TypeError, ValueError) as e:
            raise StrategyValidationError(f"timeout_seconds must be a number: {e}") from e

        strategy = cls(
            url=url,
            headers={str(k): str(v) for k, v in headers.items()},
            timeout_seconds=timeout,
        )
        strategy.validate()
        return strategy

    def validate(self) -> None:
        try:
            parsed = httpx.URL(self.url)
        except httpx.InvalidURL as e:
            raise StrategyValidationError(f"invalid webhook url: {e}") from e

        if parsed.scheme not in ("http", "https") or not parsed.host:
            raise StrategyValidationError(f"webhook url must be http(s) with a host, got: {self.url}")
        if self.timeout_seconds <= 0:
            raise StrategyValidationError("timeout_seconds must be positive")

    async def execute(
        self,
        context: RemediationContext,
        remediation_input: RemediationInput,
    ) -> RemediationResult:
        if context.cancelled:
            return self.cancelled(context, "Webhook delivery cancelled")

        timeout = self.timeout_seconds
        remaining = context.remaining()
        if remaining is not None:
            timeout = min(timeout, remaining)

        finding_count = len(remediation_input.scan_results.findings)
        host = httpx.URL(self.url).host

        try:
            async with httpx.AsyncClient(timeout=timeout, transport=self._transport) as client:
                response = await client.post(
                    self.url,
                    json=build_event(remediation_input),
                    headers=self.headers,
                )
                response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status_code = e.response.status_code
            return self.failure(
                f"Webhook to {host} returned HTTP {status_code}",
                e,
                url=self.url,
                status_code=status_code,
            )
        except httpx.HTTPError as e:
            return self.failure(f"Webhook to {host} failed: {e}", e, url=self.url)

        return self.success(
            f"Sent {pluralize_findings(finding_count)} to {host}",
            url=self.url,
            status_code=response.status_code,
            finding_count=finding_count,
        )
