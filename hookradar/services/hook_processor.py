# hookradar/services/hook_processor.py
"""
Hook processing pipeline for one invocation.

stdin payload → framework parse → handler extract → scan → decide →
remediate → enrich → framework envelope.
"""
import logging
from datetime import datetime, timezone
from typing import Optional, Tuple

from hookradar.core.config import Settings
from hookradar.decision.engine import DecisionEngine
from hookradar.decision.enrichment import enrich_with_remediation
from hookradar.frameworks.registry import FrameworkRegistry, default_framework_registry
from hookradar.remediation.engine import RemediationEngine
from hookradar.remediation.registry import StrategyRegistry, build_strategy_registry
from hookradar.scanners.base import BaseScanner
from hookradar.scanners.vault_radar import VaultRadarScanner
from hookradar.schemas.remediation import RemediationInput

logger = logging.getLogger(__name__)


class HookProcessor:
    """Wires scanner, decision engine and remediation engine together"""

    def __init__(
        self,
        settings: Settings,
        scanner: Optional[BaseScanner] = None,
        frameworks: Optional[FrameworkRegistry] = None,
        registry: Optional[StrategyRegistry] = None,
    ):
        self.settings = settings
        self.scanner = scanner or VaultRadarScanner(settings.vault_radar)
        self.frameworks = frameworks or default_framework_registry()
        self.decision_engine = DecisionEngine(settings.decision)
        self.remediation_engine = RemediationEngine(
            settings.remediation,
            registry if registry is not None else build_strategy_registry(settings.remediation),
        )

    async def process(self, raw_input: str, framework_name: str) -> Tuple[str, int]:
        """Return the response document and the process exit code"""
        logger.info("Processing hook request", extra={"framework": framework_name})

        framework = self.frameworks.get(framework_name)
        hook_input = framework.parse_input(raw_input)
        logger.info(
            "Parsed hook input",
            extra={"framework": hook_input.framework, "hook_type": hook_input.hook_type},
        )

        handler = framework.get_handler(hook_input)
        content = await handler.extract_content(hook_input)
        logger.debug(
            "Extracted content",
            extra={"content_type": content.type, "content_length": len(content.content)},
        )

        scan_results = await self.scanner.scan(content)

        decision = self.decision_engine.evaluate(scan_results)
        logger.info("Decision made", extra={"block": decision.block})

        remediation_results = await self.remediation_engine.execute(
            RemediationInput(
                scan_results=scan_results,
                hook_input=hook_input,
                decision=decision,
                timestamp=datetime.now(timezone.utc),
                framework=framework_name,
            )
        )

        if remediation_results.executed:
            logger.info(
                "Remediation executed",
                extra={
                    "protocol": remediation_results.protocol_name,
                    "strategies": len(remediation_results.results),
                    "duration_ms": int(remediation_results.total_duration * 1000),
                },
            )
            enrich_with_remediation(decision, remediation_results)

        output = framework.format_output(decision, hook_input)
        logger.info("Hook processing completed")
        return output, framework.get_exit_code(decision)
