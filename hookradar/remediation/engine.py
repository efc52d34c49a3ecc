# hookradar/remediation/engine.py
import asyncio
import logging
import time
from typing import Dict, List, Optional

from hookradar.core.config import RemediationSettings
from hookradar.core.exceptions import RemediationTimeoutError, StrategyNotFoundError
from hookradar.remediation.context import RemediationContext
from hookradar.remediation.protocol import Protocol
from hookradar.remediation.registry import StrategyRegistry
from hookradar.remediation.strategies import BaseRemediationStrategy
from hookradar.schemas.remediation import (
    RemediationInput,
    RemediationResult,
    RemediationResults,
)

logger = logging.getLogger(__name__)


class ResultCollector:
    """Gathers strategy results in completion order until it is closed"""

    def __init__(self):
        self.results: List[RemediationResult] = []
        self._open = True

    def deliver(self, result: RemediationResult) -> bool:
        if not self._open:
            return False
        self.results.append(result)
        return True

    def close(self) -> None:
        self._open = False

    def abandon(self, strategy_type: str, elapsed: float, error: RemediationTimeoutError) -> None:
        self.results.append(
            RemediationResult(
                strategy_type=strategy_type,
                success=False,
                message="Strategy did not complete before the remediation deadline",
                duration=elapsed,
                error=error,
            )
        )


class RemediationEngine:
    """
    Orchestrates remediation protocols.

    The first protocol whose triggers match runs; all of its strategies run
    concurrently under one shared deadline. A failing, crashing or slow
    strategy never aborts its siblings or the call: every configured strategy
    yields exactly one result.
    """

    def __init__(self, settings: RemediationSettings, registry: Optional[StrategyRegistry] = None):
        self.settings = settings
        self.registry = registry if registry is not None else StrategyRegistry()

    def register_strategy(self, strategy: BaseRemediationStrategy) -> None:
        self.registry.register(strategy)

    def select_protocol(self, remediation_input: RemediationInput) -> Optional[Protocol]:
        """First protocol, in configured order, whose triggers match"""
        for protocol_cfg in self.settings.protocols:
            protocol = Protocol.from_settings(protocol_cfg)
            if protocol.should_execute(remediation_input):
                return protocol
        return None

    async def execute(self, remediation_input: RemediationInput) -> RemediationResults:
        if not self.settings.enabled:
            logger.debug("Remediation disabled, skipping")
            return RemediationResults(executed=False)

        protocol = self.select_protocol(remediation_input)
        if protocol is None:
            logger.debug("No remediation protocol matched triggers")
            return RemediationResults(executed=False)

        logger.info(f"Matched remediation protocol: {protocol.name}", extra={"protocol": protocol.name})
        return await self.execute_protocol(protocol, remediation_input)

    async def execute_protocol(
        self,
        protocol: Protocol,
        remediation_input: RemediationInput,
    ) -> RemediationResults:
        start_time = time.monotonic()
        context = RemediationContext(self.settings.timeout_seconds)

        if not protocol.strategies:
            logger.warning(f"Protocol {protocol.name} has no strategies", extra={"protocol": protocol.name})
            return RemediationResults(executed=True, results=[], protocol_name=protocol.name)

        collector = ResultCollector()
        tasks: Dict[asyncio.Task, str] = {}

        for strategy_cfg in protocol.strategies:
            try:
                strategy = self.registry.get(strategy_cfg.type)
            except StrategyNotFoundError as e:
                logger.warning(f"Unknown strategy type: {strategy_cfg.type}", extra={"protocol": protocol.name})
                collector.deliver(
                    RemediationResult(
                        strategy_type=strategy_cfg.type,
                        success=False,
                        message=f"Unknown strategy type: {strategy_cfg.type}",
                        error=e,
                    )
                )
                continue

            task = asyncio.create_task(
                self._execute_strategy(strategy, context, remediation_input, collector),
                name=f"remediation-{strategy.strategy_type}",
            )
            tasks[task] = strategy.strategy_type

        if tasks:
            _, pending = await asyncio.wait(tasks.keys(), timeout=context.remaining())
            if pending:
                # Stop listening; stragglers see the cancelled context and
                # their late results are dropped.
                context.cancel()
                collector.close()
                elapsed = time.monotonic() - start_time
                for task in pending:
                    strategy_type = tasks[task]
                    logger.warning(
                        f"Strategy {strategy_type} did not complete before the remediation deadline",
                        extra={"protocol": protocol.name, "timeout_seconds": context.timeout},
                    )
                    collector.abandon(
                        strategy_type,
                        elapsed,
                        RemediationTimeoutError(
                            f"strategy {strategy_type!r} exceeded the {context.timeout:g}s remediation deadline"
                        ),
                    )

        total_duration = time.monotonic() - start_time

        logger.info(
            f"Remediation protocol {protocol.name} completed",
            extra={
                "protocol": protocol.name,
                "strategies": len(collector.results),
                "duration_ms": int(total_duration * 1000),
            },
        )

        return RemediationResults(
            executed=True,
            results=collector.results,
            total_duration=total_duration,
            protocol_name=protocol.name,
        )

    async def _execute_strategy(
        self,
        strategy: BaseRemediationStrategy,
        context: RemediationContext,
        remediation_input: RemediationInput,
        collector: ResultCollector,
    ) -> None:
        """Run one strategy inside a fault boundary and hand its result to the collector"""
        strategy_type = strategy.strategy_type
        logger.debug(f"Executing strategy: {strategy_type}")

        start_time = time.monotonic()
        try:
            result = await strategy.execute(context, remediation_input)
            if not isinstance(result, RemediationResult):
                raise TypeError(f"strategy returned {type(result).__name__}, expected RemediationResult")
        except Exception as e:
            logger.error(f"Strategy {strategy_type} raised during execution: {e}", exc_info=True)
            result = RemediationResult(
                strategy_type=strategy_type,
                success=False,
                message="Strategy raised an unexpected error",
                error=e,
            )

        result.duration = time.monotonic() - start_time
        result.strategy_type = strategy_type

        logger.debug(
            f"Strategy {strategy_type} completed",
            extra={"success": result.success, "duration_ms": int(result.duration * 1000)},
        )

        if not collector.deliver(result):
            logger.warning(f"Remediation deadline passed, discarding late result from {strategy_type}")
