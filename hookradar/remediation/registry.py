# hookradar/remediation/registry.py
import logging
import threading
from typing import Dict, List, Optional

from hookradar.core.config import RemediationSettings
from hookradar.core.exceptions import (
    StrategyNotFoundError,
    StrategyRegistrationError,
    StrategyValidationError,
)
from hookradar.remediation.strategies import STRATEGY_TYPES, BaseRemediationStrategy

logger = logging.getLogger(__name__)


class StrategyRegistry:
    """
    Lookup table of remediation strategies keyed by strategy type.

    Populated once at startup; afterwards workers read it concurrently.
    """

    def __init__(self):
        self._strategies: Dict[str, BaseRemediationStrategy] = {}
        self._lock = threading.Lock()

    def register(self, strategy: Optional[BaseRemediationStrategy]) -> None:
        if strategy is None:
            raise StrategyRegistrationError("strategy cannot be None")

        strategy_type = strategy.strategy_type
        if not strategy_type:
            raise StrategyRegistrationError("strategy type cannot be empty")

        try:
            strategy.validate()
        except StrategyValidationError as e:
            raise StrategyRegistrationError(
                f"strategy validation failed: {e}", details={"type": strategy_type}
            ) from e

        with self._lock:
            if strategy_type in self._strategies:
                raise StrategyRegistrationError(
                    f"strategy type {strategy_type!r} is already registered"
                )
            self._strategies[strategy_type] = strategy

        logger.debug(f"Registered remediation strategy: {strategy_type}")

    def get(self, strategy_type: str) -> BaseRemediationStrategy:
        with self._lock:
            strategy = self._strategies.get(strategy_type)
        if strategy is None:
            raise StrategyNotFoundError(f"strategy type {strategy_type!r} not found")
        return strategy

    def has(self, strategy_type: str) -> bool:
        with self._lock:
            return strategy_type in self._strategies

    def list_types(self) -> List[str]:
        with self._lock:
            return sorted(self._strategies)

    def unregister(self, strategy_type: str) -> None:
        with self._lock:
            if strategy_type not in self._strategies:
                raise StrategyNotFoundError(f"strategy type {strategy_type!r} not found")
            del self._strategies[strategy_type]

    def __len__(self) -> int:
        with self._lock:
            return len(self._strategies)


def build_strategy_registry(settings: RemediationSettings) -> StrategyRegistry:
    """
    Instantiate and register every strategy type the protocols reference.

    Each type is built from the first config that mentions it. Unknown types
    and invalid configs are logged and skipped; the engine reports them as
    failed results when their protocol runs.
    """
    registry = StrategyRegistry()

    for protocol in settings.protocols:
        for strategy_cfg in protocol.strategies:
            if registry.has(strategy_cfg.type):
                continue

            strategy_cls = STRATEGY_TYPES.get(strategy_cfg.type)
            if strategy_cls is None:
                logger.warning(
                    f"Unknown strategy type in protocol {protocol.name!r}: {strategy_cfg.type}"
                )
                continue

            try:
                registry.register(strategy_cls.from_config(strategy_cfg))
            except (StrategyValidationError, StrategyRegistrationError) as e:
                logger.warning(
                    f"Failed to register {strategy_cfg.type} strategy: {e}",
                    extra={"protocol": protocol.name},
                )

    return registry
