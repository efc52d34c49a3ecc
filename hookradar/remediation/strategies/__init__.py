# hookradar/remediation/strategies/__init__.py
from typing import Dict, Type

from hookradar.remediation.strategies.base import BaseRemediationStrategy, build_event
from hookradar.remediation.strategies.log import LogStrategy
from hookradar.remediation.strategies.webhook import WebhookStrategy

# Built-in strategy implementations keyed by the `type` used in protocol configs
STRATEGY_TYPES: Dict[str, Type[BaseRemediationStrategy]] = {
    LogStrategy.strategy_type: LogStrategy,
    WebhookStrategy.strategy_type: WebhookStrategy,
}

__all__ = [
    "BaseRemediationStrategy",
    "LogStrategy",
    "STRATEGY_TYPES",
    "WebhookStrategy",
    "build_event",
]
