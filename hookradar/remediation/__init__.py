"""
hook-radar Remediation Engine

Runs remediation actions when a scan outcome matches a configured protocol.

Core components:
- context: shared deadline and cooperative cancellation token
- protocol: trigger evaluation (which protocol should run)
- registry: strategy lookup table keyed by strategy type
- engine: first-match protocol selection and concurrent strategy execution
- strategies: the built-in remediation actions (log, webhook)

Usage:
    from hookradar.remediation import RemediationEngine, build_strategy_registry

    registry = build_strategy_registry(settings.remediation)
    engine = RemediationEngine(settings.remediation, registry)
    results = await engine.execute(remediation_input)

    for r in results.results:
        print(r.strategy_type, r.success, r.message)  # completion order
"""

from .context import RemediationContext
from .engine import RemediationEngine
from .protocol import Protocol, match_pattern
from .registry import StrategyRegistry, build_strategy_registry

__all__ = [
    "Protocol",
    "RemediationContext",
    "RemediationEngine",
    "StrategyRegistry",
    "build_strategy_registry",
    "match_pattern",
]
