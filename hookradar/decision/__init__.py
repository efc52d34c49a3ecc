"""
Decision layer

- engine: severity-threshold filtering and the block/allow decision
- enrichment: appends the remediation report to the decision reason
"""

from .engine import DecisionEngine
from .enrichment import enrich_with_remediation, format_duration

__all__ = [
    "DecisionEngine",
    "enrich_with_remediation",
    "format_duration",
]
