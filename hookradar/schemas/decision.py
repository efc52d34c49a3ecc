# hookradar/schemas/decision.py
from dataclasses import dataclass, field
from typing import Any, Dict


@dataclass
class Decision:
    """
    Block/allow outcome for one hook invocation.

    `reason` is the only field mutated after the decision engine returns it
    (remediation enrichment appends to it).
    """

    block: bool = False
    reason: str = ""
    metadata: Dict[str, Any] = field(default_factory=dict)
    exit_code: int = 0
