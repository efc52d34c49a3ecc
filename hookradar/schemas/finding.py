# hookradar/schemas/finding.py
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict


class Finding(BaseModel):
    """A single scanner finding. Immutable once the scanner produced it."""

    model_config = ConfigDict(frozen=True)

    severity: str
    type: str
    location: str = ""
    description: str = ""


@dataclass
class ScanContent:
    type: str  # "text", "file" or "directory"
    content: str
    metadata: Dict[str, str] = field(default_factory=dict)


@dataclass
class ScanResults:
    has_findings: bool = False
    findings: List[Finding] = field(default_factory=list)
    duration: float = 0.0
    error: Optional[BaseException] = None
