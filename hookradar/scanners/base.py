# hookradar/scanners/base.py
from abc import ABC, abstractmethod

from hookradar.schemas.finding import ScanContent, ScanResults


class BaseScanner(ABC):
    """Abstract base class for secret scanners"""

    name: str

    @abstractmethod
    async def scan(self, content: ScanContent) -> ScanResults:
        """
        Scan content for secrets.

        Infrastructure failures are reported through `ScanResults.error`
        rather than raised, so the decision engine can apply its fail-open
        policy.
        """
        pass
