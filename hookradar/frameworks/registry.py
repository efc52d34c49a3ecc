# hookradar/frameworks/registry.py
import threading
from typing import Dict, List

from hookradar.core.exceptions import FrameworkNotFoundError
from hookradar.frameworks.base import HookFramework
from hookradar.frameworks.claude import ClaudeFramework


class FrameworkRegistry:
    """Hook frameworks available to the processor, keyed by name"""

    def __init__(self):
        self._frameworks: Dict[str, HookFramework] = {}
        self._lock = threading.Lock()

    def register(self, framework: HookFramework) -> None:
        with self._lock:
            self._frameworks[framework.name] = framework

    def get(self, name: str) -> HookFramework:
        with self._lock:
            framework = self._frameworks.get(name)
        if framework is None:
            raise FrameworkNotFoundError(
                f"framework {name!r} not registered; available frameworks: {self.names()}",
                details={"framework": name},
            )
        return framework

    def names(self) -> List[str]:
        with self._lock:
            return sorted(self._frameworks)


def default_framework_registry() -> FrameworkRegistry:
    registry = FrameworkRegistry()
    registry.register(ClaudeFramework())
    return registry
