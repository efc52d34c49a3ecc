# hookradar/frameworks/base.py
from abc import ABC, abstractmethod
from typing import List

from hookradar.core.exceptions import HandlerNotFoundError
from hookradar.schemas.decision import Decision
from hookradar.schemas.finding import ScanContent
from hookradar.schemas.hook import HookInput


class HookHandler(ABC):
    """Extracts scannable content for one hook type"""

    hook_type: str

    @abstractmethod
    def can_handle(self, hook_input: HookInput) -> bool:
        pass

    @abstractmethod
    async def extract_content(self, hook_input: HookInput) -> ScanContent:
        pass


class HookFramework(ABC):
    """Abstract base class for agent hook frameworks"""

    name: str

    def __init__(self):
        self._handlers: List[HookHandler] = []

    def register_handler(self, handler: HookHandler) -> None:
        self._handlers.append(handler)

    def get_handler(self, hook_input: HookInput) -> HookHandler:
        for handler in self._handlers:
            if handler.can_handle(hook_input):
                return handler
        raise HandlerNotFoundError(f"no handler found for hook type {hook_input.hook_type!r}")

    @abstractmethod
    def parse_input(self, raw: str) -> HookInput:
        """Parse the raw stdin payload"""
        pass

    @abstractmethod
    def format_output(self, decision: Decision, hook_input: HookInput) -> str:
        """Render the decision in the framework's response envelope"""
        pass

    def get_exit_code(self, decision: Decision) -> int:
        return decision.exit_code
