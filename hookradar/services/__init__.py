# hookradar/services/__init__.py
from hookradar.services.hook_processor import HookProcessor

__all__ = ["HookProcessor"]
