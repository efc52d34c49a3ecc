# hookradar/frameworks/__init__.py
from hookradar.frameworks.base import HookFramework, HookHandler
from hookradar.frameworks.claude import ClaudeFramework, UserPromptSubmitHandler
from hookradar.frameworks.registry import FrameworkRegistry, default_framework_registry

__all__ = [
    "ClaudeFramework",
    "FrameworkRegistry",
    "HookFramework",
    "HookHandler",
    "UserPromptSubmitHandler",
    "default_framework_registry",
]
