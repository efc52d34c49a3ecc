# hookradar/core/exceptions.py
"""
Error taxonomy for hook-radar.

Everything raised on purpose derives from HookRadarError so the CLI can
report it without a traceback. The decision and remediation engines never
raise: they turn these errors into decision metadata or failed
RemediationResult entries.
"""
from typing import Any, Dict, Optional


class HookRadarError(Exception):
    """Base class for all hook-radar errors"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(HookRadarError):
    """Configuration could not be loaded or failed validation"""


class FrameworkNotFoundError(HookRadarError):
    """No hook framework is registered under the requested name"""


class HookInputError(HookRadarError):
    """Hook payload on stdin is malformed"""


class HandlerNotFoundError(HookRadarError):
    """Framework has no handler for the hook type"""


class ScannerError(HookRadarError):
    """Scanner infrastructure failure (temp files, binary, timeout)"""


class StrategyRegistrationError(HookRadarError):
    """Strategy was rejected by the registry"""


class StrategyNotFoundError(HookRadarError):
    """No strategy is registered for the requested type"""


class StrategyValidationError(HookRadarError):
    """Strategy configuration is invalid"""


class RemediationCancelledError(HookRadarError):
    """Remediation context was cancelled before the strategy finished"""


class RemediationTimeoutError(HookRadarError):
    """Strategy did not complete before the protocol deadline"""
