# hookradar/core/constants.py
from enum import Enum
from typing import Dict


class SeverityLevel(str, Enum):
    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    INFO = "info"


# Vault Radar reports many real secrets as "info", so it ranks with medium.
SEVERITY_LEVELS: Dict[str, int] = {
    SeverityLevel.CRITICAL.value: 4,
    SeverityLevel.HIGH.value: 3,
    SeverityLevel.MEDIUM.value: 2,
    SeverityLevel.INFO.value: 2,
    SeverityLevel.LOW.value: 1,
}


def severity_level(severity: str) -> int:
    """
    Convert a severity name to its numeric rank.

    Case-insensitive. Unknown severities rank 0, below every threshold,
    so comparisons are always `severity_level(finding) >= severity_level(threshold)`.
    """
    if not severity:
        return 0
    return SEVERITY_LEVELS.get(severity.lower(), 0)


class LogFormat(str, Enum):
    JSON = "json"
    TEXT = "text"


LOG_LEVELS = ("debug", "info", "warn", "warning", "error")

APP_NAME = "hook-radar"
ENV_PREFIX = "HOOK_RADAR_"
CONFIG_DIR_NAME = ".hook-radar"
CONFIG_FILE_NAME = "config.yaml"

BLOCK_ADVICE = "Please remove or redact sensitive information before proceeding."
