# hookradar/scanners/__init__.py
from hookradar.scanners.base import BaseScanner
from hookradar.scanners.vault_radar import VaultRadarScanner, parse_ndjson_findings

__all__ = [
    "BaseScanner",
    "VaultRadarScanner",
    "parse_ndjson_findings",
]
