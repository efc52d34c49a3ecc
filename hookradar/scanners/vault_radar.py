# hookradar/scanners/vault_radar.py
"""
Vault Radar scanner

Writes the content to a temporary file, runs the vault-radar CLI against it
and parses the NDJSON output file (one JSON object per secret).
"""

import asyncio
import json
import logging
import os
import shlex
import tempfile
import time
from pathlib import Path
from typing import List

from hookradar.core.config import VaultRadarSettings
from hookradar.core.exceptions import ScannerError
from hookradar.scanners.base import BaseScanner
from hookradar.schemas.finding import Finding, ScanContent, ScanResults

logger = logging.getLogger(__name__)

SCANNER_NAME = "vault-radar"
CONTENT_FILE_NAME = "scan-content.txt"
OUTPUT_FILE_NAME = "vault-radar-output.json"
DEFAULT_SEVERITY = "high"
DEFAULT_TYPE = "secret"


def parse_ndjson_findings(data: str) -> List[Finding]:
    """
    Parse vault-radar NDJSON output into findings.

    Missing fields fall back to severity "high" and type "secret". Lines that
    are not JSON objects are logged and skipped.
    """
    findings: List[Finding] = []

    for line_num, line in enumerate(data.splitlines(), start=1):
        line = line.strip()
        if not line:
            continue

        try:
            secret = json.loads(line)
        except json.JSONDecodeError as e:
            logger.warning(f"Failed to parse vault-radar output line {line_num}: {e}")
            continue

        if not isinstance(secret, dict):
            logger.warning(f"Skipping non-object vault-radar output line {line_num}")
            continue

        def text(key: str, default: str = "") -> str:
            value = secret.get(key)
            return value if isinstance(value, str) else default

        findings.append(
            Finding(
                severity=text("severity", DEFAULT_SEVERITY).lower(),
                type=text("type", DEFAULT_TYPE),
                location=text("path"),
                description=text("description"),
            )
        )

    return findings


class VaultRadarScanner(BaseScanner):
    """Scanner backed by the HashiCorp Vault Radar CLI"""

    name = SCANNER_NAME

    def __init__(self, settings: VaultRadarSettings):
        self.settings = settings

    def build_command(self, content_file: Path, output_file: Path) -> List[str]:
        """<command> <scan_command...> --path <file> --outfile <out> --format json <extra_args...>"""
        return [
            self.settings.command,
            *shlex.split(self.settings.scan_command),
            "--path",
            str(content_file),
            "--outfile",
            str(output_file),
            "--format",
            "json",
            *self.settings.extra_args,
        ]

    async def scan(self, content: ScanContent) -> ScanResults:
        start_time = time.monotonic()
        results = ScanResults()

        try:
            with tempfile.TemporaryDirectory(prefix="vault-radar-scan-") as temp_dir:
                results.findings = await self._scan_in(Path(temp_dir), content)
        except ScannerError as e:
            results.error = e
        except (OSError, UnicodeError) as e:
            results.error = ScannerError(f"failed to prepare scan files; {e}")

        results.has_findings = bool(results.findings)
        results.duration = time.monotonic() - start_time

        if results.error is not None:
            logger.error(f"Vault Radar scan failed: {results.error}")
        else:
            logger.info(
                "Vault Radar scan completed",
                extra={
                    "has_findings": results.has_findings,
                    "finding_count": len(results.findings),
                    "duration_ms": int(results.duration * 1000),
                },
            )

        return results

    async def _scan_in(self, temp_dir: Path, content: ScanContent) -> List[Finding]:
        content_file = temp_dir / CONTENT_FILE_NAME
        output_file = temp_dir / OUTPUT_FILE_NAME

        fd = os.open(content_file, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        # Lone surrogates (truncated emoji) cannot be encoded; they never form a secret
        with os.fdopen(fd, "w", encoding="utf-8", errors="replace") as f:
            f.write(content.content)

        cmd = self.build_command(content_file, output_file)
        logger.debug(
            "Executing vault-radar",
            extra={"command": cmd, "content_length": len(content.content)},
        )

        await self._run(cmd)
        return self._read_output(output_file)

    async def _run(self, cmd: List[str]) -> None:
        timeout = self.settings.timeout_seconds
        try:
            proc = await asyncio.create_subprocess_exec(
                *cmd,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            raise ScannerError(f"failed to start {self.settings.command}; {e}") from e

        try:
            stdout, stderr = await asyncio.wait_for(
                proc.communicate(),
                timeout=timeout if timeout > 0 else None,
            )
        except asyncio.TimeoutError:
            proc.kill()
            await proc.wait()
            raise ScannerError(f"vault-radar scan timed out after {timeout} seconds")

        # vault-radar exits non-zero when it finds secrets, so this is not fatal
        if proc.returncode != 0:
            logger.warning(
                "vault-radar returned non-zero exit code",
                extra={
                    "exit_code": proc.returncode,
                    "stdout": stdout.decode(errors="replace"),
                    "stderr": stderr.decode(errors="replace"),
                },
            )

    def _read_output(self, output_file: Path) -> List[Finding]:
        if not output_file.exists():
            logger.warning(
                "vault-radar output file does not exist (vault-radar may have failed)",
                extra={"output_file": str(output_file)},
            )
            return []

        try:
            data = output_file.read_text(encoding="utf-8")
        except OSError as e:
            logger.warning(f"Failed to read vault-radar output file: {e}")
            return []

        if not data.strip():
            logger.debug("vault-radar output file is empty (no secrets found)")
            return []

        return parse_ndjson_findings(data)
