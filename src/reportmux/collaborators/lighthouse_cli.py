"""Audit-only executor backed by the ``lighthouse`` command line."""

from __future__ import annotations

import asyncio
from contextlib import suppress
import json
import logging
from typing import TYPE_CHECKING

from reportmux.collaborators.base import RunnerResult
from reportmux.errors import AuditRunError, ConfigurationError
from reportmux.lhr import parse_result

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)


class LighthouseCliRunner:
    """Run ``lighthouse <url> --audit-mode=<dir>`` and parse the JSON report.

    The subprocess reads previously saved artifacts instead of loading the
    page. An optional timeout is enforced here, at the process boundary.
    """

    def __init__(self, executable: str = "lighthouse", *, timeout_s: float | None = None) -> None:
        self.executable = executable
        self.timeout_s = timeout_s

    def command(self, url: str, audit_mode: Path) -> list[str]:
        """Return the argv for an audit-only run."""
        return [
            self.executable,
            url,
            f"--audit-mode={audit_mode}",
            "--output=json",
            "--output-path=stdout",
            "--quiet",
        ]

    async def run_audits_only(self, url: str, *, audit_mode: Path) -> RunnerResult | None:
        """Audit the artifacts saved in *audit_mode*.

        Returns *None* when the process succeeds but prints no report.
        """
        argv = self.command(url, audit_mode)
        logger.debug("Spawning %s", " ".join(argv))
        try:
            proc = await asyncio.create_subprocess_exec(
                *argv,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except FileNotFoundError as e:
            raise ConfigurationError(
                f"Audit executable not found: {self.executable}",
                hint="Install it (npm i -g lighthouse), set REPORTMUX_LIGHTHOUSE_BIN, or use --mock.",
            ) from e

        try:
            stdout, stderr = await asyncio.wait_for(proc.communicate(), self.timeout_s)
        except asyncio.TimeoutError:
            with suppress(ProcessLookupError):
                proc.kill()
            await proc.wait()
            raise AuditRunError(
                f"Audit-only run exceeded {self.timeout_s}s",
                hint="Raise audit_timeout_s or unset it.",
            ) from None

        err_text = stderr.decode("utf-8", errors="replace")
        if proc.returncode != 0:
            raise AuditRunError(
                f"{self.executable} exited with status {proc.returncode}",
                hint=err_text.strip().splitlines()[-1] if err_text.strip() else None,
                returncode=proc.returncode,
                stderr=err_text,
            )

        report = stdout.decode("utf-8")
        if not report.strip():
            return None
        try:
            lhr = parse_result(json.loads(report))
        except json.JSONDecodeError as e:
            raise AuditRunError(
                f"{self.executable} printed a report that is not JSON",
                hint=e.msg,
                returncode=proc.returncode,
                stderr=err_text,
            ) from e
        return RunnerResult(lhr=lhr, report=report)
