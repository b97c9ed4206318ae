"""Command runner for the external search tool."""

from __future__ import annotations

import subprocess
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class ExecResult:
    """Result envelope for subprocess execution."""

    argv: tuple[str, ...]
    cwd: Path
    returncode: int
    stdout: str
    stderr: str

    @property
    def detail(self) -> str:
        return (self.stderr or self.stdout).strip()


def run_command(
    argv: list[str],
    *,
    cwd: Path,
    capture: bool = True,
) -> ExecResult:
    """Run command to completion and return structured result.

    Captured output is decoded as UTF-8 with undecodable bytes replaced.
    With ``capture`` off the child inherits our stdout/stderr and the
    returned streams are empty. ``OSError`` from the spawn propagates.
    """
    completed = subprocess.run(
        argv,
        cwd=cwd,
        capture_output=capture,
        encoding="utf-8",
        errors="replace",
        check=False,
    )
    return ExecResult(
        argv=tuple(argv),
        cwd=cwd.resolve(),
        returncode=completed.returncode,
        stdout=completed.stdout or "",
        stderr=completed.stderr or "",
    )
