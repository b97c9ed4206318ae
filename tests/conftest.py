"""Pytest configuration and fixtures for dereplicator adapter tests."""
from __future__ import annotations

import stat
import sys
from pathlib import Path

import pytest

MATCHES_TSV = (
    "SpecFile\tScan\tLocalSpecIdx\tCompound\tMolName\tScore\tP-Value\n"
    "sample.mzML\t17\t0\t12\tsurugamide A\t18\t1.2e-15\n"
)


def pytest_sessionfinish(session, exitstatus):
    """Fail the run when --cov was requested but no coverage data was collected."""
    cov_enabled = any("--cov" in str(arg) for arg in session.config.args)
    if not cov_enabled:
        return

    coverage_files = list(Path.cwd().glob(".coverage*"))
    if not coverage_files:
        pytest.exit(
            "Coverage was enabled but no data was collected. "
            "Check that tests import from 'dereplicator_adapter' (the package) "
            "not 'src/dereplicator_adapter' (filesystem path).",
            returncode=1,
        )


def _write_fake_tool(path: Path, body: str) -> Path:
    """Write an executable Python script that stands in for dereplicator.py.

    ``body`` runs with ``scratch`` bound to the directory passed after ``-o``.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        f"#!{sys.executable}\n"
        "import pathlib\n"
        "import sys\n"
        "args = sys.argv[1:]\n"
        "scratch = pathlib.Path(args[args.index('-o') + 1])\n"
        f"{body}\n",
        encoding="utf-8",
    )
    path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return path


@pytest.fixture
def matches_tsv() -> str:
    return MATCHES_TSV


@pytest.fixture
def fake_tool():
    """Factory for executable scripts standing in for dereplicator.py."""
    return _write_fake_tool


@pytest.fixture
def matching_tool(tmp_path: Path) -> Path:
    """Fake tool that exits 0 and writes a matches file."""
    return _write_fake_tool(
        tmp_path / "bin" / "dereplicator.py",
        f"(scratch / 'significant_matches.tsv').write_text({MATCHES_TSV!r})",
    )


@pytest.fixture
def failing_tool(tmp_path: Path) -> Path:
    """Fake tool that complains and exits 3."""
    return _write_fake_tool(
        tmp_path / "bin" / "dereplicator.py",
        "sys.stderr.write('ERROR: database not found\\n')\nsys.exit(3)",
    )


@pytest.fixture
def silent_tool(tmp_path: Path) -> Path:
    """Fake tool that exits 0 without producing matches."""
    return _write_fake_tool(tmp_path / "bin" / "dereplicator.py", "pass")
