"""Types for the dereplicator adapter."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum, IntEnum
from pathlib import Path

DEFAULT_EXECUTABLE = "dereplicator.py"
RESULT_FILENAME = "significant_matches.tsv"

SPECTRA_FORMATS: tuple[str, ...] = ("mzXML", "MGF", "mzML", "mzdata")
OUTPUT_FORMATS: tuple[str, ...] = ("csv", "tsv", "txt")

PathResolver = Callable[[str], str | None]


class ExitCode(IntEnum):
    """Process exit codes shared with the rest of the tool suite."""

    EXECUTION_OK = 0
    INPUT_FILE_NOT_FOUND = 1
    CANNOT_WRITE_OUTPUT_FILE = 5
    ILLEGAL_PARAMETERS = 6
    MISSING_PARAMETERS = 7
    UNKNOWN_ERROR = 8
    EXTERNAL_PROGRAM_ERROR = 9


class Stage(str, Enum):
    """Linear progress of one invocation."""

    INIT = "init"
    VALIDATED = "validated"
    EXECUTABLE_RESOLVED = "executable_resolved"
    SCRATCH_CREATED = "scratch_created"
    PROCESS_RAN = "process_ran"
    RESULT_COLLECTED = "result_collected"
    DONE = "done"


@dataclass(frozen=True)
class InvocationRequest:
    """Paths handed to one run of the external tool."""

    spectra_path: str
    database_path: str
    output_path: str
    executable: str = DEFAULT_EXECUTABLE


@dataclass(frozen=True)
class AdapterSettings:
    """Per-invocation switches.

    ``debug`` logs the full command line and lets the tool write straight to
    the terminal instead of capturing its output.
    """

    debug: bool = False
    check_formats: bool = True


@dataclass(frozen=True)
class InvocationReport:
    """Outcome of a successful invocation."""

    request: InvocationRequest
    executable: str
    argv: tuple[str, ...]
    returncode: int
    output_path: Path
    stage: Stage
