"""Drive one Dereplicator run: validate, execute, collect the matches file."""

from __future__ import annotations

import logging
import os
import shlex
import shutil
import tempfile
from pathlib import Path

from dereplicator_adapter.errors import (
    AdapterError,
    CopyFailedError,
    InvalidFormatError,
    MissingDatabaseError,
    MissingExecutableError,
    MissingInputError,
    MissingOutputError,
    NonZeroExitError,
    SourceMissingError,
    SpawnFailedError,
)
from dereplicator_adapter.exec import ExecResult, run_command
from dereplicator_adapter.settings import load_settings
from dereplicator_adapter.types import (
    OUTPUT_FORMATS,
    RESULT_FILENAME,
    SPECTRA_FORMATS,
    AdapterSettings,
    InvocationReport,
    InvocationRequest,
    PathResolver,
    Stage,
)

logger = logging.getLogger(__name__)

SCRATCH_PREFIX = "dereplicator_"


def _has_format(path: str, allowed: tuple[str, ...]) -> bool:
    suffix = Path(path).suffix.lstrip(".").lower()
    return suffix in {fmt.lower() for fmt in allowed}


def validate_request(request: InvocationRequest, settings: AdapterSettings | None = None) -> None:
    """Refuse requests with missing paths.

    Paths are not checked for existence; the external tool reports those.
    """
    settings = settings or AdapterSettings()
    if not request.spectra_path:
        raise MissingInputError()
    if not request.database_path:
        raise MissingDatabaseError()
    if not request.output_path:
        raise MissingOutputError()

    if settings.check_formats:
        if not _has_format(request.spectra_path, SPECTRA_FORMATS):
            raise InvalidFormatError("input", request.spectra_path, SPECTRA_FORMATS)
        if not _has_format(request.output_path, OUTPUT_FORMATS):
            raise InvalidFormatError("output", request.output_path, OUTPUT_FORMATS)


def resolve_executable(path_or_name: str, resolver: PathResolver = shutil.which) -> str:
    """Return the canonical path of the launcher, or "" if it cannot be found.

    A bare name is looked up with ``resolver`` (PATH search by default).
    """
    if not path_or_name:
        return ""

    if Path(path_or_name).name == path_or_name:
        found = resolver(path_or_name)
        if not found:
            logger.debug("%s not found on PATH", path_or_name)
            return ""
        return os.path.realpath(found)

    candidate = Path(path_or_name).expanduser()
    if not candidate.exists():
        logger.debug("executable path %s does not exist", candidate)
        return ""
    return str(candidate.resolve())


def build_arguments(request: InvocationRequest, scratch_dir: str) -> list[str]:
    """Argument vector handed to the launcher, executable excluded."""
    return [
        request.spectra_path,
        "-o",
        scratch_dir,
        "--db-path",
        request.database_path,
    ]


def run(
    executable: str,
    args: list[str],
    settings: AdapterSettings | None = None,
    *,
    runner=run_command,
) -> ExecResult:
    """Run the external tool and block until it exits."""
    settings = settings or AdapterSettings()
    argv = [executable, *args]
    if settings.debug:
        logger.debug("Going to execute: %s", shlex.join(argv))

    try:
        result = runner(argv, cwd=Path.cwd(), capture=not settings.debug)
    except OSError as exc:
        raise SpawnFailedError(executable, exc.strerror or str(exc)) from exc

    if result.returncode != 0:
        raise NonZeroExitError(result.returncode, result.detail)
    if result.stdout:
        logger.debug("external tool output:\n%s", result.stdout.rstrip())
    return result


def collect_result(scratch_dir: str | Path, output_path: str | Path) -> Path:
    """Copy the matches file out of the scratch directory, replacing any old output."""
    source = Path(scratch_dir) / RESULT_FILENAME
    destination = Path(output_path)
    if not source.is_file():
        raise SourceMissingError(str(source))

    try:
        destination.unlink(missing_ok=True)
        destination.parent.mkdir(parents=True, exist_ok=True)
        with source.open("rb") as src, destination.open("wb") as dst:
            shutil.copyfileobj(src, dst)
    except OSError as exc:
        raise CopyFailedError(str(destination), exc.strerror or str(exc)) from exc
    return destination


def invoke(
    request: InvocationRequest,
    settings: AdapterSettings | None = None,
    *,
    resolver: PathResolver = shutil.which,
    runner=run_command,
) -> InvocationReport:
    """Validate, run the tool in a private scratch directory, and collect results.

    The scratch directory is removed before this returns or raises. A raised
    ``AdapterError`` records the last stage reached in ``stage``.
    """
    stage = Stage.INIT

    def advance(next_stage: Stage) -> None:
        nonlocal stage
        logger.debug("%s -> %s", stage.value, next_stage.value)
        stage = next_stage

    try:
        settings = settings or load_settings()
        validate_request(request, settings)
        advance(Stage.VALIDATED)

        executable = resolve_executable(request.executable, resolver)
        if not executable:
            raise MissingExecutableError(request.executable)
        advance(Stage.EXECUTABLE_RESOLVED)

        with tempfile.TemporaryDirectory(prefix=SCRATCH_PREFIX) as scratch_dir:
            advance(Stage.SCRATCH_CREATED)
            args = build_arguments(request, scratch_dir)
            result = run(executable, args, settings, runner=runner)
            advance(Stage.PROCESS_RAN)

            output = collect_result(scratch_dir, request.output_path)
            advance(Stage.RESULT_COLLECTED)
    except AdapterError as exc:
        exc.stage = stage
        logger.debug("failed at %s: %s", stage.value, exc)
        raise

    advance(Stage.DONE)
    return InvocationReport(
        request=request,
        executable=executable,
        argv=result.argv,
        returncode=result.returncode,
        output_path=output,
        stage=stage,
    )
