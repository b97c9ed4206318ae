"""Error taxonomy for the dereplicator adapter.

Every error is fatal to the invocation and knows the exit code the CLI
reports for it.
"""

from __future__ import annotations

from dereplicator_adapter.types import ExitCode, Stage


class AdapterError(RuntimeError):
    """Base class for invocation failures."""

    exit_code: ExitCode = ExitCode.UNKNOWN_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.stage: Stage | None = None


class ConfigError(AdapterError):
    """A required option is missing or malformed."""

    exit_code = ExitCode.ILLEGAL_PARAMETERS


class MissingInputError(ConfigError):
    def __init__(self) -> None:
        super().__init__("no input file (spectra) given")


class MissingDatabaseError(ConfigError):
    def __init__(self) -> None:
        super().__init__("no database given")


class MissingOutputError(ConfigError):
    def __init__(self) -> None:
        super().__init__("no output file (results) given")


class InvalidFormatError(ConfigError):
    def __init__(self, option: str, path: str, allowed: tuple[str, ...]):
        super().__init__(f"{option} file '{path}' has unsupported format; expected one of: {', '.join(allowed)}")
        self.option = option
        self.path = path


class InvalidEnvironmentError(ConfigError):
    def __init__(self, name: str, value: str):
        super().__init__(f"environment variable {name} has invalid boolean value '{value}'")
        self.name = name


class MissingExecutableError(ConfigError):
    exit_code = ExitCode.MISSING_PARAMETERS

    def __init__(self, executable: str):
        super().__init__(
            f"executable of Dereplicator could not be found ('{executable}'). "
            "Please either add it to PATH or provide it with --executable"
        )
        self.executable = executable


class ProcessError(AdapterError):
    """The external tool could not be started or did not succeed."""

    exit_code = ExitCode.EXTERNAL_PROGRAM_ERROR


class SpawnFailedError(ProcessError):
    def __init__(self, executable: str, reason: str):
        super().__init__(f"could not start '{executable}': {reason}")
        self.executable = executable


class NonZeroExitError(ProcessError):
    def __init__(self, returncode: int, detail: str = ""):
        if returncode < 0:
            message = f"external tool was terminated by signal {-returncode}"
        else:
            message = f"external tool exited with status {returncode}"
        if detail:
            message = f"{message}\n{detail}"
        super().__init__(message)
        self.returncode = returncode


class ResultIOError(AdapterError):
    """The tool's result file could not be relocated."""


class SourceMissingError(ResultIOError):
    exit_code = ExitCode.INPUT_FILE_NOT_FOUND

    def __init__(self, source: str):
        super().__init__(f"external tool produced no result file at {source}")
        self.source = source


class CopyFailedError(ResultIOError):
    exit_code = ExitCode.CANNOT_WRITE_OUTPUT_FILE

    def __init__(self, destination: str, reason: str):
        super().__init__(f"could not write results to {destination}: {reason}")
        self.destination = destination
