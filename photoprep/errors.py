"""
Errors raised by the photo pipeline.

Every failure aborts the whole run; the CLI turns these into a single
logged message and a non-zero exit code.
"""

from typing import Optional


class PipelineError(Exception):
    """Base class for all pipeline failures."""


class ConfigurationError(PipelineError):
    """Invalid configuration value (numeric range, URL, backend name)."""


class PreconditionError(PipelineError):
    """Missing external tool or empty input set."""


class ToolError(PipelineError):
    """
    An external tool exited non-zero or could not be launched.

    Attributes:
        command: Name of the command that failed
        exit_code: Process exit status, or None if it never started
        output: Captured stdout/stderr, if any
    """

    def __init__(
        self,
        command: str,
        exit_code: Optional[int] = None,
        output: str = '',
        reason: Optional[str] = None
    ):
        self.command = command
        self.exit_code = exit_code
        self.output = output

        if reason is not None:
            message = f"{command} failed: {reason}"
        else:
            message = f"{command} exited with status {exit_code}"
        if output:
            message = f"{message}\n{output}"
        super().__init__(message)


class DimensionError(ToolError):
    """Pixel dimensions could not be read back from an output file."""

    def __init__(self, command: str, path: str, output: str = ''):
        self.path = path
        super().__init__(command, output=output, reason=f"failed to read image dimensions for {path}")


class UploadError(PipelineError):
    """An object store rejected an upload."""
