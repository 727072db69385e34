"""Exception taxonomy for inspector runs and report exports.

Every failure is terminal for the operation that raised it. Nothing here is
retried; callers decide whether to run again.
"""

from __future__ import annotations

from typing import Optional, Sequence


class DriveHygieneError(RuntimeError):
    """Base class for all failures surfaced by the core."""


class InspectionError(DriveHygieneError):
    """A scan run did not produce a usable document."""


class ExportError(DriveHygieneError):
    """An export run did not produce a usable report file."""


class ProcessFailure(InspectionError):
    def __init__(self, exit_code: int, stderr: str) -> None:
        self.exit_code = exit_code
        self.stderr = stderr
        message = f"Inspector failed with exit code {exit_code}"
        if stderr.strip():
            message += f". Errors: {stderr.strip()}"
        super().__init__(message)


class EmptyOutput(InspectionError):
    def __init__(self) -> None:
        super().__init__("No output received from the inspector")


class MalformedOutput(InspectionError):
    def __init__(self, parse_error: str, raw_output: str) -> None:
        self.parse_error = parse_error
        self.raw_output = raw_output
        super().__init__(f"Failed to parse inspector output: {parse_error}")


class ArtifactNotLocated(ExportError):
    def __init__(self, output: str = "") -> None:
        self.output = output
        super().__init__("Failed to locate exported report file")


class InspectorTimeout(InspectionError, ExportError):
    def __init__(self, timeout: float, command: Optional[Sequence[str]] = None) -> None:
        self.timeout = timeout
        self.command = list(command or [])
        super().__init__(f"Inspector did not finish within {timeout:g}s")


class InspectorNotFound(DriveHygieneError, FileNotFoundError):
    """The inspector script or the PowerShell interpreter is missing."""


class LaunchError(DriveHygieneError):
    """A pass-through launcher (Disk Cleanup, script viewer) failed."""
