"""Report export through a fresh inspector run.

An export never serializes the in-memory scan. The inspector rescans and
writes the report itself, so the file reflects the system at export time.
"""

from __future__ import annotations

import os
from enum import Enum
from pathlib import Path
from typing import Optional, Union

from .config import InspectorConfig
from .errors import ArtifactNotLocated
from .logger import get_logger
from .powershell import build_export_command, run_inspector

logger = get_logger(__name__)

REPORT_PREFIX = "DriveHygieneCheck_"
REPORT_EXTENSIONS = (".html", ".txt")


class ReportFormat(str, Enum):
    HTML = "HTML"
    TEXT = "Text"


def normalize_format(value: Union[ReportFormat, str, None]) -> str:
    """Inspector format argument: "HTML" (any case) or "Text" for everything else."""
    if isinstance(value, ReportFormat):
        return value.value
    if isinstance(value, str) and value.strip().upper() == "HTML":
        return ReportFormat.HTML.value
    return ReportFormat.TEXT.value


def locate_artifact(stdout_text: str) -> Path:
    """First stdout line naming a report file that exists on disk.

    A line qualifies when it contains the report prefix and one of the report
    extensions, and its trimmed text is the path of an existing file.
    """
    for line in stdout_text.split("\n"):
        if REPORT_PREFIX not in line:
            continue
        if not any(ext in line for ext in REPORT_EXTENSIONS):
            continue
        candidate = line.strip()
        # os.path.isfile never raises, e.g. for over-long names
        if os.path.isfile(candidate):
            return Path(candidate)
        logger.debug("Report-like line is not an existing file: %s", line.strip())
    raise ArtifactNotLocated(stdout_text)


def export_report(
    fmt: Union[ReportFormat, str],
    destination: Union[str, Path],
    config: Optional[InspectorConfig] = None,
) -> Path:
    config = config or InspectorConfig.from_env()
    format_arg = normalize_format(fmt)
    command = build_export_command(config, format_arg, str(destination))

    result = run_inspector(command, config.timeout_seconds, capture_stderr=False)
    if result.exit_code != 0:
        logger.warning("Export run exited with code %s", result.exit_code)

    path = locate_artifact(result.stdout)
    logger.info("Exported %s report: %s", format_arg, path)
    return path
