from __future__ import annotations

import concurrent.futures
import os
import platform
import subprocess
import time
from typing import IO, List, Optional, Sequence

from .config import InspectorConfig
from .decoder import decode_scan
from .errors import (
    EmptyOutput,
    InspectorNotFound,
    InspectorTimeout,
    LaunchError,
    ProcessFailure,
)
from .logger import get_logger
from .models import ProcessOutput, ScanDocument

logger = get_logger(__name__)

_NO_WINDOW = getattr(subprocess, "CREATE_NO_WINDOW", 0)


def _base_command(config: InspectorConfig) -> List[str]:
    return [
        config.powershell,
        "-ExecutionPolicy",
        "Bypass",
        "-NoProfile",
        "-NonInteractive",
        "-File",
        str(config.script_path),
    ]


def build_scan_command(config: InspectorConfig) -> List[str]:
    return _base_command(config) + ["-JsonOutput"]


def build_export_command(config: InspectorConfig, fmt: str, destination: str) -> List[str]:
    return _base_command(config) + [
        "-ExportReport",
        "-ReportFormat",
        fmt,
        "-OutputPath",
        destination,
    ]


def _drain(stream: IO[str]) -> List[str]:
    lines: List[str] = []
    for line in stream:
        line = line.rstrip("\r\n")
        if line:
            lines.append(line)
    return lines


def run_inspector(
    command: Sequence[str],
    timeout: Optional[float],
    capture_stderr: bool = True,
) -> ProcessOutput:
    """Run the inspector and collect its output.

    stdout and stderr are read line by line on separate threads so neither
    pipe can fill up and stall the child. Empty lines are dropped. The wait is
    bounded by ``timeout``; on expiry the child is killed before
    InspectorTimeout is raised.
    """
    logger.debug("Running inspector: %s", " ".join(command))
    started = time.monotonic()
    try:
        proc = subprocess.Popen(
            list(command),
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE if capture_stderr else subprocess.DEVNULL,
            text=True,
            encoding="utf-8-sig",
            errors="replace",
            creationflags=_NO_WINDOW,
        )
    except OSError as exc:
        raise InspectorNotFound(f"Failed to start inspector: {exc}") from exc

    with proc, concurrent.futures.ThreadPoolExecutor(max_workers=2) as pool:
        out_future = pool.submit(_drain, proc.stdout)
        err_future = pool.submit(_drain, proc.stderr) if capture_stderr else None
        try:
            exit_code = proc.wait(timeout=timeout)
        except subprocess.TimeoutExpired:
            proc.kill()
            proc.wait()
            logger.error("Inspector timed out after %ss, killed", timeout)
            raise InspectorTimeout(timeout or 0, command)
        stdout = "\n".join(out_future.result())
        stderr = "\n".join(err_future.result()) if err_future else ""

    duration = time.monotonic() - started
    logger.info("Inspector exited with code %s in %.1fs", exit_code, duration)
    if stderr:
        logger.warning("Inspector stderr: %s", stderr)
    return ProcessOutput(exit_code=exit_code, stdout=stdout, stderr=stderr, duration_s=duration)


def run_inspection(config: Optional[InspectorConfig] = None) -> ScanDocument:
    """Run a full scan and return the decoded document.

    Raises ProcessFailure, EmptyOutput, MalformedOutput or InspectorTimeout.
    """
    config = config or InspectorConfig.from_env()
    result = run_inspector(build_scan_command(config), config.timeout_seconds)

    if result.exit_code != 0:
        raise ProcessFailure(result.exit_code, result.stderr)
    if not result.stdout.strip():
        raise EmptyOutput()
    return decode_scan(result.stdout)


def launch_disk_cleanup(drive_letter: str = "C") -> None:
    letter = drive_letter.strip().rstrip(":\\") or "C"
    try:
        subprocess.Popen(["cleanmgr.exe", "/D", letter])
    except OSError as exc:
        raise LaunchError(f"Failed to launch Disk Cleanup: {exc}") from exc
    logger.info("Launched Disk Cleanup for drive %s", letter)


def open_inspector_script(config: Optional[InspectorConfig] = None) -> None:
    config = config or InspectorConfig.from_env()
    path = str(config.script_path)
    try:
        if platform.system() == "Windows":
            os.startfile(path)  # type: ignore[attr-defined]
        elif platform.system() == "Darwin":
            subprocess.Popen(["open", path])
        else:
            subprocess.Popen(["xdg-open", path])
    except OSError as exc:
        raise LaunchError(f"Failed to open script file: {exc}") from exc
