"""Inspector location and run limits, resolved from the environment."""

from __future__ import annotations

import os
import platform
import sys
from dataclasses import dataclass
from pathlib import Path
from shutil import which
from typing import Optional

from .errors import InspectorNotFound

SCRIPT_NAME = "JAB-DriveHygieneCheck.ps1"
DEFAULT_TIMEOUT_SECONDS = 600.0

ENV_SCRIPT = "DRIVE_HYGIENE_SCRIPT"
ENV_POWERSHELL = "DRIVE_HYGIENE_POWERSHELL"
ENV_TIMEOUT = "DRIVE_HYGIENE_TIMEOUT"


@dataclass(frozen=True)
class InspectorConfig:
    script_path: Path
    powershell: str
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS

    @classmethod
    def from_env(cls) -> "InspectorConfig":
        """Build a config from DRIVE_HYGIENE_* variables and the usual locations.

        Raises InspectorNotFound when the script or interpreter is missing,
        ValueError when the timeout is not a positive number.
        """
        script = find_inspector_script()
        if script is None:
            raise InspectorNotFound(
                f"Inspector script {SCRIPT_NAME} not found. "
                f"Set {ENV_SCRIPT} to its full path."
            )
        shell = find_powershell()
        if shell is None:
            raise InspectorNotFound(
                f"PowerShell not found in PATH. Set {ENV_POWERSHELL} to the interpreter."
            )
        return cls(script_path=script, powershell=shell, timeout_seconds=_timeout_from_env())


def _timeout_from_env() -> float:
    raw = os.environ.get(ENV_TIMEOUT, "").strip()
    if not raw:
        return DEFAULT_TIMEOUT_SECONDS
    try:
        value = float(raw)
    except ValueError:
        raise ValueError(f"{ENV_TIMEOUT} must be a number of seconds, got {raw!r}")
    if value <= 0:
        raise ValueError(f"{ENV_TIMEOUT} must be positive, got {raw!r}")
    return value


def find_inspector_script() -> Optional[Path]:
    explicit = os.environ.get(ENV_SCRIPT, "").strip()
    if explicit:
        path = Path(explicit)
        return path if path.is_file() else None

    candidates = [
        Path(__file__).resolve().parent / SCRIPT_NAME,
        Path.cwd() / SCRIPT_NAME,
        Path(sys.executable).resolve().parent / SCRIPT_NAME,
    ]
    for c in candidates:
        if c.is_file():
            return c
    return None


def find_powershell() -> Optional[str]:
    explicit = os.environ.get(ENV_POWERSHELL, "").strip()
    if explicit:
        return which(explicit) or (explicit if Path(explicit).is_file() else None)

    for name in ("powershell", "pwsh"):
        path = which(name)
        if path:
            return path
    if platform.system() == "Windows":
        stock = Path(os.environ.get("SystemRoot", r"C:\Windows")) / (
            r"System32\WindowsPowerShell\v1.0\powershell.exe"
        )
        if stock.is_file():
            return str(stock)
    return None
