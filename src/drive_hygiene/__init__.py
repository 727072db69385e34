"""Drive hygiene inspection core."""

from .models import (
    Metadata,
    PhysicalDisk,
    ScanDocument,
    SmartRecord,
    Summary,
    TrimInfo,
    UsageItem,
    Volume,
)
from .config import InspectorConfig
from .decoder import decode_scan, encode_scan
from .errors import (
    ArtifactNotLocated,
    DriveHygieneError,
    EmptyOutput,
    ExportError,
    InspectionError,
    InspectorNotFound,
    InspectorTimeout,
    MalformedOutput,
    ProcessFailure,
)
from .exporter import ReportFormat, export_report
from .inventory import ScanView
from .powershell import launch_disk_cleanup, run_inspection

__all__ = [
    "Metadata",
    "PhysicalDisk",
    "ScanDocument",
    "SmartRecord",
    "Summary",
    "TrimInfo",
    "UsageItem",
    "Volume",
    "InspectorConfig",
    "decode_scan",
    "encode_scan",
    "ArtifactNotLocated",
    "DriveHygieneError",
    "EmptyOutput",
    "ExportError",
    "InspectionError",
    "InspectorNotFound",
    "InspectorTimeout",
    "MalformedOutput",
    "ProcessFailure",
    "ReportFormat",
    "export_report",
    "ScanView",
    "launch_disk_cleanup",
    "run_inspection",
]
