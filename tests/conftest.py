"""Shared fixtures: a realistic inspector document and a runnable config."""

import copy
import sys
from pathlib import Path

import pytest

from drive_hygiene.config import InspectorConfig

SAMPLE_DOCUMENT = {
    "Metadata": {
        "Version": "1.4.0",
        "Timestamp": "2024-01-01T10:30:00Z",
        "IsAdministrator": True,
        "ComputerName": "HOST1",
    },
    "PhysicalDisks": [
        {
            "DeviceId": 0,
            "FriendlyName": "Samsung SSD 980 PRO 1TB",
            "MediaType": "SSD",
            "BusType": "NVMe",
            "HealthStatus": "Healthy",
            "OperationalStatus": "OK",
            "Size": 1000204886016,
            "SizeFormatted": "931.51 GB",
        },
        {
            "DeviceId": 1,
            "FriendlyName": "WDC WD40EFRX",
            "MediaType": "HDD",
            "BusType": "SATA",
            "HealthStatus": "Warning",
            "OperationalStatus": "Degraded",
            "Size": 4000787030016,
            "SizeFormatted": "3.64 TB",
        },
    ],
    "SmartData": [
        {
            "DiskId": 0,
            "FriendlyName": "Samsung SSD 980 PRO 1TB",
            "HealthStatus": "Healthy",
            "OperationalStatus": "OK",
            "Temperature": "38 C",
            "ReadErrors": 0,
            "WriteErrors": 0,
            "PowerOnHours": 5120,
            "Wear": "3%",
        },
        {
            "DiskId": 1,
            "FriendlyName": "WDC WD40EFRX",
            "HealthStatus": "Warning",
            "OperationalStatus": "Degraded",
            "Temperature": "N/A",
            "ReadErrors": "N/A",
            "WriteErrors": 12,
            "PowerOnHours": "N/A",
            "Wear": None,
        },
    ],
    "Volumes": [
        {
            "DriveLetter": "C:",
            "VolumeName": "System",
            "FileSystem": "NTFS",
            "TotalSize": 1000000000000,
            "TotalSizeFormatted": "931.32 GB",
            "FreeSpace": 77000000000,
            "FreeSpaceFormatted": "71.71 GB",
            "UsedSpace": 923000000000,
            "UsedSpaceFormatted": "859.61 GB",
            "PercentUsed": 92.3,
            "PercentFree": 7.7,
            "Status": "Critical",
        },
        {
            "DriveLetter": "D:",
            "VolumeName": "Data",
            "FileSystem": "NTFS",
            "TotalSize": 4000000000000,
            "TotalSizeFormatted": "3.64 TB",
            "FreeSpace": 3000000000000,
            "FreeSpaceFormatted": "2.73 TB",
            "UsedSpace": 1000000000000,
            "UsedSpaceFormatted": "931.32 GB",
            "PercentUsed": 25.0,
            "PercentFree": 75.0,
            "Status": "Healthy",
        },
    ],
    "TrimInfo": {
        "TrimEnabled": True,
        "RawOutput": "NTFS DisableDeleteNotify = 0",
        "Details": "TRIM is enabled for NTFS volumes",
    },
    "UsageBreakdown": [
        {
            "Category": "Windows Temp",
            "Path": "C:\\Windows\\Temp",
            "Size": 524288000,
            "SizeFormatted": "500 MB",
            "FileCount": 812,
        },
        {
            "Category": "Recycle Bin",
            "Path": "C:\\$Recycle.Bin",
            "Size": 0,
            "SizeFormatted": "0 Bytes",
            "FileCount": 0,
        },
        {
            "Category": "Browser Cache",
            "Path": "C:\\Users\\me\\AppData\\Local\\Cache",
            "Size": 104857600,
            "SizeFormatted": "100 MB",
            "FileCount": 2044,
        },
    ],
    "Summary": {
        "TotalPhysicalDisks": 2,
        "TotalVolumes": 2,
        "TotalReclaimableBytes": 629145600,
        "TotalReclaimableFormatted": "600 MB",
        "CriticalVolumes": 1,
        "WarningVolumes": 0,
    },
}


@pytest.fixture
def sample_document():
    return copy.deepcopy(SAMPLE_DOCUMENT)


@pytest.fixture
def python_config(tmp_path: Path) -> InspectorConfig:
    """Config whose interpreter is this Python, for driving real child processes."""
    script = tmp_path / "JAB-DriveHygieneCheck.ps1"
    script.write_text("# inspector placeholder\n")
    return InspectorConfig(script_path=script, powershell=sys.executable, timeout_seconds=10)


def python_command(code: str):
    return [sys.executable, "-c", code]
