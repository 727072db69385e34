from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Tuple, Union


# SMART counters arrive as numbers or as diagnostic strings such as "N/A"
SmartValue = Union[int, float, str, None]


@dataclass(frozen=True)
class Metadata:
    tool_version: Optional[str] = None
    timestamp_utc: Optional[datetime] = None
    is_administrator: bool = False
    host_name: Optional[str] = None


@dataclass(frozen=True)
class PhysicalDisk:
    id: int = 0
    display_name: Optional[str] = None
    media_type: Optional[str] = None
    bus_type: Optional[str] = None
    health_status: Optional[str] = None
    operational_status: Optional[str] = None
    size_bytes: int = 0
    size_formatted: Optional[str] = None


@dataclass(frozen=True)
class SmartRecord:
    disk_id: int = 0
    display_name: Optional[str] = None
    health_status: Optional[str] = None
    operational_status: Optional[str] = None
    temperature: SmartValue = None
    read_errors: SmartValue = None
    write_errors: SmartValue = None
    power_on_hours: SmartValue = None
    wear: SmartValue = None


@dataclass(frozen=True)
class Volume:
    drive_letter: Optional[str] = None
    volume_name: Optional[str] = None
    file_system: Optional[str] = None
    total_size_bytes: int = 0
    total_size_formatted: Optional[str] = None
    free_space_bytes: int = 0
    free_space_formatted: Optional[str] = None
    used_space_bytes: int = 0
    used_space_formatted: Optional[str] = None
    percent_used: float = 0.0
    percent_free: float = 0.0
    status: Optional[str] = None


@dataclass(frozen=True)
class TrimInfo:
    trim_enabled: bool = False
    raw_output: Optional[str] = None
    details: Optional[str] = None


@dataclass(frozen=True)
class UsageItem:
    category: Optional[str] = None
    path: Optional[str] = None
    size_bytes: int = 0
    size_formatted: Optional[str] = None
    file_count: int = 0


@dataclass(frozen=True)
class Summary:
    total_physical_disks: int = 0
    total_volumes: int = 0
    total_reclaimable_bytes: int = 0
    total_reclaimable_formatted: Optional[str] = None
    critical_volume_count: int = 0
    warning_volume_count: int = 0


@dataclass(frozen=True)
class ScanDocument:
    metadata: Optional[Metadata] = None
    physical_disks: Tuple[PhysicalDisk, ...] = ()
    smart_records: Tuple[SmartRecord, ...] = ()
    volumes: Tuple[Volume, ...] = ()
    trim_info: Optional[TrimInfo] = None
    usage_breakdown: Tuple[UsageItem, ...] = ()
    summary: Optional[Summary] = None


@dataclass(frozen=True)
class ProcessOutput:
    exit_code: int
    stdout: str
    stderr: str
    duration_s: float
