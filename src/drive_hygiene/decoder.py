"""Decode the inspector's JSON document into the immutable scan model.

The inspector is a versioned PowerShell script, so nothing about its output is
assumed: every section and field may be missing, numbers may arrive as strings,
and ``ConvertTo-Json`` collapses one-element arrays into a bare object. Only
text that is not a JSON object at all is rejected.
"""

from __future__ import annotations

import json
import re
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional, Tuple, TypeVar

from .errors import MalformedOutput
from .logger import get_logger
from .models import (
    Metadata,
    PhysicalDisk,
    ScanDocument,
    SmartRecord,
    SmartValue,
    Summary,
    TrimInfo,
    UsageItem,
    Volume,
)

logger = get_logger(__name__)

T = TypeVar("T")

# PowerShell 5 serializes DateTime as "/Date(1700000000000)/"
_MS_DATE = re.compile(r"^/Date\((-?\d+)(?:[+-]\d{4})?\)/$")


def decode_scan(raw_text: str) -> ScanDocument:
    # a BOM can survive when the text did not come through the invoker
    text = raw_text.lstrip("\ufeff")
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise MalformedOutput(str(exc), raw_text) from exc
    if not isinstance(data, dict):
        raise MalformedOutput(
            f"expected a JSON object, got {type(data).__name__}", raw_text
        )

    metadata = data.get("Metadata")
    trim = data.get("TrimInfo")
    summary = data.get("Summary")
    return ScanDocument(
        metadata=_metadata(metadata) if isinstance(metadata, dict) else None,
        physical_disks=_records(data.get("PhysicalDisks"), _physical_disk),
        smart_records=_records(data.get("SmartData"), _smart_record),
        volumes=_records(data.get("Volumes"), _volume),
        trim_info=_trim(trim) if isinstance(trim, dict) else None,
        usage_breakdown=_records(data.get("UsageBreakdown"), _usage_item),
        summary=_summary(summary) if isinstance(summary, dict) else None,
    )


def _records(value: Any, build: Callable[[Dict[str, Any]], T]) -> Tuple[T, ...]:
    if value is None:
        return ()
    if isinstance(value, dict):
        value = [value]
    if not isinstance(value, list):
        logger.debug("Ignoring section of type %s", type(value).__name__)
        return ()
    result: List[T] = []
    for item in value:
        if not isinstance(item, dict):
            logger.debug("Skipping non-object entry: %r", item)
            continue
        result.append(build(item))
    return tuple(result)


def _metadata(d: Dict[str, Any]) -> Metadata:
    return Metadata(
        tool_version=_str(d.get("Version")),
        timestamp_utc=_timestamp(d.get("Timestamp")),
        is_administrator=_bool(d.get("IsAdministrator")),
        host_name=_str(d.get("ComputerName")),
    )


def _physical_disk(d: Dict[str, Any]) -> PhysicalDisk:
    return PhysicalDisk(
        id=_int(d.get("DeviceId")),
        display_name=_str(d.get("FriendlyName")),
        media_type=_str(d.get("MediaType")),
        bus_type=_str(d.get("BusType")),
        health_status=_str(d.get("HealthStatus")),
        operational_status=_str(d.get("OperationalStatus")),
        size_bytes=_int(d.get("Size")),
        size_formatted=_str(d.get("SizeFormatted")),
    )


def _smart_record(d: Dict[str, Any]) -> SmartRecord:
    return SmartRecord(
        disk_id=_int(d.get("DiskId")),
        display_name=_str(d.get("FriendlyName")),
        health_status=_str(d.get("HealthStatus")),
        operational_status=_str(d.get("OperationalStatus")),
        temperature=_opaque(d.get("Temperature")),
        read_errors=_opaque(d.get("ReadErrors")),
        write_errors=_opaque(d.get("WriteErrors")),
        power_on_hours=_opaque(d.get("PowerOnHours")),
        wear=_opaque(d.get("Wear")),
    )


def _volume(d: Dict[str, Any]) -> Volume:
    return Volume(
        drive_letter=_str(d.get("DriveLetter")),
        volume_name=_str(d.get("VolumeName")),
        file_system=_str(d.get("FileSystem")),
        total_size_bytes=_int(d.get("TotalSize")),
        total_size_formatted=_str(d.get("TotalSizeFormatted")),
        free_space_bytes=_int(d.get("FreeSpace")),
        free_space_formatted=_str(d.get("FreeSpaceFormatted")),
        used_space_bytes=_int(d.get("UsedSpace")),
        used_space_formatted=_str(d.get("UsedSpaceFormatted")),
        percent_used=_float(d.get("PercentUsed")),
        percent_free=_float(d.get("PercentFree")),
        status=_str(d.get("Status")),
    )


def _trim(d: Dict[str, Any]) -> TrimInfo:
    return TrimInfo(
        trim_enabled=_bool(d.get("TrimEnabled")),
        raw_output=_str(d.get("RawOutput")),
        details=_str(d.get("Details")),
    )


def _usage_item(d: Dict[str, Any]) -> UsageItem:
    return UsageItem(
        category=_str(d.get("Category")),
        path=_str(d.get("Path")),
        size_bytes=_int(d.get("Size")),
        size_formatted=_str(d.get("SizeFormatted")),
        file_count=_int(d.get("FileCount")),
    )


def _summary(d: Dict[str, Any]) -> Summary:
    return Summary(
        total_physical_disks=_int(d.get("TotalPhysicalDisks")),
        total_volumes=_int(d.get("TotalVolumes")),
        total_reclaimable_bytes=_int(d.get("TotalReclaimableBytes")),
        total_reclaimable_formatted=_str(d.get("TotalReclaimableFormatted")),
        critical_volume_count=_int(d.get("CriticalVolumes")),
        warning_volume_count=_int(d.get("WarningVolumes")),
    )


def _str(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, (dict, list)):
        return json.dumps(value, separators=(",", ":"))
    return str(value)


def _int(value: Any, default: int = 0) -> int:
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value == value and abs(value) != float("inf") else default
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            try:
                return _int(float(value.strip()), default)
            except ValueError:
                return default
    return default


def _float(value: Any, default: float = 0.0) -> float:
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            return default
    return default


def _bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        return value.strip().lower() in ("true", "1", "yes")
    return False


def _opaque(value: Any) -> SmartValue:
    if value is None or isinstance(value, (str, float)):
        return value
    if isinstance(value, bool):
        return str(value)
    if isinstance(value, int):
        return value
    return json.dumps(value, separators=(",", ":"))


def _timestamp(value: Any) -> Optional[datetime]:
    if not isinstance(value, str) or not value.strip():
        return None
    text = value.strip()
    m = _MS_DATE.match(text)
    if m:
        return datetime.fromtimestamp(int(m.group(1)) / 1000, tz=timezone.utc)
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    # .NET emits seven fractional digits; fromisoformat accepts at most six
    text = re.sub(r"(\.\d{6})\d+", r"\1", text)
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        logger.debug("Unparsable timestamp %r", value)
        return None


def encode_scan(document: ScanDocument) -> Dict[str, Any]:
    """Render a document back into the inspector's wire shape.

    Absent sections are omitted so that decoding the result yields an equal
    document.
    """
    out: Dict[str, Any] = {}
    if document.metadata is not None:
        m = document.metadata
        out["Metadata"] = {
            "Version": m.tool_version,
            "Timestamp": m.timestamp_utc.isoformat() if m.timestamp_utc else None,
            "IsAdministrator": m.is_administrator,
            "ComputerName": m.host_name,
        }
    if document.physical_disks:
        out["PhysicalDisks"] = [
            {
                "DeviceId": d.id,
                "FriendlyName": d.display_name,
                "MediaType": d.media_type,
                "BusType": d.bus_type,
                "HealthStatus": d.health_status,
                "OperationalStatus": d.operational_status,
                "Size": d.size_bytes,
                "SizeFormatted": d.size_formatted,
            }
            for d in document.physical_disks
        ]
    if document.smart_records:
        out["SmartData"] = [
            {
                "DiskId": s.disk_id,
                "FriendlyName": s.display_name,
                "HealthStatus": s.health_status,
                "OperationalStatus": s.operational_status,
                "Temperature": s.temperature,
                "ReadErrors": s.read_errors,
                "WriteErrors": s.write_errors,
                "PowerOnHours": s.power_on_hours,
                "Wear": s.wear,
            }
            for s in document.smart_records
        ]
    if document.volumes:
        out["Volumes"] = [
            {
                "DriveLetter": v.drive_letter,
                "VolumeName": v.volume_name,
                "FileSystem": v.file_system,
                "TotalSize": v.total_size_bytes,
                "TotalSizeFormatted": v.total_size_formatted,
                "FreeSpace": v.free_space_bytes,
                "FreeSpaceFormatted": v.free_space_formatted,
                "UsedSpace": v.used_space_bytes,
                "UsedSpaceFormatted": v.used_space_formatted,
                "PercentUsed": v.percent_used,
                "PercentFree": v.percent_free,
                "Status": v.status,
            }
            for v in document.volumes
        ]
    if document.trim_info is not None:
        t = document.trim_info
        out["TrimInfo"] = {
            "TrimEnabled": t.trim_enabled,
            "RawOutput": t.raw_output,
            "Details": t.details,
        }
    if document.usage_breakdown:
        out["UsageBreakdown"] = [
            {
                "Category": u.category,
                "Path": u.path,
                "Size": u.size_bytes,
                "SizeFormatted": u.size_formatted,
                "FileCount": u.file_count,
            }
            for u in document.usage_breakdown
        ]
    if document.summary is not None:
        s = document.summary
        out["Summary"] = {
            "TotalPhysicalDisks": s.total_physical_disks,
            "TotalVolumes": s.total_volumes,
            "TotalReclaimableBytes": s.total_reclaimable_bytes,
            "TotalReclaimableFormatted": s.total_reclaimable_formatted,
            "CriticalVolumes": s.critical_volume_count,
            "WarningVolumes": s.warning_volume_count,
        }
    return out
