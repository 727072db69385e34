from __future__ import annotations

from typing import List, Optional

from .models import ScanDocument, TrimInfo

OK = "OK"
WARNING = "WARNING"
CRITICAL = "CRITICAL"
UNKNOWN = "UNKNOWN"

_HEALTH_TIERS = {"healthy": OK, "warning": WARNING, "unhealthy": CRITICAL}
_VOLUME_TIERS = {"healthy": OK, "warning": WARNING, "critical": CRITICAL}


def health_tier(status: Optional[str]) -> str:
    """Tier for a physical disk or SMART health status."""
    if not status:
        return UNKNOWN
    return _HEALTH_TIERS.get(status.strip().lower(), UNKNOWN)


def volume_tier(status: Optional[str]) -> str:
    if not status:
        return UNKNOWN
    return _VOLUME_TIERS.get(status.strip().lower(), UNKNOWN)


def trim_tier(trim: Optional[TrimInfo]) -> str:
    if trim is None:
        return UNKNOWN
    return OK if trim.trim_enabled else WARNING


def clamp_percent(value: float) -> float:
    # NaN compares false both ways and would slip through min/max
    if value != value:
        return 0.0
    return max(0.0, min(100.0, float(value)))


def summary_discrepancies(document: ScanDocument) -> List[str]:
    """Compare the producer summary against a recount of the detail lists.

    Advisory only: the summary stays authoritative and is never rewritten.
    Sections the producer omitted entirely are not counted against it.
    """
    summary = document.summary
    if summary is None:
        return []

    reasons: List[str] = []

    def check(label, reported, counted):
        if reported != counted:
            reasons.append(f"{label}: summary reports {reported}, details contain {counted}")

    if document.physical_disks:
        check("Physical disks", summary.total_physical_disks, len(document.physical_disks))
    if document.volumes:
        check("Volumes", summary.total_volumes, len(document.volumes))
        tiers = [volume_tier(v.status) for v in document.volumes]
        check("Critical volumes", summary.critical_volume_count, tiers.count(CRITICAL))
        check("Warning volumes", summary.warning_volume_count, tiers.count(WARNING))
    if document.usage_breakdown:
        check(
            "Reclaimable bytes",
            summary.total_reclaimable_bytes,
            sum(u.size_bytes for u in document.usage_breakdown),
        )
    return reasons
