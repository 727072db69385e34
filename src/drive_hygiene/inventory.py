"""Read-only query surface over one decoded scan.

A ``ScanView`` wraps a single ``ScanDocument``. The caller owns it and passes it
to whatever renders it; the core keeps no "last scan" of its own.
"""

from __future__ import annotations

from typing import List, Optional, Tuple

from . import rules
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


class ScanView:
    def __init__(self, document: ScanDocument) -> None:
        self._doc = document

    @property
    def document(self) -> ScanDocument:
        return self._doc

    @property
    def metadata(self) -> Optional[Metadata]:
        return self._doc.metadata

    @property
    def is_administrator(self) -> bool:
        return bool(self._doc.metadata and self._doc.metadata.is_administrator)

    @property
    def disks(self) -> Tuple[PhysicalDisk, ...]:
        return self._doc.physical_disks

    @property
    def smart_records(self) -> Tuple[SmartRecord, ...]:
        return self._doc.smart_records

    @property
    def volumes(self) -> Tuple[Volume, ...]:
        return self._doc.volumes

    @property
    def trim(self) -> Optional[TrimInfo]:
        return self._doc.trim_info

    @property
    def has_trim(self) -> bool:
        return self._doc.trim_info is not None

    @property
    def usage_items(self) -> Tuple[UsageItem, ...]:
        return self._doc.usage_breakdown

    @property
    def candidates(self) -> Tuple[UsageItem, ...]:
        """Usage items worth showing as cleanup candidates (non-zero size)."""
        return tuple(u for u in self._doc.usage_breakdown if u.size_bytes != 0)

    @property
    def summary(self) -> Summary:
        return self._doc.summary if self._doc.summary is not None else Summary()

    def smart_for_disk(self, disk_id: int) -> List[SmartRecord]:
        return [s for s in self._doc.smart_records if s.disk_id == disk_id]

    def volume_bar_percent(self, volume: Volume) -> float:
        """Usage bar fill, clamped to [0, 100]; ``volume.percent_used`` is untouched."""
        return rules.clamp_percent(volume.percent_used)

    def volume_tier(self, volume: Volume) -> str:
        return rules.volume_tier(volume.status)

    def disk_tier(self, disk: PhysicalDisk) -> str:
        return rules.health_tier(disk.health_status)

    def trim_tier(self) -> str:
        return rules.trim_tier(self._doc.trim_info)

    def discrepancies(self) -> List[str]:
        return rules.summary_discrepancies(self._doc)
