"""Tests for the read-only scan view and the tier rules behind it."""

import json

import pytest

from drive_hygiene.decoder import decode_scan
from drive_hygiene.inventory import ScanView
from drive_hygiene.models import ScanDocument, Summary, TrimInfo, UsageItem, Volume
from drive_hygiene.rules import (
    CRITICAL,
    OK,
    UNKNOWN,
    WARNING,
    clamp_percent,
    health_tier,
    summary_discrepancies,
    trim_tier,
    volume_tier,
)


@pytest.fixture
def view(sample_document):
    return ScanView(decode_scan(json.dumps(sample_document)))


@pytest.mark.parametrize("raw, bar", [(-5.0, 0.0), (150.0, 100.0), (92.3, 92.3), (0.0, 0.0), (100.0, 100.0)])
def test_bar_percent_is_clamped_but_raw_value_kept(raw, bar):
    vol = Volume(drive_letter="C:", percent_used=raw)
    view = ScanView(ScanDocument(volumes=(vol,)))

    assert view.volume_bar_percent(vol) == bar
    assert view.volumes[0].percent_used == raw


def test_clamp_handles_nan():
    assert clamp_percent(float("nan")) == 0.0


def test_candidates_exclude_zero_size_items(view):
    candidates = view.candidates
    zero_size = [u for u in view.usage_items if u.size_bytes == 0]

    assert [c.category for c in candidates] == ["Windows Temp", "Browser Cache"]
    assert all(c.size_bytes != 0 for c in candidates)
    assert len(view.usage_items) == len(candidates) + len(zero_size)
    assert any(u.category == "Recycle Bin" for u in view.usage_items)


def test_summary_is_passed_through_not_recomputed():
    doc = ScanDocument(
        volumes=(Volume(status="Healthy"),),
        summary=Summary(total_volumes=9, critical_volume_count=4),
    )
    view = ScanView(doc)

    assert view.summary.total_volumes == 9
    assert view.summary.critical_volume_count == 4


def test_missing_summary_reads_as_zeros():
    view = ScanView(ScanDocument())
    assert view.summary == Summary()
    assert view.is_administrator is False
    assert view.has_trim is False
    assert view.trim is None
    assert view.trim_tier() == UNKNOWN


def test_smart_records_by_disk(view):
    assert [s.display_name for s in view.smart_for_disk(1)] == ["WDC WD40EFRX"]
    # foreign key is not enforced
    assert view.smart_for_disk(99) == []


def test_disk_and_volume_tiers(view):
    assert [view.disk_tier(d) for d in view.disks] == [OK, WARNING]
    assert [view.volume_tier(v) for v in view.volumes] == [CRITICAL, OK]
    assert view.trim_tier() == OK


@pytest.mark.parametrize(
    "status, expected",
    [("Healthy", OK), ("warning", WARNING), ("Unhealthy", CRITICAL), ("Lost Communication", UNKNOWN), (None, UNKNOWN)],
)
def test_health_tier(status, expected):
    assert health_tier(status) == expected


@pytest.mark.parametrize(
    "status, expected",
    [("Healthy", OK), ("Warning", WARNING), ("CRITICAL", CRITICAL), ("", UNKNOWN), ("Full", UNKNOWN)],
)
def test_volume_tier(status, expected):
    assert volume_tier(status) == expected


def test_trim_tier():
    assert trim_tier(TrimInfo(trim_enabled=True)) == OK
    assert trim_tier(TrimInfo(trim_enabled=False)) == WARNING
    assert trim_tier(None) == UNKNOWN


def test_consistent_summary_has_no_discrepancies(view):
    assert view.discrepancies() == []


def test_discrepancies_report_mismatches_without_rewriting():
    doc = ScanDocument(
        volumes=(Volume(status="Critical"), Volume(status="Warning")),
        usage_breakdown=(UsageItem(size_bytes=10), UsageItem(size_bytes=0)),
        summary=Summary(total_volumes=2, critical_volume_count=0, warning_volume_count=1, total_reclaimable_bytes=99),
    )

    reasons = summary_discrepancies(doc)

    assert reasons == [
        "Critical volumes: summary reports 0, details contain 1",
        "Reclaimable bytes: summary reports 99, details contain 10",
    ]
    assert doc.summary.critical_volume_count == 0


def test_discrepancies_skip_omitted_sections():
    doc = ScanDocument(summary=Summary(total_physical_disks=3, total_volumes=2))
    assert summary_discrepancies(doc) == []
