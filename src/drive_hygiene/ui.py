from __future__ import annotations

import sys
import time
from pathlib import Path
from typing import Callable, Optional

from PySide6 import QtCore, QtGui, QtWidgets

from .errors import DriveHygieneError
from .exporter import ReportFormat, export_report
from .formatting import (
    fmt_percent,
    fmt_size,
    fmt_text,
    fmt_timestamp,
    fmt_value,
)
from .inventory import ScanView
from .logger import get_logger
from .powershell import launch_disk_cleanup, run_inspection
from .rules import CRITICAL, OK, WARNING

logger = get_logger(__name__)

COLUMNS = ["Item", "Detail", "Size", "Usage", "Status", "Notes"]


class _JobSignals(QtCore.QObject):
    finished = QtCore.Signal(object, float)
    failed = QtCore.Signal(str)


class _Job(QtCore.QRunnable):
    """Runs one blocking core call off the GUI thread."""

    def __init__(self, fn: Callable[[], object]) -> None:
        super().__init__()
        self.fn = fn
        self.signals = _JobSignals()

    def run(self) -> None:
        started = time.monotonic()
        try:
            result = self.fn()
        except (DriveHygieneError, ValueError) as exc:
            self.signals.failed.emit(str(exc))
            return
        except Exception as exc:
            logger.exception("Background job failed")
            self.signals.failed.emit(str(exc) or type(exc).__name__)
            return
        self.signals.finished.emit(result, time.monotonic() - started)


class MainWindow(QtWidgets.QMainWindow):
    def __init__(self) -> None:
        super().__init__()
        self.setWindowTitle("Drive Hygiene Check")
        self.resize(1024, 600)

        self.pool = QtCore.QThreadPool.globalInstance()
        # The only "last scan" state; replaced wholesale by each run
        self._view: Optional[ScanView] = None

        self.status_label = QtWidgets.QLabel("")
        self.scan_button = QtWidgets.QPushButton("Scan")
        self.scan_button.clicked.connect(self.scan)
        self.export_html_button = QtWidgets.QPushButton("Export HTML")
        self.export_html_button.clicked.connect(lambda: self.export(ReportFormat.HTML))
        self.export_text_button = QtWidgets.QPushButton("Export Text")
        self.export_text_button.clicked.connect(lambda: self.export(ReportFormat.TEXT))
        self.cleanup_button = QtWidgets.QPushButton("Disk Cleanup")
        self.cleanup_button.clicked.connect(self.cleanup)
        self.open_after_export = QtWidgets.QCheckBox("Open after export")
        self.open_after_export.setChecked(True)

        header = QtWidgets.QHBoxLayout()
        header.addWidget(self.scan_button)
        header.addWidget(self.export_html_button)
        header.addWidget(self.export_text_button)
        header.addWidget(self.cleanup_button)
        header.addWidget(self.open_after_export)
        header.addStretch(1)
        header.addWidget(self.status_label)

        self.tree = QtWidgets.QTreeWidget()
        self.tree.setColumnCount(len(COLUMNS))
        self.tree.setHeaderLabels(COLUMNS)
        self.tree.setAlternatingRowColors(True)

        root = QtWidgets.QWidget()
        layout = QtWidgets.QVBoxLayout(root)
        layout.addLayout(header)
        layout.addWidget(self.tree)
        self.setCentralWidget(root)

        self._set_status("Ready")

    def _set_status(self, text: str) -> None:
        self.status_label.setText(text)

    def _set_export_enabled(self, enabled: bool) -> None:
        self.export_html_button.setEnabled(enabled)
        self.export_text_button.setEnabled(enabled)

    def scan(self) -> None:
        self.scan_button.setEnabled(False)
        self._set_status("Running system inspection...")
        job = _Job(run_inspection)
        job.signals.finished.connect(self._scan_done)
        job.signals.failed.connect(self._scan_failed)
        self.pool.start(job)

    def _scan_done(self, document, duration: float) -> None:
        self.scan_button.setEnabled(True)
        self._view = ScanView(document)
        self.render(self._view)
        privilege = "Administrator" if self._view.is_administrator else "Standard User"
        self._set_status(f"Done in {duration:.1f}s ({privilege})")

    def _scan_failed(self, message: str) -> None:
        self.scan_button.setEnabled(True)
        logger.error("Inspection failed: %s", message)
        self._set_status(f"Inspection failed: {message}")

    def render(self, view: ScanView) -> None:
        self.tree.clear()
        summary = view.summary
        meta = view.metadata

        section = self._section("System Summary")
        self._row(section, "Computer", fmt_text(meta.host_name if meta else None))
        self._row(section, "Scan Time", fmt_timestamp(meta.timestamp_utc if meta else None))
        self._row(section, "Physical Disks", str(summary.total_physical_disks))
        self._row(section, "Volumes", str(summary.total_volumes))
        self._row(
            section,
            "Reclaimable Space",
            fmt_size(summary.total_reclaimable_formatted, summary.total_reclaimable_bytes),
        )
        for reason in view.discrepancies():
            self._row(section, "Summary mismatch", reason)

        if view.disks:
            section = self._section("Physical Disks")
            for disk in view.disks:
                item = self._row(
                    section,
                    fmt_text(disk.display_name),
                    f"{fmt_text(disk.media_type)} / {fmt_text(disk.bus_type)}",
                    fmt_size(disk.size_formatted, disk.size_bytes),
                    "",
                    fmt_text(disk.health_status),
                    fmt_text(disk.operational_status, ""),
                )
                _apply_tier_color(item, view.disk_tier(disk))
                for smart in view.smart_for_disk(disk.id):
                    self._row(
                        item,
                        "SMART",
                        f"Temp {fmt_value(smart.temperature)}, Wear {fmt_value(smart.wear)}",
                        "",
                        "",
                        fmt_text(smart.health_status),
                        f"Read errors {fmt_value(smart.read_errors)}, "
                        f"Write errors {fmt_value(smart.write_errors)}, "
                        f"Power-on hours {fmt_value(smart.power_on_hours)}",
                    )

        if view.volumes:
            section = self._section("Volumes")
            for vol in view.volumes:
                item = self._row(
                    section,
                    f"{fmt_text(vol.drive_letter, '')} {fmt_text(vol.volume_name, '')}".strip(),
                    fmt_text(vol.file_system, ""),
                    fmt_size(vol.total_size_formatted, vol.total_size_bytes),
                    "",
                    fmt_text(vol.status),
                    f"{fmt_size(vol.used_space_formatted, vol.used_space_bytes)} used "
                    f"({fmt_percent(vol.percent_free)} free)",
                )
                _apply_tier_color(item, view.volume_tier(vol))
                bar = QtWidgets.QProgressBar()
                bar.setRange(0, 100)
                bar.setValue(int(view.volume_bar_percent(vol)))
                bar.setFormat(fmt_percent(vol.percent_used))
                self.tree.setItemWidget(item, 3, bar)

        if view.trim is not None:
            section = self._section("SSD Status")
            state = "Enabled" if view.trim.trim_enabled else "Disabled"
            item = self._row(section, "TRIM", state, "", "", "", view.trim.details or "")
            _apply_tier_color(item, view.trim_tier())

        if view.candidates:
            section = self._section("Cleanup Candidates")
            for usage in view.candidates:
                self._row(
                    section,
                    fmt_text(usage.category),
                    fmt_text(usage.path, ""),
                    fmt_size(usage.size_formatted, usage.size_bytes),
                    "",
                    "",
                    f"{usage.file_count} files",
                )

        self.tree.expandAll()

    def _section(self, title: str) -> QtWidgets.QTreeWidgetItem:
        item = QtWidgets.QTreeWidgetItem([title])
        font = item.font(0)
        font.setBold(True)
        item.setFont(0, font)
        self.tree.addTopLevelItem(item)
        return item

    def _row(self, parent: QtWidgets.QTreeWidgetItem, *values: str) -> QtWidgets.QTreeWidgetItem:
        cells = list(values) + [""] * (len(COLUMNS) - len(values))
        item = QtWidgets.QTreeWidgetItem(cells)
        parent.addChild(item)
        return item

    def export(self, fmt: ReportFormat) -> None:
        if self._view is None:
            self._set_status("No scan results available. Run Scan first.")
            return
        directory = QtWidgets.QFileDialog.getExistingDirectory(
            self, "Select Export Location", str(Path.home())
        )
        if not directory:
            return
        self._set_export_enabled(False)
        self._set_status(f"Exporting {fmt.value} report...")
        job = _Job(lambda: export_report(fmt, directory))
        job.signals.finished.connect(self._export_done)
        job.signals.failed.connect(self._export_failed)
        self.pool.start(job)

    def _export_done(self, path, duration: float) -> None:
        self._set_export_enabled(True)
        self._set_status(f"Exported: {path}")
        if self.open_after_export.isChecked():
            QtGui.QDesktopServices.openUrl(QtCore.QUrl.fromLocalFile(str(path)))

    def _export_failed(self, message: str) -> None:
        self._set_export_enabled(True)
        logger.error("Export failed: %s", message)
        self._set_status(f"Export failed: {message}")

    def cleanup(self) -> None:
        try:
            launch_disk_cleanup("C")
        except DriveHygieneError as exc:
            self._set_status(str(exc))
            return
        self._set_status("Windows Disk Cleanup has been launched.")


def _apply_tier_color(item: QtWidgets.QTreeWidgetItem, tier: str) -> None:
    if tier == CRITICAL:
        color = QtCore.Qt.GlobalColor.red
    elif tier == WARNING:
        color = QtCore.Qt.GlobalColor.darkYellow
    elif tier == OK:
        color = QtCore.Qt.GlobalColor.darkGreen
    else:
        color = QtCore.Qt.GlobalColor.gray

    for i in range(item.columnCount()):
        item.setForeground(i, color)


def main() -> None:
    app = QtWidgets.QApplication(sys.argv)
    win = MainWindow()
    win.show()
    sys.exit(app.exec())
