from __future__ import annotations

import logging
import sys
from typing import List

from PySide6 import QtGui, QtWidgets

from .config import Settings
from .models import DeviceReport
from .platform import is_elevated
from .report import SEVERITY_COLORS, export_json, write_log
from .scan import run
from .smartctl import has_smartctl

logger = logging.getLogger(__name__)

COLUMNS = ["Drive", "Model", "Device", "Type", "Status", "Health", "Detail"]


class MainWindow(QtWidgets.QMainWindow):
    def __init__(self, settings: Settings) -> None:
        super().__init__()
        self.settings = settings
        self.setWindowTitle("Drive Health")
        self.resize(900, 420)

        self.status_label = QtWidgets.QLabel("")
        self.scan_button = QtWidgets.QPushButton("Scan")
        self.scan_button.clicked.connect(self.scan)
        self.export_json_button = QtWidgets.QPushButton("Export JSON")
        self.export_json_button.clicked.connect(self.export_json)
        self._last_reports: List[DeviceReport] = []
        self._rendered_once = False

        header = QtWidgets.QHBoxLayout()
        header.addWidget(self.scan_button)
        header.addWidget(self.export_json_button)
        header.addStretch(1)
        header.addWidget(self.status_label)

        self.tree = QtWidgets.QTreeWidget()
        self.tree.setColumnCount(len(COLUMNS))
        self.tree.setHeaderLabels(COLUMNS)
        self.tree.setRootIsDecorated(False)
        self.tree.setAlternatingRowColors(True)

        root = QtWidgets.QWidget()
        layout = QtWidgets.QVBoxLayout(root)
        layout.addLayout(header)
        layout.addWidget(self.tree)
        self.setCentralWidget(root)

        self._set_status("Ready")

    def _set_status(self, text: str) -> None:
        self.status_label.setText(text)

    def scan(self) -> None:
        self.tree.clear()
        warnings = []
        if not has_smartctl(self.settings):
            warnings.append("smartctl not found")
        if not is_elevated():
            warnings.append("not running elevated, SMART queries may fail")
        self._set_status("Scanning...")
        QtWidgets.QApplication.processEvents()

        try:
            reports = run(self.settings)
        except Exception as exc:
            logger.exception("device inventory failed")
            self._set_status(f"Disk scan failed: {exc}")
            return

        for report in reports:
            self.tree.addTopLevelItem(_report_item(report))
        for i in range(len(COLUMNS)):
            self.tree.resizeColumnToContents(i)
        self._last_reports = reports

        if not self._rendered_once:
            self._rendered_once = True
            QtWidgets.QApplication.beep()

        path = write_log(reports, self.settings)
        if path is None:
            warnings.append("log could not be written")
        else:
            warnings.append(f"log: {path}")
        self._set_status("Done" + "".join(f"; {w}" for w in warnings))

    def export_json(self) -> None:
        if not self._last_reports:
            self._set_status("Nothing to export. Run Scan first.")
            return
        path, _ = QtWidgets.QFileDialog.getSaveFileName(
            self, "Export JSON", "drive_health_report.json", "JSON Files (*.json)"
        )
        if not path:
            return
        try:
            export_json(self._last_reports, path)
            self._set_status(f"Exported: {path}")
        except OSError as exc:
            self._set_status(f"Export failed: {exc}")


def _report_item(report: DeviceReport) -> QtWidgets.QTreeWidgetItem:
    device = report.device
    verdict = report.verdict
    item = QtWidgets.QTreeWidgetItem(
        [
            ", ".join(device.drive_letters),
            device.model,
            device.device_id,
            report.device_type.value if report.device_type else "",
            verdict.severity.value,
            f"{verdict.health_percent}%" if verdict.health_percent is not None else "",
            verdict.detail,
        ]
    )
    color = QtGui.QColor(SEVERITY_COLORS[verdict.severity])
    for i in range(item.columnCount()):
        item.setForeground(i, color)
    return item


def main() -> None:
    settings = Settings.from_env()
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app = QtWidgets.QApplication(sys.argv)
    win = MainWindow(settings)
    win.show()
    win.scan()
    sys.exit(app.exec())
