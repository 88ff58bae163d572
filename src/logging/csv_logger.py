"""
CSV Logger for the Colony Battle Simulator.

Writes one row per tick to a CSV file with all KPI columns.
Rows are appended as ticks complete; the header is written with the first row.
"""

from __future__ import annotations

import csv
from pathlib import Path
from typing import Optional

from src.simulation.metrics import MetricsCollector


class CSVLogger:
    """
    Logs per-tick KPIs to a CSV file.

    Usage:
        logger = CSVLogger("runs/my_run/metrics.csv")
        logger.log_row(kpi_dict)   # append one tick

    Attributes:
        file_path: Path to the CSV file.
        columns: Ordered list of column names.
        rows_written: Rows appended through this logger.
    """

    def __init__(
        self,
        file_path: str | Path,
        columns: Optional[list[str]] = None,
    ):
        """
        Args:
            file_path: Path to the output CSV file. Directory is created if needed.
            columns: Ordered column names. None = use MetricsCollector.kpi_names().
        """
        self.file_path = Path(file_path)
        self.columns = columns or MetricsCollector.kpi_names()
        self.rows_written = 0
        self._header_written = False

        self.file_path.parent.mkdir(parents=True, exist_ok=True)

    def _ensure_header(self) -> None:
        """Write the header unless it is already in the file."""
        if self._header_written:
            return

        if self.file_path.exists() and self.file_path.stat().st_size > 0:
            self._header_written = True
            return

        with open(self.file_path, "w", newline="", encoding="utf-8") as f:
            writer = csv.DictWriter(f, fieldnames=self.columns, extrasaction="ignore")
            writer.writeheader()

        self._header_written = True

    def log_row(self, kpi_dict: dict) -> None:
        """Append one KPI row. Keys outside `columns` are dropped."""
        self._ensure_header()

        with open(self.file_path, "a", newline="", encoding="utf-8") as f:
            writer = csv.DictWriter(f, fieldnames=self.columns, extrasaction="ignore")
            writer.writerow(kpi_dict)
        self.rows_written += 1
