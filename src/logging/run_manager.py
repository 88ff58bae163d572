"""
Run Manager for the Colony Battle Simulator.

Manages output directories for simulation sessions:
  - Creates timestamped run directories under a base output path
  - Copies the config used for the run
  - Hooks into an engine to log per-tick KPIs and periodic snapshots
"""

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path
from typing import Optional

from src.core.config import SimConfig, save_config
from src.core.world import World
from src.logging.csv_logger import CSVLogger
from src.logging.snapshot import SnapshotManager
from src.simulation.engine import SimulationEngine, TickReport
from src.simulation.metrics import MetricsCollector


class RunManager:
    """
    Manages a single simulation run's output directory.

    Directory structure:
        {base_dir}/{run_name}/
            config.json          - copy of the simulation config
            metrics.csv          - per-tick KPIs
            summary.json         - written by finalize()
            snapshots/           - registry snapshots (JSON)
                tick_0005.json
                ...

    Attributes:
        run_dir: Path to this run's output directory.
        metrics: MetricsCollector fed by the attached engine.
        csv_logger: CSVLogger instance for metrics.
        snapshot_manager: SnapshotManager instance for world snapshots.
    """

    def __init__(
        self,
        config: SimConfig,
        base_dir: Optional[str | Path] = None,
        run_name: Optional[str] = None,
    ):
        """
        Initialize a run manager and create the output directory.

        Args:
            config: Simulation configuration (will be saved as config.json).
            base_dir: Base output directory. None = use config.output.output_dir.
            run_name: Name for this run's subdirectory. None = timestamp.
        """
        if base_dir is None:
            base_dir = config.output.output_dir

        if run_name is None:
            run_name = datetime.now().strftime("%Y%m%d_%H%M%S")

        self.config = config
        self.run_dir = Path(base_dir) / run_name
        self.run_dir.mkdir(parents=True, exist_ok=True)

        config_path = self.run_dir / "config.json"
        save_config(config, config_path)
        self._config_path = config_path

        self.metrics = MetricsCollector()
        self.csv_logger = CSVLogger(self.run_dir / "metrics.csv")
        self.snapshot_manager = SnapshotManager(self.run_dir)

    @property
    def config_path(self) -> Path:
        return self._config_path

    @property
    def metrics_path(self) -> Path:
        return self.csv_logger.file_path

    @property
    def snapshots_dir(self) -> Path:
        return self.snapshot_manager.snapshot_dir

    def attach(self, engine: SimulationEngine) -> None:
        """Log every tick the engine runs from now on."""
        engine.on_tick = self._on_tick

    def _on_tick(self, report: TickReport, engine: SimulationEngine) -> None:
        kpis = self.metrics.collect(engine.world, report.stats)
        self.log_tick(kpis)

        every = self.config.output.snapshot_every_n_ticks
        if every > 0 and (report.tick % every == 0 or report.ended):
            self.save_snapshot(engine.world)

    def log_tick(self, kpi_dict: dict) -> None:
        """Log one tick's KPIs to CSV."""
        self.csv_logger.log_row(kpi_dict)

    def save_snapshot(self, world: World) -> Path:
        """Save a registry snapshot."""
        return self.snapshot_manager.save(world)

    def finalize(self, summary: Optional[dict] = None) -> None:
        """
        Finalize the run (write summary file if provided).

        Args:
            summary: Optional summary dict to save as summary.json.
        """
        if summary is not None:
            summary_path = self.run_dir / "summary.json"
            with open(summary_path, "w", encoding="utf-8") as f:
                json.dump(summary, f, indent=2, ensure_ascii=False)

    def __repr__(self) -> str:
        return f"RunManager(run_dir='{self.run_dir}')"
