"""
Snapshot manager for the Colony Battle Simulator.

Saves world registry snapshots (JSON) at chosen ticks. A snapshot records
every tracked colony with its chambers and combatants, for later analysis.
Snapshots are write-once records; the simulation is never rebuilt from them.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import numpy as np

from src.core.world import World


class SnapshotManager:
    """
    Saves and loads world snapshots as JSON files.

    Each snapshot is saved to: {output_dir}/snapshots/tick_{N:04d}.json

    Attributes:
        output_dir: Base output directory for the run.
        snapshot_dir: Directory holding the snapshot files.
    """

    def __init__(self, output_dir: str | Path):
        self.output_dir = Path(output_dir)
        self.snapshot_dir = self.output_dir / "snapshots"
        self.snapshot_dir.mkdir(parents=True, exist_ok=True)

    def save(self, world: World) -> Path:
        """
        Save a snapshot of the registry at its current tick.

        Returns:
            Path to the saved snapshot file.
        """
        snapshot = self._world_to_dict(world)
        file_path = self.snapshot_dir / f"tick_{world.tick_count:04d}.json"

        with open(file_path, "w", encoding="utf-8") as f:
            json.dump(snapshot, f, indent=2, ensure_ascii=False, default=_json_default)

        return file_path

    def load(self, tick: int) -> dict:
        """
        Load the snapshot taken at a tick.

        Raises:
            FileNotFoundError: If no snapshot exists for that tick.
        """
        file_path = self.snapshot_dir / f"tick_{tick:04d}.json"
        if not file_path.exists():
            raise FileNotFoundError(f"Snapshot not found: {file_path}")

        with open(file_path, "r", encoding="utf-8") as f:
            return json.load(f)

    def list_snapshots(self) -> list[int]:
        """Sorted tick numbers of all saved snapshots."""
        ticks = []
        for p in self.snapshot_dir.glob("tick_*.json"):
            try:
                ticks.append(int(p.stem.split("_")[1]))
            except (IndexError, ValueError):
                continue
        return sorted(ticks)

    @staticmethod
    def _world_to_dict(world: World) -> dict:
        return {
            "tick": world.tick_count,
            "next_id": world.next_id,
            "active_count": world.active_count,
            "colonies": [colony.to_dict() for colony in world.colonies],
        }


def _json_default(obj: Any) -> Any:
    """JSON serialization fallback for NumPy and enum values."""
    if isinstance(obj, np.integer):
        return int(obj)
    if isinstance(obj, np.floating):
        return float(obj)
    if hasattr(obj, "value"):
        return obj.value
    raise TypeError(f"Object of type {type(obj)} is not JSON serializable")
