"""
KPI Metrics collection for the Colony Battle Simulator.

MetricsCollector gathers per-tick Key Performance Indicators (KPIs) from
the world registry and the tick's statistics. It produces a flat
dictionary per tick suitable for CSV export and analysis.
"""

from __future__ import annotations

from typing import Optional

import numpy as np

from src.core.world import World
from src.simulation.engine import TickStats


# ---------------------------------------------------------------------------
# MetricsCollector
# ---------------------------------------------------------------------------

class MetricsCollector:
    """
    Collects and computes KPIs per tick.

    Usage:
      1. After each tick, call `collect(world, tick_stats)`
      2. Resulting dict is appended to `history`
      3. Call `get_history()` to retrieve all collected snapshots

    Attributes:
        history: List of KPI dicts, one per tick.
    """

    def __init__(self) -> None:
        self.history: list[dict] = []

    def collect(self, world: World, stats: TickStats) -> dict:
        """
        Compute all KPIs for the tick that just finished and append to history.

        Args:
            world: Registry state after the tick's cleanup phase.
            stats: Counters of the tick.

        Returns:
            Dict of KPI_name -> value.
        """
        kpis: dict = {}
        active = world.active_colonies()

        # --- Population ---
        kpis["tick"] = world.tick_count
        kpis["active_colonies"] = len(active)
        kpis["colonies_removed"] = stats.colonies_removed
        kpis["simulation_ended"] = len(active) <= 1

        # --- Combat ---
        kpis["battles"] = stats.battles
        kpis["damage_dealt"] = stats.damage_dealt
        kpis["combatants_lost"] = stats.combatants_lost
        kpis["conquests"] = stats.conquests

        # --- Upkeep ---
        kpis["food_consumed"] = stats.food_consumed
        kpis["starvations"] = stats.starvations
        kpis["ruler_deaths"] = stats.ruler_deaths

        # --- Food statistics ---
        if active:
            food = np.array([c.food for c in active], dtype=np.int64)
            kpis["total_food"] = int(np.sum(food))
            kpis["avg_food"] = float(np.mean(food))
            kpis["min_food"] = int(np.min(food))
            kpis["max_food"] = int(np.max(food))
        else:
            kpis["total_food"] = 0
            kpis["avg_food"] = 0.0
            kpis["min_food"] = 0
            kpis["max_food"] = 0

        # --- Forces ---
        combatants = np.array([len(c.combatants) for c in active], dtype=np.int64)
        kpis["total_combatants"] = int(np.sum(combatants)) if active else 0
        kpis["avg_combatant_health"] = self._average_health(world)
        kpis["total_workers"] = int(sum(c.worker_ticks for c in active))
        kpis["total_chambers"] = int(sum(len(c.chambers) for c in active))

        self.history.append(kpis)
        return kpis

    @staticmethod
    def _average_health(world: World) -> float:
        """Mean health over every combatant of every active colony (0.0 if none)."""
        health = [unit.health for c in world.active_colonies() for unit in c.combatants]
        if not health:
            return 0.0
        return float(np.mean(np.asarray(health, dtype=np.float64)))

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_history(self) -> list[dict]:
        """Return all collected KPI snapshots."""
        return list(self.history)

    def get_last(self) -> Optional[dict]:
        """Return the last collected KPI snapshot, or None."""
        return self.history[-1] if self.history else None

    def get_kpi_series(self, kpi_name: str) -> list:
        """Extract a single KPI as a list across all ticks."""
        return [snap[kpi_name] for snap in self.history if kpi_name in snap]

    @staticmethod
    def kpi_names() -> list[str]:
        """Return the ordered list of all KPI names."""
        return [
            "tick",
            "active_colonies",
            "colonies_removed",
            "simulation_ended",
            "battles",
            "damage_dealt",
            "combatants_lost",
            "conquests",
            "food_consumed",
            "starvations",
            "ruler_deaths",
            "total_food",
            "avg_food",
            "min_food",
            "max_food",
            "total_combatants",
            "avg_combatant_health",
            "total_workers",
            "total_chambers",
        ]
