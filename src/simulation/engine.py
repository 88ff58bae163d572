"""
Simulation Engine — Main tick loop for the Colony Battle Simulator.

Owns one World registry and advances it tick by tick. Each tick runs the
fixed phase order:

  1. Battle phase   (every active pair fights once)
  2. Update phase   (every active colony runs its chambers and pays food)
  3. Cleanup phase  (inactive colonies are removed)
  4. Termination    (at most one active colony left -> simulation ends)
  5. Report         (per-active-colony status)

The engine is an explicit object: several engines can run side by side
and tests can build one per case.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Optional

from src.core.colony import DeactivationReason
from src.core.config import SimConfig
from src.core.world import World


# ---------------------------------------------------------------------------
# Tick statistics: counters for one tick
# ---------------------------------------------------------------------------

@dataclass
class TickStats:
    """Statistics collected during a single tick."""
    battles: int = 0
    damage_dealt: int = 0
    combatants_lost: int = 0
    conquests: int = 0
    food_consumed: int = 0
    starvations: int = 0
    ruler_deaths: int = 0
    colonies_removed: int = 0


# ---------------------------------------------------------------------------
# Tick report
# ---------------------------------------------------------------------------

@dataclass
class ColonyStatus:
    """One line of the end-of-tick status list."""
    colony_id: int
    species: str
    food: int

    def line(self) -> str:
        return f"Colony ID: {self.colony_id}, Species: {self.species}, Food: {self.food}"


@dataclass
class TickReport:
    """
    What happened during one tick.

    Attributes:
        tick: Tick number (1-based, counted over the engine's lifetime).
        stats: Counters for this tick.
        removed_ids: IDs of colonies removed in the cleanup phase.
        ended: True if the termination check held after this tick.
        survivor: (species, x, y) of the sole survivor when ended with one colony.
        active: Status of every active colony (empty when ended).
    """
    tick: int
    stats: TickStats = field(default_factory=TickStats)
    removed_ids: list[int] = field(default_factory=list)
    ended: bool = False
    survivor: Optional[tuple[str, int, int]] = None
    active: list[ColonyStatus] = field(default_factory=list)

    def lines(self) -> list[str]:
        """Render the report as console lines."""
        out = [f"==================== Tick {self.tick} ===================="]

        if self.removed_ids:
            out.append(f"{len(self.removed_ids)} colony(ies) have been removed due to inactivity.")

        if self.ended:
            if self.survivor is None:
                out.append("Simulation has ended. No colonies remain.")
            else:
                species, x, y = self.survivor
                out.append(f"Simulation has ended. One colony remains: {species} at ({x}, {y}).")
            return out

        out.append(f"Active colonies after tick {self.tick}:")
        out.extend(status.line() for status in self.active)
        out.append(f"==================== End of Tick {self.tick} ====================")
        return out


@dataclass
class AdvanceResult:
    """Result of an advance(n) call."""
    requested: int
    reports: list[TickReport] = field(default_factory=list)

    @property
    def ticks_run(self) -> int:
        return len(self.reports)

    @property
    def ended(self) -> bool:
        return bool(self.reports) and self.reports[-1].ended

    def lines(self) -> list[str]:
        out: list[str] = []
        for report in self.reports:
            out.extend(report.lines())
        return out


# ---------------------------------------------------------------------------
# Simulation Engine
# ---------------------------------------------------------------------------

class SimulationEngine:
    """
    Core simulation engine.

    Attributes:
        config: Simulation configuration.
        world: The colony registry driven by this engine.
        history: TickStats of every tick run so far.
        on_tick: Optional callback invoked after each tick (report, engine).
    """

    def __init__(self, config: Optional[SimConfig] = None):
        self.config = config if config is not None else SimConfig()
        self.world = World(self.config)
        self.history: list[TickStats] = []

        self.on_tick: Optional[Callable[[TickReport, "SimulationEngine"], None]] = None

    # ------------------------------------------------------------------
    # Core tick
    # ------------------------------------------------------------------

    def tick(self) -> TickReport:
        """
        Execute one simulation tick.

        Returns:
            TickReport for this tick.

        Raises:
            InvariantViolation: If invariant checks are enabled and the
                registry ends the tick in an impossible state.
        """
        world = self.world
        stats = TickStats()

        # --- 1. Battle phase ---
        outcomes = world.resolve_battles()
        stats.battles = len(outcomes)
        for outcome in outcomes:
            stats.damage_dealt += outcome.attacker_damage_dealt + outcome.defender_damage_dealt
            stats.combatants_lost += outcome.combatants_lost
            stats.conquests += int(outcome.conquered)

        # --- 2. Update phase ---
        consumed = world.update_colonies()
        stats.food_consumed = sum(consumed.values())
        for colony in world.colonies:
            if colony.id not in consumed or colony.is_active():
                continue
            if colony.deactivation_reason is DeactivationReason.STARVED:
                stats.starvations += 1
            elif colony.deactivation_reason is DeactivationReason.RULER_DEAD:
                stats.ruler_deaths += 1

        # --- 3. Cleanup phase ---
        removed = world.remove_inactive()
        stats.colonies_removed = len(removed)

        world.tick_count += 1
        if self.config.world.invariant_checks:
            world.check_invariants()

        report = TickReport(
            tick=world.tick_count,
            stats=stats,
            removed_ids=[c.id for c in removed],
        )

        # --- 4. Termination check / 5. Report ---
        active = world.active_colonies()
        if len(active) <= 1:
            report.ended = True
            if active:
                sole = active[0]
                report.survivor = (sole.species, sole.x, sole.y)
        else:
            report.active = [ColonyStatus(c.id, c.species, c.food) for c in active]

        self.history.append(stats)
        if self.on_tick is not None:
            self.on_tick(report, self)

        return report

    # ------------------------------------------------------------------
    # Multi-tick run
    # ------------------------------------------------------------------

    def advance(self, n: int = 1) -> AdvanceResult:
        """
        Run up to n ticks, stopping early once the simulation has ended.

        Args:
            n: Maximum number of ticks to run. Zero or less runs nothing.

        Returns:
            AdvanceResult with one report per tick actually run.
        """
        result = AdvanceResult(requested=n)
        for _ in range(max(n, 0)):
            report = self.tick()
            result.reports.append(report)
            if report.ended:
                break
        return result

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def current_tick(self) -> int:
        return self.world.tick_count

    @property
    def is_finished(self) -> bool:
        return self.world.is_finished

    def __repr__(self) -> str:
        return (
            f"SimulationEngine(tick={self.current_tick}, "
            f"colonies={len(self.world.colonies)}, active={self.world.active_count})"
        )
