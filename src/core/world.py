"""
World (Colony Registry) for the Colony Battle Simulator.

Owns every tracked colony, hands out unique IDs, keeps at most one colony
per grid cell, and implements the phases of a tick:

  1. resolve_battles()  - every active pair (j < k) fights once, in index order
  2. update_colonies()  - every still-active colony runs its upkeep
  3. remove_inactive()  - inactive colonies leave the registry

Phases 1 and 2 never remove entries; a colony absorbed during the battle
phase stays in the list (inactive) and is skipped until cleanup drops it.
The tick loop itself lives in `src.simulation.engine`.
"""

from __future__ import annotations

from collections import Counter
from typing import Any, Optional

from src.core.chamber import Chamber, make_chamber
from src.core.colony import BattleOutcome, Colony, ColonySummary
from src.core.config import SimConfig
from src.core.errors import InvariantViolation, ValidationError


class World:
    """
    The colony registry.

    Attributes:
        config: Simulation configuration.
        colonies: Tracked colonies in spawn order (active, plus inactive ones
            awaiting cleanup).
        next_id: ID the next spawned colony will receive. Only ever grows.
        tick_count: Ticks completed so far.
    """

    def __init__(self, config: SimConfig):
        self.config = config
        self.colonies: list[Colony] = []
        self.next_id: int = 0
        self.tick_count: int = 0

    # ------------------------------------------------------------------
    # Colony management
    # ------------------------------------------------------------------

    def spawn(self, x: int, y: int, species: str) -> Colony:
        """
        Create a colony at (x, y).

        Args:
            x, y: Grid cell for the new colony.
            species: Species label.

        Returns:
            The new colony.

        Raises:
            ValidationError: If the cell is taken or off the grid, or the
                species is empty. No ID is consumed in that case.
        """
        species = species.strip()
        if not species:
            raise ValidationError("Species name must not be empty.")
        if not self.config.world.in_bounds(x, y):
            raise ValidationError(f"Error: ({x}, {y}) is outside the grid.")
        if self.colony_at(x, y) is not None:
            raise ValidationError(f"Error: A colony already exists at ({x}, {y}).")

        colony = Colony(self.next_id, x, y, species, self.config)
        for spec in self.config.chambers.starting_chambers:
            params = {k: v for k, v in spec.items() if k != "kind"}
            colony.add_chamber(make_chamber(spec["kind"], self.config.chambers, **params))

        self.next_id += 1
        self.colonies.append(colony)
        return colony

    def find(self, colony_id: int) -> Optional[Colony]:
        """Get a tracked colony by ID, or None."""
        for colony in self.colonies:
            if colony.id == colony_id:
                return colony
        return None

    def get(self, colony_id: int) -> Colony:
        """
        Get a tracked colony by ID.

        Raises:
            ValidationError: If no tracked colony has this ID.
        """
        colony = self.find(colony_id)
        if colony is None:
            raise ValidationError("Invalid colony ID.")
        return colony

    def colony_at(self, x: int, y: int) -> Optional[Colony]:
        """Get the tracked colony at a cell, or None."""
        for colony in self.colonies:
            if colony.x == x and colony.y == y:
                return colony
        return None

    def give_resource(self, colony_id: int, kind: str, amount: int) -> str:
        """Deliver a resource to a colony. Returns the colony's confirmation."""
        return self.get(colony_id).receive_resource(kind, amount)

    def build_chamber(self, colony_id: int, kind: str, **params: Any) -> Chamber:
        """
        Add a new chamber to a colony.

        Args:
            colony_id: Target colony.
            kind: Chamber kind name ("resting" or "spawning").
            **params: Chamber parameters (see `make_chamber`).

        Raises:
            ValidationError: If the ID, kind or parameters are invalid.
        """
        colony = self.get(colony_id)
        chamber = make_chamber(kind, self.config.chambers, **params)
        colony.add_chamber(chamber)
        return chamber

    def summary(self, colony_id: int) -> ColonySummary:
        return self.get(colony_id).report_summary()

    # ------------------------------------------------------------------
    # Tick phases
    # ------------------------------------------------------------------

    def resolve_battles(self) -> list[BattleOutcome]:
        """
        Battle phase: every pair of active colonies fights once.

        Pairs are visited in index order (j < k) over the list as it stood
        when the phase began. A colony absorbed mid-phase is skipped by every
        later pair because it is no longer active.

        Returns:
            Outcomes of the battles that actually took place.
        """
        outcomes: list[BattleOutcome] = []
        snapshot = list(self.colonies)
        count = len(snapshot)

        for j in range(count):
            for k in range(j + 1, count):
                first, second = snapshot[j], snapshot[k]
                if first.is_active() and second.is_active():
                    outcome = first.battle(second)
                    if outcome is not None:
                        outcomes.append(outcome)

        return outcomes

    def update_colonies(self) -> dict[int, int]:
        """
        Update phase: run upkeep on every active colony.

        Returns:
            Dict of colony_id -> food consumed, for every colony updated.
        """
        consumed: dict[int, int] = {}
        for colony in self.colonies:
            if colony.is_active():
                consumed[colony.id] = colony.update()
        return consumed

    def remove_inactive(self) -> list[Colony]:
        """
        Cleanup phase: drop inactive colonies from the registry.

        Returns:
            The removed colonies, in registry order.
        """
        removed = [c for c in self.colonies if not c.is_active()]
        if removed:
            self.colonies = [c for c in self.colonies if c.is_active()]
        return removed

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def active_colonies(self) -> list[Colony]:
        return [c for c in self.colonies if c.is_active()]

    @property
    def active_count(self) -> int:
        return sum(1 for c in self.colonies if c.is_active())

    @property
    def is_finished(self) -> bool:
        """True once at most one active colony remains."""
        return self.active_count <= 1

    def check_invariants(self) -> None:
        """
        Verify registry consistency.

        Raises:
            InvariantViolation: On duplicate IDs or cells, an ID at or above
                next_id, or a dead combatant still held by a colony.
        """
        ids = Counter(c.id for c in self.colonies)
        duplicates = [cid for cid, n in ids.items() if n > 1]
        if duplicates:
            raise InvariantViolation(f"Duplicate colony IDs in registry: {duplicates}")

        cells = Counter(c.position for c in self.colonies)
        shared = [pos for pos, n in cells.items() if n > 1]
        if shared:
            raise InvariantViolation(f"Multiple colonies share cells: {shared}")

        for colony in self.colonies:
            if colony.id >= self.next_id:
                raise InvariantViolation(
                    f"Colony {colony.id} has an ID that was never allocated (next_id={self.next_id})"
                )
            if any(not unit.alive for unit in colony.combatants):
                raise InvariantViolation(f"Colony {colony.id} still holds a dead combatant")
            if colony.food < 0:
                raise InvariantViolation(f"Colony {colony.id} has negative food ({colony.food})")

    # ------------------------------------------------------------------
    # Representation
    # ------------------------------------------------------------------

    def __repr__(self) -> str:
        return (
            f"World(tick={self.tick_count}, colonies={len(self.colonies)}, "
            f"active={self.active_count}, next_id={self.next_id})"
        )
