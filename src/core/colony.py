"""
Colony (Actor) for the Colony Battle Simulator.

A colony occupies one grid cell and exclusively owns a ruler, a list of
chambers and a stack of combatants. Each tick it may fight other colonies,
then runs its chambers and pays their food cost. A colony becomes inactive
for good when its ruler dies, when it cannot pay for its chambers, or when
another colony absorbs it.

Combat always uses the LAST combatant of each side (stack order): new
warriors are pushed on top and fight first.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from src.core.chamber import Chamber, ChamberKind
from src.core.combatant import Combatant
from src.core.config import SimConfig
from src.core.errors import ValidationError
from src.core.ruler import ColonyRuler


class ResourceKind(str, Enum):
    FOOD = "food"
    WORKER = "worker"
    WARRIOR = "warrior"

    @classmethod
    def parse(cls, name: str) -> Optional[ResourceKind]:
        """Look up a resource kind by name, or None if unknown."""
        try:
            return cls(name.strip().lower())
        except ValueError:
            return None


class DeactivationReason(str, Enum):
    RULER_DEAD = "ruler_dead"
    STARVED = "starved"
    ABSORBED = "absorbed"


@dataclass
class BattleOutcome:
    """Result of one battle exchange between two colonies."""
    attacker_id: int
    defender_id: int
    attacker_damage_dealt: int = 0
    defender_damage_dealt: int = 0
    attacker_lost_combatant: bool = False
    defender_lost_combatant: bool = False
    conquered: bool = False

    @property
    def combatants_lost(self) -> int:
        return int(self.attacker_lost_combatant) + int(self.defender_lost_combatant)


@dataclass(frozen=True)
class ColonySummary:
    """Read-only snapshot of a colony's status."""
    colony_id: int
    species: str
    worker_ticks: int
    combatants: int
    ant_kills: int
    colony_kills: int
    ticks_alive: int
    ruler_alive: bool

    @property
    def status(self) -> str:
        return "Alive" if self.ruler_alive else "Dead"

    def lines(self) -> list[str]:
        return [
            f"Species: {self.species}",
            f"Workers: {self.worker_ticks}",
            f"Warriors: {self.combatants}",
            f"Ant kills: {self.ant_kills}",
            f"Colony kills: {self.colony_kills}",
            f"Ticks alive: {self.ticks_alive}",
            f"Status: {self.status}",
        ]


class Colony:
    """
    A competing colony on the grid.

    Attributes:
        id: Unique identifier assigned by the world registry.
        x, y: Grid cell occupied by the colony.
        species: Free-form label.
        food: Food store. Never goes negative: a colony that cannot pay
            its chamber costs starves instead.
        worker_ticks: Worker ticks available.
        chambers: Owned chambers, in build order.
        combatants: Owned combatants; the last one fights first.
        ruler: Owned ruler.
        active: False once the colony has been eliminated (one-way).
        ant_kills: Enemy combatants killed by this colony.
        colony_kills: Enemy colonies conquered by this colony.
        ticks_alive: Updates survived with a living ruler.
        deactivation_reason: Why the colony became inactive (None while active).
        absorbed_by: ID of the colony that absorbed this one, if any.
    """

    __slots__ = (
        "id", "x", "y", "species", "food", "worker_ticks",
        "chambers", "combatants", "ruler", "active",
        "ant_kills", "colony_kills", "ticks_alive",
        "deactivation_reason", "absorbed_by", "_config",
    )

    def __init__(self, colony_id: int, x: int, y: int, species: str, config: SimConfig):
        """
        Create a colony with an empty store, no chambers and no combatants.

        Args:
            colony_id: Unique ID (assigned by the world registry).
            x, y: Grid position.
            species: Species label.
            config: Simulation config (combat stats, chamber policy, resource rules).
        """
        self.id = colony_id
        self.x = x
        self.y = y
        self.species = species
        self.food: int = 0
        self.worker_ticks: int = 0
        self.chambers: list[Chamber] = []
        self.combatants: list[Combatant] = []
        self.ruler = ColonyRuler()
        self.active = True
        self.ant_kills: int = 0
        self.colony_kills: int = 0
        self.ticks_alive: int = 0
        self.deactivation_reason: Optional[DeactivationReason] = None
        self.absorbed_by: Optional[int] = None
        self._config = config

    @property
    def position(self) -> tuple[int, int]:
        """Grid position as (x, y) tuple."""
        return (self.x, self.y)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def is_active(self) -> bool:
        return self.active

    def deactivate(self, reason: DeactivationReason) -> None:
        """Take the colony out of play. The first reason recorded is kept."""
        if not self.active:
            return
        self.active = False
        self.deactivation_reason = reason

    # ------------------------------------------------------------------
    # Resource intake
    # ------------------------------------------------------------------

    def receive_resource(self, kind: str, amount: int) -> str:
        """
        Add a resource to the colony.

        "food" grows the food store, "worker" the worker ticks, and
        "warrior" pushes `amount` fresh combatants with the configured stats.
        An unknown kind changes nothing; it is reported in the returned
        message, or rejected when `resources.strict` is set.

        Args:
            kind: Resource name.
            amount: Quantity to add (>= 0).

        Returns:
            Confirmation message.

        Raises:
            ValidationError: If amount is negative, or the kind is unknown in strict mode.
        """
        if amount < 0:
            raise ValidationError(f"Resource amount must be >= 0, got {amount}.")

        resource = ResourceKind.parse(kind)
        if resource is None:
            if self._config.resources.strict:
                raise ValidationError(
                    f"Unknown resource type '{kind}' (expected food, worker or warrior)."
                )
            return f"Ignored {amount} {kind} for {self.species} colony (unknown resource type)."

        if resource is ResourceKind.FOOD:
            self.food += amount
        elif resource is ResourceKind.WORKER:
            self.worker_ticks += amount
        elif resource is ResourceKind.WARRIOR:
            combat = self._config.combat
            self.combatants.extend(Combatant.from_config(combat) for _ in range(amount))

        return f"Added {amount} {resource.value} to {self.species} colony."

    def add_chamber(self, chamber: Chamber) -> None:
        self.chambers.append(chamber)

    # ------------------------------------------------------------------
    # Per-tick update
    # ------------------------------------------------------------------

    def update(self) -> int:
        """
        Run one tick of colony upkeep.

        Order:
          1. Dead ruler: deactivate and stop.
          2. Count the tick as survived.
          3. Run every chamber; each resting chamber that admits an
             occupant adds its food cost to this tick's bill.
          4. Pay the bill, or starve (deactivate) leaving food untouched.

        Returns:
            Food consumed this tick (0 if the colony was deactivated).
        """
        if not self.ruler.is_alive():
            self.deactivate(DeactivationReason.RULER_DEAD)
            return 0

        self.ticks_alive += 1
        reset_each_tick = self._config.chambers.occupancy_policy == "per_tick"
        consumption = 0

        for chamber in self.chambers:
            chamber.perform_tick()
            if chamber.kind is ChamberKind.RESTING:
                if reset_each_tick:
                    chamber.reset_occupants()
                if chamber.admit_one():
                    consumption += chamber.food_per_occupant

        if self.food < consumption:
            self.deactivate(DeactivationReason.STARVED)
            return 0

        self.food -= consumption
        return consumption

    # ------------------------------------------------------------------
    # Combat
    # ------------------------------------------------------------------

    def battle(self, opponent: Colony) -> Optional[BattleOutcome]:
        """
        Fight one exchange against another colony.

        The last combatant of each side strikes the other once. Damage only
        depends on attack and defense, so the exchange is simultaneous.
        Killing the opponent's combatant earns one ant kill and the
        configured food reward. Wiping out the opponent's last combatant
        while its ruler lives kills the ruler and absorbs the opponent.

        Args:
            opponent: The colony being fought.

        Returns:
            BattleOutcome, or None if either side has no combatants.
        """
        if not self.combatants or not opponent.combatants:
            return None

        outcome = BattleOutcome(attacker_id=self.id, defender_id=opponent.id)
        mine = self.combatants[-1]
        theirs = opponent.combatants[-1]

        outcome.attacker_damage_dealt = mine.attack(theirs)
        outcome.defender_damage_dealt = theirs.attack(mine)

        if not mine.alive:
            self.combatants.pop()
            outcome.attacker_lost_combatant = True

        if not theirs.alive:
            opponent.combatants.pop()
            outcome.defender_lost_combatant = True
            self.ant_kills += 1
            self.food += self._config.combat.kill_food_reward

        if not opponent.combatants and opponent.ruler.is_alive():
            opponent.ruler.kill()
            self.colony_kills += 1
            self.merge_with(opponent)
            outcome.conquered = True

        return outcome

    def merge_with(self, other: Colony) -> None:
        """
        Absorb another colony's assets and take it out of play.

        Food and worker ticks are added; chambers and combatants move over
        in order and the other colony is left empty. Merging an inactive
        colony does nothing.
        """
        if not other.active or other is self:
            return

        self.food += other.food
        self.worker_ticks += other.worker_ticks
        self.chambers.extend(other.chambers)
        self.combatants.extend(other.combatants)

        other.food = 0
        other.worker_ticks = 0
        other.chambers = []
        other.combatants = []
        other.absorbed_by = self.id
        other.deactivate(DeactivationReason.ABSORBED)

    # ------------------------------------------------------------------
    # Reporting
    # ------------------------------------------------------------------

    def report_summary(self) -> ColonySummary:
        return ColonySummary(
            colony_id=self.id,
            species=self.species,
            worker_ticks=self.worker_ticks,
            combatants=len(self.combatants),
            ant_kills=self.ant_kills,
            colony_kills=self.colony_kills,
            ticks_alive=self.ticks_alive,
            ruler_alive=self.ruler.is_alive(),
        )

    def to_dict(self) -> dict:
        """Serialize colony state (for snapshots)."""
        return {
            "id": self.id,
            "x": self.x,
            "y": self.y,
            "species": self.species,
            "food": self.food,
            "worker_ticks": self.worker_ticks,
            "active": self.active,
            "ruler_alive": self.ruler.is_alive(),
            "ant_kills": self.ant_kills,
            "colony_kills": self.colony_kills,
            "ticks_alive": self.ticks_alive,
            "deactivation_reason": (
                self.deactivation_reason.value if self.deactivation_reason else None
            ),
            "absorbed_by": self.absorbed_by,
            "chambers": [c.to_dict() for c in self.chambers],
            "combatants": [c.to_dict() for c in self.combatants],
        }

    def __repr__(self) -> str:
        status = "active" if self.active else f"inactive:{self.deactivation_reason.value}"
        return (
            f"Colony(id={self.id}, species='{self.species}', pos=({self.x},{self.y}), "
            f"food={self.food}, combatants={len(self.combatants)}, "
            f"chambers={len(self.chambers)}, status={status})"
        )
