"""
Chambers for the Colony Battle Simulator.

A chamber is a functional unit inside a colony that is run once per tick.
Chambers form a closed set of kinds, tagged by `ChamberKind`:

  - RESTING:  admits one occupant per tick up to its capacity; every
              admission costs the colony `food_per_occupant` food.
  - SPAWNING: no per-tick cost; only keeps its own bookkeeping.

Callers branch on `chamber.kind` rather than on the Python type, so adding
a kind means adding an enum member, a dataclass and a branch in `make_chamber`.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Union

from src.core.config import ChamberConfig
from src.core.errors import ValidationError


class ChamberKind(str, Enum):
    RESTING = "resting"
    SPAWNING = "spawning"

    @classmethod
    def parse(cls, name: str) -> ChamberKind:
        """
        Look up a chamber kind by name (case-insensitive).

        Raises:
            ValidationError: If the name is not a known kind.
        """
        try:
            return cls(name.strip().lower())
        except ValueError:
            known = ", ".join(k.value for k in cls)
            raise ValidationError(f"Unknown chamber kind '{name}' (expected one of: {known}).") from None


@dataclass(slots=True)
class RestingChamber:
    """
    Chamber that houses occupants and charges food for each admission.

    Attributes:
        capacity: Maximum number of admitted occupants.
        food_per_occupant: Food cost of one admission.
        occupant_count: Admissions so far (0 <= occupant_count <= capacity).
        ticks_run: Number of ticks this chamber has been run.
    """
    capacity: int
    food_per_occupant: int
    occupant_count: int = 0
    ticks_run: int = 0

    @property
    def kind(self) -> ChamberKind:
        return ChamberKind.RESTING

    @property
    def full(self) -> bool:
        return self.occupant_count >= self.capacity

    def perform_tick(self) -> None:
        self.ticks_run += 1

    def admit_one(self) -> bool:
        """
        Admit one occupant if there is room.

        Returns:
            True if admitted, False (and nothing changed) if full.
        """
        if self.occupant_count < self.capacity:
            self.occupant_count += 1
            return True
        return False

    def reset_occupants(self) -> None:
        self.occupant_count = 0

    def to_dict(self) -> dict:
        return {
            "kind": self.kind.value,
            "capacity": self.capacity,
            "food_per_occupant": self.food_per_occupant,
            "occupant_count": self.occupant_count,
            "ticks_run": self.ticks_run,
        }


@dataclass(slots=True)
class SpawningChamber:
    """Chamber with no per-tick cost."""
    ticks_run: int = 0

    @property
    def kind(self) -> ChamberKind:
        return ChamberKind.SPAWNING

    def perform_tick(self) -> None:
        self.ticks_run += 1

    def to_dict(self) -> dict:
        return {"kind": self.kind.value, "ticks_run": self.ticks_run}


Chamber = Union[RestingChamber, SpawningChamber]


def make_chamber(
    kind: str | ChamberKind,
    defaults: ChamberConfig | None = None,
    **params: Any,
) -> Chamber:
    """
    Build a chamber from a kind name and optional parameters.

    Missing resting-chamber parameters fall back to `defaults`
    (or the ChamberConfig defaults when None).

    Args:
        kind: Chamber kind or its name ("resting", "spawning").
        defaults: Chamber defaults from the simulation config.
        **params: "capacity" and "food_per_occupant" for resting chambers.

    Returns:
        A new chamber instance.

    Raises:
        ValidationError: If the kind is unknown or a parameter is invalid.
    """
    if not isinstance(kind, ChamberKind):
        kind = ChamberKind.parse(kind)
    if defaults is None:
        defaults = ChamberConfig()

    if kind is ChamberKind.RESTING:
        capacity = params.get("capacity", defaults.resting_capacity)
        food_per_occupant = params.get("food_per_occupant", defaults.food_per_occupant)
        if capacity < 0:
            raise ValidationError(f"Chamber capacity must be >= 0, got {capacity}.")
        if food_per_occupant < 0:
            raise ValidationError(f"Food per occupant must be >= 0, got {food_per_occupant}.")
        return RestingChamber(capacity=capacity, food_per_occupant=food_per_occupant)

    if kind is ChamberKind.SPAWNING:
        return SpawningChamber()

    raise ValidationError(f"Unsupported chamber kind '{kind.value}'.")
