"""
Combatant units for the Colony Battle Simulator.

Combatants fight in one-on-one exchanges. Damage is fully deterministic:
attack power minus the defender's defense, ignored when not positive.
Health never regenerates and never drops below zero.
"""

from __future__ import annotations

from dataclasses import dataclass

from src.core.config import CombatConfig


@dataclass(slots=True)
class Combatant:
    """
    A single fighting unit.

    Attributes:
        health: Remaining hit points. The unit is alive while this is > 0.
        attack_power: Damage dealt before the target's defense is subtracted.
        defense: Flat reduction applied to every incoming attack.
    """
    health: int
    attack_power: int
    defense: int

    @property
    def alive(self) -> bool:
        """True while health is above zero."""
        return self.health > 0

    def attack(self, opponent: Combatant) -> int:
        """
        Strike an opponent once.

        Args:
            opponent: The combatant receiving the blow.

        Returns:
            Damage actually dealt (0 if defense absorbs the attack).
        """
        damage = self.attack_power - opponent.defense
        if damage <= 0:
            return 0
        dealt = min(damage, opponent.health)
        opponent.health -= dealt
        return dealt

    @classmethod
    def from_config(cls, combat: CombatConfig) -> Combatant:
        """Create a fresh combatant with the configured default stats."""
        return cls(
            health=combat.combatant_health,
            attack_power=combat.combatant_attack,
            defense=combat.combatant_defense,
        )

    def to_dict(self) -> dict:
        return {
            "health": self.health,
            "attack_power": self.attack_power,
            "defense": self.defense,
        }

    def __repr__(self) -> str:
        return (
            f"Combatant(hp={self.health}, atk={self.attack_power}, "
            f"def={self.defense}, alive={self.alive})"
        )
