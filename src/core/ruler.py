"""
Colony ruler.

The ruler is the single point of failure of a colony: once it dies the
colony is eliminated on its next update. Death is irreversible.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class ColonyRuler:
    """Alive/dead marker owned by exactly one colony."""
    alive: bool = True

    def is_alive(self) -> bool:
        return self.alive

    def kill(self) -> None:
        """Mark the ruler dead. Calling it again has no further effect."""
        self.alive = False

    def __repr__(self) -> str:
        return f"ColonyRuler({'alive' if self.alive else 'dead'})"
