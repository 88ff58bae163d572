"""
Command surface for the Colony Battle Simulator.

Turns one line of text ("spawn 0 0 red", "tick 5", ...) into a call on the
engine or its world registry and returns the text to show the user.
Rejected commands never change simulation state.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable

from src.core.errors import ValidationError
from src.simulation.engine import SimulationEngine


HELP_LINES = [
    "Available commands:",
    "  spawn X Y SPECIES                 - Create a new colony",
    "  give ID food|worker|warrior AMOUNT - Provide resources to a colony",
    "  build ID resting [CAP FOOD]       - Add a resting chamber to a colony",
    "  build ID spawning                 - Add a spawning chamber to a colony",
    "  tick [N]                          - Advance the simulation by N ticks (default 1)",
    "  summary ID                        - Show the status of a colony",
    "  help                              - Show this list",
    "  exit                              - Exit the simulation",
]


@dataclass
class CommandResult:
    """Outcome of one command."""
    ok: bool = True
    lines: list[str] = field(default_factory=list)
    exit: bool = False

    @property
    def text(self) -> str:
        return "\n".join(self.lines)


def _to_int(value: str, name: str) -> int:
    try:
        return int(value)
    except ValueError:
        raise ValidationError(f"{name} must be an integer, got '{value}'.") from None


class CommandSurface:
    """
    Executes textual commands against one SimulationEngine.

    Attributes:
        engine: The engine commands act on.
    """

    def __init__(self, engine: SimulationEngine):
        self.engine = engine
        self._handlers: dict[str, Callable[[list[str]], CommandResult]] = {
            "spawn": self._spawn,
            "give": self._give,
            "build": self._build,
            "tick": self._tick,
            "summary": self._summary,
            "help": self._help,
            "exit": self._exit,
            "quit": self._exit,
        }

    @property
    def world(self):
        return self.engine.world

    def execute(self, line: str) -> CommandResult:
        """
        Run one command line.

        Blank lines and lines starting with '#' are ignored.

        Returns:
            CommandResult; ok is False when the command was rejected.
        """
        tokens = line.split()
        if not tokens or tokens[0].startswith("#"):
            return CommandResult()

        name, args = tokens[0].lower(), tokens[1:]
        handler = self._handlers.get(name)
        if handler is None:
            return CommandResult(ok=False, lines=["Invalid command. Type 'help' for a list of commands."])

        try:
            return handler(args)
        except ValidationError as exc:
            return CommandResult(ok=False, lines=[str(exc)])

    # ------------------------------------------------------------------
    # Handlers
    # ------------------------------------------------------------------

    @staticmethod
    def _expect(args: list[str], count: int, usage: str) -> None:
        if len(args) != count:
            raise ValidationError(f"Usage: {usage}")

    def _spawn(self, args: list[str]) -> CommandResult:
        self._expect(args, 3, "spawn X Y SPECIES")
        x = _to_int(args[0], "X")
        y = _to_int(args[1], "Y")
        colony = self.world.spawn(x, y, args[2])
        return CommandResult(lines=[
            f"Spawned {colony.species} colony at ({colony.x}, {colony.y}) with ID {colony.id}"
        ])

    def _give(self, args: list[str]) -> CommandResult:
        self._expect(args, 3, "give ID food|worker|warrior AMOUNT")
        colony_id = _to_int(args[0], "ID")
        amount = _to_int(args[2], "AMOUNT")
        return CommandResult(lines=[self.world.give_resource(colony_id, args[1], amount)])

    def _build(self, args: list[str]) -> CommandResult:
        if len(args) not in (2, 4):
            raise ValidationError("Usage: build ID resting [CAP FOOD] | build ID spawning")
        colony_id = _to_int(args[0], "ID")
        params = {}
        if len(args) == 4:
            params["capacity"] = _to_int(args[2], "CAP")
            params["food_per_occupant"] = _to_int(args[3], "FOOD")
        chamber = self.world.build_chamber(colony_id, args[1], **params)
        colony = self.world.get(colony_id)
        return CommandResult(lines=[
            f"Built {chamber.kind.value} chamber in {colony.species} colony "
            f"({len(colony.chambers)} chamber(s))."
        ])

    def _tick(self, args: list[str]) -> CommandResult:
        if len(args) > 1:
            raise ValidationError("Usage: tick [N]")
        n = _to_int(args[0], "N") if args else 1
        result = self.engine.advance(n)
        return CommandResult(lines=result.lines())

    def _summary(self, args: list[str]) -> CommandResult:
        self._expect(args, 1, "summary ID")
        colony_id = _to_int(args[0], "ID")
        return CommandResult(lines=self.world.summary(colony_id).lines())

    def _help(self, args: list[str]) -> CommandResult:
        return CommandResult(lines=list(HELP_LINES))

    def _exit(self, args: list[str]) -> CommandResult:
        return CommandResult(lines=["Exiting simulation. Goodbye!"], exit=True)
