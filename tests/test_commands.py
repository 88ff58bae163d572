"""
Unit tests for the command surface.

Tests cover:
- spawn / give / build / tick / summary / help / exit
- Rejected commands (bad IDs, occupied cells, malformed arguments)
- Rejections never mutate state
- A full scripted session
"""

import pytest

from src.core.config import SimConfig
from src.simulation.commands import CommandResult, CommandSurface
from src.simulation.engine import SimulationEngine


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def surface() -> CommandSurface:
    return CommandSurface(SimulationEngine(SimConfig()))


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

class TestSpawnCommand:
    def test_spawn(self, surface):
        result = surface.execute("spawn 0 0 red")
        assert result.ok is True
        assert result.text == "Spawned red colony at (0, 0) with ID 0"

    def test_spawn_occupied(self, surface):
        surface.execute("spawn 0 0 red")
        result = surface.execute("spawn 0 0 black")
        assert result.ok is False
        assert "already exists" in result.text
        assert surface.world.next_id == 1

    def test_spawn_bad_coordinate(self, surface):
        result = surface.execute("spawn zero 0 red")
        assert result.ok is False
        assert "X must be an integer" in result.text
        assert surface.world.colonies == []

    def test_spawn_wrong_arity(self, surface):
        result = surface.execute("spawn 0 0")
        assert result.ok is False
        assert result.text.startswith("Usage: spawn")


class TestGiveCommand:
    def test_give_food(self, surface):
        surface.execute("spawn 0 0 red")
        result = surface.execute("give 0 food 25")
        assert result.ok is True
        assert result.text == "Added 25 food to red colony."
        assert surface.world.get(0).food == 25

    def test_give_warriors(self, surface):
        surface.execute("spawn 0 0 red")
        surface.execute("give 0 warrior 4")
        assert len(surface.world.get(0).combatants) == 4

    def test_give_invalid_id(self, surface):
        result = surface.execute("give 9 food 1")
        assert result.ok is False
        assert result.text == "Invalid colony ID."

    def test_give_unknown_resource(self, surface):
        surface.execute("spawn 0 0 red")
        result = surface.execute("give 0 gold 3")
        assert result.ok is True
        assert "Ignored" in result.text

    def test_give_negative(self, surface):
        surface.execute("spawn 0 0 red")
        result = surface.execute("give 0 food -3")
        assert result.ok is False
        assert surface.world.get(0).food == 0


class TestBuildCommand:
    def test_build_resting_with_params(self, surface):
        surface.execute("spawn 0 0 red")
        result = surface.execute("build 0 resting 2 5")
        assert result.ok is True
        chamber = surface.world.get(0).chambers[0]
        assert chamber.capacity == 2
        assert chamber.food_per_occupant == 5
        assert "resting chamber" in result.text

    def test_build_spawning(self, surface):
        surface.execute("spawn 0 0 red")
        assert surface.execute("build 0 spawning").ok is True

    def test_build_unknown_kind(self, surface):
        surface.execute("spawn 0 0 red")
        result = surface.execute("build 0 vault")
        assert result.ok is False
        assert surface.world.get(0).chambers == []

    def test_build_wrong_arity(self, surface):
        surface.execute("spawn 0 0 red")
        assert surface.execute("build 0 resting 2").ok is False

    def test_build_invalid_id(self, surface):
        assert surface.execute("build 4 spawning").text == "Invalid colony ID."


class TestTickCommand:
    def test_tick_default(self, surface):
        surface.execute("spawn 0 0 red")
        surface.execute("spawn 1 1 black")
        result = surface.execute("tick")
        assert result.ok is True
        assert surface.engine.current_tick == 1
        assert "Tick 1" in result.lines[0]

    def test_tick_n(self, surface):
        surface.execute("spawn 0 0 red")
        surface.execute("spawn 1 1 black")
        surface.execute("tick 4")
        assert surface.engine.current_tick == 4

    def test_tick_stops_early(self, surface):
        surface.execute("spawn 0 0 red")
        result = surface.execute("tick 10")
        assert result.ok is True
        assert surface.engine.current_tick == 1
        assert result.lines[-1] == "Simulation has ended. One colony remains: red at (0, 0)."

    @pytest.mark.parametrize("count", ["0", "-1"])
    def test_tick_non_positive_runs_nothing(self, surface, count):
        surface.execute("spawn 0 0 red")
        surface.execute("spawn 1 1 black")
        result = surface.execute(f"tick {count}")
        assert result.ok is True
        assert result.lines == []
        assert surface.engine.current_tick == 0
        assert surface.world.get(0).ticks_alive == 0

    def test_tick_bad_count(self, surface):
        assert surface.execute("tick many").ok is False


class TestSummaryCommand:
    def test_summary(self, surface):
        surface.execute("spawn 0 0 red")
        surface.execute("give 0 worker 3")
        result = surface.execute("summary 0")
        assert result.ok is True
        assert "Workers: 3" in result.lines
        assert "Status: Alive" in result.lines

    def test_summary_invalid(self, surface):
        assert surface.execute("summary 0").text == "Invalid colony ID."


class TestMiscCommands:
    def test_help(self, surface):
        result = surface.execute("help")
        assert result.ok is True
        assert result.lines[0] == "Available commands:"

    def test_exit(self, surface):
        result = surface.execute("exit")
        assert result.exit is True
        assert "Goodbye" in result.text

    def test_quit_alias(self, surface):
        assert surface.execute("quit").exit is True

    def test_unknown_command(self, surface):
        result = surface.execute("dance")
        assert result.ok is False
        assert "Invalid command" in result.text

    def test_blank_and_comment(self, surface):
        assert surface.execute("   ").lines == []
        assert surface.execute("# a comment").ok is True

    def test_case_insensitive_command(self, surface):
        assert surface.execute("SPAWN 0 0 red").ok is True

    def test_result_defaults(self):
        result = CommandResult()
        assert result.ok is True
        assert result.exit is False
        assert result.text == ""


# ---------------------------------------------------------------------------
# Scripted session
# ---------------------------------------------------------------------------

class TestSession:
    def test_war_session(self, surface):
        script = [
            "spawn 0 0 red",
            "spawn 1 1 black",
            "give 0 warrior 5",
            "give 1 warrior 5",
            "give 0 food 1000",
            "give 1 food 1000",
            "tick 100",
        ]
        for line in script:
            assert surface.execute(line).ok is True

        assert surface.engine.current_tick == 50
        assert surface.execute("summary 1").text == "Invalid colony ID."
        lines = surface.execute("summary 0").lines
        assert "Ant kills: 5" in lines
        assert "Colony kills: 1" in lines
        assert "Ticks alive: 50" in lines

    def test_starvation_session(self, surface):
        surface.execute("spawn 0 0 red")
        surface.execute("build 0 resting 1 5")
        result = surface.execute("tick")
        assert "1 colony(ies) have been removed due to inactivity." in result.lines
        assert result.lines[-1] == "Simulation has ended. No colonies remain."
        assert surface.execute("summary 0").ok is False
