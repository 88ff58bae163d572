"""
Unit tests for chambers.

Tests cover:
- Kind tags and parsing
- Resting chamber admission up to capacity
- Occupant reset
- Per-tick bookkeeping
- make_chamber factory (defaults, overrides, invalid input)
"""

import pytest

from src.core.chamber import (
    ChamberKind,
    RestingChamber,
    SpawningChamber,
    make_chamber,
)
from src.core.config import ChamberConfig
from src.core.errors import ValidationError


class TestChamberKind:
    def test_parse_names(self):
        assert ChamberKind.parse("resting") is ChamberKind.RESTING
        assert ChamberKind.parse("Spawning") is ChamberKind.SPAWNING

    def test_parse_unknown(self):
        with pytest.raises(ValidationError, match="Unknown chamber kind"):
            ChamberKind.parse("nursery")

    def test_kind_tags(self):
        assert RestingChamber(capacity=1, food_per_occupant=1).kind is ChamberKind.RESTING
        assert SpawningChamber().kind is ChamberKind.SPAWNING


class TestRestingChamber:
    def test_admit_until_full(self):
        chamber = RestingChamber(capacity=2, food_per_occupant=3)
        assert chamber.admit_one() is True
        assert chamber.admit_one() is True
        assert chamber.admit_one() is False
        assert chamber.occupant_count == 2
        assert chamber.full is True

    def test_zero_capacity_never_admits(self):
        chamber = RestingChamber(capacity=0, food_per_occupant=3)
        assert chamber.admit_one() is False
        assert chamber.occupant_count == 0

    def test_reset_occupants(self):
        chamber = RestingChamber(capacity=1, food_per_occupant=3)
        chamber.admit_one()
        chamber.reset_occupants()
        assert chamber.occupant_count == 0
        assert chamber.admit_one() is True

    def test_perform_tick_counts(self):
        chamber = RestingChamber(capacity=1, food_per_occupant=3)
        chamber.perform_tick()
        chamber.perform_tick()
        assert chamber.ticks_run == 2
        assert chamber.occupant_count == 0

    def test_to_dict(self):
        chamber = RestingChamber(capacity=4, food_per_occupant=2)
        chamber.admit_one()
        d = chamber.to_dict()
        assert d["kind"] == "resting"
        assert d["occupant_count"] == 1
        assert d["capacity"] == 4


class TestSpawningChamber:
    def test_perform_tick_counts(self):
        chamber = SpawningChamber()
        chamber.perform_tick()
        assert chamber.ticks_run == 1

    def test_to_dict(self):
        assert SpawningChamber().to_dict() == {"kind": "spawning", "ticks_run": 0}


class TestMakeChamber:
    def test_resting_defaults(self):
        chamber = make_chamber("resting")
        assert isinstance(chamber, RestingChamber)
        assert chamber.capacity == ChamberConfig().resting_capacity
        assert chamber.food_per_occupant == ChamberConfig().food_per_occupant

    def test_resting_config_defaults(self):
        chamber = make_chamber("resting", ChamberConfig(resting_capacity=3, food_per_occupant=7))
        assert chamber.capacity == 3
        assert chamber.food_per_occupant == 7

    def test_resting_overrides(self):
        chamber = make_chamber(ChamberKind.RESTING, capacity=1, food_per_occupant=5)
        assert chamber.capacity == 1
        assert chamber.food_per_occupant == 5

    def test_spawning(self):
        assert isinstance(make_chamber("spawning"), SpawningChamber)

    def test_unknown_kind(self):
        with pytest.raises(ValidationError):
            make_chamber("barracks")

    def test_negative_capacity(self):
        with pytest.raises(ValidationError, match="capacity"):
            make_chamber("resting", capacity=-1)

    def test_negative_food(self):
        with pytest.raises(ValidationError, match="Food per occupant"):
            make_chamber("resting", food_per_occupant=-2)
