"""
Unit tests for the configuration system.

Tests cover:
- Default config creation and validation
- JSON load/save roundtrip
- Partial config loading (missing fields use defaults)
- Invalid value detection
- Unknown key warnings
- Dot-notation parameter overrides
"""

import json
import warnings
from pathlib import Path

import pytest

from src.core.config import (
    SimConfig,
    WorldConfig,
    CombatConfig,
    ChamberConfig,
    ResourceConfig,
    OutputConfig,
    load_config,
    save_config,
    get_default_config,
    apply_param_override,
)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def default_config() -> SimConfig:
    return get_default_config()


@pytest.fixture
def tmp_config_path(tmp_path) -> Path:
    return tmp_path / "test_config.json"


# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------

class TestDefaults:
    def test_default_is_valid(self, default_config):
        assert default_config.validate() == []

    def test_combat_defaults(self, default_config):
        c = default_config.combat
        assert (c.combatant_health, c.combatant_attack, c.combatant_defense) == (100, 20, 10)
        assert c.kill_food_reward == 10

    def test_chamber_defaults(self, default_config):
        assert default_config.chambers.occupancy_policy == "persistent"
        assert default_config.chambers.starting_chambers == []

    def test_world_unbounded_by_default(self, default_config):
        assert default_config.world.width is None
        assert default_config.world.in_bounds(-1000, 1000)

    def test_resources_lenient_by_default(self, default_config):
        assert default_config.resources.strict is False

    def test_sub_configs_independent(self):
        a = SimConfig()
        b = SimConfig()
        a.chambers.starting_chambers.append({"kind": "spawning"})
        assert b.chambers.starting_chambers == []


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------

class TestValidation:
    def test_bad_world_size(self):
        assert WorldConfig(width=0).validate()
        assert WorldConfig(height=-2).validate()

    def test_in_bounds(self):
        w = WorldConfig(width=3, height=2)
        assert w.in_bounds(0, 0)
        assert w.in_bounds(2, 1)
        assert not w.in_bounds(3, 0)
        assert not w.in_bounds(0, 2)
        assert not w.in_bounds(-1, 0)

    def test_bad_combat(self):
        errors = CombatConfig(combatant_health=0, combatant_attack=-1,
                              combatant_defense=-1, kill_food_reward=-5).validate()
        assert len(errors) == 4

    def test_bad_policy(self):
        errors = ChamberConfig(occupancy_policy="sometimes").validate()
        assert any("occupancy_policy" in e for e in errors)

    def test_bad_starting_chamber(self):
        errors = ChamberConfig(starting_chambers=[{"kind": "moat"}]).validate()
        assert any("starting_chambers[0].kind" in e for e in errors)

    def test_bad_starting_chamber_param(self):
        errors = ChamberConfig(
            starting_chambers=[{"kind": "resting", "capacity": -1}]
        ).validate()
        assert any("capacity" in e for e in errors)

    def test_bad_output(self):
        assert OutputConfig(snapshot_every_n_ticks=-1).validate()
        assert OutputConfig(output_dir="").validate()

    def test_resource_config_always_valid(self):
        assert ResourceConfig(strict=True).validate() == []

    def test_top_level_collects_errors(self):
        cfg = SimConfig()
        cfg.combat.combatant_health = 0
        cfg.chambers.occupancy_policy = "never"
        assert len(cfg.validate()) == 2


# ---------------------------------------------------------------------------
# JSON I/O
# ---------------------------------------------------------------------------

class TestJsonIO:
    def test_roundtrip(self, default_config, tmp_config_path):
        default_config.combat.kill_food_reward = 3
        default_config.chambers.starting_chambers = [{"kind": "spawning"}]
        save_config(default_config, tmp_config_path)
        loaded = load_config(tmp_config_path)
        assert loaded.to_dict() == default_config.to_dict()

    def test_partial_file(self, tmp_config_path):
        tmp_config_path.write_text(json.dumps({"combat": {"combatant_attack": 35}}))
        cfg = load_config(tmp_config_path)
        assert cfg.combat.combatant_attack == 35
        assert cfg.combat.combatant_health == 100
        assert cfg.chambers.occupancy_policy == "persistent"

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "nope.json")

    def test_malformed_json(self, tmp_config_path):
        tmp_config_path.write_text("{not json")
        with pytest.raises(json.JSONDecodeError):
            load_config(tmp_config_path)

    def test_invalid_values(self, tmp_config_path):
        tmp_config_path.write_text(json.dumps({"chambers": {"occupancy_policy": "x"}}))
        with pytest.raises(ValueError, match="Invalid configuration"):
            load_config(tmp_config_path)

    def test_unknown_key_warns(self, tmp_config_path):
        tmp_config_path.write_text(json.dumps({"combat": {"morale": 3}}))
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always")
            cfg = load_config(tmp_config_path)
        assert any("morale" in str(w.message) for w in caught)
        assert not hasattr(cfg.combat, "morale")

    def test_save_creates_parent(self, default_config, tmp_path):
        path = tmp_path / "nested" / "dir" / "config.json"
        save_config(default_config, path)
        assert path.exists()

    def test_copy_is_deep(self, default_config):
        clone = default_config.copy()
        clone.combat.combatant_health = 1
        assert default_config.combat.combatant_health == 100


# ---------------------------------------------------------------------------
# Overrides
# ---------------------------------------------------------------------------

class TestOverrides:
    def test_apply_override(self, default_config):
        apply_param_override(default_config, "combat.kill_food_reward", 5)
        assert default_config.combat.kill_food_reward == 5

    def test_apply_override_policy(self, default_config):
        apply_param_override(default_config, "chambers.occupancy_policy", "per_tick")
        assert default_config.chambers.occupancy_policy == "per_tick"

    def test_bad_section(self, default_config):
        with pytest.raises(KeyError):
            apply_param_override(default_config, "army.size", 3)

    def test_bad_field(self, default_config):
        with pytest.raises(KeyError):
            apply_param_override(default_config, "combat.morale", 3)
