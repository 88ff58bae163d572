"""
Configuration system for the Colony Battle Simulator.

Provides a hierarchical dataclass-based config with JSON serialization,
validation, and sensible defaults for all simulation parameters.
"""

from __future__ import annotations

import json
import warnings
from copy import deepcopy
from dataclasses import dataclass, field, fields, asdict
from pathlib import Path
from typing import Any, Optional


OCCUPANCY_POLICIES = ("persistent", "per_tick")
CHAMBER_KINDS = ("resting", "spawning")


# ---------------------------------------------------------------------------
# Sub-config dataclasses (grouped by domain)
# ---------------------------------------------------------------------------

@dataclass
class WorldConfig:
    """Grid bounds and registry checks."""
    width: Optional[int] = None     # None = unbounded grid
    height: Optional[int] = None    # None = unbounded grid
    invariant_checks: bool = True   # verify registry invariants after every tick

    def validate(self) -> list[str]:
        errors = []
        if self.width is not None and self.width < 1:
            errors.append(f"world.width must be >= 1 or null, got {self.width}")
        if self.height is not None and self.height < 1:
            errors.append(f"world.height must be >= 1 or null, got {self.height}")
        return errors

    def in_bounds(self, x: int, y: int) -> bool:
        """True if (x, y) lies on the grid. Unbounded axes accept any integer."""
        if self.width is not None and not (0 <= x < self.width):
            return False
        if self.height is not None and not (0 <= y < self.height):
            return False
        return True


@dataclass
class CombatConfig:
    """Combatant stats and battle rewards."""
    combatant_health: int = 100
    combatant_attack: int = 20
    combatant_defense: int = 10
    kill_food_reward: int = 10

    def validate(self) -> list[str]:
        errors = []
        if self.combatant_health < 1:
            errors.append(f"combat.combatant_health must be >= 1, got {self.combatant_health}")
        if self.combatant_attack < 0:
            errors.append(f"combat.combatant_attack must be >= 0, got {self.combatant_attack}")
        if self.combatant_defense < 0:
            errors.append(f"combat.combatant_defense must be >= 0, got {self.combatant_defense}")
        if self.kill_food_reward < 0:
            errors.append(f"combat.kill_food_reward must be >= 0, got {self.kill_food_reward}")
        return errors


@dataclass
class ChamberConfig:
    """Chamber defaults and the resting-chamber occupancy policy."""
    # "persistent": admissions accumulate across ticks (a full chamber stops eating)
    # "per_tick":   admissions are cleared at the start of every colony update
    occupancy_policy: str = "persistent"
    resting_capacity: int = 10
    food_per_occupant: int = 1

    # Chambers every new colony starts with, e.g.
    # [{"kind": "resting", "capacity": 4, "food_per_occupant": 2}, {"kind": "spawning"}]
    starting_chambers: list[dict] = field(default_factory=list)

    def validate(self) -> list[str]:
        errors = []
        if self.occupancy_policy not in OCCUPANCY_POLICIES:
            errors.append(
                f"chambers.occupancy_policy must be one of {OCCUPANCY_POLICIES}, "
                f"got '{self.occupancy_policy}'"
            )
        if self.resting_capacity < 0:
            errors.append(f"chambers.resting_capacity must be >= 0, got {self.resting_capacity}")
        if self.food_per_occupant < 0:
            errors.append(f"chambers.food_per_occupant must be >= 0, got {self.food_per_occupant}")
        for i, spec in enumerate(self.starting_chambers):
            kind = spec.get("kind") if isinstance(spec, dict) else None
            if kind not in CHAMBER_KINDS:
                errors.append(
                    f"chambers.starting_chambers[{i}].kind must be one of {CHAMBER_KINDS}, got '{kind}'"
                )
                continue
            for key in ("capacity", "food_per_occupant"):
                value = spec.get(key, 0)
                if not isinstance(value, int) or value < 0:
                    errors.append(f"chambers.starting_chambers[{i}].{key} must be an int >= 0")
        return errors


@dataclass
class ResourceConfig:
    """Resource intake rules."""
    strict: bool = False  # True = unknown resource kinds raise instead of being ignored

    def validate(self) -> list[str]:
        return []


@dataclass
class OutputConfig:
    """Run output settings."""
    output_dir: str = "runs"
    snapshot_every_n_ticks: int = 0  # 0 = no snapshots

    def validate(self) -> list[str]:
        errors = []
        if self.snapshot_every_n_ticks < 0:
            errors.append(
                f"output.snapshot_every_n_ticks must be >= 0, got {self.snapshot_every_n_ticks}"
            )
        if not self.output_dir:
            errors.append("output.output_dir must not be empty")
        return errors


# ---------------------------------------------------------------------------
# Top-level config
# ---------------------------------------------------------------------------

@dataclass
class SimConfig:
    """
    Top-level simulation configuration.

    All parameters are adjustable. Nested dataclasses group related settings.
    Load from JSON with `load_config()`, validate with `validate()`.
    """
    world: WorldConfig = field(default_factory=WorldConfig)
    combat: CombatConfig = field(default_factory=CombatConfig)
    chambers: ChamberConfig = field(default_factory=ChamberConfig)
    resources: ResourceConfig = field(default_factory=ResourceConfig)
    output: OutputConfig = field(default_factory=OutputConfig)

    def validate(self) -> list[str]:
        """Validate all config sections. Returns list of error messages (empty = valid)."""
        errors = []
        for f in fields(self):
            sub = getattr(self, f.name)
            if hasattr(sub, "validate"):
                errors.extend(sub.validate())
        return errors

    def to_dict(self) -> dict[str, Any]:
        """Convert to nested dict for JSON serialization."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SimConfig:
        """Create SimConfig from nested dict, merging with defaults."""
        config = cls()
        _merge_into_dataclass(config, data)
        return config

    def copy(self) -> SimConfig:
        """Deep copy of this config."""
        return deepcopy(self)


# ---------------------------------------------------------------------------
# JSON I/O helpers
# ---------------------------------------------------------------------------

def _merge_into_dataclass(target: Any, source: dict[str, Any]) -> None:
    """
    Recursively merge a dict into a dataclass instance.
    Unknown keys emit a warning but don't raise.
    """
    if not isinstance(source, dict):
        return

    known_fields = {f.name for f in fields(target)}
    for key, value in source.items():
        if key not in known_fields:
            warnings.warn(
                f"Unknown config key '{key}' in section {type(target).__name__} - ignored.",
                UserWarning,
                stacklevel=3,
            )
            continue

        current = getattr(target, key)

        if hasattr(current, "__dataclass_fields__") and isinstance(value, dict):
            _merge_into_dataclass(current, value)
        else:
            setattr(target, key, value)


def load_config(path: str | Path) -> SimConfig:
    """
    Load config from a JSON file. Missing fields use defaults.

    Args:
        path: Path to JSON config file.

    Returns:
        Validated SimConfig instance.

    Raises:
        FileNotFoundError: If path doesn't exist.
        json.JSONDecodeError: If JSON is malformed.
        ValueError: If config values are invalid.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)

    config = SimConfig.from_dict(data)

    errors = config.validate()
    if errors:
        msg = "Invalid configuration:\n" + "\n".join(f"  - {e}" for e in errors)
        raise ValueError(msg)

    return config


def save_config(config: SimConfig, path: str | Path) -> None:
    """Save config to JSON file."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(config.to_dict(), f, indent=2, ensure_ascii=False)


def get_default_config() -> SimConfig:
    """Return a fresh default config (all defaults, validated)."""
    config = SimConfig()
    errors = config.validate()
    assert not errors, f"Default config is invalid: {errors}"
    return config


def apply_param_override(config: SimConfig, dotted_key: str, value: Any) -> None:
    """
    Apply a single parameter override using dot notation.

    Example:
        apply_param_override(config, "combat.kill_food_reward", 5)
        apply_param_override(config, "chambers.occupancy_policy", "per_tick")

    Args:
        config: SimConfig to modify in-place.
        dotted_key: Dot-separated path like "world.width" or "combat.combatant_attack".
        value: New value to set.

    Raises:
        KeyError: If the path doesn't exist.
    """
    parts = dotted_key.split(".")
    obj = config
    for part in parts[:-1]:
        if not hasattr(obj, part):
            raise KeyError(f"Config path '{dotted_key}' invalid: '{part}' not found in {type(obj).__name__}")
        obj = getattr(obj, part)

    final_key = parts[-1]
    if not hasattr(obj, final_key):
        raise KeyError(f"Config path '{dotted_key}' invalid: '{final_key}' not found in {type(obj).__name__}")

    setattr(obj, final_key, value)
