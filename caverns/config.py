# caverns/config.py
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Optional, Union

import structlog
import yaml

log = structlog.get_logger()


@dataclass
class CellularConfig:
    """Knobs for the per-room cellular automaton."""
    density: int = 55  # % chance a noise cell starts as floor
    iterations: int = 5
    birth_limit: int = 5
    survival_limit: int = 4


@dataclass
class DungeonConfig:
    width: int = 50
    height: int = 50
    min_node_size: int = 10
    max_node_size: int = 20
    # A node below max_node_size still splits when a draw exceeds this.
    split_chance_threshold: float = 0.75
    aspect_ratio_threshold: float = 1.25
    room_edge_padding: int = 1
    room_size_margin: int = 2
    corridor_thickness: int = 3
    island_thickness: int = 3
    seed: Optional[int] = None
    cellular: CellularConfig = field(default_factory=CellularConfig)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DungeonConfig":
        """Build a config from a plain mapping, e.g. parsed YAML.

        Missing keys keep their defaults; unknown keys are logged and ignored.
        """
        cellular_data = data.get("cellular") or {}
        if not isinstance(cellular_data, dict):
            raise ValueError("'cellular' section must be a mapping")
        cellular = CellularConfig(**_pick_fields(CellularConfig, cellular_data, "cellular"))
        top_level = {k: v for k, v in data.items() if k != "cellular"}
        return cls(cellular=cellular, **_pick_fields(cls, top_level, "dungeon"))

    def to_dict(self) -> Dict[str, Any]:
        values = {f.name: getattr(self, f.name) for f in fields(self) if f.name != "cellular"}
        values["cellular"] = {f.name: getattr(self.cellular, f.name) for f in fields(self.cellular)}
        return values


def _pick_fields(cls: type, data: Dict[str, Any], section: str) -> Dict[str, Any]:
    known = {f.name: f for f in fields(cls) if f.name != "cellular"}
    picked: Dict[str, Any] = {}
    for key, value in data.items():
        if key not in known:
            log.warning("Ignoring unknown config key", section=section, key=key)
            continue
        picked[key] = _coerce(key, value, known[key].default)
    return picked


def _coerce(key: str, value: Any, default: Any) -> Any:
    if value is None:
        if key == "seed":
            return None
        raise ValueError(f"Config value for '{key}' must not be null")
    if isinstance(value, bool):
        raise ValueError(f"Config value for '{key}' must be numeric, got {value!r}")
    if isinstance(default, float):
        if not isinstance(value, (int, float)):
            raise ValueError(f"Config value for '{key}' must be a number, got {value!r}")
        return float(value)
    if not isinstance(value, int):
        raise ValueError(f"Config value for '{key}' must be an integer, got {value!r}")
    return value


def load_config(config_path: Union[str, Path]) -> DungeonConfig:
    """Load a :class:`DungeonConfig` from a YAML file."""
    config_path = Path(config_path)
    if not config_path.is_file():
        log.error("Dungeon config file not found", path=str(config_path))
        raise FileNotFoundError(f"Dungeon configuration file not found: {config_path}")
    try:
        with config_path.open("r") as f:
            config_data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        log.error("Error parsing YAML for dungeon config", path=str(config_path), error=str(e))
        raise
    if config_data is None:
        log.warning("Dungeon config file is empty.", path=str(config_path))
        return DungeonConfig()
    # Settings may also live under a top-level "dungeon" key.
    if isinstance(config_data, dict) and "dungeon" in config_data:
        config_data = config_data["dungeon"]
    if not isinstance(config_data, dict):
        raise ValueError(f"Dungeon config must be a mapping, got {type(config_data).__name__}")
    config = DungeonConfig.from_dict(config_data)
    log.info("Dungeon config loaded", path=str(config_path))
    return config


__all__ = ["CellularConfig", "DungeonConfig", "load_config"]
