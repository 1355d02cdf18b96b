import yaml
from typing import Type, TypeVar, Any, Dict, Optional, get_type_hints
from dataclasses import is_dataclass, fields
from pathlib import Path
from termcolor import colored
from ..core.config import EnvConfig
from ..core.errors import InvalidConfiguration

T = TypeVar("T")

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent.parent / "configs" / "default_config.yaml"

# Integer-valued fields and their lower bounds, checked before construction
# so the message can point at the YAML section.
_INT_FIELDS = {
    "EnvConfig": {"size": 6, "episode_length": 0},
    "PhysicsConfig": {"jump_velocity": 1, "gravity": 1},
    "WallConfig": {"min_wall_spacing": 1, "max_wall_spacing": 1, "max_wall_offset": 0},
    "RewardConfig": {"clear_reward": None, "collision_reward": None},
}

_SECTION_NAMES = {
    "EnvConfig": "ENV",
    "PhysicsConfig": "PHYSICS",
    "WallConfig": "WALL",
    "RewardConfig": "REWARD",
}


def config_error(section: str, problem: str, required: str, provided: Any) -> InvalidConfiguration:
    """Build a highlighted InvalidConfiguration for a YAML section."""
    return InvalidConfiguration(
        f"{colored(f'{section} CONFIG ERROR', 'white', 'on_red', attrs=['bold'])}\n"
        f"{colored('Problem:', 'red', attrs=['bold'])} {problem}\n"
        f"{colored('Required:', 'cyan')} {required}\n"
        f"{colored('Provided:', 'yellow')} {provided}"
    )


def merge_configs(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Recursively merge two dictionaries.
    Values in override take precedence over base.
    """
    merged = base.copy()
    for key, value in override.items():
        if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
            merged[key] = merge_configs(merged[key], value)
        else:
            merged[key] = value
    return merged

def from_dict(cls: Type[T], data: Dict[str, Any]) -> T:
    """
    Convert dictionary to dataclass recursively.

    Unknown keys and out-of-range integers raise InvalidConfiguration.
    """
    if not is_dataclass(cls):
        return data

    section = _SECTION_NAMES.get(cls.__name__, cls.__name__.upper())

    if not isinstance(data, dict):
        raise config_error(
            section,
            "Section must be a mapping",
            "key: value pairs",
            f"{data!r} ({type(data).__name__})",
        )

    known = [f.name for f in fields(cls)]
    unknown = sorted(key for key in data if key not in known)
    if unknown:
        raise config_error(
            section,
            "Unknown configuration keys",
            f"Only keys from {known}",
            unknown,
        )

    for key, lower in _INT_FIELDS.get(cls.__name__, {}).items():
        if key not in data or (key == "max_wall_offset" and data[key] is None):
            continue
        value = data[key]
        if isinstance(value, bool) or not isinstance(value, int):
            raise config_error(
                section,
                f"Invalid {key} type",
                f"{key} must be int",
                f"{key}={value!r} ({type(value).__name__})",
            )
        if lower is not None and value < lower:
            raise config_error(
                section,
                f"Invalid {key} value",
                f"{key} must be >= {lower}",
                f"{key}={value}",
            )

    if cls.__name__ == "WallConfig" and "min_wall_spacing" in data and "max_wall_spacing" in data:
        if data["min_wall_spacing"] > data["max_wall_spacing"]:
            raise config_error(
                section,
                "Wall spacing range is inverted",
                "min_wall_spacing <= max_wall_spacing",
                f"min_wall_spacing={data['min_wall_spacing']}, max_wall_spacing={data['max_wall_spacing']}",
            )

    # Use get_type_hints to resolve string forward references
    try:
        type_hints = get_type_hints(cls)
    except Exception:
        # Fallback if resolving fails (e.g. strict forward refs not in scope)
        type_hints = {f.name: f.type for f in fields(cls)}

    kwargs = {}

    for key, value in data.items():
        field_type = type_hints.get(key)

        # Handle optional types (naive implementation, assumes Union[Type, None])
        if hasattr(field_type, "__origin__"):
            args = field_type.__args__
            real_type = next((a for a in args if a is not type(None)), None)
            if real_type and is_dataclass(real_type) and value is not None:
                kwargs[key] = from_dict(real_type, value)
                continue

        if is_dataclass(field_type) and value is not None:
            kwargs[key] = from_dict(field_type, value)
        else:
            kwargs[key] = value

    return cls(**kwargs)


def config_to_dict(config: EnvConfig) -> Dict[str, Any]:
    """Convert an EnvConfig (and its sub-configs) to plain dicts for dumping."""
    def convert(obj):
        if is_dataclass(obj):
            return {f.name: convert(getattr(obj, f.name)) for f in fields(obj)}
        return obj
    return convert(config)


def load_config_from_yaml(config_path: str, base_config: Optional[EnvConfig] = None) -> EnvConfig:
    """
    Load configuration from YAML file, optionally merging with a base config.

    Args:
        config_path: Path to YAML config file
        base_config: Optional base EnvConfig whose values the file overrides
            (if None, dataclass defaults fill missing keys)

    Returns:
        EnvConfig: Loaded configuration

    Raises:
        InvalidConfiguration: missing file, unknown keys or invalid values
    """
    path = Path(config_path)
    if not path.exists():
        raise InvalidConfiguration(
            f"{colored('FILE ERROR', 'white', 'on_red', attrs=['bold'])}\n"
            f"{colored('Problem:', 'red', attrs=['bold'])} Configuration file not found\n"
            f"{colored('Path:', 'cyan')} {config_path}\n"
            f"{colored('Solution:', 'green', attrs=['bold'])} Check if the file exists and path is correct"
        )

    with open(path, "r") as f:
        yaml_config = yaml.safe_load(f) or {}

    if base_config is not None:
        yaml_config = merge_configs(config_to_dict(base_config), yaml_config)

    # The recursive loader lets dataclass defaults fill any missing keys.
    return from_dict(EnvConfig, yaml_config)


def load_default_config() -> EnvConfig:
    """Load the configuration shipped with the package."""
    return load_config_from_yaml(str(DEFAULT_CONFIG_PATH))
