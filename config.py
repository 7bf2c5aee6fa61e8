"""Configuration loader for tunable search constants.

Provides a Config dataclass and a loader that reads from YAML files,
falling back to default values if no config file is specified or found.

Exports
-------
Config
load_config
get_config
set_config_path
get_cached_config
reload_config
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from constants import (
    CANDIDATE_SCORE_THRESHOLD,
    CONDIMENT_BONUS,
    MAX_CANDIDATES,
    MAX_CONDIMENTS,
    MAX_FILLINGS,
    MAX_PIECES,
    MP_CONDIMENT,
    MP_FILLING,
    TYPE_CONDIMENT,
    TYPE_FILLING,
)

# Default config file path (next to this module)
_DEFAULT_CONFIG_PATH = Path(__file__).parent / "config.default.yml"

# Global config path override (set via CLI)
_config_path_override: Path | None = None


@dataclass
class SearchConfig:
    """Candidate selection and search budget."""

    candidate_score_threshold: float = CANDIDATE_SCORE_THRESHOLD
    max_candidates: int = MAX_CANDIDATES
    condiment_bonus: float = CONDIMENT_BONUS
    # None = search until the space is exhausted
    max_steps: int | None = None


@dataclass
class CapacityConfig:
    """Hard recipe limits (single player)."""

    max_fillings: int = MAX_FILLINGS
    max_condiments: int = MAX_CONDIMENTS
    max_pieces: int = MAX_PIECES


@dataclass
class WeightsConfig:
    """Progress one remaining slot is expected to contribute."""

    mp_filling: float = MP_FILLING
    mp_condiment: float = MP_CONDIMENT
    type_filling: float = TYPE_FILLING
    type_condiment: float = TYPE_CONDIMENT


@dataclass
class LinearProgramConfig:
    """Multi-power (linear program) mode."""

    avoid_herba: bool = True
    time_limit_seconds: float = 5.0


@dataclass
class DisplayConfig:
    """Display toggles."""

    show_vectors: bool = False


@dataclass
class Config:
    """Root configuration container."""

    search: SearchConfig = field(default_factory=SearchConfig)
    capacity: CapacityConfig = field(default_factory=CapacityConfig)
    weights: WeightsConfig = field(default_factory=WeightsConfig)
    lp: LinearProgramConfig = field(default_factory=LinearProgramConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)


def _merge_dict_into_dataclass(data: dict[str, Any], dc_instance: Any) -> None:
    """Merge dictionary values into a dataclass instance."""
    for key, value in data.items():
        if hasattr(dc_instance, key):
            setattr(dc_instance, key, value)


def _validate_config(config: Config) -> list[str]:
    """Validate config values and return list of errors."""
    errors: list[str] = []

    # Search validations
    if config.search.candidate_score_threshold < 0:
        errors.append("search.candidate_score_threshold must be >= 0")
    if config.search.max_candidates < 1:
        errors.append("search.max_candidates must be >= 1")
    if config.search.condiment_bonus < 0:
        errors.append("search.condiment_bonus must be >= 0")
    if config.search.max_steps is not None and config.search.max_steps < 1:
        errors.append("search.max_steps must be >= 1 (or null)")

    # Capacity validations
    if config.capacity.max_fillings < 1:
        errors.append("capacity.max_fillings must be >= 1")
    if config.capacity.max_condiments < 1:
        errors.append("capacity.max_condiments must be >= 1")
    if config.capacity.max_pieces < 1:
        errors.append("capacity.max_pieces must be >= 1")

    # Weight validations
    for name in ("mp_filling", "mp_condiment", "type_filling", "type_condiment"):
        if getattr(config.weights, name) <= 0:
            errors.append(f"weights.{name} must be > 0")

    # Linear program validations
    if config.lp.time_limit_seconds <= 0:
        errors.append("lp.time_limit_seconds must be > 0")

    return errors


def load_config(path: str | Path | None = None) -> Config:
    """Load configuration from YAML file.

    Parameters
    ----------
    path : str | Path | None
        Path to config file. If None, uses the global override
        (set via set_config_path) or falls back to config.default.yml.

    Returns
    -------
    Config
        Loaded and validated configuration.

    Raises
    ------
    FileNotFoundError
        If specified path doesn't exist.
    ValueError
        If config validation fails.
    """
    # Determine which path to use
    if path is not None:
        config_path = Path(path)
    elif _config_path_override is not None:
        config_path = _config_path_override
    else:
        config_path = _DEFAULT_CONFIG_PATH

    # Check file exists
    if not config_path.exists():
        if path is not None:
            raise FileNotFoundError(f"Config file not found: {config_path}")
        # Fall back to defaults if default config doesn't exist
        return Config()

    # Load YAML
    with open(config_path, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    # Build config from defaults, then overlay loaded values
    config = Config()

    for section in ("search", "capacity", "weights", "lp", "display"):
        if section in data:
            _merge_dict_into_dataclass(data[section], getattr(config, section))

    # Validate
    errors = _validate_config(config)
    if errors:
        raise ValueError(
            "Config validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
        )

    return config


def set_config_path(path: str | Path | None) -> None:
    """Set global config path override.

    Call this early (e.g., from CLI parsing) so the first search picks
    up the file.

    Parameters
    ----------
    path : str | Path | None
        Path to config file, or None to reset to default.
    """
    global _config_path_override
    _config_path_override = Path(path) if path is not None else None


def get_config() -> Config:
    """Get the current configuration.

    Convenience wrapper around load_config() using the current
    global path override.

    Returns
    -------
    Config
        Current configuration.
    """
    return load_config()


# Singleton instance for lazy loading
_cached_config: Config | None = None


def get_cached_config() -> Config:
    """Get cached configuration (loads once).

    Returns
    -------
    Config
        Cached configuration instance.
    """
    global _cached_config
    if _cached_config is None:
        _cached_config = load_config()
    return _cached_config


def reload_config() -> Config:
    """Reload and cache configuration.

    Returns
    -------
    Config
        Freshly loaded configuration instance.
    """
    global _cached_config
    _cached_config = load_config()
    return _cached_config
