"""League configuration management."""

from functools import lru_cache
from pathlib import Path

from .schemas import LeagueConfig
from .utils import load_json

DEFAULT_CONFIG_PATH = Path(__file__).parent.parent / 'data' / 'league_config.json'


def load_config(path: str | Path) -> LeagueConfig:
    """Load and validate a league configuration file."""
    return load_json(path, schema=LeagueConfig)


@lru_cache(maxsize=1)
def get_config() -> LeagueConfig:
    """
    Load league configuration from data/league_config.json.

    Configuration is cached after first load.

    Raises:
        FileNotFoundError: If league_config.json doesn't exist
        ValueError: If config file has invalid structure

    Example:
        from soberleague.config import get_config
        config = get_config()
        print(f"Clean sheet bonus: {config.clean_sheet_bonus}")
    """
    return load_config(DEFAULT_CONFIG_PATH)


def get_current_season() -> int:
    """Get the current season from config."""
    return get_config().current_season


def get_clean_sheet_bonus() -> float:
    """Get the clean-sheet bonus (a non-positive point value) from config."""
    return get_config().clean_sheet_bonus


def get_substance_points() -> dict[str, float]:
    """Get the substance catalog (name -> base points) from config."""
    return get_config().substances


def clear_config_cache() -> None:
    """
    Clear the configuration cache.

    Use this if the config file is modified during runtime.
    """
    get_config.cache_clear()
