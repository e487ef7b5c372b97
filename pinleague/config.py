"""Application configuration management."""

from functools import lru_cache
from pathlib import Path

from .schemas import AppConfig, LeagueDefaults
from .utils import load_json

CONFIG_PATH = Path(__file__).parent.parent / 'data' / 'league_config.json'


@lru_cache(maxsize=1)
def get_config() -> AppConfig:
    """
    Load application configuration from data/league_config.json.

    Configuration is cached after first load.

    Returns:
        AppConfig object with validated settings

    Raises:
        FileNotFoundError: If league_config.json doesn't exist
        ValueError: If config file has invalid structure

    Example:
        from pinleague.config import get_config
        config = get_config()
        print(f"Data file: {config.data_file}")
    """
    return load_json(CONFIG_PATH, schema=AppConfig)


def get_data_file() -> Path:
    """Get the path of the JSON league data store."""
    return Path(get_config().data_file)


def get_log_dir() -> Path:
    """Get the directory log files are written to."""
    return Path(get_config().log_dir)


def get_league_defaults() -> LeagueDefaults:
    """Get the settings offered when creating a new league."""
    return get_config().default_league


def clear_config_cache() -> None:
    """
    Clear the configuration cache.

    Use this if the config file is modified during runtime
    and you need to reload it.
    """
    get_config.cache_clear()
