"""
Configuration loading utilities.
Loads optional JSON rule overrides on top of settings defaults.
"""
import json
import logging
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


def load_or_create_config(
    path: str | Path,
    defaults: dict[str, Any],
    create_if_missing: bool = False
) -> dict[str, Any]:
    """
    Load configuration from a JSON file merged over defaults.

    Unknown keys in the file are dropped. A missing, unreadable or malformed
    file falls back to the defaults with a warning.

    Args:
        path: Path to the configuration file
        defaults: Default configuration values
        create_if_missing: If True, write the defaults when the file doesn't exist

    Returns:
        Loaded or default configuration dictionary

    Examples:
        >>> rules = load_or_create_config(
        ...     "config/profile_rules.json",
        ...     {"required_doc_types": ["cipc", "bbbee", "csd"]}
        ... )
    """
    path = Path(path)

    if path.exists():
        try:
            with open(path, encoding="utf-8") as f:
                loaded = json.load(f)
        except json.JSONDecodeError as e:
            logger.warning(f"Invalid JSON in {path}: {e}, using defaults")
        except OSError as e:
            logger.warning(f"Failed to read {path}: {e}, using defaults")
        else:
            if isinstance(loaded, dict):
                logger.info(f"Loaded configuration from {path}")
                return {**defaults, **{k: v for k, v in loaded.items() if k in defaults}}
            logger.warning(f"Configuration in {path} is not an object, using defaults")
        return defaults.copy()

    if create_if_missing:
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, "w", encoding="utf-8") as f:
                json.dump(defaults, f, indent=2)
            logger.info(f"Created default configuration at {path}")
        except OSError as e:
            logger.warning(f"Failed to create config file {path}: {e}")

    return defaults.copy()
