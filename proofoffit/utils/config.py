"""
Tailoring configuration.

Defaults live in DEFAULT_TAILORING_CONFIG. A YAML file can override any
subset of them; the override is merged onto the defaults with OmegaConf.

Examples:
    >>> config = load_tailoring_config()
    >>> config.selection.max_bullets
    8

    >>> config = load_tailoring_config(Path("configs/tailoring.yaml"))
"""

import os
from pathlib import Path
from typing import Any, Dict

from dotenv import load_dotenv
from omegaconf import DictConfig, OmegaConf

load_dotenv()
TAILORING_CONFIG_PATH = os.getenv("TAILORING_CONFIG_PATH")

DEFAULT_TAILORING_CONFIG: Dict[str, Any] = {
    "selection": {
        "max_bullets": 8,
        "text_match_score": 10,
        "criterion_match_score": 8,
        "result_metric_bonus": 5,
    },
    "rendering": {
        "resume_bullets": 6,
        "cover_letter_bullets": 3,
        "email_bullets": 2,
        "key_skills": 3,
    },
    "document": {
        "version": "1.0",
    },
    "cache": {
        "jobs": {"ttl_seconds": 120, "max_size": 200, "policy": "lru"},
        "profiles": {"ttl_seconds": 300, "max_size": 50, "policy": "lru"},
    },
}


def _reject_unknown_keys(defaults: Dict[str, Any], overrides: Dict[str, Any], prefix: str = "") -> None:
    """Raise ValueError for any override key that has no default counterpart."""
    for key, value in overrides.items():
        dotted = f"{prefix}{key}"
        if key not in defaults:
            available = sorted(defaults.keys())
            raise ValueError(f"Unknown config key '{dotted}'. Available keys: {available}")
        if isinstance(value, dict) and isinstance(defaults[key], dict):
            _reject_unknown_keys(defaults[key], value, prefix=f"{dotted}.")


def load_tailoring_config(config_path: Path = None) -> DictConfig:
    """
    Load tailoring configuration, merging an optional YAML override onto defaults.

    Args:
        config_path: Optional YAML file (defaults to TAILORING_CONFIG_PATH env
                     variable; when neither is set, pure defaults are returned)

    Returns:
        DictConfig with every key of DEFAULT_TAILORING_CONFIG

    Raises:
        FileNotFoundError: If the config file does not exist
        ValueError: If the override contains keys unknown to the defaults
    """
    config = OmegaConf.create(DEFAULT_TAILORING_CONFIG)

    if config_path is None and TAILORING_CONFIG_PATH:
        config_path = Path(TAILORING_CONFIG_PATH)
    if config_path is None:
        return config

    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Tailoring config not found: {config_path}")

    overrides = OmegaConf.to_container(OmegaConf.load(config_path), resolve=True) or {}
    _reject_unknown_keys(DEFAULT_TAILORING_CONFIG, overrides)

    return OmegaConf.merge(config, overrides)
