"""Loading EntityConfig from YAML files."""

from __future__ import annotations

import logging
from pathlib import Path

import yaml

from .models import EntityConfig

logger = logging.getLogger(__name__)


def load_config(path: str | Path) -> EntityConfig:
    """
    Load an EntityConfig from a YAML (or JSON) file.

    The file holds a mapping of EntityConfig fields, e.g.::

        mask_char: "#"
        indent: 4
        schema_draft: draft2020-12

    An empty file yields the defaults.

    Args:
        path: Path to the config file

    Returns:
        EntityConfig
    """
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, 'r', encoding='utf-8') as f:
        content = f.read()

    # JSON is valid YAML, so both formats load here
    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ValueError(f"Failed to parse config file: {e}")

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file must contain a mapping: {config_path}")

    config = EntityConfig.from_dict(data)
    logger.debug("Loaded entity config from %s: %s", config_path, config.to_dict())
    return config
