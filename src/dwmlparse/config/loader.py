"""
Configuration loading utilities.

Supports environment variable interpolation in string values.
"""

import os
import re
from pathlib import Path
from typing import Any

import yaml

from dwmlparse.config.settings import ParserOptions

PARSER_SECTION = "parser"


def _interpolate_env_vars(value: str) -> str:
    """
    Interpolate environment variables in string values.

    Supports ${VAR} and ${VAR:default} syntax.
    """
    pattern = r"\$\{([^}:]+)(?::([^}]*))?\}"

    def replacer(match: re.Match[str]) -> str:
        var_name = match.group(1)
        default = match.group(2)
        return os.environ.get(var_name, default if default is not None else "")

    return re.sub(pattern, replacer, value)


def _process_config_values(obj: Any) -> Any:
    """Recursively process config values for env var interpolation."""
    if isinstance(obj, str):
        return _interpolate_env_vars(obj)
    if isinstance(obj, dict):
        return {k: _process_config_values(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_process_config_values(item) for item in obj]
    return obj


def load_yaml(path: Path) -> dict[str, Any]:
    """Load a YAML file and process environment variables."""
    with path.open(encoding="utf-8") as f:
        data = yaml.safe_load(f)
    if data is None:
        return {}
    if not isinstance(data, dict):
        msg = f"Config root must be a mapping: {path}"
        raise ValueError(msg)
    return _process_config_values(data)


def load_options(config_path: Path) -> ParserOptions:
    """
    Load parser options from a YAML file.

    Options may sit at the top level or under a ``parser:`` section:

        parser:
          skip_properties_with_non_matching_entry_count: true
          skipped_attributes: ["wind-speed-sustained"]

    Args:
        config_path: Path to the YAML file.

    Returns:
        Fully validated ParserOptions instance.
    """
    data = load_yaml(config_path)
    section = data.get(PARSER_SECTION, data)
    if not isinstance(section, dict):
        msg = f"'{PARSER_SECTION}' section must be a mapping: {config_path}"
        raise ValueError(msg)
    return ParserOptions.model_validate(section)
