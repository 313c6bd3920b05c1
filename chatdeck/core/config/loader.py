"""Reading chatdeck's config.yaml.

chatdeck has a single config file. Secrets such as provider API keys are
referenced as ``${VAR}`` and filled in from the environment (including a
``.env`` file loaded by the CLI) before the result is validated.
"""

import os
import re
from pathlib import Path
from typing import Any

import yaml

from chatdeck.core.config.models import Config

_VAR_PATTERN = re.compile(r"\$\{([^}]+)\}")


def expand_env_vars(value: str) -> str:
    """Substitute ${VAR} references in one string.

    References to variables that are not set are kept verbatim, so
    ``check_unexpanded_vars`` can report them by name.

    Examples:
        >>> os.environ["GOOGLE_API_KEY"] = "secret123"
        >>> expand_env_vars("${GOOGLE_API_KEY}")
        'secret123'
    """
    return _VAR_PATTERN.sub(lambda m: os.environ.get(m.group(1), m.group(0)), value)


def expand_env_vars_recursive(obj: Any) -> Any:
    """Apply ``expand_env_vars`` to every string in parsed YAML."""
    if isinstance(obj, dict):
        return {key: expand_env_vars_recursive(value) for key, value in obj.items()}
    if isinstance(obj, list):
        return [expand_env_vars_recursive(item) for item in obj]
    if isinstance(obj, str):
        return expand_env_vars(obj)
    return obj


def _references(obj: Any) -> list[str]:
    if isinstance(obj, dict):
        return [ref for value in obj.values() for ref in _references(value)]
    if isinstance(obj, list):
        return [ref for item in obj for ref in _references(item)]
    if isinstance(obj, str):
        return [f"${{{name}}}" for name in _VAR_PATTERN.findall(obj)]
    return []


def check_unexpanded_vars(data: Any, source: str) -> None:
    """Fail fast when a ${VAR} is still present after expansion.

    A provider entry with ``api_key: ${GOOGLE_API_KEY}`` and no such variable
    would otherwise send the literal placeholder as its key and fail on
    every message.

    Args:
        data: Expanded config data.
        source: Where the data came from, used in the error message.

    Raises:
        ValueError: Naming every unresolved variable.
    """
    unresolved = sorted(set(_references(data)))
    if unresolved:
        raise ValueError(
            f"Unresolved environment variable(s) in {source}: {', '.join(unresolved)}. "
            f"Set them (a .env file works) or remove the references."
        )


def load_config(path: Path | str) -> Config:
    """Load and validate a chatdeck config file.

    An empty file yields the defaults: the built-in provider chain and a
    store under ~/.chatdeck.

    Args:
        path: Path to the YAML file.

    Returns:
        Validated Config.

    Raises:
        FileNotFoundError: If the file does not exist.
        yaml.YAMLError: If the file is not valid YAML.
        ValueError: If a ${VAR} is unset or a field fails validation.
    """
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with config_path.open(encoding="utf-8") as f:
        data: dict[str, Any] = yaml.safe_load(f) or {}

    data = expand_env_vars_recursive(data)
    check_unexpanded_vars(data, source=str(config_path))

    return Config(**data)
