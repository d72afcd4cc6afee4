"""Discovery and loading of qodana.yaml files."""

import logging
from pathlib import Path
from typing import Any

import yaml

from .exceptions import ConfigFileError
from .models import LOCAL_CONFIG_ALT_NAME
from .models import LOCAL_CONFIG_NAME
from .models import Identity

logger = logging.getLogger(__name__)


def find_default_local_config(project_dir: Path) -> str:
    """Find the local configuration file name used by a project.

    Prefers ``qodana.yaml`` over ``qodana.yml``. When neither exists the
    conventional ``qodana.yaml`` name is returned anyway, so callers always
    get a path to display.

    Args:
        project_dir: Project root directory

    Returns:
        File name relative to the project directory
    """
    for name in (LOCAL_CONFIG_NAME, LOCAL_CONFIG_ALT_NAME):
        if (Path(project_dir) / name).is_file():
            return name
    return LOCAL_CONFIG_NAME


def local_config_full_path(project_dir: Path, local_config: str | Path) -> Path:
    """Resolve ``local_config`` against ``project_dir`` unless already absolute."""
    path = Path(local_config)
    if path.is_absolute():
        return path
    return Path(project_dir) / path


def read_yaml(path: Path) -> dict[str, Any] | None:
    """Read a YAML mapping.

    Args:
        path: Path to YAML file

    Returns:
        Dictionary from YAML or None if file doesn't exist

    Raises:
        ConfigFileError: If the file cannot be read or is not a mapping
    """
    if not path.exists():
        return None

    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise ConfigFileError(f"Failed to read configuration from {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigFileError(f"Configuration {path} must be a mapping, got {type(data).__name__}")
    return data


def load_identity(path: Path | None) -> Identity:
    """Load the ``ide`` and ``linter`` codes declared in a configuration file.

    Missing files and missing keys both yield empty codes.
    """
    if path is None:
        return Identity()

    data = read_yaml(path) or {}
    ide = data.get("ide") or ""
    linter = data.get("linter") or ""
    logger.debug(f"Loaded identity from {path}: ide='{ide}', linter='{linter}'")
    return Identity(ide=str(ide), linter=str(linter))
