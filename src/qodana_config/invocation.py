"""Argument construction for the configuration resolver."""

import os
from pathlib import Path

from .exceptions import ConfigValidationError
from .models import ARTIFACT_NAME

EFFECTIVE_CONFIG_OUT_DIR_FLAG = "--effective-config-out-dir"
LOCAL_CONFIG_FLAG = "--local-qodana-yaml"
GLOBAL_CONFIGS_FILE_FLAG = "--global-configs-file"
GLOBAL_CONFIG_ID_FLAG = "--global-config-id"


def quote_for_windows(value: str, windows: bool | None = None) -> str:
    """Wrap ``value`` in double quotes on Windows when it contains whitespace.

    On other platforms arguments are passed to the process without a shell,
    so the value is returned unchanged.
    """
    if windows is None:
        windows = os.name == "nt"
    if windows and any(c.isspace() for c in value) and not value.startswith('"'):
        return f'"{value}"'
    return value


def _absolute(path: str | Path, what: str) -> str:
    try:
        return os.path.abspath(path)
    except (OSError, ValueError) as e:
        raise ConfigValidationError(f"Failed to compute absolute path of {what} {path}: {e}") from e


def build_resolver_args(
    runtime: str | Path | None,
    artifact: str | Path | None,
    local_config: str | Path | None,
    global_configs_file: str | Path | None,
    global_config_id: str | None,
    output_dir: str | Path,
    windows: bool | None = None,
) -> list[str]:
    """Build the argument vector for one resolver run.

    Args:
        runtime: Java launcher
        artifact: Resolver jar
        local_config: Local qodana.yaml; passed only if the file exists
        global_configs_file: File listing global configurations (optional)
        global_config_id: Identifier selecting a global configuration (optional)
        output_dir: Directory receiving the effective configuration
        windows: Override platform detection for quoting

    Returns:
        Ordered argument list starting with the launcher

    Raises:
        ConfigValidationError: If the runtime or artifact is missing, or a
            path cannot be made absolute
    """
    if not runtime:
        raise ConfigValidationError("JRE not found. Required for effective configuration creation.")
    if not artifact:
        raise ConfigValidationError(f"{ARTIFACT_NAME} not found. Required for effective configuration creation.")

    args = [
        quote_for_windows(str(runtime), windows),
        "-jar",
        quote_for_windows(str(artifact), windows),
    ]

    out_dir = _absolute(output_dir, "effective configuration directory")
    args += [EFFECTIVE_CONFIG_OUT_DIR_FLAG, quote_for_windows(out_dir, windows)]

    if local_config and Path(local_config).is_file():
        local_abs = _absolute(local_config, "local qodana.yaml file")
        args += [LOCAL_CONFIG_FLAG, quote_for_windows(local_abs, windows)]

    if global_configs_file:
        global_abs = _absolute(global_configs_file, "global configurations file")
        args += [GLOBAL_CONFIGS_FILE_FLAG, quote_for_windows(global_abs, windows)]

    if global_config_id:
        args += [GLOBAL_CONFIG_ID_FLAG, global_config_id]

    return args
