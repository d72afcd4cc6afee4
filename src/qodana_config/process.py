"""Subprocess helpers.

Commands are executed without a shell. Calls block until the child exits;
no timeout is applied here.
"""

import logging
import os
import subprocess
from collections.abc import Sequence
from pathlib import Path

logger = logging.getLogger(__name__)


def _command_line(cmd: Sequence[str]) -> list[str] | str:
    # Arguments are already quoted for the Windows command line; passing a
    # list would make subprocess quote them a second time.
    if os.name == "nt":
        return " ".join(cmd)
    return list(cmd)


def run_command(
    cmd: Sequence[str],
    *,
    cwd: Path | str | None = None,
    log_dir: Path | None = None,
    log_name: str | None = None,
) -> subprocess.CompletedProcess:
    """Run a command, capturing its output as text.

    Args:
        cmd: Command sequence to execute
        cwd: Working directory
        log_dir: When set, stdout/stderr are appended to ``<log_dir>/<log_name>.log``
        log_name: Log file stem (defaults to the executable name)

    Returns:
        CompletedProcess with ``stdout`` and ``stderr`` as strings

    Raises:
        OSError: If the executable cannot be started
    """
    argv = [str(part) for part in cmd]
    logger.debug(f"Executing command: {argv} (cwd={cwd})")

    result = subprocess.run(
        _command_line(argv),
        cwd=str(cwd) if cwd is not None else None,
        capture_output=True,
        text=True,
    )

    if log_dir is not None:
        _append_log(Path(log_dir), log_name or Path(argv[0]).stem, argv, result)
    return result


def _append_log(log_dir: Path, name: str, argv: list[str], result: subprocess.CompletedProcess) -> None:
    try:
        log_dir.mkdir(parents=True, exist_ok=True)
        with open(log_dir / f"{name}.log", "a") as f:
            f.write(f"Executing command: {argv}\n")
            if result.stdout:
                f.write(result.stdout)
                if not result.stdout.endswith("\n"):
                    f.write("\n")
            if result.stderr:
                f.write(result.stderr)
                if not result.stderr.endswith("\n"):
                    f.write("\n")
    except OSError as e:
        logger.warning(f"Failed to write {name} log to {log_dir}: {e}")
