"""Configuration resolver backends.

The resolver is an external program that merges configuration layers and
writes the results into an output directory. The client only needs the
set of files it produced, so any object with a matching ``resolve`` method
can stand in for the real process.
"""

import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Protocol

from .exceptions import ResolutionFailed
from .models import ResolverOutput
from .process import run_command

logger = logging.getLogger(__name__)


class ConfigResolver(Protocol):
    """Anything that turns resolver arguments into an output file set."""

    def resolve(self, args: Sequence[str], output_dir: Path) -> ResolverOutput:
        """Run the resolver.

        Raises:
            ResolutionFailed: If the resolver did not complete successfully
        """
        ...


class SubprocessConfigResolver:
    """Runs the resolver jar as a child process.

    Args:
        log_dir: Directory receiving ``config-loader-cli.log`` (optional)
    """

    log_name = "config-loader-cli"

    def __init__(self, log_dir: Path | None = None):
        self.log_dir = log_dir

    def resolve(self, args: Sequence[str], output_dir: Path) -> ResolverOutput:
        try:
            result = run_command(args, log_dir=self.log_dir, log_name=self.log_name)
        except OSError as e:
            logger.error(f"Failed to launch configuration resolver: {e}")
            raise ResolutionFailed(1, f"Failed to launch configuration resolver: {e}") from e

        if result.returncode != 0:
            logger.error(f"Configuration resolver exited with code {result.returncode}: {result.stderr.strip()}")
            raise ResolutionFailed(result.returncode)

        return ResolverOutput.discover(Path(output_dir))
