"""Provisioning of the configuration resolver jar."""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from .exceptions import ConfigFileError
from .exceptions import ConfigValidationError
from .models import ARTIFACT_NAME

logger = logging.getLogger(__name__)


def artifact_path(scratch_root: Path) -> Path:
    """Return the deterministic location of the resolver jar under ``scratch_root``."""
    return Path(scratch_root) / "tools" / ARTIFACT_NAME


def provision_artifact(scratch_root: Path, payload: bytes) -> Path:
    """Write the resolver jar into the scratch root.

    A stale jar at the target path is removed first; the last write wins.

    Args:
        scratch_root: Writable scratch directory
        payload: Jar contents

    Returns:
        Path of the written jar

    Raises:
        ConfigFileError: If the stale jar cannot be removed, the directory
            cannot be created or the jar cannot be written
    """
    target = artifact_path(scratch_root)

    if target.exists():
        try:
            target.unlink()
        except OSError as e:
            raise ConfigFileError(f"Failed to delete existing {ARTIFACT_NAME}: {e}") from e

    try:
        target.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise ConfigFileError(f"Failed to create directory for {ARTIFACT_NAME}: {e}") from e

    logger.debug(f"Creating {ARTIFACT_NAME} at '{target}'")
    try:
        target.write_bytes(payload)
    except OSError as e:
        raise ConfigFileError(f"Failed to write {ARTIFACT_NAME} content to {target}: {e}") from e

    return target


def read_artifact_payload(source: Path | None) -> bytes:
    """Read the packaged resolver jar.

    Raises:
        ConfigValidationError: If no jar location is configured
        ConfigFileError: If the jar cannot be read
    """
    if source is None:
        raise ConfigValidationError(f"{ARTIFACT_NAME} not found. Required for effective configuration creation.")
    try:
        return Path(source).read_bytes()
    except OSError as e:
        raise ConfigFileError(f"Failed to read {ARTIFACT_NAME} from {source}: {e}") from e


@contextmanager
def provisioned_artifact(scratch_root: Path, payload: bytes) -> Iterator[Path]:
    """Provision the resolver jar for the duration of a ``with`` block.

    The jar is deleted when the block exits, whatever the outcome. A failed
    deletion is only logged.
    """
    path = provision_artifact(scratch_root, payload)
    try:
        yield path
    finally:
        try:
            path.unlink()
        except OSError as e:
            logger.warning(f"Failed to delete {ARTIFACT_NAME}: {e}")
