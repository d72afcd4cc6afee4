"""Effective configuration resolution across git history."""

import logging
from collections.abc import Callable
from pathlib import Path
from typing import TypeVar

from .client import ConfigResolverClient
from .git import RevisionWalker
from .git import revisions
from .git import revisions_from
from .models import LayeredConfig

logger = logging.getLogger(__name__)

T = TypeVar("T")


def resolve_history(
    project_dir: Path,
    client: ConfigResolverClient,
    analyze: Callable[[str, LayeredConfig], T],
    start: str | None = None,
    local_config: str | Path | None = None,
    global_configs_file: str | Path | None = None,
    global_config_id: str | None = None,
) -> list[T]:
    """Resolve the configuration and run ``analyze`` for every commit.

    Commits are visited oldest first, beginning at ``start`` when given. The
    working tree is restored to its original ref before this returns or
    raises.

    Args:
        project_dir: Repository working tree
        client: Client used to resolve each revision's configuration
        analyze: Called with the revision and its resolved configuration
        start: First commit to visit (validated before traversal begins)
        local_config: Local qodana.yaml override
        global_configs_file: File listing global configurations
        global_config_id: Identifier of the global configuration to apply

    Returns:
        Results of ``analyze`` in revision order
    """
    log_dir = client.paths.log_dir
    if start:
        revs = revisions_from(project_dir, start, log_dir)
    else:
        revs = revisions(project_dir, log_dir)
    logger.info(f"Resolving configuration for {len(revs)} revisions of {project_dir}")

    def work(rev: str) -> T:
        config = client.resolve(project_dir, local_config, global_configs_file, global_config_id)
        return analyze(rev, config)

    return RevisionWalker(project_dir, log_dir).walk(revs, work)
