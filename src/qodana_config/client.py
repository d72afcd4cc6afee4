"""Effective configuration resolution."""

import logging
import shutil
from dataclasses import replace
from pathlib import Path

from .artifact import provisioned_artifact
from .artifact import read_artifact_payload
from .exceptions import ConfigFileError
from .invocation import build_resolver_args
from .messages import success_message
from .models import LayeredConfig
from .models import ResolverPaths
from .qdyaml import find_default_local_config
from .qdyaml import load_identity
from .qdyaml import local_config_full_path
from .resolver import ConfigResolver
from .resolver import SubprocessConfigResolver
from .verify import verify_identity_matches_local

logger = logging.getLogger(__name__)


class ConfigResolverClient:
    """Produces the effective configuration for a project.

    Each call to :meth:`resolve` is one self-contained pass: the resolver jar
    is written to the scratch root, the resolver runs into a fresh output
    directory, and the jar is deleted again before returning.

    Args:
        paths: Scratch, runtime and artifact locations
        resolver: Resolver backend (defaults to running the jar as a subprocess)
        artifact_payload: Jar contents; read from ``paths.artifact_source`` when omitted
    """

    def __init__(
        self,
        paths: ResolverPaths,
        resolver: ConfigResolver | None = None,
        artifact_payload: bytes | None = None,
    ):
        self.paths = paths
        self.resolver = resolver or SubprocessConfigResolver(log_dir=paths.log_dir)
        self._artifact_payload = artifact_payload

    def resolve(
        self,
        project_dir: Path,
        local_config: str | Path | None = None,
        global_configs_file: str | Path | None = None,
        global_config_id: str | None = None,
    ) -> LayeredConfig:
        """Resolve the effective configuration of ``project_dir``.

        Args:
            project_dir: Project root directory
            local_config: Local qodana.yaml, relative to the project or absolute
                (discovered in the project when omitted)
            global_configs_file: File listing global configurations
            global_config_id: Identifier of the global configuration to apply

        Returns:
            The resolved, verified configuration

        Raises:
            ResolutionFailed: If the resolver failed; carries its exit code
            OutputSetError: If the resolver output is incoherent
            IdentityMismatchError: If the local configuration lacks the
                effective ide/linter (diagnostics already printed)
            ConfigValidationError: If the runtime or artifact is missing
            ConfigFileError: On scratch directory I/O failures
        """
        project_dir = Path(project_dir)
        if not local_config:
            local_config = find_default_local_config(project_dir)
        local_config_path = local_config_full_path(project_dir, local_config)

        payload = self._artifact_payload
        if payload is None:
            payload = read_artifact_payload(self.paths.artifact_source)

        output_dir = self.paths.output_dir
        with provisioned_artifact(self.paths.scratch_root, payload) as artifact:
            args = build_resolver_args(
                self.paths.runtime,
                artifact,
                local_config_path,
                global_configs_file,
                global_config_id,
                output_dir,
            )
            self._prepare_output_dir(output_dir)
            logger.debug(f"Creating effective configuration in '{output_dir}' directory, args: {args}")
            output = self.resolver.resolve(args, output_dir)

        config = LayeredConfig.from_output(output)
        if config.effective_path is not None:
            config = replace(config, effective_identity=load_identity(config.effective_path))
        identity = config.effective_identity
        verify_identity_matches_local(config, str(local_config))

        success_message("Loaded Qodana Configuration")
        logger.info(
            f"Resolved effective configuration in {output_dir} "
            f"(ide='{identity.ide}', linter='{identity.linter}')"
        )
        return config

    @staticmethod
    def _prepare_output_dir(output_dir: Path) -> None:
        # Output from an earlier pass must not be mistaken for this one.
        try:
            if output_dir.exists():
                shutil.rmtree(output_dir)
            output_dir.mkdir(parents=True)
        except OSError as e:
            raise ConfigFileError(f"Failed to prepare effective configuration directory {output_dir}: {e}") from e
