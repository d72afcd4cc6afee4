"""Data models for qodana-config."""

import os
import shutil
from dataclasses import dataclass
from dataclasses import field
from pathlib import Path

from .exceptions import OutputSetError

LOCAL_CONFIG_NAME = "qodana.yaml"
LOCAL_CONFIG_ALT_NAME = "qodana.yml"
EFFECTIVE_CONFIG_NAME = "effective.qodana.yaml"
RESOLVER_STATE_NAME = "qodana-config.json"
ARTIFACT_NAME = "config-loader-cli.jar"
DEFAULT_OUTPUT_DIR_NAME = "effective-config"


@dataclass(frozen=True)
class Identity:
    """IDE and linter codes declared by one configuration layer.

    Either code may be empty. An identity with both codes empty places
    no constraint on the other layers.
    """

    ide: str = ""
    linter: str = ""

    @property
    def is_empty(self) -> bool:
        return not self.ide and not self.linter


@dataclass(frozen=True)
class ResolverOutput:
    """Files found in the resolver output directory after one run.

    Presence is decided by existence on disk only; contents are not read.
    """

    config_dir: Path
    effective: Path | None = None
    local_echo: Path | None = None
    resolver_state: Path | None = None

    @classmethod
    def discover(cls, config_dir: Path) -> "ResolverOutput":
        """Collect whichever of the expected output files exist in ``config_dir``."""

        def existing(name: str) -> Path | None:
            path = config_dir / name
            return path if path.is_file() else None

        return cls(
            config_dir=config_dir,
            effective=existing(EFFECTIVE_CONFIG_NAME),
            local_echo=existing(LOCAL_CONFIG_NAME),
            resolver_state=existing(RESOLVER_STATE_NAME),
        )


@dataclass(frozen=True)
class LayeredConfig:
    """Resolved configuration produced by one resolver pass.

    Attributes:
        config_dir: Absolute resolver output directory for this pass
        effective_path: Merged configuration (None if the resolver wrote none)
        local_echo_path: Resolver copy of the local configuration
        resolver_state_path: Resolver-internal JSON state
        effective_identity: ide/linter declared by the effective configuration

    Raises:
        OutputSetError: If the set of present files is incoherent
    """

    config_dir: Path
    effective_path: Path | None = None
    local_echo_path: Path | None = None
    resolver_state_path: Path | None = None
    effective_identity: Identity = field(default_factory=Identity)

    def __post_init__(self):
        if self.effective_path is not None and self.resolver_state_path is None:
            raise OutputSetError(f"{EFFECTIVE_CONFIG_NAME} file doesn't have a {RESOLVER_STATE_NAME} file.")
        if self.local_echo_path is not None and self.effective_path is None:
            raise OutputSetError(f"Local {LOCAL_CONFIG_NAME} file doesn't have an {EFFECTIVE_CONFIG_NAME} file.")
        if self.effective_path is None and not self.effective_identity.is_empty:
            raise OutputSetError("Effective identity given without an effective configuration file.")

    @classmethod
    def from_output(cls, output: ResolverOutput, identity: Identity | None = None) -> "LayeredConfig":
        return cls(
            config_dir=output.config_dir,
            effective_path=output.effective,
            local_echo_path=output.local_echo,
            resolver_state_path=output.resolver_state,
            effective_identity=identity or Identity(),
        )


@dataclass(frozen=True)
class ResolverPaths:
    """Locations used by a resolution pass.

    Applications inject these paths to define where scratch files, the
    resolver artifact and the Java runtime live.

    Attributes:
        scratch_root: Process-owned writable directory (system dir)
        artifact_source: Packaged resolver jar copied into the scratch root
        runtime: Java launcher executable (None when no runtime was found)
        log_dir: Directory receiving subprocess logs (None disables them)
        output_dir_name: Subdirectory of scratch_root receiving resolver output
    """

    scratch_root: Path
    artifact_source: Path | None = None
    runtime: Path | None = None
    log_dir: Path | None = None
    output_dir_name: str = DEFAULT_OUTPUT_DIR_NAME

    @property
    def output_dir(self) -> Path:
        return self.scratch_root / self.output_dir_name

    @classmethod
    def from_environment(cls, scratch_root: Path | None = None) -> "ResolverPaths":
        """Build paths from QODANA_* and JAVA_HOME environment variables."""
        system_dir = os.environ.get("QODANA_SYSTEM_DIR")
        if scratch_root is None:
            scratch_root = Path(system_dir) if system_dir else Path.home() / ".qodana" / "system"

        jar = os.environ.get("QODANA_CONFIG_LOADER_JAR")
        log_dir = os.environ.get("QODANA_LOG_DIR")
        return cls(
            scratch_root=scratch_root,
            artifact_source=Path(jar) if jar else None,
            runtime=_find_java(),
            log_dir=Path(log_dir) if log_dir else None,
        )


def _find_java() -> Path | None:
    java_home = os.environ.get("JAVA_HOME")
    if java_home:
        candidate = Path(java_home) / "bin" / ("java.exe" if os.name == "nt" else "java")
        if candidate.exists():
            return candidate
    found = shutil.which("java")
    return Path(found) if found else None
