"""qodana-config: Effective configuration resolution for Qodana runs.

This library turns a project's qodana.yaml, plus any global configuration
it is attached to, into the effective configuration used by an analysis:
- The resolver jar is written to a scratch directory and run once per pass
- Its output files are checked for coherence
- The effective ide/linter must also be declared in the root qodana.yaml

For full-history runs the same pass is repeated for each commit, with the
working tree checked out, cleaned and restored around every pass.

Public API:
    ConfigResolverClient: Runs one resolution pass
    ResolverPaths: Dataclass defining scratch, runtime and artifact locations
    LayeredConfig: Result of a resolution pass
    RevisionWalker: Checks out successive revisions with guaranteed restore
    resolve_history: Resolution + analysis for every commit
    ConfigError, ResolutionFailed, IdentityMismatchError, ...: Exception types

Example:
    ```python
    from pathlib import Path
    from qodana_config import ConfigResolverClient, ResolverPaths, ResolutionFailed

    paths = ResolverPaths.from_environment()
    client = ConfigResolverClient(paths)

    try:
        config = client.resolve(Path("."))
    except ResolutionFailed as e:
        raise SystemExit(e.exit_code)

    print(config.effective_path)
    ```
"""

from .client import ConfigResolverClient
from .exceptions import ConfigError
from .exceptions import ConfigFileError
from .exceptions import ConfigValidationError
from .exceptions import GitError
from .exceptions import IdentityMismatchError
from .exceptions import OutputSetError
from .exceptions import ResolutionFailed
from .git import RevisionWalker
from .history import resolve_history
from .invocation import build_resolver_args
from .models import Identity
from .models import LayeredConfig
from .models import ResolverOutput
from .models import ResolverPaths
from .resolver import ConfigResolver
from .resolver import SubprocessConfigResolver
from .verify import verify_identity_matches_local

__version__ = "0.1.0"

__all__ = [
    "ConfigResolverClient",
    "ConfigResolver",
    "SubprocessConfigResolver",
    "ResolverPaths",
    "ResolverOutput",
    "LayeredConfig",
    "Identity",
    "RevisionWalker",
    "resolve_history",
    "build_resolver_args",
    "verify_identity_matches_local",
    "ConfigError",
    "ConfigFileError",
    "ConfigValidationError",
    "OutputSetError",
    "IdentityMismatchError",
    "ResolutionFailed",
    "GitError",
]
