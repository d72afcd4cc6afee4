"""Exceptions for qodana-config."""


class ConfigError(Exception):
    """Base exception for configuration errors."""

    pass


class ConfigFileError(ConfigError):
    """Error reading or writing configuration file."""

    pass


class ConfigValidationError(ConfigError):
    """Error validating configuration data."""

    pass


class OutputSetError(ConfigValidationError):
    """The resolver produced an incoherent set of output files."""

    pass


class IdentityMismatchError(ConfigValidationError):
    """Effective and local configurations declare different ide/linter.

    Attributes:
        field: Name of the first mismatched field ("ide" or "linter")
        effective: Value declared by the effective configuration
        local: Value declared by the local configuration
    """

    def __init__(self, field: str, effective: str, local: str):
        super().__init__(f"effective.qodana.yaml `{field}` doesn't match root qodana.yaml `{field}`")
        self.field = field
        self.effective = effective
        self.local = local


class ResolutionFailed(ConfigError):
    """The configuration resolver failed; no effective configuration exists.

    Attributes:
        exit_code: Exit code reported by the resolver process, passed through
            unchanged so the top-level command can exit with it
    """

    def __init__(self, exit_code: int, message: str | None = None):
        super().__init__(message or f"Configuration resolver exited with code {exit_code}")
        self.exit_code = exit_code


class GitError(ConfigError):
    """A git command failed.

    Attributes:
        command: Full argument vector that was executed
        returncode: Exit code of the git process (None if it never started)
        stderr: Captured standard error text
    """

    def __init__(self, command: list[str], returncode: int | None, stderr: str = ""):
        detail = stderr.strip() or f"exit code {returncode}"
        super().__init__(f"git command failed: {' '.join(command)}: {detail}")
        self.command = command
        self.returncode = returncode
        self.stderr = stderr
