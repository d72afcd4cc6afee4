"""Shared fixtures for qodana-config tests."""

import shutil
import subprocess
from collections.abc import Sequence
from pathlib import Path
from tempfile import TemporaryDirectory

import pytest
from qodana_config import ResolutionFailed
from qodana_config import ResolverOutput
from qodana_config import ResolverPaths


class FakeResolver:
    """Resolver double that writes canned files instead of running the jar.

    Args:
        files: Mapping of output file name to content
        exit_code: Nonzero to simulate a failing resolver
    """

    def __init__(self, files: dict[str, str] | None = None, exit_code: int = 0):
        self.files = files or {}
        self.exit_code = exit_code
        self.calls: list[list[str]] = []
        self.artifact_present: list[bool] = []

    def resolve(self, args: Sequence[str], output_dir: Path) -> ResolverOutput:
        self.calls.append(list(args))
        self.artifact_present.append(Path(args[2]).exists())
        if self.exit_code != 0:
            raise ResolutionFailed(self.exit_code)
        for name, content in self.files.items():
            (output_dir / name).write_text(content)
        return ResolverOutput.discover(output_dir)


def git(repo: Path, *args: str) -> str:
    result = subprocess.run(["git", *args], cwd=repo, capture_output=True, text=True, check=True)
    return result.stdout.strip()


def init_repo(repo: Path) -> None:
    git(repo, "init", "-b", "main")
    git(repo, "config", "user.email", "dev@example.com")
    git(repo, "config", "user.name", "Dev")
    git(repo, "config", "commit.gpgsign", "false")


def commit_file(repo: Path, name: str, content: str, message: str) -> str:
    (repo / name).write_text(content)
    git(repo, "add", "-A")
    git(repo, "commit", "-m", message)
    return git(repo, "rev-parse", "HEAD")


requires_git = pytest.mark.skipif(shutil.which("git") is None, reason="git is not installed")


@pytest.fixture
def scratch_root():
    """Create a temporary scratch directory."""
    with TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def project_dir():
    """Create a temporary project directory."""
    with TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def resolver_paths(scratch_root):
    """Create ResolverPaths pointing at the temp scratch root."""
    return ResolverPaths(scratch_root=scratch_root, runtime=Path("/opt/jre/bin/java"))


@pytest.fixture
def repo():
    """Create a git repository with three commits touching ``app.txt``."""
    with TemporaryDirectory() as tmpdir:
        path = Path(tmpdir)
        init_repo(path)
        shas = [commit_file(path, "app.txt", f"version {i}\n", f"commit {i}") for i in range(3)]
        yield path, shas
