"""Thin git helpers and per-revision traversal of a working tree."""

import logging
from collections.abc import Callable
from collections.abc import Iterator
from collections.abc import Sequence
from contextlib import contextmanager
from pathlib import Path
from typing import TypeVar

from .exceptions import GitError
from .process import run_command

logger = logging.getLogger(__name__)

T = TypeVar("T")


def run_git(cwd: Path | str, args: Sequence[str], log_dir: Path | None = None) -> str:
    """Run ``git <args>`` in ``cwd`` and return its stdout.

    Raises:
        GitError: If git cannot be started or exits with a nonzero code
    """
    cmd = ["git", *args]
    try:
        result = run_command(cmd, cwd=cwd, log_dir=log_dir, log_name="git")
    except OSError as e:
        raise GitError(cmd, None, str(e)) from e

    if result.stderr:
        logger.debug(f"git {' '.join(args)}: {result.stderr.strip()}")
    if result.returncode != 0:
        logger.error(f"Error executing git command {' '.join(cmd)}: exit code {result.returncode}")
        raise GitError(cmd, result.returncode, result.stderr)
    return result.stdout


def reset(cwd: Path | str, revision: str, log_dir: Path | None = None) -> None:
    """Move HEAD to ``revision`` leaving the working tree untouched."""
    run_git(cwd, ["reset", "--soft", revision], log_dir)


def reset_back(cwd: Path | str, log_dir: Path | None = None) -> None:
    """Undo the preceding :func:`reset` by returning HEAD to its previous position."""
    run_git(cwd, ["reset", "HEAD@{1}"], log_dir)


def checkout(cwd: Path | str, ref: str, force: bool = False, log_dir: Path | None = None) -> None:
    """Check out ``ref``.

    Without ``force`` git refuses to overwrite local modifications; with it
    they are discarded.
    """
    args = ["checkout", "-f", ref] if force else ["checkout", ref]
    run_git(cwd, args, log_dir)


def clean(cwd: Path | str, log_dir: Path | None = None) -> None:
    """Remove untracked and ignored files."""
    run_git(cwd, ["clean", "-fdx"], log_dir)


def is_dirty(cwd: Path | str, log_dir: Path | None = None) -> bool:
    """Return True if the working tree has modified, staged or untracked files."""
    return bool(run_git(cwd, ["status", "--porcelain"], log_dir).strip())


def log(cwd: Path | str, fmt: str = "%H", log_dir: Path | None = None) -> list[str]:
    """Return ``git log`` lines in git's natural newest-first order."""
    stdout = run_git(cwd, ["log", f"--pretty=format:{fmt}"], log_dir)
    return [line.strip() for line in stdout.splitlines() if line.strip()]


def revisions(cwd: Path | str, log_dir: Path | None = None) -> list[str]:
    """Return all commit hashes reachable from HEAD, oldest first."""
    return list(reversed(log(cwd, "%H", log_dir)))


def revisions_from(cwd: Path | str, start: str, log_dir: Path | None = None) -> list[str]:
    """Return commit hashes from ``start`` up to HEAD, oldest first.

    Raises:
        GitError: If ``start`` does not name a commit in the history of HEAD
    """
    require_revisions(cwd, [start], log_dir)
    start_hash = run_git(cwd, ["rev-parse", f"{start}^{{commit}}"], log_dir).strip()
    history = revisions(cwd, log_dir)
    if start_hash not in history:
        raise GitError(["git", "log"], None, f"revision {start} is not an ancestor of HEAD")
    return history[history.index(start_hash) :]


def root(cwd: Path | str, log_dir: Path | None = None) -> Path:
    """Return the absolute path of the repository root."""
    return Path(run_git(cwd, ["rev-parse", "--show-toplevel"], log_dir).strip())


def remote_url(cwd: Path | str, log_dir: Path | None = None) -> str:
    return run_git(cwd, ["remote", "get-url", "origin"], log_dir).strip()


def branch(cwd: Path | str, log_dir: Path | None = None) -> str:
    """Return the current branch name (``HEAD`` when detached)."""
    return run_git(cwd, ["rev-parse", "--abbrev-ref", "HEAD"], log_dir).strip()


def current_revision(cwd: Path | str, log_dir: Path | None = None) -> str:
    return run_git(cwd, ["rev-parse", "HEAD"], log_dir).strip()


def revision_exists(cwd: Path | str, revision: str, log_dir: Path | None = None) -> bool:
    """Return True if ``revision`` names an existing commit."""
    cmd = ["git", "show", "--no-patch", revision]
    try:
        result = run_command(cmd, cwd=cwd, log_dir=log_dir, log_name="git")
    except OSError:
        return False
    stderr = result.stderr or ""
    if result.returncode != 0 or "fatal:" in stderr or revision in stderr:
        return False
    return True


def require_revisions(cwd: Path | str, revs: Sequence[str], log_dir: Path | None = None) -> None:
    """Fail fast if any of ``revs`` does not exist.

    Raises:
        GitError: Naming the first missing revision
    """
    for rev in revs:
        if rev and not revision_exists(cwd, rev, log_dir):
            raise GitError(["git", "show", "--no-patch", rev], None, f"revision {rev} does not exist")


class RevisionWalker:
    """Runs work against successive revisions of one working tree.

    The working tree is shared mutable state, so every mutation made here
    is paired with a restore that runs before control leaves the walker,
    including when the work raises.

    Args:
        cwd: Repository working tree
        log_dir: Directory receiving ``git.log`` (optional)
    """

    def __init__(self, cwd: Path | str, log_dir: Path | None = None):
        self.cwd = Path(cwd)
        self.log_dir = log_dir

    def original_ref(self) -> str:
        """Return the ref to come back to: the branch, or the commit when detached."""
        name = branch(self.cwd, self.log_dir)
        if name == "HEAD":
            return current_revision(self.cwd, self.log_dir)
        return name

    @contextmanager
    def staged_reset(self, revision: str) -> Iterator[str]:
        """Soft-reset HEAD to ``revision`` for the duration of a ``with`` block.

        Files in the working tree are untouched, so the changes since
        ``revision`` appear as local changes. HEAD is moved back on exit.
        """
        require_revisions(self.cwd, [revision], self.log_dir)
        reset(self.cwd, revision, self.log_dir)
        logger.info(f"Reset {self.cwd} to {revision}")
        try:
            yield revision
        except BaseException as e:
            self._restore(lambda: reset_back(self.cwd, self.log_dir), f"after reset to {revision}", e)
            raise
        self._restore(lambda: reset_back(self.cwd, self.log_dir), f"after reset to {revision}")

    @contextmanager
    def checked_out(self, revision: str, restore_to: str) -> Iterator[str]:
        """Force-check out and clean ``revision``, restoring ``restore_to`` on exit.

        Restoring also cleans the tree, so files produced for ``revision``
        do not outlive it.
        """

        def restore():
            checkout(self.cwd, restore_to, force=True, log_dir=self.log_dir)
            clean(self.cwd, self.log_dir)

        try:
            checkout(self.cwd, revision, force=True, log_dir=self.log_dir)
            clean(self.cwd, self.log_dir)
            logger.info(f"Checked out {revision}")
            yield revision
        except BaseException as e:
            self._restore(restore, f"to {restore_to}", e)
            raise
        self._restore(restore, f"to {restore_to}")

    def _restore(self, action: Callable[[], None], description: str, cause: BaseException | None = None) -> None:
        """Run a restoring git action.

        When the restore fails while another error is propagating, the git
        error is raised with that error as its cause.
        """
        try:
            action()
        except GitError as restore_error:
            logger.error(f"Failed to restore {self.cwd} {description}: {restore_error}")
            if cause is not None:
                raise restore_error from cause
            raise
        logger.info(f"Restored {self.cwd} {description}")

    def walk(self, revs: Sequence[str], work: Callable[[str], T]) -> list[T]:
        """Run ``work`` once per revision, oldest first.

        The working tree must have no local changes; the walk refuses to
        start otherwise. Each revision is force-checked out and cleaned before
        ``work`` runs, and the original ref is checked out again afterwards.
        An exception from ``work`` or from git stops the walk after the tree
        is restored.

        Args:
            revs: Revisions to visit, in order
            work: Called with each revision; typically resolves the
                configuration and runs the analysis

        Returns:
            Results of ``work`` in revision order

        Raises:
            GitError: If the working tree has local changes, or a git
                command fails
        """
        if is_dirty(self.cwd, self.log_dir):
            raise GitError(
                ["git", "status", "--porcelain"],
                None,
                f"working tree {self.cwd} has local changes; commit or stash them before traversing history",
            )
        restore_to = self.original_ref()
        results = []
        for rev in revs:
            with self.checked_out(rev, restore_to):
                results.append(work(rev))
        return results
