"""
Upstream change detection for the local working copy.

Answers "what changed on origin/main since my checkout?" by shelling out to
git. The only mutation is `git fetch`, which updates remote-tracking refs and
never touches the local branch or working tree.

compute_update_report() talks to git through four methods so it can be driven
by a fake in tests:

    fetch_remote_refs()
    count_ahead_commits(base, head) -> int
    diff_paths(base, head)          -> ChangedPaths
    format_log(base, head)          -> str

plus the `local_ref` and `remote_ref` attributes naming the two revisions.
"""

import logging
import os
import subprocess
from dataclasses import dataclass
from pathlib import Path

from ios_components.errors import GitCommandError

logger = logging.getLogger(__name__)

LOG_FORMAT = "%h %s (%an, %ar)"


@dataclass(frozen=True)
class ChangedPaths:
    added: tuple[str, ...] = ()
    modified: tuple[str, ...] = ()
    deleted: tuple[str, ...] = ()


@dataclass(frozen=True)
class UpdateReport:
    remote_ref: str
    commits_behind: int
    new_files: tuple[str, ...] = ()
    modified_files: tuple[str, ...] = ()
    deleted_files: tuple[str, ...] = ()
    other_files: tuple[str, ...] = ()
    commit_log: str = ""


@dataclass(frozen=True)
class NoUpdates:
    remote_ref: str
    reason: str = ""


@dataclass(frozen=True)
class FetchFailed:
    remote_ref: str
    reason: str = ""


class GitRepository:
    """Thin wrapper over the git CLI for one working copy."""

    def __init__(self, root: Path, remote: str = "origin", branch: str = "main",
                 local_ref: str | None = None, timeout: float = 10.0):
        self.root = Path(root)
        self.remote = remote
        self.branch = branch
        self.local_ref = local_ref or branch
        self.timeout = timeout

    @property
    def remote_ref(self) -> str:
        return f"{self.remote}/{self.branch}"

    def _run(self, *args: str) -> str:
        cmd = ["git", *args]
        # Never block on a credential prompt.
        env = {**os.environ, "GIT_TERMINAL_PROMPT": "0"}
        try:
            out = subprocess.run(
                cmd,
                cwd=str(self.root),
                capture_output=True,
                text=True,
                timeout=self.timeout,
                env=env,
            )
        except FileNotFoundError as e:
            raise GitCommandError(list(args), f"git not available ({e})") from e
        except subprocess.TimeoutExpired as e:
            raise GitCommandError(list(args), f"timed out after {self.timeout:g}s") from e
        except OSError as e:
            raise GitCommandError(list(args), str(e)) from e
        if out.returncode != 0:
            message = (out.stderr or out.stdout or "").strip() or f"exit code {out.returncode}"
            raise GitCommandError(list(args), message)
        return out.stdout

    def fetch_remote_refs(self) -> None:
        self._run("fetch", "--quiet", self.remote, self.branch)

    def count_ahead_commits(self, base: str, head: str) -> int:
        """Number of commits reachable from `head` but not from `base`."""
        return int(self._run("rev-list", "--count", f"{base}..{head}").strip())

    def diff_paths(self, base: str, head: str) -> ChangedPaths:
        """Paths added, modified and deleted on `head` since it forked from `base`.

        Renames are reported as a delete plus an add.
        """
        out = self._run("diff", "--name-status", "--no-renames", "-z", f"{base}...{head}")
        return parse_name_status(out)

    def format_log(self, base: str, head: str) -> str:
        out = self._run("log", f"--format={LOG_FORMAT}", f"{base}..{head}")
        return out.strip()


def parse_name_status(output: str) -> ChangedPaths:
    """Parse `git diff --name-status -z` output into added/modified/deleted paths."""
    added, modified, deleted = [], [], []
    tokens = output.split("\0")
    i = 0
    while i + 1 < len(tokens):
        status, path = tokens[i].strip(), tokens[i + 1]
        i += 2
        if not status or not path:
            continue
        kind = status[0]
        if kind == "A":
            added.append(path)
        elif kind == "D":
            deleted.append(path)
        else:
            modified.append(path)
    return ChangedPaths(tuple(added), tuple(modified), tuple(deleted))


def split_by_prefix(paths, prefixes) -> tuple[tuple[str, ...], tuple[str, ...]]:
    """Split paths into (under one of `prefixes`, everything else)."""
    interesting, other = [], []
    for p in paths:
        (interesting if any(p.startswith(prefix) for prefix in prefixes) else other).append(p)
    return tuple(interesting), tuple(other)


def compute_update_report(git, watch_prefixes) -> UpdateReport | NoUpdates | FetchFailed:
    """Fetch the remote branch and describe what it has that the local branch lacks.

    Only a failed fetch ends the check early. Each later step that fails
    degrades to zero or empty output so the report is always best-effort.
    """
    base, head = git.local_ref, git.remote_ref

    try:
        git.fetch_remote_refs()
    except GitCommandError as e:
        logger.warning("[vcs] fetch failed: %s", e)
        return FetchFailed(head, e.message)

    try:
        behind = git.count_ahead_commits(base, head)
    except (GitCommandError, ValueError) as e:
        logger.warning("[vcs] could not count commits behind %s: %s", head, e)
        reason = e.message if isinstance(e, GitCommandError) else f"unexpected output: {e}"
        return NoUpdates(head, reason)
    if behind <= 0:
        return NoUpdates(head)

    try:
        changed = git.diff_paths(base, head)
    except GitCommandError as e:
        logger.warning("[vcs] diff %s...%s failed: %s", base, head, e)
        changed = ChangedPaths()

    try:
        log = git.format_log(base, head)
    except GitCommandError as e:
        logger.warning("[vcs] log %s..%s failed: %s", base, head, e)
        log = ""

    new_files, other_added = split_by_prefix(changed.added, watch_prefixes)
    modified_files, other_modified = split_by_prefix(changed.modified, watch_prefixes)
    deleted_files, other_deleted = split_by_prefix(changed.deleted, watch_prefixes)

    return UpdateReport(
        remote_ref=head,
        commits_behind=behind,
        new_files=new_files,
        modified_files=modified_files,
        deleted_files=deleted_files,
        other_files=other_added + other_modified + other_deleted,
        commit_log=log,
    )


def _file_line(label: str, paths) -> str:
    return f"{label} ({len(paths)}): {', '.join(paths)}"


def render_update_report(result: UpdateReport | NoUpdates | FetchFailed) -> str:
    if isinstance(result, FetchFailed):
        reason = f" ({result.reason})" if result.reason else ""
        return (
            f"Could not fetch {result.remote_ref}{reason}. "
            "Check your network connection and try again."
        )
    if isinstance(result, NoUpdates):
        if result.reason:
            return f"Could not count commits behind {result.remote_ref} ({result.reason}). No update report available."
        return f"Already up to date with {result.remote_ref}."

    lines = [f"{result.commits_behind} new commit(s) available on {result.remote_ref}.", ""]
    if result.new_files:
        lines.append(_file_line("New", result.new_files))
    if result.modified_files:
        lines.append(_file_line("Modified", result.modified_files))
    if result.deleted_files:
        lines.append(_file_line("Deleted", result.deleted_files))
    if not (result.new_files or result.modified_files or result.deleted_files) and result.other_files:
        lines.append(_file_line("Changed files", result.other_files))
    if lines[-1]:
        lines.append("")
    lines.append("Commits:")
    lines.append(result.commit_log or "(commit log unavailable)")
    return "\n".join(lines)
