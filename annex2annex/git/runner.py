"""Git command runner and repository utilities.

Contains:
- _run_git_command: Run a git command and return its output
- _probe_git_command: Run a git command whose failure is an expected answer
- get_toplevel: Get the work tree root containing a path, if any
"""

import logging
import subprocess
from pathlib import Path
from typing import Optional, Union

from annex2annex.git.exceptions import GitError

logger = logging.getLogger(__name__)


def _run_git_command(
    args: list[str],
    cwd: Optional[Union[str, Path]] = None,
    strip: bool = True,
) -> str:
    """Run a git command and return its output.

    Args:
        args: List of arguments to pass to git.
        cwd: Directory to run git in. Defaults to the process cwd.
        strip: Strip surrounding whitespace from the output. Disable when
            leading indentation of the first line is significant.

    Returns:
        The stdout of the git command.

    Raises:
        GitError: If the command fails.
    """
    logger.debug("running git %s (in %s)", " ".join(args), cwd or ".")
    try:
        result = subprocess.run(
            ["git"] + args,
            capture_output=True,
            text=True,
            check=True,
            cwd=cwd,
        )
    except subprocess.CalledProcessError as e:
        raise GitError(f"Git command failed: git {' '.join(args)}\n{(e.stderr or '').strip()}")
    except FileNotFoundError:
        raise GitError("Git is not installed or not in PATH.")
    if strip:
        return result.stdout.strip()
    return result.stdout.rstrip("\n")


def _probe_git_command(
    args: list[str],
    cwd: Optional[Union[str, Path]] = None,
) -> Optional[str]:
    """Run a git command for which a nonzero exit is an expected answer.

    Stdout and the exit status come from the same invocation.

    Args:
        args: List of arguments to pass to git.
        cwd: Directory to run git in.

    Returns:
        The stripped stdout on success, None if git exited nonzero.

    Raises:
        GitError: If git itself cannot be executed.
    """
    logger.debug("probing git %s (in %s)", " ".join(args), cwd or ".")
    try:
        result = subprocess.run(
            ["git"] + args,
            capture_output=True,
            text=True,
            cwd=cwd,
        )
    except FileNotFoundError:
        raise GitError("Git is not installed or not in PATH.")
    except NotADirectoryError:
        return None
    if result.returncode != 0:
        return None
    return result.stdout.strip()


def get_toplevel(path: Union[str, Path]) -> Optional[Path]:
    """Get the root of the work tree containing path.

    Args:
        path: A directory that may lie inside a git work tree.

    Returns:
        Path to the work tree root, or None if path is not inside one.
    """
    path = Path(path)
    if not path.is_dir():
        return None
    root = _probe_git_command(["rev-parse", "--show-toplevel"], cwd=path)
    if not root:
        return None
    return Path(root)
