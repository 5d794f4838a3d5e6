"""Long-running git-annex --batch processes.

Contains:
- BatchCommand: A request/response conversation with `git annex <cmd> --batch`

Keeping one git-annex process running avoids paying its startup cost for
every query. Each line written produces exactly one reply line, so callers
always read the reply before sending the next request.
"""

import logging
import subprocess
from pathlib import Path
from typing import Iterable, Optional

from annex2annex.annex.commands import AnnexCommand
from annex2annex.annex.exceptions import ProtocolError, SpawnError

logger = logging.getLogger(__name__)


class BatchCommand:
    """A git-annex subcommand running with --batch in a repository.

    Use Store.batch() rather than constructing this directly:

        with store.batch(AnnexCommand.FIND, "--unlocked") as find:
            if find.ask("foo/bar"):
                print("foo/bar is unlocked")

    A running batch process may hold a stale view of the git-annex branch;
    call restart() after changing it.
    """

    def __init__(self, repo_root: Path, command: AnnexCommand, *args: str) -> None:
        self.repo_root = Path(repo_root)
        self.command = command
        args = list(args)
        if "--batch" not in args:
            args.insert(0, "--batch")
        self.args = args
        self._process: Optional[subprocess.Popen] = None
        self._spawn()

    def _argv(self) -> list[str]:
        return ["git", "-C", str(self.repo_root), "annex", self.command.value] + self.args

    def _spawn(self) -> None:
        argv = self._argv()
        try:
            self._process = subprocess.Popen(
                argv,
                stdin=subprocess.PIPE,
                stdout=subprocess.PIPE,
                text=True,
                bufsize=1,
            )
        except OSError as e:
            raise SpawnError(f"Could not start {' '.join(argv)}: {e}")
        logger.debug("spawned %s (pid %d)", " ".join(argv), self._process.pid)

    def _despawn(self) -> None:
        process, self._process = self._process, None
        if process is None:
            return
        for stream in (process.stdin, process.stdout):
            try:
                stream.close()
            except OSError:
                # The child may already have gone away with unflushed input
                pass
        if process.poll() is None:
            process.terminate()
        process.wait()
        logger.debug("reaped %s (pid %d)", self.command.value, process.pid)

    @property
    def running(self) -> bool:
        """Whether the child process is alive."""
        return self._process is not None and self._process.poll() is None

    def ask(self, line: str) -> str:
        """Send one line of input and return git-annex's reply.

        Args:
            line: The request. A trailing newline is optional.

        Returns:
            The reply line without its line break.

        Raises:
            ProtocolError: If the process has exited or closed its output.
        """
        if self._process is None:
            raise ProtocolError(f"git annex {self.command.value} --batch is closed")
        line = line.rstrip("\n")
        if "\n" in line:
            raise ValueError(f"batch request must be a single line: {line!r}")
        try:
            self._process.stdin.write(line + "\n")
            self._process.stdin.flush()
            reply = self._process.stdout.readline()
        except (BrokenPipeError, ValueError, OSError) as e:
            raise ProtocolError(
                f"git annex {self.command.value} --batch went away: {e}"
            )
        if not reply.endswith("\n"):
            raise ProtocolError(
                f"git annex {self.command.value} --batch exited before replying to {line!r}"
            )
        return reply[:-1]

    def ask_many(self, lines: Iterable[str]) -> list[str]:
        """Send each line in turn and return the replies in the same order."""
        return [self.ask(line) for line in lines]

    def restart(self) -> None:
        """Kill and restart the batch process with the same arguments."""
        self._despawn()
        self._spawn()

    def close(self) -> None:
        """Terminate the batch process and release its pipes."""
        self._despawn()

    def __enter__(self) -> "BatchCommand":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __del__(self) -> None:
        try:
            self._despawn()
        except Exception:
            # Interpreter shutdown: nothing left to clean up with
            pass
