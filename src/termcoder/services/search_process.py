"""Invocation of the external ripgrep search process."""

import logging
import subprocess

from termcoder.tools.exceptions import CommandFailed

logger = logging.getLogger(__name__)

# ripgrep exits 1 when nothing matched; only 2 and above are failures.
_OK_EXIT_CODES = (0, 1)


class RipgrepRunner:
    """Runs ``rg`` once per call and returns its complete stdout."""

    def __init__(self, command: str = "rg", timeout: float = 30.0) -> None:
        self.command = command
        self.timeout = timeout

    def run(self, args: list[str], cwd: str) -> str:
        """Run ripgrep with ``args`` in ``cwd``.

        Raises:
            CommandFailed: If the executable is missing, times out, or exits
                with an error status.
        """
        logger.debug("Running %s %s in %s", self.command, " ".join(args), cwd)
        try:
            result = subprocess.run(
                [self.command, *args],
                cwd=cwd,
                capture_output=True,
                timeout=self.timeout,
            )
        except FileNotFoundError as e:
            raise CommandFailed(
                self.command, args, f"executable not found: {self.command}"
            ) from e
        except subprocess.TimeoutExpired as e:
            raise CommandFailed(
                self.command, args, f"timed out after {self.timeout} seconds"
            ) from e
        except OSError as e:
            raise CommandFailed(self.command, args, str(e)) from e

        if result.returncode not in _OK_EXIT_CODES:
            stderr = result.stderr.decode("utf-8", errors="replace").strip()
            raise CommandFailed(
                self.command,
                args,
                stderr or f"exited with status {result.returncode}",
            )

        return result.stdout.decode("utf-8", errors="replace")
