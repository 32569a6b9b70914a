"""Execute acme.sh as a subprocess and capture its output."""

from __future__ import annotations

import asyncio
import logging
import os
import time
from collections.abc import Sequence

from acmesh.config import ClientConfig
from acmesh.constants import DEFAULT_STREAM_LIMIT

logger = logging.getLogger("acmesh.runner")


class ProcessError(RuntimeError):
    """Raised when acme.sh cannot be started, times out, or exits non-zero."""

    def __init__(
        self,
        message: str,
        *,
        returncode: int | None = None,
        stdout_lines: Sequence[str] = (),
        stderr_lines: Sequence[str] = (),
    ) -> None:
        super().__init__(message)
        self.returncode = returncode
        self.stdout_lines = list(stdout_lines)
        self.stderr_lines = list(stderr_lines)


class ProcessRunner:
    """Run one acme.sh invocation per call; no state is kept between calls."""

    def __init__(self, config: ClientConfig):
        self.config = config

    async def run(self, args: Sequence[str]) -> list[str]:
        """Return the stdout lines of a zero-exit run.

        Raises ``ProcessError`` for every other outcome. Cancelling the awaiting
        task kills the subprocess and re-raises ``asyncio.CancelledError``.
        """

        command = [*self.config.executable, *args]
        cwd = str(self.config.working_dir) if self.config.working_dir else None
        env = os.environ.copy()
        env.update(self.config.env)

        logger.debug("Executing acme.sh command: %s", " ".join(command))
        start_time = time.monotonic()

        try:
            process = await asyncio.create_subprocess_exec(
                *command,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                cwd=cwd,
                limit=DEFAULT_STREAM_LIMIT,
                env=env,
            )
        except FileNotFoundError as exc:
            message = f"Executable not found: {command[0]}"
            raise ProcessError(message, stderr_lines=[message]) from exc
        except OSError as exc:
            message = f"Unable to start {command[0]}: {exc}"
            raise ProcessError(message, stderr_lines=[message]) from exc

        try:
            stdout_bytes, stderr_bytes = await asyncio.wait_for(
                process.communicate(),
                timeout=self.config.timeout_seconds,
            )
        except asyncio.TimeoutError as exc:
            await self._terminate(process)
            message = f"acme.sh timed out after {self.config.timeout_seconds} seconds"
            logger.warning(message)
            raise ProcessError(message, stderr_lines=[message]) from exc
        except asyncio.CancelledError:
            logger.debug("acme.sh run cancelled; killing process")
            await self._terminate(process)
            raise

        duration = time.monotonic() - start_time
        stdout_lines = stdout_bytes.decode("utf-8", errors="replace").splitlines()
        stderr_lines = stderr_bytes.decode("utf-8", errors="replace").splitlines()
        logger.debug("acme.sh exited with %s after %.2fs", process.returncode, duration)

        if process.returncode != 0:
            logger.warning("acme.sh %s exited with status %s", args[0] if args else "", process.returncode)
            raise ProcessError(
                f"acme.sh exited with status {process.returncode}",
                returncode=process.returncode,
                stdout_lines=stdout_lines,
                stderr_lines=stderr_lines,
            )

        if stderr_lines:
            logger.debug("acme.sh wrote %d stderr line(s) on a successful run", len(stderr_lines))
        return stdout_lines

    async def _terminate(self, process: asyncio.subprocess.Process) -> None:
        try:
            process.kill()
        except ProcessLookupError:
            return
        await process.communicate()
