from __future__ import annotations

import logging
import subprocess
import threading
from collections.abc import Mapping, Sequence
from typing import IO

from mdata_client.errors import LaunchError
from mdata_client.runner.interfaces import CommandInvocation, CommandResult, CommandRunner, Sink

logger = logging.getLogger(__name__)


def _strip_eol(line: str) -> str:
    return line.rstrip("\r\n")


def _forward_stderr(stream: IO[str], sink: Sink) -> None:
    # Keep reading after a failing sink so the child never blocks on a full pipe.
    for raw in stream:
        try:
            sink(_strip_eol(raw))
        except Exception:
            logger.exception("stderr sink failed")


class SubprocessCommandRunner(CommandRunner):
    """Run commands with :mod:`subprocess`, one child process per call.

    An exception from ``stdout_sink`` kills the child and propagates to the
    caller. Exceptions from ``stderr_sink`` are logged and the stderr drain
    continues.
    """

    def __init__(
        self,
        *,
        env: Mapping[str, str] | None = None,
        encoding: str = "utf-8",
    ) -> None:
        self.env = dict(env) if env is not None else None
        self.encoding = encoding

    def invoke(
        self,
        binary: str,
        args: Sequence[str],
        stdout_sink: Sink,
        stderr_sink: Sink,
    ) -> CommandResult:
        invocation = CommandInvocation(binary=binary, args=tuple(args))
        logger.debug("executing: %r", invocation.argv)
        try:
            proc = subprocess.Popen(
                invocation.argv,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                encoding=self.encoding,
                errors="replace",
                env=self.env,
            )
        except (OSError, ValueError) as exc:
            # ValueError: arguments Popen refuses, e.g. an embedded null byte.
            logger.debug("cmd (%r) could not be launched (error=%r)", invocation.argv, exc)
            reason = exc.strerror if isinstance(exc, OSError) and exc.strerror else str(exc)
            raise LaunchError(binary, reason) from exc

        lines: list[str] = []
        with proc:
            assert proc.stdout is not None
            assert proc.stderr is not None
            stderr_thread = threading.Thread(
                target=_forward_stderr,
                args=(proc.stderr, stderr_sink),
                name=f"stderr:{binary}",
                daemon=True,
            )
            stderr_thread.start()
            try:
                for raw in proc.stdout:
                    line = _strip_eol(raw)
                    lines.append(line)
                    stdout_sink(line)
            except BaseException:
                proc.kill()
                raise
            finally:
                stderr_thread.join()
            exit_code = proc.wait()

        logger.debug("cmd (%r) exited with %d (%d stdout lines)", invocation.argv, exit_code, len(lines))
        return CommandResult(exit_code=exit_code, stdout=tuple(lines))


__all__ = ["SubprocessCommandRunner"]
