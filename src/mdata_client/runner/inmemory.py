from __future__ import annotations

import logging
import os
import threading
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field

from mdata_client.app.settings import CommandNames
from mdata_client.errors import LaunchError
from mdata_client.runner.interfaces import CommandInvocation, CommandResult, CommandRunner, Sink

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_NOT_FOUND = 1
EXIT_USAGE = 2
EXIT_MISSING_VALUE = 2
EXIT_MISSING_KEY = 3


@dataclass
class MetadataState:
    entries: dict[str, str] = field(default_factory=dict)
    invocations: list[CommandInvocation] = field(default_factory=list)


class InMemoryCommandRunner(CommandRunner):
    """Emulates the mdata-* tools over an in-process key/value map.

    Exit codes and stderr messages mirror the real tools closely enough for
    the client's result mapping to be exercised without spawning processes.
    Binaries whose basename is not one of ``commands`` raise ``LaunchError``.
    """

    def __init__(
        self,
        *,
        entries: Mapping[str, str] | None = None,
        commands: CommandNames | None = None,
        state: MetadataState | None = None,
    ) -> None:
        self.state = state or MetadataState()
        if entries:
            self.state.entries.update(entries)
        self.commands = commands or CommandNames()
        self._lock = threading.Lock()
        self._handlers = {
            self.commands.list: self._list,
            self.commands.get: self._get,
            self.commands.put: self._put,
            self.commands.delete: self._delete,
        }

    @property
    def entries(self) -> dict[str, str]:
        return self.state.entries

    @property
    def invocations(self) -> list[CommandInvocation]:
        return self.state.invocations

    def invoke(
        self,
        binary: str,
        args: Sequence[str],
        stdout_sink: Sink,
        stderr_sink: Sink,
    ) -> CommandResult:
        invocation = CommandInvocation(binary=binary, args=tuple(args))
        handler = self._handlers.get(os.path.basename(binary))
        if handler is None:
            raise LaunchError(binary, "No such file or directory")
        with self._lock:
            self.state.invocations.append(invocation)
            exit_code, out, err = handler(invocation.args)
        for line in out:
            stdout_sink(line)
        for line in err:
            stderr_sink(line)
        logger.debug("emulated %r exited with %d", invocation.argv, exit_code)
        return CommandResult(exit_code=exit_code, stdout=tuple(out))

    def _list(self, args: tuple[str, ...]) -> tuple[int, list[str], list[str]]:
        return EXIT_OK, list(self.state.entries), []

    def _get(self, args: tuple[str, ...]) -> tuple[int, list[str], list[str]]:
        if not args:
            return EXIT_USAGE, [], [f"usage: {self.commands.get} <keyname>"]
        key = args[0]
        if key not in self.state.entries:
            return EXIT_NOT_FOUND, [], [f"No metadata for '{key}'"]
        return EXIT_OK, [self.state.entries[key]], []

    def _put(self, args: tuple[str, ...]) -> tuple[int, list[str], list[str]]:
        usage = f"usage: {self.commands.put} <keyname> [ <value> ]"
        if not args:
            return EXIT_MISSING_KEY, [], [usage]
        if len(args) < 2:
            return EXIT_MISSING_VALUE, [], [usage]
        self.state.entries[args[0]] = args[1]
        return EXIT_OK, [], []

    def _delete(self, args: tuple[str, ...]) -> tuple[int, list[str], list[str]]:
        if not args:
            return EXIT_USAGE, [], [f"usage: {self.commands.delete} <keyname>"]
        self.state.entries.pop(args[0], None)
        return EXIT_OK, [], []


__all__ = ["InMemoryCommandRunner", "MetadataState"]
