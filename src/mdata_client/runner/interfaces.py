from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

Sink = Callable[[str], None]


@dataclass(frozen=True)
class CommandInvocation:
    binary: str
    args: tuple[str, ...] = field(default_factory=tuple)

    @property
    def argv(self) -> list[str]:
        return [self.binary, *self.args]


@dataclass(frozen=True)
class CommandResult:
    exit_code: int
    stdout: tuple[str, ...] = field(default_factory=tuple)

    @property
    def ok(self) -> bool:
        return self.exit_code == 0

    @property
    def first_line(self) -> str | None:
        return self.stdout[0] if self.stdout else None


@runtime_checkable
class CommandRunner(Protocol):
    """Runs one external command to completion.

    Implementations forward every stdout/stderr line to the given sinks and
    return the exit code with the captured stdout lines. A binary that cannot
    be spawned raises ``LaunchError``; a nonzero exit code is a normal result.
    """

    def invoke(
        self,
        binary: str,
        args: Sequence[str],
        stdout_sink: Sink,
        stderr_sink: Sink,
    ) -> CommandResult: ...


__all__ = ["CommandInvocation", "CommandResult", "CommandRunner", "Sink"]
