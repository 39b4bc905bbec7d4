from __future__ import annotations

import logging
import os
from collections.abc import Callable

from mdata_client.app.settings import CommandNames
from mdata_client.runner.inmemory import InMemoryCommandRunner
from mdata_client.runner.interfaces import CommandRunner
from mdata_client.runner.process import SubprocessCommandRunner

logger = logging.getLogger(__name__)

MDATA_RUNNER_ENV = "MDATA_RUNNER"
DEFAULT_RUNNER = "subprocess"

RunnerFactory = Callable[[CommandNames], CommandRunner]


def _subprocess_runner(commands: CommandNames) -> CommandRunner:
    return SubprocessCommandRunner()


def _inmemory_runner(commands: CommandNames) -> CommandRunner:
    return InMemoryCommandRunner(commands=commands)


_RUNNER_FACTORIES: dict[str, RunnerFactory] = {
    "subprocess": _subprocess_runner,
    "inmemory": _inmemory_runner,
}


def register_command_runner(name: str, factory: RunnerFactory) -> None:
    """Register ``factory`` under ``name``; it receives the client's command names."""
    key = name.strip().lower()
    if not key:
        msg = "Runner name must not be empty"
        raise ValueError(msg)
    _RUNNER_FACTORIES[key] = factory


def available_command_runners() -> list[str]:
    return sorted(_RUNNER_FACTORIES)


def resolve_command_runner(
    runner: CommandRunner | str | None = None,
    *,
    commands: CommandNames | None = None,
) -> CommandRunner:
    """Return a runner instance from an instance, a registered name, or the environment."""
    if isinstance(runner, CommandRunner):
        return runner
    name = runner or os.getenv(MDATA_RUNNER_ENV) or DEFAULT_RUNNER
    key = name.strip().lower()
    factory = _RUNNER_FACTORIES.get(key)
    if factory is None:
        msg = f"Unknown command runner '{name}' (available: {', '.join(available_command_runners())})"
        raise ValueError(msg)
    logger.debug("Using command runner '%s'", key)
    return factory(commands or CommandNames())


__all__ = [
    "RunnerFactory",
    "available_command_runners",
    "register_command_runner",
    "resolve_command_runner",
]
