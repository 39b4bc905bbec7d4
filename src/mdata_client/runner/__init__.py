from mdata_client.runner.factory import available_command_runners, register_command_runner, resolve_command_runner
from mdata_client.runner.inmemory import InMemoryCommandRunner, MetadataState
from mdata_client.runner.interfaces import CommandInvocation, CommandResult, CommandRunner, Sink
from mdata_client.runner.process import SubprocessCommandRunner

__all__ = [
    "CommandInvocation",
    "CommandResult",
    "CommandRunner",
    "InMemoryCommandRunner",
    "MetadataState",
    "Sink",
    "SubprocessCommandRunner",
    "available_command_runners",
    "register_command_runner",
    "resolve_command_runner",
]
