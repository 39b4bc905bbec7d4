from mdata_client.app import ClientConfig, CommandNames, MetadataClient
from mdata_client.errors import InvalidArgument, LaunchError, MetadataClientError
from mdata_client.runner import (
    CommandInvocation,
    CommandResult,
    CommandRunner,
    InMemoryCommandRunner,
    SubprocessCommandRunner,
    register_command_runner,
    resolve_command_runner,
)

__all__ = [
    "ClientConfig",
    "CommandInvocation",
    "CommandNames",
    "CommandResult",
    "CommandRunner",
    "InMemoryCommandRunner",
    "InvalidArgument",
    "LaunchError",
    "MetadataClient",
    "MetadataClientError",
    "SubprocessCommandRunner",
    "register_command_runner",
    "resolve_command_runner",
]
