from __future__ import annotations

import logging
import os
from collections.abc import Mapping, MutableMapping
from typing import Any, Literal

from mdata_client.app.settings import ClientConfig, load_client_settings_from_config, resolve_bin_path
from mdata_client.errors import InvalidArgument
from mdata_client.runner.factory import resolve_command_runner
from mdata_client.runner.interfaces import CommandResult, CommandRunner

logger = logging.getLogger(__name__)

Verb = Literal["list", "get", "put", "delete"]


class MetadataClient:
    """Instance metadata access through the mdata-list/get/put/delete tools.

    Every call spawns a fresh child process; nothing is cached between calls.
    Empty keys or values raise ``InvalidArgument`` before anything is spawned.
    All other failures, runner faults such as ``LaunchError`` included, are
    reported through the return value: ``[]`` from ``list``, ``None`` from
    ``get``, ``False`` from ``put`` and ``delete``.
    """

    def __init__(
        self,
        *,
        config: ClientConfig | Mapping[str, Any] | None = None,
        runner: CommandRunner | str | None = None,
    ) -> None:
        file_settings = load_client_settings_from_config()
        config = self._merge_file_settings(config, file_settings)
        if runner is None and file_settings:
            runner = file_settings.get("runner")
        self.config = self._validate_config(config)
        self.runner: CommandRunner = resolve_command_runner(runner, commands=self.config.commands)

    @staticmethod
    def _merge_file_settings(
        config: ClientConfig | Mapping[str, Any] | None,
        file_settings: Mapping[str, Any] | None,
    ) -> ClientConfig | Mapping[str, Any] | None:
        if not file_settings or isinstance(config, ClientConfig):
            # Explicit config objects are used as given.
            return config
        merged = dict(config or {})
        if "bin_path" not in merged and "bin_path" in file_settings:
            merged["bin_path"] = resolve_bin_path(file_settings["bin_path"])
        if "commands" not in merged and "commands" in file_settings:
            merged["commands"] = file_settings["commands"]
        return merged

    @staticmethod
    def _validate_config(config: ClientConfig | Mapping[str, Any] | None) -> ClientConfig:
        if isinstance(config, ClientConfig):
            return config
        if config is None:
            return ClientConfig()
        return ClientConfig.model_validate(config)

    @staticmethod
    def _require(value: str, name: str) -> None:
        if not value:
            msg = f"{name} argument can't be empty"
            raise InvalidArgument(msg)

    def _run(self, verb: Verb, *args: str) -> CommandResult:
        binary = self.config.command_path(verb)
        result = self.runner.invoke(binary, args, self.config.stdout_sink, self.config.stderr_sink)
        logger.debug("%s %r exited with %d", binary, args, result.exit_code)
        return result

    def list(self) -> list[str]:
        """Return every metadata key, in the order mdata-list prints them."""
        try:
            result = self._run("list")
        except Exception as exc:
            logger.warning("Listing metadata keys failed: %s", exc)
            return []
        return list(result.stdout)

    def get(self, key: str) -> str | None:
        """Return the value stored under ``key``, or ``None`` when it is unknown."""
        self._require(key, "key")
        try:
            result = self._run("get", key)
        except Exception as exc:
            logger.warning("Reading metadata key %r failed: %s", key, exc)
            return None
        return result.first_line

    def put(self, key: str, value: str) -> bool:
        """Store ``value`` under ``key``.

        Empty values are rejected: mdata-put only accepts them on stdin, which
        this client does not feed. Any nonzero exit code reads as ``False``.
        """
        self._require(key, "key")
        self._require(value, "value")
        try:
            result = self._run("put", key, value)
        except Exception as exc:
            logger.warning("Writing metadata key %r failed: %s", key, exc)
            return False
        return result.ok

    def delete(self, key: str) -> bool:
        """Delete ``key``; returns ``False`` without calling mdata-delete if it is not listed."""
        self._require(key, "key")
        if key not in self.list():
            return False
        try:
            result = self._run("delete", key)
        except Exception as exc:
            logger.warning("Deleting metadata key %r failed: %s", key, exc)
            return False
        return result.ok

    def snapshot(self) -> dict[str, str]:
        """Materialize all metadata as a dict (one mdata-get per listed key)."""
        snapshot: dict[str, str] = {}
        for key in self.list():
            if not key:
                continue
            value = self.get(key)
            if value is not None:
                snapshot[key] = value
        return snapshot

    def load_to_environ(
        self,
        environ: MutableMapping[str, str] | None = None,
        *,
        overwrite: bool = True,
    ) -> dict[str, str]:
        target = os.environ if environ is None else environ
        snapshot = self.snapshot()
        for key, value in snapshot.items():
            if not overwrite and key in target:
                continue
            target[key] = value
        logger.info("Loaded %d metadata entries into the environment", len(snapshot))
        return snapshot


__all__ = ["MetadataClient"]
