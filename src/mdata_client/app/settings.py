from collections.abc import Callable
import json
import logging
import os
from pathlib import Path
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, StringConstraints

logger = logging.getLogger(__name__)

process_logger = logging.getLogger("mdata_client.process")

MDATA_CONFIG_ENV = "MDATA_CONFIG_PATH"
MDATA_CONFIG_DEFAULT = "mdata.json"
MDATA_BIN_PATH_ENV = "MDATA_BIN_PATH"

CommandName = Annotated[str, StringConstraints(min_length=1)]


def log_stdout(line: str) -> None:
    process_logger.info("%s", line)


def log_stderr(line: str) -> None:
    process_logger.error("%s", line)


def resolve_config_path() -> Path:
    override = os.getenv(MDATA_CONFIG_ENV)
    if override:
        return Path(override).expanduser()
    return Path(MDATA_CONFIG_DEFAULT).expanduser()


def resolve_bin_path(default: str | None = None) -> str:
    """
    Resolve the prefix prepended to every mdata-* binary.

    ``MDATA_BIN_PATH`` wins over ``default``; an empty prefix means the
    binaries are looked up on ``PATH``.
    """
    override = os.getenv(MDATA_BIN_PATH_ENV)
    if override is not None:
        return override
    return default or ""


def _load_json_file(path: Path) -> Any:
    if not path.exists():
        return None
    try:
        raw = path.read_text(encoding="utf-8")
        return json.loads(raw)
    except Exception as exc:
        logger.warning("Failed to load JSON config from %s: %s", path, exc)
        return None


def load_client_settings_from_config() -> dict[str, Any] | None:
    """
    Load client settings from the JSON config file.

    Supported keys: ``bin_path``, ``runner`` and ``commands``. Unknown keys are
    dropped with a warning.
    """
    path = resolve_config_path()
    data = _load_json_file(path)
    if data is None:
        return None
    if not isinstance(data, dict):
        logger.warning("mdata config at %s must be an object", path)
        return None
    settings: dict[str, Any] = {}
    for key, value in data.items():
        if key not in {"bin_path", "runner", "commands"}:
            logger.warning("Ignoring unknown mdata config key: %s", key)
            continue
        settings[key] = value
    return settings


class CommandNames(BaseModel):
    model_config = ConfigDict(frozen=True)

    list: CommandName = Field(default="mdata-list")
    get: CommandName = Field(default="mdata-get")
    put: CommandName = Field(default="mdata-put")
    delete: CommandName = Field(default="mdata-delete")


class ClientConfig(BaseModel):
    """Immutable settings of one ``MetadataClient``.

    Attributes:
        bin_path: Prefix concatenated in front of every command name, e.g.
            ``"/usr/sbin/"``. Empty means the binaries are on ``PATH``.
        stdout_sink: Receives every stdout line of every child process.
        stderr_sink: Receives every stderr line of every child process.
        commands: Names of the four executables.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    bin_path: str = Field(default_factory=resolve_bin_path)
    stdout_sink: Callable[[str], None] = Field(default=log_stdout)
    stderr_sink: Callable[[str], None] = Field(default=log_stderr)
    commands: CommandNames = Field(default_factory=CommandNames)

    def command_path(self, name: Literal["list", "get", "put", "delete"]) -> str:
        return self.bin_path + getattr(self.commands, name)
