from mdata_client.app.client import MetadataClient
from mdata_client.app.settings import (
    ClientConfig,
    CommandNames,
    load_client_settings_from_config,
    log_stderr,
    log_stdout,
    resolve_bin_path,
    resolve_config_path,
)

__all__ = [
    "ClientConfig",
    "CommandNames",
    "MetadataClient",
    "load_client_settings_from_config",
    "log_stderr",
    "log_stdout",
    "resolve_bin_path",
    "resolve_config_path",
]
