import os
import stat
import sys
from pathlib import Path

import pytest

from mdata_client import MetadataClient

pytestmark = pytest.mark.skipif(sys.platform == "win32", reason="POSIX shell mock tools")

MOCK_TOOLS = {
    "mdata-list": """#!/bin/sh
echo root_authorized_keys
echo lifecycle
echo component
""",
    "mdata-get": """#!/bin/sh
[ -z "$1" ] && { echo "usage: mdata-get <keyname>" >&2; exit 2; }
case "$1" in
    root_authorized_keys) echo "ssh-rsa AAAAB3NzaC1yc2E test@example" ;;
    lifecycle) echo test ;;
    component) echo demo ;;
    *) echo "No metadata for '$1'" >&2; exit 1 ;;
esac
""",
    "mdata-put": """#!/bin/sh
[ -z "$1" ] && exit 3
[ -z "$2" ] && exit 2
exit 0
""",
    "mdata-delete": """#!/bin/sh
[ -z "$1" ] && exit 2
exit 0
""",
}


@pytest.fixture
def bin_dir(tmp_path: Path) -> Path:
    directory = tmp_path / "mockscripts"
    directory.mkdir()
    for name, body in MOCK_TOOLS.items():
        path = directory / name
        path.write_text(body, encoding="utf-8")
        path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return directory


@pytest.fixture
def mock_client(bin_dir: Path) -> MetadataClient:
    return MetadataClient(config={"bin_path": f"{bin_dir}{os.sep}"}, runner="subprocess")


def test_mdata_list_returns_keys(mock_client) -> None:
    assert mock_client.list() == ["root_authorized_keys", "lifecycle", "component"]


def test_mdata_get(mock_client) -> None:
    assert mock_client.get("lifecycle") == "test"
    assert mock_client.get("dummy") is None


def test_mdata_put(mock_client) -> None:
    assert mock_client.put("username", "arcizon")
    assert mock_client.put("component", "x")


def test_mdata_delete(mock_client) -> None:
    assert mock_client.delete("component")
    assert not mock_client.delete("dummy")


def test_snapshot_over_mock_tools(mock_client) -> None:
    assert mock_client.snapshot() == {
        "root_authorized_keys": "ssh-rsa AAAAB3NzaC1yc2E test@example",
        "lifecycle": "test",
        "component": "demo",
    }


def test_bin_path_from_environment(bin_dir, monkeypatch) -> None:
    monkeypatch.setenv("MDATA_BIN_PATH", f"{bin_dir}{os.sep}")
    client = MetadataClient(runner="subprocess")
    assert client.get("component") == "demo"


def test_missing_tools_collapse_to_empty_results(tmp_path) -> None:
    client = MetadataClient(config={"bin_path": f"{tmp_path}{os.sep}nowhere-"}, runner="subprocess")
    assert client.list() == []
    assert client.get("lifecycle") is None
    assert client.put("lifecycle", "prod") is False
    assert client.delete("lifecycle") is False


def test_null_byte_arguments_return_false(mock_client) -> None:
    assert mock_client.put("key", "va\x00lue") is False
    assert mock_client.get("life\x00cycle") is None
