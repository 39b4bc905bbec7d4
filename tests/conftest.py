import pytest

from mdata_client import InMemoryCommandRunner, MetadataClient

SCENARIO = {
    "root_authorized_keys": "ssh-rsa AAAAB3NzaC1yc2E test@example",
    "lifecycle": "test",
    "component": "demo",
}


@pytest.fixture(autouse=True)
def _isolated_env(tmp_path, monkeypatch) -> None:
    monkeypatch.setenv("MDATA_CONFIG_PATH", str(tmp_path / "absent-mdata.json"))
    monkeypatch.delenv("MDATA_BIN_PATH", raising=False)
    monkeypatch.delenv("MDATA_RUNNER", raising=False)


@pytest.fixture
def runner() -> InMemoryCommandRunner:
    return InMemoryCommandRunner(entries=SCENARIO)


@pytest.fixture
def client(runner: InMemoryCommandRunner) -> MetadataClient:
    return MetadataClient(runner=runner)
