import json
import logging

from mdata_client import InMemoryCommandRunner, MetadataClient


def main() -> None:
    logging.basicConfig(level=logging.INFO)

    # Seed an emulated metadata store so the demo runs outside a Triton guest
    runner = InMemoryCommandRunner(entries={"lifecycle": "devl", "component": "abc"})
    client = MetadataClient(runner=runner)

    client.put("version", "1.0")
    print("keys:", client.list())
    print("lifecycle:", client.get("lifecycle"))
    print("deleted component:", client.delete("component"))
    print("snapshot:", json.dumps(client.snapshot(), ensure_ascii=False, indent=2))


if __name__ == "__main__":
    main()
