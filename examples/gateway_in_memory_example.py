"""Minimal example for KVGateway using the in-memory executor."""

from kv_gateway import InMemoryExecutor, KVGateway


def main() -> None:
    """Run a basic value and hash flow without a server."""
    with KVGateway(InMemoryExecutor(page_size=2)) as gateway:
        gateway.set("greeting", "hello")
        gateway.set("answer", 42)
        gateway.set("config", {"retries": 3, "hosts": ["a", "b"]})
        print(gateway.get("greeting"), gateway.get("answer"), gateway.get("config"))

        gateway.hmset("team", {"alice": {"role": "lead"}, "bob": "dev", "carol": "ops"})
        gateway.hdel("team", ["carol"])
        print("fields:", gateway.hkeys("team"))
        print("scan:", gateway.hscan("team"))


if __name__ == "__main__":
    main()
