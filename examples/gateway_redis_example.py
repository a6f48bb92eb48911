"""Minimal example for KVGateway against a Redis-compatible server."""

import logging

from kv_gateway import GatewaySettings, KVGateway


def main() -> None:
    """Run a set/get, bulk hash write and paged scan against Redis/Dragonfly."""
    logging.basicConfig(level=logging.INFO)
    settings = GatewaySettings(url="redis://redis:6379/0", scan_count=100)
    with KVGateway.from_url(settings=settings) as gateway:
        gateway.set("user", {"alice": {"age": 30}})
        print("user:", gateway.get("user"))

        gateway.hmset("scores", {f"player:{index}": index * 10 for index in range(1000)})
        top = gateway.hscan("scores", "player:99*")
        print(f"{len(top)} fields match player:99*")

        pages: list[int] = []
        gateway.hscan_to(lambda page: pages.append(len(page)), "scores")
        print(f"streamed {sum(pages)} fields in {len(pages)} pages")

        gateway.delete("user")
        gateway.delete("scores")


if __name__ == "__main__":
    main()
