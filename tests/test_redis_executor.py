import pytest
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import ResponseError

from kv_gateway.executors.protocol import Reply
from kv_gateway.executors.redis import RedisExecutor


class _FakeRedisClient:
    def __init__(self, replies: list[object] | None = None) -> None:
        self.replies = list(replies or [])
        self.commands: list[tuple[str, ...]] = []
        self.closed = False

    async def execute_command(self, *args: str) -> object:
        self.commands.append(args)
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply

    async def aclose(self) -> None:
        self.closed = True


class _FakeCloseOnlyClient:
    def __init__(self) -> None:
        self.closed = False

    async def execute_command(self, *args: str) -> object:
        return None

    def close(self) -> None:
        self.closed = True


@pytest.mark.asyncio
async def test_execute_passes_tokens_verbatim() -> None:
    client = _FakeRedisClient(["value"])
    executor = RedisExecutor(client=client)

    assert await executor.execute(["GET", "ep1:user"]) == Reply.success("value")
    assert client.commands == [("GET", "ep1:user")]


@pytest.mark.asyncio
async def test_execute_normalizes_parsed_replies() -> None:
    client = _FakeRedisClient([True, 3, b"raw", None, [b"a", "b"], (0, {"f1": "v1", b"f2": b"v2"})])
    executor = RedisExecutor(client=client)

    assert (await executor.execute(["SET", "k", "v"])).value == "OK"
    assert (await executor.execute(["DEL", "k"])).value == "3"
    assert (await executor.execute(["GET", "k"])).value == "raw"
    assert (await executor.execute(["GET", "missing"])).value is None
    assert (await executor.execute(["HKEYS", "h"])).value == ["a", "b"]
    assert (await executor.execute(["HSCAN", "h", "0", "MATCH", "*"])).value == ["0", ["f1", "v1", "f2", "v2"]]


@pytest.mark.asyncio
async def test_client_errors_become_failure_replies() -> None:
    client = _FakeRedisClient([ResponseError("WRONGTYPE Operation"), RedisConnectionError("refused")])
    executor = RedisExecutor(client=client)

    assert await executor.execute(["GET", "h"]) == Reply.failure("WRONGTYPE Operation")
    assert await executor.execute(["GET", "h"]) == Reply.failure("refused")


@pytest.mark.asyncio
async def test_os_errors_become_failure_replies() -> None:
    client = _FakeRedisClient([ConnectionRefusedError()])
    executor = RedisExecutor(client=client)

    reply = await executor.execute(["GET", "k"])

    assert reply.ok is False
    assert reply.error == "ConnectionRefusedError"


@pytest.mark.asyncio
async def test_close_prefers_aclose() -> None:
    client = _FakeRedisClient()
    executor = RedisExecutor(client=client)

    await executor.close()
    assert client.closed is True


@pytest.mark.asyncio
async def test_close_falls_back_to_sync_close() -> None:
    client = _FakeCloseOnlyClient()
    executor = RedisExecutor(client=client)

    await executor.close()
    assert client.closed is True
