from collections.abc import Generator, Sequence
from typing import override

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from kv_gateway.config import GatewaySettings
from kv_gateway.errors import CommandError, ScanNotConvergedError
from kv_gateway.executors.in_memory import InMemoryExecutor
from kv_gateway.executors.protocol import CommandExecutor, Reply
from kv_gateway.gateways import KVGateway


_FIELDS = st.dictionaries(
    keys=st.text(min_size=1, max_size=10),
    values=st.text(alphabet="abcdefghij0123456789", max_size=10),
    max_size=40,
)


class _RecordingExecutor(InMemoryExecutor):
    def __init__(self, page_size: int = 10) -> None:
        super().__init__(page_size=page_size)
        self.commands: list[list[str]] = []

    @override
    async def execute(self, tokens: Sequence[str]) -> Reply:
        self.commands.append(list(tokens))
        return await super().execute(tokens)


class _EndlessScanExecutor(CommandExecutor):
    def __init__(self) -> None:
        super().__init__()
        self.calls = 0

    @override
    async def execute(self, tokens: Sequence[str]) -> Reply:
        self.calls += 1
        return Reply.success([str(self.calls), ["f", "v"]])

    @override
    async def close(self) -> None:
        return


class _FailingExecutor(CommandExecutor):
    @override
    async def execute(self, tokens: Sequence[str]) -> Reply:
        return Reply.failure("LOADING dataset in memory")

    @override
    async def close(self) -> None:
        return


@pytest.fixture
def executor() -> _RecordingExecutor:
    return _RecordingExecutor(page_size=3)


@pytest.fixture
def gateway(executor: _RecordingExecutor) -> Generator[KVGateway]:
    test_gateway = KVGateway(executor)
    try:
        yield test_gateway
    finally:
        test_gateway.close()


def _scans(executor: _RecordingExecutor) -> list[list[str]]:
    return [tokens for tokens in executor.commands if tokens[0] == "HSCAN"]


def test_hscan_collects_every_page_including_the_last(gateway: KVGateway, executor: _RecordingExecutor) -> None:
    payload = {f"f{index}": str(index) for index in range(7)}
    gateway.hmset("h", payload)

    assert gateway.hscan("h") == payload
    assert [tokens[2] for tokens in _scans(executor)] == ["0", "3", "6"]


def test_hscan_filters_by_pattern(gateway: KVGateway) -> None:
    gateway.hmset("h", {"user:1": "a", "team:1": "b", "user:2": "c", "user:3": "d", "team:2": "e"})

    assert gateway.hscan("h", "user:*") == {"user:1": "a", "user:2": "c", "user:3": "d"}
    assert gateway.hscan("h", "nobody:*") == {}


def test_hscan_decodes_values_unless_raw(gateway: KVGateway) -> None:
    gateway.hmset("h", {"doc": {"a": [1, 2]}, "n": 5})

    assert gateway.hscan("h") == {"doc": {"a": [1, 2]}, "n": "5"}
    assert gateway.hscan("h", raw=True) == {"doc": '{"__kv__": {"a": [1, 2]}}', "n": "5"}


def test_hscan_of_missing_hash_is_empty(gateway: KVGateway, executor: _RecordingExecutor) -> None:
    assert gateway.hscan("missing") == {}
    assert len(_scans(executor)) == 1


def test_hscan_to_delivers_each_page_separately(gateway: KVGateway) -> None:
    payload = {f"f{index}": str(index) for index in range(8)}
    gateway.hmset("h", payload)
    pages: list[dict[str, object]] = []

    gateway.hscan_to(pages.append, "h", "*")

    assert [len(page) for page in pages] == [3, 3, 2]
    assert pages[0] == {"f0": "0", "f1": "1", "f2": "2"}
    assert {field: value for page in pages for field, value in page.items()} == payload


def test_hscan_to_callback_failure_aborts_scan(gateway: KVGateway, executor: _RecordingExecutor) -> None:
    gateway.hmset("h", {f"f{index}": "v" for index in range(9)})

    def explode(page: dict[str, object]) -> None:
        msg = "stop here"
        raise RuntimeError(msg)

    with pytest.raises(RuntimeError, match="stop here"):
        gateway.hscan_to(explode, "h")
    assert len(_scans(executor)) == 1


def test_iter_hscan_is_lazy(gateway: KVGateway, executor: _RecordingExecutor) -> None:
    gateway.hmset("h", {f"f{index}": "v" for index in range(9)})

    pages = gateway.iter_hscan("h")
    first = next(pages)

    assert len(first) == 3
    assert len(_scans(executor)) == 1


def test_count_hint_from_argument_and_settings(executor: _RecordingExecutor) -> None:
    hinted = KVGateway(executor, settings=GatewaySettings(scan_count=100))
    try:
        hinted.hmset("h", {f"f{index}": "v" for index in range(9)})
        assert len(hinted.hscan("h")) == 9
        _ = hinted.hscan("h", count=4)
    finally:
        hinted.close()

    scans = _scans(executor)
    assert scans[0] == ["HSCAN", "h", "0", "MATCH", "*", "COUNT", "100"]
    assert scans[1] == ["HSCAN", "h", "0", "MATCH", "*", "COUNT", "4"]
    assert len(scans) == 4


def test_non_converging_scan_raises_after_budget() -> None:
    endless = _EndlessScanExecutor()
    gateway = KVGateway(endless, settings=GatewaySettings(scan_max_pages=5))
    try:
        with pytest.raises(ScanNotConvergedError) as excinfo:
            _ = gateway.hscan("h")
    finally:
        gateway.close()

    assert excinfo.value.pages == 5
    assert endless.calls == 5


def test_scan_failure_raises_command_error() -> None:
    gateway = KVGateway(_FailingExecutor())
    try:
        with pytest.raises(CommandError, match="HSCAN failed: LOADING"):
            _ = gateway.hscan("h")
    finally:
        gateway.close()


@settings(max_examples=30, deadline=None)
@given(payload=_FIELDS, page_size=st.integers(min_value=1, max_value=12))
def test_hscan_is_complete_for_any_page_size(payload: dict[str, str], page_size: int) -> None:
    gateway = KVGateway(InMemoryExecutor(page_size=page_size))
    try:
        gateway.hmset("h", payload)
        assert gateway.hscan("h") == payload
    finally:
        gateway.close()


@settings(max_examples=30, deadline=None)
@given(payload=_FIELDS, page_size=st.integers(min_value=1, max_value=12))
def test_hscan_to_union_equals_hscan(payload: dict[str, str], page_size: int) -> None:
    gateway = KVGateway(InMemoryExecutor(page_size=page_size))
    try:
        gateway.hmset("h", payload)
        union: dict[str, object] = {}
        gateway.hscan_to(union.update, "h", "*")
        assert union == gateway.hscan("h", "*")
    finally:
        gateway.close()
