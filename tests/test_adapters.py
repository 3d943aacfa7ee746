from unittest.mock import Mock

import anyio
import pytest

from stepgraph import AnyioAdapter, Deferred


@pytest.fixture
async def adapter():
    with anyio.fail_after(10):
        async with anyio.create_task_group() as tg:
            yield AnyioAdapter(tg)


@pytest.mark.anyio
async def test_wrap_success(adapter):
    assert await adapter.wrap_success(1) == 1


@pytest.mark.anyio
async def test_wrap_success_adopts_awaitables(adapter):
    async def _value():
        await anyio.sleep(0)
        return "value"

    async def _error():
        raise RuntimeError("oops")

    assert await adapter.wrap_success(_value()) == "value"

    with pytest.raises(RuntimeError, match="oops"):
        await adapter.wrap_success(_error())


@pytest.mark.anyio
async def test_wrap_failure(adapter):
    handle = adapter.wrap_failure(ValueError("nope"))

    assert handle.done()
    with pytest.raises(ValueError, match="nope"):
        await handle


@pytest.mark.anyio
async def test_combine_all_keeps_order(adapter):
    first, second = Deferred(), Deferred()
    combined = adapter.combine_all([first, second])

    second.set_result(2)
    await anyio.sleep(0)
    assert not combined.done()

    first.set_result(1)
    assert await combined == [1, 2]


@pytest.mark.anyio
async def test_combine_all_empty(adapter):
    assert await adapter.combine_all([]) == []


@pytest.mark.anyio
async def test_combine_all_fails_on_first_failure(adapter):
    pending, failing = Deferred(), Deferred()
    combined = adapter.combine_all([pending, failing])

    failing.set_exception(ValueError("first"))

    with pytest.raises(ValueError, match="first"):
        await combined

    # a later failure does not replace the first one
    pending.set_exception(ValueError("second"))
    await anyio.sleep(0.01)
    with pytest.raises(ValueError, match="first"):
        combined.result()


@pytest.mark.anyio
async def test_chain(adapter):
    source = Deferred()
    chained = adapter.chain(source, lambda value: adapter.wrap_success(value * 2))

    source.set_result(21)
    assert await chained == 42


@pytest.mark.anyio
async def test_chain_skips_fn_on_failure(adapter):
    fn = Mock()
    chained = adapter.chain(adapter.wrap_failure(KeyError("k")), fn)

    with pytest.raises(KeyError):
        await chained

    fn.assert_not_called()
