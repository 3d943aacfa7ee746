import anyio
import pytest

from stepgraph import AnyioAdapter, make_engine


@pytest.fixture(
    params=[
        pytest.param(("asyncio", {"use_uvloop": False}), id="asyncio"),
        pytest.param(
            ("trio", {"restrict_keyboard_interrupt_to_checkpoints": True}), id="trio"
        ),
    ],
    scope="session",
)
def anyio_backend(request):
    return request.param


@pytest.fixture
async def engine():
    with anyio.fail_after(10):
        async with anyio.create_task_group() as tg:
            yield make_engine(AnyioAdapter(tg))
