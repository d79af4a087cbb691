import asyncio

import pytest

from scriptwatch.updatesets.dedup import InFlightRegistry, UpdateDeduplicator
from scriptwatch.updatesets.types import CheckOutcome


def test_registry_add_discard_only_matching_task():
    reg = InFlightRegistry()
    first, second = object(), object()
    reg.add(1, first)
    assert 1 in reg and len(reg) == 1
    with pytest.raises(KeyError):
        reg.add(1, second)
    reg.discard(1, second)
    assert reg.get(1) is first
    reg.discard(1, first)
    assert 1 not in reg and list(reg) == []


@pytest.mark.asyncio
async def test_concurrent_requests_share_one_task():
    dedup = UpdateDeduplicator()
    gate = asyncio.Event()
    runs = []

    async def work():
        runs.append(1)
        await gate.wait()
        return CheckOutcome(succeeded=True)

    a = dedup.run_deduped(5, work)
    b = dedup.run_deduped(5, work)
    assert a is b
    assert 5 in dedup.registry

    gate.set()
    outcome = await asyncio.shield(a)
    assert outcome.succeeded
    assert runs == [1]
    assert 5 not in dedup.registry


@pytest.mark.asyncio
async def test_entry_is_gone_before_result_is_observed():
    dedup = UpdateDeduplicator()

    async def work():
        return CheckOutcome(succeeded=False)

    task = dedup.run_deduped("a", work)
    await task
    assert "a" not in dedup.registry

    again = dedup.run_deduped("a", work)
    assert again is not task
    await again


@pytest.mark.asyncio
async def test_failing_work_clears_the_entry():
    dedup = UpdateDeduplicator()

    async def work():
        raise RuntimeError("boom")

    task = dedup.run_deduped(3, work)
    with pytest.raises(RuntimeError):
        await task
    assert len(dedup.registry) == 0


@pytest.mark.asyncio
async def test_cancelled_waiter_does_not_cancel_shared_task():
    dedup = UpdateDeduplicator()
    gate = asyncio.Event()

    async def work():
        await gate.wait()
        return CheckOutcome(succeeded=True)

    task = dedup.run_deduped(9, work)
    waiter = asyncio.ensure_future(asyncio.shield(task))
    await asyncio.sleep(0)
    waiter.cancel()
    with pytest.raises(asyncio.CancelledError):
        await waiter

    gate.set()
    assert (await task).succeeded
    assert 9 not in dedup.registry


@pytest.mark.asyncio
async def test_separate_registries_do_not_share_work():
    gate = asyncio.Event()
    runs = []

    async def work():
        runs.append(1)
        await gate.wait()
        return CheckOutcome(succeeded=True)

    a = UpdateDeduplicator().run_deduped(1, work)
    b = UpdateDeduplicator().run_deduped(1, work)
    assert a is not b
    gate.set()
    await asyncio.gather(a, b)
    assert runs == [1, 1]
