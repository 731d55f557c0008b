import asyncio

import pytest

from topicwire.scheduling import AsyncioScheduler, ManualScheduler


def test_manual_scheduler_runs_nothing_until_advanced():
    calls = []
    scheduler = ManualScheduler()
    scheduler.call_later(1.0, calls.append, "a")
    assert calls == []
    assert scheduler.pending == 1


def test_manual_scheduler_orders_by_due_time_then_scheduling_order():
    calls = []
    scheduler = ManualScheduler()
    scheduler.call_later(2.0, calls.append, "late")
    scheduler.call_later(0.0, calls.append, "first")
    scheduler.call_later(1.0, calls.append, "tie-1")
    scheduler.call_later(1.0, calls.append, "tie-2")

    assert scheduler.advance(1.0) == 3
    assert calls == ["first", "tie-1", "tie-2"]
    assert scheduler.now == 1.0

    assert scheduler.advance(0.5) == 0
    assert scheduler.run_all() == 1
    assert calls[-1] == "late"
    assert scheduler.now == 2.0
    assert scheduler.pending == 0


def test_manual_scheduler_runs_callbacks_scheduled_while_running():
    calls = []
    scheduler = ManualScheduler()

    def chain():
        calls.append(scheduler.now)
        if len(calls) < 3:
            scheduler.call_later(1.0, chain)

    scheduler.call_later(0.0, chain)
    assert scheduler.run_all() == 3
    assert calls == [0.0, 1.0, 2.0]


def test_negative_delay_rejected():
    scheduler = ManualScheduler()
    with pytest.raises(ValueError):
        scheduler.call_later(-1, lambda: None)
    with pytest.raises(ValueError):
        scheduler.advance(-0.1)


def test_asyncio_scheduler_waits_for_callbacks():
    calls = []

    async def main():
        scheduler = AsyncioScheduler()
        scheduler.call_later(0.0, calls.append, 1)
        scheduler.call_later(0.01, calls.append, 2)
        assert scheduler.pending == 2
        await scheduler.wait_idle()
        return scheduler.pending

    assert asyncio.run(main()) == 0
    assert calls == [1, 2]


def test_asyncio_scheduler_logs_failing_callback(caplog):
    def boom():
        raise RuntimeError("boom")

    async def main():
        scheduler = AsyncioScheduler()
        scheduler.call_later(0.0, boom)
        await scheduler.wait_idle()
        return scheduler.pending

    assert asyncio.run(main()) == 0
    assert any(r.getMessage() == "callback_failed" for r in caplog.records)


def test_asyncio_scheduler_idle_when_nothing_scheduled():
    async def main():
        await asyncio.wait_for(AsyncioScheduler().wait_idle(), timeout=1.0)

    asyncio.run(main())


@pytest.mark.parametrize("delay", [float("inf"), float("nan"), "inf", "nan"])
def test_non_finite_delay_rejected(delay):
    manual = ManualScheduler()
    with pytest.raises(ValueError):
        manual.call_later(delay, lambda: None)
    with pytest.raises(ValueError):
        manual.advance(delay)
    assert manual.pending == 0

    async def main():
        scheduler = AsyncioScheduler()
        with pytest.raises(ValueError):
            scheduler.call_later(delay, lambda: None)
        await asyncio.wait_for(scheduler.wait_idle(), timeout=1.0)
        return scheduler.pending

    assert asyncio.run(main()) == 0


def test_manual_scheduler_logs_failing_callback_and_keeps_going(caplog):
    calls = []

    def boom():
        raise RuntimeError("boom")

    scheduler = ManualScheduler()
    scheduler.call_later(1.0, boom)
    scheduler.call_later(2.0, calls.append, "after")

    assert scheduler.advance(5.0) == 2
    assert scheduler.now == 5.0
    assert scheduler.pending == 0
    assert calls == ["after"]
    failed = [r for r in caplog.records if r.getMessage() == "callback_failed"]
    assert len(failed) == 1
    assert failed[0].exc_info is not None
