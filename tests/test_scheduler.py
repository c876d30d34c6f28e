from voxlife.core.scheduler import TickScheduler


def test_ticks_only_after_interval():
    scheduler = TickScheduler(interval_ms=66.0, start_ms=0.0)
    assert scheduler.poll(16.0) is False
    assert scheduler.poll(65.9) is False
    assert scheduler.poll(66.0) is True
    assert scheduler.last_tick_ms == 66.0
    assert scheduler.poll(100.0) is False
    assert scheduler.ticks == 1


def test_no_catch_up_after_long_stall():
    scheduler = TickScheduler(interval_ms=66.0, start_ms=0.0)
    assert scheduler.poll(10_000.0) is True
    assert scheduler.poll(10_001.0) is False
    assert scheduler.ticks == 1
