"""
Unit tests for tick drivers, including a real-thread engine run.
"""
import threading
import time

from minesweeper import EngineConfig, GameEngine, ManualTicker, ThreadingTicker

from conftest import PlannedRandomSource


class TestManualTicker:
    """Test the hand-driven ticker."""

    def test_fire_requires_start(self) -> None:
        calls = []
        ticker = ManualTicker(lambda: calls.append(1))
        assert ticker.fire() is False
        ticker.start()
        assert ticker.fire() is True
        ticker.stop()
        assert ticker.fire() is False
        assert calls == [1]
        assert ticker.fired == 1


class TestThreadingTicker:
    """Test the timer-thread ticker."""

    def test_ticks_repeatedly_until_stopped(self) -> None:
        calls = []
        done = threading.Event()

        def callback() -> None:
            calls.append(1)
            if len(calls) >= 3:
                done.set()

        ticker = ThreadingTicker(0.01, callback)
        ticker.start()
        try:
            assert done.wait(2.0)
        finally:
            ticker.stop()
        assert ticker.running is False

        # At most one tick may already be in flight when stop() returns
        time.sleep(0.05)
        settled = len(calls)
        time.sleep(0.05)
        assert len(calls) == settled

    def test_stop_is_idempotent(self) -> None:
        ticker = ThreadingTicker(10.0, lambda: None)
        ticker.start()
        ticker.stop()
        ticker.stop()
        assert ticker.running is False


class TestEngineClock:
    """Test the engine's default ticker end to end."""

    def test_elapsed_time_advances_while_playing(self) -> None:
        advanced = threading.Event()

        def listener(state) -> None:
            if state.elapsed_ms > 0:
                advanced.set()

        engine = GameEngine(
            config=EngineConfig(tick_interval_ms=10),
            random_source=PlannedRandomSource([(3, 1)]),
        )
        with engine:
            engine.subscribe(listener)
            engine.new_game(3, 5, 1)
            engine.reveal(0, 1)
            assert isinstance(engine.ticker, ThreadingTicker)
            assert advanced.wait(2.0)
        assert engine.ticker is None
