"""Unit tests for the game clock."""

import pytest
from sudoku_game.game.timer import GameTimer, format_elapsed


class FakeClock:
    def __init__(self):
        self.now = 100.0

    def __call__(self):
        return self.now


class TestFormatElapsed:
    """Tests for m:ss rendering."""

    @pytest.mark.parametrize("seconds,text", [
        (0, "0:00"),
        (9, "0:09"),
        (60, "1:00"),
        (754, "12:34"),
    ])
    def test_format(self, seconds, text):
        assert format_elapsed(seconds) == text


class TestGameTimer:
    """Tests for GameTimer."""

    def test_new_timer_is_stopped(self):
        timer = GameTimer(FakeClock())
        assert not timer.running
        assert timer.paused
        assert timer.elapsed == 0

    def test_start_counts(self):
        clock = FakeClock()
        timer = GameTimer(clock)
        timer.start()
        clock.now += 12.7
        assert timer.running
        assert timer.elapsed == 12

    def test_start_restarts_from_zero(self):
        clock = FakeClock()
        timer = GameTimer(clock)
        timer.start()
        clock.now += 40
        timer.start()
        clock.now += 3
        assert timer.elapsed == 3

    def test_pause_and_resume(self):
        clock = FakeClock()
        timer = GameTimer(clock)
        timer.start()
        clock.now += 10
        timer.pause()
        clock.now += 1000
        assert timer.elapsed == 10

        timer.pause()
        assert timer.elapsed == 10

        timer.resume()
        clock.now += 5
        timer.resume()
        clock.now += 5
        assert timer.elapsed == 20
        assert str(timer) == "0:20"

    def test_reset(self):
        clock = FakeClock()
        timer = GameTimer(clock)
        timer.start()
        clock.now += 10
        timer.reset()
        assert timer.elapsed == 0
        assert not timer.running

    def test_load_keeps_running_state(self):
        clock = FakeClock()
        timer = GameTimer(clock)
        timer.start()
        clock.now += 10
        timer.load(90)
        clock.now += 2
        assert timer.elapsed == 92

        timer.pause()
        timer.load(30)
        clock.now += 50
        assert timer.elapsed == 30

    def test_load_negative(self):
        with pytest.raises(ValueError):
            GameTimer(FakeClock()).load(-1)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
