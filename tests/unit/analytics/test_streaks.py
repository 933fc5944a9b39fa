"""Tests for win / loss streak analysis."""

from options_journal.analytics.streaks import StreakAnalysis, analyze_streaks, streak_lengths

from .conftest import make_open_trade, make_sequence, make_trade


class TestStreakLengths:
    def test_empty(self):
        assert streak_lengths([]) == []

    def test_alternating(self):
        assert streak_lengths([True, False, True]) == [1, -1, 1]

    def test_runs(self):
        assert streak_lengths([False, False, True, True, True, False]) == [-2, 3, -1]


class TestAnalyzeStreaks:
    def test_three_trade_scenario(self):
        result = analyze_streaks(make_sequence([600, -200, 300]))
        assert result.streaks == [1, -1, 1]
        assert result.current_streak == 1
        assert result.max_win_streak == 1
        assert result.max_loss_streak == 1

    def test_all_winners(self):
        result = analyze_streaks(make_sequence([100, 250, 50, 75, 300]))
        assert result.streaks == [5]
        assert result.current_streak == 5
        assert result.max_loss_streak == 0

    def test_breakeven_breaks_win_streak(self):
        result = analyze_streaks(make_sequence([100, 200, 0, 150]))
        assert result.streaks == [2, -1, 1]
        assert result.max_win_streak == 2

    def test_losing_run_in_progress(self):
        result = analyze_streaks(make_sequence([100, -50, -75, -20]))
        assert result.current_streak == -3
        assert result.max_loss_streak == 3

    def test_no_closed_trades(self):
        result = analyze_streaks([make_open_trade()])
        assert result == StreakAnalysis()
        assert result.to_dict() == {
            "current_streak": 0,
            "max_win_streak": 0,
            "max_loss_streak": 0,
            "streaks": [],
        }

    def test_ordered_by_close_time_not_input(self):
        trades = make_sequence([100, 200, -300])
        result = analyze_streaks([trades[2], trades[0], trades[1]])
        assert result.streaks == [2, -1]

    def test_malformed_exit_time_excluded(self):
        trades = [make_trade(1, pnl=100), make_trade(2, pnl=-50, exit_time="bad"), make_trade(3, pnl=100)]
        result = analyze_streaks(trades)
        assert result.streaks == [2]
        assert result.total_trades == 2
