"""Tests for the command-line interface."""

from __future__ import annotations

import json
import logging

import pytest
from click.testing import CliRunner

from options_journal.cli import main

TRADES = [
    {
        "ticker": "SPY", "quantity": 2, "entryPrice": "1.50", "exitPrice": "4.50",
        "entryTime": "2024-03-04T14:40:00Z", "exitTime": "2024-03-04T15:00:00Z",
        "tradeDate": "2024-03-04",
    },
    {
        "ticker": "QQQ", "quantity": 1, "entryPrice": "3.00", "exitPrice": "1.00",
        "entryTime": "2024-03-05T15:00:00Z", "exitTime": "2024-03-05T16:00:00Z",
        "tradeDate": "2024-03-05",
    },
    {
        "ticker": "SPY", "quantity": 1, "entryPrice": "2.00", "exitPrice": "5.00",
        "entryTime": "2024-03-06T20:35:00Z", "exitTime": "2024-03-06T20:55:00Z",
        "tradeDate": "2024-03-06",
    },
]


@pytest.fixture(autouse=True)
def _restore_root_logging():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def runner():
    return CliRunner(env={"JOURNAL_OBSERVABILITY__LOG_LEVEL": "WARNING"})


@pytest.fixture
def trades_file(tmp_path):
    path = tmp_path / "trades.json"
    path.write_text(json.dumps(TRADES))
    return path


class TestReport:
    def test_json_report(self, runner, trades_file):
        result = runner.invoke(
            main, ["report", "--trades", str(trades_file), "--format", "json", "--year", "2024"]
        )
        assert result.exit_code == 0, result.output
        payload = json.loads(result.stdout)
        balances = [p["balance"] for p in payload["equity_curve"]]
        assert balances == ["28000", "28600.00", "28400.00", "28700.00"]
        assert payload["drawdown"]["max_drawdown"] == "200.00"
        assert payload["streaks"]["streaks"] == [1, -1, 1]
        assert payload["monthly_calendar"]["Mar"]["trade_count"] == 3
        # Entry instants are labelled in exchange time, not UTC
        assert payload["summary"]["by_time_classification"] == {
            "Cash Open": "400.00",
            "Power Hour": "300.00",
        }

    def test_starting_balance_option(self, runner, trades_file):
        result = runner.invoke(
            main,
            ["report", "--trades", str(trades_file), "--format", "json",
             "--starting-balance", "$10,000"],
        )
        assert result.exit_code == 0, result.output
        payload = json.loads(result.stdout)
        assert payload["starting_balance"] == "10000"

    def test_bad_starting_balance_falls_back(self, runner, trades_file):
        result = runner.invoke(
            main,
            ["report", "--trades", str(trades_file), "--format", "json",
             "--starting-balance", "lots"],
        )
        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout)["starting_balance"] == "28000"

    def test_text_report(self, runner, trades_file):
        result = runner.invoke(main, ["report", "--trades", str(trades_file), "--year", "2024"])
        assert result.exit_code == 0, result.output
        assert "PERFORMANCE REPORT" in result.stdout
        assert "Max Drawdown:     200.00" in result.stdout
        assert "Mar" in result.stdout

    def test_wrapped_trades_key(self, runner, tmp_path):
        path = tmp_path / "wrapped.json"
        path.write_text(json.dumps({"trades": TRADES}))
        result = runner.invoke(main, ["report", "--trades", str(path), "--format", "json"])
        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout)["summary"]["closed_trades"] == 3

    def test_invalid_json(self, runner, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("[{")
        result = runner.invoke(main, ["report", "--trades", str(path)])
        assert result.exit_code != 0
        assert "not valid JSON" in result.output

    def test_bad_trade_row(self, runner, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps([{"ticker": "SPY", "quantity": "many"}]))
        result = runner.invoke(main, ["report", "--trades", str(path)])
        assert result.exit_code != 0
        assert "invalid trade row" in result.output

    def test_non_object_rows(self, runner, tmp_path):
        path = tmp_path / "rows.json"
        path.write_text(json.dumps([TRADES[0], "SPY 510C"]))
        result = runner.invoke(main, ["report", "--trades", str(path)])
        assert result.exit_code == 1
        assert "trade 1 is not an object" in result.output
        assert "Traceback" not in result.output


class TestClassify:
    @pytest.mark.parametrize(
        "value, label",
        [("08:45", "Cash Open"), ("10:00", "Euro Close"), ("14:55", "Power Hour"), ("12:00", "Other")],
    )
    def test_clock_times(self, runner, value, label):
        result = runner.invoke(main, ["classify", value])
        assert result.exit_code == 0
        assert result.stdout.strip() == label

    def test_iso_timestamp_uses_exchange_timezone(self, runner):
        result = runner.invoke(main, ["classify", "2024-03-04T20:40:00Z"])
        assert result.stdout.strip() == "Power Hour"

    def test_invalid_time(self, runner):
        result = runner.invoke(main, ["classify", "noon"])
        assert result.exit_code != 0
