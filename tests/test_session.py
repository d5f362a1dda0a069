"""
Tests for the Calculator Session adapter and its debouncer.
"""

import threading
import time

import pytest

from savings_engine.config import load_settings
from savings_engine.models import (
    ANNUAL_RETURN_PERCENT,
    CURRENT_SAVINGS,
    GOAL_AMOUNT,
    TIME_HORIZON_YEARS,
)
from savings_engine.presets import DEFAULT_VALUES
from savings_engine.session import CalculatorSession, Debouncer


class TestDebouncer:
    """Only the latest trigger in a burst runs."""

    def test_flush_runs_pending_call_once(self):
        calls = []
        debouncer = Debouncer(60, lambda: calls.append(1))

        debouncer.trigger()
        debouncer.trigger()
        debouncer.trigger()
        assert debouncer.pending

        debouncer.flush()
        assert calls == [1]
        assert not debouncer.pending

    def test_flush_without_pending_is_noop(self):
        calls = []
        Debouncer(60, lambda: calls.append(1)).flush()
        assert calls == []

    def test_cancel_drops_pending_call(self):
        calls = []
        debouncer = Debouncer(60, lambda: calls.append(1))

        debouncer.trigger()
        debouncer.cancel()
        debouncer.flush()

        assert calls == []

    def test_fires_after_quiet_interval(self):
        fired = threading.Event()
        debouncer = Debouncer(0.01, fired.set)

        debouncer.trigger()

        assert fired.wait(timeout=5)
        assert not debouncer.pending

    def test_timed_callback_error_is_logged(self, caplog):
        done = threading.Event()

        def failing():
            done.set()
            raise RuntimeError("boom")

        debouncer = Debouncer(0.01, failing)
        with caplog.at_level("ERROR", logger="savings_engine.session"):
            debouncer.trigger()
            assert done.wait(timeout=5)
            for _ in range(500):
                if "Debounced callback failed" in caplog.text:
                    break
                time.sleep(0.01)

        assert not debouncer.pending
        assert "Debounced callback failed" in caplog.text

    def test_flush_propagates_callback_error(self):
        def failing():
            raise RuntimeError("boom")

        debouncer = Debouncer(60, failing)
        debouncer.trigger()

        with pytest.raises(RuntimeError, match="boom"):
            debouncer.flush()
        assert not debouncer.pending


class TestCalculatorSession:
    """Form state, validation and recompute dispatch."""

    @pytest.fixture
    def results(self):
        return []

    @pytest.fixture
    def session(self, results):
        session = CalculatorSession(on_result=results.append, debounce_seconds=60)
        yield session
        session.close()

    def test_starts_with_defaults(self, session):
        assert session.values == DEFAULT_VALUES
        assert session.errors == {}

    def test_input_sanitizes_and_defers(self, session, results):
        text = session.input(ANNUAL_RETURN_PERCENT, "6.789")

        assert text == "6.78"
        assert session.values[ANNUAL_RETURN_PERCENT] == "6.78"
        assert session.pending
        assert results == []

    def test_burst_of_input_computes_once(self, session, results):
        for raw in ("1", "10", "100", "1000"):
            session.input(GOAL_AMOUNT, raw)
        session.flush()

        assert len(results) == 1
        assert results[0].final_amount == 1000

    def test_commit_records_error_without_blocking(self, session, results):
        session.input(TIME_HORIZON_YEARS, "")
        assert session.commit(TIME_HORIZON_YEARS) is False
        assert session.errors == {TIME_HORIZON_YEARS: "Please enter a value"}

        session.flush()
        # Projection still ran with the best-effort horizon of 0
        assert results[-1].monthly_payment == 0

    def test_commit_clears_error(self, session):
        session.input(GOAL_AMOUNT, "")
        session.commit(GOAL_AMOUNT)
        session.input(GOAL_AMOUNT, "25000")

        assert session.commit(GOAL_AMOUNT) is True
        assert session.errors == {}

    def test_commit_defaults_empty_savings(self, session):
        session.input(CURRENT_SAVINGS, "")

        assert session.commit(CURRENT_SAVINGS) is True
        assert session.values[CURRENT_SAVINGS] == "0"

    def test_load_example(self, session, results):
        session.input(CURRENT_SAVINGS, "5000")
        session.input(GOAL_AMOUNT, "")
        session.commit(GOAL_AMOUNT)

        result = session.load_example("emergency")

        assert session.values == {
            GOAL_AMOUNT: "15000",
            TIME_HORIZON_YEARS: "2",
            ANNUAL_RETURN_PERCENT: "4",
            CURRENT_SAVINGS: "0",
        }
        assert session.errors == {}
        assert not session.pending
        assert result.monthly_payment == pytest.approx(601.37, abs=0.01)
        assert results == [result]

    def test_unknown_example_raises(self, session):
        with pytest.raises(KeyError):
            session.load_example("yacht")

    def test_reset(self, session, results):
        session.input(GOAL_AMOUNT, "1")
        session.input(TIME_HORIZON_YEARS, "")
        session.commit(TIME_HORIZON_YEARS)

        result = session.reset()

        assert session.values == DEFAULT_VALUES
        assert session.errors == {}
        assert not session.pending
        assert result.monthly_payment == pytest.approx(698.39, abs=0.01)
        assert session.last_result is result

    def test_from_settings_applies_bounds(self):
        settings = load_settings({"ANNUAL_RETURN_MAX": "20", "DEBOUNCE_SECONDS": "60"})
        session = CalculatorSession.from_settings(settings)
        try:
            session.input(ANNUAL_RETURN_PERCENT, "25")

            assert session.commit(ANNUAL_RETURN_PERCENT) is False
            assert session.errors[ANNUAL_RETURN_PERCENT] == "Value must be no more than 20"
        finally:
            session.close()
