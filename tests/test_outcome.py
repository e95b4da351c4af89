"""Tests for bluejacket.outcome — handler return values to control flow."""

from bluejacket.outcome import CONTINUE, STOP, Outcome


class TestFromResult:
    def test_stop(self) -> None:
        assert Outcome.from_result(STOP) is Outcome.STOP

    def test_none_continues(self) -> None:
        assert Outcome.from_result(None) is Outcome.CONTINUE

    def test_arbitrary_values_continue(self) -> None:
        for value in (False, 0, "stop", "route", [], CONTINUE):
            assert Outcome.from_result(value) is Outcome.CONTINUE
