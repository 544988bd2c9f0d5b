"""Tests for the status history log kept on the Order aggregate."""

from datetime import UTC, date, datetime, timedelta

import pytest
from catering.order.errors import InvalidStatusTransition
from catering.order.order import Order, StatusChange
from catering.order.status import OrderStatus, replay
from protean.exceptions import ValidationError


def _make_order():
    return Order.place(
        order_number="VG-20261120-HIST01",
        owner_id="cust-001",
        delivery_date=date(2026, 11, 20),
        delivery_hour="19:00",
        delivery_address="4 Canal Street",
        person_count=40,
        menu_price=22.0,
        total_price=880.0,
    )


class TestHistoryEntries:
    def test_new_order_has_no_history(self):
        assert _make_order().history() == []

    def test_each_transition_appends_one_entry(self):
        order = _make_order()
        order.transition_to("confirmed", notes="Deposit received", changed_by="staff-1")

        [change] = order.history()
        assert change.sequence == 1
        assert change.old_status == "pending"
        assert change.new_status == "confirmed"
        assert change.notes == "Deposit received"
        assert change.changed_by == "staff-1"
        assert change.changed_at == order.confirmed_at

    def test_transition_returns_the_appended_entry(self):
        order = _make_order()
        change = order.transition_to("confirmed")
        assert change in order.history()

    def test_history_follows_the_lifecycle(self):
        order = _make_order()
        for status in ("confirmed", "preparing", "ready", "delivering", "delivered"):
            order.transition_to(status)

        pairs = [(c.old_status, c.new_status) for c in order.history()]
        assert pairs == [
            ("pending", "confirmed"),
            ("confirmed", "preparing"),
            ("preparing", "ready"),
            ("ready", "delivering"),
            ("delivering", "delivered"),
        ]
        assert [c.sequence for c in order.history()] == [1, 2, 3, 4, 5]

    def test_entries_are_time_ordered(self):
        order = _make_order()
        for status in ("confirmed", "preparing", "ready"):
            order.transition_to(status)
        moments = [c.changed_at for c in order.history()]
        assert moments == sorted(moments)

    def test_rejected_transition_appends_nothing(self):
        order = _make_order()
        order.transition_to("confirmed")
        with pytest.raises(InvalidStatusTransition):
            order.transition_to("ready")
        assert len(order.history()) == 1

    def test_clock_stepping_back_keeps_log_ordered(self):
        order = _make_order()
        order.transition_to("confirmed")
        # Pretend the previous change was recorded slightly in the future
        future = datetime.now(UTC) + timedelta(minutes=5)
        order.history()[-1].changed_at = future

        change = order.transition_to("preparing")
        assert change.changed_at >= future


class TestReplay:
    def test_replay_of_empty_log_is_pending(self):
        assert replay([]) is OrderStatus.PENDING

    def test_replay_matches_current_status(self):
        order = _make_order()
        for status in ("confirmed", "preparing", "cancelled"):
            order.transition_to(status)
        assert order.replayed_status() is OrderStatus.CANCELLED
        assert order.replayed_status().value == order.status

    def test_replay_rejects_a_broken_chain(self):
        now = datetime.now(UTC)
        changes = [
            StatusChange(sequence=1, old_status="pending", new_status="confirmed", changed_at=now),
            StatusChange(sequence=2, old_status="preparing", new_status="ready", changed_at=now),
        ]
        with pytest.raises(ValueError, match="#2"):
            replay(changes)

    def test_replay_rejects_an_illegal_edge(self):
        now = datetime.now(UTC)
        changes = [StatusChange(sequence=1, old_status="pending", new_status="delivered", changed_at=now)]
        with pytest.raises(ValueError):
            replay(changes)

    def test_replayed_status_reports_a_validation_error(self):
        order = _make_order()
        order.add_status_history(
            StatusChange(sequence=1, old_status="ready", new_status="delivering", changed_at=datetime.now(UTC))
        )
        with pytest.raises(ValidationError) as exc:
            order.replayed_status()
        assert "status_history" in exc.value.messages
