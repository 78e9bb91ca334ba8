"""Unit tests for tracking event reconciliation."""

import pytest

from heritage_hub.models.order import OrderSnapshot, OrderStatus
from heritage_hub.services.reconciler import (
    ALLOWED_TRANSITIONS,
    OUTCOME_INVALID_TRANSITION,
    OUTCOME_NO_CHANGE,
    OUTCOME_TRANSITION,
    classify_tracking_event,
    is_allowed_transition,
    reconcile,
)

LABEL_1 = "1Z0Y3G510331997230"
LABEL_2 = "1Z0Y3G510329462642"
LABEL_3 = "1Z0Y3G510335105258"
UNKNOWN = "1ZUNKNOWN000000000"


def make_order(status, **overrides) -> OrderSnapshot:
    values = {
        "record_id": "recORDER1",
        "order_number": "1042",
        "current_status": status,
        "label_1_tracking": LABEL_1,
        "label_2_tracking": LABEL_2,
        "label_3_tracking": LABEL_3,
    }
    values.update(overrides)
    return OrderSnapshot(**values)


class TestClassifyTransit:
    """TRANSIT and IN_TRANSIT scans."""

    @pytest.mark.parametrize("carrier_status", ["TRANSIT", "IN_TRANSIT"])
    def test_pending_becomes_kit_sent(self, carrier_status):
        order = make_order("Pending")
        assert classify_tracking_event(order, LABEL_1, carrier_status) is OrderStatus.KIT_SENT

    @pytest.mark.parametrize("current", ["Quality Check", "Digitizing"])
    def test_late_stage_becomes_shipping_back(self, current):
        order = make_order(current)
        assert classify_tracking_event(order, LABEL_3, "TRANSIT") is OrderStatus.SHIPPING_BACK

    @pytest.mark.parametrize(
        "current", ["Kit Sent", "Media Received", "Shipping Back", "Complete", "Canceled"]
    )
    def test_other_statuses_ignore_transit(self, current):
        assert classify_tracking_event(make_order(current), LABEL_1, "TRANSIT") is None

    def test_swapped_labels_follow_order_state(self):
        """Label 1 and Label 3 entered in each other's fields."""
        order = make_order("Quality Check", label_1_tracking=LABEL_3, label_3_tracking=LABEL_1)
        assert classify_tracking_event(order, LABEL_3, "TRANSIT") is OrderStatus.SHIPPING_BACK

        order = make_order("Pending", label_1_tracking=LABEL_3, label_3_tracking=LABEL_1)
        assert classify_tracking_event(order, LABEL_3, "TRANSIT") is OrderStatus.KIT_SENT

    def test_slot_does_not_matter_for_transit(self):
        order = make_order("Pending")
        assert classify_tracking_event(order, UNKNOWN, "TRANSIT") is OrderStatus.KIT_SENT


class TestClassifyDelivered:
    """DELIVERED scans."""

    def test_label_2_delivered_while_kit_sent(self):
        order = make_order("Kit Sent")
        assert classify_tracking_event(order, LABEL_2, "DELIVERED") is OrderStatus.MEDIA_RECEIVED

    @pytest.mark.parametrize("tracking_number", [LABEL_1, LABEL_3, UNKNOWN])
    def test_kit_delivered_to_customer_is_ignored(self, tracking_number):
        order = make_order("Kit Sent")
        assert classify_tracking_event(order, tracking_number, "DELIVERED") is None

    def test_shipping_back_delivered_completes(self):
        order = make_order("Shipping Back")
        assert classify_tracking_event(order, LABEL_3, "DELIVERED") is OrderStatus.COMPLETE

    @pytest.mark.parametrize(
        "current", ["Pending", "Media Received", "Digitizing", "Quality Check", "Complete"]
    )
    def test_other_statuses_ignore_delivery(self, current):
        assert classify_tracking_event(make_order(current), LABEL_2, "DELIVERED") is None


class TestClassifyOther:
    """Statuses and orders outside the rules."""

    @pytest.mark.parametrize(
        "carrier_status", ["PRE_TRANSIT", "RETURNED", "FAILURE", "UNKNOWN", "", None, "transit"]
    )
    def test_unhandled_carrier_status(self, carrier_status):
        assert classify_tracking_event(make_order("Pending"), LABEL_1, carrier_status) is None

    @pytest.mark.parametrize("current", [None, "", "On Hold"])
    def test_unknown_order_status(self, current):
        order = make_order(current)
        assert classify_tracking_event(order, LABEL_1, "TRANSIT") is None
        assert classify_tracking_event(order, LABEL_2, "DELIVERED") is None


class TestIsAllowedTransition:
    """The transition table."""

    @pytest.mark.parametrize(
        "current,proposed",
        [
            ("Pending", "Kit Sent"),
            ("Kit Sent", "Media Received"),
            ("Quality Check", "Shipping Back"),
            ("Shipping Back", "Complete"),
        ],
    )
    def test_allowed(self, current, proposed):
        assert is_allowed_transition(current, proposed) is True

    @pytest.mark.parametrize(
        "current,proposed",
        [
            ("Digitizing", "Shipping Back"),
            ("Pending", "Complete"),
            ("Media Received", "Digitizing"),
            ("Kit Sent", "Pending"),
            ("Complete", "Shipping Back"),
            ("Canceled", "Kit Sent"),
            ("Pending", "Pending"),
        ],
    )
    def test_rejected(self, current, proposed):
        assert is_allowed_transition(current, proposed) is False

    def test_accepts_enum_members(self):
        assert is_allowed_transition(OrderStatus.PENDING, OrderStatus.KIT_SENT) is True

    @pytest.mark.parametrize("current,proposed", [(None, "Kit Sent"), ("Pending", None), ("Nope", "Kit Sent")])
    def test_unknown_values_rejected(self, current, proposed):
        assert is_allowed_transition(current, proposed) is False

    def test_table_has_exactly_four_transitions(self):
        pairs = [(c, p) for c, targets in ALLOWED_TRANSITIONS.items() for p in targets]
        assert len(pairs) == 4

    def test_every_transition_moves_forward(self):
        order = list(OrderStatus)
        for current, targets in ALLOWED_TRANSITIONS.items():
            for proposed in targets:
                assert order.index(proposed) > order.index(current)


class TestReconcile:
    """Classification combined with the transition check."""

    def test_full_lifecycle(self):
        steps = [
            ("Pending", LABEL_1, "TRANSIT", OrderStatus.KIT_SENT),
            ("Kit Sent", LABEL_2, "DELIVERED", OrderStatus.MEDIA_RECEIVED),
            ("Quality Check", LABEL_3, "TRANSIT", OrderStatus.SHIPPING_BACK),
            ("Shipping Back", LABEL_3, "DELIVERED", OrderStatus.COMPLETE),
        ]
        for current, tracking_number, carrier_status, expected in steps:
            decision = reconcile(make_order(current), tracking_number, carrier_status)
            assert decision.outcome == OUTCOME_TRANSITION
            assert decision.should_update
            assert decision.current_status == current
            assert decision.proposed_status is expected

    def test_no_rule_is_no_change(self):
        decision = reconcile(make_order("Media Received"), LABEL_2, "DELIVERED")
        assert decision.outcome == OUTCOME_NO_CHANGE
        assert decision.proposed_status is None
        assert not decision.should_update

    def test_digitizing_shipment_is_rejected(self):
        """Classified as Shipping Back but not in the transition table."""
        decision = reconcile(make_order("Digitizing"), LABEL_3, "TRANSIT")
        assert decision.outcome == OUTCOME_INVALID_TRANSITION
        assert decision.current_status == "Digitizing"
        assert decision.proposed_status is OrderStatus.SHIPPING_BACK
        assert not decision.should_update

    def test_repeated_event_after_update_is_no_change(self):
        first = reconcile(make_order("Pending"), LABEL_1, "TRANSIT")
        assert first.should_update

        second = reconcile(make_order(first.proposed_status.value), LABEL_1, "TRANSIT")
        assert second.outcome == OUTCOME_NO_CHANGE

    @pytest.mark.parametrize("status", [s.value for s in OrderStatus])
    @pytest.mark.parametrize("carrier_status", ["TRANSIT", "IN_TRANSIT", "DELIVERED", "PRE_TRANSIT"])
    @pytest.mark.parametrize("tracking_number", [LABEL_1, LABEL_2, LABEL_3, UNKNOWN])
    def test_applied_transitions_are_always_allowed(self, status, carrier_status, tracking_number):
        decision = reconcile(make_order(status), tracking_number, carrier_status)
        if decision.should_update:
            assert is_allowed_transition(status, decision.proposed_status)

    def test_terminal_statuses_never_change(self):
        for status in ("Complete", "Canceled"):
            for carrier_status in ("TRANSIT", "IN_TRANSIT", "DELIVERED"):
                for tracking_number in (LABEL_1, LABEL_2, LABEL_3):
                    decision = reconcile(make_order(status), tracking_number, carrier_status)
                    assert not decision.should_update
