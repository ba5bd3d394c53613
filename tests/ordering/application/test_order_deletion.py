"""Application tests for deleting orders."""

import pytest
from ordering.coupon.ledger import CouponLedger
from ordering.history.recorder import ORDER_SUBJECT, StatusHistoryRecorder
from ordering.order.order import Order
from protean import current_domain
from protean.exceptions import ObjectNotFoundError


@pytest.fixture
def full_order(engine, statuses, make_menu, make_coupon, line_item):
    def _full_order():
        pizza = make_menu()
        created = engine.create_order(customer_id="cust-1")
        order_id = created["order_id"]
        engine.attach_line_items(order_id, [line_item(pizza, 1)])
        engine.attach_totals(order_id, [{"code": "total", "title": "Total", "value": 9.5}])
        engine.attach_coupon(order_id, "cust-1", {"code": "SAVE5", "amount": 5})
        engine.transition_status(order_id, {"target_status_id": statuses["pending"]})
        return order_id

    make_coupon(code="SAVE5")
    return _full_order


class TestDeleteOrders:
    def test_deletes_exactly_the_given_orders(self, engine, full_order):
        first, second, kept = full_order(), full_order(), full_order()

        assert engine.delete_orders([first, second]) == 2

        repo = current_domain.repository_for(Order)
        for order_id in (first, second):
            with pytest.raises(ObjectNotFoundError):
                repo.get(order_id)
        assert str(repo.get(kept).id) == kept

    def test_cascades_to_history_and_redemptions(self, engine, full_order):
        order_id, kept = full_order(), full_order()

        engine.delete_orders([order_id])

        assert StatusHistoryRecorder().entries_for(ORDER_SUBJECT, order_id) == []
        assert CouponLedger().redemptions_for(order_id) == []
        assert len(StatusHistoryRecorder().entries_for(ORDER_SUBJECT, kept)) == 1
        assert CouponLedger().active_redemption(kept) is not None

    def test_kept_order_keeps_its_contents(self, engine, full_order):
        order_id, kept = full_order(), full_order()

        engine.delete_orders([order_id])

        order = current_domain.repository_for(Order).get(kept)
        assert len(order.line_items) == 1
        assert len(order.totals) == 1

    def test_unknown_id_counts_zero(self, engine):
        assert engine.delete_orders(["missing"]) == 0

    def test_duplicates_count_once(self, engine, full_order):
        order_id = full_order()
        assert engine.delete_orders([order_id, order_id, "missing"]) == 1

    def test_empty_list(self, engine):
        assert engine.delete_orders([]) == 0
