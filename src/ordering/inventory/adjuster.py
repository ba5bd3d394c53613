"""Inventory adjuster: subtracts an order's quantities from menu stock.

Runs inside the transition's unit of work and is called at most once per
order (the workflow checks the status history first). What happens when a
menu is missing or a decrement would cross the stock floor is decided by
``WorkflowSettings.stock_failure_policy``:

    abort  raise SideEffectFailure; the transition rolls back
    skip   log a warning, skip the missing menu or stop at the floor, and
           report the menu in ``StockAdjustment.shortfalls``
"""

from dataclasses import dataclass, field

import structlog
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from ordering.exceptions import SideEffectFailure
from ordering.menu.menu import Menu, StockDirection
from ordering.order.order import Order
from ordering.settings import StockFailurePolicy

logger = structlog.get_logger(__name__)


@dataclass
class StockAdjustment:
    """Outcome of one order's stock decrement."""

    decremented: dict[str, int] = field(default_factory=dict)
    untracked: list[str] = field(default_factory=list)
    shortfalls: list[str] = field(default_factory=list)


class InventoryAdjuster:
    def __init__(self, policy=StockFailurePolicy.ABORT, floor: int = 0):
        self.policy = StockFailurePolicy(policy)
        self.floor = floor

    def apply_decrement(self, order: Order) -> StockAdjustment:
        repo = current_domain.repository_for(Menu)
        result = StockAdjustment()
        touched = {}

        for line_item in order.line_items:
            menu_id = str(line_item.menu_id)
            menu = touched.get(menu_id) or self._find_menu(repo, menu_id, order)
            if menu is None:
                result.shortfalls.append(menu_id)
                continue

            if not menu.subtract_stock:
                result.untracked.append(menu_id)
                continue

            quantity = line_item.quantity
            available = menu.stock_qty - self.floor
            if quantity > available:
                if self.policy == StockFailurePolicy.ABORT:
                    raise SideEffectFailure(
                        {
                            "stock_qty": [
                                f"Menu {menu_id} has {menu.stock_qty} in stock, "
                                f"cannot subtract {quantity} without going below {self.floor}"
                            ]
                        }
                    )
                logger.warning(
                    "Stock decrement clamped at floor",
                    order_id=str(order.id),
                    menu_id=menu_id,
                    requested=quantity,
                    stock_qty=menu.stock_qty,
                    floor=self.floor,
                )
                result.shortfalls.append(menu_id)
                quantity = max(available, 0)
                if quantity == 0:
                    continue

            menu.update_stock(quantity, StockDirection.SUBTRACT.value)
            touched[menu_id] = menu
            result.decremented[menu_id] = result.decremented.get(menu_id, 0) + quantity
            logger.info(
                "Stock decremented",
                order_id=str(order.id),
                menu_id=menu_id,
                quantity=quantity,
                stock_qty=menu.stock_qty,
            )

        for menu in touched.values():
            repo.add(menu)

        return result

    def _find_menu(self, repo, menu_id, order):
        try:
            return repo.get(menu_id)
        except ObjectNotFoundError:
            if self.policy == StockFailurePolicy.ABORT:
                raise SideEffectFailure({"menu_id": [f"Menu {menu_id} does not exist"]}) from None
            logger.warning("Menu missing, stock not decremented", order_id=str(order.id), menu_id=menu_id)
            return None
