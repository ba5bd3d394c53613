"""Menu aggregate: the catalogue's stock row for a menu item.

Only stock is modelled here. When ``subtract_stock`` is off the menu does not
track stock and stock updates leave it untouched.
"""

from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import Boolean, Float, Integer, String

from ordering.domain import ordering


class StockDirection(Enum):
    SUBTRACT = "subtract"
    ADD = "add"


@ordering.aggregate
class Menu:
    name = String(required=True, max_length=255)
    price = Float(default=0.0)
    stock_qty = Integer(default=0)
    subtract_stock = Boolean(default=False)

    def update_stock(self, quantity, direction=StockDirection.SUBTRACT.value):
        """Apply a relative stock change. Returns the new stock quantity."""
        if quantity <= 0:
            raise ValidationError({"quantity": ["Quantity must be positive"]})

        if not self.subtract_stock:
            return self.stock_qty

        direction = StockDirection(direction)
        if direction == StockDirection.SUBTRACT:
            self.stock_qty = self.stock_qty - quantity
        else:
            self.stock_qty = self.stock_qty + quantity
        return self.stock_qty
