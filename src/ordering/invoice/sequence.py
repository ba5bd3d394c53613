"""InvoiceSequence aggregate: the per-prefix invoice counter.

One row per resolved prefix (e.g. ``INV20240101``). Allocation increments
``last_number`` and saves the row in the same unit of work as the order it
numbers; two transactions racing on one prefix both write this row, and the
aggregate's version check makes the later commit fail instead of handing
out the same number twice.
"""

from protean.fields import Integer, String

from ordering.domain import ordering


@ordering.aggregate
class InvoiceSequence:
    prefix = String(identifier=True, required=True, max_length=100)
    last_number = Integer(default=0, min_value=0)

    def next_number(self) -> int:
        self.last_number = (self.last_number or 0) + 1
        return self.last_number
