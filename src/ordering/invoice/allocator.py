"""Sequence allocator: gap-free, per-prefix invoice numbers.

The prefix template may contain ``{year}``, ``{month}`` and ``{day}``; they
are replaced with the allocation date (zero-padded month and day). The first
allocation for a prefix seeds the counter from the highest invoice number
already stored on orders with that prefix, so numbering continues where it
left off.
"""

from dataclasses import dataclass
from datetime import date

import structlog
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from ordering.exceptions import AllocationConflict
from ordering.invoice.sequence import InvoiceSequence
from ordering.order.order import Order

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class InvoiceNumber:
    prefix: str
    number: int

    def __str__(self) -> str:
        return f"{self.prefix}{self.number}"


def resolve_prefix(template: str, today: date | None = None) -> str:
    today = today or date.today()
    return (
        template.replace("{year}", f"{today.year:04d}")
        .replace("{month}", f"{today.month:02d}")
        .replace("{day}", f"{today.day:02d}")
    )


class SequenceAllocator:
    def allocate(self, prefix_template: str, today: date | None = None) -> InvoiceNumber:
        prefix = resolve_prefix(prefix_template, today)
        repo = current_domain.repository_for(InvoiceSequence)

        try:
            sequence = repo.get(prefix)
        except ObjectNotFoundError:
            sequence = InvoiceSequence(prefix=prefix, last_number=self.highest_assigned(prefix))

        number = sequence.next_number()
        if self._is_taken(prefix, number):
            raise AllocationConflict(
                {"invoice_no": [f"Invoice number {prefix}{number} is already assigned to another order"]}
            )

        repo.add(sequence)
        logger.info("Invoice number allocated", prefix=prefix, invoice_no=number)
        return InvoiceNumber(prefix=prefix, number=number)

    @staticmethod
    def _orders_with_prefix(prefix: str) -> list[Order]:
        return current_domain.repository_for(Order)._dao.query.filter(invoice_prefix=prefix).all().items

    def highest_assigned(self, prefix: str) -> int:
        """``max(invoice_no)`` over orders carrying ``prefix``; 0 when none."""
        return max((o.invoice_no for o in self._orders_with_prefix(prefix) if o.invoice_no is not None), default=0)

    def _is_taken(self, prefix: str, number: int) -> bool:
        return any(o.invoice_no == number for o in self._orders_with_prefix(prefix))
