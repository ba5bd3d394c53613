"""StatusHistoryEntry aggregate: append-only audit trail of status changes.

Entries are written once per transition and never modified or removed while
their subject exists; they go away only together with the order they describe.
"""

from datetime import UTC, datetime

from protean.fields import Boolean, DateTime, Identifier, String, Text

from ordering.domain import ordering


@ordering.aggregate
class StatusHistoryEntry:
    subject_type = String(required=True, max_length=50)
    subject_id = Identifier(required=True)
    status_id = Identifier(required=True)
    comment = Text()
    notify = Boolean(default=False)
    actor_id = Identifier()
    created_at = DateTime(default=lambda: datetime.now(UTC))
