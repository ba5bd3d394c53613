"""Status aggregate: order status metadata consulted by the workflow.

A status carries the defaults used when a transition does not say otherwise:
its comment template and whether the customer is notified. Which statuses
count as "processing" or "completed" is configuration, see
``ordering.settings.WorkflowSettings``.
"""

from protean.fields import Boolean, String, Text

from ordering.domain import ordering


@ordering.aggregate
class Status:
    name = String(required=True, max_length=100)
    color = String(max_length=20)
    comment = Text()
    notify_customer = Boolean(default=False)
