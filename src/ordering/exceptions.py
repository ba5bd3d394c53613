"""Error taxonomy for the order workflow.

Built on Protean's exceptions so that code already handling
``ObjectNotFoundError`` and ``ValidationError`` keeps working. Every type
carries a field-keyed ``messages`` dict, like Protean's ``ValidationError``.
"""

from protean.exceptions import ObjectNotFoundError, ProteanExceptionWithMessage, ValidationError


class NotFound(ObjectNotFoundError):
    """An order, status, menu or coupon does not exist."""

    def __init__(self, messages):
        super().__init__(messages)
        self.messages = messages


class InvalidTransition(ValidationError):
    """The requested status change is not allowed for the order."""


class WorkflowError(ProteanExceptionWithMessage):
    """Base class for failures raised while applying transition side effects."""


class DuplicateEffect(WorkflowError):
    """A once-only side effect was about to be applied a second time."""


class SideEffectFailure(WorkflowError):
    """A stock or coupon operation failed; the whole transition is aborted."""


class AllocationConflict(WorkflowError):
    """A concurrent write won the race for the same order, menu or invoice sequence.

    The losing unit of work has been rolled back; the caller may retry.
    """


class NotificationFailure(WorkflowError):
    """A notification could not be sent. Logged only, never propagated."""
