"""Status definition: command and handler."""

from protean import handle
from protean.fields import Boolean, Identifier, String, Text
from protean.utils.globals import current_domain

from ordering.domain import ordering
from ordering.status.status import Status


@ordering.command(part_of="Status")
class DefineStatus:
    """Create a status, optionally with a caller-chosen identifier."""

    status_id = Identifier()
    name = String(required=True, max_length=100)
    color = String(max_length=20)
    comment = Text()
    notify_customer = Boolean(default=False)


@ordering.command_handler(part_of=Status)
class StatusManagementHandler:
    @handle(DefineStatus)
    def define_status(self, command):
        values = {
            "name": command.name,
            "color": command.color,
            "comment": command.comment,
            "notify_customer": bool(command.notify_customer),
        }
        if command.status_id:
            values["id"] = str(command.status_id)

        status = Status(**values)
        current_domain.repository_for(Status).add(status)
        return str(status.id)
