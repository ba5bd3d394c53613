"""Status history recorder: appends audit entries and answers "has it been there?".

The recorder only ever adds entries. ``has_reached`` is the precondition query
the workflow uses to keep once-per-order side effects from running twice.
"""

import structlog
from protean.utils.globals import current_domain

from ordering.history.history import StatusHistoryEntry

logger = structlog.get_logger(__name__)

ORDER_SUBJECT = "order"


class StatusHistoryRecorder:
    def record(
        self,
        subject_type: str,
        subject_id: str,
        status_id: str,
        comment: str | None = None,
        notify: bool = False,
        actor_id: str | None = None,
    ) -> StatusHistoryEntry:
        entry = StatusHistoryEntry(
            subject_type=subject_type,
            subject_id=str(subject_id),
            status_id=str(status_id),
            comment=comment,
            notify=bool(notify),
            actor_id=str(actor_id) if actor_id else None,
        )
        current_domain.repository_for(StatusHistoryEntry).add(entry)
        logger.info(
            "Status history recorded",
            subject_type=subject_type,
            subject_id=str(subject_id),
            status_id=str(status_id),
            notify=bool(notify),
        )
        return entry

    def entries_for(self, subject_type: str, subject_id: str) -> list[StatusHistoryEntry]:
        """All entries of a subject, oldest first."""
        entries = (
            current_domain.repository_for(StatusHistoryEntry)
            ._dao.query.filter(subject_type=subject_type, subject_id=str(subject_id))
            .all()
            .items
        )
        return sorted(entries, key=lambda entry: entry.created_at)

    def has_reached(self, subject_type: str, subject_id: str, status_ids) -> bool:
        """True if any entry of the subject references one of ``status_ids``."""
        wanted = {str(status_id) for status_id in status_ids}
        if not wanted:
            return False
        return any(str(entry.status_id) in wanted for entry in self.entries_for(subject_type, subject_id))

    def purge(self, subject_type: str, subject_id: str) -> int:
        """Remove a deleted subject's trail. Only used when the subject itself goes away."""
        repo = current_domain.repository_for(StatusHistoryEntry)
        entries = self.entries_for(subject_type, subject_id)
        for entry in entries:
            repo._dao.delete(entry)
        return len(entries)
