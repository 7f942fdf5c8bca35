"""Retention: purge log entries older than a cutoff."""

import structlog
from protean import handle
from protean.fields import DateTime
from protean.utils.globals import current_domain

from logstore.domain import logstore
from logstore.entry.log_entry import LogEntry

logger = structlog.get_logger(__name__)

_BATCH_SIZE = 500


@logstore.command(part_of="LogEntry")
class PurgeLogEntries:
    older_than = DateTime(required=True)


@logstore.command_handler(part_of=LogEntry)
class PurgeLogEntriesHandler:
    @handle(PurgeLogEntries)
    def purge_log_entries(self, command):
        repo = current_domain.repository_for(LogEntry)
        purged = 0
        while True:
            batch = repo._dao.query.filter(created_at__lt=command.older_than).limit(_BATCH_SIZE).all().items
            if not batch:
                break
            for entry in batch:
                repo._dao.delete(entry)
            purged += len(batch)

        logger.info("Purged log entries", count=purged, older_than=command.older_than.isoformat())
        return purged
