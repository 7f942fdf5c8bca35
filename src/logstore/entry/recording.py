"""Recording log entries: command and handler."""

import json

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import DateTime, Identifier, String, Text
from protean.utils.globals import current_domain

from logstore.domain import logstore
from logstore.entry.log_entry import LogEntry, naive_local

MAX_PROPERTIES_LENGTH = 4000

_ENTRY_FIELDS = (
    "level",
    "message",
    "service_name",
    "category",
    "correlation_id",
    "user_id",
    "exception",
    "stack_trace",
    "properties",
    "timestamp",
    "machine_name",
    "environment",
    "application_version",
)


@logstore.command(part_of="LogEntry")
class RecordLogEntry:
    level = String(required=True, max_length=20)
    message = String(required=True, max_length=2000)
    service_name = String(required=True, max_length=100)
    category = String(required=True, max_length=100)
    correlation_id = String(max_length=100)
    user_id = Identifier()
    exception = String(max_length=4000)
    stack_trace = String(max_length=8000)
    properties = Text()
    timestamp = DateTime()
    machine_name = String(max_length=100)
    environment = String(max_length=50)
    application_version = String(max_length=50)


def _checked_properties(properties):
    if not properties:
        return None
    if len(properties) > MAX_PROPERTIES_LENGTH:
        raise ValidationError({"properties": [f"Properties cannot exceed {MAX_PROPERTIES_LENGTH} characters"]})
    try:
        json.loads(properties)
    except json.JSONDecodeError as exc:
        raise ValidationError({"properties": ["Properties must be valid JSON"]}) from exc
    return properties


@logstore.command_handler(part_of=LogEntry)
class RecordLogEntryHandler:
    @handle(RecordLogEntry)
    def record_log_entry(self, command):
        values = {field: getattr(command, field) for field in _ENTRY_FIELDS}
        values["properties"] = _checked_properties(command.properties)
        values["timestamp"] = naive_local(command.timestamp)
        # Let the aggregate defaults fill anything the caller left out
        entry = LogEntry(**{k: v for k, v in values.items() if v is not None})
        current_domain.repository_for(LogEntry).add(entry)
        return str(entry.id)
