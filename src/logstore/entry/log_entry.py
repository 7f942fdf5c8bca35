"""LogEntry aggregate."""

import os
import socket
from datetime import datetime
from enum import Enum

from protean.fields import DateTime, Identifier, String, Text

from logstore.domain import logstore


class LogLevel(Enum):
    TRACE = "Trace"
    DEBUG = "Debug"
    INFORMATION = "Information"
    WARNING = "Warning"
    ERROR = "Error"
    CRITICAL = "Critical"


def default_environment():
    return os.environ.get("PROTEAN_ENV") or "Development"


def naive_local(value):
    """Express an aware datetime as naive local time, like ``datetime.now()`` stamps."""
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone().replace(tzinfo=None)


@logstore.aggregate
class LogEntry:
    """One log record written by a service."""

    level = String(required=True, choices=LogLevel, default=LogLevel.INFORMATION.value)
    message = String(required=True, max_length=2000)
    service_name = String(required=True, max_length=100)
    category = String(required=True, max_length=100)
    correlation_id = String(max_length=100)
    user_id = Identifier()
    exception = String(max_length=4000)
    stack_trace = String(max_length=8000)
    properties = Text()  # JSON object
    timestamp = DateTime(default=datetime.now)
    machine_name = String(max_length=100, default=socket.gethostname)
    environment = String(max_length=50, default=default_environment)
    application_version = String(max_length=50)
    created_at = DateTime(default=datetime.now)
