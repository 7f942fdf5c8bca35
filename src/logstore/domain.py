"""Logging bounded context: a searchable store of service log entries.

Entries arrive over HTTP from any service and from the event handlers that
follow the Customer, Order and Product streams.
"""

import structlog
from protean.domain import Domain

logstore = Domain(name="logstore")

logger = structlog.get_logger(__name__)
