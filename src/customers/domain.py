"""Customer bounded context: accounts, credentials and addresses."""

import structlog
from protean.domain import Domain

customers = Domain(name="customers")

logger = structlog.get_logger(__name__)
