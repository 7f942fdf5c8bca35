"""Cross-domain event contracts for Customer service events.

Consumed by the Logging service to record customer activity. Registered with
``domain.register_external_event()`` under the producer's ``__type__`` string
so Protean can deserialize them from the ``customers::customer`` stream.

The source-of-truth events are in src/customers/customer/events.py.
"""

from protean.core.event import BaseEvent
from protean.fields import DateTime, Identifier, String


class CustomerRegistered(BaseEvent):
    """A new customer account was created."""

    __version__ = 1

    customer_id = Identifier(required=True)
    email = String(required=True)
    full_name = String(required=True)
    registered_at = DateTime(required=True)
