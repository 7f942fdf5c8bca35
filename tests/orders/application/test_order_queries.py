"""Application tests for order list filters, sorting and paging."""

import json
from datetime import datetime, timedelta

import pytest
from orders.order.creation import CreateOrder
from orders.order.modification import UpdateOrder
from orders.order.queries import get_order, list_orders
from protean import current_domain
from protean.exceptions import ValidationError

OTHER_CUSTOMER = "8e2a5f3b-1d66-4e9f-a09b-2c3d4e5f6071"


@pytest.fixture()
def order_ids(customer, customer_directory, laptop, mouse):
    customer_directory.register(OTHER_CUSTOMER, email="luis@example.com", full_name="Luis Perez")

    def place(customer_id, product, quantity):
        return current_domain.process(
            CreateOrder(customer_id=customer_id, items=json.dumps([{"product_id": product.id, "quantity": quantity}])),
            asynchronous=False,
        )

    ids = [
        place(customer.id, mouse, 1),
        place(customer.id, laptop, 1),
        place(OTHER_CUSTOMER, mouse, 2),
    ]
    current_domain.process(UpdateOrder(order_id=ids[1], status="Confirmed"), asynchronous=False)
    return ids


class TestListOrders:
    def test_default_newest_first(self, order_ids):
        result = list_orders()
        assert result.total_count == 3
        assert [str(o.id) for o in result.items] == list(reversed(order_ids))

    def test_filter_by_customer(self, order_ids, customer):
        result = list_orders(customer_id=customer.id)
        assert result.total_count == 2

    def test_filter_by_status(self, order_ids):
        result = list_orders(status="Confirmed")
        assert [str(o.id) for o in result.items] == [order_ids[1]]

    def test_filter_by_order_number_fragment(self, order_ids):
        number = get_order(order_ids[2]).order_number
        result = list_orders(order_number=number[-8:].lower())
        assert [str(o.id) for o in result.items] == [order_ids[2]]

    def test_date_range(self, order_ids):
        now = datetime.now()
        assert list_orders(from_date=now - timedelta(hours=1), to_date=now + timedelta(hours=1)).total_count == 3
        assert list_orders(from_date=now + timedelta(days=1)).total_count == 0

    def test_sort_by_total_amount(self, order_ids):
        ascending = [o.total_amount for o in list_orders(sort_by="totalAmount").items]
        descending = [o.total_amount for o in list_orders(sort_by="totalAmount", sort_direction="desc").items]
        assert ascending == sorted(ascending)
        assert descending == sorted(ascending, reverse=True)

    def test_unknown_sort_field(self, order_ids):
        with pytest.raises(ValidationError):
            list_orders(sort_by="colour")

    def test_paging(self, order_ids):
        result = list_orders(page=2, page_size=2)
        assert len(result.items) == 1
        assert result.total_pages == 2
        assert result.has_previous is True
        assert result.has_next is False

    def test_invalid_paging_falls_back_to_defaults(self, order_ids):
        result = list_orders(page=0, page_size=500)
        assert result.current_page == 1
        assert result.page_size == 10
