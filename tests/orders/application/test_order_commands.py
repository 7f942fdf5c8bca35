"""Application tests for order commands dispatched through the domain."""

import json

import pytest
from orders.order.creation import CreateOrder
from orders.order.modification import UpdateOrder
from orders.order.order import Order
from orders.order.queries import get_order
from orders.order.removal import DeleteOrder
from protean import current_domain
from protean.exceptions import ObjectNotFoundError, ValidationError
from shared.errors import BusinessRuleError


def _place(customer_id, *items, **extra):
    return current_domain.process(
        CreateOrder(customer_id=customer_id, items=json.dumps(list(items)), **extra),
        asynchronous=False,
    )


def _stored_event_types(order_id):
    messages = current_domain.event_store.store.read(f"orders::order-{order_id}")
    return [m.metadata.headers.type for m in messages if m.metadata and m.metadata.headers]


class TestCreateOrder:
    def test_prices_come_from_catalog(self, customer, laptop, mouse):
        order_id = _place(
            customer.id,
            {"product_id": laptop.id, "quantity": 1},
            {"product_id": mouse.id, "quantity": 2},
            shipping_city="Madrid",
        )

        order = get_order(order_id)
        assert order.sub_total == 1350.99
        assert order.tax_amount == 135.1
        assert order.shipping_cost == 0.0
        assert order.total_amount == 1486.09
        assert {i.product_sku for i in order.items} == {"DELL-XPS13-001", "LOGI-MX-001"}
        assert order.shipping_address.city == "Madrid"

    def test_discount_in_items_is_ignored(self, customer, laptop):
        order_id = _place(customer.id, {"product_id": laptop.id, "quantity": 1, "discount": 1299.99})

        order = get_order(order_id)
        assert order.items[0].discount == 0.0
        assert order.sub_total == 1299.99
        assert order.total_amount == 1429.99

    def test_order_created_is_stored(self, customer, mouse):
        order_id = _place(customer.id, {"product_id": mouse.id, "quantity": 1})
        assert "Orders.OrderCreated.v1" in _stored_event_types(order_id)

    def test_unknown_customer(self, customer_directory, mouse):
        with pytest.raises(ObjectNotFoundError) as exc:
            _place("0c5f0000-0000-4000-8000-000000000000", {"product_id": mouse.id, "quantity": 1})
        assert "Customer" in str(exc.value)

    def test_unknown_product(self, customer, product_catalog):
        with pytest.raises(ObjectNotFoundError) as exc:
            _place(customer.id, {"product_id": "missing", "quantity": 1})
        assert "Product with id missing" in str(exc.value)

    def test_inactive_product_is_not_found(self, customer, product_catalog):
        product_catalog.register("33333333-3333-4333-8333-333333333333", name="Retired", price=5.0, is_active=False)
        with pytest.raises(ObjectNotFoundError):
            _place(customer.id, {"product_id": "33333333-3333-4333-8333-333333333333", "quantity": 1})

    def test_insufficient_stock(self, customer, mouse):
        with pytest.raises(BusinessRuleError) as exc:
            _place(customer.id, {"product_id": mouse.id, "quantity": 4})
        assert "Available: 3, Requested: 4" in str(exc.value)

    def test_stock_checked_against_summed_quantity(self, customer, mouse):
        with pytest.raises(BusinessRuleError):
            _place(customer.id, {"product_id": mouse.id, "quantity": 2}, {"product_id": mouse.id, "quantity": 2})

    def test_quantity_out_of_range(self, customer, mouse):
        with pytest.raises(ValidationError):
            _place(customer.id, {"product_id": mouse.id, "quantity": 0})

    def test_empty_items(self, customer):
        with pytest.raises(ValidationError):
            current_domain.process(CreateOrder(customer_id=customer.id, items="[]"), asynchronous=False)


class TestUpdateOrder:
    @pytest.fixture()
    def order_id(self, customer, mouse):
        return _place(customer.id, {"product_id": mouse.id, "quantity": 1}, notes="First note")

    def test_status_change(self, order_id):
        current_domain.process(
            UpdateOrder(order_id=order_id, status="Confirmed", changed_by="staff", reason="Paid"),
            asynchronous=False,
        )
        order = get_order(order_id)
        assert order.status == "Confirmed"
        assert order.status_history[0].changed_by == "staff"
        assert "Orders.OrderStatusUpdated.v1" in _stored_event_types(order_id)

    def test_invalid_transition(self, order_id):
        with pytest.raises(ValidationError) as exc:
            current_domain.process(UpdateOrder(order_id=order_id, status="Delivered"), asynchronous=False)
        assert "Cannot transition from Pending to Delivered" in str(exc.value)

    def test_blank_notes_keep_existing(self, order_id):
        current_domain.process(UpdateOrder(order_id=order_id, notes=""), asynchronous=False)
        assert get_order(order_id).notes == "First note"

    def test_replace_items_reprices(self, order_id, laptop, mouse):
        current_domain.process(
            UpdateOrder(order_id=order_id, items=json.dumps([{"product_id": laptop.id, "quantity": 2}])),
            asynchronous=False,
        )
        order = get_order(order_id)
        assert [i.product_id for i in order.items] == [laptop.id]
        assert order.sub_total == 2599.98

    def test_increase_beyond_stock(self, order_id, mouse):
        item_id = str(get_order(order_id).items[0].id)
        with pytest.raises(BusinessRuleError):
            current_domain.process(
                UpdateOrder(
                    order_id=order_id,
                    items=json.dumps([{"id": item_id, "product_id": mouse.id, "quantity": 5}]),
                ),
                asynchronous=False,
            )

    def test_increase_within_stock_counts_only_the_difference(self, order_id, mouse):
        item_id = str(get_order(order_id).items[0].id)
        current_domain.process(
            UpdateOrder(
                order_id=order_id,
                items=json.dumps([{"id": item_id, "product_id": mouse.id, "quantity": 3}]),
            ),
            asynchronous=False,
        )
        assert get_order(order_id).items[0].quantity == 3

    def test_missing_order(self, customer):
        with pytest.raises(ObjectNotFoundError):
            current_domain.process(UpdateOrder(order_id="missing", status="Confirmed"), asynchronous=False)


class TestDeleteOrder:
    def test_soft_delete_hides_order(self, customer, mouse):
        order_id = _place(customer.id, {"product_id": mouse.id, "quantity": 1})
        current_domain.process(DeleteOrder(order_id=order_id), asynchronous=False)

        with pytest.raises(ObjectNotFoundError):
            get_order(order_id)
        assert current_domain.repository_for(Order).get(order_id).is_deleted is True

    def test_shipped_order_cannot_be_deleted(self, customer, mouse):
        order_id = _place(customer.id, {"product_id": mouse.id, "quantity": 1})
        for status in ("Confirmed", "Processing", "Shipped"):
            current_domain.process(UpdateOrder(order_id=order_id, status=status), asynchronous=False)

        with pytest.raises(BusinessRuleError):
            current_domain.process(DeleteOrder(order_id=order_id), asynchronous=False)

    def test_missing_order(self):
        with pytest.raises(ObjectNotFoundError):
            current_domain.process(DeleteOrder(order_id="missing"), asynchronous=False)
