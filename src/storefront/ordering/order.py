"""Order aggregate: the immutable result of a checkout.

Order lines copy the product name and unit price at checkout time, so later
catalogue changes never alter a placed order. There are no mutators.
"""

from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String

from storefront.domain import storefront
from storefront.ordering.events import OrderPlaced


@storefront.entity(part_of="Order")
class OrderItem:
    product_id = Identifier(required=True)
    name = String(required=True, max_length=100)
    quantity = Integer(required=True, min_value=1)
    unit_price = Float(required=True, min_value=0.0)

    @property
    def subtotal(self) -> float:
        return round(self.unit_price * self.quantity, 2)


@storefront.aggregate
class Order:
    user_id = Identifier(required=True)
    items = HasMany(OrderItem)
    total = Float(required=True, min_value=0.0)
    currency = String(max_length=3, default="USD")
    created_at = DateTime()

    @invariant.post
    def must_have_at_least_one_item(self):
        if not self.items:
            raise ValidationError({"items": ["An order must have at least one item"]})

    @invariant.post
    def total_must_match_items(self):
        expected = round(sum(item.unit_price * item.quantity for item in self.items), 2)
        if self.total is not None and round(self.total, 2) != expected:
            raise ValidationError({"total": ["Order total must equal the sum of its line items"]})

    @classmethod
    def place(cls, user_id, lines, currency="USD"):
        """Build an order from ``(product, quantity)`` pairs, snapshotting each product."""
        items = [
            OrderItem(
                product_id=str(product.id),
                name=product.name,
                quantity=quantity,
                unit_price=product.price,
            )
            for product, quantity in lines
        ]
        now = datetime.now(UTC)
        order = cls(
            user_id=str(user_id),
            items=items,
            total=round(sum(item.unit_price * item.quantity for item in items), 2),
            currency=currency,
            created_at=now,
        )
        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                user_id=str(user_id),
                item_count=len(items),
                total=order.total,
                currency=order.currency,
                placed_at=now,
            )
        )
        return order

    def belongs_to(self, user_id) -> bool:
        return str(self.user_id) == str(user_id)
