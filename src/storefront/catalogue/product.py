"""Product aggregate root.

Products are shared by reference: carts and wishlists hold only the product
identifier and resolve price and stock at read time. Only the author (a
seller) may edit or delete a product.
"""

from datetime import UTC, datetime

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, Identifier, Integer, List, String, Text

from storefront.catalogue.events import ProductAdded, ProductDetailsUpdated, ProductStockReserved
from storefront.domain import storefront
from storefront.guards import ensure_stock

# Sentinel for distinguishing "not provided" from None in partial updates
_UNSET = object()


@storefront.aggregate
class Product:
    """Product aggregate root."""

    name: String(required=True, max_length=100)
    price: Float(required=True, min_value=0.0)
    stock: Integer(default=0, min_value=0)
    category: String(required=True, max_length=50)
    description: Text(default="")
    image: String(max_length=500)
    review_ids: List(content_type=String)
    author_id: Identifier(required=True)
    created_at: DateTime()
    updated_at: DateTime()

    @invariant.post
    def name_must_have_minimum_length(self):
        if self.name is not None and len(self.name.strip()) < 3:
            raise ValidationError({"name": ["Product name must be at least 3 characters"]})

    @invariant.post
    def review_ids_must_be_unique(self):
        ids = self.review_ids or []
        if len(ids) != len(set(ids)):
            raise ValidationError({"review_ids": ["A review can be attached to a product only once"]})

    @classmethod
    def create(
        cls,
        author_id,
        name,
        price,
        category,
        description=None,
        image=None,
        stock=0,
    ):
        now = datetime.now(UTC)
        product = cls(
            author_id=author_id,
            name=name,
            price=price,
            category=category,
            description=description or "",
            image=image,
            stock=stock or 0,
            review_ids=[],
            created_at=now,
            updated_at=now,
        )
        product.raise_(
            ProductAdded(
                product_id=str(product.id),
                author_id=str(author_id),
                name=product.name,
                category=product.category,
                price=product.price,
                stock=product.stock,
                added_at=now,
            )
        )
        return product

    def is_authored_by(self, user_id) -> bool:
        return str(self.author_id) == str(user_id)

    def update_details(
        self,
        name=_UNSET,
        price=_UNSET,
        category=_UNSET,
        description=_UNSET,
        image=_UNSET,
        stock=_UNSET,
    ):
        previous_price = self.price
        now = datetime.now(UTC)

        with atomic_change(self):
            if name is not _UNSET:
                self.name = name
            if price is not _UNSET:
                self.price = price
            if category is not _UNSET:
                self.category = category
            if description is not _UNSET:
                self.description = description or ""
            if image is not _UNSET:
                self.image = image
            if stock is not _UNSET:
                self.stock = stock
            self.updated_at = now

        self.raise_(
            ProductDetailsUpdated(
                product_id=str(self.id),
                name=self.name,
                category=self.category,
                price=self.price,
                previous_price=previous_price,
                stock=self.stock,
                updated_at=now,
            )
        )

    # -------------------------------------------------------------------
    # Reviews
    # -------------------------------------------------------------------
    def attach_review(self, review_id) -> bool:
        """Record a review id. Re-attaching an id already present is a no-op."""
        review_id = str(review_id)
        ids = list(self.review_ids or [])
        if review_id in ids:
            return False

        self.review_ids = [*ids, review_id]
        return True

    def detach_review(self, review_id) -> bool:
        review_id = str(review_id)
        ids = list(self.review_ids or [])
        if review_id not in ids:
            return False

        self.review_ids = [i for i in ids if i != review_id]
        return True

    # -------------------------------------------------------------------
    # Stock
    # -------------------------------------------------------------------
    def reserve_stock(self, quantity):
        """Draw down stock for a checkout line."""
        ensure_stock(self, quantity)
        self.stock = self.stock - quantity
        self.updated_at = datetime.now(UTC)

        self.raise_(
            ProductStockReserved(
                product_id=str(self.id),
                quantity=quantity,
                remaining_stock=self.stock,
            )
        )
