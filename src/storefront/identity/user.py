"""User aggregate: account identity, role, wishlist and the embedded cart.

The cart lives inside the User: each ``CartItem`` is a weak reference to a
Product (identifier only) plus a quantity. Price and stock are never copied
into the cart; they are resolved from the catalogue whenever the cart is read
or mutated.
"""

from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, HasMany, Identifier, Integer, List, String

from storefront.domain import storefront
from storefront.errors import NotFound
from storefront.guards import ensure_stock
from storefront.identity.events import (
    CartCleared,
    CartItemAdded,
    CartItemRemoved,
    CartQuantityUpdated,
    ProductLiked,
    ProductUnliked,
    ProfileUpdated,
    UserRegistered,
)


class UserRole(Enum):
    BUYER = "buyer"
    SELLER = "seller"


class Gender(Enum):
    MALE = "male"
    FEMALE = "female"
    OTHER = "other"


# Sentinel for distinguishing "not provided" from None in partial updates
_UNSET = object()


@storefront.entity(part_of="User")
class CartItem:
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)
    added_at = DateTime()


@storefront.aggregate
class User:
    username = String(required=True, max_length=30)
    email = String(max_length=254)
    password_hash = String(required=True, max_length=255)
    role = String(choices=UserRole, default=UserRole.BUYER.value)
    gender = String(choices=Gender)
    wishlist = List(content_type=String)
    cart = HasMany(CartItem)
    registered_at = DateTime()

    @invariant.post
    def username_must_have_minimum_length(self):
        if self.username is not None and len(self.username.strip()) < 3:
            raise ValidationError({"username": ["Username must be at least 3 characters"]})

    @invariant.post
    def one_cart_entry_per_product(self):
        product_ids = [str(item.product_id) for item in self.cart]
        if len(product_ids) != len(set(product_ids)):
            raise ValidationError({"cart": ["A product can appear in the cart only once"]})

    @invariant.post
    def wishlist_has_no_duplicates(self):
        wishlist = self.wishlist or []
        if len(wishlist) != len(set(wishlist)):
            raise ValidationError({"wishlist": ["A product can appear in the wishlist only once"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def register(cls, username, password_hash, email=None, role=UserRole.BUYER.value):
        now = datetime.now(UTC)
        user = cls(
            username=username,
            email=email,
            password_hash=password_hash,
            role=role or UserRole.BUYER.value,
            wishlist=[],
            registered_at=now,
        )
        user.raise_(
            UserRegistered(
                user_id=str(user.id),
                username=username,
                role=user.role,
                registered_at=now,
            )
        )
        return user

    @property
    def is_seller(self) -> bool:
        return self.role == UserRole.SELLER.value

    def update_profile(self, email=_UNSET, gender=_UNSET):
        if email is not _UNSET:
            self.email = email
        if gender is not _UNSET:
            self.gender = gender

        self.raise_(
            ProfileUpdated(
                user_id=str(self.id),
                email=self.email,
                gender=self.gender,
                updated_at=datetime.now(UTC),
            )
        )

    # -------------------------------------------------------------------
    # Cart
    # -------------------------------------------------------------------
    def cart_entry(self, product_id):
        """First cart entry for the product, or None."""
        return next((i for i in self.cart if str(i.product_id) == str(product_id)), None)

    def cart_quantity(self, product_id) -> int:
        entry = self.cart_entry(product_id)
        return entry.quantity if entry else 0

    def add_to_cart(self, product, quantity):
        """Add ``quantity`` of ``product``, merging into an existing entry.

        The resulting quantity (existing + requested) must not exceed the
        product's stock at the time of the call.
        """
        existing = self.cart_entry(product.id)
        resulting = (existing.quantity if existing else 0) + quantity
        ensure_stock(product, resulting)

        if existing:
            existing.quantity = resulting
        else:
            self.add_cart(
                CartItem(
                    product_id=str(product.id),
                    quantity=quantity,
                    added_at=datetime.now(UTC),
                )
            )

        self.raise_(
            CartItemAdded(
                user_id=str(self.id),
                product_id=str(product.id),
                quantity_added=quantity,
                quantity=resulting,
            )
        )

    def update_cart_quantity(self, product, quantity):
        """Set an absolute quantity for a product already in the cart."""
        existing = self.cart_entry(product.id)
        if existing is None:
            raise NotFound({"cart": ["Item not found in cart"]})

        ensure_stock(product, quantity)

        previous_quantity = existing.quantity
        existing.quantity = quantity

        self.raise_(
            CartQuantityUpdated(
                user_id=str(self.id),
                product_id=str(product.id),
                previous_quantity=previous_quantity,
                new_quantity=quantity,
            )
        )

    def remove_from_cart(self, product_id) -> bool:
        """Remove the first entry for ``product_id``.

        Only one entry is removed per call. Removing a product that is not in
        the cart is a no-op and returns False.
        """
        existing = self.cart_entry(product_id)
        if existing is None:
            return False

        self.remove_cart(existing)
        self.raise_(
            CartItemRemoved(
                user_id=str(self.id),
                product_id=str(product_id),
            )
        )
        return True

    def clear_cart(self) -> int:
        items = list(self.cart)
        for item in items:
            self.remove_cart(item)

        self.raise_(
            CartCleared(
                user_id=str(self.id),
                items_removed=len(items),
                cleared_at=datetime.now(UTC),
            )
        )
        return len(items)

    # -------------------------------------------------------------------
    # Wishlist
    # -------------------------------------------------------------------
    def has_liked(self, product_id) -> bool:
        return str(product_id) in (self.wishlist or [])

    def toggle_wishlist(self, product_id) -> bool:
        """Add the product to the wishlist, or remove it if already present.

        Returns True when the product is on the wishlist afterwards.
        """
        product_id = str(product_id)
        wishlist = list(self.wishlist or [])

        if product_id in wishlist:
            self.wishlist = [p for p in wishlist if p != product_id]
            self.raise_(ProductUnliked(user_id=str(self.id), product_id=product_id))
            return False

        self.wishlist = [*wishlist, product_id]
        self.raise_(ProductLiked(user_id=str(self.id), product_id=product_id))
        return True
