"""Domain events for the User aggregate: registration, cart and wishlist."""

from protean.fields import DateTime, Identifier, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="User")
class UserRegistered:
    """A new buyer or seller account was created."""

    __version__ = "v1"

    user_id = Identifier(required=True)
    username = String(required=True, max_length=30)
    role = String(required=True, max_length=10)
    registered_at = DateTime(required=True)


@storefront.event(part_of="User")
class CartItemAdded:
    """A product was added to the user's cart, or its quantity increased."""

    __version__ = "v1"

    user_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity_added = Integer(required=True)
    quantity = Integer(required=True)


@storefront.event(part_of="User")
class CartQuantityUpdated:
    """The quantity of a cart entry was set to a new absolute value."""

    __version__ = "v1"

    user_id = Identifier(required=True)
    product_id = Identifier(required=True)
    previous_quantity = Integer(required=True)
    new_quantity = Integer(required=True)


@storefront.event(part_of="User")
class CartItemRemoved:
    """A cart entry was removed."""

    __version__ = "v1"

    user_id = Identifier(required=True)
    product_id = Identifier(required=True)


@storefront.event(part_of="User")
class CartCleared:
    """Every entry was removed from the cart."""

    __version__ = "v1"

    user_id = Identifier(required=True)
    items_removed = Integer(required=True)
    cleared_at = DateTime(required=True)


@storefront.event(part_of="User")
class ProductLiked:
    """A product was added to the user's wishlist."""

    __version__ = "v1"

    user_id = Identifier(required=True)
    product_id = Identifier(required=True)


@storefront.event(part_of="User")
class ProductUnliked:
    """A product was removed from the user's wishlist."""

    __version__ = "v1"

    user_id = Identifier(required=True)
    product_id = Identifier(required=True)


@storefront.event(part_of="User")
class ProfileUpdated:
    """The user changed their contact email or gender."""

    __version__ = "v1"

    user_id = Identifier(required=True)
    email = String(max_length=254)
    gender = String(max_length=10)
    updated_at = DateTime(required=True)
