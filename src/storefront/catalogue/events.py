"""Domain events for the Product aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="Product")
class ProductAdded:
    """A seller listed a new product in the catalogue."""

    __version__ = "v1"

    product_id = Identifier(required=True)
    author_id = Identifier(required=True)
    name = String(required=True, max_length=100)
    category = String(required=True, max_length=50)
    price = Float(required=True)
    stock = Integer(required=True)
    added_at = DateTime(required=True)


@storefront.event(part_of="Product")
class ProductDetailsUpdated:
    """The author edited a product's details, price or stock."""

    __version__ = "v1"

    product_id = Identifier(required=True)
    name = String(required=True, max_length=100)
    category = String(required=True, max_length=50)
    price = Float(required=True)
    previous_price = Float(required=True)
    stock = Integer(required=True)
    updated_at = DateTime(required=True)


@storefront.event(part_of="Product")
class ProductStockReserved:
    """Stock was drawn down by a checkout."""

    __version__ = "v1"

    product_id = Identifier(required=True)
    quantity = Integer(required=True)
    remaining_stock = Integer(required=True)
