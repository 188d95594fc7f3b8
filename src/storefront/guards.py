"""Stock and ownership guards.

Pure predicates over already-loaded aggregates. They are re-evaluated on
every mutating call; stock in particular is never cached.
"""

from storefront.errors import Forbidden, InsufficientStock

SELLER_ROLE = "seller"


def ensure_stock(product, quantity: int) -> None:
    """Reject a resulting cart/order quantity that exceeds current stock."""
    in_stock = product.stock or 0
    if quantity > in_stock:
        raise InsufficientStock(
            {
                "quantity": [
                    f"Not enough stock available for '{product.name}' (requested {quantity}, in stock {in_stock})"
                ]
            }
        )


def ensure_seller(user) -> None:
    if user.role != SELLER_ROLE:
        raise Forbidden("Only sellers can manage products")


def ensure_author(user, product) -> None:
    if str(product.author_id) != str(user.id):
        raise Forbidden("You don't have permission to modify this product")


def ensure_can_manage(user, product) -> None:
    """Seller role first, then ownership."""
    ensure_seller(user)
    ensure_author(user, product)
