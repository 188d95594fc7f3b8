"""Cart read side.

Cart entries are references; prices and names are joined from the catalogue
at read time. Entries whose product has been deleted are skipped.
"""

from dataclasses import dataclass, field

from protean.utils.globals import current_domain

from storefront.catalogue.product import Product
from storefront.identity.user import User
from storefront.shared.lookups import load_actor


@dataclass
class CartLine:
    product: Product
    quantity: int

    @property
    def subtotal(self) -> float:
        return round(self.product.price * self.quantity, 2)


@dataclass
class CartSummary:
    lines: list[CartLine] = field(default_factory=list)

    @property
    def total(self) -> float:
        return round(sum(line.subtotal for line in self.lines), 2)

    @property
    def item_count(self) -> int:
        return sum(line.quantity for line in self.lines)

    @property
    def is_empty(self) -> bool:
        return not self.lines


def resolve_cart(user: User) -> CartSummary:
    products = current_domain.repository_for(Product)
    lines = []
    for item in user.cart:
        product = products.find(item.product_id)
        if product is None:
            continue
        lines.append(CartLine(product=product, quantity=item.quantity))
    return CartSummary(lines=lines)


def summarize_cart(user_id) -> CartSummary:
    return resolve_cart(load_actor(user_id))


def cart_total(user_id) -> float:
    return summarize_cart(user_id).total


def cart_count(user_id) -> int:
    """Sum of quantities across every entry, as shown on the cart badge."""
    user = load_actor(user_id)
    return sum(item.quantity for item in user.cart)
