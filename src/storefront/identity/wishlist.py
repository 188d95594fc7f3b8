"""Wishlist: toggle command and read side."""

from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from storefront.catalogue.product import Product
from storefront.domain import logger, storefront
from storefront.identity.user import User
from storefront.shared.lookups import load_actor, load_product


@storefront.command(part_of="User")
class ToggleWishlist:
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)


@storefront.command_handler(part_of=User)
class WishlistHandler:
    @handle(ToggleWishlist)
    def toggle(self, command):
        user = load_actor(command.user_id)
        product = load_product(command.product_id)

        liked = user.toggle_wishlist(product.id)
        current_domain.repository_for(User).add(user)

        logger.info("Wishlist toggled", user_id=str(user.id), product_id=str(product.id), liked=liked)
        return liked


def list_wishlist(user_id) -> list[Product]:
    """Wishlisted products that still exist, in the order they were liked."""
    user = load_actor(user_id)
    products = current_domain.repository_for(Product)
    return [p for p in (products.find(pid) for pid in user.wishlist or []) if p is not None]
