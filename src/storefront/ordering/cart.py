"""Cart mutation: commands and handler.

The cart is embedded in the User aggregate, so every command loads the user,
mutates the cart through the aggregate and persists the user. Stock is read
from the product on each call and never stored in the cart.
"""

from protean import handle
from protean.fields import Identifier, Integer
from protean.utils.globals import current_domain

from storefront.domain import logger, storefront
from storefront.identity.user import User
from storefront.shared.identifiers import ensure_identifier
from storefront.shared.lookups import load_actor, load_product

MAX_QUANTITY_PER_REQUEST = 10


@storefront.command(part_of="User")
class AddToCart:
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(default=1, min_value=1, max_value=MAX_QUANTITY_PER_REQUEST)


@storefront.command(part_of="User")
class UpdateCartQuantity:
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1, max_value=MAX_QUANTITY_PER_REQUEST)


@storefront.command(part_of="User")
class RemoveFromCart:
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)


@storefront.command(part_of="User")
class ClearCart:
    user_id = Identifier(required=True)


@storefront.command_handler(part_of=User)
class ManageCartHandler:
    @handle(AddToCart)
    def add_to_cart(self, command):
        user = load_actor(command.user_id)
        product = load_product(command.product_id)

        user.add_to_cart(product, command.quantity or 1)
        current_domain.repository_for(User).add(user)

        quantity = user.cart_quantity(product.id)
        logger.info("Added to cart", user_id=str(user.id), product_id=str(product.id), quantity=quantity)
        return quantity

    @handle(UpdateCartQuantity)
    def update_cart_quantity(self, command):
        user = load_actor(command.user_id)
        product = load_product(command.product_id)

        user.update_cart_quantity(product, command.quantity)
        current_domain.repository_for(User).add(user)

        logger.info(
            "Cart quantity updated",
            user_id=str(user.id),
            product_id=str(product.id),
            quantity=command.quantity,
        )
        return command.quantity

    @handle(RemoveFromCart)
    def remove_from_cart(self, command):
        user = load_actor(command.user_id)
        product_id = ensure_identifier(command.product_id, "product_id")

        # The product itself may already be gone; removal only needs the id.
        removed = user.remove_from_cart(product_id)
        if removed:
            current_domain.repository_for(User).add(user)
            logger.info("Removed from cart", user_id=str(user.id), product_id=product_id)
        return removed

    @handle(ClearCart)
    def clear_cart(self, command):
        user = load_actor(command.user_id)

        items_removed = user.clear_cart()
        current_domain.repository_for(User).add(user)

        logger.info("Cart cleared", user_id=str(user.id), items_removed=items_removed)
        return items_removed
