"""PlaceOrder: convert a user's cart into an Order.

The order, the emptied cart and (when reservation is enabled) the reduced
product stock are all written in the handler's Unit of Work, so a failure at
any step leaves none of them changed.
"""

from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from storefront import config
from storefront.catalogue.product import Product
from storefront.domain import logger, storefront
from storefront.errors import EmptyCart
from storefront.guards import ensure_stock
from storefront.identity.user import User
from storefront.ordering.cart_summary import resolve_cart
from storefront.ordering.order import Order
from storefront.shared.lookups import load_actor


@storefront.command(part_of="Order")
class PlaceOrder:
    user_id = Identifier(required=True)


@storefront.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        user = load_actor(command.user_id)

        summary = resolve_cart(user)
        if summary.is_empty:
            raise EmptyCart({"cart": ["Cart is empty"]})

        reserve = config.reserve_stock_on_checkout()
        if reserve:
            # Check every line before touching any product
            for line in summary.lines:
                ensure_stock(line.product, line.quantity)

        order = Order.place(
            user_id=user.id,
            lines=[(line.product, line.quantity) for line in summary.lines],
        )
        current_domain.repository_for(Order).add(order)

        if reserve:
            products = current_domain.repository_for(Product)
            for line in summary.lines:
                line.product.reserve_stock(line.quantity)
                products.add(line.product)

        user.clear_cart()
        current_domain.repository_for(User).add(user)

        logger.info(
            "Order placed",
            order_id=str(order.id),
            user_id=str(user.id),
            total=order.total,
            stock_reserved=reserve,
        )
        return str(order.id)
