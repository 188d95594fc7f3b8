"""Order history for the ordering user."""

from protean.utils.globals import current_domain

from storefront.errors import Forbidden, NotFound
from storefront.ordering.order import Order
from storefront.shared.identifiers import ensure_identifier
from storefront.shared.lookups import load_actor
from storefront.shared.pagination import Page, normalize_paging


def list_orders(user_id, page=1, limit=None) -> Page:
    """The user's orders, newest first."""
    user = load_actor(user_id)
    page, limit = normalize_paging(page, limit)

    envelope = Page(page=page, limit=limit)
    result = current_domain.repository_for(Order).for_user(user.id, offset=envelope.offset, limit=limit)
    envelope.items = list(result.items)
    envelope.total = result.total
    return envelope


def get_order(order_id, user_id) -> Order:
    user = load_actor(user_id)

    order = current_domain.repository_for(Order).find(ensure_identifier(order_id, "order_id"))
    if order is None:
        raise NotFound({"order": ["Order not found"]})
    if not order.belongs_to(user.id):
        raise Forbidden("You can only view your own orders")
    return order
