"""Read side for product reviews."""

from protean.utils.globals import current_domain

from storefront.reviews.review import Review
from storefront.shared.lookups import load_product
from storefront.shared.pagination import Page, normalize_paging


def list_product_reviews(product_id, page=1, limit=None) -> Page:
    """Reviews of one product, newest first."""
    product = load_product(product_id)
    page, limit = normalize_paging(page, limit, default_limit=10)

    envelope = Page(page=page, limit=limit)
    result = current_domain.repository_for(Review).for_product(product.id, offset=envelope.offset, limit=limit)
    envelope.items = list(result.items)
    envelope.total = result.total
    return envelope
