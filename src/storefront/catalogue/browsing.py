"""Catalogue read side: browsing, product detail, categories and stats."""

from collections import Counter
from dataclasses import dataclass, field

from protean.utils.globals import current_domain

from storefront.catalogue.product import Product
from storefront.identity.user import User
from storefront.reviews.review import Review
from storefront.shared.lookups import load_product
from storefront.shared.pagination import Page, normalize_paging


@dataclass
class ProductDetail:
    product: Product
    reviews: list[Review] = field(default_factory=list)

    @property
    def average_rating(self) -> float | None:
        if not self.reviews:
            return None
        return round(sum(r.rating.score for r in self.reviews) / len(self.reviews), 1)


def browse_products(
    category=None,
    search=None,
    min_price=None,
    max_price=None,
    sort_by="created_at",
    sort_order="desc",
    page=1,
    limit=None,
) -> Page:
    page, limit = normalize_paging(page, limit)
    envelope = Page(page=page, limit=limit)

    result = current_domain.repository_for(Product).search(
        category=category,
        search=search.strip() if search else None,
        min_price=min_price,
        max_price=max_price,
        sort_by=sort_by,
        sort_order=sort_order,
        offset=envelope.offset,
        limit=limit,
    )
    envelope.items = list(result.items)
    envelope.total = result.total
    return envelope


def get_product_detail(product_id) -> ProductDetail:
    product = load_product(product_id)
    reviews = current_domain.repository_for(Review).all_for_product(product.id)
    reviews.sort(key=lambda r: r.created_at, reverse=True)
    return ProductDetail(product=product, reviews=reviews)


def list_categories() -> list[tuple[str, int]]:
    """Distinct categories with their product counts, most populated first."""
    counts = Counter(p.category for p in current_domain.repository_for(Product).each() if p.category)
    return sorted(counts.items(), key=lambda item: (-item[1], item[0]))


def catalogue_stats() -> dict:
    products = list(current_domain.repository_for(Product).each())
    prices = [p.price for p in products if p.price is not None]

    return {
        "total_products": len(products),
        "total_users": current_domain.repository_for(User).count(),
        "average_price": round(sum(prices) / len(prices), 2) if prices else 0,
        "total_categories": len({p.category for p in products if p.category}),
    }
