"""Repository for the Review aggregate."""

from protean.exceptions import ObjectNotFoundError

from storefront.domain import storefront
from storefront.reviews.review import Review


@storefront.repository(part_of=Review)
class ReviewRepository:
    def find(self, review_id) -> Review | None:
        try:
            return self.get(str(review_id))
        except ObjectNotFoundError:
            return None

    def find_by_author_and_product(self, author_id, product_id) -> Review | None:
        return self._dao.query.filter(author_id=str(author_id), product_id=str(product_id)).all().first

    def for_product(self, product_id, offset=0, limit=12):
        """Newest first. Returns a Protean ResultSet."""
        return (
            self._dao.query.filter(product_id=str(product_id))
            .order_by("-created_at")
            .offset(offset)
            .limit(limit)
            .all()
        )

    def all_for_product(self, product_id) -> list[Review]:
        """Every review pointing at the product, regardless of page size."""
        first = self._dao.query.filter(product_id=str(product_id)).all()
        if first.total <= len(first.items):
            return list(first.items)
        return list(self._dao.query.filter(product_id=str(product_id)).limit(first.total).all().items)
