"""Review aggregate.

A Review belongs to one product and one author. The product keeps the list of
its review ids; the review keeps the product id. At most one review exists per
(author, product) pair, which is checked by the submitting handler because it
spans aggregate instances.
"""

from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Identifier, Integer, String, ValueObject

from storefront.domain import storefront
from storefront.reviews.events import ReviewSubmitted


@storefront.value_object(part_of="Review")
class Rating:
    """A star rating from 1 to 5."""

    score = Integer(required=True)

    @invariant.post
    def score_must_be_in_range(self):
        if self.score is not None and (self.score < 1 or self.score > 5):
            raise ValidationError({"rating": ["Rating must be between 1 and 5"]})


@storefront.aggregate
class Review:
    product_id = Identifier(required=True)
    author_id = Identifier(required=True)
    rating = ValueObject(Rating, required=True)
    comment = String(max_length=500)
    created_at = DateTime()

    @classmethod
    def submit(cls, product_id, author_id, rating, comment=None):
        now = datetime.now(UTC)
        review = cls(
            product_id=str(product_id),
            author_id=str(author_id),
            rating=Rating(score=rating),
            comment=comment,
            created_at=now,
        )
        review.raise_(
            ReviewSubmitted(
                review_id=str(review.id),
                product_id=str(product_id),
                author_id=str(author_id),
                rating=rating,
                comment=comment,
                submitted_at=now,
            )
        )
        return review

    def is_written_by(self, user_id) -> bool:
        return str(self.author_id) == str(user_id)
