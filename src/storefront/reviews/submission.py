"""SubmitReview: review a product.

One review per author per product is enforced here rather than on the
aggregate because it spans Review instances. The review and the product's
review list are written in the handler's Unit of Work.
"""

from protean import handle
from protean.fields import Identifier, Integer, String
from protean.utils.globals import current_domain

from storefront.catalogue.product import Product
from storefront.domain import logger, storefront
from storefront.errors import DuplicateReview
from storefront.reviews.review import Review
from storefront.shared.lookups import load_actor, load_product


@storefront.command(part_of="Review")
class SubmitReview:
    product_id = Identifier(required=True)
    author_id = Identifier(required=True)
    rating = Integer(required=True, min_value=1, max_value=5)
    comment = String(max_length=500)


@storefront.command_handler(part_of=Review)
class SubmitReviewHandler:
    @handle(SubmitReview)
    def submit_review(self, command):
        author = load_actor(command.author_id)
        product = load_product(command.product_id)

        repo = current_domain.repository_for(Review)
        if repo.find_by_author_and_product(author.id, product.id):
            raise DuplicateReview({"review": ["You have already reviewed this product"]})

        review = Review.submit(
            product_id=product.id,
            author_id=author.id,
            rating=command.rating,
            comment=command.comment,
        )
        repo.add(review)

        product.attach_review(review.id)
        current_domain.repository_for(Product).add(product)

        logger.info(
            "Review submitted",
            review_id=str(review.id),
            product_id=str(product.id),
            rating=command.rating,
        )
        return str(review.id)
