"""RemoveReview: an author deletes their own review."""

from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from storefront.catalogue.product import Product
from storefront.domain import logger, storefront
from storefront.errors import Forbidden, NotFound
from storefront.reviews.review import Review
from storefront.shared.identifiers import ensure_identifier
from storefront.shared.lookups import load_actor


@storefront.command(part_of="Review")
class RemoveReview:
    actor_id = Identifier(required=True)
    review_id = Identifier(required=True)


@storefront.command_handler(part_of=Review)
class RemoveReviewHandler:
    @handle(RemoveReview)
    def remove_review(self, command):
        actor = load_actor(command.actor_id)

        repo = current_domain.repository_for(Review)
        review = repo.find(ensure_identifier(command.review_id, "review_id"))
        if review is None:
            raise NotFound({"review": ["Review not found"]})
        if not review.is_written_by(actor.id):
            raise Forbidden("You can only delete your own reviews")

        product_repo = current_domain.repository_for(Product)
        product = product_repo.find(review.product_id)
        if product is not None and product.detach_review(review.id):
            product_repo.add(product)

        repo._dao.delete(review)

        logger.info("Review removed", review_id=str(review.id), product_id=str(review.product_id))
