"""Product management: seller commands and handlers.

Every mutation reloads the actor and the product and re-runs the seller and
author guards; nothing about the caller's rights is cached between calls.
"""

from protean import handle
from protean.fields import Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from storefront.catalogue.product import Product
from storefront.domain import logger, storefront
from storefront.guards import ensure_can_manage, ensure_seller
from storefront.reviews.review import Review
from storefront.shared.lookups import load_actor, load_product


@storefront.command(part_of="Product")
class AddProduct:
    actor_id: Identifier(required=True)
    name: String(required=True, max_length=100)
    price: Float(required=True, min_value=0.0)
    description: Text()
    image: String(max_length=500)
    category: String(required=True, max_length=50)
    stock: Integer(default=0, min_value=0)


@storefront.command(part_of="Product")
class UpdateProductDetails:
    actor_id: Identifier(required=True)
    product_id: Identifier(required=True)
    name: String(max_length=100)
    price: Float(min_value=0.0)
    description: Text()
    image: String(max_length=500)
    category: String(max_length=50)
    stock: Integer(min_value=0)


@storefront.command(part_of="Product")
class RemoveProduct:
    actor_id: Identifier(required=True)
    product_id: Identifier(required=True)


@storefront.command_handler(part_of=Product)
class ManageProductHandler:
    @handle(AddProduct)
    def add_product(self, command):
        seller = load_actor(command.actor_id)
        ensure_seller(seller)

        product = Product.create(
            author_id=seller.id,
            name=command.name,
            price=command.price,
            category=command.category,
            description=command.description,
            image=command.image,
            stock=command.stock,
        )
        current_domain.repository_for(Product).add(product)

        logger.info("Product added", product_id=str(product.id), author_id=str(seller.id))
        return str(product.id)

    @handle(UpdateProductDetails)
    def update_details(self, command):
        seller = load_actor(command.actor_id)
        product = load_product(command.product_id)
        ensure_can_manage(seller, product)

        changes = {
            field: getattr(command, field)
            for field in ("name", "price", "description", "image", "category", "stock")
            if getattr(command, field) is not None
        }
        product.update_details(**changes)
        current_domain.repository_for(Product).add(product)

        logger.info("Product updated", product_id=str(product.id), fields=sorted(changes))

    @handle(RemoveProduct)
    def remove_product(self, command):
        """Delete the product and every review attached to it.

        Reviews are collected both from the product's own list and by their
        product reference, so a review missing from the list is not orphaned.
        Returns the number of reviews deleted.
        """
        seller = load_actor(command.actor_id)
        product = load_product(command.product_id)
        ensure_can_manage(seller, product)

        review_repo = current_domain.repository_for(Review)
        reviews = {str(review.id): review for review in review_repo.all_for_product(product.id)}
        for review_id in product.review_ids or []:
            if review_id not in reviews:
                review = review_repo.find(review_id)
                if review is not None:
                    reviews[review_id] = review

        for review in reviews.values():
            review_repo._dao.delete(review)

        current_domain.repository_for(Product)._dao.delete(product)

        logger.info(
            "Product removed",
            product_id=str(product.id),
            reviews_deleted=len(reviews),
        )
        return len(reviews)
