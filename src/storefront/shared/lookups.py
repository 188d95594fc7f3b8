"""Loading aggregates named by external references.

Command handlers receive raw identifiers. These helpers validate the form of
the identifier, resolve it through the repository and translate a miss into
the storefront error taxonomy.
"""

from protean.utils.globals import current_domain

from storefront.catalogue.product import Product
from storefront.errors import NotFound, Unauthenticated
from storefront.identity.user import User
from storefront.shared.identifiers import ensure_identifier


def load_actor(user_id) -> User:
    """The user on whose behalf a command runs.

    A token that names a user who no longer exists is an authentication
    failure, not a missing resource.
    """
    if not user_id:
        raise Unauthenticated("Authentication required")

    user = current_domain.repository_for(User).find(ensure_identifier(user_id, "user_id"))
    if user is None:
        raise Unauthenticated("User not found")
    return user


def load_product(product_id) -> Product:
    product = current_domain.repository_for(Product).find(ensure_identifier(product_id, "product_id"))
    if product is None:
        raise NotFound({"product": ["Product not found"]})
    return product
