"""Storefront error taxonomy.

Validation-type failures extend Protean's ``ValidationError`` and missing
resources extend ``ObjectNotFoundError`` so that they travel through the
same exception handlers as framework-raised errors. Access and storage
failures have no Protean counterpart and share ``StorefrontError``.
"""

from protean.exceptions import ObjectNotFoundError, ValidationError


class InvalidIdentifier(ValidationError):
    """A reference is not a well-formed identifier."""


class InsufficientStock(ValidationError):
    """The requested quantity exceeds the product's current stock."""


class DuplicateReview(ValidationError):
    """The author has already reviewed the product."""


class EmptyCart(ValidationError):
    """Checkout was requested for a cart with no resolvable items."""


class NotFound(ObjectNotFoundError):
    """A product, user, cart item or order does not exist."""


class StorefrontError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class Unauthenticated(StorefrontError):
    status_code = 401


class Forbidden(StorefrontError):
    status_code = 403


class StorageFailure(StorefrontError):
    status_code = 503
