"""Identifier validation for references supplied from outside the domain."""

from uuid import UUID

from storefront.errors import InvalidIdentifier


def ensure_identifier(value, field: str = "id") -> str:
    """Return ``value`` in canonical string form or raise ``InvalidIdentifier``.

    Aggregates use UUID identities, so anything that does not parse as a UUID
    can never resolve and is rejected before the store is touched.
    """
    try:
        return str(UUID(str(value)))
    except (TypeError, ValueError, AttributeError):
        raise InvalidIdentifier({field: [f"Invalid {field.replace('_', ' ')}"]}) from None
