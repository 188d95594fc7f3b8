"""FastAPI dependencies."""

from fastapi import Header

from storefront.errors import Unauthenticated
from storefront.identity.authentication import Actor, decode_token


def current_actor(authorization: str | None = Header(default=None)) -> Actor:
    """Resolve the bearer token on the request into an ``Actor``."""
    if not authorization or not authorization.startswith("Bearer "):
        raise Unauthenticated("Not authenticated")
    return decode_token(authorization.split(" ", 1)[1])
