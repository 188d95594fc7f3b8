"""Credential hashing and bearer tokens.

The storefront does not manage sessions. A successful login yields a signed
JWT carrying the user id and role; every authenticated request is resolved
back to an ``Actor`` from that token.
"""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt
from passlib.context import CryptContext
from protean.utils.globals import current_domain

from storefront import config
from storefront.domain import logger
from storefront.errors import Unauthenticated
from storefront.identity.user import User

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


@dataclass(frozen=True)
class Actor:
    """The already-authenticated caller of an operation."""

    user_id: str
    role: str

    @property
    def is_seller(self) -> bool:
        return self.role == "seller"


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def authenticate(username: str, password: str) -> User:
    user = current_domain.repository_for(User).find_by_username(username)
    if user is None or not verify_password(password, user.password_hash):
        logger.info("Login rejected", username=username)
        raise Unauthenticated("Invalid username or password")
    return user


def issue_token(user: User, expires_delta: timedelta | None = None) -> str:
    expire = datetime.now(UTC) + (expires_delta or timedelta(minutes=config.access_token_expire_minutes()))
    claims = {"sub": str(user.id), "role": user.role, "exp": expire}
    return jwt.encode(claims, config.jwt_secret(), algorithm=config.jwt_algorithm())


def decode_token(token: str) -> Actor:
    try:
        payload = jwt.decode(token, config.jwt_secret(), algorithms=[config.jwt_algorithm()])
    except JWTError:
        raise Unauthenticated("Invalid or expired token") from None

    user_id = payload.get("sub")
    if not user_id:
        raise Unauthenticated("Invalid token")
    return Actor(user_id=user_id, role=payload.get("role") or "buyer")
