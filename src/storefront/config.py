"""Storefront settings.

Values come from the ``[custom]`` section of ``domain.toml`` and can be
overridden per process with ``STOREFRONT_<NAME>`` environment variables.
"""

import os

from storefront.domain import storefront

_TRUTHY = {"1", "true", "yes", "on"}

# Used only when no secret is configured; production deployments must set
# STOREFRONT_JWT_SECRET.
_DEV_JWT_SECRET = "dev-secret-change-this"


def get_setting(name: str, default=None):
    env_value = os.getenv(f"STOREFRONT_{name.upper()}")
    if env_value is not None:
        return env_value

    custom = storefront.config.get("custom") or {}
    return custom.get(name, default)


def get_int(name: str, default: int) -> int:
    return int(get_setting(name, default))


def get_bool(name: str, default: bool = False) -> bool:
    value = get_setting(name, default)
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in _TRUTHY


def get_list(name: str, default: str = "") -> list[str]:
    value = get_setting(name, default)
    if isinstance(value, list | tuple):
        return [str(v) for v in value]
    return [item.strip() for item in str(value).split(",") if item.strip()]


def jwt_secret() -> str:
    return get_setting("jwt_secret", _DEV_JWT_SECRET)


def jwt_algorithm() -> str:
    return get_setting("jwt_algorithm", "HS256")


def access_token_expire_minutes() -> int:
    return get_int("access_token_expire_minutes", 60 * 24 * 7)


def cors_origins() -> list[str]:
    return get_list("cors_origins", "http://localhost:3000")


def rate_limit_window_seconds() -> int:
    return get_int("rate_limit_window_seconds", 15 * 60)


def rate_limit_max_requests() -> int:
    """Requests allowed per client per window; 0 disables rate limiting."""
    return get_int("rate_limit_max_requests", 100)


def reserve_stock_on_checkout() -> bool:
    return get_bool("reserve_stock_on_checkout", False)


def default_page_size() -> int:
    return get_int("default_page_size", 12)


def max_page_size() -> int:
    return get_int("max_page_size", 50)
