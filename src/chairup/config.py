"""Process-wide settings read from the environment at startup."""

import os

from protean.exceptions import ConfigurationError

PAYMENT_METHODS = ("creditCard", "paypal", "cashOnDelivery")
DEFAULT_PAYMENT_METHOD = "creditCard"


def shipping_price() -> float:
    """Flat shipping price applied when the client does not send one."""
    return float(os.getenv("CHAIRUP_SHIPPING_PRICE", "10.0"))


def default_category() -> str:
    return os.getenv("CHAIRUP_DEFAULT_CATEGORY", "Office")


def jwt_algorithm() -> str:
    return os.getenv("CHAIRUP_JWT_ALGORITHM", "HS256")


def jwt_secret() -> str:
    secret = os.getenv("CHAIRUP_JWT_SECRET")
    if not secret:
        raise ConfigurationError("CHAIRUP_JWT_SECRET must be set to verify bearer tokens")
    return secret
