"""
Error types for coinfolio-core.

Malformed persisted documents are not errors: the store loads them as an empty
portfolio. Only invalid input and price-feed failures raise.
"""


class CoinfolioError(Exception):
    """Base class for all coinfolio-core errors."""


# --- Store ---


class ValidationError(CoinfolioError, ValueError):
    """Invalid mutation input. Raised before anything is changed or persisted."""


# --- Price feed ---


class PriceFeedError(CoinfolioError):
    """
    Raised by price feed adapters for HTTP, transport or decoding failures.
    Callers translate it into an empty price mapping.
    """
