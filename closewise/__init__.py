"""Mortgage loan calculations: Conventional, FHA and VA loans plus a seller net sheet.

This module also exposes the package version for runtime display."""

from closewise.version import __version__
from closewise.config import RateBook, default_rate_book, load_rate_book
from closewise.conventional import calculate_conventional_purchase, calculate_conventional_refinance
from closewise.fha import calculate_fha_purchase, calculate_fha_refinance
from closewise.va import calculate_va_purchase, calculate_va_refinance
from closewise.seller_net import calculate_seller_net

__all__ = [
    "__version__",
    "RateBook",
    "default_rate_book",
    "load_rate_book",
    "calculate_conventional_purchase",
    "calculate_conventional_refinance",
    "calculate_fha_purchase",
    "calculate_fha_refinance",
    "calculate_va_purchase",
    "calculate_va_refinance",
    "calculate_seller_net",
]
