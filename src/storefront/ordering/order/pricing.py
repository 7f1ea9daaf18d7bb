"""Checkout pricing: subtotal, tax, shipping and order numbers.

All amounts are ``Decimal`` rounded half-up to cents. Rates and thresholds
come from ``Settings`` so they can be tuned per deployment.
"""

import secrets
import string
import time
from dataclasses import dataclass
from decimal import Decimal

from storefront.config import Settings, get_settings
from storefront.shared.money import quantize, to_decimal

_BASE36 = string.digits + string.ascii_uppercase


@dataclass(frozen=True)
class OrderTotals:
    subtotal: Decimal
    tax: Decimal
    shipping_cost: Decimal
    total: Decimal


def calculate_subtotal(lines) -> Decimal:
    """Sum of unit price x quantity over ``(unit_price, quantity)`` pairs."""
    return quantize(sum((to_decimal(price) * quantity for price, quantity in lines), Decimal("0")))


def calculate_tax(subtotal, rate=None) -> Decimal:
    if rate is None:
        rate = get_settings().tax_rate
    return quantize(to_decimal(subtotal) * to_decimal(rate))


def calculate_shipping(subtotal, settings: Settings | None = None) -> Decimal:
    settings = settings or get_settings()
    subtotal = to_decimal(subtotal)

    if subtotal >= to_decimal(settings.free_shipping_threshold):
        return quantize(0)
    if subtotal >= to_decimal(settings.reduced_shipping_threshold):
        return quantize(settings.reduced_shipping_cost)
    return quantize(settings.standard_shipping_cost)


def price_order(lines, settings: Settings | None = None) -> OrderTotals:
    settings = settings or get_settings()
    subtotal = calculate_subtotal(lines)
    tax = calculate_tax(subtotal, settings.tax_rate)
    shipping_cost = calculate_shipping(subtotal, settings)
    return OrderTotals(
        subtotal=subtotal,
        tax=tax,
        shipping_cost=shipping_cost,
        total=quantize(subtotal + tax + shipping_cost),
    )


def _base36(number: int) -> str:
    if number == 0:
        return "0"
    digits = []
    while number:
        number, remainder = divmod(number, 36)
        digits.append(_BASE36[remainder])
    return "".join(reversed(digits))


def generate_order_number(timestamp_ms: int | None = None) -> str:
    """Return ``ORD-<base36 millisecond timestamp>-<5 random base36 chars>``."""
    if timestamp_ms is None:
        timestamp_ms = time.time_ns() // 1_000_000
    suffix = "".join(secrets.choice(_BASE36) for _ in range(5))
    return f"ORD-{_base36(timestamp_ms)}-{suffix}"
