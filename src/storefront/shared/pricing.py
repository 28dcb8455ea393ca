"""Storefront pricing rules shared by carts and orders.

Tax is a flat 15% of the subtotal. Shipping is a flat fee that is waived for
an empty basket and for subtotals of 100 or more.
"""

from dataclasses import dataclass

TAX_RATE = 0.15
FLAT_SHIPPING_FEE = 10.00
FREE_SHIPPING_THRESHOLD = 100.00


def money(amount: float) -> float:
    """Round an amount to cents."""
    return round(float(amount), 2)


def line_total(quantity: int, unit_price: float) -> float:
    return money(quantity * unit_price)


def shipping_for(subtotal: float) -> float:
    if subtotal == 0 or subtotal >= FREE_SHIPPING_THRESHOLD:
        return 0.0
    return FLAT_SHIPPING_FEE


@dataclass(frozen=True)
class Totals:
    """Money breakdown of a basket."""

    subtotal: float
    tax: float
    shipping_cost: float
    total: float


def calculate_totals(subtotal: float) -> Totals:
    subtotal = money(subtotal)
    tax = money(subtotal * TAX_RATE)
    shipping_cost = shipping_for(subtotal)
    return Totals(
        subtotal=subtotal,
        tax=tax,
        shipping_cost=shipping_cost,
        total=money(subtotal + tax + shipping_cost),
    )
