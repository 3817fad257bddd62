"""Cart pricing: coupons, shipping and totals.

Prices stay in full float precision here; rounding to cents happens only
when a value is displayed.
"""
from typing import Dict, Iterable, Optional

from .models import CartLineItem, CartTotals, Product

COUPONS: Dict[str, float] = {
    "JAVA20": 0.20,
    "WELCOME10": 0.10,
}


def coupon_rate(code: str) -> Optional[float]:
    """Return the discount fraction for ``code``, or None if it is not a known coupon.

    Matching ignores case and surrounding whitespace.
    """
    return COUPONS.get(code.strip().upper())


def unit_shipping(product: Product) -> float:
    if product.kind == "physical":
        return product.shipping_fee
    return 0.0


def line_shipping(item: CartLineItem) -> float:
    return unit_shipping(item.product) * item.quantity


def compute_totals(items: Iterable[CartLineItem], discount_rate: float = 0.0) -> CartTotals:
    subtotal = 0.0
    shipping = 0.0
    for item in items:
        subtotal += item.total_price
        shipping += line_shipping(item)

    # the discount applies to goods only, never to shipping
    discount_amount = subtotal * discount_rate
    return CartTotals(
        subtotal=subtotal,
        shipping_total=shipping,
        discount_rate=discount_rate,
        discount_amount=discount_amount,
        final_total=subtotal - discount_amount + shipping,
    )
