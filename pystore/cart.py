import logging
from typing import List, Tuple

from .core import OutOfRangeError
from .models import CartLineItem, CartTotals, Product
from .pricing import coupon_rate, compute_totals

logger = logging.getLogger(__name__)


class Cart:
    """Line items in insertion order plus one coupon discount.

    Adding a product that is already in the cart creates a second line item;
    lines are never merged. Positions are zero-based.
    """

    def __init__(self):
        self._items: List[CartLineItem] = []
        self._discount_rate = 0.0

    @property
    def items(self) -> Tuple[CartLineItem, ...]:
        return tuple(self._items)

    @property
    def discount_rate(self) -> float:
        return self._discount_rate

    def add(self, product: Product, quantity: int) -> CartLineItem:
        item = CartLineItem(product=product, quantity=quantity)
        self._items.append(item)
        logger.debug("added %d x %s (line %d)", quantity, product.id, len(self._items))
        return item

    def remove_at(self, position: int) -> CartLineItem:
        if position < 0 or position >= len(self._items):
            raise OutOfRangeError("Invalid item selection.")
        removed = self._items.pop(position)
        logger.debug("removed line %d (%s)", position + 1, removed.product.id)
        return removed

    def apply_coupon(self, code: str) -> bool:
        rate = coupon_rate(code)
        if rate is None:
            # an unknown code also drops whatever coupon was applied before
            self._discount_rate = 0.0
            logger.info("rejected coupon %r", code)
            return False
        self._discount_rate = rate
        logger.info("applied coupon %s (%.0f%%)", code.strip().upper(), rate * 100)
        return True

    def compute_totals(self) -> CartTotals:
        return compute_totals(self._items, self._discount_rate)

    def clear(self) -> None:
        self._items.clear()
        self._discount_rate = 0.0
        logger.debug("cart cleared")

    def is_empty(self) -> bool:
        return not self._items

    def __len__(self) -> int:
        return len(self._items)
