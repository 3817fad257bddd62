import logging
from typing import Any, Dict, List, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from .cart import Cart
from .config import StoreSettings
from .core import (
    ProductSelectionIn, QuantityIn, RemoveFromCartIn, CouponIn, CheckoutConfirmIn,
    InvalidInputError, EmptyCartError
)
from .database import Catalog, default_catalog
from .models import CartLineItem, CartTotals, Product
from .pricing import line_shipping

logger = logging.getLogger(__name__)

# One function per menu flow. Raw prompt text goes in; parsed results come
# out, or a StoreError whose message is shown to the shopper.

T = TypeVar("T", bound=BaseModel)


class StoreSession:
    """The state one shopper works against: a read-only catalog and their cart."""

    def __init__(self, catalog: Optional[Catalog] = None, cart: Optional[Cart] = None,
                 settings: Optional[StoreSettings] = None):
        self.settings = settings or StoreSettings()
        self.catalog = catalog if catalog is not None else default_catalog(self.settings.download_base_url)
        self.cart = cart if cart is not None else Cart()


def _parse(schema: Type[T], error_msg: str, **raw: Any) -> T:
    cleaned = {k: v.strip() if isinstance(v, str) else v for k, v in raw.items()}
    try:
        return schema(**cleaned)
    except ValidationError:
        raise InvalidInputError(error_msg)


# Catalog
def list_catalog_logic(session: StoreSession) -> List[Product]:
    return session.catalog.list()


# Cart
def select_product_logic(session: StoreSession, raw_number: str) -> Product:
    sel = _parse(ProductSelectionIn, "Invalid input. Please enter numbers only.", product_number=raw_number)
    return session.catalog.get(sel.product_number - 1)


def add_to_cart_logic(session: StoreSession, product: Product, raw_quantity: str) -> CartLineItem:
    q = _parse(QuantityIn, "Invalid input. Please enter numbers only.", quantity=raw_quantity)
    if q.quantity <= 0:
        raise InvalidInputError("Quantity must be positive.")
    return session.cart.add(product, q.quantity)


def view_cart_logic(session: StoreSession) -> Dict[str, Any]:
    lines = []
    for pos, item in enumerate(session.cart.items, start=1):
        lines.append({"line_number": pos, "item": item, "shipping": line_shipping(item)})
    return {"lines": lines, "totals": session.cart.compute_totals(), "empty": session.cart.is_empty()}


def remove_from_cart_logic(session: StoreSession, raw_line: str) -> CartLineItem:
    sel = _parse(RemoveFromCartIn, "Invalid input.", line_number=raw_line)
    return session.cart.remove_at(sel.line_number - 1)


def apply_coupon_logic(session: StoreSession, raw_code: str) -> Dict[str, Any]:
    payload = CouponIn(code=raw_code)
    valid = session.cart.apply_coupon(payload.code)
    return {"code": payload.code, "valid": valid, "discount_rate": session.cart.discount_rate}


# Checkout
def begin_checkout_logic(session: StoreSession) -> CartTotals:
    if session.cart.is_empty():
        raise EmptyCartError("Cart is empty. Add items first.")
    return session.cart.compute_totals()


def confirm_checkout_logic(session: StoreSession, raw_answer: str) -> Dict[str, Any]:
    # no payment is taken; confirming only empties the cart
    totals = begin_checkout_logic(session)
    confirm = CheckoutConfirmIn(answer=raw_answer)
    if not confirm.confirmed:
        logger.info("checkout cancelled")
        return {"status": "cancelled", "totals": totals}

    lines = len(session.cart)
    session.cart.clear()
    logger.info("checkout completed: %d line(s), total %.2f", lines, totals.final_total)
    return {"status": "placed", "totals": totals}
