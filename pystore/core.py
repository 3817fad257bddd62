import re
from pydantic import BaseModel, field_validator
from typing import Any, Optional

from .models import DigitalProduct, PhysicalProduct

DEFAULT_DOWNLOAD_BASE_URL = "http://store.com/download/"


class StoreError(Exception):
    """Base class for problems reported back to the shopper.

    The message is user-facing; callers print it and carry on.
    """

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class InvalidInputError(StoreError):
    pass


class OutOfRangeError(StoreError):
    pass


class EmptyCartError(StoreError):
    pass


# Flow input schemas. Positions are 1-based, as typed at the prompt.

_WHOLE_NUMBER = re.compile(r"^[+-]?\d+$")


def _whole_number(v: Any) -> Any:
    # only plain digits count; pydantic alone would take "1.0" or "1_0"
    if isinstance(v, str) and not _WHOLE_NUMBER.match(v.strip()):
        raise ValueError("must be a whole number")
    return v


class ProductSelectionIn(BaseModel):
    product_number: int

    @field_validator("product_number", mode="before")
    @classmethod
    def digits_only(cls, v: Any) -> Any:
        return _whole_number(v)


class QuantityIn(BaseModel):
    quantity: int

    @field_validator("quantity", mode="before")
    @classmethod
    def digits_only(cls, v: Any) -> Any:
        return _whole_number(v)


class RemoveFromCartIn(BaseModel):
    line_number: int

    @field_validator("line_number", mode="before")
    @classmethod
    def digits_only(cls, v: Any) -> Any:
        return _whole_number(v)


class CheckoutConfirmIn(BaseModel):
    answer: str = ""

    @property
    def confirmed(self) -> bool:
        return self.answer.strip().lower() == "yes"


class CouponIn(BaseModel):
    code: str = ""

    @field_validator("code")
    @classmethod
    def strip_code(cls, v: str) -> str:
        return v.strip()


def _make_physical(product_id: str, name: str, price: float, weight_kg: float, shipping_fee: float) -> PhysicalProduct:
    return PhysicalProduct(
        id=product_id,
        name=name,
        price=price,
        weight_kg=weight_kg,
        shipping_fee=shipping_fee,
    )


def _make_digital(product_id: str, name: str, price: float, download_base_url: Optional[str] = None) -> DigitalProduct:
    base = download_base_url or DEFAULT_DOWNLOAD_BASE_URL
    return DigitalProduct(
        id=product_id,
        name=name,
        price=price,
        download_url=f"{base}{product_id}",
    )
