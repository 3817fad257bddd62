# pystore/models.py
from pydantic import BaseModel, ConfigDict, Field
from typing import Annotated, Literal, Union


class PhysicalProduct(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["physical"] = "physical"
    id: str
    name: str
    price: float = Field(ge=0)
    weight_kg: float = Field(ge=0)
    shipping_fee: float = Field(ge=0)

    def display_details(self, currency: str = "$") -> str:
        return (
            f"{self.name} [Physical] - {currency}{self.price:.2f} "
            f"(+ {currency}{self.shipping_fee:.2f} shipping) - Weight: {self.weight_kg:.1f}kg"
        )


class DigitalProduct(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["digital"] = "digital"
    id: str
    name: str
    price: float = Field(ge=0)
    download_url: str

    def display_details(self, currency: str = "$") -> str:
        return f"{self.name} [Digital] - {currency}{self.price:.2f} - Instant Download"


Product = Annotated[Union[PhysicalProduct, DigitalProduct], Field(discriminator="kind")]


class CartLineItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    product: Product
    quantity: int = Field(gt=0)

    @property
    def total_price(self) -> float:
        # shipping is priced separately
        return self.product.price * self.quantity


class CartTotals(BaseModel):
    model_config = ConfigDict(frozen=True)

    subtotal: float = 0.0
    shipping_total: float = 0.0
    discount_rate: float = 0.0
    discount_amount: float = 0.0
    final_total: float = 0.0
