from typing import Iterator, List, Optional, Sequence

from .core import OutOfRangeError, _make_digital, _make_physical
from .models import Product

# The catalog is the only product store: built once at startup, read-only after.


class Catalog:
    def __init__(self, products: Sequence[Product]):
        ids = [p.id for p in products]
        if len(set(ids)) != len(ids):
            raise ValueError("product ids must be unique")
        self._products = tuple(products)

    def list(self) -> List[Product]:
        return list(self._products)

    def get(self, position: int) -> Product:
        if position < 0 or position >= len(self._products):
            raise OutOfRangeError("Invalid product number.")
        return self._products[position]

    def __len__(self) -> int:
        return len(self._products)

    def __iter__(self) -> Iterator[Product]:
        return iter(self._products)


def default_products(download_base_url: Optional[str] = None) -> List[Product]:
    return [
        _make_physical("P001", "Mechanical Keyboard", 89.99, 1.2, 10.00),
        _make_physical("P002", "Gaming Mouse", 45.50, 0.3, 5.00),
        _make_physical("P003", "27in Monitor", 199.99, 5.5, 25.00),
        _make_digital("D001", "Java Masterclass Ebook", 29.99, download_base_url),
        _make_digital("D002", "Antivirus Software", 19.99, download_base_url),
    ]


def default_catalog(download_base_url: Optional[str] = None) -> Catalog:
    return Catalog(default_products(download_base_url))
