# tests/test_catalog.py
import pytest

from pystore.core import OutOfRangeError, _make_digital
from pystore.database import Catalog, default_catalog
from pystore.models import DigitalProduct, PhysicalProduct

catalog = default_catalog()

def test_default_catalog_order_and_ids():
    assert [p.id for p in catalog.list()] == ["P001", "P002", "P003", "D001", "D002"]
    assert len(catalog) == 5

def test_variants_carry_their_own_fields():
    keyboard = catalog.get(0)
    assert isinstance(keyboard, PhysicalProduct)
    assert keyboard.kind == "physical"
    assert keyboard.shipping_fee == 10.00
    assert keyboard.weight_kg == 1.2

    ebook = catalog.get(3)
    assert isinstance(ebook, DigitalProduct)
    assert ebook.kind == "digital"
    assert ebook.download_url == "http://store.com/download/D001"

def test_download_base_url_is_configurable():
    c = default_catalog("https://cdn.example.com/dl/")
    assert c.get(4).download_url == "https://cdn.example.com/dl/D002"

def test_display_details():
    assert catalog.get(0).display_details() == (
        "Mechanical Keyboard [Physical] - $89.99 (+ $10.00 shipping) - Weight: 1.2kg"
    )
    assert catalog.get(3).display_details() == "Java Masterclass Ebook [Digital] - $29.99 - Instant Download"
    assert catalog.get(1).display_details("€").startswith("Gaming Mouse [Physical] - €45.50")

def test_get_out_of_range():
    for pos in (-1, 5, 100):
        with pytest.raises(OutOfRangeError) as exc:
            catalog.get(pos)
        assert exc.value.detail == "Invalid product number."

def test_list_is_a_copy():
    listed = catalog.list()
    listed.clear()
    assert len(catalog.list()) == 5

def test_duplicate_ids_rejected():
    with pytest.raises(ValueError):
        Catalog([_make_digital("X1", "a", 1.0), _make_digital("X1", "b", 2.0)])
