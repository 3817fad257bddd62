# tests/test_cart.py
import pytest
from pydantic import ValidationError

from pystore.cart import Cart
from pystore.core import OutOfRangeError, _make_digital, _make_physical
from pystore.models import CartLineItem

KEYBOARD = _make_physical("P001", "Mechanical Keyboard", 89.99, 1.2, 10.00)
MOUSE = _make_physical("P002", "Gaming Mouse", 45.50, 0.3, 5.00)
EBOOK = _make_digital("D001", "Java Masterclass Ebook", 29.99)

cart = Cart()

def reset():
    cart.clear()

def test_physical_line_subtotal_shipping_and_total():
    reset()
    cart.add(KEYBOARD, 2)
    t = cart.compute_totals()
    assert t.subtotal == pytest.approx(179.98)
    assert t.shipping_total == pytest.approx(20.00)
    assert t.discount_amount == 0
    assert t.final_total == pytest.approx(199.98)

def test_java20_discount_is_kept_in_full_precision():
    reset()
    cart.add(KEYBOARD, 2)
    assert cart.apply_coupon("JAVA20") is True
    t = cart.compute_totals()
    assert t.discount_rate == 0.20
    assert t.discount_amount == pytest.approx(35.996)
    assert t.final_total == pytest.approx(163.984)

def test_subtotal_is_sum_of_line_totals():
    reset()
    cart.add(KEYBOARD, 1)
    cart.add(EBOOK, 3)
    cart.add(MOUSE, 2)
    expected = sum(item.product.price * item.quantity for item in cart.items)
    assert cart.compute_totals().subtotal == pytest.approx(expected)

def test_digital_lines_never_add_shipping():
    reset()
    cart.add(EBOOK, 5)
    assert cart.compute_totals().shipping_total == 0
    cart.add(MOUSE, 3)
    # only the mouse line ships
    assert cart.compute_totals().shipping_total == pytest.approx(15.00)

def test_same_product_twice_gives_two_lines():
    reset()
    cart.add(MOUSE, 1)
    cart.add(MOUSE, 2)
    assert len(cart) == 2
    assert [i.quantity for i in cart.items] == [1, 2]

def test_coupon_codes_ignore_case_and_do_not_stack():
    reset()
    cart.add(EBOOK, 10)
    assert cart.apply_coupon("welcome10")
    assert cart.compute_totals().discount_amount == pytest.approx(29.99)
    # a second coupon replaces the first
    assert cart.apply_coupon("Java20")
    assert cart.compute_totals().discount_amount == pytest.approx(59.98)

def test_invalid_coupon_resets_discount():
    reset()
    cart.add(EBOOK, 1)
    cart.apply_coupon("JAVA20")
    assert cart.apply_coupon("FREESTUFF") is False
    assert cart.discount_rate == 0.0
    assert cart.compute_totals().discount_amount == 0

def test_discount_applies_to_goods_not_shipping():
    reset()
    cart.add(MOUSE, 2)
    cart.apply_coupon("WELCOME10")
    t = cart.compute_totals()
    assert t.discount_amount == pytest.approx(9.10)
    assert t.final_total == pytest.approx(91.00 - 9.10 + 10.00)

def test_remove_at_shifts_later_lines_down():
    reset()
    cart.add(KEYBOARD, 1)
    cart.add(MOUSE, 1)
    cart.add(EBOOK, 1)
    removed = cart.remove_at(1)
    assert removed.product.id == "P002"
    assert [i.product.id for i in cart.items] == ["P001", "D001"]

def test_remove_at_out_of_range_leaves_cart_unchanged():
    reset()
    with pytest.raises(OutOfRangeError):
        cart.remove_at(0)
    assert cart.is_empty()

    cart.add(KEYBOARD, 1)
    before = cart.items
    for pos in (-1, 1, 5):
        with pytest.raises(OutOfRangeError) as exc:
            cart.remove_at(pos)
        assert exc.value.detail == "Invalid item selection."
    assert cart.items == before

def test_clear_empties_cart_and_discount():
    reset()
    cart.add(KEYBOARD, 3)
    cart.apply_coupon("JAVA20")
    cart.clear()
    assert cart.is_empty()
    assert cart.discount_rate == 0.0
    t = cart.compute_totals()
    assert (t.subtotal, t.shipping_total, t.final_total) == (0, 0, 0)

def test_items_view_is_read_only():
    reset()
    cart.add(EBOOK, 1)
    items = cart.items
    assert isinstance(items, tuple)
    assert len(cart.items) == 1

def test_line_item_rejects_non_positive_quantity():
    with pytest.raises(ValidationError):
        CartLineItem(product=EBOOK, quantity=0)
    reset()
    with pytest.raises(ValidationError):
        cart.add(EBOOK, -1)
    assert cart.is_empty()

def test_products_are_immutable():
    with pytest.raises(ValidationError):
        KEYBOARD.price = 1.0

def test_totals_snapshot_is_frozen():
    reset()
    cart.add(EBOOK, 1)
    t = cart.compute_totals()
    with pytest.raises(ValidationError):
        t.final_total = 0.0
