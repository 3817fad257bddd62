#!/usr/bin/env python
from rich import print

from pystore.logic import (
    StoreSession, list_catalog_logic, select_product_logic, add_to_cart_logic,
    view_cart_logic, remove_from_cart_logic, apply_coupon_logic,
    begin_checkout_logic, confirm_checkout_logic
)


def main():
    session = StoreSession()

    # -----------------------------
    # List catalog
    # -----------------------------
    print("\nListing catalog...")
    for n, p in enumerate(list_catalog_logic(session), start=1):
        print(f"{n}. {p.display_details()}")

    # -----------------------------
    # Add products to cart
    # -----------------------------
    print("\nAdding products to cart...")
    keyboard = select_product_logic(session, "1")
    print(add_to_cart_logic(session, keyboard, "2"))
    ebook = select_product_logic(session, "4")
    print(add_to_cart_logic(session, ebook, "1"))
    mouse = select_product_logic(session, "2")
    print(add_to_cart_logic(session, mouse, "1"))

    # -----------------------------
    # View cart
    # -----------------------------
    print("\nViewing cart...")
    print(view_cart_logic(session)["totals"])

    # -----------------------------
    # Remove a line
    # -----------------------------
    print("\nRemoving line 3...")
    print(remove_from_cart_logic(session, "3"))

    # -----------------------------
    # Coupons
    # -----------------------------
    print("\nApplying coupon 'welcome10'...")
    print(apply_coupon_logic(session, "welcome10"))
    print("\nApplying coupon 'JAVA20' (replaces the previous one)...")
    print(apply_coupon_logic(session, "JAVA20"))

    # -----------------------------
    # Checkout
    # -----------------------------
    print("\nChecking out...")
    totals = begin_checkout_logic(session)
    print(f"Final Total to charge: ${totals.final_total:.2f}")
    print(confirm_checkout_logic(session, "yes"))

    print("\nCart empty after checkout:", session.cart.is_empty())


if __name__ == "__main__":
    main()
