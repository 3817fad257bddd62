# cli.py
import argparse
import logging
import sys
from typing import Any, Callable, Dict, List, Optional

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.markup import escape
from rich import box

from prompt_toolkit import prompt
from prompt_toolkit.completion import Completer, WordCompleter
from prompt_toolkit.styles import Style as PromptStyle

from pydantic import ValidationError

from pystore.config import LOG_LEVELS, configure_logging, load_settings
from pystore.core import StoreError
from pystore.logic import (
    StoreSession, list_catalog_logic, select_product_logic, add_to_cart_logic,
    view_cart_logic, remove_from_cart_logic, apply_coupon_logic,
    begin_checkout_logic, confirm_checkout_logic
)
from pystore.models import Product
from pystore.pricing import COUPONS

logger = logging.getLogger(__name__)

# Reads one line of input for a prompt; raises EOFError when input runs out.
LineReader = Callable[..., str]

MENU_OPTIONS = [
    ("1", "📦 View Inventory"),
    ("2", "➕ Add Item to Cart"),
    ("3", "🛒 View Cart"),
    ("4", "➖ Remove Item from Cart"),
    ("5", "🏷️ Apply Discount Code"),
    ("6", "✅ Checkout"),
    ("7", "👋 Exit"),
]

# Custom prompt style for prompt_toolkit
custom_style = PromptStyle.from_dict({
    'completion-menu.completion': 'bg:#008888 #ffffff',
    'completion-menu.completion.current': 'bg:#00aaaa #000000',
    'scrollbar.background': 'bg:#88aaaa',
    'scrollbar.button': 'bg:#222222',
})


# ---------------------------
# Display helpers
# ---------------------------
def show_products(console: Console, products: List[Product], currency: str = "$"):
    if not products:
        console.print("[italic yellow]No products found[/italic yellow]")
        return

    table = Table(
        title="📦 Store Inventory",
        box=box.ROUNDED,
        header_style="bold cyan",
        title_style="bold magenta",
    )
    table.add_column("#", justify="right", width=3)
    table.add_column("ID", style="dim", width=6)
    table.add_column("Product", style="bold")

    for n, p in enumerate(products, start=1):
        table.add_row(str(n), p.id, escape(p.display_details(currency)))
    console.print(table)


def show_cart(console: Console, view: Dict[str, Any], currency: str = "$"):
    if view["empty"]:
        console.print(Panel("Your Cart is Empty 🛍️", title="🛒 Current Cart", style="blue"))
        return

    table = Table(box=box.ROUNDED, header_style="bold blue")
    table.add_column("#", justify="right", width=3)
    table.add_column("Product", style="bold", width=24)
    table.add_column("Qty", justify="right", width=5)
    table.add_column("Price", justify="right", width=10)
    table.add_column("Sub", justify="right", width=10)
    table.add_column("Shipping", justify="right", width=16)

    for line in view["lines"]:
        item = line["item"]
        shipping = line["shipping"]
        table.add_row(
            str(line["line_number"]),
            escape(item.product.name),
            str(item.quantity),
            f"{currency}{item.product.price:.2f}",
            f"{currency}{item.total_price:.2f}",
            f"(+ {currency}{shipping:.2f} ship)" if shipping > 0 else "",
        )

    totals = view["totals"]
    summary = Table.grid(padding=(0, 2))
    summary.add_column("label", style="bold")
    summary.add_column("amount", justify="right")
    summary.add_row("Subtotal:", f"{currency}{totals.subtotal:.2f}")
    if totals.discount_rate > 0:
        summary.add_row(
            f"Discount ({totals.discount_rate * 100:.0f}%):",
            f"[green]-{currency}{totals.discount_amount:.2f}[/green]",
        )
    summary.add_row("Shipping:", f"{currency}{totals.shipping_total:.2f}")
    summary.add_row("TOTAL:", f"[bold green]{currency}{totals.final_total:.2f}[/bold green]")

    grid = Table.grid()
    grid.add_row(table)
    grid.add_row(summary)
    console.print(Panel(grid, title="🛒 Current Cart", border_style="blue"))


def show_status(message: str, is_success: bool = True):
    style = "green" if is_success else "red"
    return Panel.fit(f"[{style}]{escape(message)}[/{style}]", title="Status")


def show_menu(console: Console):
    menu_table = Table.grid(padding=(0, 2))
    menu_table.add_column("Key", style="bold cyan", width=4)
    menu_table.add_column("Option", width=30)
    for row in MENU_OPTIONS:
        menu_table.add_row(*row)
    console.print(Panel(menu_table, title="📋 Main Menu", border_style="yellow"))


# ---------------------------
# Store action wrapper
# ---------------------------
def try_action(console: Console, fn, *args, **kwargs):
    """
    Calls fn(*args, **kwargs) and returns its result.
    A StoreError is reported in a red status panel and None is returned,
    so the menu loop can carry on.
    """
    try:
        result = fn(*args, **kwargs)
    except StoreError as e:
        console.print(show_status(e.detail, False))
        return None
    return result


# ---------------------------
# Input helpers with autocomplete
# ---------------------------
def prompt_with_autocomplete(message: str, completer: Optional[Completer] = None) -> str:
    return prompt(f"{message} ", completer=completer, style=custom_style)


def _number_completer(count: int) -> WordCompleter:
    return WordCompleter([str(i) for i in range(1, count + 1)])


# ---------------------------
# Menu flows
# ---------------------------
def add_to_cart_flow(session: StoreSession, console: Console, read_line: LineReader):
    currency = session.settings.currency
    products = list_catalog_logic(session)
    show_products(console, products, currency)

    raw = read_line("Enter product number to add:", completer=_number_completer(len(products)))
    product = try_action(console, select_product_logic, session, raw)
    if product is None:
        return

    raw_qty = read_line("Enter quantity:")
    item = try_action(console, add_to_cart_logic, session, product, raw_qty)
    if item is not None:
        console.print(show_status(f"Added {item.quantity} x {item.product.name} to cart.", True))


def remove_from_cart_flow(session: StoreSession, console: Console, read_line: LineReader):
    view = view_cart_logic(session)
    show_cart(console, view, session.settings.currency)
    if view["empty"]:
        return

    raw = read_line("Enter line number to remove:", completer=_number_completer(len(view["lines"])))
    removed = try_action(console, remove_from_cart_logic, session, raw)
    if removed is not None:
        console.print(show_status(f"Removed {removed.product.name} from cart.", True))


def apply_coupon_flow(session: StoreSession, console: Console, read_line: LineReader):
    hint = " or ".join(f"'{code}'" for code in COUPONS)
    raw = read_line(f"Enter coupon code (Try {hint}):",
                    completer=WordCompleter(list(COUPONS), ignore_case=True))
    res = apply_coupon_logic(session, raw)
    if res["valid"]:
        console.print(show_status(f"Success! {res['discount_rate'] * 100:.0f}% discount applied.", True))
    else:
        console.print(show_status("Invalid or expired coupon code.", False))


def checkout_flow(session: StoreSession, console: Console, read_line: LineReader):
    currency = session.settings.currency
    totals = try_action(console, begin_checkout_logic, session)
    if totals is None:
        return

    show_cart(console, view_cart_logic(session), currency)
    console.print(f"[bold]Final Total to charge: {currency}{totals.final_total:.2f}[/bold]")
    answer = read_line("Confirm purchase? (yes/no):", completer=WordCompleter(["yes", "no"]))
    res = try_action(console, confirm_checkout_logic, session, answer)
    if res is None:
        return

    if res["status"] == "placed":
        console.print("Processing payment...")
        console.print(Panel.fit(
            "[green]Payment Successful! Thank you for your order.[/green]\n"
            f"Charged: [bold]{currency}{res['totals'].final_total:.2f}[/bold]",
            title="✅ Order Confirmation"
        ))
    else:
        console.print(show_status("Checkout cancelled.", False))


# ---------------------------
# Main menu
# ---------------------------
def menu(session: StoreSession, console: Console, read_line: LineReader = prompt_with_autocomplete):
    console.print(Panel.fit("[bold blue]Welcome to the PyStore Console Store![/bold blue]", style="bold blue"))
    choices = WordCompleter([key for key, _ in MENU_OPTIONS])

    while True:
        show_menu(console)
        try:
            choice = read_line("Enter choice:", completer=choices).strip()

            if choice == "1":
                show_products(console, list_catalog_logic(session), session.settings.currency)

            elif choice == "2":
                add_to_cart_flow(session, console, read_line)

            elif choice == "3":
                show_cart(console, view_cart_logic(session), session.settings.currency)

            elif choice == "4":
                remove_from_cart_flow(session, console, read_line)

            elif choice == "5":
                apply_coupon_flow(session, console, read_line)

            elif choice == "6":
                checkout_flow(session, console, read_line)

            elif choice == "7":
                break

            else:
                console.print(show_status("Invalid option. Please try again.", False))
        except EOFError:
            logger.debug("input closed, leaving menu")
            break

        console.print()
        console.rule(style="dim")

    console.print(Panel.fit("[bold green]Goodbye![/bold green]", title="👋"))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="PyStore interactive console store")
    parser.add_argument("--log-level", type=str.upper, choices=LOG_LEVELS,
                        help="Logging level (overrides PYSTORE_LOG_LEVEL)")
    parser.add_argument("--env-file", help="Path to a .env file with PYSTORE_* settings")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    console = Console()
    try:
        settings = load_settings(args.env_file)
    except ValidationError as e:
        console.print(f"[bold red]Invalid settings:[/bold red]\n{escape(str(e))}")
        return 1
    if args.log_level:
        settings = settings.model_copy(update={"log_level": args.log_level})
    configure_logging(settings.log_level)

    try:
        menu(StoreSession(settings=settings), console)
    except KeyboardInterrupt:
        console.print("\n\n[bold red]Interrupted by user[/bold red]")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
