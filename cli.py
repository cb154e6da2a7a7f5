# cli.py -- interactive terminal client for the product catalog
import os
import sys
from datetime import datetime
from typing import List, Dict, Any, Optional

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.prompt import IntPrompt, Confirm, Prompt
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich import box

from prompt_toolkit import prompt
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.styles import Style as PromptStyle

from sdk.pycatalog import CatalogClient

console = Console()
c = CatalogClient(base_url=os.getenv("CATALOG_URL", "http://127.0.0.1:8085"))

status_message = "Ready"
product_cache: List[Dict[str, Any]] = []

custom_style = PromptStyle.from_dict({
    'completion-menu.completion': 'bg:#008888 #ffffff',
    'completion-menu.completion.current': 'bg:#00aaaa #000000',
    'scrollbar.background': 'bg:#88aaaa',
    'scrollbar.button': 'bg:#222222',
})


# ---------------------------
# Display helpers
# ---------------------------
def format_price(price: Optional[float]) -> str:
    return "-" if price is None else f"${price:.2f}"


def show_products(products: List[Dict[str, Any]], title: str = "📦 Products Catalog"):
    if not products:
        console.print("[italic yellow]No products found[/italic yellow]")
        return

    table = Table(
        title=title,
        box=box.ROUNDED,
        header_style="bold cyan",
        title_style="bold magenta",
        show_lines=True
    )
    table.add_column("ID", style="dim", width=12)
    table.add_column("Name", style="bold", width=24)
    table.add_column("Price", justify="right", width=12)

    for p in products:
        table.add_row(str(p.get("id", "N/A")), p.get("name", "N/A"), format_price(p.get("price")))
    console.print(table)


def show_page(page: Dict[str, Any]):
    total = page.get("totalCount", 0)
    index = page.get("pageIndex", 1)
    size = page.get("pageSize", 10)
    pages = max(1, -(-total // size))
    show_products(page.get("products", []), title=f"📦 Page {index}/{pages} ({total} products)")


def show_status(message: str, is_success: bool = True):
    style = "green" if is_success else "red"
    return Panel.fit(f"[{style}]{message}[/{style}]", title="Status")


def try_api(fn, *args, success_msg: Optional[str] = None, **kwargs):
    """
    Calls fn(*args, **kwargs) behind a spinner.
    Errors are shown in the status panel and None is returned.
    """
    global status_message
    try:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            transient=True,
        ) as progress:
            progress.add_task(description="Processing...", total=None)
            result = fn(*args, **kwargs)

        if success_msg:
            status_message = success_msg
            console.print(show_status(success_msg, True))
        return result
    except Exception as e:
        status_message = f"Error: {e}"
        console.print(show_status(f"Error: {e}", False))
        return None


def refresh_cache():
    global product_cache
    page = try_api(c.list_products, 1, 100)
    product_cache = page["products"] if page else []


def get_product_completer():
    if not product_cache:
        refresh_cache()
    ids = [str(p.get("id", "")) for p in product_cache]
    return WordCompleter([i for i in ids if i], ignore_case=True)


def create_header():
    header = Table(show_header=False, box=box.ROUNDED)
    header.add_column("left", width=30)
    header.add_column("center", width=40)
    header.add_column("right", width=30)

    now = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    header.add_row(
        "🛍️ PyCatalog SDK",
        "[bold blue]Product Catalog CLI[/bold blue]",
        f"[dim]{now}[/dim]"
    )
    return Panel(header, style="bold blue")


def prompt_with_autocomplete(message: str, completer=None, default: str = ""):
    return prompt(f"{message} ", completer=completer, style=custom_style, default=default)


def ask_optional_float(message: str) -> Optional[float]:
    while True:
        raw = Prompt.ask(message, default="")
        if raw.strip() == "":
            return None
        try:
            return float(raw)
        except ValueError:
            console.print("[red]Please enter a valid number.[/red]")


# ---------------------------
# Main menu
# ---------------------------
def menu():
    global status_message

    console.clear()
    console.print(create_header())
    refresh_cache()

    while True:
        if status_message:
            console.print(show_status(status_message, "Error" not in status_message))

        menu_table = Table.grid(padding=(0, 2))
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)

        options = [
            ("1", "📦 List products", "6", "💎 Most expensive"),
            ("2", "ℹ️ Get product by ID", "7", "🪙 Cheapest"),
            ("3", "➕ Create / replace product", "8", "⚖️ Median"),
            ("4", "➖ Delete product", "9", "🔢 Count"),
            ("5", "🔄 Delete all products", "q", "👋 Quit"),
        ]
        for row in options:
            menu_table.add_row(*row)

        console.print(Panel(menu_table, title="📋 Menu", border_style="yellow"))

        choice = prompt_with_autocomplete(
            "\nChoose an option",
            completer=WordCompleter([str(i) for i in range(1, 10)] + ["q", "quit", "exit"])
        ).strip()

        if choice == "1":
            page_index = IntPrompt.ask("Page", default=1)
            page_size = IntPrompt.ask("Page size", default=10)
            sort_field = Prompt.ask("Sort by", choices=["name", "price"], default="name")
            sort = Prompt.ask("Order", choices=["asc", "desc"], default="asc")
            page = try_api(c.list_products, page_index, page_size, sort_field, sort,
                           success_msg="Products loaded successfully")
            if page is not None:
                show_page(page)

        elif choice == "2":
            pid = prompt_with_autocomplete("Enter product ID", completer=get_product_completer())
            resp = try_api(c.get_product, pid)
            if resp:
                show_products([resp])
            elif resp is None:
                console.print(f"[yellow]Product {pid} not found[/yellow]")

        elif choice == "3":
            pid = prompt_with_autocomplete("Enter product ID", completer=get_product_completer())
            name = prompt_with_autocomplete("Enter product name")
            price = ask_optional_float("💰 Price (blank for none)")
            resp = try_api(c.create_product, pid, name, price, success_msg=f"Product '{pid}' saved")
            if resp:
                show_products([resp])
                refresh_cache()

        elif choice == "4":
            pid = prompt_with_autocomplete("Enter product ID", completer=get_product_completer())
            deleted = try_api(c.delete_product, pid)
            if deleted:
                status_message = f"Product {pid} deleted"
                refresh_cache()
            elif deleted is False:
                status_message = f"Error: product {pid} not found"

        elif choice == "5":
            if Confirm.ask("[red]This will delete every product. Continue?[/red]"):
                resp = try_api(c.delete_all, success_msg="All products deleted")
                if resp is not None:
                    refresh_cache()

        elif choice in ("6", "7"):
            fn = c.most_expensive if choice == "6" else c.cheapest
            resp = try_api(fn)
            if resp:
                show_products([resp])
            elif resp is None:
                console.print("[italic yellow]No products found[/italic yellow]")

        elif choice == "8":
            resp = try_api(c.median)
            if isinstance(resp, list):
                show_products(resp, title="⚖️ Median (even count)")
            elif resp:
                show_products([resp], title="⚖️ Median")
            else:
                console.print("[italic yellow]No products found[/italic yellow]")

        elif choice == "9":
            count = try_api(c.count)
            if count is not None:
                console.print(Panel.fit(f"[bold]{count}[/bold] products", title="🔢 Count"))

        elif choice.lower() in ("q", "quit", "exit"):
            if Confirm.ask("Are you sure you want to quit?"):
                console.print(Panel.fit("[bold green]Thank you for using PyCatalog! 👋[/bold green]", title="Goodbye"))
                sys.exit(0)

        console.print()
        console.rule(style="dim")


if __name__ == "__main__":
    try:
        menu()
    except KeyboardInterrupt:
        console.print("\n\n[bold red]Interrupted by user[/bold red]")
        sys.exit(1)
    except Exception as e:
        console.print(f"\n\n[bold red]Unexpected error: {e}[/bold red]")
        sys.exit(1)
