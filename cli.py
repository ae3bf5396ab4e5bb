# cli.py - terminal catalog browser
import os
import sys
from datetime import datetime
from typing import Any, Dict, List, Optional, Union

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.columns import Columns
from rich.prompt import IntPrompt, Confirm
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.text import Text
from rich import box

from prompt_toolkit import prompt
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.styles import Style as PromptStyle

from sdk.catalog_client import CatalogClient, CatalogAPIError

console = Console()
c = CatalogClient(base_url=os.environ.get("CATALOG_API_URL", "http://127.0.0.1:8085"))

SORT_LABELS = {
    "date_created": "Newest first",
    "name_asc": "Name (A-Z)",
    "name_desc": "Name (Z-A)",
    "category": "Category",
    "popularity": "Most popular",
}
VIEW_MODES = ["grid", "list", "compact"]
PAGE_SIZES = [12, 24, 36, 48]

# Browsing state, mirrors the query string of the catalog page
state: Dict[str, Any] = {
    "view": "grid",
    "sort": "date_created",
    "page": 1,
    "page_size": 12,
    "category": None,
}
status_message = "Ready"
category_cache: List[str] = []

custom_style = PromptStyle.from_dict({
    'completion-menu.completion': 'bg:#008888 #ffffff',
    'completion-menu.completion.current': 'bg:#00aaaa #000000',
    'scrollbar.background': 'bg:#88aaaa',
    'scrollbar.button': 'bg:#222222',
})


# ---------------------------
# Pagination window
# ---------------------------
def page_window(current: int, total_pages: int, max_visible: int = 5) -> List[Union[int, str]]:
    """Page numbers to offer, with "..." standing in for skipped runs.

    Always shows the first and last page plus the neighbours of the
    current one, e.g. ``[1, "...", 4, 5, 6, "...", 10]``.
    """
    if total_pages <= max_visible:
        return list(range(1, total_pages + 1))

    pages: List[Union[int, str]] = [1]
    if current > 3:
        pages.append("...")
    start = max(2, current - 1)
    end = min(total_pages - 1, current + 1)
    pages.extend(range(start, end + 1))
    if current < total_pages - 2:
        pages.append("...")
    pages.append(total_pages)
    return pages


# ---------------------------
# Display helpers
# ---------------------------
def badges(p: Dict[str, Any]) -> Text:
    t = Text()
    if p.get("featured"):
        t.append(" FEATURED ", style="bold black on yellow")
        t.append(" ")
    if p.get("isNew"):
        t.append(" NEW ", style="bold white on green")
        t.append(" ")
    if p.get("onPromotion"):
        t.append(" PROMO ", style="bold white on red")
    return t


def show_grid(products: List[Dict[str, Any]]):
    cards = []
    for p in products:
        body = Text()
        body.append(p.get("name", "N/A"), style="bold")
        body.append(f"\n{p.get('category', '')}", style="cyan")
        body.append(f"\n{p.get('code', '')}", style="dim")
        body.append("\n")
        body.append_text(badges(p))
        cards.append(Panel(body, title=f"#{p.get('id')}", width=30, border_style="blue"))
    console.print(Columns(cards, equal=True))


def show_list(products: List[Dict[str, Any]]):
    table = Table(box=box.ROUNDED, header_style="bold cyan", show_lines=True)
    table.add_column("ID", style="dim", width=5)
    table.add_column("Name", style="bold", width=32)
    table.add_column("Code", width=10)
    table.add_column("Category", width=14)
    table.add_column("Image", style="dim", width=30)
    table.add_column("Tags", width=26)
    for p in products:
        table.add_row(
            str(p.get("id", "N/A")),
            p.get("name", "N/A"),
            p.get("code", ""),
            p.get("category", ""),
            p.get("primaryImage", ""),
            badges(p),
        )
    console.print(table)


def show_compact(products: List[Dict[str, Any]]):
    for p in products:
        line = Text(f"{p.get('id', ''):>4}  ", style="dim")
        line.append(f"{p.get('name', 'N/A'):<34}", style="bold")
        line.append(f"{p.get('category', ''):<14}", style="cyan")
        line.append_text(badges(p))
        console.print(line)


def show_products(result: Dict[str, Any]):
    products = result.get("items", [])
    total = result.get("total", 0)
    title = "Catalog" + (f" / {state['category']}" if state["category"] else "")
    found = f"{total} product found" if total == 1 else f"{total} products found"
    console.print(Panel.fit(f"[bold]{title}[/bold]  [dim]{found}[/dim]", border_style="magenta"))

    if not products:
        console.print("[italic yellow]No products available right now[/italic yellow]")
        return

    if state["view"] == "list":
        show_list(products)
    elif state["view"] == "compact":
        show_compact(products)
    else:
        show_grid(products)

    show_pagination(result.get("page", 1), result.get("totalPages", 0))


def show_pagination(page: int, total_pages: int):
    if total_pages <= 1:
        return
    nav = Text("Pages: ")
    for entry in page_window(page, total_pages):
        if entry == page:
            nav.append(f"[{entry}] ", style="bold reverse")
        else:
            nav.append(f"{entry} ", style="dim" if entry == "..." else "")
    nav.append(f"   {state['page_size']} per page", style="dim")
    console.print(nav)


def show_product_detail(p: Dict[str, Any]):
    table = Table(show_header=False, box=box.SIMPLE)
    table.add_column("field", style="bold cyan")
    table.add_column("value")
    table.add_row("Name", p.get("name", "N/A"))
    table.add_row("Code", p.get("code", ""))
    table.add_row("Category", p.get("category", ""))
    table.add_row("Image", p.get("primaryImage", ""))
    table.add_row("Added", str(p.get("dateCreated", "")))
    table.add_row("Tags", badges(p))
    if p.get("discontinued"):
        table.add_row("Status", "[red]Discontinued[/red]")
    console.print(Panel(table, title=f"Product #{p.get('id')}", border_style="green"))


def show_status(message: str, is_success: bool = True):
    style = "green" if is_success else "red"
    return Panel.fit(f"[{style}]{message}[/{style}]", title="Status")


# ---------------------------
# API wrapper
# ---------------------------
def try_api(fn, *args, success_msg: Optional[str] = None, **kwargs):
    """
    Calls fn(*args, **kwargs) behind a spinner.
    Returns the unwrapped data, or None after reporting the error.
    """
    global status_message
    try:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            transient=True,
        ) as progress:
            progress.add_task(description="Loading...", total=None)
            result = fn(*args, **kwargs)

        if success_msg:
            status_message = success_msg
        return result
    except CatalogAPIError as e:
        status_message = f"Error: {e.message} ({e.code})"
        console.print(show_status(status_message, False))
        return None
    except Exception as e:
        status_message = f"Error: {e}"
        console.print(show_status(status_message, False))
        return None


def fetch_page():
    kwargs = dict(sort=state["sort"], page=state["page"], page_size=state["page_size"], view=state["view"])
    if state["category"]:
        return try_api(c.list_by_category, state["category"], **kwargs)
    return try_api(c.list_products, **kwargs)


def refresh_categories():
    # categories are only known through the products themselves
    global category_cache
    result = try_api(c.list_products, sort="category", page_size=48) or {}
    seen = []
    for p in result.get("items", []):
        if p.get("category") and p["category"] not in seen:
            seen.append(p["category"])
    category_cache = seen


# ---------------------------
# Layout and Header
# ---------------------------
def create_header():
    header = Table(show_header=False, box=box.ROUNDED)
    header.add_column("left", width=30)
    header.add_column("center", width=40)
    header.add_column("right", width=30)

    now = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    header.add_row(
        "Catalog Browser",
        f"[bold blue]{SORT_LABELS[state['sort']]} | {state['view']} view[/bold blue]",
        f"[dim]{now}[/dim]"
    )
    return Panel(header, style="bold blue")


def prompt_with_autocomplete(message: str, completer=None, default: str = ""):
    return prompt(f"{message} ", completer=completer, style=custom_style, default=default)


def choose(message: str, options: List[str], current: str) -> str:
    value = prompt_with_autocomplete(
        f"{message} ({'/'.join(options)})",
        completer=WordCompleter(options, ignore_case=True),
        default=current,
    ).strip()
    if value not in options:
        console.print(f"[red]Unknown option {value!r}, keeping {current}[/red]")
        return current
    return value


# ---------------------------
# Main menu
# ---------------------------
def menu():
    global status_message

    refresh_categories()

    while True:
        console.clear()
        console.print(create_header())
        result = fetch_page()
        if result is not None:
            show_products(result)
        total_pages = (result or {}).get("totalPages", 0)

        if status_message:
            console.print(show_status(status_message, "Error" not in status_message))

        menu_table = Table.grid(padding=(0, 2))
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=24)
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=24)
        options = [
            ("n", "Next page", "v", "Change view"),
            ("p", "Previous page", "s", "Change sort"),
            ("g", "Go to page", "z", "Page size"),
            ("c", "Filter by category", "x", "Clear category"),
            ("i", "Product details", "q", "Quit"),
        ]
        for row in options:
            menu_table.add_row(*row)
        console.print(Panel(menu_table, title="Menu", border_style="yellow"))

        choice = prompt_with_autocomplete(
            "\nChoose an option",
            completer=WordCompleter(["n", "p", "g", "v", "s", "z", "c", "x", "i", "q", "quit", "exit"])
        ).strip().lower()

        if choice == "n":
            if state["page"] < total_pages:
                state["page"] += 1
            else:
                status_message = "Already on the last page"

        elif choice == "p":
            if state["page"] > 1:
                state["page"] -= 1
            else:
                status_message = "Already on the first page"

        elif choice == "g":
            page = IntPrompt.ask("Page", default=state["page"])
            if page >= 1:
                state["page"] = page

        elif choice == "v":
            state["view"] = choose("View", VIEW_MODES, state["view"])

        elif choice == "s":
            state["sort"] = choose("Sort", list(SORT_LABELS), state["sort"])
            state["page"] = 1

        elif choice == "z":
            size = choose("Items per page", [str(s) for s in PAGE_SIZES], str(state["page_size"]))
            state["page_size"] = int(size)
            state["page"] = 1

        elif choice == "c":
            category = prompt_with_autocomplete(
                "Category", completer=WordCompleter(category_cache, ignore_case=True, sentence=True)
            ).strip()
            state["category"] = category or None
            state["page"] = 1
            status_message = f"Showing category '{category}'" if category else "Ready"

        elif choice == "x":
            state["category"] = None
            state["page"] = 1
            status_message = "Ready"

        elif choice == "i":
            pid = IntPrompt.ask("Product ID")
            product = try_api(c.get_product, pid, success_msg=f"Product {pid} loaded")
            if product:
                show_product_detail(product)
                prompt_with_autocomplete("Press enter to go back")

        elif choice in ("q", "quit", "exit"):
            if Confirm.ask("Are you sure you want to quit?"):
                console.print(Panel.fit("[bold green]Goodbye![/bold green]"))
                sys.exit(0)


if __name__ == "__main__":
    try:
        menu()
    except KeyboardInterrupt:
        console.print("\n\n[bold red]Interrupted by user[/bold red]")
        sys.exit(1)
    except Exception as e:
        console.print(f"\n\n[bold red]Unexpected error: {e}[/bold red]")
        sys.exit(1)
