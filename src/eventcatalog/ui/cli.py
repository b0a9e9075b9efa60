from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime
from decimal import Decimal, InvalidOperation

from dotenv import load_dotenv
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table
from rich.tree import Tree
import typer

from eventcatalog.core.config import load_catalog_config_from_env
from eventcatalog.core.logging import configure_logging
from eventcatalog.domain.errors import DomainError, IntegrityViolationError
from eventcatalog.domain.models import Venue
from eventcatalog.domain.value_objects import Caller, Role
from eventcatalog.services.category_lifecycle import UNSET
from eventcatalog.services.container import CatalogServices
from eventcatalog.services.event_catalog import NewEvent
from eventcatalog.taxonomy.seed import seed_taxonomy_from_yaml
from eventcatalog.taxonomy.tree import CategoryNode
from eventcatalog.ui.requests import ListCategoriesRequest, ListEventsRequest

# Load environment variables from .env
load_dotenv()

console = Console()

app = typer.Typer(
    help="Event catalog: categories, events and bookings.",
    no_args_is_help=True,
)

categories_app = typer.Typer(help="Manage the category taxonomy.")
venues_app = typer.Typer(help="Register venues.")
events_app = typer.Typer(help="Browse and create events.")
bookings_app = typer.Typer(help="Record bookings.")
app.add_typer(categories_app, name="categories")
app.add_typer(venues_app, name="venues")
app.add_typer(events_app, name="events")
app.add_typer(bookings_app, name="bookings")


def _services() -> CatalogServices:
    config = load_catalog_config_from_env()
    configure_logging(config.log_level)
    services = CatalogServices(config)
    services.bootstrap()
    return services


@contextmanager
def _reported_errors() -> Iterator[None]:
    """Turn domain and validation failures into a message and exit code."""
    try:
        yield
    except IntegrityViolationError as e:
        console.print(f"[bold red]Internal error:[/bold red] {e.message}")
        raise typer.Exit(code=2) from e
    except DomainError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(code=1) from e
    except ValidationError as e:
        for error in e.errors():
            location = ".".join(str(part) for part in error["loc"])
            console.print(f"[red]{location}: {error['msg']}[/red]")
        raise typer.Exit(code=1) from e
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(code=1) from e


def _add_branch(tree: Tree, node: CategoryNode) -> None:
    branch = tree.add(f"{node.name} [dim](id={node.id})[/dim]")
    for child in node.children:
        _add_branch(branch, child)


@app.command("init-db")
def init_db() -> None:
    """Create the schema and the sentinel category."""
    with _reported_errors():
        services = _services()
        sentinel = services.category_store.find_by_name(
            services.config.sentinel_category
        )
    console.print(f"Database ready at {services.config.database_url}")
    console.print(f"Sentinel category id={sentinel.id if sentinel else None}")


@app.command("seed-taxonomy")
def seed_taxonomy(yaml_path: str = typer.Argument(..., help="Taxonomy YAML")) -> None:
    """Insert the categories of a YAML taxonomy that do not exist yet."""
    with _reported_errors():
        services = _services()
        created = seed_taxonomy_from_yaml(services.category_store, yaml_path)
    console.print(f"Seeded {len(created)} categories from {yaml_path}")


@categories_app.command("list")
def list_categories(
    page: int = typer.Option(1, help="Page number"),
    limit: int = typer.Option(10, help="Items per page"),
) -> None:
    """List categories, flat and paginated."""
    with _reported_errors():
        request = ListCategoriesRequest(page=page, limit=limit)
        services = _services()
        result = services.categories.list_categories(request.page, request.limit)

    table = Table(title=f"Categories (page {result.current_page}/{result.total_pages})")
    table.add_column("ID", justify="right")
    table.add_column("Name")
    table.add_column("Parent", justify="right")
    for category in result.items:
        parent = "" if category.parent_id is None else str(category.parent_id)
        table.add_row(str(category.id), category.name, parent)
    console.print(table)
    console.print(f"{result.total_items} categories in total")


@categories_app.command("tree")
def category_tree() -> None:
    """Show the category hierarchy."""
    with _reported_errors():
        services = _services()
        forest = services.categories.get_tree()

    tree = Tree("Categories")
    for root in forest:
        _add_branch(tree, root)
    console.print(tree)


@categories_app.command("create")
def create_category(
    name: str = typer.Argument(..., help="Category name"),
    parent_id: int | None = typer.Option(None, help="Parent category ID"),
) -> None:
    """Create a category."""
    with _reported_errors():
        services = _services()
        category = services.categories.create_category(name, parent_id)
    console.print(f"Created category {category.name} (id={category.id})")


@categories_app.command("update")
def update_category(
    category_id: int = typer.Argument(..., help="Category ID"),
    name: str | None = typer.Option(None, help="New name"),
    parent_id: int | None = typer.Option(None, help="New parent category ID"),
    top_level: bool = typer.Option(
        False, "--top-level", help="Move the category to the top level"
    ),
) -> None:
    """Rename and/or move a category."""
    if top_level and parent_id is not None:
        console.print("[red]--parent-id and --top-level are mutually exclusive[/red]")
        raise typer.Exit(code=1)

    new_parent: int | None | object = UNSET
    if top_level:
        new_parent = None
    elif parent_id is not None:
        new_parent = parent_id

    with _reported_errors():
        services = _services()
        category = services.categories.update_category(
            category_id,
            name=UNSET if name is None else name,
            parent_id=new_parent,  # type: ignore[arg-type]
        )
    console.print(
        f"Category {category.id}: name={category.name}, parent={category.parent_id}"
    )


@categories_app.command("delete")
def delete_category(
    category_id: int = typer.Argument(..., help="Category ID"),
) -> None:
    """Delete a category, moving its children and events to the sentinel."""
    with _reported_errors():
        services = _services()
        result = services.categories.delete_category(category_id)
    console.print(result.summary)


@venues_app.command("add")
def add_venue(
    name: str = typer.Argument(..., help="Venue name"),
    address: str | None = typer.Option(None, help="Street address"),
    capacity: int | None = typer.Option(None, help="Seating capacity"),
) -> None:
    """Register a venue."""
    with _reported_errors():
        services = _services()
        venue = services.venue_store.add(
            Venue(id=None, name=name, address=address, capacity=capacity)
        )
    console.print(f"Created venue {venue.name} (id={venue.id})")


@events_app.command("list")
def list_events(
    page: int = typer.Option(1, help="Page number"),
    limit: int = typer.Option(10, help="Items per page"),
    search: str | None = typer.Option(None, help="Text in name or description"),
    category_ids: str | None = typer.Option(
        None, help="Comma-separated category IDs (children included)"
    ),
    category_names: str | None = typer.Option(
        None, help="Comma-separated category names (children included)"
    ),
    user_id: int | None = typer.Option(None, help="Caller user ID"),
    role: Role = typer.Option(Role.CUSTOMER, help="Caller role"),
) -> None:
    """List events with text, category and pagination filters."""
    with _reported_errors():
        request = ListEventsRequest(
            page=page,
            limit=limit,
            text_search=search,
            category_ids=category_ids,
            category_names=category_names,
        )
        caller = Caller(user_id=user_id, role=role) if user_id is not None else None
        services = _services()
        result = services.events.list_events(request.to_query(caller))

    table = Table(title=f"Events (page {result.current_page}/{result.total_pages})")
    table.add_column("ID", justify="right")
    table.add_column("Name")
    table.add_column("Date")
    table.add_column("Venue")
    table.add_column("Category")
    table.add_column("Price", justify="right")
    table.add_column("Booked")
    for item in result.items:
        table.add_row(
            str(item.id),
            item.name,
            item.starts_at.isoformat(),
            item.venue_name or "",
            item.category_name or "",
            item.price,
            "yes" if item.is_booked else "",
        )
    console.print(table)
    console.print(f"{result.total_items} events in total")


@events_app.command("show")
def show_event(event_id: int = typer.Argument(..., help="Event ID")) -> None:
    """Show one event."""
    with _reported_errors():
        services = _services()
        event = services.events.get_event(event_id)
    console.print(f"[bold]{event.name}[/bold] (id={event.id})")
    console.print(event.description)
    console.print(f"Starts: {event.starts_at.isoformat()}  Price: {event.price}")


@events_app.command("create")
def create_event(
    name: str = typer.Argument(..., help="Event name"),
    starts_at: datetime = typer.Option(..., help="Start time (ISO 8601, UTC)"),
    venue_id: int = typer.Option(..., help="Venue ID"),
    price: str = typer.Option(..., help="Ticket price, e.g. 12.50"),
    currency: str = typer.Option("USD", help="Currency code"),
    description: str = typer.Option("", help="Event description"),
    category_id: int | None = typer.Option(None, help="Category ID"),
    photo_url: str | None = typer.Option(None, help="Photo URL"),
) -> None:
    """Create an event."""
    with _reported_errors():
        try:
            amount = Decimal(price)
        except InvalidOperation as e:
            raise ValueError(f"Invalid price: {price}") from e
        services = _services()
        event = services.events.create_event(
            NewEvent(
                name=name,
                description=description,
                starts_at=starts_at,
                venue_id=venue_id,
                price_amount=amount,
                price_currency=currency,
                category_id=category_id,
                photo_url=photo_url,
            )
        )
    console.print(f"Created event {event.name} (id={event.id})")


@bookings_app.command("add")
def add_booking(
    user_id: int = typer.Argument(..., help="User ID"),
    event_id: int = typer.Argument(..., help="Event ID"),
) -> None:
    """Book an event for a user."""
    with _reported_errors():
        services = _services()
        booking = services.events.book_event(user_id, event_id)
    console.print(f"Booking {booking.id}: user {user_id} -> event {event_id}")


if __name__ == "__main__":
    app()
