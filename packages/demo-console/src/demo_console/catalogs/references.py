"""
Callable references: passing functions, attributes and constructors as values.

Each demo compares a wrapping lambda with passing the callable itself.
"""

from collections import defaultdict
from dataclasses import dataclass
from functools import partial
from operator import attrgetter, methodcaller

from demo_console.catalogs.base import Catalog
from demo_console.output import echo
from demo_console.registry import DemoEntry, DemoRegistry


def double(n: int) -> int:
    return n * 2


def is_even(n: int) -> bool:
    return n % 2 == 0


def function_reference() -> None:
    echo("=== function references ===")
    numbers = [1, 2, 3, 4, 5]

    echo("wrapping lambda:   list(map(lambda n: double(n), numbers))")
    echo(f"result: {list(map(lambda n: double(n), numbers))}")
    echo("function itself:   list(map(double, numbers))")
    echo(f"result: {list(map(double, numbers))}")
    echo("filter with a reference: list(filter(is_even, numbers))")
    echo(f"evens: {list(filter(is_even, numbers))}")
    echo("for_each with echo itself:")
    for item in ("  -> item A", "  -> item B", "  -> item C"):
        echo(item)


@dataclass(frozen=True)
class User:
    name: str
    age: int


def property_reference() -> None:
    echo("=== attribute references ===")
    users = [User("Ann", 25), User("Bob", 30), User("Cid", 28)]

    echo("wrapping lambda:   [u.name for u in users]")
    echo(f"result: {[u.name for u in users]}")
    echo("attrgetter:        list(map(attrgetter('name'), users))")
    echo(f"result: {list(map(attrgetter('name'), users))}")
    echo("sorting by a reference: sorted(users, key=attrgetter('age'))")
    by_age = sorted(users, key=attrgetter("age"))
    echo(f"by age: {[f'{u.name}({u.age})' for u in by_age]}")

    name_of = attrgetter("name")
    echo(f"name_of(User('Dee', 20)) = {name_of(User('Dee', 20))!r}")


@dataclass(frozen=True)
class Product:
    name: str


def constructor_reference() -> None:
    echo("=== constructor references ===")
    names = ["phone", "laptop", "tablet"]
    echo("wrapping lambda:   [Product(n) for n in names]")
    echo(f"result: {[Product(n) for n in names]}")
    echo("class as factory:  list(map(Product, names))")
    echo(f"result: {list(map(Product, names))}")

    def create_items(count, factory):
        return [factory(f"Item{i}") for i in range(1, count + 1)]

    echo(f"create_items(3, Product) = {create_items(3, Product)}")


def bound_reference() -> None:
    echo("=== bound references ===")
    text = "Hello Python"
    echo("unbound: str.__len__ takes the instance as an argument")
    echo(f"str.__len__({text!r}) = {str.__len__(text)}")
    echo("bound: text.__len__ already carries the instance")
    echo(f"text.__len__() = {text.__len__()}")

    words = ["apple", "a", "Cherry", "a"]
    echo(f"list(filter('a'.__eq__, words)) = {list(filter('a'.__eq__, words))}")
    shout = methodcaller("upper")
    echo(f"list(map(methodcaller('upper'), words[:1])) = {list(map(shout, words[:1]))}")
    echo("a bound echo can be passed around like any function:")
    say = partial(echo)
    for message in ("  -> message 1", "  -> message 2"):
        say(message)


class Button:
    """Minimal stand-in for a clickable widget."""

    def __init__(self, label: str) -> None:
        self.label = label
        self._on_click = None

    def set_on_click(self, listener) -> None:
        self._on_click = listener

    def perform_click(self) -> None:
        if self._on_click is not None:
            self._on_click(self)


def _handle_click(view: Button) -> None:
    echo(f"  -> clicked! view: {type(view).__name__}({view.label!r})")


def click_listener() -> None:
    echo("=== callbacks: click listener ===")
    echo("lambda:     button.set_on_click(lambda v: handle_click(v))")
    echo("reference:  button.set_on_click(handle_click)")
    button = Button("test button")
    button.set_on_click(_handle_click)
    button.perform_click()


@dataclass(frozen=True)
class Account:
    id: int
    name: str
    email: str
    is_active: bool


def list_operations() -> None:
    echo("=== list processing with references ===")
    accounts = [
        Account(1, "Ann", "ann@example.com", True),
        Account(2, "Bob", "bob@example.com", False),
        Account(3, "Cid", "cid@example.com", True),
        Account(4, "Dee", "dee@example.com", True),
    ]
    echo(f"{len(accounts)} accounts")

    names = list(map(attrgetter("name"), accounts))
    echo(f"names: {names}")
    active = list(filter(attrgetter("is_active"), accounts))
    echo(f"active: {[a.name for a in active]}")
    by_id_desc = sorted(accounts, key=attrgetter("id"), reverse=True)
    echo(f"by id, descending: {[a.name for a in by_id_desc]}")
    echo(f"id -> name: { {a.id: a.name for a in accounts} }")

    grouped: dict[bool, list[str]] = defaultdict(list)
    for account in accounts:
        grouped[account.is_active].append(account.name)
    echo(f"active: {grouped[True]}  inactive: {grouped[False]}")
    echo(f"active emails: {[a.email for a in active]}")


def build_catalog() -> Catalog:
    """Assemble the callable-reference catalog."""
    registry = DemoRegistry.from_entries(
        [
            DemoEntry("function_reference", "Function references", function_reference),
            DemoEntry("property_reference", "Attribute references", property_reference),
            DemoEntry("constructor_reference", "Constructor references", constructor_reference),
            DemoEntry("bound_reference", "Bound references", bound_reference),
            DemoEntry("click_listener", "In practice: click listener", click_listener),
            DemoEntry("list_operations", "In practice: list processing", list_operations),
        ]
    )
    return Catalog(
        name="references",
        title="Callable references",
        registry=registry,
        greeting=(
            "=================================",
            "Callable references demo",
            "=================================",
            "Pick a demo from the menu.",
        ),
    )
