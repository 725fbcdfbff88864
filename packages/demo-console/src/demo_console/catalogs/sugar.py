"""Small language-feature demos."""

from dataclasses import dataclass, replace
from functools import cached_property
from typing import Callable, Protocol, assert_never

from demo_console.catalogs.base import Catalog
from demo_console.output import echo
from demo_console.registry import DemoEntry, DemoRegistry


def _calculate(a: int, b: int, operation: Callable[[int, int], int]) -> int:
    return operation(a, b)


def lambda_steps() -> None:
    echo("=== lambdas, step by step ===")
    add: Callable[[int, int], int] = lambda a, b: a + b  # noqa: E731
    echo(f"[step 1] annotated variable holding a lambda: {add(5, 3)}")
    echo(f"[step 2] lambda passed to a function: {_calculate(5, 3, lambda a, b: a * b)}")
    echo(f"[step 3] named function passed instead: {_calculate(5, 3, max)}")
    names = ["kotlin", "python", "go"]
    echo(f"[step 4] key functions: {sorted(names, key=len)}")


class Logger(Protocol):
    def log(self, msg: str) -> None: ...


class ConsoleLogger:
    def log(self, msg: str) -> None:
        print(msg)


class Service:
    """Forwards every attribute it does not define to the wrapped logger."""

    def __init__(self, impl: Logger) -> None:
        self._impl = impl

    def __getattr__(self, name: str):
        return getattr(self._impl, name)


class Printer(Protocol):
    def render(self) -> str: ...


@dataclass
class PlainPrinter:
    message: str

    def render(self) -> str:
        return self.message


@dataclass
class FramedPrinter:
    inner: Printer

    def render(self) -> str:
        return f"=== start ===\n{self.inner.render()}\n=== end ==="


def delegation() -> None:
    echo("=== delegation ===")
    Service(ConsoleLogger()).log("hello from the wrapped logger")
    echo(FramedPrinter(PlainPrinter("delegated print => original output")).render())


@dataclass(frozen=True)
class Ok:
    data: str


@dataclass(frozen=True)
class Err:
    msg: str


Result = Ok | Err


def _handle(result: Result) -> str:
    match result:
        case Ok(data=data):
            return f"data={data}"
        case Err(msg=msg):
            return f"error={msg}"
        case _:
            assert_never(result)


def sealed_results() -> None:
    echo("=== closed result types with exhaustive match ===")
    echo(_handle(Ok("hi")))
    echo(_handle(Err("oops")))


@dataclass(frozen=True)
class Money:
    amount: int

    def __add__(self, other: "Money") -> "Money":
        return Money(self.amount + other.amount)


def operator_overloading() -> None:
    echo("=== operator overloading ===")
    echo(f"Money(5) + Money(7) = {Money(5) + Money(7)}")


@dataclass(frozen=True)
class Person:
    name: str
    age: int


def data_class_copy() -> None:
    echo("=== data classes: equality, unpacking, copy ===")
    ann = Person("Ann", 30)
    older = replace(ann, age=31)
    echo(f"{ann} == Person('Ann', 30): {ann == Person('Ann', 30)}")
    name, age = ann.name, ann.age
    echo(f"unpacked: name={name} age={age}")
    echo(f"replace(ann, age=31) = {older}")


class Report:
    @cached_property
    def expensive(self) -> str:
        echo("computing (once only)")
        return "result"


def lazy_property() -> None:
    echo("=== lazy property ===")
    report = Report()
    echo(report.expensive)
    echo(report.expensive)


def factorial(n: int) -> int:
    acc = 1
    while n > 1:
        n, acc = n - 1, acc * n
    return acc


def tail_recursion() -> None:
    echo("=== tail recursion as a loop ===")
    echo("the accumulator version of fact(n, acc) becomes a while loop")
    echo(f"factorial(5) = {factorial(5)}")
    echo(f"factorial(20) = {factorial(20)}")


class MessageService:
    message: str

    def initialize(self) -> None:
        echo("initializing message...")
        self.message = "Hello, late init!"

    def is_initialized(self) -> bool:
        return "message" in vars(self)

    def print_message(self) -> None:
        echo(f"message: {self.message}")


def late_init() -> None:
    echo("=== late initialization ===")
    service = MessageService()
    echo(f"initialized before initialize(): {service.is_initialized()}")
    service.initialize()
    service.print_message()

    echo("now using a second service without initialize()...")
    MessageService().print_message()


def build_catalog() -> Catalog:
    """Assemble the language-feature catalog."""
    registry = DemoRegistry.from_entries(
        [
            DemoEntry("lambda", "Lambdas step by step", lambda_steps),
            DemoEntry("delegation", "Delegation", delegation),
            DemoEntry("sealed", "Closed results + match", sealed_results),
            DemoEntry("operator", "Operator overloading", operator_overloading),
            DemoEntry("data_class", "Data class copy", data_class_copy),
            DemoEntry("lazy", "Lazy property", lazy_property),
            DemoEntry("tail_recursion", "Tail recursion", tail_recursion),
            DemoEntry("late_init", "Late init (fails on purpose)", late_init),
        ]
    )
    return Catalog(
        name="sugar",
        title="Language features",
        registry=registry,
        greeting=("Language feature demos. Pick one from the menu.",),
    )
